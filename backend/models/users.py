from database import Base
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from models.audit_mixin import TimestampMixin
from models.plots import plot_users


class User(Base, TimestampMixin):
    """A collector that can be assigned to one or more plots."""
    __tablename__ = 'users'

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    mobile = Column(String, nullable=True)

    plots = relationship("Plot", secondary=plot_users, back_populates="users")

    @property
    def plot_ids(self):
        return [plot.id for plot in self.plots]

    def __repr__(self):
        return f"<User(id={self.id}, name={self.name}, email={self.email})>"
