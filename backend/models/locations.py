from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship

from database import Base
from models.audit_mixin import TimestampMixin


class Location(Base, TimestampMixin):
    __tablename__ = "locations"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False, index=True)

    plots = relationship("Plot", back_populates="location", order_by="Plot.id")

    @property
    def plot_ids(self):
        return [plot.id for plot in self.plots]
