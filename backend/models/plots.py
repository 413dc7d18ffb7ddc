from sqlalchemy import Column, Integer, String, ForeignKey, Table
from sqlalchemy.orm import relationship

from database import Base
from models.audit_mixin import TimestampMixin

plot_users = Table(
    "plot_users",
    Base.metadata,
    Column("plot_id", Integer, ForeignKey("plots.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
)


class Plot(Base, TimestampMixin):
    __tablename__ = "plots"

    id = Column(Integer, primary_key=True, index=True)
    plot_number = Column(String, unique=True, nullable=False, index=True)
    bags_required = Column(Integer, nullable=False)
    location_id = Column(Integer, ForeignKey("locations.id"), nullable=False)

    # Relationships
    location = relationship("Location", back_populates="plots")
    users = relationship("User", secondary=plot_users, back_populates="plots")
    payment_schedules = relationship(
        "PaymentSchedule",
        back_populates="plot",
        cascade="all, delete-orphan",
        order_by="PaymentSchedule.id",
    )

    @property
    def payment_schedule_ids(self):
        return [schedule.id for schedule in self.payment_schedules]

    @property
    def user_ids(self):
        return [user.id for user in self.users]
