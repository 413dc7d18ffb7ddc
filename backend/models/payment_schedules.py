from sqlalchemy import Column, Integer, Numeric, Date, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from database import Base
from models.audit_mixin import TimestampMixin
from utils.payment_status import payment_status


class PaymentSchedule(Base, TimestampMixin):
    __tablename__ = "payment_schedules"

    id = Column(Integer, primary_key=True, index=True)
    plot_id = Column(Integer, ForeignKey("plots.id", ondelete="CASCADE"), nullable=False, index=True)
    expected_amount = Column(Numeric(12, 2), nullable=False)
    paid_amount = Column(Numeric(12, 2), default=0, server_default='0', nullable=False)
    due_date = Column(Date, nullable=False, index=True)
    is_paid = Column(Boolean, default=False, nullable=False)
    # Denormalised from due_date for the monthly summary query
    month = Column(String(16), nullable=False, index=True)
    year = Column(String(4), nullable=False, index=True)
    carried_over = Column(Boolean, default=False, nullable=False)
    carried_from_id = Column(Integer, ForeignKey("payment_schedules.id", ondelete="SET NULL"), nullable=True, index=True)

    # Relationships
    plot = relationship("Plot", back_populates="payment_schedules")

    @property
    def status(self):
        return payment_status(self)

    def __repr__(self):
        return f"<PaymentSchedule(id={self.id}, plot_id={self.plot_id}, due_date={self.due_date}, is_paid={self.is_paid})>"
