import enum
from datetime import date
from decimal import Decimal

from utils.dates import today as current_day


class PaymentStatus(str, enum.Enum):
    PAID = "paid"
    PARTIAL = "partial"
    OVERDUE = "overdue"
    PENDING = "pending"


def payment_status(schedule, today: date = None) -> PaymentStatus:
    """
    Single source of truth for the status shown next to a payment schedule.

    Rules are checked in order: an explicit is_paid flag wins, then any
    amount received marks the schedule partial, then a due date in the past
    marks it overdue. Everything else is pending.
    """
    if schedule.is_paid:
        return PaymentStatus.PAID
    if Decimal(schedule.paid_amount or 0) > 0:
        return PaymentStatus.PARTIAL
    today = today or current_day()
    if schedule.due_date is not None and schedule.due_date < today:
        return PaymentStatus.OVERDUE
    return PaymentStatus.PENDING
