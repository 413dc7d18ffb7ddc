"""
Payment ledger operations.

Every schedule belongs to one plot. Writes that touch both the schedule and
the plot's schedule list are committed together.
"""
from sqlalchemy.orm import Session
from decimal import Decimal
from typing import List, Optional
import logging

from models.payment_schedules import PaymentSchedule
from schemas.payment_schedules import PaymentScheduleCreate, PaymentScheduleUpdate, MonthlySummary
import crud.plots as crud_plots
from exceptions import NotFoundError, InvalidStateError, InvalidReferenceError
from utils.dates import (
    month_label,
    year_label,
    rollover_target_date,
    normalize_month,
    normalize_year,
)

logger = logging.getLogger(__name__)


def _check_overpayment(expected_amount: Decimal, paid_amount: Decimal):
    if Decimal(paid_amount) > Decimal(expected_amount):
        raise InvalidStateError(
            f"Paid amount ({paid_amount}) exceeds expected amount ({expected_amount}).",
            code="overpayment",
        )


def _set_due_date(db_payment: PaymentSchedule, due_date):
    db_payment.due_date = due_date
    db_payment.month = month_label(due_date)
    db_payment.year = year_label(due_date)


def get_payment(db: Session, payment_id: int):
    return db.query(PaymentSchedule).filter(PaymentSchedule.id == payment_id).first()


def get_payments_by_plot(db: Session, plot_id: int) -> List[PaymentSchedule]:
    """Schedules of a plot, earliest due first."""
    return (
        db.query(PaymentSchedule)
        .filter(PaymentSchedule.plot_id == plot_id)
        .order_by(PaymentSchedule.due_date.asc(), PaymentSchedule.id.asc())
        .all()
    )


def get_payments(
    db: Session,
    month: Optional[str] = None,
    year: Optional[str] = None,
    is_paid: Optional[bool] = None,
) -> List[PaymentSchedule]:
    query = db.query(PaymentSchedule)
    try:
        if month is not None:
            query = query.filter(PaymentSchedule.month == normalize_month(month))
        if year is not None:
            query = query.filter(PaymentSchedule.year == normalize_year(year))
    except ValueError as e:
        raise InvalidStateError(str(e), code="invalid_period")
    if is_paid is not None:
        query = query.filter(PaymentSchedule.is_paid == is_paid)
    return query.order_by(PaymentSchedule.due_date.asc(), PaymentSchedule.id.asc()).all()


def create_payment(db: Session, payment: PaymentScheduleCreate) -> PaymentSchedule:
    plot = crud_plots.get_plot(db, payment.plot_id)
    if plot is None:
        raise InvalidReferenceError("Plot")

    _check_overpayment(payment.expected_amount, payment.paid_amount)

    db_payment = PaymentSchedule(
        expected_amount=payment.expected_amount,
        paid_amount=payment.paid_amount,
        is_paid=payment.is_paid,
        carried_over=False,
    )
    _set_due_date(db_payment, payment.due_date)
    crud_plots.append_payment_ref(plot, db_payment)

    db.commit()
    db.refresh(db_payment)
    logger.info(
        f"Payment schedule {db_payment.id} of {db_payment.expected_amount} due {db_payment.due_date} "
        f"created for plot {plot.plot_number}"
    )
    return db_payment


def update_payment(db: Session, payment_id: int, payment_update: PaymentScheduleUpdate) -> PaymentSchedule:
    """
    Apply only the fields present in the request. Zero amounts and False flags
    are real values and are applied. is_paid is never derived from the amounts.
    """
    db_payment = get_payment(db, payment_id)
    if db_payment is None:
        raise NotFoundError("Payment")

    update_data = payment_update.model_dump(exclude_unset=True)
    _check_overpayment(
        update_data.get("expected_amount", db_payment.expected_amount),
        update_data.get("paid_amount", db_payment.paid_amount),
    )

    for key, value in update_data.items():
        if key == "due_date":
            _set_due_date(db_payment, value)
        else:
            setattr(db_payment, key, value)

    db.commit()
    db.refresh(db_payment)
    logger.info(f"Payment schedule {payment_id} updated: {update_data}")
    return db_payment


def delete_payment(db: Session, payment_id: int) -> dict:
    db_payment = get_payment(db, payment_id)
    if db_payment is None:
        raise NotFoundError("Payment")

    plot_id = db_payment.plot_id
    plot = db_payment.plot
    if plot is not None:
        crud_plots.remove_payment_ref(plot, db_payment)
    db.delete(db_payment)
    db.commit()
    logger.info(f"Payment schedule {payment_id} deleted from plot {plot_id}")
    return {"message": "Payment removed"}


def get_monthly_summary(db: Session, month: str, year: str) -> MonthlySummary:
    try:
        month = normalize_month(month)
        year = normalize_year(year)
    except ValueError as e:
        raise InvalidStateError(str(e), code="invalid_period")

    payments = db.query(PaymentSchedule).filter(
        PaymentSchedule.month == month,
        PaymentSchedule.year == year,
    ).all()

    total_expected = sum((Decimal(p.expected_amount) for p in payments), Decimal("0"))
    total_paid = sum((Decimal(p.paid_amount or 0) for p in payments), Decimal("0"))

    return MonthlySummary(
        month=month,
        year=year,
        total_expected=total_expected,
        total_paid=total_paid,
        payment_count=len(payments),
        paid_count=sum(1 for p in payments if p.is_paid),
    )


def get_transferable_payments(db: Session, plot_id: int, target_date) -> List[PaymentSchedule]:
    """
    Unpaid schedules of a plot that can still be carried forward. A schedule
    is carried at most once, and copies already landing in the target month
    are not carried again.
    """
    already_carried = {
        row[0]
        for row in db.query(PaymentSchedule.carried_from_id).filter(
            PaymentSchedule.plot_id == plot_id,
            PaymentSchedule.carried_from_id.isnot(None),
        )
    }
    target_month = month_label(target_date)
    target_year = year_label(target_date)
    unpaid = (
        db.query(PaymentSchedule)
        .filter(
            PaymentSchedule.plot_id == plot_id,
            PaymentSchedule.is_paid == False,
        )
        .order_by(PaymentSchedule.due_date.asc(), PaymentSchedule.id.asc())
        .all()
    )
    return [
        p for p in unpaid
        if p.id not in already_carried
        and not (p.carried_over and p.month == target_month and p.year == target_year)
    ]


def transfer_payments(db: Session, plot_id: int) -> List[PaymentSchedule]:
    """
    Carry every eligible unpaid schedule of a plot into next calendar month.

    All copies share one due date (today plus one month) no matter how
    overdue each source was. Sources are left as they are; copies remember
    their source in carried_from_id.
    """
    plot = crud_plots.get_plot(db, plot_id)
    if plot is None:
        raise NotFoundError("Plot")

    target_date = rollover_target_date()
    unpaid = get_transferable_payments(db, plot.id, target_date)
    if not unpaid:
        raise InvalidStateError("No unpaid payments to transfer")

    new_payments = []
    for source in unpaid:
        carried = PaymentSchedule(
            expected_amount=source.expected_amount,
            paid_amount=Decimal("0"),
            is_paid=False,
            carried_over=True,
            carried_from_id=source.id,
        )
        _set_due_date(carried, target_date)
        crud_plots.append_payment_ref(plot, carried)
        new_payments.append(carried)

    db.commit()
    for carried in new_payments:
        db.refresh(carried)

    logger.info(
        f"Transferred {len(new_payments)} unpaid payments of plot {plot.plot_number} "
        f"to {month_label(target_date)} {year_label(target_date)}"
    )
    return new_payments
