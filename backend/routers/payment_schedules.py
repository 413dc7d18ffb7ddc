from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from database import get_db
from crud import payment_schedules as crud_payments
from exceptions import LedgerError, to_http_exception
from schemas.payment_schedules import (
    PaymentSchedule,
    PaymentScheduleCreate,
    PaymentScheduleUpdate,
    MonthlySummary,
)

router = APIRouter(prefix="/api/payments", tags=["Payments"])

@router.get("/all", response_model=List[PaymentSchedule])
def read_all_payments(
    month: Optional[str] = None,
    year: Optional[str] = None,
    is_paid: Optional[bool] = Query(None, alias="isPaid"),
    db: Session = Depends(get_db),
):
    """Retrieve every payment schedule, optionally filtered by period or paid flag."""
    try:
        return crud_payments.get_payments(db, month=month, year=year, is_paid=is_paid)
    except LedgerError as e:
        raise to_http_exception(e)


@router.get("/plot/{plot_id}", response_model=List[PaymentSchedule])
def read_payments_for_plot(plot_id: int, db: Session = Depends(get_db)):
    """Retrieve all payment schedules of a plot, earliest due date first."""
    return crud_payments.get_payments_by_plot(db, plot_id)


@router.get("/summary/{month}/{year}", response_model=MonthlySummary)
def read_monthly_summary(month: str, year: str, db: Session = Depends(get_db)):
    """Expected and paid totals for every schedule of the given month."""
    try:
        return crud_payments.get_monthly_summary(db, month, year)
    except LedgerError as e:
        raise to_http_exception(e)


@router.post("/transfer/{plot_id}", response_model=List[PaymentSchedule])
def transfer_unpaid_payments(plot_id: int, db: Session = Depends(get_db)):
    """Carry the plot's unpaid schedules over into next month."""
    try:
        return crud_payments.transfer_payments(db, plot_id)
    except LedgerError as e:
        raise to_http_exception(e)


@router.post("", response_model=PaymentSchedule, status_code=status.HTTP_201_CREATED)
def create_payment(payment: PaymentScheduleCreate, db: Session = Depends(get_db)):
    """Create a payment schedule for a plot."""
    try:
        return crud_payments.create_payment(db, payment)
    except LedgerError as e:
        raise to_http_exception(e)


@router.get("/{payment_id}", response_model=PaymentSchedule)
def read_payment(payment_id: int, db: Session = Depends(get_db)):
    """Retrieve a single payment schedule by ID."""
    db_payment = crud_payments.get_payment(db, payment_id)
    if db_payment is None:
        raise HTTPException(status_code=404, detail={"message": "Payment not found", "code": "not_found"})
    return db_payment


@router.put("/{payment_id}", response_model=PaymentSchedule)
def update_payment(payment_id: int, payment_update: PaymentScheduleUpdate, db: Session = Depends(get_db)):
    """Settle or correct an existing payment schedule."""
    try:
        return crud_payments.update_payment(db, payment_id, payment_update)
    except LedgerError as e:
        raise to_http_exception(e)


@router.delete("/{payment_id}", status_code=status.HTTP_200_OK)
def delete_payment(payment_id: int, db: Session = Depends(get_db)):
    """Delete a payment schedule and unlink it from its plot."""
    try:
        return crud_payments.delete_payment(db, payment_id)
    except LedgerError as e:
        raise to_http_exception(e)
