from pydantic import Field, AliasChoices, field_validator, field_serializer
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from schemas.base import CamelModel
from utils.payment_status import PaymentStatus


def _coerce_date(value):
    # The dashboard posts full ISO timestamps for dates
    if isinstance(value, str) and "T" in value:
        return value.split("T", 1)[0]
    return value


class PaymentScheduleCreate(CamelModel):
    plot_id: int = Field(..., validation_alias=AliasChoices("plotId", "plot", "plot_id"))
    expected_amount: Decimal = Field(..., ge=0, decimal_places=2)
    paid_amount: Decimal = Field(default=Decimal("0"), ge=0, decimal_places=2)
    due_date: date
    is_paid: bool = False

    @field_validator('due_date', mode='before')
    @classmethod
    def parse_due_date(cls, v):
        return _coerce_date(v)


class PaymentScheduleUpdate(CamelModel):
    expected_amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    paid_amount: Optional[Decimal] = Field(default=None, ge=0, decimal_places=2)
    due_date: Optional[date] = None
    is_paid: Optional[bool] = None

    @field_validator('expected_amount', 'paid_amount', 'due_date', 'is_paid', mode='before')
    @classmethod
    def reject_null(cls, v):
        # Leaving a field out keeps the stored value; sending null is an error
        if v is None:
            raise ValueError('Field may be omitted but not null')
        return _coerce_date(v)


class PaymentSchedule(CamelModel):
    id: int
    plot_id: int
    expected_amount: Decimal
    paid_amount: Decimal
    due_date: date
    is_paid: bool
    month: str
    year: str
    carried_over: bool
    carried_from_id: Optional[int] = None
    status: PaymentStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MonthlySummary(CamelModel):
    month: str
    year: str
    total_expected: Decimal
    total_paid: Decimal
    payment_count: int
    paid_count: int

    @field_serializer('total_expected', 'total_paid', when_used='json')
    def totals_as_numbers(self, value: Decimal) -> float:
        # Dashboards chart these directly
        return float(value)
