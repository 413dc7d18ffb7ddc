from pydantic import Field, AliasChoices, field_validator
from typing import List, Optional
from datetime import datetime

from schemas.base import CamelModel
from schemas.locations import LocationSummary
from schemas.users import UserSummary


class PlotBase(CamelModel):
    plot_number: str = Field(..., min_length=1)
    bags_required: int = Field(..., ge=0)


class PlotCreate(PlotBase):
    location_id: int = Field(..., validation_alias=AliasChoices("locationId", "location", "location_id"))


class PlotUpdate(CamelModel):
    plot_number: Optional[str] = Field(default=None, min_length=1)
    bags_required: Optional[int] = Field(default=None, ge=0)
    location_id: Optional[int] = Field(default=None, validation_alias=AliasChoices("locationId", "location", "location_id"))

    @field_validator('plot_number', 'bags_required', 'location_id', mode='before')
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError('Field may be omitted but not null')
        return v


class PlotAssignUsers(CamelModel):
    user_ids: List[int]


class Plot(PlotBase):
    id: int
    location_id: int
    location: Optional[LocationSummary] = None
    users: List[UserSummary] = Field(default_factory=list)
    payment_schedules: List[int] = Field(default_factory=list, validation_alias="payment_schedule_ids")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
