from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime

from schemas.base import CamelModel


class LocationBase(CamelModel):
    name: str = Field(..., min_length=1)

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Location name cannot be blank')
        return v


class LocationCreate(LocationBase):
    pass


class LocationUpdate(LocationBase):
    pass


class LocationSummary(CamelModel):
    id: int
    name: str


class Location(LocationBase):
    id: int
    plots: List[int] = Field(default_factory=list, validation_alias="plot_ids")
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
