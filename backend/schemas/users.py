from pydantic import Field, field_validator
from typing import List, Optional
from datetime import datetime

from schemas.base import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"


class UserBase(CamelModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3, pattern=EMAIL_PATTERN)
    mobile: Optional[str] = None


class UserCreate(UserBase):
    pass


class UserUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=3, pattern=EMAIL_PATTERN)
    mobile: Optional[str] = None

    @field_validator('name', 'email', mode='before')
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError('Field may be omitted but not null')
        return v


class UserSummary(UserBase):
    id: int


class User(UserBase):
    id: int
    plots: List[int] = Field(default_factory=list, validation_alias="plot_ids")
    created_at: Optional[datetime] = None
