from pydantic import Field, field_validator, model_validator
from typing import Optional
from datetime import datetime
from decimal import Decimal

from app.schemas.common import CamelModel, HHMMTime


def _check_hours(opening, closing):
    if opening is not None and closing is not None and closing <= opening:
        raise ValueError("Closing time must be after opening time")


class CourtBase(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    sport_type: str = Field(min_length=1, max_length=50)
    price_per_hour: Decimal = Field(ge=0)
    opening_time: Optional[HHMMTime] = None
    closing_time: Optional[HHMMTime] = None


class CourtCreate(CourtBase):
    @model_validator(mode="after")
    def check_operating_hours(self):
        _check_hours(self.opening_time, self.closing_time)
        return self


class CourtUpdate(CamelModel):
    """Mutable court fields. Anything not listed here cannot be changed through the API."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    sport_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    price_per_hour: Optional[Decimal] = Field(default=None, ge=0)
    opening_time: Optional[HHMMTime] = None
    closing_time: Optional[HHMMTime] = None
    is_active: Optional[bool] = None

    @field_validator("name", "sport_type", "price_per_hour", "is_active")
    @classmethod
    def reject_null(cls, v, info):
        # Omit a field to keep its value, null would clear a required column
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    @model_validator(mode="after")
    def check_operating_hours(self):
        _check_hours(self.opening_time, self.closing_time)
        return self


class CourtResponse(CourtBase):
    id: int
    venue_id: int
    is_active: bool
    created_at: datetime
