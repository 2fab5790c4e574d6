from pydantic import Field, field_validator, model_validator
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from app.models.booking import BookingStatus, PaymentStatus
from app.schemas.common import CamelModel, HHMMTime


class BookingCreate(CamelModel):
    venue_id: int
    court_id: int
    booking_date: date
    start_time: HHMMTime
    end_time: HHMMTime
    total_amount: Optional[Decimal] = Field(default=None, ge=0)
    notes: Optional[str] = Field(default=None, max_length=500)

    @field_validator("notes")
    @classmethod
    def strip_notes(cls, v):
        return v.strip() if v is not None else v

    @model_validator(mode="after")
    def check_interval(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class BookingCancel(CamelModel):
    reason: Optional[str] = Field(default=None, max_length=500)


class BookingReschedule(CamelModel):
    new_date: date
    new_start_time: HHMMTime
    new_end_time: HHMMTime

    @model_validator(mode="after")
    def check_interval(self):
        if self.new_end_time <= self.new_start_time:
            raise ValueError("New end time must be after new start time")
        return self


class Booking(CamelModel):
    id: int
    user_id: int
    court_id: int
    venue_id: int
    booking_date: date
    start_time: HHMMTime
    end_time: HHMMTime
    total_amount: Decimal
    status: BookingStatus
    payment_status: PaymentStatus
    notes: Optional[str] = None
    cancellation_reason: Optional[str] = None
    cancelled_at: Optional[datetime] = None
    rescheduled_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
