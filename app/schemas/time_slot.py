from pydantic import Field, model_validator
from typing import List, Optional
from datetime import date, datetime
from decimal import Decimal

from app.schemas.common import CamelModel, HHMMTime


class SlotWindow(CamelModel):
    slot_date: date = Field(alias="date")
    start_time: HHMMTime
    end_time: HHMMTime

    @model_validator(mode="after")
    def check_interval(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        return self


class SlotBlockRequest(CamelModel):
    """Slots can be referenced by id (existing records) or by date/start/end window."""

    slot_ids: List[int] = []
    slots: List[SlotWindow] = []
    reason: Optional[str] = Field(default=None, min_length=3, max_length=255)

    @model_validator(mode="after")
    def check_not_empty(self):
        if not self.slot_ids and not self.slots:
            raise ValueError("Provide at least one slot id or slot window")
        if any(slot_id < 1 for slot_id in self.slot_ids):
            raise ValueError("Each slot ID must be a valid integer")
        return self


class SlotUnblockRequest(SlotBlockRequest):
    pass


class TimeSlotResponse(CamelModel):
    id: int
    court_id: int
    slot_date: date
    start_time: HHMMTime
    end_time: HHMMTime
    is_blocked: bool
    reason: Optional[str] = None
    price_override: Optional[Decimal] = None
    created_at: datetime
