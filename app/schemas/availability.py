from pydantic import Field
from typing import List
from datetime import date
from decimal import Decimal

from app.schemas.common import CamelModel, HHMMTime


class AvailableSlot(CamelModel):
    start_time: HHMMTime
    end_time: HHMMTime
    price: Decimal


class CourtSummary(CamelModel):
    id: int
    name: str
    sport_type: str


class AvailableSlotsResponse(CamelModel):
    court: CourtSummary
    target_date: date = Field(alias="date")
    available_slots: List[AvailableSlot]
    total_available: int
