from pydantic import Field
from typing import List, Optional
from datetime import datetime

from app.schemas.common import CamelModel
from app.schemas.court import CourtResponse


class VenueBase(CamelModel):
    name: str = Field(min_length=1, max_length=150)
    location: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None


class VenueCreate(VenueBase):
    pass


class VenueResponse(VenueBase):
    id: int
    owner_id: int
    is_approved: bool
    created_at: datetime


class VenueDetail(VenueResponse):
    courts: List[CourtResponse] = []
