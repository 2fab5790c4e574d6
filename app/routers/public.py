from fastapi import APIRouter, Depends, HTTPException, Query, Path
from sqlalchemy.orm import Session
from typing import List
from datetime import date

from app.database import get_db
from app.crud import court as court_crud
from app.crud import venue as venue_crud
from app.schemas.availability import (
    AvailableSlot,
    AvailableSlotsResponse,
    CourtSummary,
)
from app.schemas.court import CourtResponse
from app.schemas.venue import VenueResponse, VenueDetail
from app.services.availability import get_available_slots

router = APIRouter()


@router.get("/venues", response_model=List[VenueResponse])
def read_approved_venues(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    return venue_crud.get_venues(db, skip=offset, limit=limit, approved_only=True)


@router.get("/venues/{venue_id}", response_model=VenueDetail)
def read_venue_details(venue_id: int, db: Session = Depends(get_db)):
    venue = venue_crud.get_venue(db, venue_id)
    if venue is None or not venue.is_approved:
        raise HTTPException(status_code=404, detail="Venue not found")

    # Only active courts are listed publicly
    return VenueDetail(
        **VenueResponse.model_validate(venue).model_dump(),
        courts=[
            CourtResponse.model_validate(court)
            for court in court_crud.get_courts_by_venue(db, venue_id)
        ],
    )


@router.get(
    "/courts/{court_id}/available-slots", response_model=AvailableSlotsResponse
)
def get_court_available_slots(
    court_id: int = Path(..., ge=1, description="Court ID"),
    target_date: date = Query(
        ..., alias="date", description="Date to check for available slots (YYYY-MM-DD)"
    ),
    db: Session = Depends(get_db),
):
    """
    Available one-hour slots of a court on a date.

    A slot is available when it lies within the court's operating hours and
    overlaps neither a non-cancelled booking nor a blocked record.
    """
    court = court_crud.get_active_court(db, court_id)
    if court is None:
        raise HTTPException(status_code=404, detail="Court not found")

    slots = [AvailableSlot(**slot) for slot in get_available_slots(db, court, target_date)]

    return AvailableSlotsResponse(
        court=CourtSummary.model_validate(court),
        target_date=target_date,
        available_slots=slots,
        total_available=len(slots),
    )
