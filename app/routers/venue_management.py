from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import date
import logging

from app.database import get_db
from app.crud import booking as booking_crud
from app.crud import court as court_crud
from app.crud import time_slot as time_slot_crud
from app.crud import venue as venue_crud
from app.models.booking import BookingStatus
from app.models.user import User, UserRole
from app.schemas.booking import Booking
from app.schemas.court import CourtCreate, CourtResponse, CourtUpdate
from app.schemas.time_slot import SlotBlockRequest, SlotUnblockRequest, TimeSlotResponse
from app.schemas.venue import VenueCreate, VenueResponse
from app.services.auth import require_role

router = APIRouter()

logger = logging.getLogger(__name__)

owner_required = require_role(UserRole.FACILITY_OWNER, UserRole.ADMIN)


def verify_venue_ownership(db: Session, venue_id: int, current_user: User):
    venue = venue_crud.get_venue(db, venue_id)
    if venue is None:
        raise HTTPException(status_code=404, detail="Venue not found")
    if venue.owner_id != current_user.id:
        raise HTTPException(status_code=403, detail="Access denied")
    return venue


def verify_court_ownership(db: Session, venue_id: int, court_id: int, current_user: User):
    verify_venue_ownership(db, venue_id, current_user)
    court = court_crud.get_court(db, court_id)
    if court is None or court.venue_id != venue_id:
        raise HTTPException(status_code=404, detail="Court not found")
    return court


# VENUES


@router.post("/venues", response_model=VenueResponse, status_code=status.HTTP_201_CREATED)
def create_venue(
    venue: VenueCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    return venue_crud.create_venue(db, venue, owner_id=current_user.id)


@router.get("/venues", response_model=List[VenueResponse])
def read_my_venues(
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    return venue_crud.get_venues(db, owner_id=current_user.id)


# COURTS


@router.post(
    "/venues/{venue_id}/courts",
    response_model=CourtResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_court(
    venue_id: int,
    court: CourtCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    verify_venue_ownership(db, venue_id, current_user)
    return court_crud.create_court(db, venue_id, court)


@router.get("/venues/{venue_id}/courts", response_model=List[CourtResponse])
def read_venue_courts(
    venue_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    verify_venue_ownership(db, venue_id, current_user)
    return court_crud.get_courts_by_venue(db, venue_id, include_inactive=True)


@router.put("/venues/{venue_id}/courts/{court_id}", response_model=CourtResponse)
def update_court(
    venue_id: int,
    court_id: int,
    court: CourtUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    verify_court_ownership(db, venue_id, court_id, current_user)
    try:
        return court_crud.update_court(db, court_id, court)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.patch(
    "/venues/{venue_id}/courts/{court_id}/toggle-status", response_model=CourtResponse
)
def toggle_court_status(
    venue_id: int,
    court_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    verify_court_ownership(db, venue_id, court_id, current_user)
    return court_crud.toggle_court_status(db, court_id)


# TIME SLOT MANAGEMENT


@router.get(
    "/venues/{venue_id}/courts/{court_id}/blocked-slots",
    response_model=List[TimeSlotResponse],
)
def read_blocked_slots(
    venue_id: int,
    court_id: int,
    target_date: Optional[date] = Query(None, alias="date"),
    start_date: Optional[date] = Query(None, alias="startDate"),
    end_date: Optional[date] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    verify_court_ownership(db, venue_id, court_id, current_user)
    return time_slot_crud.get_blocked_slots(
        db, court_id, slot_date=target_date, start_date=start_date, end_date=end_date
    )


@router.post(
    "/venues/{venue_id}/courts/{court_id}/block-slots",
    response_model=List[TimeSlotResponse],
)
def block_slots(
    venue_id: int,
    court_id: int,
    payload: SlotBlockRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    """
    Mark slots as unavailable for maintenance. Slots are referenced either by
    id or by date/start/end; the latter are created when missing.
    """
    verify_court_ownership(db, venue_id, court_id, current_user)

    blocked = time_slot_crud.block_slots_by_ids(
        db, court_id, payload.slot_ids, reason=payload.reason
    )
    for slot in payload.slots:
        blocked.append(
            time_slot_crud.block_slot(
                db,
                court_id,
                slot.slot_date,
                slot.start_time,
                slot.end_time,
                reason=payload.reason,
            )
        )

    logger.info(f"{len(blocked)} time slot(s) blocked on court {court_id}")
    return blocked


@router.post(
    "/venues/{venue_id}/courts/{court_id}/unblock-slots",
    response_model=List[TimeSlotResponse],
)
def unblock_slots(
    venue_id: int,
    court_id: int,
    payload: SlotUnblockRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    verify_court_ownership(db, venue_id, court_id, current_user)

    unblocked = time_slot_crud.unblock_slots_by_ids(db, court_id, payload.slot_ids)
    for slot in payload.slots:
        db_slot = time_slot_crud.unblock_slot(
            db, court_id, slot.slot_date, slot.start_time, slot.end_time
        )
        if db_slot is not None:
            unblocked.append(db_slot)

    logger.info(f"{len(unblocked)} time slot(s) unblocked on court {court_id}")
    return unblocked


# BOOKING MANAGEMENT


@router.get("/venues/{venue_id}/bookings", response_model=List[Booking])
def read_venue_bookings(
    venue_id: int,
    status: Optional[BookingStatus] = None,
    target_date: Optional[date] = Query(None, alias="date"),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    verify_venue_ownership(db, venue_id, current_user)
    return booking_crud.get_bookings(
        db,
        skip=offset,
        limit=limit,
        venue_id=venue_id,
        status=status,
        booking_date=target_date,
    )


def _get_managed_booking(db: Session, booking_id: int, current_user: User):
    db_booking = booking_crud.get_booking(db, booking_id)
    if db_booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    if db_booking.venue.owner_id != current_user.id and not current_user.is_admin:
        raise HTTPException(status_code=403, detail="Access denied")
    return db_booking


@router.patch("/bookings/{booking_id}/complete", response_model=Booking)
def complete_booking(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    db_booking = _get_managed_booking(db, booking_id, current_user)
    return booking_crud.complete_booking(db, db_booking)


@router.patch("/bookings/{booking_id}/no-show", response_model=Booking)
def mark_booking_no_show(
    booking_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(owner_required),
):
    db_booking = _get_managed_booking(db, booking_id, current_user)
    return booking_crud.mark_no_show(db, db_booking)
