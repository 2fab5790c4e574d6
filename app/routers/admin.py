from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from typing import List

from app.database import get_db
from app.crud import venue as venue_crud
from app.models.user import User, UserRole
from app.schemas.venue import VenueResponse
from app.services.auth import require_role

router = APIRouter()

admin_required = require_role(UserRole.ADMIN)


@router.get("/venues/pending", response_model=List[VenueResponse])
def read_pending_venues(
    db: Session = Depends(get_db), current_user: User = Depends(admin_required)
):
    return venue_crud.get_venues(db, pending_only=True)


@router.patch("/venues/{venue_id}/approve", response_model=VenueResponse)
def approve_venue(
    venue_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(admin_required),
):
    db_venue = venue_crud.approve_venue(db, venue_id)
    if db_venue is None:
        raise HTTPException(status_code=404, detail="Venue not found")
    return db_venue
