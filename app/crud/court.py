from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.models.court import Court
from app.schemas.court import CourtCreate, CourtUpdate

logger = logging.getLogger(__name__)


def get_court(db: Session, court_id: int) -> Optional[Court]:
    return db.query(Court).filter(Court.id == court_id).first()


def get_active_court(db: Session, court_id: int) -> Optional[Court]:
    return (
        db.query(Court)
        .filter(Court.id == court_id, Court.is_active.is_(True))
        .first()
    )


def get_courts_by_venue(
    db: Session, venue_id: int, include_inactive: bool = False
) -> List[Court]:
    query = db.query(Court).filter(Court.venue_id == venue_id)
    if not include_inactive:
        query = query.filter(Court.is_active.is_(True))
    return query.order_by(Court.name).all()


def create_court(db: Session, venue_id: int, court: CourtCreate) -> Court:
    db_court = Court(**court.model_dump(), venue_id=venue_id)
    db.add(db_court)
    db.commit()
    db.refresh(db_court)
    return db_court


def update_court(db: Session, court_id: int, court: CourtUpdate) -> Optional[Court]:
    db_court = get_court(db, court_id)
    if not db_court:
        return None

    update_data = court.model_dump(exclude_unset=True)

    # Opening and closing may be updated one at a time, validate the result
    opening = update_data.get("opening_time", db_court.opening_time)
    closing = update_data.get("closing_time", db_court.closing_time)
    if opening is not None and closing is not None and closing <= opening:
        raise ValueError("Closing time must be after opening time")

    for field, value in update_data.items():
        setattr(db_court, field, value)

    db.commit()
    db.refresh(db_court)
    return db_court


def toggle_court_status(db: Session, court_id: int) -> Optional[Court]:
    db_court = get_court(db, court_id)
    if not db_court:
        return None

    db_court.is_active = not db_court.is_active
    db.commit()
    db.refresh(db_court)
    logger.info(f"Court {court_id} is_active set to {db_court.is_active}")
    return db_court
