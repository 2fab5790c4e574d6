from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from app.models.venue import Venue
from app.schemas.venue import VenueCreate

logger = logging.getLogger(__name__)


def get_venue(db: Session, venue_id: int) -> Optional[Venue]:
    return db.query(Venue).filter(Venue.id == venue_id).first()


def get_venues(
    db: Session,
    skip: int = 0,
    limit: int = 100,
    owner_id: Optional[int] = None,
    approved_only: bool = False,
    pending_only: bool = False,
) -> List[Venue]:
    query = db.query(Venue)

    if owner_id:
        query = query.filter(Venue.owner_id == owner_id)
    if approved_only:
        query = query.filter(Venue.is_approved.is_(True))
    if pending_only:
        query = query.filter(Venue.is_approved.is_(False))

    return query.order_by(Venue.name).offset(skip).limit(limit).all()


def create_venue(db: Session, venue: VenueCreate, owner_id: int) -> Venue:
    db_venue = Venue(**venue.model_dump(), owner_id=owner_id)
    db.add(db_venue)
    db.commit()
    db.refresh(db_venue)
    logger.info(f"Venue {db_venue.id} created by owner {owner_id}")
    return db_venue


def approve_venue(db: Session, venue_id: int) -> Optional[Venue]:
    db_venue = get_venue(db, venue_id)
    if not db_venue:
        return None

    db_venue.is_approved = True
    db.commit()
    db.refresh(db_venue)
    logger.info(f"Venue {venue_id} approved")
    return db_venue
