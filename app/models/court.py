from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Boolean,
    Numeric,
    Time,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from app.database import Base
from datetime import datetime


class Court(Base):
    __tablename__ = "courts"
    __table_args__ = (
        CheckConstraint("price_per_hour >= 0", name="ck_courts_price_non_negative"),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True)
    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    sport_type = Column(String, nullable=False)
    price_per_hour = Column(Numeric(10, 2), nullable=False, default=0)
    # Null means the default operating window applies
    opening_time = Column(Time, nullable=True)
    closing_time = Column(Time, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    venue = relationship("app.models.venue.Venue", back_populates="courts")
    bookings = relationship("app.models.booking.Booking", back_populates="court")
    time_slots = relationship(
        "app.models.time_slot.TimeSlot",
        back_populates="court",
        cascade="all, delete-orphan",
    )
