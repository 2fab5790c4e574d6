from sqlalchemy import (
    Column,
    Integer,
    String,
    Date,
    Time,
    DateTime,
    Boolean,
    Numeric,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from datetime import datetime

from app.database import Base


class TimeSlot(Base):
    """Explicit availability record for a court on a date (maintenance blocks, price overrides)."""

    __tablename__ = "time_slots"
    __table_args__ = (
        UniqueConstraint(
            "court_id",
            "slot_date",
            "start_time",
            "end_time",
            name="uq_time_slots_court_slot",
        ),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    court_id = Column(Integer, ForeignKey("courts.id"), nullable=False, index=True)
    slot_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    is_blocked = Column(Boolean, default=False, nullable=False)
    reason = Column(String(255), nullable=True)
    price_override = Column(Numeric(10, 2), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    court = relationship("app.models.court.Court", back_populates="time_slots")

    def __repr__(self):
        return f"<TimeSlot {self.slot_date} {self.start_time}-{self.end_time} blocked={self.is_blocked}>"
