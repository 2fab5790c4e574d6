from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    Date,
    Time,
    DateTime,
    Numeric,
    ForeignKey,
    Enum,
    Index,
    text,
)
from sqlalchemy.orm import relationship
from datetime import datetime
import enum

from app.database import Base


class BookingStatus(str, enum.Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


# Only non-cancelled rows take part in the uniqueness check, so a cancelled
# slot can be booked again. Exact tuples only: partial overlaps are not caught.
ACTIVE_BOOKING_PREDICATE = text("status != 'cancelled'")


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        Index(
            "uq_bookings_active_slot",
            "court_id",
            "booking_date",
            "start_time",
            "end_time",
            unique=True,
            postgresql_where=ACTIVE_BOOKING_PREDICATE,
            sqlite_where=ACTIVE_BOOKING_PREDICATE,
        ),
        Index("ix_bookings_court_date", "court_id", "booking_date"),
        {"extend_existing": True},
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    court_id = Column(Integer, ForeignKey("courts.id"), nullable=False)
    venue_id = Column(Integer, ForeignKey("venues.id"), nullable=False, index=True)
    booking_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    end_time = Column(Time, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)
    status = Column(
        Enum(
            BookingStatus,
            name="booking_status",
            values_callable=lambda e: [x.value for x in e],
        ),
        default=BookingStatus.CONFIRMED,
        nullable=False,
    )
    payment_status = Column(
        Enum(
            PaymentStatus,
            name="payment_status",
            values_callable=lambda e: [x.value for x in e],
        ),
        default=PaymentStatus.PENDING,
        nullable=False,
    )
    notes = Column(Text, nullable=True)
    cancellation_reason = Column(String(500), nullable=True)
    cancelled_at = Column(DateTime, nullable=True)
    rescheduled_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    user = relationship("app.models.user.User", back_populates="bookings")
    court = relationship("app.models.court.Court", back_populates="bookings")
    venue = relationship("app.models.venue.Venue")

    def __repr__(self):
        return (
            f"<Booking {self.booking_date} {self.start_time}-{self.end_time} "
            f"court={self.court_id} status={self.status}>"
        )
