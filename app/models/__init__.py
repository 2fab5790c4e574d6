from app.models.user import User, UserRole
from app.models.venue import Venue
from app.models.court import Court
from app.models.booking import Booking, BookingStatus, PaymentStatus
from app.models.time_slot import TimeSlot

# This makes the models directory a Python package and ensures all models are loaded
