"""
Shared pytest fixtures
"""
import pytest
from datetime import date, timedelta
from decimal import Decimal
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db

# Import every model so SQLAlchemy can resolve the relationships
from app.models.user import User, UserRole
from app.models.venue import Venue
from app.models.court import Court
from app.models.booking import Booking
from app.models.time_slot import TimeSlot


# In-memory database for tests
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db():
    """Create the test schema and drop it afterwards"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def override_get_db(db):
    """get_db override for tests"""
    def _get_db():
        try:
            yield db
        finally:
            pass
    return _get_db


def _create_user(db, email, role):
    user = User(
        name=email.split("@")[0],
        email=email,
        hashed_password="hashed",
        role=role,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def customer(db):
    return _create_user(db, "customer@example.com", UserRole.CUSTOMER)


@pytest.fixture
def other_customer(db):
    return _create_user(db, "other@example.com", UserRole.CUSTOMER)


@pytest.fixture
def owner(db):
    return _create_user(db, "owner@example.com", UserRole.FACILITY_OWNER)


@pytest.fixture
def admin(db):
    return _create_user(db, "admin@example.com", UserRole.ADMIN)


@pytest.fixture
def venue(db, owner):
    """Approved venue owned by ``owner``"""
    venue = Venue(
        owner_id=owner.id,
        name="Downtown Sports Center",
        location="Main St 123",
        is_approved=True,
    )
    db.add(venue)
    db.commit()
    db.refresh(venue)
    return venue


@pytest.fixture
def court(db, venue):
    """Active court with the default operating hours"""
    court = Court(
        venue_id=venue.id,
        name="Court 1",
        sport_type="badminton",
        price_per_hour=Decimal("50.00"),
        is_active=True,
    )
    db.add(court)
    db.commit()
    db.refresh(court)
    return court


@pytest.fixture
def tomorrow():
    return date.today() + timedelta(days=1)
