"""
HTTP level tests: routing, camelCase payloads and error responses
"""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.database import get_db
from app.error_handlers import register_exception_handlers
from app.routers import auth, bookings, public, venue_management
from app.services.auth import get_current_user


@pytest.fixture
def app(override_get_db):
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(auth.router, prefix="/api/auth")
    app.include_router(public.router, prefix="/api/public")
    app.include_router(bookings.router, prefix="/api/bookings")
    app.include_router(venue_management.router, prefix="/api/venue-management")
    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app, customer):
    app.dependency_overrides[get_current_user] = lambda: customer
    return TestClient(app)


def _booking_json(court, booking_date, start="14:00", end="15:00"):
    return {
        "venueId": court.venue_id,
        "courtId": court.id,
        "bookingDate": booking_date.isoformat(),
        "startTime": start,
        "endTime": end,
    }


def test_available_slots_response_shape(client, court, tomorrow):
    response = client.get(
        f"/api/public/courts/{court.id}/available-slots",
        params={"date": tomorrow.isoformat()},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["court"] == {"id": court.id, "name": "Court 1", "sportType": "badminton"}
    assert body["date"] == tomorrow.isoformat()
    assert body["totalAvailable"] == 16
    assert body["availableSlots"][0]["startTime"] == "06:00"
    assert body["availableSlots"][0]["endTime"] == "07:00"


def test_available_slots_requires_date(client, court):
    response = client.get(f"/api/public/courts/{court.id}/available-slots")

    assert response.status_code == 400
    assert response.json()["detail"] == "Validation failed"


def test_book_then_slot_disappears(client, court, tomorrow):
    response = client.post("/api/bookings/", json=_booking_json(court, tomorrow))

    assert response.status_code == 201
    body = response.json()
    assert body["status"] == "confirmed"
    assert body["paymentStatus"] == "pending"
    assert body["startTime"] == "14:00"

    slots = client.get(
        f"/api/public/courts/{court.id}/available-slots",
        params={"date": tomorrow.isoformat()},
    ).json()
    assert slots["totalAvailable"] == 15
    assert "14:00" not in [s["startTime"] for s in slots["availableSlots"]]


def test_double_booking_returns_conflict(client, court, tomorrow):
    assert client.post("/api/bookings/", json=_booking_json(court, tomorrow)).status_code == 201

    response = client.post("/api/bookings/", json=_booking_json(court, tomorrow))

    assert response.status_code == 409
    assert response.json() == {"detail": "The requested time slot is not available"}


def test_invalid_time_format_returns_validation_errors(client, court, tomorrow):
    response = client.post(
        "/api/bookings/", json=_booking_json(court, tomorrow, start="25:00")
    )

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Validation failed"
    assert any(error["field"] == "startTime" for error in body["errors"])


def test_cancel_past_booking_returns_bad_request(client, db, court, customer):
    from datetime import date, time, timedelta
    from decimal import Decimal
    from app.models.booking import Booking

    booking = Booking(
        user_id=customer.id,
        court_id=court.id,
        venue_id=court.venue_id,
        booking_date=date.today() - timedelta(days=1),
        start_time=time(10, 0),
        end_time=time(11, 0),
        total_amount=Decimal("50.00"),
    )
    db.add(booking)
    db.commit()

    response = client.patch(f"/api/bookings/{booking.id}/cancel")

    assert response.status_code == 400
    assert response.json() == {"detail": "Cannot cancel past bookings"}


def test_register_login_and_me(app, db):
    client = TestClient(app)

    response = client.post(
        "/api/auth/register",
        json={"name": "Jordan", "email": "jordan@example.com", "password": "secret123"},
    )
    assert response.status_code == 201
    assert response.json()["role"] == "customer"

    response = client.post(
        "/api/auth/token",
        data={"username": "jordan@example.com", "password": "secret123"},
    )
    assert response.status_code == 200
    token = response.json()["access_token"]

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json()["email"] == "jordan@example.com"


def test_login_with_wrong_password(app, db):
    client = TestClient(app)
    client.post(
        "/api/auth/register",
        json={"name": "Jordan", "email": "jordan@example.com", "password": "secret123"},
    )

    response = client.post(
        "/api/auth/token",
        data={"username": "jordan@example.com", "password": "wrong-password"},
    )

    assert response.status_code == 401


def test_cannot_self_register_as_admin(app, db):
    client = TestClient(app)

    response = client.post(
        "/api/auth/register",
        json={
            "name": "Mallory",
            "email": "mallory@example.com",
            "password": "secret123",
            "role": "admin",
        },
    )

    assert response.status_code == 403


def test_court_update_with_null_price_is_rejected(app, db, venue, court, owner):
    app.dependency_overrides[get_current_user] = lambda: owner
    client = TestClient(app)

    response = client.put(
        f"/api/venue-management/venues/{venue.id}/courts/{court.id}",
        json={"pricePerHour": None, "isActive": None},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Validation failed"
    db.refresh(court)
    assert court.price_per_hour == 50
    assert court.is_active is True


def test_court_update_hours_over_http(app, db, venue, court, owner, tomorrow):
    app.dependency_overrides[get_current_user] = lambda: owner
    client = TestClient(app)

    response = client.put(
        f"/api/venue-management/venues/{venue.id}/courts/{court.id}",
        json={"openingTime": "09:00", "closingTime": "11:00"},
    )

    assert response.status_code == 200
    assert response.json()["openingTime"] == "09:00"

    slots = client.get(
        f"/api/public/courts/{court.id}/available-slots",
        params={"date": tomorrow.isoformat()},
    ).json()
    assert [s["startTime"] for s in slots["availableSlots"]] == ["09:00", "10:00"]
