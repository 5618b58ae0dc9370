"""Integration tests for the booking form and the admin booking workflow."""

import pytest
from sqlalchemy import Text

from gotzportal.models.booking import Booking
from gotzportal.models.catalog import TourPackage
from gotzportal.models.mixins import utcnow


@pytest.mark.asyncio
async def test_booking_without_database_is_stored_in_memory(test_client, test_app, sample_booking_data):
    response = await test_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 201
    assert response.json() == {"status": "created", "message": "Booking received.", "booking_id": 1}

    stored = test_app.state.store.get_booking(1)
    assert stored.full_name == "Amina Njoroge"
    assert stored.status == "pending"
    assert stored.tour_package_id is None


@pytest.mark.asyncio
async def test_memory_booking_ids_increase(test_client, sample_booking_data):
    ids = []
    for _ in range(3):
        response = await test_client.post("/api/bookings", json=sample_booking_data)
        ids.append(response.json()["booking_id"])

    assert ids == [1, 2, 3]


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["full_name", "email", "phone"])
async def test_booking_requires_contact_details(test_client, sample_booking_data, missing):
    sample_booking_data[missing] = "   "

    response = await test_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 422
    assert response.json()["message"] == "Full name, email, and phone are required."


@pytest.mark.asyncio
@pytest.mark.parametrize("travelers", [0, 101, -3, "many", None, 2.5, True])
async def test_booking_travelers_out_of_range(test_client, sample_booking_data, travelers):
    sample_booking_data["number_of_travelers"] = travelers

    response = await test_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 422
    assert response.json()["message"] == "Number of travelers must be between 1 and 100."


@pytest.mark.asyncio
async def test_booking_travelers_boundaries_accepted(test_client, sample_booking_data):
    for travelers in (1, 100, "7"):
        sample_booking_data["number_of_travelers"] = travelers
        response = await test_client.post("/api/bookings", json=sample_booking_data)
        assert response.status_code == 201


@pytest.mark.asyncio
async def test_booking_with_slug_but_no_database_is_rejected(test_client, sample_booking_data):
    sample_booking_data["package_slug"] = "great-migration"

    response = await test_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 422
    assert response.json()["message"] == "The selected tour package could not be found."


@pytest.mark.asyncio
async def test_booking_numeric_package_id_used_as_is(test_client, test_app, sample_booking_data):
    sample_booking_data["tour_package_id"] = 9

    response = await test_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 201
    assert test_app.state.store.get_booking(1).tour_package_id == 9


@pytest.mark.asyncio
async def test_booking_invalid_travel_date(test_client, sample_booking_data):
    sample_booking_data["travel_date"] = "next summer"

    response = await test_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 422
    assert response.json()["message"] == "Travel date must be a valid date (YYYY-MM-DD)."


@pytest.mark.asyncio
async def test_booking_malformed_json(test_client):
    response = await test_client.post(
        "/api/bookings", content=b"{", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_admin_booking_workflow_in_memory(test_client, admin_headers, sample_booking_data):
    await test_client.post("/api/bookings", json=sample_booking_data)
    await test_client.post("/api/bookings", json={**sample_booking_data, "tour_package_id": 4})

    response = await test_client.get("/api/admin/bookings", headers=admin_headers)
    assert response.status_code == 200
    bookings = response.json()["bookings"]
    assert [b["id"] for b in bookings] == [2, 1]
    assert bookings[0]["tour_package"] == {"id": 4, "title": "—", "slug": ""}
    assert bookings[1]["tour_package"] is None

    response = await test_client.patch(
        "/api/admin/bookings/1",
        json={"status": "confirmed", "admin_notes": "Deposit received"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    booking = response.json()["booking"]
    assert booking["status"] == "confirmed"
    assert booking["admin_notes"] == "Deposit received"
    assert booking["completed_at"] is None

    response = await test_client.post("/api/admin/bookings/1/complete", headers=admin_headers)
    booking = response.json()["booking"]
    assert booking["status"] == "completed"
    assert booking["completed_at"] is not None

    response = await test_client.get("/api/admin/bookings?status=completed", headers=admin_headers)
    assert [b["id"] for b in response.json()["bookings"]] == [1]

    response = await test_client.get("/api/admin/bookings?status=all", headers=admin_headers)
    assert len(response.json()["bookings"]) == 2


@pytest.mark.asyncio
async def test_completion_restamps_completed_at(test_client, test_app, admin_headers, sample_booking_data):
    await test_client.post("/api/bookings", json=sample_booking_data)

    first = (await test_client.post("/api/admin/bookings/1/complete", headers=admin_headers)).json()
    second = (await test_client.post("/api/admin/bookings/1/complete", headers=admin_headers)).json()

    assert second["booking"]["completed_at"] >= first["booking"]["completed_at"]


@pytest.mark.asyncio
async def test_admin_booking_not_found(test_client, admin_headers):
    response = await test_client.get("/api/admin/bookings/99", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Booking not found"

    response = await test_client.patch("/api/admin/bookings/99", json={"status": "confirmed"}, headers=admin_headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_admin_booking_status_too_long(test_client, admin_headers, sample_booking_data):
    await test_client.post("/api/bookings", json=sample_booking_data)

    response = await test_client.patch("/api/admin/bookings/1", json={"status": "x" * 21}, headers=admin_headers)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_booking_persisted_in_database(db_client, test_session, test_app, sample_booking_data):
    package = TourPackage(slug="great-migration", title="Great Migration", published_at=utcnow())
    test_session.add(package)
    await test_session.commit()

    sample_booking_data["package_slug"] = "great-migration"
    response = await db_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 201
    booking_id = response.json()["booking_id"]
    assert test_app.state.store.list_bookings() == []

    response = await db_client.get(f"/api/admin/bookings/{booking_id}", headers={"Authorization": "Bearer dev-token"})
    booking = response.json()["booking"]
    assert booking["tour_package"] == {"id": package.id, "title": "Great Migration", "slug": "great-migration"}
    assert booking["travel_date"] == "2026-07-14"


@pytest.mark.asyncio
async def test_booking_unknown_slug_with_database(db_client, sample_booking_data):
    sample_booking_data["package_slug"] = "nowhere"

    response = await db_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 422
    assert response.json()["message"] == "The selected tour package could not be found."


@pytest.mark.asyncio
async def test_admin_booking_update_in_database(db_client, admin_headers, sample_booking_data):
    booking_id = (await db_client.post("/api/bookings", json=sample_booking_data)).json()["booking_id"]

    response = await db_client.post(f"/api/admin/bookings/{booking_id}/complete", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["booking"]["status"] == "completed"
    assert response.json()["booking"]["completed_at"] is not None


@pytest.mark.asyncio
async def test_database_write_failure_is_server_error(broken_db_client, test_app, sample_booking_data):
    response = await broken_db_client.post("/api/bookings", json=sample_booking_data)

    assert response.status_code == 500
    assert response.json()["message"] == "connection refused"
    # A failed database write never falls back to memory
    assert test_app.state.store.list_bookings() == []


def test_traveller_columns_have_no_length_limit():
    """Booking contact fields are unbounded, matching the form, which sets no ceiling."""
    columns = Booking.__table__.c
    for name in ("full_name", "email", "phone", "whatsapp"):
        assert isinstance(columns[name].type, Text)
        assert getattr(columns[name].type, "length", None) is None


LONG_CONTACT_FIELDS = {"phone": "1" * 80, "whatsapp": "2" * 80, "full_name": "N" * 300}


@pytest.mark.asyncio
async def test_long_contact_fields_in_memory(test_client, sample_booking_data):
    response = await test_client.post("/api/bookings", json={**sample_booking_data, **LONG_CONTACT_FIELDS})

    assert response.status_code == 201


@pytest.mark.asyncio
async def test_long_contact_fields_in_database(db_client, sample_booking_data, admin_headers):
    response = await db_client.post("/api/bookings", json={**sample_booking_data, **LONG_CONTACT_FIELDS})
    assert response.status_code == 201

    stored = await db_client.get(f"/api/admin/bookings/{response.json()['booking_id']}", headers=admin_headers)
    assert stored.json()["booking"]["phone"] == "1" * 80
    assert stored.json()["booking"]["full_name"] == "N" * 300
