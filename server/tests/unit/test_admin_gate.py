"""Tests for the admin bearer-token gate and shared request parsing."""

import pytest

from gotzportal.core.config import settings
from gotzportal.core.dependencies import extract_bearer_token, is_authenticated, parse_positive_id
from gotzportal.core.exceptions import BadRequestError


def test_dev_token_accepted_without_admin_password():
    assert is_authenticated("Bearer dev-token")


@pytest.mark.parametrize(
    "header",
    [None, "", "Bearer ", "Bearer    ", "Basic dev-token", "bearer dev-token", "Bearer wrong", "dev-token"],
)
def test_rejected_headers(header):
    assert not is_authenticated(header)


def test_configured_password_replaces_dev_token(monkeypatch):
    monkeypatch.setattr(settings, "admin_password", "s3cret-pass")

    assert is_authenticated("Bearer s3cret-pass")
    assert is_authenticated("Bearer   s3cret-pass  ")
    assert not is_authenticated("Bearer dev-token")


def test_extract_bearer_token_trims():
    assert extract_bearer_token("Bearer  abc ") == "abc"
    assert extract_bearer_token("Token abc") is None


@pytest.mark.parametrize("raw,expected", [("1", 1), ("42", 42), ("007", 7)])
def test_parse_positive_id(raw, expected):
    assert parse_positive_id(raw) == expected


@pytest.mark.parametrize("raw", ["0", "-1", "abc", "1.5", "", "١"])
def test_parse_positive_id_rejects(raw):
    with pytest.raises(BadRequestError) as exc_info:
        parse_positive_id(raw)
    assert exc_info.value.problem_details["message"] == "Invalid id"


ADMIN_ROUTES = [
    ("GET", "/api/admin/bookings"),
    ("GET", "/api/admin/bookings/1"),
    ("PATCH", "/api/admin/bookings/1"),
    ("POST", "/api/admin/bookings/1/complete"),
    ("GET", "/api/admin/contact-messages"),
    ("PATCH", "/api/admin/contact-messages/1"),
    ("POST", "/api/admin/contact-messages/1/resolve"),
    ("GET", "/api/admin/dashboard"),
    ("GET", "/api/admin/users"),
    ("POST", "/api/admin/users"),
    ("GET", "/api/admin/hero-slides"),
    ("POST", "/api/admin/tour-packages"),
    ("PATCH", "/api/admin/lodges/1"),
    ("DELETE", "/api/admin/itineraries/1"),
]


@pytest.mark.asyncio
@pytest.mark.parametrize("method,path", ADMIN_ROUTES)
async def test_admin_routes_reject_missing_token(test_client, method, path):
    response = await test_client.request(method, path)

    assert response.status_code == 401
    assert response.json()["message"] == "Unauthorized"


@pytest.mark.asyncio
async def test_auth_checked_before_body_and_id(test_client):
    """A malformed body and an invalid id still answer 401 without a token."""
    response = await test_client.request(
        "PATCH",
        "/api/admin/bookings/not-a-number",
        content=b"{not json",
        headers={"Authorization": "Bearer wrong", "Content-Type": "application/json"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_every_auth_failure_has_the_same_body(test_client):
    missing = await test_client.get("/api/admin/bookings")
    wrong_scheme = await test_client.get("/api/admin/bookings", headers={"Authorization": "Basic dev-token"})
    wrong_token = await test_client.get("/api/admin/bookings", headers={"Authorization": "Bearer nope"})

    assert missing.json() == wrong_scheme.json() == wrong_token.json()


@pytest.mark.asyncio
async def test_invalid_id_after_auth(test_client, admin_headers):
    response = await test_client.get("/api/admin/bookings/0", headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid id"


@pytest.mark.asyncio
async def test_malformed_json_body_is_bad_request(test_client, admin_headers):
    response = await test_client.request(
        "PATCH",
        "/api/admin/bookings/1",
        content=b"[1, 2",
        headers={**admin_headers, "Content-Type": "application/json"},
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_rejected_admin_requests_leave_storage_untouched(
    test_client, test_app, sample_booking_data, sample_contact_data
):
    await test_client.post("/api/bookings", json=sample_booking_data)
    await test_client.post("/api/contact", json=sample_contact_data)
    wrong_token = {"Authorization": "Bearer not-the-secret"}

    responses = [
        await test_client.patch(
            "/api/admin/bookings/1", json={"status": "confirmed", "admin_notes": "x"}, headers=wrong_token
        ),
        await test_client.post("/api/admin/bookings/1/complete", headers=wrong_token),
        await test_client.patch("/api/admin/contact-messages/1", json={"status": "closed"}, headers=wrong_token),
        await test_client.post("/api/admin/contact-messages/1/resolve", headers=wrong_token),
    ]

    assert [r.status_code for r in responses] == [401, 401, 401, 401]
    booking = test_app.state.store.get_booking(1)
    assert booking.status == "pending"
    assert booking.admin_notes is None
    assert booking.completed_at is None
    assert booking.updated_at is None
    message = test_app.state.store.get_contact_message(1)
    assert message.status == "new"
    assert message.resolved_at is None
    assert message.updated_at is None
