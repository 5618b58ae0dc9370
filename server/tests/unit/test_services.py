"""Unit tests for validation helpers and storage resolution."""

from datetime import date

import pytest

from gotzportal.core.config import settings
from gotzportal.core.exceptions import BackendNotConfiguredError, InternalServerError, NotFoundError, ValidationError
from gotzportal.services.booking_service import parse_whole_number, validate_booking_submission
from gotzportal.services.contact_service import validate_contact_submission
from gotzportal.services.content_resources import slugify
from gotzportal.services.content_service import clamp_per_page
from gotzportal.services.resolution import (
    SOURCE_DATABASE,
    SOURCE_FALLBACK,
    SOURCE_MEMORY,
    resolve_admin_read,
    resolve_read,
    resolve_write,
)


class TestClampPerPage:
    @pytest.mark.parametrize(
        "raw,expected",
        [(None, 12), ("", 12), ("0", 12), ("x", 12), ("1", 1), ("12.9", 12), ("50", 50), ("51", 50), ("-3", 1)],
    )
    def test_values(self, raw, expected):
        assert clamp_per_page(raw) == expected

    def test_overflow(self):
        assert clamp_per_page("1e999") == 12


class TestSlugify:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Serengeti Migration", "serengeti-migration"),
            ("  Lake   Manyara ", "lake-manyara"),
            ("Zanzibar: Stone Town!", "zanzibar-stone-town"),
            ("Élan Lodge", "lan-lodge"),
            ("!!!", ""),
        ],
    )
    def test_slugify(self, text, expected):
        assert slugify(text) == expected


class TestBookingValidation:
    def base(self, **overrides):
        payload = {"full_name": "Amina", "email": "a@example.com", "phone": "123", "number_of_travelers": 2}
        payload.update(overrides)
        return payload

    def test_contact_details_checked_first(self):
        with pytest.raises(ValidationError) as exc:
            validate_booking_submission(self.base(full_name="  ", number_of_travelers=0, travel_date="nope"))
        assert exc.value.problem_details["message"] == "Full name, email, and phone are required."

    def test_travelers_checked_before_date(self):
        with pytest.raises(ValidationError) as exc:
            validate_booking_submission(self.base(number_of_travelers=101, travel_date="nope"))
        assert exc.value.problem_details["message"] == "Number of travelers must be between 1 and 100."

    def test_travel_date_accepts_timestamp(self):
        submission = validate_booking_submission(self.base(travel_date="2026-07-14T10:00:00Z"))
        assert submission.fields["travel_date"] == date(2026, 7, 14)

    def test_package_reference(self):
        submission = validate_booking_submission(self.base(tour_package_id="4", package_slug=" mara "))
        assert submission.tour_package_id == 4
        assert submission.package_slug == "mara"
        assert submission.package_requested

    def test_general_inquiry(self):
        submission = validate_booking_submission(self.base())
        assert submission.package_requested is False
        assert submission.with_package(None).tour_package_id is None

    def test_unresolved_package_rejected(self):
        submission = validate_booking_submission(self.base(package_slug="gone"))
        with pytest.raises(ValidationError):
            submission.with_package(None)

    @pytest.mark.parametrize(
        "value,expected",
        [(3, 3), (3.0, 3), ("7", 7), (" 8 ", 8), (2.5, None), (True, None), ("two", None), (None, None), ([1], None)],
    )
    def test_parse_whole_number(self, value, expected):
        assert parse_whole_number(value) == expected


class TestContactValidation:
    def test_trims_and_drops_blank_phone(self):
        fields = validate_contact_submission(
            {"name": " Lars ", "email": "lars@example.com", "message": " Hi ", "phone": "  "}
        )
        assert fields.name == "Lars"
        assert fields.message == "Hi"
        assert fields.phone is None

    def test_name_checked_before_email(self):
        with pytest.raises(ValidationError) as exc:
            validate_contact_submission({"name": "n" * 121, "email": "bad", "message": "hi"})
        assert exc.value.problem_details["message"] == "Name must not exceed 120 characters."


class TestResolution:
    @pytest.mark.asyncio
    async def test_read_without_database_uses_fallback(self):
        async def query():
            raise AssertionError("database must not be touched")

        result = await resolve_read(query, ["static"], "lodges")

        assert result.value == ["static"]
        assert result.source == SOURCE_FALLBACK
        assert result.ok

    @pytest.mark.asyncio
    async def test_read_failure_degrades(self, with_database):
        async def query():
            raise ConnectionError("down")

        result = await resolve_read(query, [], "lodges")

        assert result.value == []
        assert result.source == SOURCE_FALLBACK
        assert isinstance(result.error, ConnectionError)
        assert result.warning == "Fell back to static data: ConnectionError"

    @pytest.mark.asyncio
    async def test_read_from_database(self, with_database):
        async def query():
            return ["row"]

        result = await resolve_read(query, [], "lodges")

        assert result.value == ["row"]
        assert result.source == SOURCE_DATABASE

    @pytest.mark.asyncio
    async def test_write_backends(self, monkeypatch):
        async def db_op():
            return "db"

        assert await resolve_write(db_op, lambda: "mem") == ("mem", SOURCE_MEMORY)
        with pytest.raises(BackendNotConfiguredError):
            await resolve_write(db_op)

        monkeypatch.setattr(settings, "database_url", "sqlite+aiosqlite:///:memory:")
        assert await resolve_write(db_op, lambda: "mem") == ("db", SOURCE_DATABASE)

    @pytest.mark.asyncio
    async def test_write_failure_never_falls_back(self, with_database):
        async def db_op():
            raise ConnectionError("refused")

        with pytest.raises(InternalServerError):
            await resolve_write(db_op, lambda: "mem")

    @pytest.mark.asyncio
    async def test_write_problem_details_pass_through(self, with_database):
        async def db_op():
            raise NotFoundError("booking", "1")

        with pytest.raises(NotFoundError):
            await resolve_write(db_op)

    @pytest.mark.asyncio
    async def test_admin_read_propagates_database_errors(self, with_database):
        async def db_op():
            raise ConnectionError("refused")

        with pytest.raises(ConnectionError):
            await resolve_admin_read(db_op, lambda: [])
