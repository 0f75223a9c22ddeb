"""
Tests for tentdesk.config, tentdesk.errors and tentdesk.time helpers.
"""

from datetime import datetime, timedelta, timezone

import pytest

from tentdesk.config import DeskSettings
from tentdesk.errors import BookingInvalid, DeskError, ErrorCode, TentUnavailable
from tentdesk.time import FixedClock, SystemClock, epoch_millis, is_past


class TestDeskSettings:
    def test_defaults(self):
        settings = DeskSettings()
        assert settings.otp_ttl_seconds == 120
        assert settings.otp_length == 6
        assert settings.receipt_format == "html"
        assert settings.currency_symbol == "$"

    def test_from_mapping_coerces_env_strings(self):
        settings = DeskSettings.from_mapping({
            "otp_ttl_seconds": "60",
            "receipt_format": " PDF ",
            "expose_otp": "0",
            "receipt_timeout_seconds": "3",
        })
        assert settings.otp_ttl_seconds == 60
        assert settings.receipt_format == "pdf"
        assert settings.expose_otp is False
        assert settings.receipt_timeout_seconds == 3

    def test_only_html_receipts_are_bilingual(self):
        assert DeskSettings().receipt_is_bilingual is True
        assert DeskSettings(receipt_format="pdf").receipt_is_bilingual is False

    def test_from_mapping_none(self):
        assert DeskSettings.from_mapping(None) == DeskSettings()

    @pytest.mark.parametrize(
        "values",
        [
            {"receipt_format": "docx"},
            {"otp_ttl_seconds": "0"},
            {"otp_ttl_seconds": "soon"},
            {"expose_otp": "maybe"},
            {"otp_length": "2"},
            {"event_name": "  "},
            {"unknown_key": "x"},
        ],
    )
    def test_from_mapping_rejects(self, values):
        with pytest.raises(ValueError):
            DeskSettings.from_mapping(values)


class TestDeskErrors:
    def test_str_and_dict(self):
        error = TentUnavailable("T3", "booked")
        assert str(error) == "[TENT_UNAVAILABLE] This tent is already booked."
        assert error.to_dict() == {
            "code": ErrorCode.TENT_UNAVAILABLE,
            "message": "This tent is already booked.",
            "details": {"tent_code": "T3", "status": "booked"},
        }
        assert error.tent_code == "T3"

    @pytest.mark.parametrize(
        "status, message",
        [
            ("booked", "This tent is already booked."),
            ("reserved", "This tent is held by a booking in progress."),
            ("available", "This tent is not booked."),
        ],
    )
    def test_unavailable_message_follows_status(self, status, message):
        assert TentUnavailable("T3", status).message == message

    def test_is_exception(self):
        with pytest.raises(DeskError):
            raise BookingInvalid({"price": "Must be a number."})

    def test_field_errors_sorted_copy(self):
        error = BookingInvalid({"usage": "required", "phone": "required"})
        assert list(error.field_errors) == ["phone", "usage"]


class TestClock:
    def test_system_clock_is_utc(self):
        assert SystemClock().now_utc().tzinfo == timezone.utc

    def test_fixed_clock_rejects_naive(self):
        with pytest.raises(ValueError, match="timezone-aware"):
            FixedClock(datetime(2025, 1, 1))

    def test_is_past_is_strict(self):
        deadline = datetime(2025, 1, 1, tzinfo=timezone.utc)
        assert is_past(deadline, deadline) is False
        assert is_past(deadline, deadline + timedelta(milliseconds=1)) is True

    def test_epoch_millis(self):
        assert epoch_millis(datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc)) == 1000
