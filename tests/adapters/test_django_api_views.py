"""
Tests for adapters.django_api — HTTP surface over the TentDesk core.

Runs through the Django test client; no database is involved.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from adapters.django_api.wiring import (
    build_dependencies,
    create_dependencies,
    install_dependencies,
    reset_dependencies,
)
from tentdesk.config import DeskSettings
from tentdesk.receipts import ReceiptComposer
from tentdesk.time import FixedClock

T0 = datetime(2025, 5, 1, 9, 0, 0, tzinfo=timezone.utc)

BOOKING = {
    "tent_code": "L10",
    "client_name": "Alice",
    "phone": "555-0101",
    "booking_date": "2025-05-01",
    "price": "50",
    "usage": "Food stand",
    "services": {"electricity": True},
    "zones": ["A", "C"],
    "qty_car_flags": 0,
    "qty_banner_flags": 2,
    "notes": "",
}


@pytest.fixture
def desk():
    clock = FixedClock(T0)
    deps = create_dependencies(DeskSettings(), clock=clock)
    install_dependencies(deps)
    yield deps
    reset_dependencies()


def _post(client, path: str, body: dict | None = None):
    return client.post(
        f"/v1/{path}",
        data=body or {},
        content_type="application/json",
    )


def _login(client) -> None:
    response = _post(client, "auth/request-code", {"phone": "555-0100"})
    otp = response.json()["data"]["otp"]
    response = _post(client, "auth/verify", {"code": otp})
    assert response.status_code == 200


# ── auth ──────────────────────────────────────────────────────

class TestAuthEndpoints:
    def test_request_code_exposes_otp(self, client, desk):
        response = _post(client, "auth/request-code", {"phone": "555-0100"})
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["code_sent"] is True
        assert len(data["otp"]) == 6
        assert data["expires_at"] == "2025-05-01T09:02:00+00:00"

    def test_request_code_hides_otp_when_disabled(self, client):
        install_dependencies(
            create_dependencies(DeskSettings(expose_otp=False), clock=FixedClock(T0))
        )
        try:
            response = _post(client, "auth/request-code", {"phone": "555-0100"})
            assert "otp" not in response.json()["data"]
        finally:
            reset_dependencies()

    def test_request_code_blank_phone(self, client, desk):
        response = _post(client, "auth/request-code", {"phone": " "})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "OTP_SEND_FAILED"

    def test_verify_wrong_code(self, client, desk):
        _post(client, "auth/request-code", {"phone": "555-0100"})
        response = _post(client, "auth/verify", {"code": "000000x"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "OTP_MISMATCH"

    def test_verify_without_request(self, client, desk):
        response = _post(client, "auth/verify", {"code": "123456"})
        assert response.json()["error"]["code"] == "OTP_NOT_REQUESTED"

    def test_verify_expired(self, client, desk):
        otp = _post(client, "auth/request-code", {"phone": "555-0100"}).json()["data"]["otp"]
        desk.clock.advance(121)
        response = _post(client, "auth/verify", {"code": otp})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "OTP_EXPIRED"

    def test_login_and_logout(self, client, desk):
        _login(client)
        assert client.get("/v1/auth/session").json()["data"]["authenticated"] is True
        response = _post(client, "auth/logout")
        assert response.json()["data"] == {"authenticated": False}
        assert client.get("/v1/tents").status_code == 401

    def test_request_code_while_signed_in_rejected(self, client, desk):
        _login(client)
        response = _post(client, "auth/request-code", {"phone": "999-6666"})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "OTP_SEND_FAILED"
        session = client.get("/v1/auth/session").json()["data"]
        assert session["phone_number"] == "555-0100"
        assert session["authenticated"] is True

    def test_request_code_otp_verifies(self, client, desk):
        _post(client, "auth/request-code", {"phone": "555-0100"})
        response = _post(client, "auth/request-code", {"phone": "555-0100"})
        otp = response.json()["data"]["otp"]
        assert _post(client, "auth/verify", {"code": otp}).status_code == 200

    def test_invalid_json(self, client, desk):
        response = client.post(
            "/v1/auth/request-code", data="{not json", content_type="application/json"
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_method_not_allowed(self, client, desk):
        response = client.get("/v1/auth/request-code")
        assert response.status_code == 405


# ── tents ─────────────────────────────────────────────────────

class TestTentEndpoints:
    def test_requires_authentication(self, client, desk):
        response = client.get("/v1/tents")
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "NOT_AUTHENTICATED"

    def test_list_and_filter(self, client, desk):
        _login(client)
        assert client.get("/v1/tents").json()["data"]["count"] == 56
        _post(client, "bookings", BOOKING)
        data = client.get("/v1/tents?status=available").json()["data"]
        assert data["count"] == 55
        assert "L10" not in [t["code"] for t in data["tents"]]

    def test_bad_status_filter(self, client, desk):
        _login(client)
        assert client.get("/v1/tents?status=lost").status_code == 400

    def test_layout(self, client, desk):
        _login(client)
        data = client.get("/v1/tents/layout").json()["data"]
        left = [t["code"] for t in data["groups"]["left"]]
        assert left.index("L2") < left.index("L10")
        assert data["counts"] == {"available": 56, "booked": 0, "reserved": 0}

    def test_detail(self, client, desk):
        _login(client)
        response = client.get("/v1/tents/t1")
        assert response.json()["data"]["code"] == "T1"
        assert client.get("/v1/tents/Z9").status_code == 404


# ── bookings & receipts ───────────────────────────────────────

class TestBookingEndpoints:
    def test_book_returns_receipt_download(self, client, desk):
        _login(client)
        response = _post(client, "bookings", BOOKING)
        assert response.status_code == 200
        assert response["Content-Type"].startswith("text/html")
        receipt_id = response["X-Receipt-Id"]
        assert response["Content-Disposition"] == (
            f'attachment; filename="receipt-L10-{receipt_id}.html"'
        )
        body = response.content.decode("utf-8")
        assert "ADVERTISEMENTS ON TRACK" in body
        assert "BANNER FLAGS" in body
        assert "section-notes" not in body
        assert desk.store.get_tent("L10").status.value == "booked"

    def test_double_booking_conflict(self, client, desk):
        _login(client)
        _post(client, "bookings", BOOKING)
        response = _post(client, "bookings", {**BOOKING, "client_name": "Mallory"})
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "TENT_UNAVAILABLE"

    def test_invalid_form(self, client, desk):
        _login(client)
        response = _post(client, "bookings", {**BOOKING, "price": "-5", "usage": ""})
        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "BOOKING_INVALID"
        assert set(error["details"]["fields"]) == {"price", "usage"}

    def test_requires_authentication(self, client, desk):
        response = _post(client, "bookings", BOOKING)
        assert response.status_code == 401
        assert desk.store.get_tent("L10").status.value == "available"

    def test_receipts_list_and_download(self, client, desk):
        _login(client)
        booked = _post(client, "bookings", BOOKING)
        receipt_id = booked["X-Receipt-Id"]

        receipts = client.get("/v1/receipts").json()["data"]
        assert receipts["count"] == 1
        assert receipts["receipts"][0]["id"] == receipt_id

        again = client.get(f"/v1/receipts/{receipt_id}/download")
        assert again.status_code == 200
        assert again["Content-Disposition"] == booked["Content-Disposition"]
        assert again["X-Receipt-Plan-Hash"] == booked["X-Receipt-Plan-Hash"]

        assert client.get("/v1/receipts/R0/download").status_code == 404

    def test_release(self, client, desk):
        _login(client)
        _post(client, "bookings", BOOKING)
        response = _post(client, "tents/L10/release")
        assert response.status_code == 200
        assert response.json()["data"]["status"] == "available"

    def test_generation_failure_maps_to_502(self, client):
        def broken(plan, doc_hash):
            raise RuntimeError("renderer crashed")

        deps = create_dependencies(
            DeskSettings(),
            clock=FixedClock(T0),
            composer=ReceiptComposer(DeskSettings(), renderers={"html": broken}),
        )
        install_dependencies(deps)
        try:
            _login(client)
            response = _post(client, "bookings", BOOKING)
            assert response.status_code == 502
            assert response.json()["error"]["code"] == "DOCUMENT_GENERATION_FAILED"
            assert deps.store.get_tent("L10").status.value == "available"
        finally:
            reset_dependencies()


# ── messages & wiring ─────────────────────────────────────────

class TestMessagesAndWiring:
    def test_messages_arabic(self, client, desk):
        data = client.get("/v1/messages?lang=ar").json()["data"]
        assert data["direction"] == "rtl"
        assert data["messages"]["layout.available"] == "متاحة"

    def test_messages_default_english(self, client, desk):
        data = client.get("/v1/messages").json()["data"]
        assert data["locale"] == "en"

    def test_messages_unsupported_locale(self, client, desk):
        assert client.get("/v1/messages?lang=fr").status_code == 400

    def test_build_dependencies_is_singleton(self, settings):
        settings.TENTDESK = {"receipt_format": "pdf"}
        reset_dependencies()
        try:
            first = build_dependencies()
            assert first is build_dependencies()
            assert first.settings.receipt_format == "pdf"
            assert len(first.store.list_tents()) == 56
        finally:
            reset_dependencies()
