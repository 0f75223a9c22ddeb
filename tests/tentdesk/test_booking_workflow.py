"""
Tests for tentdesk.booking — form validation and the two-phase booking flow.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from tentdesk.auth import SessionAuthenticator
from tentdesk.booking import BookingForm, BookingWorkflow
from tentdesk.config import DeskSettings
from tentdesk.errors import (
    BookingInvalid,
    DocumentGenerationFailed,
    NotAuthenticated,
    OtpSendFailed,
    ReceiptNotFound,
    TentNotFound,
    TentUnavailable,
)
from tentdesk.inventory import InventoryStore, ServiceFlags, TentStatus
from tentdesk.receipts import ReceiptComposer, ReceiptIdFactory
from tentdesk.time import FixedClock

T0 = datetime(2025, 5, 1, 9, 0, 0, tzinfo=timezone.utc)


def _payload(**overrides) -> dict:
    payload = {
        "tent_code": "T3",
        "client_name": "Alice",
        "phone": "555-0101",
        "booking_date": "2025-05-01",
        "price": "50",
        "usage": "Food stand",
        "services": {"electricity": True, "chairs": False, "table": "on"},
        "zones": ["C", "A"],
        "qty_car_flags": 0,
        "qty_banner_flags": "2",
        "notes": "",
    }
    payload.update(overrides)
    return payload


def _desk(*, renderers=None, authenticated=True, composer=None):
    clock = FixedClock(T0)
    auth = SessionAuthenticator(clock=clock, code_generator=lambda n: "482913")
    if authenticated:
        auth.request_code("555-0100")
        auth.verify_code("482913")
    store = InventoryStore()
    store.initialize()
    composer = composer or ReceiptComposer(DeskSettings(), renderers=renderers)
    workflow = BookingWorkflow(
        authenticator=auth,
        store=store,
        composer=composer,
        id_factory=ReceiptIdFactory(clock),
    )
    return workflow, auth, store


def _failing_renderer(plan, doc_hash):
    raise RuntimeError("printer on fire")


# ── BookingForm ──────────────────────────────────────────────

class TestBookingForm:
    def test_from_mapping_coerces(self):
        form = BookingForm.from_mapping(_payload(tent_code="t3"))
        assert form.tent_code == "T3"
        assert form.price == Decimal("50")
        assert form.services == ServiceFlags(electricity=True, chairs=False, table=True)
        assert form.zones == ("A", "C")
        assert form.qty_banner_flags == 2

    def test_top_level_service_flags(self):
        data = _payload(electricity="true", chairs=True)
        del data["services"]
        form = BookingForm.from_mapping(data)
        assert form.services == ServiceFlags(electricity=True, chairs=True, table=False)

    def test_optional_fields_default(self):
        data = _payload()
        for key in ("services", "zones", "qty_car_flags", "qty_banner_flags", "notes"):
            del data[key]
        form = BookingForm.from_mapping(data)
        assert form.zones == ()
        assert form.qty_car_flags == 0
        assert form.notes == ""
        assert not form.services.any()

    def test_missing_required_fields_reported_together(self):
        with pytest.raises(BookingInvalid) as exc_info:
            BookingForm.from_mapping(_payload(client_name="", usage="  ", price=None))
        assert set(exc_info.value.field_errors) == {"client_name", "usage", "price"}

    @pytest.mark.parametrize("price", ["-1", "abc", "NaN", True])
    def test_bad_price(self, price):
        with pytest.raises(BookingInvalid) as exc_info:
            BookingForm.from_mapping(_payload(price=price))
        assert "price" in exc_info.value.field_errors

    def test_zero_price_allowed(self):
        assert BookingForm.from_mapping(_payload(price="0")).price == Decimal("0")

    def test_negative_quantity(self):
        with pytest.raises(BookingInvalid) as exc_info:
            BookingForm.from_mapping(_payload(qty_car_flags=-1))
        assert "qty_car_flags" in exc_info.value.field_errors

    def test_unknown_zone(self):
        with pytest.raises(BookingInvalid) as exc_info:
            BookingForm.from_mapping(_payload(zones=["A", "Z"]))
        assert "zones" in exc_info.value.field_errors

    def test_bad_date(self):
        with pytest.raises(BookingInvalid) as exc_info:
            BookingForm.from_mapping(_payload(booking_date="01/05/2025"))
        assert "booking_date" in exc_info.value.field_errors

    def test_non_mapping_payload(self):
        with pytest.raises(BookingInvalid):
            BookingForm.from_mapping(["T3"])


# ── BookingWorkflow.submit ───────────────────────────────────

class TestSubmit:
    def test_books_tent_and_issues_receipt(self):
        workflow, auth, store = _desk()
        result = workflow.submit(BookingForm.from_mapping(_payload()))

        assert result.tent.status is TentStatus.BOOKED
        assert result.tent.receipt_id == result.receipt.id
        assert result.receipt.id == "R1746090000000"
        assert result.receipt.generated_by == "555-0100"
        assert result.document.filename == "receipt-T3-R1746090000000.html"

        assert store.get_tent("T3").status is TentStatus.BOOKED
        assert store.list_receipts() == [result.receipt]
        assert len(store.list_available()) == 55

    def test_requires_authentication(self):
        workflow, auth, store = _desk(authenticated=False)
        with pytest.raises(NotAuthenticated):
            workflow.submit(BookingForm.from_mapping(_payload()))
        assert store.get_tent("T3").status is TentStatus.AVAILABLE

    def test_already_booked_rejected_before_mutation(self):
        workflow, auth, store = _desk()
        first = workflow.submit(BookingForm.from_mapping(_payload()))
        with pytest.raises(TentUnavailable):
            workflow.submit(BookingForm.from_mapping(_payload(client_name="Mallory")))
        tent = store.get_tent("T3")
        assert tent.client_name == "Alice"
        assert tent.receipt_id == first.receipt.id
        assert len(store.list_receipts()) == 1

    def test_unknown_tent(self):
        workflow, auth, store = _desk()
        with pytest.raises(TentNotFound):
            workflow.submit(BookingForm.from_mapping(_payload(tent_code="Z9")))

    def test_generation_failure_rolls_back(self):
        workflow, auth, store = _desk(renderers={"html": _failing_renderer})
        with pytest.raises(DocumentGenerationFailed):
            workflow.submit(BookingForm.from_mapping(_payload()))
        tent = store.get_tent("T3")
        assert tent.status is TentStatus.AVAILABLE
        assert tent.client_name is None
        assert store.list_receipts() == []
        assert len(store.list_available()) == 56

    def test_closed_composer_rolls_back(self):
        composer = ReceiptComposer(DeskSettings())
        composer.close()
        workflow, auth, store = _desk(composer=composer)
        with pytest.raises(DocumentGenerationFailed):
            workflow.submit(BookingForm.from_mapping(_payload(tent_code="T2")))
        assert store.get_tent("T2").status is TentStatus.AVAILABLE
        assert store.list_receipts() == []

    def test_unexpected_composer_error_rolls_back(self):
        class _Crashing(ReceiptComposer):
            def compose(self, receipt):
                raise KeyError("boom")

        workflow, auth, store = _desk(composer=_Crashing(DeskSettings()))
        with pytest.raises(KeyError):
            workflow.submit(BookingForm.from_mapping(_payload()))
        assert store.get_tent("T3").status is TentStatus.AVAILABLE

    def test_receipt_stamped_with_verified_operator(self):
        workflow, auth, store = _desk()
        with pytest.raises(OtpSendFailed):
            auth.request_code("999-6666")
        result = workflow.submit(BookingForm.from_mapping(_payload()))
        assert result.receipt.generated_by == "555-0100"

    def test_receipt_snapshot_isolated(self):
        workflow, auth, store = _desk()
        result = workflow.submit(BookingForm.from_mapping(_payload(notes="first")))
        store.update_tent("T3", notes="edited afterwards")
        assert store.get_receipt(result.receipt.id).notes == "first"

    def test_rebook_after_release_issues_new_receipt(self):
        workflow, auth, store = _desk()
        first = workflow.submit(BookingForm.from_mapping(_payload()))
        workflow.release("T3")
        second = workflow.submit(BookingForm.from_mapping(_payload(client_name="Bob")))
        assert second.receipt.id != first.receipt.id
        assert store.get_tent("T3").receipt_id == second.receipt.id
        assert [r.tent_code for r in store.list_receipts()] == ["T3", "T3"]


# ── regenerate / release ─────────────────────────────────────

class TestRegenerateAndRelease:
    def test_regenerate_matches_first_render(self):
        workflow, auth, store = _desk()
        result = workflow.submit(BookingForm.from_mapping(_payload()))
        again = workflow.regenerate(result.receipt.id)
        assert again.filename == result.document.filename
        assert again.plan_hash == result.document.plan_hash

    def test_regenerate_unknown(self):
        workflow, auth, store = _desk()
        with pytest.raises(ReceiptNotFound):
            workflow.regenerate("R0")

    def test_regenerate_requires_authentication(self):
        workflow, auth, store = _desk()
        result = workflow.submit(BookingForm.from_mapping(_payload()))
        auth.logout()
        with pytest.raises(NotAuthenticated):
            workflow.regenerate(result.receipt.id)

    def test_release_returns_tent_to_available(self):
        workflow, auth, store = _desk()
        workflow.submit(BookingForm.from_mapping(_payload()))
        tent = workflow.release("T3")
        assert tent.status is TentStatus.AVAILABLE
        assert tent.client_name is None
        # issued receipts survive a release
        assert len(store.list_receipts()) == 1
