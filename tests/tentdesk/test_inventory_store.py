"""
Tests for tentdesk.inventory — tent collection, layout and transitions.
"""

import threading
from decimal import Decimal

import pytest

from tentdesk.errors import TentNotFound, TentUnavailable
from tentdesk.inventory import (
    TOTAL_TENTS,
    BookingDetails,
    InventoryStore,
    ServiceFlags,
    TentGroup,
    TentStatus,
    normalize_zones,
    parse_tent_code,
    tent_sort_key,
)
from tentdesk.receipts import Receipt


def _store() -> InventoryStore:
    store = InventoryStore()
    store.initialize()
    return store


def _booking(**overrides) -> BookingDetails:
    values = dict(
        client_name="Alice",
        phone="555-0101",
        booking_date="2025-05-01",
        price=Decimal("50"),
        usage="Food stand",
        services=ServiceFlags(electricity=True),
        zones=("A", "C"),
        qty_car_flags=0,
        qty_banner_flags=2,
        notes="",
        receipt_id="R1",
    )
    values.update(overrides)
    return BookingDetails(**values)


# ── Codes & layout ───────────────────────────────────────────

class TestTentCodes:
    def test_parse(self):
        assert parse_tent_code("L10") == (TentGroup.LEFT, 10)
        assert parse_tent_code("T1") == (TentGroup.TOP, 1)

    @pytest.mark.parametrize("code", ["", "X1", "T0", "T10", "L20", "L01", "R", "Tx"])
    def test_parse_rejects_invalid(self, code):
        with pytest.raises(ValueError):
            parse_tent_code(code)

    def test_numeric_sort_within_group(self):
        codes = ["L10", "L2", "L1", "L19"]
        assert sorted(codes, key=tent_sort_key) == ["L1", "L2", "L10", "L19"]

    def test_group_order(self):
        codes = ["R1", "L1", "B1", "T1"]
        assert sorted(codes, key=tent_sort_key) == ["T1", "B1", "L1", "R1"]


class TestZones:
    def test_normalize_orders_and_dedupes(self):
        assert normalize_zones(["c", "A", "C"]) == ("A", "C")

    def test_rejects_unknown_zone(self):
        with pytest.raises(ValueError):
            normalize_zones(["G"])

    def test_rejects_plain_string(self):
        with pytest.raises(ValueError):
            normalize_zones("AC")


# ── initialize / reads ───────────────────────────────────────

class TestInitialize:
    def test_creates_56_available_tents(self):
        store = _store()
        assert TOTAL_TENTS == 56
        assert len(store.list_tents()) == 56
        assert len(store.list_available()) == 56
        assert all(t.booking_date is None for t in store.list_tents())

    def test_is_idempotent(self):
        store = _store()
        store.update_tent(
            "T1", status="booked", client_name="Alice", price=50, usage="Food stand"
        )
        store.initialize()
        assert len(store.list_tents()) == 56
        assert store.get_tent("T1").client_name == "Alice"

    def test_insertion_order(self):
        codes = [t.code for t in _store().list_available()]
        assert codes[:3] == ["T1", "T2", "T3"]
        assert codes[9] == "B1"
        assert codes[-1] == "R19"

    def test_get_tent_unknown(self):
        assert _store().get_tent("Z9") is None

    def test_layout_groups(self):
        layout = _store().layout()
        assert [len(layout[g]) for g in TentGroup] == [9, 9, 19, 19]
        left = [t.code for t in layout[TentGroup.LEFT]]
        assert left.index("L2") < left.index("L10")

    def test_reset_clears(self):
        store = _store()
        store.reset()
        assert store.list_tents() == []


# ── update_tent ──────────────────────────────────────────────

class TestUpdateTent:
    def test_end_to_end_booking_by_update(self):
        store = _store()
        store.update_tent(
            "T1",
            status="booked",
            client_name="Alice",
            price=50,
            usage="Food stand",
            zones=["A"],
        )
        tent = store.get_tent("T1")
        assert tent.status is TentStatus.BOOKED
        assert tent.client_name == "Alice"
        assert tent.price == Decimal("50")
        assert tent.zones == ("A",)
        available = store.list_available()
        assert len(available) == 55
        assert "T1" not in [t.code for t in available]

    def test_partial_merge_keeps_other_fields(self):
        store = _store()
        store.update_tent(
            "B2", status="reserved", client_name="Bob", price="20", usage="Parking"
        )
        store.update_tent("B2", notes="late arrival")
        tent = store.get_tent("B2")
        assert tent.client_name == "Bob"
        assert tent.notes == "late arrival"

    def test_unknown_code_is_silent_noop(self):
        store = _store()
        store.update_tent("Z99", status="booked")
        assert len(store.list_available()) == 56

    def test_back_to_available_clears_booking(self):
        store = _store()
        store.update_tent(
            "T1", status="booked", client_name="Alice", price=50, usage="Food stand"
        )
        store.update_tent("T1", status="available")
        tent = store.get_tent("T1")
        assert tent.status is TentStatus.AVAILABLE
        assert tent.client_name is None
        assert tent.price is None
        assert tent.usage is None

    def test_booked_without_details_rejected(self):
        store = _store()
        with pytest.raises(ValueError, match="client_name, price, usage"):
            store.update_tent("T1", status="booked")
        assert store.get_tent("T1").status is TentStatus.AVAILABLE

    def test_details_on_available_tent_rejected(self):
        store = _store()
        with pytest.raises(ValueError):
            store.update_tent("T1", client_name="Alice")
        assert store.get_tent("T1").client_name is None

    def test_unknown_field_rejected(self):
        with pytest.raises(ValueError):
            _store().update_tent("T1", colour="red")

    def test_code_is_immutable(self):
        with pytest.raises(ValueError):
            _store().update_tent("T1", code="T2")


# ── transition ───────────────────────────────────────────────

class TestTransition:
    def test_book_available_tent(self):
        store = _store()
        tent = store.transition(
            "L10", expected=TentStatus.AVAILABLE, status=TentStatus.BOOKED, booking=_booking()
        )
        assert tent.status is TentStatus.BOOKED
        assert tent.client_name == "Alice"
        assert tent.services == ServiceFlags(electricity=True)
        assert store.get_tent("L10") == tent

    def test_second_booking_rejected(self):
        store = _store()
        store.transition(
            "T3", expected=TentStatus.AVAILABLE, status=TentStatus.BOOKED, booking=_booking()
        )
        with pytest.raises(TentUnavailable) as exc_info:
            store.transition(
                "T3",
                expected=TentStatus.AVAILABLE,
                status=TentStatus.BOOKED,
                booking=_booking(client_name="Mallory"),
            )
        assert exc_info.value.details["status"] == "booked"
        assert store.get_tent("T3").client_name == "Alice"

    def test_unknown_tent(self):
        with pytest.raises(TentNotFound):
            _store().transition(
                "Z1", expected=TentStatus.AVAILABLE, status=TentStatus.BOOKED, booking=_booking()
            )

    def test_booking_required_for_non_available_target(self):
        with pytest.raises(ValueError):
            _store().transition("T1", expected=TentStatus.AVAILABLE, status=TentStatus.BOOKED)

    def test_release_clears_booking(self):
        store = _store()
        store.transition(
            "R5", expected=TentStatus.AVAILABLE, status=TentStatus.BOOKED, booking=_booking()
        )
        tent = store.release("R5")
        assert tent.status is TentStatus.AVAILABLE
        assert tent.client_name is None
        assert tent.zones is None
        assert len(store.list_available()) == 56

    def test_release_available_is_noop(self):
        store = _store()
        assert store.release("T1").status is TentStatus.AVAILABLE

    def test_release_unknown(self):
        with pytest.raises(TentNotFound):
            _store().release("Q1")

    def test_concurrent_bookings_only_one_wins(self):
        store = _store()
        barrier = threading.Barrier(8)
        outcomes = []
        lock = threading.Lock()

        def attempt(n):
            barrier.wait()
            try:
                store.transition(
                    "B5",
                    expected=TentStatus.AVAILABLE,
                    status=TentStatus.BOOKED,
                    booking=_booking(client_name=f"client-{n}"),
                )
                result = "won"
            except TentUnavailable:
                result = "lost"
            with lock:
                outcomes.append(result)

        threads = [threading.Thread(target=attempt, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert outcomes.count("won") == 1
        assert outcomes.count("lost") == 7


# ── receipt ledger ───────────────────────────────────────────

class TestReceiptLedger:
    def _receipt(self, receipt_id="R100"):
        return Receipt.from_booking(
            receipt_id=receipt_id,
            tent_code="T3",
            booking=_booking(receipt_id=receipt_id),
            generated_by="555-0100",
        )

    def test_add_and_get(self):
        store = _store()
        receipt = self._receipt()
        store.add_receipt(receipt)
        assert store.get_receipt("R100") is receipt
        assert store.list_receipts() == [receipt]

    def test_duplicate_id_rejected(self):
        store = _store()
        store.add_receipt(self._receipt())
        with pytest.raises(ValueError):
            store.add_receipt(self._receipt())

    def test_receipt_isolated_from_later_tent_changes(self):
        store = _store()
        booking = _booking(notes="original")
        store.transition(
            "T3", expected=TentStatus.AVAILABLE, status=TentStatus.BOOKED, booking=booking
        )
        receipt = Receipt.from_booking(
            receipt_id="R1", tent_code="T3", booking=booking, generated_by="555-0100"
        )
        store.add_receipt(receipt)
        store.update_tent("T3", notes="changed later", zones=["F"])
        assert store.get_receipt("R1").notes == "original"
        assert store.get_receipt("R1").zones == ("A", "C")
