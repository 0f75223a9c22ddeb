"""
TentDesk Inventory - In-Memory Store
====================================
Owns the fixed tent collection and the ledger of issued receipts.
The store is the only mutator of tent state.

Mutation paths:
- update_tent:  partial merge, silent no-op for unknown codes. The merged
                record must still be all-empty (AVAILABLE) or carry the
                required booking fields; status AVAILABLE clears them.
- transition:   atomic compare-and-swap on status, used by the booking
                workflow so two operators can never book the same tent.
- release:      return a tent to AVAILABLE and clear its booking.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import replace
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from tentdesk.errors import TentNotFound, TentUnavailable
from tentdesk.inventory.layout import build_initial_tents
from tentdesk.inventory.models import (
    BOOKING_FIELDS,
    TENT_FIELDS,
    BookingDetails,
    ServiceFlags,
    Tent,
    TentGroup,
    TentStatus,
    normalize_zones,
    tent_sort_key,
)

if TYPE_CHECKING:
    from tentdesk.receipts.models import Receipt

logger = logging.getLogger("tentdesk.inventory")

_CLEARED_BOOKING = {name: None for name in BOOKING_FIELDS}
_REQUIRED_BOOKING_FIELDS = ("client_name", "price", "usage")


def _coerce_field(name: str, value: Any) -> Any:
    if value is None:
        return None
    if name == "status":
        return value if isinstance(value, TentStatus) else TentStatus(str(value))
    if name == "price":
        return value if isinstance(value, Decimal) else Decimal(str(value))
    if name == "services":
        if isinstance(value, ServiceFlags):
            return value
        return ServiceFlags(**dict(value))
    if name == "zones":
        return normalize_zones(value)
    return value


class InventoryStore:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tents: Dict[str, Tent] = {}    # insertion order = layout order
        self._receipts: Dict[str, Receipt] = {}

    # ── lifecycle ─────────────────────────────────────────────

    def initialize(self) -> None:
        """Populate the fixed collection once. Later calls are no-ops."""
        with self._lock:
            if self._tents:
                return
            for tent in build_initial_tents():
                self._tents[tent.code] = tent
            logger.info(f"Inventory initialized with {len(self._tents)} tents")

    def reset(self) -> None:
        with self._lock:
            self._tents.clear()
            self._receipts.clear()

    # ── reads ─────────────────────────────────────────────────

    def list_tents(self) -> List[Tent]:
        with self._lock:
            return list(self._tents.values())

    def list_available(self) -> List[Tent]:
        with self._lock:
            return [t for t in self._tents.values() if t.status is TentStatus.AVAILABLE]

    def get_tent(self, code: str) -> Optional[Tent]:
        with self._lock:
            return self._tents.get(code)

    def layout(self) -> Dict[TentGroup, List[Tent]]:
        """Tents per positional group, numerically ordered within a group."""
        grouped: Dict[TentGroup, List[Tent]] = {group: [] for group in TentGroup}
        for tent in self.list_tents():
            grouped[tent.group].append(tent)
        for tents in grouped.values():
            tents.sort(key=lambda t: tent_sort_key(t.code))
        return grouped

    def count_by_status(self) -> Dict[TentStatus, int]:
        counts = {status: 0 for status in TentStatus}
        for tent in self.list_tents():
            counts[tent.status] += 1
        return counts

    # ── writes ────────────────────────────────────────────────

    def update_tent(self, code: str, **fields: Any) -> None:
        """Merge `fields` into the tent record. Unknown codes are ignored."""
        bad = sorted(set(fields) - set(TENT_FIELDS))
        if bad:
            raise ValueError(f"Unknown tent field(s): {', '.join(bad)}.")
        if "code" in fields:
            raise ValueError("Tent code is immutable.")

        with self._lock:
            current = self._tents.get(code)
            if current is None:
                return
            updates = {name: _coerce_field(name, value) for name, value in fields.items()}
            updated = replace(current, **updates)
            if updated.status is TentStatus.AVAILABLE:
                if "status" in updates:
                    updated = replace(updated, **_CLEARED_BOOKING)
                elif any(getattr(updated, name) is not None for name in BOOKING_FIELDS):
                    raise ValueError(
                        f"Tent {code} is available; booking fields need a "
                        f"booked or reserved status."
                    )
            else:
                missing = [
                    name for name in _REQUIRED_BOOKING_FIELDS
                    if getattr(updated, name) is None
                ]
                if missing:
                    raise ValueError(
                        f"Tent {code} cannot be {updated.status.value} without "
                        f"{', '.join(missing)}."
                    )
            self._tents[code] = updated

    def transition(
        self,
        code: str,
        *,
        expected: TentStatus,
        status: TentStatus,
        booking: Optional[BookingDetails] = None,
    ) -> Tent:
        """
        Atomically move a tent from `expected` to `status`.

        Moving to AVAILABLE clears all booking fields; any other target
        requires a complete BookingDetails, applied in the same step.
        """
        if status is not TentStatus.AVAILABLE and booking is None:
            raise ValueError(f"Transition to {status.value} requires booking details.")

        with self._lock:
            current = self._tents.get(code)
            if current is None:
                raise TentNotFound(code)
            if current.status is not expected:
                logger.warning(
                    f"Tent {code} transition {expected.value}->{status.value} "
                    f"rejected: status is {current.status.value}"
                )
                raise TentUnavailable(code, current.status.value)

            if status is TentStatus.AVAILABLE:
                updated = replace(current, status=status, **_CLEARED_BOOKING)
            else:
                updated = replace(
                    current,
                    status=status,
                    **{name: getattr(booking, name) for name in BOOKING_FIELDS},
                )
            self._tents[code] = updated

        logger.info(f"Tent {code}: {expected.value} -> {status.value}")
        return updated

    def release(self, code: str) -> Tent:
        """Return a booked or reserved tent to AVAILABLE."""
        current = self.get_tent(code)
        if current is None:
            raise TentNotFound(code)
        if current.status is TentStatus.AVAILABLE:
            return current
        return self.transition(
            code, expected=current.status, status=TentStatus.AVAILABLE
        )

    # ── receipt ledger ────────────────────────────────────────

    def add_receipt(self, receipt: Receipt) -> None:
        with self._lock:
            if receipt.id in self._receipts:
                raise ValueError(f"Receipt '{receipt.id}' already recorded.")
            self._receipts[receipt.id] = receipt

    def list_receipts(self) -> List[Receipt]:
        with self._lock:
            return list(self._receipts.values())

    def get_receipt(self, receipt_id: str) -> Optional[Receipt]:
        with self._lock:
            return self._receipts.get(receipt_id)
