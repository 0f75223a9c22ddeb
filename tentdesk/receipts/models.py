"""
TentDesk Receipts - Immutable Receipt Record
============================================
A Receipt is a frozen snapshot of one booking submission. Collections are
tuples and nested values are frozen, so later changes to the originating
tent can never reach an issued receipt.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from tentdesk.inventory.models import BookingDetails, ServiceFlags
from tentdesk.time.clock import Clock, SystemClock, epoch_millis


@dataclass(frozen=True)
class Receipt:
    id: str
    tent_code: str
    client_name: str
    phone: str
    date: str
    price: Decimal
    usage: str
    services: ServiceFlags
    zones: Tuple[str, ...]
    qty_car_flags: int
    qty_banner_flags: int
    notes: str
    generated_by: str

    def __post_init__(self):
        if not self.id or not isinstance(self.id, str):
            raise ValueError("id must be a non-empty string.")
        if not self.tent_code or not isinstance(self.tent_code, str):
            raise ValueError("tent_code must be a non-empty string.")
        if not isinstance(self.zones, tuple):
            raise ValueError("zones must be a tuple.")
        if not isinstance(self.services, ServiceFlags):
            raise ValueError("services must be ServiceFlags.")

    @classmethod
    def from_booking(
        cls,
        *,
        receipt_id: str,
        tent_code: str,
        booking: BookingDetails,
        generated_by: str,
    ) -> "Receipt":
        return cls(
            id=receipt_id,
            tent_code=tent_code,
            client_name=booking.client_name,
            phone=booking.phone,
            date=booking.booking_date,
            price=booking.price,
            usage=booking.usage,
            services=booking.services,
            zones=tuple(booking.zones),
            qty_car_flags=booking.qty_car_flags,
            qty_banner_flags=booking.qty_banner_flags,
            notes=booking.notes,
            generated_by=generated_by,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "tent_code": self.tent_code,
            "client_name": self.client_name,
            "phone": self.phone,
            "date": self.date,
            "price": str(self.price),
            "usage": self.usage,
            "services": self.services.to_dict(),
            "zones": list(self.zones),
            "qty_car_flags": self.qty_car_flags,
            "qty_banner_flags": self.qty_banner_flags,
            "notes": self.notes,
            "generated_by": self.generated_by,
        }


class ReceiptIdFactory:
    """
    Time-based receipt ids: R<epoch millis>.

    Two ids requested within the same millisecond are bumped forward so
    ids stay unique and increasing within the process.
    """

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock = clock or SystemClock()
        self._lock = threading.Lock()
        self._last = 0

    def new_id(self) -> str:
        with self._lock:
            millis = max(epoch_millis(self._clock.now_utc()), self._last + 1)
            self._last = millis
            return f"R{millis}"
