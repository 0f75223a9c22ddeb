"""
TentDesk Inventory - Tent Model
===============================
Immutable tent records. The store swaps whole records on every change,
so a Tent handed to a caller never changes underneath it.

RULES:
- Booking detail fields are all empty while AVAILABLE.
- They are populated together by one transition (BOOKED / RESERVED).
- code is immutable after creation.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Tuple

ZONE_LABELS: Tuple[str, ...] = ("A", "B", "C", "D", "E", "F")


class TentStatus(Enum):
    AVAILABLE = "available"
    BOOKED = "booked"
    RESERVED = "reserved"


class TentGroup(Enum):
    """Positional groups around the central track: prefix and size."""
    TOP = ("T", 9)
    BOTTOM = ("B", 9)
    LEFT = ("L", 19)
    RIGHT = ("R", 19)

    @property
    def prefix(self) -> str:
        return self.value[0]

    @property
    def size(self) -> int:
        return self.value[1]

    @classmethod
    def from_prefix(cls, prefix: str) -> "TentGroup":
        for group in cls:
            if group.prefix == prefix:
                return group
        raise ValueError(f"Unknown tent group prefix '{prefix}'.")


def parse_tent_code(code: str) -> tuple[TentGroup, int]:
    """Split a tent code into (group, one-based index)."""
    if not isinstance(code, str) or len(code) < 2:
        raise ValueError(f"Invalid tent code '{code}'.")
    group = TentGroup.from_prefix(code[0])
    digits = code[1:]
    if not digits.isdigit():
        raise ValueError(f"Invalid tent code '{code}'.")
    index = int(digits)
    if not 1 <= index <= group.size or digits != str(index):
        raise ValueError(f"Invalid tent code '{code}'.")
    return group, index


def tent_sort_key(code: str) -> tuple[int, int]:
    """Display order: group order, then numeric index (L2 before L10)."""
    group, index = parse_tent_code(code)
    return list(TentGroup).index(group), index


def normalize_zones(zones: Iterable[str]) -> Tuple[str, ...]:
    """Deduplicate and order zone labels; reject labels outside A-F."""
    if isinstance(zones, str):
        raise ValueError("zones must be a list of zone labels.")
    selected = set()
    for zone in zones:
        label = str(zone).strip().upper()
        if label not in ZONE_LABELS:
            raise ValueError(f"Unknown zone '{zone}'.")
        selected.add(label)
    return tuple(label for label in ZONE_LABELS if label in selected)


@dataclass(frozen=True)
class ServiceFlags:
    electricity: bool = False
    chairs: bool = False
    table: bool = False

    def any(self) -> bool:
        return self.electricity or self.chairs or self.table

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class BookingDetails:
    """All booking fields of a tent, set as one unit."""
    client_name: str
    phone: str
    booking_date: str
    price: Decimal
    usage: str
    services: ServiceFlags = ServiceFlags()
    zones: Tuple[str, ...] = ()
    qty_car_flags: int = 0
    qty_banner_flags: int = 0
    notes: str = ""
    receipt_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.price, Decimal):
            raise ValueError("price must be Decimal.")
        if self.price < 0:
            raise ValueError("price cannot be negative.")
        if self.qty_car_flags < 0 or self.qty_banner_flags < 0:
            raise ValueError("flag quantities cannot be negative.")
        if not isinstance(self.zones, tuple):
            raise ValueError("zones must be a tuple.")


BOOKING_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(BookingDetails))


@dataclass(frozen=True)
class Tent:
    code: str
    status: TentStatus = TentStatus.AVAILABLE
    client_name: Optional[str] = None
    phone: Optional[str] = None
    booking_date: Optional[str] = None
    price: Optional[Decimal] = None
    usage: Optional[str] = None
    services: Optional[ServiceFlags] = None
    zones: Optional[Tuple[str, ...]] = None
    qty_car_flags: Optional[int] = None
    qty_banner_flags: Optional[int] = None
    notes: Optional[str] = None
    receipt_id: Optional[str] = None

    @property
    def group(self) -> TentGroup:
        return parse_tent_code(self.code)[0]

    @property
    def index(self) -> int:
        return parse_tent_code(self.code)[1]

    @property
    def is_available(self) -> bool:
        return self.status is TentStatus.AVAILABLE

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "status": self.status.value,
            "client_name": self.client_name,
            "phone": self.phone,
            "booking_date": self.booking_date,
            "price": None if self.price is None else str(self.price),
            "usage": self.usage,
            "services": None if self.services is None else self.services.to_dict(),
            "zones": None if self.zones is None else list(self.zones),
            "qty_car_flags": self.qty_car_flags,
            "qty_banner_flags": self.qty_banner_flags,
            "notes": self.notes,
            "receipt_id": self.receipt_id,
        }


TENT_FIELDS: Tuple[str, ...] = tuple(f.name for f in fields(Tent))
