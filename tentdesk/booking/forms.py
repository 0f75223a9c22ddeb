"""
TentDesk Booking - Form Submission
==================================
The full set of booking fields as submitted by the operator.

Required: tent code, client name, phone, booking date, non-negative price,
usage purpose. All other fields default to empty. Every problem found is
reported at once in BookingInvalid.details["fields"].
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping, Optional, Tuple

from tentdesk.errors import BookingInvalid
from tentdesk.inventory.models import BookingDetails, ServiceFlags, normalize_zones

REQUIRED_TEXT_FIELDS: Tuple[str, ...] = (
    "tent_code",
    "client_name",
    "phone",
    "booking_date",
    "usage",
)

_SERVICE_KEYS = ("electricity", "chairs", "table")
_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)


def _parse_price(value: Any, errors: Dict[str, str]) -> Decimal:
    if value is None or (isinstance(value, str) and not value.strip()):
        errors["price"] = "This field is required."
        return Decimal("0")
    if isinstance(value, bool):
        errors["price"] = "Must be a number."
        return Decimal("0")
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value).strip())
    except InvalidOperation:
        errors["price"] = "Must be a number."
        return Decimal("0")
    if not price.is_finite():
        errors["price"] = "Must be a number."
        return Decimal("0")
    if price < 0:
        errors["price"] = "Must be zero or more."
        return Decimal("0")
    return price


def _parse_quantity(name: str, value: Any, errors: Dict[str, str]) -> int:
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    if isinstance(value, bool):
        errors[name] = "Must be a whole number."
        return 0
    try:
        quantity = int(str(value).strip())
    except ValueError:
        errors[name] = "Must be a whole number."
        return 0
    if quantity < 0:
        errors[name] = "Must be zero or more."
        return 0
    return quantity


def _parse_zones(value: Any, errors: Dict[str, str]) -> Tuple[str, ...]:
    if value is None or value == "":
        return ()
    try:
        return normalize_zones(value)
    except (TypeError, ValueError) as exc:
        errors["zones"] = str(exc)
        return ()


@dataclass(frozen=True)
class BookingForm:
    tent_code: str
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

    def __post_init__(self):
        errors: Dict[str, str] = {}
        for name in REQUIRED_TEXT_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                errors[name] = "This field is required."
        if "booking_date" not in errors:
            try:
                date.fromisoformat(self.booking_date)
            except ValueError:
                errors["booking_date"] = "Must be a date (YYYY-MM-DD)."
        if not isinstance(self.price, Decimal) or not self.price.is_finite():
            errors["price"] = "Must be a number."
        elif self.price < 0:
            errors["price"] = "Must be zero or more."
        for name in ("qty_car_flags", "qty_banner_flags"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                errors[name] = "Must be zero or more."
        if errors:
            raise BookingInvalid(errors)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BookingForm":
        """
        Build a form from a loosely typed payload (JSON body, form post).

        Services may be given as a nested "services" mapping or as top
        level electricity / chairs / table flags.
        """
        if not isinstance(data, Mapping):
            raise BookingInvalid({"__all__": "Booking payload must be an object."})

        errors: Dict[str, str] = {}
        price = _parse_price(data.get("price"), errors)
        zones = _parse_zones(data.get("zones"), errors)
        qty_car_flags = _parse_quantity("qty_car_flags", data.get("qty_car_flags"), errors)
        qty_banner_flags = _parse_quantity(
            "qty_banner_flags", data.get("qty_banner_flags"), errors
        )

        raw_services = data.get("services")
        source = raw_services if isinstance(raw_services, Mapping) else data
        services = ServiceFlags(**{key: _flag(source.get(key)) for key in _SERVICE_KEYS})

        text = {name: _text(data.get(name)) for name in REQUIRED_TEXT_FIELDS}
        for name, value in text.items():
            if not value:
                errors[name] = "This field is required."
        if errors:
            raise BookingInvalid(errors)

        return cls(
            tent_code=text["tent_code"].upper(),
            client_name=text["client_name"],
            phone=text["phone"],
            booking_date=text["booking_date"],
            price=price,
            usage=text["usage"],
            services=services,
            zones=zones,
            qty_car_flags=qty_car_flags,
            qty_banner_flags=qty_banner_flags,
            notes=_text(data.get("notes")),
        )

    def to_booking(self, receipt_id: Optional[str]) -> BookingDetails:
        return BookingDetails(
            client_name=self.client_name,
            phone=self.phone,
            booking_date=self.booking_date,
            price=self.price,
            usage=self.usage,
            services=self.services,
            zones=self.zones,
            qty_car_flags=self.qty_car_flags,
            qty_banner_flags=self.qty_banner_flags,
            notes=self.notes,
            receipt_id=receipt_id,
        )
