"""
TentDesk - Runtime Settings
===========================
Frozen settings object handed to the core at wiring time.

Deployment values come from the Django settings module (TENTDESK dict);
the core never imports Django settings itself.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping

RECEIPT_FORMAT_HTML = "html"
RECEIPT_FORMAT_PDF = "pdf"

VALID_RECEIPT_FORMATS = frozenset({RECEIPT_FORMAT_HTML, RECEIPT_FORMAT_PDF})

_TRUE_STRINGS = frozenset({"1", "true", "yes", "on"})
_FALSE_STRINGS = frozenset({"0", "false", "no", "off", ""})


def _coerce_bool(value: Any, *, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in _TRUE_STRINGS:
            return True
        if lowered in _FALSE_STRINGS:
            return False
    raise ValueError(f"{field_name} must be a boolean.")


def _coerce_positive_int(value: Any, *, field_name: str) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be a positive integer.") from exc
    if number < 1:
        raise ValueError(f"{field_name} must be a positive integer.")
    return number


@dataclass(frozen=True)
class DeskSettings:
    event_name: str = "TRIPOLI KARTING RACE 2025"
    otp_ttl_seconds: int = 120
    otp_length: int = 6
    receipt_format: str = RECEIPT_FORMAT_HTML
    receipt_timeout_seconds: int = 10
    currency_symbol: str = "$"
    expose_otp: bool = True

    def __post_init__(self):
        if not isinstance(self.event_name, str) or not self.event_name.strip():
            raise ValueError("event_name must be a non-empty string.")
        if self.receipt_format not in VALID_RECEIPT_FORMATS:
            raise ValueError(
                f"receipt_format '{self.receipt_format}' not valid. "
                f"Must be one of: {sorted(VALID_RECEIPT_FORMATS)}"
            )
        if not isinstance(self.otp_length, int) or not 4 <= self.otp_length <= 10:
            raise ValueError("otp_length must be an int between 4 and 10.")

    @property
    def receipt_is_bilingual(self) -> bool:
        """PDF receipts use the built-in Latin-1 font; Arabic shows as '?'."""
        return self.receipt_format == RECEIPT_FORMAT_HTML

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any] | None) -> "DeskSettings":
        """Build settings from a loosely typed mapping (env strings allowed)."""
        if values is None:
            return cls()
        if not isinstance(values, Mapping):
            raise ValueError("TentDesk settings must be a mapping.")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown TentDesk setting(s): {', '.join(unknown)}.")

        kwargs: dict[str, Any] = {}
        for key, value in values.items():
            if key in ("otp_ttl_seconds", "otp_length", "receipt_timeout_seconds"):
                kwargs[key] = _coerce_positive_int(value, field_name=key)
            elif key == "expose_otp":
                kwargs[key] = _coerce_bool(value, field_name=key)
            elif key == "receipt_format":
                kwargs[key] = str(value).strip().lower()
            else:
                kwargs[key] = str(value)
        return cls(**kwargs)
