"""
TentDesk - Domain Errors
========================
Stable error codes and user-safe messages for every per-operation failure.

No error here is fatal to the process. Each one leaves the owning state
object in a well-defined state so the operator can retry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


class ErrorCode:
    """
    Known error codes.

    Convention: SCREAMING_SNAKE_CASE.
    """

    # ── Authentication ────────────────────────────────────────
    OTP_SEND_FAILED = "OTP_SEND_FAILED"
    OTP_EXPIRED = "OTP_EXPIRED"
    OTP_MISMATCH = "OTP_MISMATCH"
    OTP_NOT_REQUESTED = "OTP_NOT_REQUESTED"
    NOT_AUTHENTICATED = "NOT_AUTHENTICATED"

    # ── Inventory ─────────────────────────────────────────────
    TENT_NOT_FOUND = "TENT_NOT_FOUND"
    TENT_UNAVAILABLE = "TENT_UNAVAILABLE"
    RECEIPT_NOT_FOUND = "RECEIPT_NOT_FOUND"

    # ── Booking / documents ───────────────────────────────────
    BOOKING_INVALID = "BOOKING_INVALID"
    DOCUMENT_GENERATION_FAILED = "DOCUMENT_GENERATION_FAILED"

    # ── Messages ──────────────────────────────────────────────
    UNKNOWN_MESSAGE_KEY = "UNKNOWN_MESSAGE_KEY"


@dataclass(frozen=True, eq=False)
class DeskError(Exception):
    """Base domain error with code and user-safe message."""

    code: str
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


class OtpSendFailed(DeskError):
    """Raised when a code cannot be issued or delivered."""

    def __init__(self, message: str = "Could not send the one-time code.") -> None:
        super().__init__(code=ErrorCode.OTP_SEND_FAILED, message=message)


class OtpExpired(DeskError):
    """Raised when verification is attempted after the code expired."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.OTP_EXPIRED,
            message="One-time code expired, please request a new one.",
        )


class OtpMismatch(DeskError):
    """Raised when the submitted code does not match. Retry is permitted."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.OTP_MISMATCH,
            message="Invalid one-time code.",
        )


class OtpNotRequested(DeskError):
    """Raised when verification is attempted with no code pending."""

    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.OTP_NOT_REQUESTED,
            message="No one-time code is pending, please request one.",
        )


class NotAuthenticated(DeskError):
    def __init__(self) -> None:
        super().__init__(
            code=ErrorCode.NOT_AUTHENTICATED,
            message="Operator is not authenticated.",
        )


class TentNotFound(DeskError):
    def __init__(self, tent_code: str) -> None:
        super().__init__(
            code=ErrorCode.TENT_NOT_FOUND,
            message="Tent not found.",
            details={"tent_code": tent_code},
        )

    @property
    def tent_code(self) -> str:
        return self.details["tent_code"]


_UNAVAILABLE_MESSAGES = {
    "booked": "This tent is already booked.",
    "reserved": "This tent is held by a booking in progress.",
    "available": "This tent is not booked.",
}


class TentUnavailable(DeskError):
    """Raised when a tent is not in the status a transition expects."""

    def __init__(self, tent_code: str, status: str) -> None:
        super().__init__(
            code=ErrorCode.TENT_UNAVAILABLE,
            message=_UNAVAILABLE_MESSAGES.get(status, f"This tent is {status}."),
            details={"tent_code": tent_code, "status": status},
        )

    @property
    def tent_code(self) -> str:
        return self.details["tent_code"]


class ReceiptNotFound(DeskError):
    def __init__(self, receipt_id: str) -> None:
        super().__init__(
            code=ErrorCode.RECEIPT_NOT_FOUND,
            message="Receipt not found.",
            details={"receipt_id": receipt_id},
        )


class BookingInvalid(DeskError):
    """Raised when a submitted booking form fails validation."""

    def __init__(self, errors: Mapping[str, str]) -> None:
        super().__init__(
            code=ErrorCode.BOOKING_INVALID,
            message="Booking form is invalid.",
            details={"fields": dict(sorted(errors.items()))},
        )

    @property
    def field_errors(self) -> dict[str, str]:
        return dict(self.details["fields"])


class DocumentGenerationFailed(DeskError):
    def __init__(self, reason: str, *, receipt_id: str | None = None) -> None:
        super().__init__(
            code=ErrorCode.DOCUMENT_GENERATION_FAILED,
            message="Failed to generate receipt.",
            details={"reason": reason, "receipt_id": receipt_id},
        )


class UnknownMessageKey(DeskError):
    def __init__(self, key: str, locale: str) -> None:
        super().__init__(
            code=ErrorCode.UNKNOWN_MESSAGE_KEY,
            message=f"No message registered for '{key}'.",
            details={"key": key, "locale": locale},
        )
