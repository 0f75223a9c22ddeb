"""
TentDesk HTTP API - Response Envelope
=====================================
Stable transport shapes for success payloads and domain errors.

    {"ok": true,  "data": ...}
    {"ok": false, "error": {"code": ..., "message": ..., "details": {...}}}
"""

from __future__ import annotations

from typing import Any, Optional

from tentdesk.errors import DeskError, ErrorCode

HTTP_STATUS_BY_ERROR_CODE: dict[str, int] = {
    ErrorCode.OTP_SEND_FAILED: 400,
    ErrorCode.OTP_EXPIRED: 400,
    ErrorCode.OTP_MISMATCH: 400,
    ErrorCode.OTP_NOT_REQUESTED: 400,
    ErrorCode.NOT_AUTHENTICATED: 401,
    ErrorCode.TENT_NOT_FOUND: 404,
    ErrorCode.RECEIPT_NOT_FOUND: 404,
    ErrorCode.UNKNOWN_MESSAGE_KEY: 404,
    ErrorCode.TENT_UNAVAILABLE: 409,
    ErrorCode.BOOKING_INVALID: 400,
    ErrorCode.DOCUMENT_GENERATION_FAILED: 502,
}


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return {
        "ok": False,
        "error": {
            "code": code,
            "message": message,
            "details": dict(details or {}),
        },
    }


def success_response(data: Any) -> dict[str, Any]:
    return {"ok": True, "data": data}


def status_for(error: DeskError) -> int:
    return HTTP_STATUS_BY_ERROR_CODE.get(error.code, 400)
