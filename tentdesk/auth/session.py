"""
TentDesk Auth - Session Authenticator
=====================================
One-time-code login for a single operator.

State machine:
    Unauthenticated --request_code--> CodeSent
    CodeSent --verify_code(match, not expired)--> Authenticated
    CodeSent --verify_code(mismatch)--> CodeSent
    CodeSent --verify_code(after expiry)--> Unauthenticated
    Authenticated --logout--> Unauthenticated
    Authenticated --request_code--> rejected (OtpSendFailed)

Expiry is detected lazily on the next verification attempt. There are no
timers.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from tentdesk.auth.otp import (
    CodeChannel,
    CodeDisclosure,
    CodeGenerator,
    OnScreenCodeChannel,
    generate_numeric_code,
)
from tentdesk.errors import (
    NotAuthenticated,
    OtpExpired,
    OtpMismatch,
    OtpNotRequested,
    OtpSendFailed,
)
from tentdesk.time.clock import Clock, SystemClock, is_past

logger = logging.getLogger("tentdesk.auth")

DEFAULT_OTP_TTL_SECONDS = 120
DEFAULT_OTP_LENGTH = 6


@dataclass(frozen=True)
class Session:
    """Read-only view of the authenticator state."""
    phone_number: Optional[str]
    code_sent: bool
    code_expiry: Optional[datetime]
    authenticated: bool

    def to_dict(self) -> dict:
        return {
            "phone_number": self.phone_number,
            "code_sent": self.code_sent,
            "code_expiry": (
                None if self.code_expiry is None else self.code_expiry.isoformat()
            ),
            "authenticated": self.authenticated,
        }


class SessionAuthenticator:
    def __init__(
        self,
        *,
        clock: Clock | None = None,
        channel: CodeChannel | None = None,
        code_generator: CodeGenerator = generate_numeric_code,
        ttl_seconds: int = DEFAULT_OTP_TTL_SECONDS,
        code_length: int = DEFAULT_OTP_LENGTH,
    ) -> None:
        if ttl_seconds < 1:
            raise ValueError("ttl_seconds must be >= 1.")
        self._clock = clock or SystemClock()
        self._channel = channel if channel is not None else OnScreenCodeChannel()
        self._code_generator = code_generator
        self._ttl = timedelta(seconds=ttl_seconds)
        self._code_length = code_length
        self._lock = threading.Lock()

        self._pending_phone: Optional[str] = None
        self._operator_phone: Optional[str] = None    # set only by a verified code
        self._pending_code: Optional[str] = None
        self._code_expiry: Optional[datetime] = None
        self._code_sent = False
        self._authenticated = False

    # ── queries ───────────────────────────────────────────────

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    @property
    def phone_number(self) -> Optional[str]:
        """The verified operator phone, else the phone awaiting a code."""
        with self._lock:
            return self._operator_phone or self._pending_phone

    @property
    def channel(self) -> CodeChannel:
        return self._channel

    def snapshot(self) -> Session:
        with self._lock:
            return Session(
                phone_number=self._operator_phone or self._pending_phone,
                code_sent=self._code_sent,
                code_expiry=self._code_expiry,
                authenticated=self._authenticated,
            )

    def require_authenticated(self) -> str:
        """Return the operator phone number, or raise NotAuthenticated."""
        with self._lock:
            if not self._authenticated or self._operator_phone is None:
                raise NotAuthenticated()
            return self._operator_phone

    # ── transitions ───────────────────────────────────────────

    def request_code(self, phone: str) -> bool:
        self.issue_code(phone)
        return True

    def issue_code(self, phone: str) -> CodeDisclosure:
        """
        Generate and deliver a code for `phone`; return what was delivered.

        Only valid while signed out. A signed-in operator must log out
        before a code for another phone can be requested.
        """
        if not isinstance(phone, str) or not phone.strip():
            raise OtpSendFailed("Phone number is required.")
        phone = phone.strip()
        if self.is_authenticated:
            raise OtpSendFailed("Already signed in, log out first.")

        code = self._code_generator(self._code_length)
        if not isinstance(code, str) or len(code) != self._code_length or not code.isdigit():
            raise OtpSendFailed("Generated code is malformed.")
        expiry = self._clock.now_utc() + self._ttl
        disclosure = CodeDisclosure(phone_number=phone, code=code, expires_at=expiry)

        try:
            self._channel.deliver(disclosure)
        except Exception as exc:
            logger.warning(f"OTP delivery to {phone} failed: {exc}")
            raise OtpSendFailed() from exc

        with self._lock:
            if self._authenticated:
                raise OtpSendFailed("Already signed in, log out first.")
            self._pending_phone = phone
            self._pending_code = code
            self._code_expiry = expiry
            self._code_sent = True
        logger.info(f"OTP issued for {phone}, expires {expiry.isoformat()}")
        return disclosure

    def verify_code(self, submitted: str) -> bool:
        with self._lock:
            if self._pending_code is None or self._code_expiry is None:
                raise OtpNotRequested()

            if is_past(self._code_expiry, self._clock.now_utc()):
                self._clear_pending()
                logger.warning(f"Expired OTP submitted for {self._pending_phone}")
                raise OtpExpired()

            if submitted != self._pending_code:
                logger.warning(f"Invalid OTP submitted for {self._pending_phone}")
                raise OtpMismatch()

            self._operator_phone = self._pending_phone
            self._authenticated = True
            self._clear_pending()
            logger.info(f"Operator {self._operator_phone} authenticated")
            return True

    def logout(self) -> None:
        with self._lock:
            phone = self._operator_phone or self._pending_phone
            self._operator_phone = None
            self._pending_phone = None
            self._clear_pending()
            self._authenticated = False
        logger.info(f"Operator {phone} logged out")

    def _clear_pending(self) -> None:
        self._pending_code = None
        self._code_expiry = None
        self._code_sent = False
