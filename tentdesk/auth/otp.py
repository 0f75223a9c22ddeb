"""
TentDesk Auth - One-Time Code Generation and Delivery
=====================================================
Codes are drawn uniformly from the n-digit range without a leading zero.

There is no SMS gateway. Delivery goes through a CodeChannel; the default
channel records the code so the presentation layer can show it on screen.
"""

from __future__ import annotations

import logging
import secrets
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional, Protocol

logger = logging.getLogger("tentdesk.auth")

CodeGenerator = Callable[[int], str]


def generate_numeric_code(length: int = 6) -> str:
    """Return a uniformly random `length`-digit code (first digit non-zero)."""
    if length < 1:
        raise ValueError("length must be >= 1.")
    low = 10 ** (length - 1)
    return str(low + secrets.randbelow(9 * low))


@dataclass(frozen=True)
class CodeDisclosure:
    """A code surfaced to the operator out of band."""
    phone_number: str
    code: str
    expires_at: datetime


class CodeChannel(Protocol):
    def deliver(self, disclosure: CodeDisclosure) -> None:
        """Deliver the code. Raise on failure."""
        ...  # pragma: no cover


class OnScreenCodeChannel:
    """
    Stand-in for SMS delivery: keeps the last disclosure for display.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._last: Optional[CodeDisclosure] = None

    def deliver(self, disclosure: CodeDisclosure) -> None:
        with self._lock:
            self._last = disclosure
        logger.info(
            f"OTP for {disclosure.phone_number}: {disclosure.code} "
            f"(expires {disclosure.expires_at.isoformat()})"
        )

    @property
    def last_disclosure(self) -> Optional[CodeDisclosure]:
        with self._lock:
            return self._last

    def clear(self) -> None:
        with self._lock:
            self._last = None
