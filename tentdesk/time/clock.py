"""
TentDesk Time — Explicit Clock Protocol
=========================================
No datetime.now() inside domain logic. Components that need wall-clock
time (OTP expiry, receipt ids) receive a Clock at construction.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


# ══════════════════════════════════════════════════════════════
# CLOCK PROTOCOL
# ══════════════════════════════════════════════════════════════

class Clock(Protocol):
    """Injectable time source."""

    def now_utc(self) -> datetime:
        """Return current UTC time."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IMPLEMENTATIONS
# ══════════════════════════════════════════════════════════════

class SystemClock:
    """Production clock: real system time."""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Test clock. Returns a fixed timestamp until advanced.

    Usage:
        clock = FixedClock(datetime(2025, 1, 1, tzinfo=timezone.utc))
        clock.advance(121)
    """

    def __init__(self, fixed_dt: datetime) -> None:
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._fixed_dt = fixed_dt

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, seconds: float) -> None:
        self._fixed_dt = self._fixed_dt + timedelta(seconds=seconds)


# ══════════════════════════════════════════════════════════════
# PURE TEMPORAL FUNCTIONS
# ══════════════════════════════════════════════════════════════

def is_past(deadline: datetime, now: datetime) -> bool:
    """True once `now` is strictly after `deadline` (the deadline itself is still valid)."""
    return now > deadline


def epoch_millis(dt: datetime) -> int:
    return int(dt.timestamp() * 1000)
