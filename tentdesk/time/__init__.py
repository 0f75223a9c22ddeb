"""
TentDesk Time — Public API
============================
"""

from tentdesk.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    epoch_millis,
    is_past,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "epoch_millis",
    "is_past",
]
