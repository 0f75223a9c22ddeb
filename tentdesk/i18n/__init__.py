"""
TentDesk i18n - Public API
==========================
"""

from tentdesk.i18n.messages import (
    Locale,
    MessageId,
    catalog,
    lookup,
    missing_messages,
    text_direction,
    translate,
)

__all__ = [
    "Locale",
    "MessageId",
    "catalog",
    "lookup",
    "missing_messages",
    "text_direction",
    "translate",
]
