"""
TentDesk Inventory - Public API
===============================
"""

from tentdesk.inventory.layout import TOTAL_TENTS, build_initial_tents, tent_codes_for
from tentdesk.inventory.models import (
    ZONE_LABELS,
    BookingDetails,
    ServiceFlags,
    Tent,
    TentGroup,
    TentStatus,
    normalize_zones,
    parse_tent_code,
    tent_sort_key,
)
from tentdesk.inventory.store import InventoryStore

__all__ = [
    "TOTAL_TENTS",
    "build_initial_tents",
    "tent_codes_for",
    "ZONE_LABELS",
    "BookingDetails",
    "ServiceFlags",
    "Tent",
    "TentGroup",
    "TentStatus",
    "normalize_zones",
    "parse_tent_code",
    "tent_sort_key",
    "InventoryStore",
]
