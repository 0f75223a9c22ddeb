"""
TentDesk Inventory - Physical Layout
====================================
Two short rows (top, bottom) and two long rows (left, right) around a
central non-bookable track. 9 + 9 + 19 + 19 = 56 tents.
"""

from __future__ import annotations

from typing import List

from tentdesk.inventory.models import Tent, TentGroup

TOTAL_TENTS = sum(group.size for group in TentGroup)


def tent_codes_for(group: TentGroup) -> List[str]:
    return [f"{group.prefix}{index}" for index in range(1, group.size + 1)]


def build_initial_tents() -> List[Tent]:
    """All tents, AVAILABLE, in layout order (top, bottom, left, right)."""
    return [
        Tent(code=code)
        for group in TentGroup
        for code in tent_codes_for(group)
    ]
