"""
TentDesk Receipts - Render Plan Hash
====================================
Deterministic SHA-256 over a receipt render plan.

- Same render plan -> same hash, across processes and regenerations.
- Hash is computed over canonical JSON (sorted keys, no whitespace).
- This module only computes. It does not persist anything.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from decimal import Decimal
from typing import Any


def _canonical_value(value: Any) -> Any:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_canonical_value(item) for item in value]
    if isinstance(value, dict):
        return {str(k): _canonical_value(v) for k, v in sorted(value.items())}
    raise ValueError(f"Unsupported render plan value type: {type(value).__name__}")


def canonical_json(value: Any) -> str:
    """Canonical (sorted-keys, no-whitespace) JSON string."""
    return json.dumps(
        _canonical_value(value), separators=(",", ":"), ensure_ascii=True
    )


def compute_plan_hash(render_plan: dict) -> str:
    """Lowercase hex SHA-256 of the canonical render plan, 64 characters."""
    if not isinstance(render_plan, dict):
        raise ValueError("render_plan must be a dict.")
    return hashlib.sha256(canonical_json(render_plan).encode("utf-8")).hexdigest()


def verify_plan_hash(render_plan: dict, expected_hash: str) -> bool:
    if not isinstance(expected_hash, str) or len(expected_hash) != 64:
        return False
    return hmac.compare_digest(
        compute_plan_hash(render_plan), expected_hash.lower()
    )
