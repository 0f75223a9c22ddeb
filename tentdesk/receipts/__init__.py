"""
TentDesk Receipts - Public API
==============================
Receipt snapshots, render plans and document composition.
"""

from tentdesk.receipts.composer import (
    MEDIA_TYPES,
    ReceiptComposer,
    ReceiptDocument,
    receipt_filename,
)
from tentdesk.receipts.hashing import canonical_json, compute_plan_hash, verify_plan_hash
from tentdesk.receipts.models import Receipt, ReceiptIdFactory
from tentdesk.receipts.plan import build_receipt_plan, section_kinds

__all__ = [
    "MEDIA_TYPES",
    "Receipt",
    "ReceiptComposer",
    "ReceiptDocument",
    "ReceiptIdFactory",
    "build_receipt_plan",
    "canonical_json",
    "compute_plan_hash",
    "receipt_filename",
    "section_kinds",
    "verify_plan_hash",
]
