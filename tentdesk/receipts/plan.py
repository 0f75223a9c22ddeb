"""
TentDesk Receipts - Render Plan
===============================
Turns a Receipt into a plain, JSON-safe render plan. The HTML and PDF
renderers both draw from the same plan, and the plan hash identifies a
document independently of its output format.

Plan shape:
    {
      "doc_type": "RECEIPT",
      "receipt_id": ..., "tent_code": ...,
      "banner": <event name>,
      "title": pair, "subtitle": pair,
      "sections": [section, ...],
      "footer": {"disclaimer": pair, "signatures": [pair, pair]},
    }

pair    = {"en": str, "ar": str}
row     = {"label": pair, "value": pair | None}
section = {"kind": SECTION_*, "heading": pair | None, ...}

RULES:
- Every label is carried in both languages regardless of UI locale.
- Services, flags and notes sections are omitted when empty.
- The zones section always carries six slots A-F.
"""

from __future__ import annotations

from typing import Any, Optional

from tentdesk.config import DeskSettings
from tentdesk.i18n.messages import Locale, MessageId, translate
from tentdesk.inventory.models import ZONE_LABELS
from tentdesk.receipts.models import Receipt

DOC_TYPE_RECEIPT = "RECEIPT"

SECTION_DETAILS = "details"
SECTION_SERVICES = "services"
SECTION_ZONES = "zones"
SECTION_FLAGS = "flags"
SECTION_NOTES = "notes"

VALID_SECTION_KINDS = frozenset({
    SECTION_DETAILS,
    SECTION_SERVICES,
    SECTION_ZONES,
    SECTION_FLAGS,
    SECTION_NOTES,
})

CHECK_MARK = "✓"
BOX_CHECKED = "☑"
BOX_EMPTY = "☐"


def _pair(message_id: MessageId) -> dict:
    return {
        "en": translate(message_id, Locale.EN),
        "ar": translate(message_id, Locale.AR),
    }


def _same(value: Any) -> dict:
    text = "" if value is None else str(value)
    return {"en": text, "ar": text}


def _row(message_id: MessageId, value: Optional[dict]) -> dict:
    return {"label": _pair(message_id), "value": value}


def _details_section(receipt: Receipt, settings: DeskSettings) -> dict:
    amount = f"{settings.currency_symbol}{receipt.price}"
    return {
        "kind": SECTION_DETAILS,
        "heading": None,
        "rows": [
            _row(MessageId.RECEIPT_DATE, _same(receipt.date)),
            _row(MessageId.RECEIPT_RECEIVED_FROM, _same(receipt.client_name)),
            _row(MessageId.RECEIPT_AMOUNT, _same(amount)),
            _row(MessageId.RECEIPT_FOR_SUBSCRIPTION, None),
            _row(MessageId.RECEIPT_TENT_NO, _same(receipt.tent_code)),
            _row(MessageId.RECEIPT_USAGE_PURPOSE, _same(receipt.usage)),
        ],
    }


def _services_section(receipt: Receipt) -> Optional[dict]:
    services = receipt.services
    if not services.any():
        return None
    items = []
    for enabled, message_id in (
        (services.electricity, MessageId.RECEIPT_ELECTRICITY),
        (services.chairs, MessageId.RECEIPT_CHAIRS),
        (services.table, MessageId.RECEIPT_TABLE),
    ):
        if enabled:
            label = _pair(message_id)
            items.append({
                "en": f"{CHECK_MARK} {label['en']}",
                "ar": f"{CHECK_MARK} {label['ar']}",
            })
    return {
        "kind": SECTION_SERVICES,
        "heading": _pair(MessageId.RECEIPT_ADDITIONAL_SERVICES),
        "items": items,
    }


def _zones_section(receipt: Receipt) -> dict:
    zone_word = _pair(MessageId.RECEIPT_ZONE)
    slots = [
        {
            "zone": zone,
            "selected": zone in receipt.zones,
            "mark": BOX_CHECKED if zone in receipt.zones else BOX_EMPTY,
            "caption": {
                "en": f"{zone_word['en']} {zone}",
                "ar": f"{zone_word['ar']} {zone}",
            },
        }
        for zone in ZONE_LABELS
    ]
    if receipt.zones:
        total = _same(", ".join(receipt.zones))
    else:
        total = _pair(MessageId.RECEIPT_NONE)
    return {
        "kind": SECTION_ZONES,
        "heading": _pair(MessageId.RECEIPT_ADVERTISEMENTS),
        "slots": slots,
        "total": _row(MessageId.RECEIPT_TOTAL_QTY, total),
    }


def _flags_section(receipt: Receipt) -> Optional[dict]:
    if receipt.qty_car_flags <= 0 and receipt.qty_banner_flags <= 0:
        return None
    return {
        "kind": SECTION_FLAGS,
        "heading": None,
        "rows": [
            _row(MessageId.RECEIPT_CAR_FLAGS, _same(receipt.qty_car_flags)),
            _row(MessageId.RECEIPT_BANNER_FLAGS, _same(receipt.qty_banner_flags)),
        ],
    }


def _notes_section(receipt: Receipt) -> Optional[dict]:
    if not receipt.notes or not receipt.notes.strip():
        return None
    return {
        "kind": SECTION_NOTES,
        "heading": None,
        "rows": [_row(MessageId.RECEIPT_NOTES, _same(receipt.notes))],
    }


def build_receipt_plan(receipt: Receipt, settings: DeskSettings | None = None) -> dict:
    """
    Pure and deterministic: equal receipts give equal plans.

    The receipt is only read, never modified.
    """
    if not isinstance(receipt, Receipt):
        raise ValueError("receipt must be a Receipt.")
    settings = settings or DeskSettings()

    candidates = (
        _details_section(receipt, settings),
        _services_section(receipt),
        _zones_section(receipt),
        _flags_section(receipt),
        _notes_section(receipt),
    )
    return {
        "doc_type": DOC_TYPE_RECEIPT,
        "receipt_id": receipt.id,
        "tent_code": receipt.tent_code,
        "banner": settings.event_name,
        "title": _pair(MessageId.RECEIPT_TITLE),
        "subtitle": _pair(MessageId.RECEIPT_SEASON),
        "sections": [section for section in candidates if section is not None],
        "footer": {
            "disclaimer": _pair(MessageId.RECEIPT_NOT_TAX_INVOICE),
            "signatures": [
                _pair(MessageId.RECEIPT_RECEIVERS_SIGNATURE),
                _pair(MessageId.RECEIPT_SIGNATURE),
            ],
        },
    }


def section_kinds(render_plan: dict) -> list[str]:
    return [section["kind"] for section in render_plan.get("sections", [])]
