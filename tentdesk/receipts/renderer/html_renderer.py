"""
TentDesk Receipts - HTML Renderer
=================================
Converts a receipt render plan into a safe, deterministic, printable
HTML document (A4 via @page).

- All user-supplied content is HTML-escaped.
- Same render plan -> same HTML output.
- Each section kind renders independently.
- English column on the left, Arabic column on the right (dir="rtl").
"""

from __future__ import annotations

import html
from typing import Any

from tentdesk.receipts.plan import (
    SECTION_DETAILS,
    SECTION_FLAGS,
    SECTION_NOTES,
    SECTION_SERVICES,
    SECTION_ZONES,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _e(value: Any) -> str:
    """HTML-escape any value to a safe string."""
    return html.escape(str(value) if value is not None else "", quote=True)


def _columns(left: str, right: str, *, css_class: str = "row") -> str:
    return (
        f'<div class="{css_class}">'
        f'<div class="col en" dir="ltr" lang="en">{left}</div>'
        f'<div class="col ar" dir="rtl" lang="ar">{right}</div>'
        f'</div>'
    )


def _field(row: dict) -> str:
    label = row["label"]
    value = row.get("value")
    if value is None:
        return _columns(
            f'<span class="label">{_e(label["en"])}</span>',
            f'<span class="label">{_e(label["ar"])}</span>',
        )
    return _columns(
        f'<span class="label">{_e(label["en"])}</span>'
        f'<span class="value">{_e(value["en"])}</span>',
        f'<span class="label">{_e(label["ar"])}</span>'
        f'<span class="value">{_e(value["ar"])}</span>',
    )


def _heading(pair: dict | None) -> str:
    if not pair:
        return ""
    return _columns(
        f'<span class="label">{_e(pair["en"])}</span>',
        f'<span class="label">{_e(pair["ar"])}</span>',
        css_class="row heading",
    )


def _section(kind: str, body: str) -> str:
    return f'<section class="section-{_e(kind)}">\n{body}\n</section>'


# ---------------------------------------------------------------------------
# Section renderers
# ---------------------------------------------------------------------------

def _render_rows(section: dict) -> str:
    parts = [_heading(section.get("heading"))]
    parts.extend(_field(row) for row in section.get("rows", []))
    return _section(section["kind"], "\n".join(p for p in parts if p))


def _render_services(section: dict) -> str:
    items = "\n".join(
        _columns(_e(item["en"]), _e(item["ar"]), css_class="row service")
        for item in section.get("items", [])
    )
    body = _heading(section.get("heading")) + f'\n<div class="box services">\n{items}\n</div>'
    return _section(section["kind"], body)


def _render_zones(section: dict) -> str:
    slots = "".join(
        f'<div class="slot{" selected" if slot["selected"] else ""}" '
        f'data-zone="{_e(slot["zone"])}">'
        f'<span class="mark">{_e(slot["mark"])}</span>'
        f'<span class="caption">{_e(slot["caption"]["en"])}</span>'
        f'<span class="caption" dir="rtl" lang="ar">{_e(slot["caption"]["ar"])}</span>'
        f'</div>'
        for slot in section.get("slots", [])
    )
    body = (
        _heading(section.get("heading"))
        + f'\n<div class="box zones">\n<div class="slots">{slots}</div>\n'
        + _field(section["total"])
        + "\n</div>"
    )
    return _section(section["kind"], body)


_SECTION_RENDERERS = {
    SECTION_DETAILS: _render_rows,
    SECTION_SERVICES: _render_services,
    SECTION_ZONES: _render_zones,
    SECTION_FLAGS: _render_rows,
    SECTION_NOTES: _render_rows,
}


# ---------------------------------------------------------------------------
# Embedded CSS
# ---------------------------------------------------------------------------

_DOCUMENT_CSS = """\
@page { size: A4; margin: 20mm 14mm; }
*, *::before, *::after { box-sizing: border-box; margin: 0; padding: 0; }
body {
  font-family: Arial, Helvetica, "Noto Naskh Arabic", sans-serif;
  font-size: 13px;
  color: #111;
  background: #fff;
  max-width: 794px;
  margin: 0 auto;
  padding: 24px;
}
.banner { background: #dc2626; color: #fff; text-align: center; font-size: 20px; font-weight: bold; padding: 12px; }
.title { margin-top: 16px; padding-bottom: 10px; border-bottom: 2px solid #dc2626; }
.title .main { font-size: 18px; font-weight: bold; display: block; }
.title .sub { font-size: 11px; color: #666; display: block; }
section { margin-top: 14px; page-break-inside: avoid; }
.row { display: flex; justify-content: space-between; margin-bottom: 10px; }
.col { width: 50%; }
.col.en { text-align: left; }
.col.ar { text-align: right; }
.label { display: block; font-size: 10px; font-weight: bold; color: #666; }
.value { display: block; font-size: 13px; font-weight: bold; }
.box { padding: 10px; }
.box.services { background: #f9fafb; }
.box.zones { background: #fef3c7; }
.slots { display: flex; justify-content: space-between; margin-bottom: 10px; }
.slot { flex: 1; text-align: center; }
.slot .mark { display: block; font-size: 16px; }
.slot .caption { display: block; font-size: 10px; }
footer { margin-top: 28px; border-top: 1px solid #ddd; padding-top: 10px; }
footer .disclaimer { font-size: 10px; color: #666; }
footer .signature { margin-top: 36px; border-top: 1px solid #333; padding-top: 4px; width: 45%; }
@media print { body { padding: 0; max-width: none; } }
"""


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render_html(render_plan: dict, *, doc_hash: str | None = None) -> str:
    """
    Render a receipt render plan to a complete HTML document string.

    Raises ValueError if the plan is malformed or has an unknown section.
    """
    if not isinstance(render_plan, dict):
        raise ValueError("render_plan must be a dict.")

    body_sections: list[str] = []
    for section in render_plan.get("sections", []):
        renderer = _SECTION_RENDERERS.get(section.get("kind"))
        if renderer is None:
            raise ValueError(f"Unknown receipt section '{section.get('kind')}'.")
        body_sections.append(renderer(section))

    title = render_plan["title"]
    subtitle = render_plan["subtitle"]
    footer = render_plan["footer"]
    signatures = "".join(
        _columns(
            f'<div class="signature">{_e(sig["en"])}</div>',
            f'<div class="signature">{_e(sig["ar"])}</div>',
        )
        for sig in footer["signatures"]
    )
    hash_note = (
        f'<p class="hash">{_e(doc_hash[:16])}</p>' if doc_hash else ""
    )

    return (
        "<!DOCTYPE html>\n"
        "<html lang=\"en\">\n"
        "<head>\n"
        "  <meta charset=\"UTF-8\">\n"
        f"  <title>{_e(render_plan.get('doc_type', 'RECEIPT'))} "
        f"{_e(render_plan.get('receipt_id', ''))}</title>\n"
        "  <style>\n"
        + _DOCUMENT_CSS
        + "  </style>\n"
        "</head>\n"
        "<body>\n"
        f'<div class="banner">{_e(render_plan.get("banner", ""))}</div>\n'
        + _columns(
            f'<span class="main">{_e(title["en"])}</span>'
            f'<span class="sub">{_e(subtitle["en"])}</span>',
            f'<span class="main">{_e(title["ar"])}</span>'
            f'<span class="sub">{_e(subtitle["ar"])}</span>',
            css_class="row title",
        )
        + "\n"
        + "\n".join(body_sections)
        + "\n<footer>\n"
        + _columns(
            f'<p class="disclaimer">{_e(footer["disclaimer"]["en"])}</p>',
            f'<p class="disclaimer">{_e(footer["disclaimer"]["ar"])}</p>',
        )
        + "\n"
        + signatures
        + hash_note
        + "\n</footer>\n</body>\n</html>\n"
    )
