"""
TentDesk Receipts - PDF Renderer
================================
Generates a minimal, deterministic PDF 1.4 receipt from a render plan.

Implementation: pure Python stdlib with the built-in Helvetica fonts.
Helvetica only covers Latin-1, so characters outside it (the Arabic
column) are written as '?'. The HTML renderer is the full bilingual
output; this one is for Latin-only printing pipelines.

- Same render plan -> same PDF bytes.
- All content is escaped for PDF string encoding.
- The render plan hash, not the PDF bytes, identifies the document.
"""

from __future__ import annotations

import io
from typing import Any

from tentdesk.receipts.plan import (
    BOX_CHECKED,
    BOX_EMPTY,
    CHECK_MARK,
    SECTION_DETAILS,
    SECTION_FLAGS,
    SECTION_NOTES,
    SECTION_SERVICES,
    SECTION_ZONES,
)

_GLYPHS = {
    CHECK_MARK: "+",
    BOX_CHECKED: "[X]",
    BOX_EMPTY: "[ ]",
}


# ---------------------------------------------------------------------------
# PDF string encoding
# ---------------------------------------------------------------------------

def _latin(value: Any) -> str:
    text = str(value) if value is not None else ""
    for glyph, replacement in _GLYPHS.items():
        text = text.replace(glyph, replacement)
    return "".join(c if ord(c) < 256 else "?" for c in text)


def _pdf_str(value: Any) -> str:
    """Encode a value as a PDF literal string (parentheses form)."""
    text = _latin(value)
    text = text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")
    return f"({text})"


# ---------------------------------------------------------------------------
# Minimal PDF writer
# ---------------------------------------------------------------------------

class _PdfWriter:
    """
    Page size: A4 (595 x 842 pts)
    Font: Helvetica / Helvetica-Bold (built-in, no embedding required)
    Content model: two-column lines of text, auto-pagination.
    """

    PAGE_W = 595
    PAGE_H = 842
    MARGIN_LEFT = 40
    MARGIN_RIGHT = 40
    MARGIN_TOP = 782
    MARGIN_BOTTOM = 60
    LINE_HEIGHT_LABEL = 11
    FONT_SIZE_LABEL = 8
    FONT_SIZE_VALUE = 10
    FONT_SIZE_TITLE = 14
    FONT_SIZE_BANNER = 16
    BANNER_RGB = "0.863 0.149 0.149"   # #dc2626

    def __init__(self):
        # objects 1 and 2 are the catalog and page tree, written last
        self._objects: list[str] = ["", ""]
        self._pages: list[int] = []
        self._stream: list[str] = []
        self._y: float = self.MARGIN_TOP

    @property
    def _right_edge(self) -> float:
        return self.PAGE_W - self.MARGIN_RIGHT

    # -- low-level -----------------------------------------------------------

    def _add_object(self, content: str) -> int:
        self._objects.append(content)
        return len(self._objects)

    def _text(self, x: float, y: float, text: Any, *, bold: bool = False, size: int = 10) -> None:
        font = "/F2" if bold else "/F1"
        self._stream.append(f"BT {font} {size} Tf {x:.2f} {y:.2f} Td {_pdf_str(text)} Tj ET")

    def _text_right(self, y: float, text: Any, *, bold: bool = False, size: int = 10) -> None:
        # Helvetica averages roughly half an em per glyph
        width = len(_latin(text)) * size * 0.5
        self._text(self._right_edge - width, y, text, bold=bold, size=size)

    def _text_center(self, x: float, width: float, y: float, text: Any, *, size: int = 10) -> None:
        text_width = len(_latin(text)) * size * 0.5
        self._text(x + (width - text_width) / 2, y, text, size=size)

    def _hline(self, y: float, *, width: float = 1) -> None:
        self._stream.append(
            f"{width} w {self.MARGIN_LEFT} {y:.2f} m {self._right_edge} {y:.2f} l S"
        )

    # -- page management -----------------------------------------------------

    def _finish_page(self) -> None:
        stream_text = "\n".join(self._stream)
        length = len(stream_text.encode("latin-1"))
        stream_id = self._add_object(
            f"<< /Length {length} >>\nstream\n{stream_text}\nendstream"
        )
        page_id = self._add_object(
            f"<< /Type /Page /Parent 2 0 R "
            f"/MediaBox [0 0 {self.PAGE_W} {self.PAGE_H}] "
            f"/Contents {stream_id} 0 R "
            f"/Resources << /Font << "
            f"/F1 << /Type /Font /Subtype /Type1 /BaseFont /Helvetica "
            f"/Encoding /WinAnsiEncoding >> "
            f"/F2 << /Type /Font /Subtype /Type1 /BaseFont /Helvetica-Bold "
            f"/Encoding /WinAnsiEncoding >> "
            f">> >> >>"
        )
        self._pages.append(page_id)
        self._stream = []
        self._y = self.MARGIN_TOP

    def _ensure_space(self, needed: float) -> None:
        if self._y - needed < self.MARGIN_BOTTOM:
            self._finish_page()

    # -- content helpers -----------------------------------------------------

    def add_banner(self, text: str) -> None:
        height = 36
        self._ensure_space(height)
        bottom = self._y - height
        width = self._right_edge - self.MARGIN_LEFT
        self._stream.append(
            f"{self.BANNER_RGB} rg {self.MARGIN_LEFT} {bottom:.2f} {width} {height} re f"
        )
        self._stream.append("1 g")
        self._text_center(
            self.MARGIN_LEFT, width, bottom + 12, text, size=self.FONT_SIZE_BANNER
        )
        self._stream.append("0 g")
        self._y = bottom - 16

    def add_title(self, title: dict, subtitle: dict) -> None:
        self._ensure_space(40)
        self._text(self.MARGIN_LEFT, self._y, title["en"], bold=True, size=self.FONT_SIZE_TITLE)
        self._text_right(self._y, title["ar"], bold=True, size=self.FONT_SIZE_TITLE)
        self._y -= 14
        self._text(self.MARGIN_LEFT, self._y, subtitle["en"], size=self.FONT_SIZE_LABEL)
        self._text_right(self._y, subtitle["ar"], size=self.FONT_SIZE_LABEL)
        self._y -= 10
        self._stream.append(f"{self.BANNER_RGB} RG")
        self._hline(self._y, width=2)
        self._stream.append("0 G")
        self._y -= 18

    def add_pair(self, pair: dict, *, bold: bool = False, size: int | None = None) -> None:
        size = size or self.FONT_SIZE_LABEL
        self._ensure_space(self.LINE_HEIGHT_LABEL)
        self._text(self.MARGIN_LEFT, self._y, pair["en"], bold=bold, size=size)
        self._text_right(self._y, pair["ar"], bold=bold, size=size)
        self._y -= self.LINE_HEIGHT_LABEL + (size - self.FONT_SIZE_LABEL)

    def add_field(self, row: dict) -> None:
        self.add_pair(row["label"], bold=True)
        value = row.get("value")
        if value is not None:
            self.add_pair(value, bold=True, size=self.FONT_SIZE_VALUE)
        self._y -= 6

    def add_slots(self, slots: list[dict]) -> None:
        self._ensure_space(30)
        width = (self._right_edge - self.MARGIN_LEFT) / max(len(slots), 1)
        for position, slot in enumerate(slots):
            x = self.MARGIN_LEFT + position * width
            self._text_center(x, width, self._y, slot["mark"], size=self.FONT_SIZE_VALUE)
            self._text_center(
                x, width, self._y - 12, slot["caption"]["en"], size=self.FONT_SIZE_LABEL
            )
        self._y -= 30

    def add_vspace(self, pts: float = 8) -> None:
        self._y -= pts

    def add_separator(self) -> None:
        self._ensure_space(8)
        self._y -= 4
        self._hline(self._y)
        self._y -= 12

    # -- finalise ------------------------------------------------------------

    def build(self) -> bytes:
        if self._stream or not self._pages:
            self._finish_page()

        kids = " ".join(f"{pid} 0 R" for pid in self._pages)
        self._objects[0] = "<< /Type /Catalog /Pages 2 0 R >>"
        self._objects[1] = f"<< /Type /Pages /Kids [{kids}] /Count {len(self._pages)} >>"

        out = io.BytesIO()
        out.write(b"%PDF-1.4\n")
        out.write(b"%\xe2\xe3\xcf\xd3\n")

        offsets: list[int] = []
        for obj_id, content in enumerate(self._objects, start=1):
            offsets.append(out.tell())
            out.write(f"{obj_id} 0 obj\n".encode("latin-1"))
            out.write(content.encode("latin-1"))
            out.write(b"\nendobj\n")

        xref_offset = out.tell()
        total = len(self._objects) + 1
        out.write(f"xref\n0 {total}\n".encode("latin-1"))
        out.write(b"0000000000 65535 f \n")
        for offset in offsets:
            out.write(f"{offset:010d} 00000 n \n".encode("latin-1"))
        out.write(
            f"trailer\n<< /Size {total} /Root 1 0 R >>\n"
            f"startxref\n{xref_offset}\n%%EOF\n".encode("latin-1")
        )
        return out.getvalue()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def render_pdf(render_plan: dict, *, doc_hash: str | None = None) -> bytes:
    """
    Render a receipt render plan to PDF bytes.

    Raises ValueError if the plan is malformed or has an unknown section.
    """
    if not isinstance(render_plan, dict):
        raise ValueError("render_plan must be a dict.")

    writer = _PdfWriter()
    writer.add_banner(render_plan.get("banner", ""))
    writer.add_title(render_plan["title"], render_plan["subtitle"])

    for section in render_plan.get("sections", []):
        kind = section.get("kind")
        heading = section.get("heading")
        if heading:
            writer.add_vspace(4)
            writer.add_pair(heading, bold=True)
            writer.add_vspace(2)

        if kind == SECTION_SERVICES:
            for item in section.get("items", []):
                writer.add_pair(item, size=9)
        elif kind == SECTION_ZONES:
            writer.add_slots(section.get("slots", []))
            writer.add_field(section["total"])
        elif kind in (SECTION_DETAILS, SECTION_FLAGS, SECTION_NOTES):
            for row in section.get("rows", []):
                writer.add_field(row)
        else:
            raise ValueError(f"Unknown receipt section '{kind}'.")
        writer.add_vspace(6)

    footer = render_plan["footer"]
    writer.add_separator()
    writer.add_pair(footer["disclaimer"])
    writer.add_vspace(36)
    for signature in footer["signatures"]:
        writer.add_pair(signature, bold=True)
        writer.add_vspace(20)
    if doc_hash:
        writer.add_pair({"en": doc_hash[:16], "ar": ""})

    return writer.build()
