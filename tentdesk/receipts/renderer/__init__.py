"""
TentDesk Receipts - Renderer Public API
=======================================
"""

from tentdesk.receipts.renderer.html_renderer import render_html
from tentdesk.receipts.renderer.pdf_renderer import render_pdf

__all__ = [
    "render_html",
    "render_pdf",
]
