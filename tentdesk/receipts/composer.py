"""
TentDesk Receipts - Composer
============================
Receipt -> render plan -> document bytes.

Rendering runs on a worker thread with an explicit timeout. Any failure
(renderer error, timeout) surfaces as DocumentGenerationFailed; a hang is
reported, never waited on forever.

The output file name depends only on tent code, receipt id and format,
so a regenerated receipt always carries the same name.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeout
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from tentdesk.config import RECEIPT_FORMAT_HTML, RECEIPT_FORMAT_PDF, DeskSettings
from tentdesk.errors import DocumentGenerationFailed
from tentdesk.receipts.hashing import compute_plan_hash
from tentdesk.receipts.models import Receipt
from tentdesk.receipts.plan import build_receipt_plan
from tentdesk.receipts.renderer import render_html, render_pdf

logger = logging.getLogger("tentdesk.receipts")

MEDIA_TYPES: Dict[str, str] = {
    RECEIPT_FORMAT_HTML: "text/html; charset=utf-8",
    RECEIPT_FORMAT_PDF: "application/pdf",
}

Renderer = Callable[[dict, Optional[str]], bytes]


def _html_bytes(plan: dict, doc_hash: Optional[str]) -> bytes:
    return render_html(plan, doc_hash=doc_hash).encode("utf-8")


def _pdf_bytes(plan: dict, doc_hash: Optional[str]) -> bytes:
    return render_pdf(plan, doc_hash=doc_hash)


DEFAULT_RENDERERS: Dict[str, Renderer] = {
    RECEIPT_FORMAT_HTML: _html_bytes,
    RECEIPT_FORMAT_PDF: _pdf_bytes,
}


def receipt_filename(tent_code: str, receipt_id: str, fmt: str) -> str:
    return f"receipt-{tent_code}-{receipt_id}.{fmt}"


@dataclass(frozen=True)
class ReceiptDocument:
    receipt_id: str
    filename: str
    media_type: str
    content: bytes
    plan_hash: str

    @property
    def size(self) -> int:
        return len(self.content)


class ReceiptComposer:
    def __init__(
        self,
        settings: DeskSettings | None = None,
        *,
        renderers: Dict[str, Renderer] | None = None,
        max_workers: int = 2,
    ) -> None:
        self._settings = settings or DeskSettings()
        self._renderers = dict(renderers or DEFAULT_RENDERERS)
        if self._settings.receipt_format not in self._renderers:
            raise ValueError(
                f"No renderer for receipt format '{self._settings.receipt_format}'."
            )
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="receipt-render"
        )

    @property
    def receipt_format(self) -> str:
        return self._settings.receipt_format

    def build_plan(self, receipt: Receipt) -> dict:
        return build_receipt_plan(receipt, self._settings)

    def compose(self, receipt: Receipt) -> ReceiptDocument:
        """Render one receipt, or raise DocumentGenerationFailed."""
        fmt = self._settings.receipt_format
        try:
            plan = self.build_plan(receipt)
            plan_hash = compute_plan_hash(plan)
        except Exception as exc:
            logger.error(f"Receipt {getattr(receipt, 'id', None)} plan failed: {exc}")
            raise DocumentGenerationFailed(
                str(exc), receipt_id=getattr(receipt, "id", None)
            ) from exc

        timeout = self._settings.receipt_timeout_seconds
        try:
            future = self._executor.submit(self._renderers[fmt], plan, plan_hash)
            content = future.result(timeout=timeout)
        except FutureTimeout as exc:
            future.cancel()
            logger.error(f"Receipt {receipt.id} rendering timed out after {timeout}s")
            raise DocumentGenerationFailed(
                f"Rendering timed out after {timeout}s.", receipt_id=receipt.id
            ) from exc
        except Exception as exc:
            logger.error(f"Receipt {receipt.id} rendering failed: {exc}")
            raise DocumentGenerationFailed(str(exc), receipt_id=receipt.id) from exc

        if not isinstance(content, bytes) or not content:
            logger.error(f"Receipt {receipt.id} renderer returned no content")
            raise DocumentGenerationFailed(
                "Renderer returned no content.", receipt_id=receipt.id
            )

        document = ReceiptDocument(
            receipt_id=receipt.id,
            filename=receipt_filename(receipt.tent_code, receipt.id, fmt),
            media_type=MEDIA_TYPES.get(fmt, "application/octet-stream"),
            content=content,
            plan_hash=plan_hash,
        )
        logger.info(
            f"Receipt {receipt.id} generated for tent {receipt.tent_code} "
            f"({fmt}, {document.size} bytes)"
        )
        return document

    def close(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)
