"""
TentDesk Booking - Workflow
===========================
The only component that sequences authenticator, inventory and composer.

Submission is a two-phase commit:
    1. gate      - operator must be authenticated
    2. stage     - AVAILABLE -> RESERVED with the booking details (atomic)
    3. compose   - render the receipt document
    4. commit    - RESERVED -> BOOKED, record the receipt
    4'. rollback - on composition failure, RESERVED -> AVAILABLE

A tent is therefore never BOOKED without a delivered receipt, and a tent
that was not AVAILABLE at submission time is rejected before any change.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from tentdesk.auth.session import SessionAuthenticator
from tentdesk.booking.forms import BookingForm
from tentdesk.errors import ReceiptNotFound, TentUnavailable
from tentdesk.inventory.models import Tent, TentStatus
from tentdesk.inventory.store import InventoryStore
from tentdesk.receipts.composer import ReceiptComposer, ReceiptDocument
from tentdesk.receipts.models import Receipt, ReceiptIdFactory

logger = logging.getLogger("tentdesk.booking")


@dataclass(frozen=True)
class BookingResult:
    tent: Tent
    receipt: Receipt
    document: ReceiptDocument


class BookingWorkflow:
    def __init__(
        self,
        *,
        authenticator: SessionAuthenticator,
        store: InventoryStore,
        composer: ReceiptComposer,
        id_factory: ReceiptIdFactory | None = None,
    ) -> None:
        self._auth = authenticator
        self._store = store
        self._composer = composer
        self._ids = id_factory or ReceiptIdFactory()

    def submit(self, form: BookingForm) -> BookingResult:
        operator = self._auth.require_authenticated()
        code = form.tent_code

        receipt_id = self._ids.new_id()
        booking = form.to_booking(receipt_id)

        try:
            self._store.transition(
                code,
                expected=TentStatus.AVAILABLE,
                status=TentStatus.RESERVED,
                booking=booking,
            )
        except TentUnavailable:
            logger.warning(f"Booking of tent {code} by {operator} rejected: not available")
            raise

        receipt = Receipt.from_booking(
            receipt_id=receipt_id,
            tent_code=code,
            booking=booking,
            generated_by=operator,
        )

        try:
            document = self._composer.compose(receipt)
        except Exception:
            self._rollback(code, receipt_id)
            raise

        tent = self._store.transition(
            code,
            expected=TentStatus.RESERVED,
            status=TentStatus.BOOKED,
            booking=booking,
        )
        self._store.add_receipt(receipt)
        logger.info(f"Tent {code} booked by {operator}, receipt {receipt_id}")
        return BookingResult(tent=tent, receipt=receipt, document=document)

    def regenerate(self, receipt_id: str) -> ReceiptDocument:
        """Compose an already issued receipt again (same name, same plan hash)."""
        self._auth.require_authenticated()
        receipt = self._store.get_receipt(receipt_id)
        if receipt is None:
            raise ReceiptNotFound(receipt_id)
        return self._composer.compose(receipt)

    def release(self, tent_code: str) -> Tent:
        operator = self._auth.require_authenticated()
        tent = self._store.release(tent_code)
        logger.info(f"Tent {tent_code} released by {operator}")
        return tent

    def _rollback(self, code: str, receipt_id: str) -> None:
        try:
            self._store.transition(
                code, expected=TentStatus.RESERVED, status=TentStatus.AVAILABLE
            )
        except TentUnavailable:
            # status changed under us; leave it for the operator to reconcile
            logger.error(f"Rollback of tent {code} skipped: no longer staged")
            return
        logger.error(f"Receipt {receipt_id} failed, tent {code} returned to available")
