"""
TentDesk Django Adapter Wiring
==============================
Constructs the owned state objects (authenticator, inventory, composer)
and the booking workflow for one running server.

This module is adapter-only glue:
- the core never imports Django
- settings come from django.conf.settings.TENTDESK
- in-memory state lives for the process lifetime
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from django.conf import settings as django_settings

from tentdesk.auth.otp import OnScreenCodeChannel
from tentdesk.auth.session import SessionAuthenticator
from tentdesk.booking.workflow import BookingWorkflow
from tentdesk.config import DeskSettings
from tentdesk.inventory.store import InventoryStore
from tentdesk.receipts.composer import ReceiptComposer
from tentdesk.receipts.models import ReceiptIdFactory
from tentdesk.time.clock import Clock, SystemClock

logger = logging.getLogger("tentdesk.http")

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: "DeskDependencies | None" = None


@dataclass(frozen=True)
class DeskDependencies:
    settings: DeskSettings
    clock: Clock
    channel: OnScreenCodeChannel
    authenticator: SessionAuthenticator
    store: InventoryStore
    composer: ReceiptComposer
    workflow: BookingWorkflow


def load_settings() -> DeskSettings:
    return DeskSettings.from_mapping(getattr(django_settings, "TENTDESK", None))


def create_dependencies(
    settings: DeskSettings | None = None,
    *,
    clock: Clock | None = None,
    composer: ReceiptComposer | None = None,
) -> DeskDependencies:
    settings = settings or load_settings()
    clock = clock or SystemClock()
    channel = OnScreenCodeChannel()
    authenticator = SessionAuthenticator(
        clock=clock,
        channel=channel,
        ttl_seconds=settings.otp_ttl_seconds,
        code_length=settings.otp_length,
    )
    store = InventoryStore()
    store.initialize()
    composer = composer or ReceiptComposer(settings)
    workflow = BookingWorkflow(
        authenticator=authenticator,
        store=store,
        composer=composer,
        id_factory=ReceiptIdFactory(clock),
    )
    if not settings.receipt_is_bilingual:
        logger.warning(
            f"Receipt format '{settings.receipt_format}' renders Latin text only; "
            f"Arabic fields will print as '?'. Use 'html' for bilingual receipts."
        )
    logger.info(
        f"TentDesk wired for '{settings.event_name}' "
        f"(receipts: {settings.receipt_format})"
    )
    return DeskDependencies(
        settings=settings,
        clock=clock,
        channel=channel,
        authenticator=authenticator,
        store=store,
        composer=composer,
        workflow=workflow,
    )


def build_dependencies() -> DeskDependencies:
    """
    Lazy singleton wiring for adapter runtime.
    """
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = create_dependencies()
        return _DEPENDENCIES


def install_dependencies(dependencies: DeskDependencies) -> None:
    """Replace the singleton (tests and embedding callers)."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        previous, _DEPENDENCIES = _DEPENDENCIES, dependencies
    if previous is not None and previous is not dependencies:
        previous.composer.close()


def reset_dependencies() -> None:
    """Drop all session and inventory state; next access rewires."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        previous, _DEPENDENCIES = _DEPENDENCIES, None
    if previous is not None:
        previous.store.reset()
        previous.composer.close()
