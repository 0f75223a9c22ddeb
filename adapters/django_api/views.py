"""
TentDesk Django Adapter Views
=============================
Thin JSON views over the TentDesk core. Every domain error is mapped to
the error envelope with a stable code; receipts are served as downloads.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from django.http import HttpRequest, HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.responses import error_response, status_for, success_response
from adapters.django_api.wiring import DeskDependencies, build_dependencies
from tentdesk.booking.forms import BookingForm
from tentdesk.errors import DeskError, TentNotFound
from tentdesk.i18n.messages import Locale, catalog, text_direction
from tentdesk.inventory.models import TentStatus
from tentdesk.receipts.composer import ReceiptDocument

logger = logging.getLogger("tentdesk.http")


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _desk_error(exc: DeskError) -> JsonResponse:
    status = status_for(exc)
    if status >= 500:
        logger.error(f"Request failed: {exc}")
    return JsonResponse(
        error_response(code=exc.code, message=exc.message, details=dict(exc.details)),
        status=status,
    )


def _method_not_allowed() -> JsonResponse:
    return _json_error(
        "METHOD_NOT_ALLOWED",
        "Method not allowed for this endpoint.",
        status=405,
    )


def _ok(data: Any, status: int = 200) -> JsonResponse:
    return JsonResponse(success_response(data), status=status)


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _download(document: ReceiptDocument) -> HttpResponse:
    response = HttpResponse(document.content, content_type=document.media_type)
    response["Content-Disposition"] = f'attachment; filename="{document.filename}"'
    response["X-Receipt-Id"] = document.receipt_id
    response["X-Receipt-Plan-Hash"] = document.plan_hash
    return response


def _dispatch(
    request: HttpRequest,
    method: str,
    handler: Callable[[DeskDependencies, HttpRequest], HttpResponse],
    *,
    authenticated: bool = True,
) -> HttpResponse:
    if request.method != method:
        return _method_not_allowed()
    deps = build_dependencies()
    try:
        if authenticated:
            deps.authenticator.require_authenticated()
        return handler(deps, request)
    except DeskError as exc:
        return _desk_error(exc)
    except ValueError as exc:
        return _json_error("INVALID_REQUEST", str(exc), status=400)


# ── auth ──────────────────────────────────────────────────────

def _request_code(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
    body = _parse_json_body(request)
    phone = body.get("phone")
    disclosure = deps.authenticator.issue_code(phone if isinstance(phone, str) else "")
    data: dict[str, Any] = {
        "code_sent": True,
        "expires_at": disclosure.expires_at.isoformat(),
    }
    if deps.settings.expose_otp:
        data["otp"] = disclosure.code
    return _ok(data)


def _verify_code(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
    body = _parse_json_body(request)
    code = body.get("code")
    deps.authenticator.verify_code(str(code) if code is not None else "")
    return _ok({"authenticated": True, "phone_number": deps.authenticator.phone_number})


def _logout(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
    deps.authenticator.logout()
    deps.channel.clear()
    return _ok({"authenticated": False})


def _session(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
    return _ok(deps.authenticator.snapshot().to_dict())


@csrf_exempt
def request_code_view(request: HttpRequest) -> HttpResponse:
    return _dispatch(request, "POST", _request_code, authenticated=False)


@csrf_exempt
def verify_code_view(request: HttpRequest) -> HttpResponse:
    return _dispatch(request, "POST", _verify_code, authenticated=False)


@csrf_exempt
def logout_view(request: HttpRequest) -> HttpResponse:
    return _dispatch(request, "POST", _logout, authenticated=False)


@csrf_exempt
def session_view(request: HttpRequest) -> HttpResponse:
    return _dispatch(request, "GET", _session, authenticated=False)


# ── tents ─────────────────────────────────────────────────────

def _list_tents(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
    status_raw = request.GET.get("status")
    if status_raw:
        try:
            status = TentStatus(status_raw.strip().lower())
        except ValueError as exc:
            raise ValueError(
                f"status must be one of {[s.value for s in TentStatus]}."
            ) from exc
        tents = [t for t in deps.store.list_tents() if t.status is status]
    else:
        tents = deps.store.list_tents()
    return _ok({"count": len(tents), "tents": [t.to_dict() for t in tents]})


def _layout(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
    groups = {
        group.name.lower(): [t.to_dict() for t in tents]
        for group, tents in deps.store.layout().items()
    }
    counts = {
        status.value: count for status, count in deps.store.count_by_status().items()
    }
    return _ok({"groups": groups, "counts": counts})


def _tent_detail(code: str):
    def handler(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
        tent = deps.store.get_tent(code.upper())
        if tent is None:
            raise TentNotFound(code)
        return _ok(tent.to_dict())
    return handler


def _release(code: str):
    def handler(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
        return _ok(deps.workflow.release(code.upper()).to_dict())
    return handler


@csrf_exempt
def tents_list_view(request: HttpRequest) -> HttpResponse:
    return _dispatch(request, "GET", _list_tents)


@csrf_exempt
def tents_layout_view(request: HttpRequest) -> HttpResponse:
    return _dispatch(request, "GET", _layout)


@csrf_exempt
def tent_detail_view(request: HttpRequest, code: str) -> HttpResponse:
    return _dispatch(request, "GET", _tent_detail(code))


@csrf_exempt
def tent_release_view(request: HttpRequest, code: str) -> HttpResponse:
    return _dispatch(request, "POST", _release(code))


# ── bookings & receipts ───────────────────────────────────────

def _book(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
    form = BookingForm.from_mapping(_parse_json_body(request))
    result = deps.workflow.submit(form)
    return _download(result.document)


def _list_receipts(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
    receipts = deps.store.list_receipts()
    return _ok({"count": len(receipts), "receipts": [r.to_dict() for r in receipts]})


def _receipt_download(receipt_id: str):
    def handler(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
        return _download(deps.workflow.regenerate(receipt_id))
    return handler


@csrf_exempt
def bookings_view(request: HttpRequest) -> HttpResponse:
    return _dispatch(request, "POST", _book)


@csrf_exempt
def receipts_list_view(request: HttpRequest) -> HttpResponse:
    return _dispatch(request, "GET", _list_receipts)


@csrf_exempt
def receipt_download_view(request: HttpRequest, receipt_id: str) -> HttpResponse:
    return _dispatch(request, "GET", _receipt_download(receipt_id))


# ── messages ──────────────────────────────────────────────────

def _messages(deps: DeskDependencies, request: HttpRequest) -> HttpResponse:
    locale = Locale.parse(request.GET.get("lang"))
    return _ok({
        "locale": locale.value,
        "direction": text_direction(locale),
        "messages": catalog(locale),
    })


@csrf_exempt
def messages_view(request: HttpRequest) -> HttpResponse:
    return _dispatch(request, "GET", _messages, authenticated=False)
