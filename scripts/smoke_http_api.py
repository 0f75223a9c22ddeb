"""
Manual smoke runner for the TentDesk Django adapter.

Walks request-code -> verify -> book -> download against a running server
(`python manage.py runserver`) started with TENTDESK_EXPOSE_OTP=1.

Usage:
    python scripts/smoke_http_api.py
    python scripts/smoke_http_api.py --base-url http://127.0.0.1:8000 --tent L10
"""

from __future__ import annotations

import argparse
import json
from urllib import error, request


DEFAULT_PHONE = "555-0100"


def _call(
    *,
    method: str,
    url: str,
    body: dict | None = None,
) -> tuple[int, dict | bytes, dict[str, str]]:
    encoded = None
    req_headers: dict[str, str] = {}
    if body is not None:
        encoded = json.dumps(body).encode("utf-8")
        req_headers["Content-Type"] = "application/json"

    req = request.Request(url=url, method=method, headers=req_headers, data=encoded)
    try:
        with request.urlopen(req) as response:
            raw = response.read()
            headers = dict(response.headers.items())
            status = response.status
    except error.HTTPError as exc:
        raw = exc.read()
        headers = dict(exc.headers.items())
        status = exc.code

    if headers.get("Content-Type", "").startswith("application/json"):
        return status, json.loads(raw.decode("utf-8")), headers
    return status, raw, headers


def _print_case(label: str, status: int, payload: dict | bytes, headers: dict[str, str]) -> None:
    print(f"\n[{label}] status={status}")
    if isinstance(payload, bytes):
        print(f"  {headers.get('Content-Disposition', '')} ({len(payload)} bytes)")
    else:
        print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))


def run(base_url: str, *, phone: str, tent_code: str) -> None:
    api = base_url.rstrip("/") + "/v1"

    _print_case("tents-unauthenticated", *_call(method="GET", url=f"{api}/tents"))

    status, payload, headers = _call(
        method="POST", url=f"{api}/auth/request-code", body={"phone": phone}
    )
    _print_case("request-code", status, payload, headers)
    otp = payload.get("data", {}).get("otp") if isinstance(payload, dict) else None
    if not otp:
        print("\nOTP not exposed; set TENTDESK_EXPOSE_OTP=1 and retry.")
        return

    _print_case(
        "verify-wrong-code",
        *_call(method="POST", url=f"{api}/auth/verify", body={"code": "000000"}),
    )
    _print_case(
        "verify",
        *_call(method="POST", url=f"{api}/auth/verify", body={"code": otp}),
    )

    _print_case(
        "available-tents",
        *_call(method="GET", url=f"{api}/tents?status=available"),
    )

    booking = {
        "tent_code": tent_code,
        "client_name": "Smoke Test Client",
        "phone": "555-0199",
        "booking_date": "2025-05-01",
        "price": "50",
        "usage": "Food stand",
        "services": {"electricity": True, "chairs": False, "table": True},
        "zones": ["A", "C"],
        "qty_car_flags": 0,
        "qty_banner_flags": 2,
        "notes": "",
    }
    status, payload, headers = _call(method="POST", url=f"{api}/bookings", body=booking)
    _print_case("book", status, payload, headers)
    receipt_id = headers.get("X-Receipt-Id")

    _print_case(
        "book-again-conflict",
        *_call(method="POST", url=f"{api}/bookings", body=booking),
    )

    if receipt_id:
        _print_case(
            "download",
            *_call(method="GET", url=f"{api}/receipts/{receipt_id}/download"),
        )

    _print_case("receipts", *_call(method="GET", url=f"{api}/receipts"))
    _print_case("release", *_call(method="POST", url=f"{api}/tents/{tent_code}/release"))
    _print_case("logout", *_call(method="POST", url=f"{api}/auth/logout"))


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument(
        "--base-url",
        default="http://127.0.0.1:8000",
        help="Server base URL.",
    )
    parser.add_argument("--phone", default=DEFAULT_PHONE, help="Operator phone number.")
    parser.add_argument("--tent", default="T1", help="Tent code to book.")
    args = parser.parse_args()
    run(args.base_url, phone=args.phone, tent_code=args.tent)


if __name__ == "__main__":
    main()
