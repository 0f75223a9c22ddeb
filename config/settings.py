"""
TentDesk – Django Settings (Infrastructure Only)
================================================
Django serves as the HTTP container for TentDesk.
The tentdesk core never imports these settings; the adapter wiring reads
TENTDESK and hands the core a frozen DeskSettings.

All state is in memory, so no database is configured.
"""

import os
from pathlib import Path

# ── Paths ─────────────────────────────────────────────────────
BASE_DIR = Path(__file__).resolve().parent.parent

# ── Security ──────────────────────────────────────────────────
SECRET_KEY = os.environ.get("TENTDESK_SECRET_KEY", "tentdesk-dev-key-replace-before-deployment")

DEBUG = os.environ.get("TENTDESK_DEBUG", "1") == "1"

ALLOWED_HOSTS = [
    host.strip()
    for host in os.environ.get("TENTDESK_ALLOWED_HOSTS", "localhost,127.0.0.1,testserver").split(",")
    if host.strip()
]

# ── Installed Apps ────────────────────────────────────────────
# The adapter ships no models.
INSTALLED_APPS = []

# ── Middleware ────────────────────────────────────────────────
MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

# ── URL & WSGI ────────────────────────────────────────────────
ROOT_URLCONF = "config.urls"
WSGI_APPLICATION = "config.wsgi.application"

# ── Database ──────────────────────────────────────────────────
DATABASES = {}

# ── Internationalization ──────────────────────────────────────
LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True

# ── TentDesk ──────────────────────────────────────────────────
# Values may be strings; DeskSettings.from_mapping coerces and validates.
# receipt_format "pdf" prints Latin text only (Arabic becomes '?'); keep
# "html" for the bilingual receipt.
TENTDESK = {
    "event_name": os.environ.get("TENTDESK_EVENT_NAME", "TRIPOLI KARTING RACE 2025"),
    "otp_ttl_seconds": os.environ.get("TENTDESK_OTP_TTL_SECONDS", "120"),
    "otp_length": os.environ.get("TENTDESK_OTP_LENGTH", "6"),
    "receipt_format": os.environ.get("TENTDESK_RECEIPT_FORMAT", "html"),
    "receipt_timeout_seconds": os.environ.get("TENTDESK_RECEIPT_TIMEOUT_SECONDS", "10"),
    "currency_symbol": os.environ.get("TENTDESK_CURRENCY_SYMBOL", "$"),
    "expose_otp": os.environ.get("TENTDESK_EXPOSE_OTP", "1"),
}

# ── Logging ───────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("TENTDESK_LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "tentdesk": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "django": {
            "handlers": ["console"],
            "level": "WARNING",
        },
    },
}
