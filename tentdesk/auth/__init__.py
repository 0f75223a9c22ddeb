"""
TentDesk Auth - Public API
==========================
"""

from tentdesk.auth.otp import (
    CodeChannel,
    CodeDisclosure,
    OnScreenCodeChannel,
    generate_numeric_code,
)
from tentdesk.auth.session import (
    DEFAULT_OTP_LENGTH,
    DEFAULT_OTP_TTL_SECONDS,
    Session,
    SessionAuthenticator,
)

__all__ = [
    "CodeChannel",
    "CodeDisclosure",
    "OnScreenCodeChannel",
    "generate_numeric_code",
    "DEFAULT_OTP_LENGTH",
    "DEFAULT_OTP_TTL_SECONDS",
    "Session",
    "SessionAuthenticator",
]
