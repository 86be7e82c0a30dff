"""
Simple rate limiter for the authentication endpoints.
Clean implementation using slowapi, backed by Redis in production.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address
from fastapi import Request

from ..config import settings

def get_client_key(request: Request) -> str:
    """
    Extract the client address for rate limiting.
    Uses the first X-Forwarded-For hop when running behind a proxy,
    falls back to the peer address.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    return get_remote_address(request)

# Create limiter instance
limiter = Limiter(
    key_func=get_client_key,
    default_limits=[settings.RATE_LIMIT_DEFAULT],
    storage_uri=settings.RATE_LIMIT_STORAGE_URI,
    enabled=settings.RATE_LIMIT_ENABLED
)

# Rate limit configurations
RATE_LIMITS = {
    "signup": settings.RATE_LIMIT_SIGNUP,
    "login": settings.RATE_LIMIT_LOGIN,
    "resend_verification": settings.RATE_LIMIT_RESEND,
    "verify": settings.RATE_LIMIT_VERIFY,
}
