"""
Authentication dependencies for FastAPI dependency injection.

The identity provider and gateway are built once at startup and stored on
the application state; request handlers receive the gateway through
``get_auth_gateway``.
"""

from fastapi import Request
import logging

from ..config import Settings
from ..services.gateway import AuthGateway, GatewayConfig
from .exceptions import ErrorKind, GatewayError
from .provider import IdentityProviderClient

logger = logging.getLogger(__name__)


async def create_identity_provider(settings: Settings) -> IdentityProviderClient:
    """Build the identity provider binding selected in settings."""
    if settings.IDENTITY_PROVIDER == "memory":
        from ..services.memory_provider import InMemoryIdentityProvider

        logger.warning("Using the in-memory identity provider - development mode")
        return InMemoryIdentityProvider(
            token_ttl_seconds=settings.VERIFICATION_TOKEN_TTL_SECONDS,
            session_ttl_seconds=settings.SESSION_TTL_SECONDS
        )

    from ..services.supabase_provider import SupabaseIdentityProvider

    return await SupabaseIdentityProvider.connect(settings.SUPABASE_URL, settings.SUPABASE_KEY)


async def create_auth_gateway(settings: Settings) -> AuthGateway:
    provider = await create_identity_provider(settings)
    return AuthGateway(provider, GatewayConfig.from_settings(settings))


def get_auth_gateway(request: Request) -> AuthGateway:
    """
    Return the gateway created at startup.

    Raises:
        GatewayError: INTERNAL when the identity provider was never initialized
    """
    gateway = getattr(request.app.state, "auth_gateway", None)
    if gateway is None:
        logger.error("Identity provider client is not initialized")
        raise GatewayError(ErrorKind.INTERNAL, "Identity provider client not initialized")
    return gateway
