"""
Supabase Auth binding for the identity provider interface.
"""
import logging
from typing import Any, Optional

import httpx
from supabase_auth import AsyncGoTrueClient
from supabase_auth.errors import AuthError, AuthRetryableError

from ..auth.exceptions import ProviderError, ProviderUnavailableError
from ..auth.models import AccountSummary, ProviderAuthResult, SessionToken
from ..auth.provider import IdentityProviderClient

logger = logging.getLogger(__name__)


class SupabaseIdentityProvider(IdentityProviderClient):
    """
    Identity provider backed by a shared Supabase Auth client.

    The client is built without session persistence or token refresh, so
    every call goes out with the project key alone and signing one user in
    never changes the credentials used for the next request.
    """

    def __init__(self, client: AsyncGoTrueClient):
        self.client = client

    @classmethod
    async def connect(
        cls,
        project_url: str,
        api_key: str,
        http_client: Optional[httpx.AsyncClient] = None
    ) -> "SupabaseIdentityProvider":
        """Create the Supabase Auth client and wrap it."""
        if not project_url or not api_key:
            raise EnvironmentError("Supabase URL and key must be set")

        client = AsyncGoTrueClient(
            url=f"{project_url.rstrip('/')}/auth/v1",
            headers={"apikey": api_key, "Authorization": f"Bearer {api_key}"},
            auto_refresh_token=False,
            persist_session=False,
            http_client=http_client,
            flow_type="implicit"
        )
        logger.info(f"Initialized Supabase client for {project_url}")
        return cls(client)

    async def sign_up(
        self,
        email: str,
        password: str,
        *,
        redirect_to: Optional[str] = None
    ) -> ProviderAuthResult:
        options: dict[str, Any] = {"data": {"email_verified": False}}
        if redirect_to:
            options["email_redirect_to"] = redirect_to

        response = await self._call(
            self.client.sign_up,
            {"email": email, "password": password, "options": options}
        )
        if response.user is None:
            raise ProviderError("Signup returned no user")

        return ProviderAuthResult(
            account=self._to_account(response.user),
            session=self._to_session(response.session)
        )

    async def sign_in(self, email: str, password: str) -> ProviderAuthResult:
        response = await self._call(
            self.client.sign_in_with_password,
            {"email": email, "password": password}
        )
        if response.user is None:
            raise ProviderError("Login returned no user")

        return ProviderAuthResult(
            account=self._to_account(response.user),
            session=self._to_session(response.session)
        )

    async def resend_verification(self, email: str, *, redirect_to: Optional[str] = None) -> None:
        credentials: dict[str, Any] = {"type": "signup", "email": email}
        if redirect_to:
            credentials["options"] = {"email_redirect_to": redirect_to}
        await self._call(self.client.resend, credentials)

    async def verify_token(self, token: str) -> None:
        await self._call(
            self.client.verify_otp,
            {"token_hash": token, "type": "email"}
        )

    @staticmethod
    async def _call(method, params: dict[str, Any]):
        """Run an SDK call, translating SDK failures into provider errors."""
        try:
            return await method(params)
        except AuthRetryableError as e:
            raise ProviderUnavailableError(e.message, status=e.status) from e
        except AuthError as e:
            raise ProviderError(e.message, status=getattr(e, "status", None)) from e
        except httpx.TransportError as e:
            raise ProviderUnavailableError(str(e)) from e

    @staticmethod
    def _to_account(user) -> AccountSummary:
        identities = getattr(user, "identities", None)
        return AccountSummary(
            id=str(user.id),
            email=user.email or "",
            created_at=user.created_at,
            email_confirmed_at=getattr(user, "email_confirmed_at", None),
            last_sign_in_at=getattr(user, "last_sign_in_at", None),
            registered_identities=len(identities) if identities is not None else None
        )

    @staticmethod
    def _to_session(session) -> Optional[SessionToken]:
        if session is None:
            return None
        return SessionToken(access_token=session.access_token, expires_at=session.expires_at)
