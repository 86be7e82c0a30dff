from abc import ABC, abstractmethod
from typing import Optional

from .models import ProviderAuthResult


class IdentityProviderClient(ABC):
    """
    Capability interface for the external identity provider.

    Every operation raises ``ProviderError`` with the provider's own message
    when the provider rejects the call, or ``ProviderUnavailableError`` when
    it cannot be reached. Implementations are shared by concurrent requests.
    """

    @abstractmethod
    async def sign_up(
        self,
        email: str,
        password: str,
        *,
        redirect_to: Optional[str] = None
    ) -> ProviderAuthResult:
        """Register an account; the provider sends the verification email."""

    @abstractmethod
    async def sign_in(self, email: str, password: str) -> ProviderAuthResult:
        """Check password credentials and open a session."""

    @abstractmethod
    async def resend_verification(self, email: str, *, redirect_to: Optional[str] = None) -> None:
        """Send the signup verification email again."""

    @abstractmethod
    async def verify_token(self, token: str) -> None:
        """Confirm an email address with the token from the verification link."""
