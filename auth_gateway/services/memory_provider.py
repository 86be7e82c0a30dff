import hashlib
import hmac
import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional

from ..auth.exceptions import ProviderError
from ..auth.models import AccountState, AccountSummary, ProviderAuthResult, SessionToken
from ..auth.provider import IdentityProviderClient

logger = logging.getLogger(__name__)

_HASH_ITERATIONS = 100_000


class _Account:
    def __init__(self, email: str, password: str):
        self.id = str(uuid.uuid4())
        self.email = email
        self.salt = secrets.token_bytes(16)
        self.password_hash = _hash_password(password, self.salt)
        self.state = AccountState.PENDING_VERIFICATION
        self.created_at = datetime.now(timezone.utc)
        self.email_confirmed_at: Optional[datetime] = None
        self.last_sign_in_at: Optional[datetime] = None

    def check_password(self, password: str) -> bool:
        return hmac.compare_digest(self.password_hash, _hash_password(password, self.salt))

    def summary(self, registered_identities: Optional[int] = 1) -> AccountSummary:
        return AccountSummary(
            id=self.id,
            email=self.email,
            created_at=self.created_at,
            email_confirmed_at=self.email_confirmed_at,
            last_sign_in_at=self.last_sign_in_at,
            registered_identities=registered_identities
        )


def _hash_password(password: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac("sha256", password.encode(), salt, _HASH_ITERATIONS)


class InMemoryIdentityProvider(IdentityProviderClient):
    """
    Identity provider kept in process memory.

    Mirrors the Supabase Auth responses the gateway relies on, including
    the identity-less placeholder returned for a repeated signup and the
    provider's error wording. Intended for tests and local development.

    No method awaits between reading and writing its dictionaries, so each
    call is atomic on the event loop.
    """

    def __init__(self, token_ttl_seconds: int = 86400, session_ttl_seconds: int = 3600):
        self.token_ttl = timedelta(seconds=token_ttl_seconds)
        self.session_ttl = timedelta(seconds=session_ttl_seconds)
        self._accounts: Dict[str, _Account] = {}
        # token -> (email, expires_at)
        self._tokens: Dict[str, tuple[str, datetime]] = {}
        # token -> email; an account verifies once, so at most one entry each
        self._used_tokens: Dict[str, str] = {}
        # Stands in for the verification emails the provider would send
        self._outbox: Dict[str, str] = {}

    async def sign_up(
        self,
        email: str,
        password: str,
        *,
        redirect_to: Optional[str] = None
    ) -> ProviderAuthResult:
        key = email.lower()
        account = self._accounts.get(key)

        if account is None:
            account = _Account(email, password)
            self._accounts[key] = account
            self._issue_token(key)
            logger.info(f"Registered account {account.id}")
            return ProviderAuthResult(account=account.summary())

        if account.state == AccountState.VERIFIED:
            raise ProviderError("User already registered", status=422)

        self._issue_token(key)
        return ProviderAuthResult(account=account.summary(registered_identities=0))

    async def sign_in(self, email: str, password: str) -> ProviderAuthResult:
        account = self._accounts.get(email.lower())
        if account is None or not account.check_password(password):
            raise ProviderError("Invalid login credentials", status=400)
        if account.state != AccountState.VERIFIED:
            raise ProviderError("Email not confirmed", status=400)

        now = datetime.now(timezone.utc)
        account.last_sign_in_at = now
        session = SessionToken(
            access_token=secrets.token_urlsafe(32),
            expires_at=int((now + self.session_ttl).timestamp())
        )
        return ProviderAuthResult(account=account.summary(), session=session)

    async def resend_verification(self, email: str, *, redirect_to: Optional[str] = None) -> None:
        key = email.lower()
        account = self._accounts.get(key)
        if account is not None and account.state == AccountState.PENDING_VERIFICATION:
            self._issue_token(key)

    async def verify_token(self, token: str) -> None:
        if token in self._used_tokens:
            raise ProviderError("Token already used", status=403)

        entry = self._tokens.pop(token, None)
        if entry is None:
            raise ProviderError("Token has expired or is invalid", status=403)

        key, expires_at = entry
        if expires_at <= datetime.now(timezone.utc):
            raise ProviderError("Token has expired or is invalid", status=403)

        self._used_tokens[token] = key
        account = self._accounts[key]
        account.state = AccountState.VERIFIED
        account.email_confirmed_at = datetime.now(timezone.utc)

    def state_of(self, email: str) -> AccountState:
        account = self._accounts.get(email.lower())
        return account.state if account else AccountState.UNREGISTERED

    def last_verification_token(self, email: str) -> Optional[str]:
        return self._outbox.get(email.lower())

    def _issue_token(self, key: str) -> str:
        # A new link supersedes the one sent before it
        previous = self._outbox.get(key)
        if previous is not None:
            self._tokens.pop(previous, None)

        token = secrets.token_urlsafe(24)
        self._tokens[token] = (key, datetime.now(timezone.utc) + self.token_ttl)
        self._outbox[key] = token
        return token
