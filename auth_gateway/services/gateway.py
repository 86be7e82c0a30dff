import logging
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..auth.error_classifier import ProviderErrorClassifier
from ..auth.exceptions import ErrorKind, GatewayError, ProviderError
from ..auth.models import (
    AccountState,
    LoginRequest,
    LoginResponse,
    LoginUser,
    MessageResponse,
    SignupRequest,
    SignupResponse,
    SignupUser
)
from ..auth.password_policy import PasswordPolicy
from ..auth.provider import IdentityProviderClient
from ..utils import auth_constants as msg

logger = logging.getLogger(__name__)


class GatewayConfig(BaseModel):
    """Explicit configuration handed to the gateway at construction."""

    model_config = ConfigDict(frozen=True)

    email_redirect_url: Optional[str] = None
    test_email: Optional[str] = None
    test_password: Optional[str] = None

    @classmethod
    def from_settings(cls, settings) -> "GatewayConfig":
        return cls(
            email_redirect_url=settings.email_redirect_url,
            test_email=settings.TEST_EMAIL,
            test_password=settings.TEST_EMAIL_PASSWORD
        )


class AuthGateway:
    """
    Orchestrates the signup, login, resend-verification and verify flows.

    Each flow makes exactly one call to the identity provider and never
    retries. Whatever goes wrong, the caller only ever sees a
    ``GatewayError``: policy failures short-circuit before the provider is
    called, provider failures are classified, and anything unexpected is
    reported as INTERNAL.

    Account states live with the provider; the gateway only narrates the
    Unregistered -> PendingVerification -> Verified progression in its logs.
    """

    def __init__(
        self,
        provider: IdentityProviderClient,
        config: Optional[GatewayConfig] = None,
        password_policy: Optional[PasswordPolicy] = None,
        classifier: Optional[ProviderErrorClassifier] = None
    ):
        self.provider = provider
        self.config = config or GatewayConfig()
        self.password_policy = password_policy or PasswordPolicy()
        self.classifier = classifier or ProviderErrorClassifier()

    async def signup(self, request: SignupRequest) -> SignupResponse:
        try:
            self.password_policy.validate(request.password, request.confirm_password)

            result = await self.provider.sign_up(
                request.email,
                request.password,
                redirect_to=self.config.email_redirect_url
            )
            account = result.account

            # Providers answer a repeated signup with an identity-less placeholder
            if account.registered_identities == 0:
                logger.info("Signup rejected: email is already registered")
                raise GatewayError(ErrorKind.CONFLICT, msg.DUPLICATE_ACCOUNT)

            logger.info(f"Account {account.id} is {AccountState.PENDING_VERIFICATION.value}")
            return SignupResponse(
                message=msg.SIGNUP_NOTICE,
                user=SignupUser(
                    id=account.id,
                    email=account.email,
                    created_at=account.created_at
                )
            )

        except GatewayError:
            raise
        except ProviderError as e:
            kind = self._classify("signup", e)
            # Credential errors have no meaning for a new account
            if kind == ErrorKind.UNAUTHORIZED:
                kind = ErrorKind.INTERNAL
            if kind == ErrorKind.CONFLICT:
                message = msg.DUPLICATE_ACCOUNT
            elif kind == ErrorKind.VALIDATION:
                message = e.message
            else:
                message = self._generic_message(kind, msg.SIGNUP_FAILED)
            raise GatewayError(kind, message) from e
        except Exception as e:
            logger.exception("Unexpected error during signup")
            raise GatewayError(ErrorKind.INTERNAL, msg.SIGNUP_FAILED) from e

    async def login(self, request: LoginRequest) -> LoginResponse:
        try:
            result = await self.provider.sign_in(request.email, request.password)
            if result.session is None:
                raise GatewayError(ErrorKind.INTERNAL, msg.LOGIN_FAILED)

            account = result.account
            logger.info(f"Account {account.id} is {AccountState.VERIFIED.value} and signed in")
            return LoginResponse(
                message=msg.LOGIN_SUCCESS,
                user=LoginUser(
                    id=account.id,
                    email=account.email,
                    created_at=account.created_at,
                    email_confirmed_at=account.email_confirmed_at,
                    last_sign_in_at=account.last_sign_in_at
                ),
                session=result.session
            )

        except GatewayError:
            raise
        except ProviderError as e:
            kind = self._classify("login", e)
            # The provider's wording is already generic; a local message could
            # tell an unknown email apart from a wrong password.
            if kind in (ErrorKind.UNAUTHORIZED, ErrorKind.VALIDATION, ErrorKind.CONFLICT):
                message = e.message
            else:
                message = self._generic_message(kind, msg.LOGIN_FAILED)
            raise GatewayError(kind, message) from e
        except Exception as e:
            logger.exception("Unexpected error during login")
            raise GatewayError(ErrorKind.INTERNAL, msg.LOGIN_FAILED) from e

    async def resend_verification(self, email: str) -> MessageResponse:
        try:
            await self.provider.resend_verification(email, redirect_to=self.config.email_redirect_url)
            return MessageResponse(message=msg.RESEND_ACKNOWLEDGEMENT)

        except ProviderError as e:
            kind = self._classify("resend-verification", e)
            if kind != ErrorKind.PROVIDER_UNAVAILABLE:
                kind = ErrorKind.INTERNAL
            raise GatewayError(kind, self._generic_message(kind, msg.RESEND_FAILED)) from e
        except Exception as e:
            logger.exception("Unexpected error while resending verification")
            raise GatewayError(ErrorKind.INTERNAL, msg.RESEND_FAILED) from e

    async def verify_email(self, token: str) -> MessageResponse:
        try:
            await self.provider.verify_token(token)
            logger.info(f"Email verification succeeded, account is {AccountState.VERIFIED.value}")
            return MessageResponse(message=msg.VERIFY_SUCCESS)

        except ProviderError as e:
            kind = self._classify("verify", e)
            # Used, expired and malformed links all look the same to the caller
            if kind == ErrorKind.PROVIDER_UNAVAILABLE:
                raise GatewayError(kind, msg.PROVIDER_UNAVAILABLE) from e
            raise GatewayError(ErrorKind.VALIDATION, msg.INVALID_VERIFICATION_LINK) from e
        except Exception as e:
            logger.exception("Unexpected error during email verification")
            raise GatewayError(ErrorKind.INTERNAL, msg.VERIFY_FAILED) from e

    async def test_login(self) -> LoginResponse:
        """Log in with the configured test credentials."""
        if not (self.config.test_email and self.config.test_password):
            raise GatewayError(ErrorKind.INTERNAL, msg.TEST_LOGIN_NOT_CONFIGURED)
        return await self.login(
            LoginRequest.model_construct(email=self.config.test_email, password=self.config.test_password)
        )

    def _classify(self, flow: str, error: ProviderError) -> ErrorKind:
        kind = self.classifier.classify_error(error)
        logger.warning(f"Provider rejected {flow}: {error.message!r} (classified as {kind.value})")
        return kind

    @staticmethod
    def _generic_message(kind: ErrorKind, fallback: str) -> str:
        if kind == ErrorKind.PROVIDER_UNAVAILABLE:
            return msg.PROVIDER_UNAVAILABLE
        return fallback
