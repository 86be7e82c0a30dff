"""
Authentication module for the Authentication Gateway.

This module holds the core of the authentication request lifecycle:
password policy, provider error classification and the identity
provider capability interface.

Components:
- models: Request DTOs, account/session projections and responses
- exceptions: Gateway error taxonomy and provider exceptions
- password_policy: Password strength and confirmation rules
- error_classifier: Provider error text to error kind mapping
- provider: Identity provider capability interface
- dependencies: FastAPI dependency injection for the gateway
- rate_limiter: slowapi limiter configuration
"""

from .models import (
    AccountState,
    AccountSummary,
    LoginRequest,
    ProviderAuthResult,
    SessionToken,
    SignupRequest
)
from .exceptions import (
    ErrorKind,
    GatewayError,
    PasswordPolicyError,
    PasswordRule,
    ProviderError,
    ProviderUnavailableError
)
from .password_policy import PasswordPolicy
from .error_classifier import ProviderErrorClassifier
from .provider import IdentityProviderClient

__all__ = [
    "AccountState",
    "AccountSummary",
    "LoginRequest",
    "ProviderAuthResult",
    "SessionToken",
    "SignupRequest",
    "ErrorKind",
    "GatewayError",
    "PasswordPolicyError",
    "PasswordRule",
    "ProviderError",
    "ProviderUnavailableError",
    "PasswordPolicy",
    "ProviderErrorClassifier",
    "IdentityProviderClient",
]
