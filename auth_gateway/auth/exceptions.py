"""
Custom authentication exceptions.

These exceptions provide structured error handling for the authentication
request lifecycle. The gateway only ever raises ``GatewayError``; the HTTP
layer turns its ``kind`` into a status code. ``ProviderError`` carries the
raw failure reported by an identity provider binding.
"""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    PROVIDER_UNAVAILABLE = "provider_unavailable"
    INTERNAL = "internal"


class PasswordRule(str, Enum):
    TOO_SHORT = "too_short"
    MISSING_LOWERCASE = "missing_lowercase"
    MISSING_UPPERCASE = "missing_uppercase"
    MISSING_DIGIT = "missing_digit"
    MISSING_SYMBOL = "missing_symbol"
    MISMATCH = "mismatch"


class GatewayError(Exception):
    """
    Raised when an authentication flow fails.

    Every failure leaving the gateway is one of the five ``ErrorKind``s,
    so callers never have to inspect provider-specific exceptions.
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ) -> None:
        self.kind = kind
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def error_code(self) -> str:
        return self.kind.value


class PasswordPolicyError(GatewayError):
    """Raised when a password violates the policy."""

    def __init__(self, rule: PasswordRule, message: str) -> None:
        self.rule = rule
        super().__init__(
            kind=ErrorKind.VALIDATION,
            message=message,
            details={"rule": rule.value}
        )


class ProviderError(Exception):
    """
    Raised by identity provider bindings when the provider rejects a call.

    ``message`` is the provider's free-text error, passed along unchanged.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        self.message = message or ""
        self.status = status
        super().__init__(self.message)


class ProviderUnavailableError(ProviderError):
    """Raised when the identity provider cannot be reached."""

    def __init__(self, message: str = "Identity provider unreachable", status: Optional[int] = None) -> None:
        super().__init__(message=message, status=status)
