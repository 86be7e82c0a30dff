import logging

from ..utils.auth_constants import (
    CONFLICT_MARKERS,
    CREDENTIAL_CONTEXT,
    UNCONFIRMED_MARKERS,
    EXPIRED_MARKERS,
    TOKEN_CONTEXT,
    UNAVAILABLE_MARKERS
)
from .exceptions import ErrorKind, ProviderError, ProviderUnavailableError

logger = logging.getLogger(__name__)


class ProviderErrorClassifier:
    """
    Maps identity provider failures onto the gateway error taxonomy.

    The provider reports errors as free text, so classification is by
    substring. Anything unrecognized is INTERNAL, never success.
    All provider failures go through here; flows do not inspect raw text.
    """

    def classify(self, message: str) -> ErrorKind:
        text = (message or "").lower()

        if any(marker in text for marker in CONFLICT_MARKERS):
            return ErrorKind.CONFLICT

        if "invalid" in text and any(ctx in text for ctx in CREDENTIAL_CONTEXT):
            return ErrorKind.UNAUTHORIZED

        if any(marker in text for marker in UNCONFIRMED_MARKERS):
            return ErrorKind.UNAUTHORIZED

        if any(marker in text for marker in EXPIRED_MARKERS):
            return ErrorKind.VALIDATION

        if "invalid" in text and any(ctx in text for ctx in TOKEN_CONTEXT):
            return ErrorKind.VALIDATION

        if any(marker in text for marker in UNAVAILABLE_MARKERS):
            return ErrorKind.PROVIDER_UNAVAILABLE

        logger.debug(f"Unrecognized provider error treated as internal: {message!r}")
        return ErrorKind.INTERNAL

    def classify_error(self, error: ProviderError) -> ErrorKind:
        """Classify a provider exception; transport failures need no text matching."""
        if isinstance(error, ProviderUnavailableError):
            return ErrorKind.PROVIDER_UNAVAILABLE
        return self.classify(error.message)
