import string

from ..utils.auth_constants import PASSWORD_MIN_LENGTH, PASSWORD_SYMBOLS
from .exceptions import PasswordPolicyError, PasswordRule


class PasswordPolicy:
    """
    Password strength and confirmation rules for signup.

    Rules are checked in order and the first failure is reported, so the
    caller always gets a single message naming the broken rule:
    length, character classes, then confirmation.
    """

    def __init__(self, min_length: int = PASSWORD_MIN_LENGTH, symbols: str = PASSWORD_SYMBOLS):
        self.min_length = min_length
        self.symbols = symbols

    def validate(self, password: str, confirm_password: str) -> None:
        """Raise ``PasswordPolicyError`` for the first rule the password breaks."""
        if len(password) < self.min_length:
            raise PasswordPolicyError(
                PasswordRule.TOO_SHORT,
                f"Password is too short: it must be at least {self.min_length} characters long"
            )

        if not any(c in string.ascii_lowercase for c in password):
            raise PasswordPolicyError(
                PasswordRule.MISSING_LOWERCASE,
                "Password must contain at least 1 lowercase letter"
            )
        if not any(c in string.ascii_uppercase for c in password):
            raise PasswordPolicyError(
                PasswordRule.MISSING_UPPERCASE,
                "Password must contain at least 1 uppercase letter"
            )
        if not any(c in string.digits for c in password):
            raise PasswordPolicyError(
                PasswordRule.MISSING_DIGIT,
                "Password must contain at least 1 number"
            )
        if not any(c in self.symbols for c in password):
            raise PasswordPolicyError(
                PasswordRule.MISSING_SYMBOL,
                f"Password must contain at least 1 special character ({self.symbols})"
            )

        if confirm_password != password:
            raise PasswordPolicyError(PasswordRule.MISMATCH, "Passwords do not match")
