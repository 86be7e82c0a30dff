"""
Common constants used across authentication services.
This module centralizes password rules, provider error markers and
user-facing messages to avoid duplication.
"""

# Password policy
PASSWORD_MIN_LENGTH = 8
PASSWORD_SYMBOLS = "@$!%*?&"

# Provider error markers (matched case-insensitively as substrings)
CONFLICT_MARKERS = ('already registered', 'already exists')
CREDENTIAL_CONTEXT = ('credentials', 'login')
UNCONFIRMED_MARKERS = ('email not confirmed', 'not confirmed')
EXPIRED_MARKERS = ('expired',)
TOKEN_CONTEXT = ('token', 'link', 'otp', 'code')
UNAVAILABLE_MARKERS = (
    'network', 'connection', 'timed out', 'timeout', 'unreachable',
    'fetch failed', 'service unavailable'
)

# Success messages
SIGNUP_NOTICE = "Signup successful. Please check your email for verification."
LOGIN_SUCCESS = "Login successful"
RESEND_ACKNOWLEDGEMENT = "Verification email has been resent. Please check your inbox."
VERIFY_SUCCESS = "Email verified successfully. You can now log in."

# Failure messages
DUPLICATE_ACCOUNT = "User with this email already exists"
PROVIDER_UNAVAILABLE = "Identity provider is currently unavailable"
SIGNUP_FAILED = "An error occurred during signup"
LOGIN_FAILED = "An error occurred during login"
RESEND_FAILED = "Failed to resend verification email"
INVALID_VERIFICATION_LINK = "Invalid or expired verification link"
VERIFY_FAILED = "Failed to verify email"
TEST_LOGIN_NOT_CONFIGURED = "Test login credentials are not configured"
