"""
Authentication data models and schemas.

This module defines the request DTOs, the account and session projections
forwarded from the identity provider, and the response bodies returned by
the authentication endpoints.
"""

from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, EmailStr, Field


class AccountState(str, Enum):
    """Conceptual account states; the identity provider holds the real state."""

    UNREGISTERED = "unregistered"
    PENDING_VERIFICATION = "pending_verification"
    VERIFIED = "verified"


class SignupRequest(BaseModel):
    """Body of ``POST /auth/signup``."""

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "email": "example@example.com",
                "password": "Str0ng!Pw",
                "confirmPassword": "Str0ng!Pw"
            }
        }
    )

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")
    confirm_password: str = Field(
        ...,
        alias="confirmPassword",
        min_length=1,
        description="Repeat of the password"
    )


class LoginRequest(BaseModel):
    """Body of ``POST /auth/login``."""

    model_config = ConfigDict(
        extra="forbid",
        json_schema_extra={
            "example": {
                "email": "example@example.com",
                "password": "password123"
            }
        }
    )

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class ResendVerificationRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    email: EmailStr = Field(..., description="Email address to resend the verification link to")


class AccountSummary(BaseModel):
    """
    Projection of a provider account.

    ``registered_identities`` is a provider hint: ``0`` means the provider
    answered a signup with an inert placeholder for an email that is
    already registered. ``None`` means the provider did not say.
    """

    id: str = Field(..., description="Provider account identifier")
    email: str = Field(..., description="Account email address")
    created_at: datetime = Field(..., description="When the account was created")
    email_confirmed_at: Optional[datetime] = Field(
        default=None,
        description="When the email address was verified"
    )
    last_sign_in_at: Optional[datetime] = Field(
        default=None,
        description="When the account last signed in"
    )
    registered_identities: Optional[int] = Field(default=None, exclude=True)


class SessionToken(BaseModel):
    """Session issued by the identity provider, forwarded verbatim."""

    access_token: str = Field(..., description="Opaque access token")
    expires_at: Optional[int] = Field(
        default=None,
        description="Expiry as seconds since the epoch"
    )


class ProviderAuthResult(BaseModel):
    """What an identity provider returns from sign up and sign in."""

    account: AccountSummary
    session: Optional[SessionToken] = None


class SignupUser(BaseModel):
    id: str
    email: str
    created_at: datetime


class SignupResponse(BaseModel):
    message: str
    user: SignupUser

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "message": "Signup successful. Please check your email for verification.",
                "user": {
                    "id": "7c1f0b52-7a4e-4a4b-9b1d-3f1f1c7f1a11",
                    "email": "example@example.com",
                    "created_at": "2024-01-01T12:00:00Z"
                }
            }
        }
    )


class LoginUser(BaseModel):
    id: str
    email: str
    created_at: datetime
    email_confirmed_at: Optional[datetime] = None
    last_sign_in_at: Optional[datetime] = None


class LoginResponse(BaseModel):
    message: str
    user: LoginUser
    session: SessionToken


class MessageResponse(BaseModel):
    message: str


class FieldError(BaseModel):
    field: str
    message: str


class ErrorResponse(BaseModel):
    """Body of every error response."""

    detail: str = Field(..., description="Human-readable error message")
    error: str = Field(..., description="Error kind")
    errors: Optional[list[FieldError]] = Field(
        default=None,
        description="Every failing request field, for request validation errors"
    )
