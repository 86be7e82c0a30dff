from fastapi import APIRouter, Depends, HTTPException, Query, Request
import logging

from ..auth.dependencies import get_auth_gateway
from ..auth.models import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    ResendVerificationRequest,
    SignupRequest,
    SignupResponse
)
from ..auth.rate_limiter import limiter, RATE_LIMITS
from ..config import settings
from ..services.gateway import AuthGateway

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/signup",
    status_code=201,
    response_model=SignupResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request data or weak password"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
        500: {"model": ErrorResponse},
    }
)
@limiter.limit(RATE_LIMITS["signup"])
async def signup(
    request: Request,
    payload: SignupRequest,
    gateway: AuthGateway = Depends(get_auth_gateway)
):
    """Register an account and send the verification email"""
    return await gateway.signup(payload)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid request data"},
        401: {"model": ErrorResponse, "description": "Invalid credentials or email not verified"},
        500: {"model": ErrorResponse},
    }
)
@limiter.limit(RATE_LIMITS["login"])
async def login(
    request: Request,
    payload: LoginRequest,
    gateway: AuthGateway = Depends(get_auth_gateway)
):
    """Log in with email and password"""
    return await gateway.login(payload)


@router.post(
    "/resend-verification",
    response_model=MessageResponse,
    responses={500: {"model": ErrorResponse}}
)
@limiter.limit(RATE_LIMITS["resend_verification"])
async def resend_verification(
    request: Request,
    payload: ResendVerificationRequest,
    gateway: AuthGateway = Depends(get_auth_gateway)
):
    """
    Resend the verification email.
    The response is the same whether or not the email is registered.
    """
    return await gateway.resend_verification(payload.email)


@router.get(
    "/verify",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid or expired verification link"},
        500: {"model": ErrorResponse},
    }
)
@limiter.limit(RATE_LIMITS["verify"])
async def verify_email(
    request: Request,
    token: str = Query(..., min_length=1, description="Token from the verification link"),
    gateway: AuthGateway = Depends(get_auth_gateway)
):
    """Confirm an email address from the verification link"""
    return await gateway.verify_email(token)


@router.post("/test-login", response_model=LoginResponse, include_in_schema=False)
async def test_login(gateway: AuthGateway = Depends(get_auth_gateway)):
    """Log in with the configured test account (development only)"""
    if not settings.ENABLE_TEST_LOGIN:
        raise HTTPException(status_code=404, detail="Not Found")
    return await gateway.test_login()
