"""
Pytest configuration and fixtures for the authentication gateway tests.
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock

import pytest

# Set test environment variables before importing application modules
os.environ.setdefault("IDENTITY_PROVIDER", "memory")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")
os.environ.setdefault("FRONTEND_URL", "http://frontend.test")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient

from auth_gateway.auth.dependencies import get_auth_gateway
from auth_gateway.auth.models import AccountSummary, ProviderAuthResult, SessionToken
from auth_gateway.auth.provider import IdentityProviderClient
from auth_gateway.services.gateway import AuthGateway, GatewayConfig
from auth_gateway.services.memory_provider import InMemoryIdentityProvider
from main import app

STRONG_PASSWORD = "Str0ng!Pw"
EXPIRES_AT = 1735689600


@pytest.fixture
def created_at() -> datetime:
    return datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def account(created_at) -> AccountSummary:
    """A freshly registered, unverified account."""
    return AccountSummary(
        id="7c1f0b52-7a4e-4a4b-9b1d-3f1f1c7f1a11",
        email="a@b.com",
        created_at=created_at,
        registered_identities=1
    )


@pytest.fixture
def verified_account(account, created_at) -> AccountSummary:
    return account.model_copy(update={
        "email_confirmed_at": created_at,
        "last_sign_in_at": created_at
    })


@pytest.fixture
def session_token() -> SessionToken:
    return SessionToken(access_token="tok", expires_at=EXPIRES_AT)


@pytest.fixture
def mock_provider(account, verified_account, session_token):
    """Return a scripted identity provider that succeeds by default."""
    mock = AsyncMock(spec=IdentityProviderClient)
    mock.sign_up.return_value = ProviderAuthResult(account=account)
    mock.sign_in.return_value = ProviderAuthResult(account=verified_account, session=session_token)
    mock.resend_verification.return_value = None
    mock.verify_token.return_value = None
    return mock


@pytest.fixture
def gateway_config() -> GatewayConfig:
    return GatewayConfig(email_redirect_url="http://frontend.test/auth/callback")


@pytest.fixture
def gateway(mock_provider, gateway_config) -> AuthGateway:
    return AuthGateway(mock_provider, gateway_config)


@pytest.fixture
def memory_provider() -> InMemoryIdentityProvider:
    return InMemoryIdentityProvider()


@pytest.fixture
def memory_gateway(memory_provider, gateway_config) -> AuthGateway:
    return AuthGateway(memory_provider, gateway_config)


@pytest.fixture
def client(gateway):
    """Test client whose routes use the scripted provider."""
    app.dependency_overrides[get_auth_gateway] = lambda: gateway
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
