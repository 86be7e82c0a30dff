"""
Tests for the in-memory identity provider state machine.
"""

import pytest

from auth_gateway.auth.exceptions import ProviderError
from auth_gateway.auth.models import AccountState
from auth_gateway.services.memory_provider import InMemoryIdentityProvider

from conftest import STRONG_PASSWORD


@pytest.mark.asyncio
async def test_signup_leaves_account_pending(memory_provider):
    result = await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)

    assert result.session is None
    assert result.account.registered_identities == 1
    assert result.account.email_confirmed_at is None
    assert memory_provider.state_of("a@b.com") == AccountState.PENDING_VERIFICATION
    assert memory_provider.last_verification_token("a@b.com")


@pytest.mark.asyncio
async def test_unknown_email_is_unregistered(memory_provider):
    assert memory_provider.state_of("nobody@b.com") == AccountState.UNREGISTERED


@pytest.mark.asyncio
async def test_repeated_signup_while_pending_returns_placeholder(memory_provider):
    first = await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)
    second = await memory_provider.sign_up("A@B.com", STRONG_PASSWORD)

    assert second.account.registered_identities == 0
    assert second.account.id == first.account.id


@pytest.mark.asyncio
async def test_signup_after_verification_is_rejected(memory_provider):
    await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)
    await memory_provider.verify_token(memory_provider.last_verification_token("a@b.com"))

    with pytest.raises(ProviderError, match="User already registered"):
        await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)


@pytest.mark.asyncio
async def test_sign_in_requires_verified_email(memory_provider):
    await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)

    with pytest.raises(ProviderError, match="Email not confirmed"):
        await memory_provider.sign_in("a@b.com", STRONG_PASSWORD)


@pytest.mark.asyncio
async def test_verified_sign_in_opens_session(memory_provider):
    await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)
    await memory_provider.verify_token(memory_provider.last_verification_token("a@b.com"))

    result = await memory_provider.sign_in("a@b.com", STRONG_PASSWORD)

    assert memory_provider.state_of("a@b.com") == AccountState.VERIFIED
    assert result.session.access_token
    assert result.session.expires_at > 0
    assert result.account.email_confirmed_at is not None
    assert result.account.last_sign_in_at is not None


@pytest.mark.asyncio
async def test_wrong_password_is_invalid_credentials(memory_provider):
    await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)

    with pytest.raises(ProviderError, match="Invalid login credentials"):
        await memory_provider.sign_in("a@b.com", "Wr0ng!Pw")


@pytest.mark.asyncio
async def test_token_can_only_be_used_once(memory_provider):
    await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)
    token = memory_provider.last_verification_token("a@b.com")
    await memory_provider.verify_token(token)

    with pytest.raises(ProviderError, match="Token already used"):
        await memory_provider.verify_token(token)


@pytest.mark.asyncio
async def test_unknown_token_is_rejected(memory_provider):
    with pytest.raises(ProviderError, match="expired or is invalid"):
        await memory_provider.verify_token("not-a-token")


@pytest.mark.asyncio
async def test_expired_token_is_rejected():
    provider = InMemoryIdentityProvider(token_ttl_seconds=0)
    await provider.sign_up("a@b.com", STRONG_PASSWORD)

    with pytest.raises(ProviderError, match="expired or is invalid"):
        await provider.verify_token(provider.last_verification_token("a@b.com"))

    assert provider.state_of("a@b.com") == AccountState.PENDING_VERIFICATION


@pytest.mark.asyncio
async def test_resend_issues_new_token_only_for_pending_accounts(memory_provider):
    await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)
    first = memory_provider.last_verification_token("a@b.com")

    await memory_provider.resend_verification("a@b.com")
    await memory_provider.resend_verification("nobody@b.com")

    assert memory_provider.last_verification_token("a@b.com") != first
    assert memory_provider.last_verification_token("nobody@b.com") is None


@pytest.mark.asyncio
async def test_new_token_supersedes_the_previous_one(memory_provider):
    await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)
    first = memory_provider.last_verification_token("a@b.com")
    await memory_provider.resend_verification("a@b.com")

    with pytest.raises(ProviderError, match="expired or is invalid"):
        await memory_provider.verify_token(first)

    await memory_provider.verify_token(memory_provider.last_verification_token("a@b.com"))
    assert memory_provider.state_of("a@b.com") == AccountState.VERIFIED


@pytest.mark.asyncio
async def test_repeated_signup_supersedes_the_previous_token(memory_provider):
    await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)
    first = memory_provider.last_verification_token("a@b.com")
    await memory_provider.sign_up("a@b.com", STRONG_PASSWORD)
    await memory_provider.verify_token(memory_provider.last_verification_token("a@b.com"))

    with pytest.raises(ProviderError, match="expired or is invalid"):
        await memory_provider.verify_token(first)
