import asyncio
import base64
from urllib.parse import parse_qs

import httpx
import pytest

from commerce_adaptor.core.exceptions import AuthError, ConfigurationError
from commerce_adaptor.infrastructure.auth.basic_auth import BasicAuthHandler
from commerce_adaptor.infrastructure.auth.oauth import Credential, CredentialManager
from tests.factories import AUTH_URL


@pytest.mark.asyncio
async def test_token_request_uses_basic_auth_client_credentials_grant(credential_manager, commercetools):
    token = await credential_manager.get_access_token()

    assert token == "token-1"
    assert len(commercetools.token_requests) == 1

    request = commercetools.token_requests[0]
    assert request.method == "POST"
    assert str(request.url) == f"{AUTH_URL}/oauth/token"
    expected = base64.b64encode(b"client-id:client-secret").decode()
    assert request.headers["Authorization"] == f"Basic {expected}"
    assert request.headers["Content-Type"] == "application/x-www-form-urlencoded"
    assert parse_qs(request.content.decode()) == {"grant_type": ["client_credentials"]}


@pytest.mark.asyncio
async def test_cached_token_is_reused_within_validity_window(credential_manager, commercetools, clock):
    first = await credential_manager.get_access_token()
    clock.advance(100)
    second = await credential_manager.get_access_token()

    assert first == second == "token-1"
    assert len(commercetools.token_requests) == 1


@pytest.mark.asyncio
async def test_expiry_subtracts_sixty_second_margin(credential_manager, clock):
    requested_at = clock.now

    await credential_manager.get_access_token()

    assert credential_manager.credential.expires_at_epoch_ms == requested_at + 240_000


@pytest.mark.asyncio
async def test_token_refreshed_once_expiry_reached(credential_manager, commercetools, clock):
    await credential_manager.get_access_token()
    original = credential_manager.credential

    clock.advance(239)
    assert await credential_manager.get_access_token() == "token-1"

    clock.advance(1)
    assert await credential_manager.get_access_token() == "token-2"

    assert len(commercetools.token_requests) == 2
    refreshed = credential_manager.credential
    assert refreshed is not original
    assert refreshed == Credential(token="token-2", expires_at_epoch_ms=clock.now + 240_000)


@pytest.mark.asyncio
async def test_concurrent_refreshes_share_one_request(credential_manager, commercetools):
    commercetools.token_delay = 0.01

    tokens = await asyncio.gather(*(credential_manager.get_access_token() for _ in range(5)))

    assert tokens == ["token-1"] * 5
    assert len(commercetools.token_requests) == 1


@pytest.mark.asyncio
async def test_invalidate_forces_new_token(credential_manager, commercetools):
    await credential_manager.get_access_token()
    credential_manager.invalidate()

    assert credential_manager.credential is None
    assert await credential_manager.get_access_token() == "token-2"


@pytest.mark.asyncio
async def test_missing_configuration_lists_every_missing_setting(settings, http_client, clock, commercetools):
    incomplete = settings.model_copy(update={
        "COMMERCETOOLS_API_URL": None,
        "COMMERCETOOLS_CLIENT_SECRET": "  ",
    })
    manager = CredentialManager(incomplete, http_client, clock=clock)

    with pytest.raises(ConfigurationError) as exc_info:
        await manager.get_access_token()

    assert exc_info.value.missing == ["COMMERCETOOLS_API_URL", "COMMERCETOOLS_CLIENT_SECRET"]
    assert "COMMERCETOOLS_API_URL" in str(exc_info.value)
    assert "COMMERCETOOLS_CLIENT_SECRET" in str(exc_info.value)
    assert commercetools.token_requests == []


@pytest.mark.asyncio
async def test_missing_configuration_checked_even_with_cached_token(settings, http_client, clock):
    manager = CredentialManager(settings, http_client, clock=clock)
    await manager.get_access_token()

    manager.settings = settings.model_copy(update={"COMMERCETOOLS_PROJECT_KEY": None})

    with pytest.raises(ConfigurationError):
        await manager.get_access_token()


@pytest.mark.asyncio
async def test_rejected_grant_raises_auth_error(credential_manager, commercetools):
    commercetools.token_status = 401

    with pytest.raises(AuthError) as exc_info:
        await credential_manager.get_access_token()

    assert exc_info.value.upstream_status == 401
    assert credential_manager.credential is None


@pytest.mark.asyncio
async def test_failed_refresh_does_not_return_expired_token(credential_manager, commercetools, clock):
    await credential_manager.get_access_token()
    clock.advance(240)
    commercetools.token_status = 503

    with pytest.raises(AuthError):
        await credential_manager.get_access_token()


@pytest.mark.asyncio
async def test_unreachable_auth_endpoint_raises_auth_error(settings, clock):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(refuse)) as client:
        manager = CredentialManager(settings, client, clock=clock)

        with pytest.raises(AuthError) as exc_info:
            await manager.get_access_token()

    assert exc_info.value.upstream_status is None
    assert manager.credential is None


@pytest.mark.asyncio
async def test_malformed_token_response_raises_auth_error(settings, clock):
    def no_token(request):
        return httpx.Response(200, json={"token_type": "Bearer"})

    async with httpx.AsyncClient(transport=httpx.MockTransport(no_token)) as client:
        manager = CredentialManager(settings, client, clock=clock)

        with pytest.raises(AuthError):
            await manager.get_access_token()

    assert manager.credential is None


@pytest.mark.asyncio
async def test_refresh_lock_created_on_first_refresh(credential_manager):
    assert credential_manager._refresh_lock is None

    await credential_manager.get_access_token()

    assert isinstance(credential_manager._refresh_lock, asyncio.Lock)


def test_basic_auth_header_encoding():
    header = BasicAuthHandler("id", "s3cret").generate_header()

    assert header == {"Authorization": "Basic aWQ6czNjcmV0"}


def test_basic_auth_requires_both_credentials():
    with pytest.raises(AuthError):
        BasicAuthHandler("id", None).generate_header()
