"""Pytest fixtures for the commercetools credential and product tests."""

import httpx
import pytest

from commerce_adaptor.adapters.implementations.ecommerce.commercetools import (
    CommercetoolsNormalizer,
    CommercetoolsProductClient,
)
from commerce_adaptor.core.config import Settings
from commerce_adaptor.infrastructure.auth.oauth import CredentialManager
from commerce_adaptor.services.product_service import ProductService
from tests.factories import API_URL, AUTH_URL, PROJECT_KEY, FakeClock, FakeCommercetools


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        COMMERCETOOLS_AUTH_URL=AUTH_URL,
        COMMERCETOOLS_API_URL=API_URL,
        COMMERCETOOLS_PROJECT_KEY=PROJECT_KEY,
        COMMERCETOOLS_CLIENT_ID="client-id",
        COMMERCETOOLS_CLIENT_SECRET="client-secret",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def commercetools():
    return FakeCommercetools()


@pytest.fixture
def http_client(commercetools):
    return httpx.AsyncClient(transport=commercetools.transport)


@pytest.fixture
def credential_manager(settings, http_client, clock):
    return CredentialManager(settings, http_client, clock=clock)


@pytest.fixture
def product_service(settings, http_client, credential_manager):
    client = CommercetoolsProductClient(settings, http_client, credential_manager)
    normalizer = CommercetoolsNormalizer(
        preferred_currency=settings.PREFERRED_CURRENCY,
        fallback_locales=settings.FALLBACK_LOCALES,
    )
    return ProductService(client, normalizer, default_locale=settings.DEFAULT_LOCALE)
