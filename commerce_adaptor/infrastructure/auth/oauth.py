import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Optional

import httpx
from pydantic import ValidationError

from commerce_adaptor.core.config import Settings
from commerce_adaptor.core.exceptions import AuthError, ConfigurationError
from commerce_adaptor.core.logging import get_logger
from commerce_adaptor.domain.models.commercetools import OAuthTokenResponse
from commerce_adaptor.infrastructure.auth.basic_auth import BasicAuthHandler

logger = get_logger(__name__)


def epoch_millis() -> float:
    """Current wall-clock time in epoch milliseconds."""
    return time.time() * 1000


@dataclass(frozen=True)
class Credential:
    """A bearer token and the instant it stops being served from cache."""
    token: str
    expires_at_epoch_ms: float

    def is_valid(self, now_ms: float) -> bool:
        """Check if the credential can still be used at ``now_ms``."""
        return now_ms < self.expires_at_epoch_ms


class CredentialManager:
    """
    Obtains and caches the commercetools bearer credential.

    One instance is owned by the application and shared by every request.
    The cached credential is only ever replaced as a whole, and concurrent
    callers that find it expired wait on a single in-flight grant request
    instead of each starting their own.
    """

    def __init__(
        self,
        settings: Settings,
        http_client: httpx.AsyncClient,
        clock: Callable[[], float] = epoch_millis,
    ):
        """
        Initialize the credential manager.

        Args:
            settings: Settings carrying the commercetools endpoints and client credentials
            http_client: HTTP client used for the token request
            clock: Returns the current time in epoch milliseconds
        """
        self.settings = settings
        self.http_client = http_client
        self.clock = clock

        self._credential: Optional[Credential] = None
        # Created on first use so it belongs to the loop serving requests
        self._refresh_lock: Optional[asyncio.Lock] = None

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    def validate_config(self) -> None:
        """
        Ensure every commercetools setting is present.

        Raises:
            ConfigurationError: Naming every missing setting
        """
        missing = self.settings.missing_commercetools_settings()
        if missing:
            logger.error(
                "Missing required commercetools configuration",
                extra={"data": {"missing": missing}}
            )
            raise ConfigurationError(missing)

    async def get_access_token(self) -> str:
        """
        Return a valid bearer token, requesting a new one only when needed.

        Returns:
            The access token

        Raises:
            ConfigurationError: If any required setting is absent
            AuthError: If the token request fails
        """
        self.validate_config()

        credential = self._credential
        if credential and credential.is_valid(self.clock()):
            logger.debug("Using cached commercetools token")
            return credential.token

        if self._refresh_lock is None:
            self._refresh_lock = asyncio.Lock()

        async with self._refresh_lock:
            # Another caller may have refreshed while we waited
            credential = self._credential
            if credential and credential.is_valid(self.clock()):
                logger.debug("Using token refreshed by a concurrent request")
                return credential.token

            credential = await self._request_credential()
            self._credential = credential
            return credential.token

    def invalidate(self) -> None:
        """Drop the cached credential so the next call requests a new one."""
        self._credential = None
        logger.info("Cached commercetools token invalidated")

    async def _request_credential(self) -> Credential:
        """
        Perform the client-credentials grant.

        Returns:
            Newly issued credential

        Raises:
            AuthError: If the grant is rejected, unreachable or malformed
        """
        token_url = f"{self.settings.COMMERCETOOLS_AUTH_URL.rstrip('/')}/oauth/token"
        headers = BasicAuthHandler(
            self.settings.COMMERCETOOLS_CLIENT_ID,
            self.settings.COMMERCETOOLS_CLIENT_SECRET,
        ).generate_header()

        requested_at = self.clock()

        try:
            response = await self.http_client.post(
                token_url,
                data={"grant_type": "client_credentials"},
                headers=headers
            )
            response.raise_for_status()
            token_data = OAuthTokenResponse.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            logger.error(f"HTTP error during token acquisition: {e.response.status_code} {e.response.reason_phrase}")
            raise AuthError(
                f"Failed to get commercetools token: {e.response.reason_phrase}",
                context={"upstream_status": e.response.status_code},
                original_exception=e
            )
        except httpx.RequestError as e:
            logger.error(f"Request error during token acquisition: {str(e)}")
            raise AuthError(
                f"Failed to connect to token endpoint: {str(e)}",
                original_exception=e
            )
        except (ValueError, ValidationError) as e:
            logger.error(f"Malformed token response: {str(e)}")
            raise AuthError(
                "Malformed token response from commercetools",
                original_exception=e
            )

        # Refresh ahead of the platform's own expiry
        lifetime_seconds = token_data.expires_in - self.settings.TOKEN_EXPIRY_MARGIN_SECONDS
        credential = Credential(
            token=token_data.access_token,
            expires_at_epoch_ms=requested_at + lifetime_seconds * 1000,
        )

        logger.info(
            "Obtained commercetools token",
            extra={"data": {"expires_in": token_data.expires_in, "scope": token_data.scope}}
        )
        return credential
