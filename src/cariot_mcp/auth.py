"""Authentication management with reactive token refresh."""

import asyncio
import logging
from collections.abc import AsyncGenerator, Generator
from dataclasses import dataclass
from typing import Any

import httpx

from .config import Config
from .consts import AUTH_FAILED_MESSAGE, AUTH_TOKEN_HEADER
from .exceptions import AuthenticationError
from .models import ApiKeyCredentials, Credentials
from .protocols import TokenProvider

logger = logging.getLogger("cariot-mcp.auth")


class AuthManager:
    """API token manager.

    Responsibilities:
    - Cache the API token issued by the login endpoint
    - Exchange credentials for a new token when none is cached
    - Drop the cached token when the API rejects it

    There is no client-side expiry: a token stays cached until ``invalidate``
    is called after a 401.
    """

    def __init__(
        self,
        config: Config,
        credentials: Credentials,
        http_client: httpx.AsyncClient,
    ):
        """Initialize AuthManager.

        Args:
            config: Config instance with the login endpoint.
            credentials: Resolved credential variant.
            http_client: HTTP client (for token requests only, no auth flow).
        """
        self.config = config
        self.credentials = credentials
        self.http_client = http_client
        self._api_token: str | None = None
        self._lock = asyncio.Lock()

    @property
    def has_token(self) -> bool:
        """Whether a token is currently cached."""
        return self._api_token is not None

    async def get_valid_token(self) -> str:
        """Get the cached API token, exchanging credentials if there is none.

        Concurrent callers share a single exchange.

        Returns:
            API token string.

        Raises:
            AuthenticationError: If the exchange fails. The cache stays empty.
        """
        if self._api_token is not None:
            return self._api_token

        async with self._lock:
            if self._api_token is None:
                self._api_token = await self.exchange_token()
            return self._api_token

    def invalidate(self) -> None:
        """Forget the cached token."""
        if self._api_token is not None:
            logger.debug("Invalidating cached API token")
        self._api_token = None

    async def exchange_token(self) -> str:
        """Call the login endpoint and return the issued API token.

        Raises:
            AuthenticationError: On network failure, non-2xx status or a
                response without a usable ``api_token``.
        """
        kind = self.credentials.kind
        url, request_kwargs = self._login_request()
        logger.debug(f"Refreshing authentication token ({kind})")

        try:
            response = await self.http_client.post(url, **request_kwargs)
            response.raise_for_status()
            token = response.json()["api_token"]
            if not isinstance(token, str) or not token:
                raise ValueError("api_token is not a non-empty string")
        except (httpx.HTTPError, ValueError, KeyError, TypeError) as e:
            cause = str(e) or type(e).__name__
            logger.error(f"Error refreshing token ({kind}): {cause}")
            raise AuthenticationError(
                AUTH_FAILED_MESSAGE,
                suggestions=[
                    "Verify the configured Cariot API credentials",
                    "Check that the Cariot API is reachable",
                ],
                context={"credential_kind": str(kind), "login_url": url},
            ) from e

        logger.debug("Authentication token refreshed successfully")
        return token

    def _login_request(self) -> tuple[str, dict[str, Any]]:
        """Login URL and request arguments for the active credential variant."""
        credentials = self.credentials
        if isinstance(credentials, ApiKeyCredentials):
            return self.config.login_url, {
                "json": {
                    "api_access_key": credentials.access_key,
                    "api_access_secret": credentials.access_secret,
                }
            }

        return self.config.variant_login_url(credentials.kind), {
            "json": {},
            "headers": {"Authorization": f"Bearer {credentials.token}"},
        }


@dataclass
class PendingRequest:
    """A request travelling through the auth flow, with its retry state."""

    request: httpx.Request
    retried: bool = False


class CariotAuth(httpx.Auth):
    """httpx auth flow that injects the API token and retries once on 401.

    Before each request the current token is written to ``x-auth-token``.
    A 401 on a request that has not been retried drops the cached token,
    fetches a fresh one and re-sends a copy of the request exactly once.
    Every other response, including a 401 on the retry, goes back to the
    caller unchanged.
    """

    def __init__(self, token_provider: TokenProvider):
        self.token_provider = token_provider

    def sync_auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        raise RuntimeError("CariotAuth can only be used with httpx.AsyncClient")

    async def async_auth_flow(
        self, request: httpx.Request
    ) -> AsyncGenerator[httpx.Request, httpx.Response]:
        pending = PendingRequest(await self.authorize(request))

        while True:
            response = yield pending.request
            if not self.should_retry(pending, response):
                return

            logger.warning(
                f"Received 401 from {pending.request.url}, attempting re-authentication"
            )
            self.token_provider.invalidate()
            retry = await self.authorize(copy_request(pending.request))
            pending = PendingRequest(retry, retried=True)

    async def authorize(self, request: httpx.Request) -> httpx.Request:
        """Set the API token and JSON content type, keeping other headers."""
        token = await self.token_provider.get_valid_token()
        request.headers[AUTH_TOKEN_HEADER] = token
        request.headers["Content-Type"] = "application/json"
        logger.debug(f"HTTP request {request.method} {request.url}")
        return request

    @staticmethod
    def should_retry(pending: PendingRequest, response: httpx.Response) -> bool:
        """Whether the response calls for the single re-authenticated retry."""
        return response.status_code == 401 and not pending.retried


def copy_request(request: httpx.Request) -> httpx.Request:
    """Copy of a request with its own headers and the same body stream."""
    return httpx.Request(
        request.method,
        request.url,
        headers=request.headers.copy(),
        stream=request.stream,
        extensions=dict(request.extensions),
    )
