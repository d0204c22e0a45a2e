"""Cariot client for low-level API calls."""

import logging
from typing import Any

import httpx

from .auth import AuthManager, CariotAuth
from .config import Config, get_config
from .consts import USER_AGENT
from .credentials import resolve_credentials
from .models import Credentials
from .protocols import TokenProvider

logger = logging.getLogger("cariot-mcp.client")


class CariotClient:
    """Cariot API client with authentication.

    Responsibilities:
    - Provide high-level HTTP API methods
    - Route every call through the token-injecting, 401-retrying auth flow
    - Log failed requests and hand the original error back to the caller
    """

    def __init__(
        self,
        config: Config | None = None,
        credentials: Credentials | None = None,
        token_provider: TokenProvider | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        """Initialize CariotClient.

        Args:
            config: Config instance. If None, uses get_config().
            credentials: Credential variant. If None and no token_provider is
                given, resolved from config.
            token_provider: API token provider. If None, creates AuthManager.
            http_client: HTTP client. If None, creates a new one.

        Raises:
            ConfigurationError: If credentials must be resolved and none are set.
        """
        self.config = config or get_config()

        self.http_client = http_client or httpx.AsyncClient(
            headers={"User-Agent": USER_AGENT},
            timeout=self.config.timeout_seconds,
        )

        if token_provider is None:
            token_provider = AuthManager(
                self.config,
                credentials or resolve_credentials(self.config),
                self.http_client,
            )
        self.token_provider = token_provider
        self.auth = CariotAuth(self.token_provider)

        logger.info(f"Cariot client created for {self.config.base_url}")

    async def __aenter__(self) -> "CariotClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self.http_client.aclose()
        logger.debug("Cariot client closed")

    async def get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET a resource path with authentication.

        Args:
            path: Resource path under the API base, e.g. ``/drivers``.
            params: Query parameters.

        Returns:
            Parsed JSON data.

        Raises:
            AuthenticationError: If no API token can be obtained.
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses, including a
                401 on the re-authenticated retry.
            httpx.RequestError: For network errors, timeouts, DNS failures.
        """
        return await self._request("GET", path, params=params)

    async def post_json(self, path: str, json: Any = None) -> Any:
        """POST JSON to a resource path with authentication.

        Args:
            path: Resource path under the API base.
            json: JSON-serializable request body.

        Returns:
            Parsed JSON response data.

        Raises:
            AuthenticationError: If no API token can be obtained.
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses.
            httpx.RequestError: For network errors, timeouts, DNS failures.
        """
        return await self._request("POST", path, json=json)

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        url = self.config.api_url(path)
        logger.debug(f"{method} {url}")

        try:
            response = await self.http_client.request(
                method, url, auth=self.auth, **kwargs
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"API request failed: {method} {url}: {e}")
            raise

        logger.debug(f"{method} {url} successful")
        return response.json()
