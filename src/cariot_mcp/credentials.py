"""Credential resolution from process configuration."""

import logging

from .config import Config
from .exceptions import ConfigurationError
from .models import (
    AccessTokenCredentials,
    ApiKeyCredentials,
    Credentials,
    IdTokenCredentials,
)

logger = logging.getLogger("cariot-mcp.credentials")

REQUIRED_VARIABLES = (
    "CARIOT_API_ACCESS_KEY and CARIOT_API_ACCESS_SECRET",
    "CARIOT_API_ACCESS_TOKEN",
    "CARIOT_API_ID_TOKEN",
)


def resolve_credentials(config: Config) -> Credentials:
    """Pick the authentication mode from configuration.

    Precedence: API key pair, then bearer access token, then identity token.
    Empty strings count as unset.

    Args:
        config: Config instance to read credentials from.

    Returns:
        The credential variant for the first configured mode.

    Raises:
        ConfigurationError: If none of the credential sets is configured.
    """
    if config.api_access_key and config.api_access_secret:
        logger.debug("Using API key credentials")
        return ApiKeyCredentials(
            access_key=config.api_access_key,
            access_secret=config.api_access_secret,
        )
    if config.api_access_token:
        logger.debug("Using access token credentials")
        return AccessTokenCredentials(token=config.api_access_token)
    if config.api_id_token:
        logger.debug("Using ID token credentials")
        return IdTokenCredentials(token=config.api_id_token)

    raise ConfigurationError(
        "API credentials are required: set " + ", or ".join(REQUIRED_VARIABLES),
        suggestions=[f"Set {names}" for names in REQUIRED_VARIABLES],
        context={"base_url": config.base_url},
    )
