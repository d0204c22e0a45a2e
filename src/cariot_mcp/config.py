"""Configuration management."""

from functools import cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import ConfigDict, Field, computed_field, field_validator
from pydantic_settings import BaseSettings

from .consts import DEFAULT_BASE_URL, DEFAULT_TIMEZONE, LOGIN_URL_PATH


class Config(BaseSettings):
    """Configuration with computed API endpoints.

    Credentials are all optional here; which of them are required depends on
    the authentication mode and is decided by ``resolve_credentials``.
    """

    model_config = ConfigDict(
        env_prefix="CARIOT_", case_sensitive=False, extra="ignore"
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL for the Cariot REST API",
    )
    api_access_key: str | None = Field(
        default=None, description="API access key (used with api_access_secret)"
    )
    api_access_secret: str | None = Field(
        default=None, repr=False, description="API access secret"
    )
    api_access_token: str | None = Field(
        default=None, repr=False, description="Bearer access token for login"
    )
    api_id_token: str | None = Field(
        default=None, repr=False, description="Identity token for login"
    )
    log_level: str = Field(
        default="INFO",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
        description="Logging level",
    )
    timeout_seconds: float = Field(
        default=15, gt=0, le=300, description="HTTP request timeout in seconds"
    )
    timezone: str = Field(
        default=DEFAULT_TIMEZONE,
        description="Timezone used to decide which daily reports are from today",
    )

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("timezone")
    @classmethod
    def known_timezone(cls, value: str) -> str:
        """Reject names the IANA database does not know."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError, OSError) as e:
            raise ValueError(f"Unknown timezone: {value}") from e
        return value

    @computed_field
    @property
    def login_url(self) -> str:
        """URL for exchanging an API key pair for an API token."""
        return f"{self.base_url}{LOGIN_URL_PATH}"

    def variant_login_url(self, variant: str) -> str:
        """URL for exchanging a bearer or identity token for an API token."""
        return f"{self.login_url}/{variant}"

    def api_url(self, path: str) -> str:
        """URL for a resource path under the API base."""
        return f"{self.base_url}{path}"


@cache
def get_config() -> Config:
    """Get a cached Config instance."""
    return Config()
