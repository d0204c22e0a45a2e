"""Tests for credential resolution"""

import pytest

from cariot_mcp.config import Config
from cariot_mcp.credentials import resolve_credentials
from cariot_mcp.exceptions import ConfigurationError
from cariot_mcp.models import (
    AccessTokenCredentials,
    ApiKeyCredentials,
    CredentialKind,
    IdTokenCredentials,
)


class TestResolveCredentials:
    """Test credential variant selection and precedence"""

    @pytest.mark.parametrize(
        "settings,expected",
        [
            (
                {"api_access_key": "k", "api_access_secret": "s"},
                ApiKeyCredentials(access_key="k", access_secret="s"),
            ),
            (
                {
                    "api_access_key": "k",
                    "api_access_secret": "s",
                    "api_access_token": "at",
                    "api_id_token": "it",
                },
                ApiKeyCredentials(access_key="k", access_secret="s"),
            ),
            (
                {"api_access_token": "at", "api_id_token": "it"},
                AccessTokenCredentials(token="at"),
            ),
            ({"api_id_token": "it"}, IdTokenCredentials(token="it")),
            (
                {"api_access_key": "k", "api_id_token": "it"},
                IdTokenCredentials(token="it"),
            ),
            (
                {"api_access_key": "k", "api_access_secret": "", "api_access_token": "at"},
                AccessTokenCredentials(token="at"),
            ),
        ],
    )
    def test_precedence(self, clean_env, settings, expected):
        """API key pair wins, then access token, then id token"""
        assert resolve_credentials(Config(**settings)) == expected

    def test_missing_credentials(self, clean_env):
        """No credential set at all is a configuration error naming the variables"""
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_credentials(Config())

        message = exc_info.value.message
        assert "CARIOT_API_ACCESS_KEY" in message
        assert "CARIOT_API_ACCESS_SECRET" in message
        assert "CARIOT_API_ACCESS_TOKEN" in message
        assert "CARIOT_API_ID_TOKEN" in message

    def test_key_without_secret_is_not_enough(self, clean_env):
        """A lone access key does not select API key mode"""
        with pytest.raises(ConfigurationError):
            resolve_credentials(Config(api_access_key="k"))

    def test_reads_environment(self, clean_env, monkeypatch):
        """Credentials come from CARIOT_* environment variables"""
        monkeypatch.setenv("CARIOT_API_ACCESS_TOKEN", "env-token")

        credentials = resolve_credentials(Config())

        assert credentials.kind == CredentialKind.ACCESS_TOKEN
        assert credentials.token == "env-token"

    def test_idempotent(self, clean_env, monkeypatch):
        """Same environment gives the same result"""
        monkeypatch.setenv("CARIOT_API_ACCESS_KEY", "k")
        monkeypatch.setenv("CARIOT_API_ACCESS_SECRET", "s")

        assert resolve_credentials(Config()) == resolve_credentials(Config())

    def test_secrets_hidden_from_repr(self):
        """Secrets never show up in logs via repr"""
        assert "s3cret" not in repr(ApiKeyCredentials(access_key="k", access_secret="s3cret"))
        assert "zz-hidden-zz" not in repr(AccessTokenCredentials(token="zz-hidden-zz"))
