"""Pytest configuration and shared fixtures"""

import os

import httpx
import pytest

from cariot_mcp.client import CariotClient
from cariot_mcp.config import Config
from cariot_mcp.models import AccessTokenCredentials, ApiKeyCredentials

# Configure pytest-asyncio
pytest_plugins = ("pytest_asyncio",)

TEST_BASE_URL = "https://test.cariot.jp/api"


def login_response(token: str) -> httpx.Response:
    """Successful login response as issued by the Cariot API."""
    return httpx.Response(200, json={"api_token": token, "timestamp": 1735689600})


class FakeCariotAPI:
    """httpx.MockTransport handler that records and answers Cariot calls.

    Login calls are answered from ``login_responses`` and every other call
    from ``api_responses``, each in order. Once ``api_responses`` is used up
    an empty item list is returned.
    """

    def __init__(self, login_responses=None, api_responses=None):
        self.login_responses = list(login_responses or [login_response("t1")])
        self.api_responses = list(api_responses or [])
        self.login_requests: list[httpx.Request] = []
        self.api_requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path.startswith("/api/login"):
            self.login_requests.append(request)
            response = self.login_responses.pop(0)
        else:
            self.api_requests.append(request)
            if self.api_responses:
                response = self.api_responses.pop(0)
            else:
                response = httpx.Response(200, json={"items": []})

        if isinstance(response, Exception):
            raise response
        return response


def mock_http_client(fake: FakeCariotAPI) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(fake))


@pytest.fixture
def clean_env():
    """Fixture that temporarily clears CARIOT_* environment variables.

    This ensures Config tests see the true defaults without interference
    from environment variables that might be set in the user's shell.
    """
    cariot_vars = {
        key: value for key, value in os.environ.items() if key.startswith("CARIOT_")
    }

    for key in cariot_vars:
        os.environ.pop(key, None)

    try:
        yield
    finally:
        for key, value in cariot_vars.items():
            os.environ[key] = value


@pytest.fixture
def clean_config(clean_env):
    """Config instance built from a clean environment."""
    return Config()


@pytest.fixture
def config(clean_env):
    """Config with an API key pair pointing at the test base URL"""
    return Config(
        base_url=TEST_BASE_URL,
        api_access_key="key",
        api_access_secret="secret",
        log_level="DEBUG",
    )


@pytest.fixture
def api_key_credentials():
    return ApiKeyCredentials(access_key="key", access_secret="secret")


@pytest.fixture
def access_token_credentials():
    return AccessTokenCredentials(token="bearer-token")


@pytest.fixture
def fake_api():
    """Fake Cariot API issuing token t1 and answering with empty lists"""
    return FakeCariotAPI()


@pytest.fixture
def client(config, fake_api):
    """CariotClient wired to the fake Cariot API"""
    return CariotClient(config, http_client=mock_http_client(fake_api))
