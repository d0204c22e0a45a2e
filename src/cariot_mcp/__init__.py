"""Cariot MCP Server Package

A Model Context Protocol (MCP) server exposing the Cariot fleet-telematics
API (drivers, vehicles, daily reports, realtime device snapshots) as tools.
"""

from .auth import AuthManager, CariotAuth
from .client import CariotClient
from .config import Config, get_config
from .consts import PACKAGE_VERSION
from .credentials import resolve_credentials
from .exceptions import (
    AuthenticationError,
    CariotMCPError,
    ChartDataError,
    ConfigurationError,
)
from .tools import Tools

__version__ = PACKAGE_VERSION

__all__ = [
    "__version__",
    "get_config",
    "resolve_credentials",
    "Config",
    "AuthManager",
    "CariotAuth",
    "CariotClient",
    "Tools",
    "CariotMCPError",
    "ConfigurationError",
    "AuthenticationError",
    "ChartDataError",
]
