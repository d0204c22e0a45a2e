"""Cariot MCP custom exceptions.

Only failures that gain useful context get a custom type. Transport errors
from the Cariot API (``httpx.HTTPStatusError``, ``httpx.RequestError``) pass
through unwrapped and carry the API error text to the tools.
"""


class CariotMCPError(Exception):
    """Base exception for all Cariot MCP errors.

    Carries actionable suggestions and context beyond standard exceptions.
    """

    def __init__(
        self,
        message: str,  # the error message
        *,
        errors: list[str] = None,  # detailed list of errors (if available)
        suggestions: list[str] = None,  # remedial actions
        context: dict = None,  # additional detailed context
    ):
        """Initialize CariotMCPError.

        Args:
            message: Primary error message for users
            errors: List of specific error details
            suggestions: List of actionable suggestions for resolution
            context: Additional context information as key-value pairs
        """
        super().__init__(message)
        self.message = message
        self.errors = errors or []
        self.suggestions = suggestions or []
        self.context = context or {}


class ConfigurationError(CariotMCPError):
    """Missing or invalid credential configuration.

    Fatal at startup and recoverable only by the user fixing the environment
    outside the session. Never retried.
    """

    pass


class AuthenticationError(CariotMCPError):
    """The login exchange failed (network, non-2xx or malformed response).

    The message is always the same generic text; the underlying cause is
    chained and logged but not exposed in ``errors``.
    """

    pass


class ChartDataError(CariotMCPError):
    """Chart input is inconsistent - recoverable by the LLM fixing its input."""

    pass
