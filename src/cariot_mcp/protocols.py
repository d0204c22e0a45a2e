"""Protocol definitions for dependency injection and interface contracts."""

from typing import Protocol


class TokenProvider(Protocol):
    """Protocol for API token providers."""

    async def get_valid_token(self) -> str:
        """Get a valid API token.

        Returns:
            API token string for the ``x-auth-token`` header.

        Raises:
            AuthenticationError: If a token cannot be obtained.
        """
        ...

    def invalidate(self) -> None:
        """Forget the cached token so the next call fetches a fresh one."""
        ...
