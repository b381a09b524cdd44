"""
Base protocol for API backends.
"""

from typing import Any, Optional, Protocol, runtime_checkable


@runtime_checkable
class Backend(Protocol):
    """
    Protocol for API backends.

    Backends handle the actual communication with the remote service:
    authentication, HTTP transport and error translation.
    """

    @property
    def backend_type(self) -> str:
        """Identifier for this backend type (e.g., 'smartthings')."""
        ...

    @property
    def has_token(self) -> bool:
        """Check if an access token is configured."""
        ...

    def set_token(self, token: Optional[str]) -> None:
        """Replace the access token used for subsequent requests."""
        ...

    async def request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Perform an authenticated request and return the decoded body.

        Args:
            method: HTTP method
            endpoint: Path relative to the API base URL
            payload: Optional JSON body

        Returns:
            Decoded JSON body
        """
        ...

    async def aclose(self) -> None:
        """Release transport resources."""
        ...
