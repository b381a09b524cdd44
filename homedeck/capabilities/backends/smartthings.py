"""
SmartThings REST API backend.

Handles authentication, HTTP transport and translation of failed
responses into gateway exceptions.
"""

import logging
from typing import Any, Optional

import httpx

from ..exceptions import ConfigurationError, RemoteError, TransportError

logger = logging.getLogger("homedeck.backends.smartthings")

SMARTTHINGS_API_BASE = "https://api.smartthings.com/v1"


def _error_message(resp: httpx.Response) -> Optional[str]:
    """Pull a message out of an error body; never raises."""
    try:
        body = resp.json()
    except ValueError:
        return None

    if not isinstance(body, dict):
        return None

    message = body.get("message")
    if isinstance(message, str) and message:
        return message

    # SmartThings also nests errors as {"error": {"code": ..., "message": ...}}
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class SmartThingsBackend:
    """SmartThings REST API backend."""

    def __init__(
        self,
        token: Optional[str] = None,
        base_url: str = SMARTTHINGS_API_BASE,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self._token = token or None
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @property
    def backend_type(self) -> str:
        return "smartthings"

    @property
    def has_token(self) -> bool:
        return self._token is not None

    def set_token(self, token: Optional[str]) -> None:
        self._token = token or None

    async def request(
        self,
        method: str,
        endpoint: str,
        payload: Optional[dict[str, Any]] = None,
    ) -> Any:
        """
        Perform an authenticated request against the API.

        Args:
            method: HTTP method, e.g. "GET" or "POST"
            endpoint: Path relative to the base URL, e.g. "/devices"
            payload: Optional JSON body

        Returns:
            Decoded JSON body, or an empty dict for an empty success body

        Raises:
            ConfigurationError: No token is set; no request is attempted
            TransportError: Network failure or unparsable success body
            RemoteError: Non-success status code
        """
        if not self._token:
            raise ConfigurationError()

        headers = {"Authorization": f"Bearer {self._token}"}

        try:
            resp = await self._client.request(method, endpoint, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error("SmartThings API error: %s %s: %s", method, endpoint, e)
            raise TransportError(endpoint, e) from e

        if not resp.is_success:
            error = RemoteError(resp.status_code, _error_message(resp))
            logger.error(
                "SmartThings API error: %s %s -> %d %s",
                method,
                endpoint,
                resp.status_code,
                error.message,
            )
            raise error

        if not resp.content:
            return {}

        try:
            return resp.json()
        except ValueError as e:
            logger.error("SmartThings API returned invalid JSON: %s %s", method, endpoint)
            raise TransportError(endpoint, e) from e

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()
        logger.info("SmartThings client closed")
