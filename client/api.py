"""
API client for asynchronous communication with the portal server
without blocking the UI event loop
"""

import logging
import time
from typing import Any

import httpx

from core.config import Settings
from core.constants import CLIENT_USER_AGENT
from core.models.network import RequestState
from core.types import HTTPMethod

logger = logging.getLogger(__name__)


class APIClient:
    """Async API client for communication with the server."""

    def __init__(
        self,
        endpoint: str,
        use_ssl: bool,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize a new instance of the APIClient class.

        Args:
            endpoint: Host (and optional port) of the API
            use_ssl: Whether to use SSL
            timeout: Timeout in seconds for each call
            transport: Custom httpx transport, mostly for tests
        """
        protocol = "https" if use_ssl else "http"
        self.client = httpx.AsyncClient(
            base_url=f"{protocol}://{endpoint}/api",
            headers={"User-Agent": CLIENT_USER_AGENT},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None
    ) -> "APIClient":
        return cls(
            settings.api_endpoint,
            settings.api_endpoint_ssl,
            timeout=settings.api_timeout,
            transport=transport,
        )

    async def request(
        self,
        endpoint: str,
        method: HTTPMethod = "GET",
        data: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
        token: str | None = None,
    ) -> RequestState:
        """
        Do a single request to the server.

        Never raises for transport or decoding problems: they are reported
        in the returned state, like application errors.

        Args:
            endpoint: API endpoint, relative to the base URL
            method: HTTP method (GET, POST, PUT, DELETE)
            data: JSON body to send
            params: Query string parameters
            headers: Extra headers to send
            token: Bearer token to attach, if any

        Returns:
            The completed request state
        """
        headers = dict(headers or {})

        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self.client.request(
                method,
                endpoint,
                json=data,
                params=params,
                headers=headers,
            )
        except httpx.HTTPError as e:
            logger.error(f"Transport error for {method} {endpoint}: {e}")
            return RequestState(
                timestamp=time.time(),
                success=False,
                error={"message": str(e) or type(e).__name__},
            )

        try:
            body = response.json() if response.content else None
        except ValueError as e:
            logger.error(f"Malformed body for {method} {endpoint}: {e}")
            return RequestState(
                timestamp=time.time(),
                success=False,
                error={"message": f"Malformed response body: {e}"},
                status_code=response.status_code,
            )

        if response.is_error:
            logger.error(f"{method} {endpoint} failed with HTTP {response.status_code}")
            return RequestState(
                timestamp=time.time(),
                success=False,
                data=body,
                error=self._extract_error(body, response),
                status_code=response.status_code,
            )

        # 2xx with an explicit `success: false` is still an application failure
        if isinstance(body, dict) and body.get("success") is False:
            return RequestState(
                timestamp=time.time(),
                success=False,
                data=body,
                error=self._extract_error(body, response),
                status_code=response.status_code,
            )

        return RequestState(
            timestamp=time.time(),
            success=True,
            data=body,
            status_code=response.status_code,
        )

    @staticmethod
    def _extract_error(body: Any, response: httpx.Response) -> dict:
        if isinstance(body, dict):
            for key in ("error", "message", "detail"):
                if isinstance(body.get(key), str) and body[key]:
                    return {"message": body[key]}
        return {"message": f"HTTP {response.status_code} {response.reason_phrase}".strip()}

    async def aclose(self) -> None:
        await self.client.aclose()
