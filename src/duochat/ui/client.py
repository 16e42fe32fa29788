"""HTTP client for the chat endpoint.

Hides the transport used to reach the server. One POST per user turn, no
timeout, no retry.
"""

from typing import Any

import httpx

from .config import CHAT_ENDPOINT, DEFAULT_SERVER_URL


class RelayClient:
    """Posts chat requests to a running duochat server."""

    def __init__(
        self,
        base_url: str = DEFAULT_SERVER_URL,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(base_url=base_url, timeout=None, transport=transport)

    async def ask(self, payload: dict[str, Any]) -> dict[str, Any]:
        """Send one chat request.

        Raises:
            httpx.HTTPError: On transport failure or a non-2xx status
            ValueError: If the body is not JSON
        """
        response = await self._http.post(CHAT_ENDPOINT, json=payload)
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "RelayClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
