"""SmartleadClient -- async HTTP client for the Smartlead REST API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import httpx

from smartlead_mcp.core.errors import ApiError, RateLimitError

if TYPE_CHECKING:
    from smartlead_mcp.config.schema import ApiConfig

_MESSAGE_KEYS = ("message", "error", "detail")


def _remote_message(payload: Any) -> str | None:
    """Pull the human-readable message out of an error body."""
    if isinstance(payload, dict):
        for key in _MESSAGE_KEYS:
            value = payload.get(key)
            if isinstance(value, str) and value:
                return value
    return None


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class SmartleadClient:
    """Client for the Smartlead campaign API.

    Every request carries the API key as the ``api_key`` query parameter
    and sends JSON bodies.

    Usage::

        async with SmartleadClient(api_key="...") as client:
            campaign = await client.call("GET", "/campaigns/42")
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://server.smartlead.ai/api/v1",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            params={"api_key": api_key},
            headers={"Content-Type": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: ApiConfig) -> SmartleadClient:
        if not config.api_key:
            msg = "SmartleadClient requires an API key"
            raise ValueError(msg)
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> SmartleadClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.is_success:
            return
        payload = _decode(response)
        remote = _remote_message(payload)
        message = f"Request failed with status code {response.status_code}"
        error_cls = RateLimitError if response.status_code == 429 else ApiError
        raise error_cls(
            message,
            status_code=response.status_code,
            remote_message=remote,
            payload=payload,
        )

    async def call(
        self,
        method: str,
        path: str,
        body: Any = None,
        query: dict[str, Any] | None = None,
    ) -> Any:
        """Issue one request and return the decoded response body.

        Raises:
            RateLimitError: On HTTP 429.
            ApiError: On any other non-2xx status or transport failure.
        """
        params = {k: v for k, v in (query or {}).items() if v is not None}
        try:
            response = await self._client.request(
                method,
                path,
                json=body,
                params=params or None,
            )
        except httpx.HTTPError as e:
            raise ApiError(str(e) or type(e).__name__) from e
        self._raise_for_status(response)
        return _decode(response)
