"""Pooled HTTP client for the Sunboard API.

One ``httpx.AsyncClient`` is reused across calls. Failures surface as
``SunboardAPIError`` carrying the endpoint, status and a truncated body.
There is no retry: review writes are fire-and-forget, and the caller decides
whether a failure matters.
"""

import logging
from typing import Any

import httpx

from sunboard.utils.config import get_settings
from sunboard.utils.exceptions import SunboardAPIError

logger = logging.getLogger("sunboard.client.http")

DEFAULT_TIMEOUT = httpx.Timeout(connect=5.0, read=30.0, write=10.0, pool=5.0)


def _build_headers(api_key: str) -> dict[str, str]:
    headers: dict[str, str] = {"Content-Type": "application/json"}
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"
    return headers


def _route_path(path: str) -> str:
    """Match the server's routing to avoid 307 redirects from FastAPI.

    Collection roots are mounted as ``/projects/``; nested routes such as
    ``/reviews/feedback`` or ``/tasks/{id}`` have no trailing slash.
    """
    bare = path.strip("/")
    if "/" in bare:
        return "/" + bare
    return f"/{bare}/"


class SunboardHTTPClient:
    """Thin async wrapper over httpx with structured errors."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = get_settings()
        self._base_url = base_url or settings.api.url
        self._api_key = settings.security.api_key if api_key is None else api_key
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers=_build_headers(self._api_key),
                follow_redirects=True,
                timeout=DEFAULT_TIMEOUT,
                transport=self._transport,
            )
        return self._client

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json_data: dict[str, Any] | None = None,
    ) -> Any:
        url = _route_path(path)
        endpoint = f"{method} {path}"
        try:
            client = await self._get_client()
            resp = await client.request(method, url, params=params, json=json_data)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            raise SunboardAPIError(
                f"{endpoint} failed with {status}",
                endpoint=endpoint,
                status_code=status,
                body=exc.response.text[:500],
            ) from exc
        except httpx.TimeoutException as exc:
            raise SunboardAPIError(
                f"Timeout on {endpoint}",
                endpoint=endpoint,
                body="Request timed out",
            ) from exc
        except httpx.TransportError as exc:
            raise SunboardAPIError(
                f"Cannot connect to Sunboard API at {self._base_url}",
                endpoint=endpoint,
                body=str(exc),
            ) from exc

        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    async def post(self, path: str, data: dict[str, Any]) -> Any:
        return await self._request("POST", path, json_data=data)

    async def put(self, path: str, data: dict[str, Any]) -> Any:
        return await self._request("PUT", path, json_data=data)

    async def patch(self, path: str, data: dict[str, Any]) -> Any:
        return await self._request("PATCH", path, json_data=data)

    async def delete(self, path: str) -> Any:
        return await self._request("DELETE", path)

    async def close(self) -> None:
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None


# Module-level singleton used by the CLI.
_default_client: SunboardHTTPClient | None = None


def get_http_client() -> SunboardHTTPClient:
    """Get or create the module-level HTTP client singleton."""
    global _default_client
    if _default_client is None:
        _default_client = SunboardHTTPClient()
    return _default_client


async def close_http_client() -> None:
    """Close the module-level HTTP client. Call during shutdown."""
    global _default_client
    if _default_client is not None:
        await _default_client.close()
        _default_client = None
