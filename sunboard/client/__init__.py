"""HTTP client for the Sunboard API."""

from sunboard.client.http import SunboardHTTPClient, close_http_client, get_http_client

__all__ = ["SunboardHTTPClient", "close_http_client", "get_http_client"]
