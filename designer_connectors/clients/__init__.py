"""HTTP transport clients."""

from designer_connectors.clients.http_client import HttpClient, HttpRequestOptions, HttpxHttpClient

__all__ = ["HttpClient", "HttpRequestOptions", "HttpxHttpClient"]
