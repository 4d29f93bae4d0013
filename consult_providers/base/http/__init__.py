"""HTTP utilities package for provider adapters.

Exposes pooled httpx async clients and the shared JSON provider base.
"""

from .client import aclose_all_clients, get_async_client
from .json_provider import BaseHTTPProvider, PreparedRequest, extract_error_message

__all__ = [
    "get_async_client",
    "aclose_all_clients",
    "BaseHTTPProvider",
    "PreparedRequest",
    "extract_error_message",
]
