"""
pooled-http

GET/POST helpers over a shared, bounded HTTP connection pool.
"""

from pooled_http.config import PoolConfig
from pooled_http.http import (
    HttpClient,
    UrlDecodeError,
    decode_url,
    decode_url_strict,
    parse_query_string_to_map,
)

__version__ = "0.1.0"

__all__ = [
    "HttpClient",
    "PoolConfig",
    "UrlDecodeError",
    "decode_url",
    "decode_url_strict",
    "parse_query_string_to_map",
]
