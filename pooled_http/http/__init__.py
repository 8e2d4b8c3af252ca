"""
HTTP Client Module

Pooled HTTP client facade and query/URL helpers.
"""

from .adapter import PooledAdapter
from .client import FORM_CONTENT_TYPE, JSON_CONTENT_TYPE, HttpClient
from .query import UrlDecodeError, decode_url, decode_url_strict, parse_query_string_to_map

__all__ = [
    "HttpClient",
    "PooledAdapter",
    "FORM_CONTENT_TYPE",
    "JSON_CONTENT_TYPE",
    "UrlDecodeError",
    "decode_url",
    "decode_url_strict",
    "parse_query_string_to_map",
]
