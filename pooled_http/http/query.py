"""
Query Helpers

Query-string parsing and URL decoding.
"""

from __future__ import annotations

import logging
import re
from typing import Optional
from urllib.parse import unquote_to_bytes

logger = logging.getLogger(__name__)

# A '%' not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


class UrlDecodeError(ValueError):
    """Raised when a URL contains an incomplete or non-hex percent escape."""

    def __init__(self, url: str, position: int) -> None:
        super().__init__(f"Invalid percent escape at position {position}: {url!r}")
        self.url = url
        self.position = position


def parse_query_string_to_map(url: Optional[str]) -> dict[str, str]:
    """
    Parse the query string of a URL into a dict.

    Only pairs that split into exactly a key and a value on '=' are kept;
    anything else is skipped. Keys and values are returned as-is, without
    URL-decoding. Later duplicates overwrite earlier ones.
    """
    pairs: dict[str, str] = {}
    if not url or "?" not in url:
        return pairs

    query_string = url.split("?", 1)[1]
    for param in query_string.split("&"):
        pair = param.split("=")
        if len(pair) == 2:
            pairs[pair[0]] = pair[1]
    return pairs


def decode_url_strict(url: str, charset: str = "utf-8") -> str:
    """
    Decode a form/URL-encoded string.

    '+' decodes to a space and %XY escapes decode as bytes in the given
    charset (malformed byte sequences are replaced).

    Raises:
        UrlDecodeError: if a '%' is not followed by two hex digits
    """
    bad = _BAD_ESCAPE.search(url)
    if bad:
        raise UrlDecodeError(url, bad.start())
    return unquote_to_bytes(url.replace("+", " ")).decode(charset, errors="replace")


def decode_url(url: Optional[str], charset: str = "utf-8") -> Optional[str]:
    """Lenient decode_url_strict: returns None instead of raising."""
    if url is None:
        return None
    try:
        return decode_url_strict(url, charset)
    except UrlDecodeError as e:
        logger.debug("URL decode failed: %s", e)
        return None
