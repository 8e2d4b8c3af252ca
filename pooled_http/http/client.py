"""
HTTP Client

Provides a pooled HTTP client facade with GET, form POST and JSON POST
helpers. Every call returns the decoded response body as text.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

import requests
from requests.structures import CaseInsensitiveDict

from pooled_http.config import PoolConfig

from .adapter import PooledAdapter
from .query import decode_url, parse_query_string_to_map

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json;charset=UTF-8"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"


def _declared_charset(response: requests.Response) -> Optional[str]:
    """Charset named in the Content-Type header, if any."""
    # requests falls back to ISO-8859-1 for text/* without a charset
    if "charset" not in response.headers.get("content-type", "").lower():
        return None
    return requests.utils.get_encoding_from_headers(response.headers)


def _stringify(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class HttpClient:
    """
    HTTP client backed by a shared, bounded connection pool.

    Usage:
        client = HttpClient(PoolConfig())

        body = client.get("https://api.example.com/data", params={"page": 1})
        body = client.post("https://api.example.com/form", {"k": "v"})
        body = client.post_with_json("https://api.example.com/items", '{"x":1}')

    The client is safe to share between threads. Status codes are not
    inspected, and transport errors propagate unchanged to the caller.
    """

    def __init__(
        self,
        config: Optional[PoolConfig] = None,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        """
        Initialize HTTP client.

        Args:
            config: Pool limits and timeouts (defaults to PoolConfig())
            session: Pre-built requests session; a new one is created if omitted
        """
        self.config = config or PoolConfig()
        self._session = session if session is not None else requests.Session()

        adapter = PooledAdapter(self.config)
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)
        self._session.headers.update(self.config.default_headers)
        if self.config.proxy:
            self._session.proxies = {
                "http": self.config.proxy,
                "https": self.config.proxy,
            }

    @property
    def session(self) -> requests.Session:
        return self._session

    def _execute(
        self,
        method: str,
        url: str,
        *,
        params: Optional[dict[str, str]] = None,
        headers: Optional[Mapping[str, str]] = None,
        data: Any = None,
    ) -> str:
        """
        Send a request and return the body as text.

        The response is streamed and read inside a with-block so that it
        is closed on every exit path, including a failed body read.
        """
        logger.debug("HTTP %s %s", method, url)
        try:
            with self._session.request(
                method,
                url,
                params=params,
                headers=headers,
                data=data,
                timeout=self.config.timeout,
                stream=True,
            ) as response:
                content = response.content
                charset = _declared_charset(response) or self.config.charset
                logger.debug("HTTP %s %s -> %s (%d bytes)", method, url, response.status_code, len(content))
                return content.decode(charset, errors="replace")
        except Exception:
            logger.debug("HTTP %s %s failed", method, url, exc_info=True)
            raise

    def get(
        self,
        url: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Make a GET request.

        Args:
            url: Request URL; an existing query string is kept
            params: Query parameters appended to the URL, values stringified
                (booleans as "true"/"false", None as "null")
            headers: Request headers

        Returns:
            Response body as text
        """
        query = {key: _stringify(value) for key, value in params.items()} if params else None
        return self._execute("GET", url, params=query, headers=headers)

    def post(self, url: str, params: Mapping[str, str]) -> str:
        """Make a form-urlencoded POST request."""
        # Set explicitly so an empty form still carries the form content type
        return self._execute(
            "POST", url, headers={"Content-Type": FORM_CONTENT_TYPE}, data=dict(params)
        )

    def post_with_json(
        self,
        url: str,
        json: str,
        headers: Optional[Mapping[str, str]] = None,
    ) -> str:
        """
        Make a POST request with a JSON body.

        Args:
            url: Request URL
            json: Pre-serialized JSON text, sent verbatim and never parsed
            headers: Extra request headers; Content-Type is always overridden

        Returns:
            Response body as text
        """
        request_headers = CaseInsensitiveDict(headers or {})
        request_headers["Content-Type"] = JSON_CONTENT_TYPE
        return self._execute("POST", url, headers=request_headers, data=json.encode("utf-8"))

    parse_query_string_to_map = staticmethod(parse_query_string_to_map)
    decode_url = staticmethod(decode_url)

    def close(self) -> None:
        """Close the HTTP session and its connection pools."""
        self._session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()
