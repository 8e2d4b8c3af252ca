"""
Pooled Transport Adapter

requests transport adapter that enforces the pool limits and the
connection-acquisition timeout from a PoolConfig.
"""

from __future__ import annotations

from functools import partial
from typing import Any, Optional

from requests.adapters import HTTPAdapter
from urllib3.connectionpool import HTTPConnectionPool, HTTPSConnectionPool

from pooled_http.config import PoolConfig


class AcquireTimeoutHTTPConnectionPool(HTTPConnectionPool):
    """
    Connection pool that waits a bounded time for a free connection.

    urllib3 blocks forever on an exhausted pool unless a pool timeout is
    passed per request, which requests never does. This pool applies its
    own acquisition timeout instead, raising EmptyPoolError when it expires.
    """

    def __init__(self, *args: Any, acquire_timeout: Optional[float] = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.acquire_timeout = acquire_timeout

    def _get_conn(self, timeout: Optional[float] = None):
        if timeout is None:
            timeout = self.acquire_timeout
        return super()._get_conn(timeout=timeout)


class AcquireTimeoutHTTPSConnectionPool(HTTPSConnectionPool):
    """HTTPS variant of AcquireTimeoutHTTPConnectionPool."""

    def __init__(self, *args: Any, acquire_timeout: Optional[float] = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.acquire_timeout = acquire_timeout

    def _get_conn(self, timeout: Optional[float] = None):
        if timeout is None:
            timeout = self.acquire_timeout
        return super()._get_conn(timeout=timeout)


class PooledAdapter(HTTPAdapter):
    """
    HTTP adapter sized from a PoolConfig.

    Usage:
        adapter = PooledAdapter(PoolConfig())
        session.mount("http://", adapter)
        session.mount("https://", adapter)

    Each route (scheme, host, port) gets a blocking pool of at most
    max_per_route connections; num_pools such pools are kept, which bounds
    the total at roughly max_total. Proxied routes get the same pools.
    Retries are disabled.
    """

    def __init__(self, config: Optional[PoolConfig] = None) -> None:
        self.config = config or PoolConfig()
        # Must be set before HTTPAdapter.__init__ calls init_poolmanager
        self.acquire_timeout = self.config.connection_request_timeout
        super().__init__(
            pool_connections=self.config.num_pools,
            pool_maxsize=self.config.max_per_route,
            max_retries=0,
            pool_block=True,
        )

    def _pool_classes(self) -> dict[str, Any]:
        return {
            "http": partial(AcquireTimeoutHTTPConnectionPool, acquire_timeout=self.acquire_timeout),
            "https": partial(AcquireTimeoutHTTPSConnectionPool, acquire_timeout=self.acquire_timeout),
        }

    def init_poolmanager(self, connections: int, maxsize: int, block: bool = True, **pool_kwargs: Any) -> None:
        super().init_poolmanager(connections, maxsize, block=block, **pool_kwargs)
        self.poolmanager.pool_classes_by_scheme = self._pool_classes()

    def proxy_manager_for(self, proxy: str, **proxy_kwargs: Any):
        manager = super().proxy_manager_for(proxy, **proxy_kwargs)
        # SOCKS managers use their own pool classes
        if not proxy.lower().startswith("socks"):
            manager.pool_classes_by_scheme = self._pool_classes()
        return manager
