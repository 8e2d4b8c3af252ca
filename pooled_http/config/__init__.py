"""
Pool Configuration Module

Provides connection pool configuration for the shared HTTP client.
"""

from .runtime import PoolConfig

__all__ = [
    "PoolConfig",
]
