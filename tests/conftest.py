"""
Pytest configuration and shared fixtures for pooled-http tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides the fake transport and client fixtures
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

from fixtures.transport import FakeTransport  # noqa: E402
from pooled_http import HttpClient, PoolConfig  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def transport():
    """Provide a FakeTransport that answers 200 with an empty body."""
    return FakeTransport()


@pytest.fixture
def client(transport):
    """Provide an HttpClient whose http:// and https:// traffic hits the fake transport."""
    http_client = HttpClient(PoolConfig())
    http_client.session.mount("http://", transport)
    http_client.session.mount("https://", transport)
    yield http_client
    http_client.close()
