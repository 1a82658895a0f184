"""
Pytest configuration for odoorm.

Provides fixtures for:
- A stub server wired into the shared connection
- Settings isolated from the developer's environment
"""

from __future__ import annotations

import logging
from typing import Generator

import httpx
import pytest

import odoorm
from odoorm import OdooClient

from tests.support import BASE_URL, StubServer


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Keep ODOO_* variables of the host out of the tests.
    """
    for name in ("ODOO_URL", "ODOO_API_KEY", "ODOO_TIMEOUT", "ODOO_OPEN_TIMEOUT", "ODOO_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    logger = logging.getLogger("odoorm")
    level = logger.level
    odoorm.reset()
    yield
    odoorm.reset()
    logger.setLevel(level)


@pytest.fixture
def server() -> Generator[StubServer, None, None]:
    """
    Stub server installed as the client used by every model.
    """
    stub = StubServer()
    client = OdooClient(BASE_URL, api_key="test_key", transport=httpx.MockTransport(stub.handle))
    odoorm.configure(client=client)
    yield stub
    client.close()
