"""
Shared fixtures for the HSDS client tests.
"""

import json
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest

from hsds_client.api import HsdsClient
from hsds_client.auth import BasicAuth
from hsds_client.config import HsdsConfig

DOMAIN = "/home/test_user/test.h5"
ROOT_ID = "g-d38053ea-3418fe27-5b08-db62bc-3c9b0d"


def make_response(status_code: int = 200, body: Any = None, content: Optional[bytes] = None) -> MagicMock:
    """Build a fake requests.Response."""
    response = MagicMock()
    response.status_code = status_code
    if content is None:
        content = json.dumps(body).encode("utf-8") if body is not None else b""
    response.content = content
    return response


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep HS_* variables and the user's config out of the tests."""
    for var in ("HS_ENDPOINT", "HS_USERNAME", "HS_PASSWORD", "HS_TOKEN", "HS_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("HS_CONFIG_DIR", str(tmp_path / "default-config"))


@pytest.fixture
def config():
    """Create test configuration."""
    return HsdsConfig(endpoint="http://hsds.test:5101", timeout=5)


@pytest.fixture
def session():
    """Create a mock requests session answering 200 with an empty JSON object."""
    mock = MagicMock()
    mock.request.return_value = make_response(200, {})
    return mock


@pytest.fixture
def client(config, session):
    """Create a client sending through the mock session."""
    return HsdsClient(config=config, auth=BasicAuth("test_user", "secret"), session=session)


def sent(session: MagicMock) -> dict:
    """Keyword arguments of the last request made through ``session``."""
    return session.request.call_args.kwargs
