import sys

import pytest
from loguru import logger

from nattydb import Context

URL_PREFIX = "http://api.example.test/"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep NATTYDB_* variables from the developer's shell out of the tests."""
    for name in ("URL_PREFIX", "MOCK_URL_PREFIX", "LOCATION", "LOG_LEVEL"):
        monkeypatch.delenv(f"NATTYDB_{name}", raising=False)


@pytest.fixture(autouse=True)
def restore_logger():
    """Put back the default sink after a test configured logging."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def context():
    """Context with an explicit prefix and mock mode switched off."""
    ctx = Context(url_prefix=URL_PREFIX, mock=False)
    yield ctx
    ctx.context = {}


@pytest.fixture
def standard_envelope():
    return {"success": True, "content": {"id": 1}}
