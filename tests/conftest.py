import logging

import pytest
import structlog
from fastapi.testclient import TestClient
from structlog.testing import LogCapture

from chatfront.app import create_app


API_BASE_URL = "https://chat.example.test"


@pytest.fixture
def static_dir(tmp_path):
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "index.html").write_text("<!doctype html><div id=\"root\"></div>", encoding="utf-8")
    (dist / "assets" / "app.js").write_text("console.log('app')", encoding="utf-8")
    (tmp_path / "secret.txt").write_text("do not serve", encoding="utf-8")
    return dist


@pytest.fixture
def app(static_dir):
    return create_app(api_base_url=API_BASE_URL, static_dir=static_dir)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def log_output():
    """Captured structlog entries, with request-scoped contextvars merged in."""
    capture = LogCapture()
    structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
    yield capture
    structlog.reset_defaults()
