# tests/conftest.py
import logging

import pytest
from fastapi.testclient import TestClient

from jobdash.main import create_app

ADMIN_TOKEN = "TEST_ADMIN_TOKEN"


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'jobdash.db'}"


@pytest.fixture
def make_client(db_url):
    """Build a started TestClient; every client in a test shares the same database"""
    clients = []

    def _make(**kwargs):
        kwargs.setdefault("database_url", db_url)
        kwargs.setdefault("admin_token", ADMIN_TOKEN)
        kwargs.setdefault("base_path", "")
        c = TestClient(create_app(**kwargs))
        c.__enter__()
        clients.append(c)
        return c

    yield _make

    for c in reversed(clients):
        c.__exit__(None, None, None)


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def admin_headers():
    return {"x-admin-token": ADMIN_TOKEN}


class _ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.DEBUG)
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def capture_logs():
    """Attach a collecting handler straight to a logger, independent of propagation"""
    attached = []

    def _capture(name):
        log = logging.getLogger(name)
        handler = _ListHandler()
        attached.append((log, handler, log.level))
        log.addHandler(handler)
        log.setLevel(logging.DEBUG)
        return handler.records

    yield _capture

    for log, handler, level in attached:
        log.removeHandler(handler)
        log.setLevel(level)
