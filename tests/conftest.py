from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Make the shelter package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shelter.core import config as core_config  # noqa: E402

ADMIN_USER = "staff"
ADMIN_PASS = "s3cret"


@pytest.fixture()
def data_dir(tmp_path, monkeypatch):
    """Point the stores at a temporary directory and reset cached settings."""
    target = tmp_path / "data"
    monkeypatch.setenv("DATA_DIR", str(target))
    monkeypatch.setenv("ADMIN_USERNAME", ADMIN_USER)
    monkeypatch.setenv("ADMIN_PASSWORD", ADMIN_PASS)
    monkeypatch.setenv("SESSION_SECRET", "test-secret")
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("APP_ENV", raising=False)
    core_config.get_settings.cache_clear()
    yield target
    core_config.get_settings.cache_clear()


@pytest.fixture()
def client(data_dir):
    from shelter.app import create_app

    with TestClient(create_app(), follow_redirects=False) as test_client:
        yield test_client


@pytest.fixture()
def auth_client(client):
    resp = client.post("/login", data={"username": ADMIN_USER, "password": ADMIN_PASS})
    assert resp.status_code == 302
    return client
