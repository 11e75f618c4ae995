from __future__ import annotations

from dataclasses import replace
from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from realtalk_backend.api.server import create_app
from realtalk_backend.config import Config


TEST_SECRET = "test-secret-please-ignore"
DEFAULT_PASSWORD = "correct-horse-battery"


@pytest.fixture
def cfg(tmp_path) -> Config:
    """Isolated config: fresh SQLite file, fixed secret, cheap password hashing."""
    return replace(
        Config(),
        DB_DSN=str(tmp_path / "realtalk-test.sqlite"),
        APP_ENV="test",
        AUTH_JWT_SECRET=TEST_SECRET,
        AUTH_TOKEN_EXPIRES_IN="7d",
        AUTH_PASSWORD_ROUNDS=1000,
        STRIPE_SECRET_KEY=None,
        CORS_ALLOW_ORIGINS="*",
    )


@pytest.fixture
def app(cfg):
    return create_app(cfg)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


def register(
    client: TestClient,
    *,
    email: str = "alice@realtalk.io",
    password: str = DEFAULT_PASSWORD,
    full_name: str = "Alice Example",
    organization_name: Optional[str] = None,
):
    body: Dict[str, Any] = {"email": email, "password": password, "full_name": full_name}
    if organization_name is not None:
        body["organization_name"] = organization_name
    return client.post("/api/auth/register", json=body)


def bearer(token: str) -> Dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
