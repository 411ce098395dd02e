from collections.abc import Callable
from typing import Any

import pytest
from fastapi.testclient import TestClient

from heatmap_proxy.main import create_app
from heatmap_proxy.settings import Settings
from tests.factories import build_calendar_payload


@pytest.fixture
def calendar_payload() -> Callable[..., dict[str, Any]]:
    return build_calendar_payload


@pytest.fixture
def client() -> TestClient:
    settings = Settings(
        github_token="test-token",
        frontend_url="http://localhost:3000, https://heatmap.example.com",
        sentry_dsn=None,
    )
    return TestClient(create_app(settings))
