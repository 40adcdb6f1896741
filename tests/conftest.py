"""Shared fixtures and utilities for gs2_matchmaking tests.

This module provides:
- Credentials and configuration fixtures
- `make_response` to build mocked httpx responses
- Custom markers for test categorization
"""

from typing import Any
from unittest.mock import MagicMock

import pytest
from httpx import Response

from gs2_matchmaking.config import ClientConfig
from gs2_matchmaking.models import Credentials

BASE_URL = "https://matchmaking.ap-northeast-1.gs2io.com"


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests requiring GS2"
    )


def make_response(data: Any = None, status_code: int = 200, text: str = "") -> MagicMock:
    """Build a mocked httpx.Response.

    Args:
        data: Decoded JSON body; None means an empty body.
        status_code: HTTP status code.
        text: Raw body text (used for error responses).
    """
    response = MagicMock(spec=Response)
    response.status_code = status_code
    response.text = text
    if data is None:
        response.content = b""
    else:
        response.content = b"{...}"
        response.json.return_value = data
    return response


@pytest.fixture
def credentials() -> Credentials:
    """Test project credentials."""
    return Credentials(client_id="client-abc", client_secret="secret-xyz")


@pytest.fixture
def client_config(credentials: Credentials) -> ClientConfig:
    """Client configuration using the default endpoint template."""
    return ClientConfig(credentials=credentials)
