"""Shared pytest fixtures for all tests."""

import pytest
from unittest.mock import patch


@pytest.fixture
def preferences_file(tmp_path):
    """Path to a not-yet-existing preferences file in a temp directory."""
    return tmp_path / "hello" / "preferences.json"


@pytest.fixture
def test_client(preferences_file):
    """FastAPI test client with preferences stored in a temp file."""
    from fastapi.testclient import TestClient

    with patch('hello.main.PREFERENCES_FILE', str(preferences_file)):
        from hello.main import app

        with TestClient(app) as client:
            yield client
