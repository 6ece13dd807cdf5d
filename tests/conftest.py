"""Pytest configuration for notifier tests."""

import pytest

from tests.fakes import RecordingSleep


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def notifier_env(monkeypatch):
    monkeypatch.setenv("HOST", "example.com")
    monkeypatch.setenv("INDEXNOW_KEY", "abc123")
    monkeypatch.delenv("INDEXNOW_KEY_LOCATION", raising=False)
    monkeypatch.setenv("INDEXNOW_TOKEN", "s3cret")
    monkeypatch.setenv("INDEXNOW_EXTRA_ENDPOINTS", "")
