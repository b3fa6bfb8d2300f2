"""Shared test fixtures for the okgroups test suite."""

from __future__ import annotations

import pytest

from okgroups.config import OkConfig


@pytest.fixture
def config() -> OkConfig:
    """Default test configuration with dummy credentials."""
    return OkConfig(
        application_key="CTESTAPPKEY",
        secret_key="test-secret-5678",
        uid="573382458991123",
    )
