"""Shared test fixtures for the manifest test suite."""
from __future__ import annotations

import pytest

from manifest.config import ManifestSettings
from manifest.engine.types import Workflow


@pytest.fixture
def empty_workflow() -> Workflow:
    """Return a workflow with no instructions."""
    return Workflow()


@pytest.fixture
def demo_settings() -> ManifestSettings:
    """Return settings with a known auth token."""
    return ManifestSettings(auth_token="test_token")
