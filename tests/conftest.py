"""Shared test fixtures for the phasesplit test suite."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator


# =============================================================================
# Pytest configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-apply markers based on test directory structure."""
    for item in items:
        test_path = str(item.fspath)
        if "/unit/" in test_path:
            item.add_marker(pytest.mark.unit)
        elif "/e2e/" in test_path:
            item.add_marker(pytest.mark.e2e)


# =============================================================================
# Logging isolation
# =============================================================================


@pytest.fixture(autouse=True)
def _reset_phasesplit_logging() -> Iterator[None]:
    """Undo ``setup_logging`` so caplog sees records in every test."""
    yield
    logger = logging.getLogger("phasesplit")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


# =============================================================================
# Script fixtures
# =============================================================================


@pytest.fixture
def mixed_script() -> dict[str, Any]:
    """A script using every phase kind plus hooks and a scenario."""
    return {
        "config": {
            "target": "http://localhost:8080",
            "phases": [
                {"name": "warm up", "duration": 30, "arrivalRate": 1, "rampTo": 9},
                {"name": "sustain", "duration": 60, "arrivalRate": 10, "maxVusers": 50},
                {"name": "burst", "duration": 10, "arrivalCount": 25},
                {"name": "cool down", "pause": 15},
            ],
            "variables": {"ids": [1, 2, 3]},
        },
        "before": {"flow": [{"post": {"url": "/login"}}]},
        "after": {"flow": [{"post": {"url": "/logout"}}]},
        "scenarios": [{"name": "browse", "flow": [{"get": {"url": "/"}}]}],
    }
