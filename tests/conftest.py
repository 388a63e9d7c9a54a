"""Shared pytest configuration and suite marker assignment."""

from __future__ import annotations

from pathlib import Path

import pytest

SUITE_MARKERS = {
    "unit_tests": "unit",
    "integration_tests": "integration",
    "e2e_tests": "e2e",
}


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each test with the suite its directory belongs to."""
    del config
    for item in items:
        for part in Path(str(item.path)).parts:
            marker = SUITE_MARKERS.get(part)
            if marker is not None:
                item.add_marker(marker)
                break
