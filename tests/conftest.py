"""Global pytest fixtures and hooks for SUNDRIES."""

from __future__ import annotations

from pathlib import Path

import pytest

from sundries.config import MAX_BUFFER_ENV_VAR

# pylint: disable=unused-argument

TESTS_ROOT = Path(__file__).parent.resolve()
FOLDER_MARKERS = ("unit", "integration", "functional")


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark each item after the taxonomy folder it lives in (unit/integration/functional)."""
    for item in items:
        try:
            folder = item.path.resolve().relative_to(TESTS_ROOT).parts[0]
        except ValueError:  # pragma: no cover - collected from outside tests/
            continue
        if folder in FOLDER_MARKERS and not any(
            marker.name == folder for marker in item.iter_markers()
        ):
            item.add_marker(getattr(pytest.mark, folder))


@pytest.fixture(autouse=True)
def _clean_max_buffer_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make sure a developer's SUNDRIES_MAX_BUFFER never leaks into expectations."""
    monkeypatch.delenv(MAX_BUFFER_ENV_VAR, raising=False)
