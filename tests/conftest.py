"""Shared pytest fixtures for the pagegen test suite.

Provides reusable fixtures for:
- Temporary Next.js project roots (bare and shadcn-initialised)
- Settings pointed at those roots
- Sample configuration documents for both architectures
- A recording event sink
- A mocked ``run_command`` for the shadcn CLI
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, patch

import pytest

from pagegen.config import Settings
from pagegen.events import RecordingEventSink


# ---------------------------------------------------------------------------
# Project roots
# ---------------------------------------------------------------------------

@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Empty host project directory."""
    root = tmp_path / "web"
    root.mkdir()
    yield root


@pytest.fixture
def shadcn_project(project_root: Path) -> Path:
    """Host project with a ``components.json`` marker and no components yet."""
    (project_root / "components.json").write_text(
        json.dumps({"style": "default", "tsx": True}), encoding="utf-8"
    )
    (project_root / "components" / "ui").mkdir(parents=True)
    yield project_root


@pytest.fixture
def settings(project_root: Path) -> Settings:
    return Settings(project_root=project_root)


@pytest.fixture
def shadcn_settings(shadcn_project: Path) -> Settings:
    return Settings(project_root=shadcn_project)


@pytest.fixture
def sink() -> RecordingEventSink:
    return RecordingEventSink()


# ---------------------------------------------------------------------------
# Configuration documents
# ---------------------------------------------------------------------------

@pytest.fixture
def ddd_document() -> dict[str, Any]:
    """DDD configuration for a support ticket list."""
    return {
        "pageName": "Support Tickets",
        "routePath": "support/tickets",
        "moduleName": "ticket",
        "architecture": "ddd",
        "entityName": "Ticket",
        "columns": [
            {"label": "Subject", "key": "subject", "type": "string"},
            {"label": "Status", "key": "status", "type": "string"},
            {"label": "Priority", "key": "priority", "type": "number"},
            {"label": "Opened", "key": "openedAt", "type": "date"},
        ],
        "filters": [
            {
                "type": "select",
                "label": "Status",
                "key": "status",
                "options": ["Open", "Closed"],
            },
        ],
        "includeStats": True,
        "includeRowSelection": False,
        "includeSearch": True,
        "dataFetching": "mock",
        "sortableColumns": ["subject", "priority"],
        "animations": {
            "pageTransitions": False,
            "listAnimations": False,
            "cardAnimations": False,
            "intensity": "moderate",
        },
    }


@pytest.fixture
def simplified_document() -> dict[str, Any]:
    """Simplified configuration using default columns and no filters."""
    return {
        "pageName": "Users",
        "routePath": "admin/users",
        "moduleName": "users",
        "architecture": "simplified",
        "entityName": "User",
        "includeRowSelection": False,
    }


@pytest.fixture
def full_featured_document(ddd_document: dict[str, Any]) -> dict[str, Any]:
    """Every optional feature switched on."""
    return {
        **ddd_document,
        "includeRowSelection": True,
        "dataFetching": "tanstack",
        "filters": [
            {"type": "select", "label": "Status", "key": "status"},
            {"type": "multiselect", "label": "Tags", "key": "tags", "options": ["bug", "ui"]},
            {"type": "input", "label": "Assignee", "key": "assignee"},
            {"type": "date", "label": "Opened", "key": "openedAt"},
        ],
        "animations": {
            "pageTransitions": True,
            "listAnimations": True,
            "cardAnimations": True,
            "intensity": "bold",
        },
    }


# ---------------------------------------------------------------------------
# shadcn CLI
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_shadcn():
    """Patch the installer's ``run_command``.

    ``add`` invocations create ``components/ui/<name>.tsx`` under the working
    directory and succeed; the ``--version`` probe succeeds.  Tests can
    override ``side_effect`` for other behaviour.

    Usage::

        def test_install(mock_shadcn):
            ...
            assert mock_shadcn.await_count == 9
    """
    async def _fake(cmd: list[str], cwd: Any = None, **kwargs: Any) -> tuple[int, str, str]:
        if "add" in cmd:
            name = cmd[cmd.index("add") + 1]
            target = Path(cwd) / "components" / "ui" / f"{name}.tsx"
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(f"// {name}\n", encoding="utf-8")
            return (0, f"Added {name}", "")
        return (0, "2.1.0", "")

    mock = AsyncMock(side_effect=_fake)
    with patch("pagegen.components.installer.run_command", mock):
        yield mock
