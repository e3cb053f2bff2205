from __future__ import annotations

import json
from pathlib import Path

import pytest

from ccp_engine.profile_store import ProfileStore
from ccp_engine.storage_layout import resolve_layout

SCHEMA_SETTINGS = {"$schema": "https://json.schemastore.org/claude-code-settings.json"}


def read_json(path: Path):
    return json.loads(path.read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# A populated ~/.claude under tmp_path:
#   settings.json      -> schema-only document
#   profiles/.current  -> "default"
#   profiles/default   -> {"model": "sonnet-4"}
# ---------------------------------------------------------------------------


@pytest.fixture
def home(tmp_path: Path) -> Path:
    claude = tmp_path / ".claude"
    (claude / "profiles").mkdir(parents=True)
    (claude / "backups").mkdir(parents=True)

    (claude / "settings.json").write_text(json.dumps(SCHEMA_SETTINGS), encoding="utf-8")
    (claude / "profiles" / ".current").write_text("default", encoding="utf-8")
    (claude / "profiles" / "default.json").write_text(
        json.dumps({"model": "sonnet-4"}), encoding="utf-8"
    )
    return tmp_path


@pytest.fixture
def store(home: Path) -> ProfileStore:
    return ProfileStore(resolve_layout(home))


@pytest.fixture
def empty_store(tmp_path: Path) -> ProfileStore:
    """Store rooted at a home directory with no .claude at all."""
    return ProfileStore(resolve_layout(tmp_path / "empty-home"))
