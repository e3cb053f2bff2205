"""
Storage layout for profiles, backups and the active settings file.

Everything lives under <home>/.claude:

    settings.json            active settings read by the tool
    profiles/<name>.json     one file per profile
    profiles/.current        name of the current profile (plain text)
    backups/<name>.json      one file per settings backup

The layout is a plain value computed from a home directory, so tests (and
the --home CLI option) can point it anywhere.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .profile_errors import ConfigError, WriteError

CLAUDE_DIR_NAME = ".claude"
PROFILE_DIR_NAME = "profiles"
BACKUP_DIR_NAME = "backups"
SETTINGS_FILE_NAME = "settings.json"
CURRENT_FILE_NAME = ".current"


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StorageLayout:
    """Canonical paths derived from a single home directory."""

    home: Path
    claude_dir: Path
    profiles_dir: Path
    backups_dir: Path
    settings_file: Path
    current_profile_file: Path

    def profile_path(self, name: str) -> Path:
        return self.profiles_dir / f"{name}.json"

    def backup_path(self, name: str) -> Path:
        return self.backups_dir / f"{name}.json"

    def ensure_dirs(self) -> None:
        """
        Create profiles/ and backups/ (and any missing parents).

        Safe to call repeatedly.
        """
        for d in (self.profiles_dir, self.backups_dir):
            try:
                d.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise WriteError(d, exc) from exc


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def _home_dir() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError) as exc:
        raise ConfigError(f"Could not find home directory: {exc}") from exc


def resolve_layout(home: Optional[Path] = None) -> StorageLayout:
    """
    Build the layout for `home` (defaults to the current user's home).
    """
    root = Path(home).expanduser() if home is not None else _home_dir()
    claude_dir = root / CLAUDE_DIR_NAME
    profiles_dir = claude_dir / PROFILE_DIR_NAME

    return StorageLayout(
        home=root,
        claude_dir=claude_dir,
        profiles_dir=profiles_dir,
        backups_dir=claude_dir / BACKUP_DIR_NAME,
        settings_file=claude_dir / SETTINGS_FILE_NAME,
        current_profile_file=profiles_dir / CURRENT_FILE_NAME,
    )
