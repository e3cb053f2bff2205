# file: ccp_engine/profile_store.py
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

from .profile_errors import NotFound, ParseError, ReadError, WriteError
from .storage_layout import StorageLayout


# ---------------------------------------------------------------------------
# Generic JSON helpers
# ---------------------------------------------------------------------------


def load_json(path: Path) -> Any:
    """
    Read and parse a JSON file.

    ReadError  -> file missing / unreadable / not UTF-8
    ParseError -> file read fine but is not valid JSON
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(path, exc) from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError(path, exc) from exc


def dump_json(data: Any) -> str:
    """Stable, human-readable JSON text used for every file we write."""
    return json.dumps(data, indent=2, ensure_ascii=False) + "\n"


def save_json(path: Path, data: Any) -> None:
    """
    Write `data` as pretty JSON, creating the parent directory if needed.

    Plain overwrite: a crash mid-write can leave a truncated file.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(dump_json(data), encoding="utf-8")
    except OSError as exc:
        raise WriteError(path, exc) from exc


def _json_stems(dir_path: Path) -> List[str]:
    if not dir_path.is_dir():
        return []
    try:
        return sorted(p.stem for p in dir_path.glob("*.json") if p.is_file())
    except OSError as exc:
        raise ReadError(dir_path, exc) from exc


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


class ProfileStore:
    """
    Profiles, backups, active settings and the current-profile pointer,
    all rooted at one StorageLayout.

    Nothing is cached: every call goes back to disk.
    """

    def __init__(self, layout: StorageLayout) -> None:
        self.layout = layout

    # --- enumeration -------------------------------------------------------

    def list_profiles(self) -> List[str]:
        return _json_stems(self.layout.profiles_dir)

    def list_backups(self) -> List[str]:
        return _json_stems(self.layout.backups_dir)

    # --- current pointer ---------------------------------------------------

    def get_current_profile(self) -> Optional[str]:
        """
        Name stored in the pointer file (stripped), or None if there is none.

        The name is not checked against existing profiles.
        """
        path = self.layout.current_profile_file
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8").strip()
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(path, exc) from exc

    def set_current_profile(self, name: str) -> None:
        path = self.layout.current_profile_file
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(name, encoding="utf-8")
        except OSError as exc:
            raise WriteError(path, exc) from exc

    # --- existence ---------------------------------------------------------

    def profile_exists(self, name: str) -> bool:
        return self.layout.profile_path(name).exists()

    def backup_exists(self, name: str) -> bool:
        return self.layout.backup_path(name).exists()

    def settings_exist(self) -> bool:
        return self.layout.settings_file.exists()

    # --- documents ---------------------------------------------------------

    def load_profile(self, name: str) -> Any:
        return load_json(self.layout.profile_path(name))

    def save_profile(self, name: str, data: Any) -> None:
        save_json(self.layout.profile_path(name), data)

    def delete_profile(self, name: str) -> None:
        path = self.layout.profile_path(name)
        try:
            path.unlink()
        except FileNotFoundError as exc:
            raise NotFound(f"Profile '{name}' does not exist") from exc
        except OSError as exc:
            raise WriteError(path, exc) from exc

    def load_settings(self) -> Any:
        return load_json(self.layout.settings_file)

    def save_settings(self, data: Any) -> None:
        save_json(self.layout.settings_file, data)

    def load_backup(self, name: str) -> Any:
        return load_json(self.layout.backup_path(name))

    def save_backup(self, name: str, data: Any) -> None:
        save_json(self.layout.backup_path(name), data)
