"""
Profile and backup lifecycle operations.

Each operation takes a ProfileStore, re-reads whatever it needs from disk,
applies one change and returns a small result object. Nothing here prompts
or prints; profile_cli renders the results and the errors.

Profiles that are changed while they are the current profile are written
through to the active settings file as well, so the tool always sees the
current profile's content.
"""

from __future__ import annotations

import difflib
import json
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .key_path import MISSING, get_value, set_value, unset_value
from .profile_errors import (
    AlreadyExists,
    InvalidName,
    NotFound,
    ParseError,
    ProtectedProfile,
)
from .profile_store import ProfileStore

DEFAULT_PROFILE = "default"
SCHEMA_URL = "https://json.schemastore.org/claude-code-settings.json"

BACKUP_NAME_FORMAT = "backup-%Y%m%d-%H%M%S"
PRE_RESTORE_NAME_FORMAT = "pre-restore-%Y%m%d-%H%M%S"


def default_settings() -> Dict[str, Any]:
    """Settings document used when no settings.json exists yet."""
    return {"$schema": SCHEMA_URL}


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class InitResult:
    # "created_from_settings" | "created_empty" | "already_initialized"
    status: str
    profiles_dir: Path
    backups_dir: Path


@dataclass(frozen=True)
class DeleteResult:
    name: str
    switched_to_default: bool


@dataclass(frozen=True)
class KeyChange:
    profile: str
    key: str
    applied_to_settings: bool
    removed: bool = True


@dataclass(frozen=True)
class ProfileDiff:
    identical: bool
    # (tag, text) with tag "-" (only in first), "+" (only in second), " " (both)
    lines: List[Tuple[str, str]] = field(default_factory=list)


@dataclass(frozen=True)
class BackupResult:
    name: str
    path: Path


@dataclass(frozen=True)
class RestoreResult:
    source: str
    source_kind: str  # "backup" | "profile"
    snapshot: Optional[str]  # pre-restore backup name, None if no settings existed


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def validate_name(name: str, kind: str = "Profile") -> str:
    """
    Reject names that cannot be a plain filename stem inside our directories.
    Names are otherwise used verbatim (case-sensitive).
    """
    if not name or not name.strip():
        raise InvalidName(f"{kind} name must not be empty")
    if "/" in name or "\\" in name:
        raise InvalidName(f"{kind} name '{name}' must not contain path separators")
    if name.startswith("."):
        raise InvalidName(f"{kind} name '{name}' must not start with '.'")
    return name


def _timestamp_name(fmt: str) -> str:
    return datetime.now().strftime(fmt)


def _require_profile(store: ProfileStore, name: str, label: str = "Profile") -> None:
    if not store.profile_exists(name):
        raise NotFound(f"{label} '{name}' does not exist")


def _require_free(store: ProfileStore, name: str, message: str) -> None:
    if store.profile_exists(name):
        raise AlreadyExists(message)


def _is_current(store: ProfileStore, name: str) -> bool:
    return store.get_current_profile() == name


def resolve_target(store: ProfileStore, name: Optional[str] = None) -> str:
    """
    Explicit name, else the current profile, else 'default'.

    Only an absent pointer file falls back to 'default'; an empty pointer is
    returned as-is and fails later as a missing profile.
    """
    if name is not None:
        return validate_name(name)
    current = store.get_current_profile()
    return DEFAULT_PROFILE if current is None else current


# ---------------------------------------------------------------------------
# Setup / switching
# ---------------------------------------------------------------------------


def init_store(store: ProfileStore) -> InitResult:
    """
    Create the directory structure and a 'default' profile.

    - settings.json exists, no profiles yet -> default = settings
    - no settings.json                      -> write the empty schema
                                               document to settings (and to
                                               default unless it exists)
    - otherwise nothing to do
    """
    layout = store.layout
    layout.ensure_dirs()

    if store.settings_exist() and not store.list_profiles():
        store.save_profile(DEFAULT_PROFILE, store.load_settings())
        store.set_current_profile(DEFAULT_PROFILE)
        status = "created_from_settings"
    elif not store.settings_exist():
        data = default_settings()
        store.save_settings(data)
        if not store.profile_exists(DEFAULT_PROFILE):
            store.save_profile(DEFAULT_PROFILE, data)
        store.set_current_profile(DEFAULT_PROFILE)
        status = "created_empty"
    else:
        status = "already_initialized"

    return InitResult(status, layout.profiles_dir, layout.backups_dir)


def use_profile(store: ProfileStore, name: str) -> None:
    """Copy a profile into the active settings and make it current."""
    validate_name(name)
    _require_profile(store, name)
    store.save_settings(store.load_profile(name))
    store.set_current_profile(name)


# ---------------------------------------------------------------------------
# Profile lifecycle
# ---------------------------------------------------------------------------


def create_profile(store: ProfileStore, name: str, source: Optional[str] = None) -> None:
    """
    New profile from `source`, or from the active settings when no source is
    given (the empty schema document if there are no settings yet).
    """
    validate_name(name)
    store.layout.ensure_dirs()
    _require_free(store, name, f"Profile '{name}' already exists")

    if source is not None:
        _require_profile(store, source, "Source profile")
        data = store.load_profile(source)
    elif store.settings_exist():
        data = store.load_settings()
    else:
        data = default_settings()

    store.save_profile(name, data)


def check_deletable(store: ProfileStore, name: str, force: bool = False) -> None:
    """Raise unless `name` exists and may be deleted without force."""
    validate_name(name)
    _require_profile(store, name)
    if name == DEFAULT_PROFILE and not force:
        raise ProtectedProfile(
            f"Cannot delete '{DEFAULT_PROFILE}' profile. Use --force to override."
        )


def delete_profile(store: ProfileStore, name: str, force: bool = False) -> DeleteResult:
    """
    Remove a profile. If it is the current one, switch to 'default' first
    when that exists; otherwise the pointer is left dangling.
    """
    check_deletable(store, name, force)

    switched = False
    if _is_current(store, name) and name != DEFAULT_PROFILE:
        if store.profile_exists(DEFAULT_PROFILE):
            use_profile(store, DEFAULT_PROFILE)
            switched = True

    store.delete_profile(name)
    return DeleteResult(name, switched)


def copy_profile(store: ProfileStore, src: str, dst: str) -> None:
    validate_name(src)
    validate_name(dst)
    _require_profile(store, src, "Source profile")
    _require_free(store, dst, f"Destination profile '{dst}' already exists")
    store.save_profile(dst, store.load_profile(src))


def rename_profile(store: ProfileStore, old: str, new: str) -> None:
    """Move a profile to a new name; the current pointer follows it."""
    validate_name(old)
    validate_name(new)
    _require_profile(store, old)
    _require_free(store, new, f"Profile '{new}' already exists")

    store.save_profile(new, store.load_profile(old))
    store.delete_profile(old)

    if _is_current(store, old):
        store.set_current_profile(new)


# ---------------------------------------------------------------------------
# Key-path edits
# ---------------------------------------------------------------------------


def _save_and_apply(store: ProfileStore, name: str, data: Any) -> bool:
    store.save_profile(name, data)
    if _is_current(store, name):
        store.save_settings(data)
        return True
    return False


def set_key(store: ProfileStore, key: str, value: Any, profile: Optional[str] = None) -> KeyChange:
    name = resolve_target(store, profile)
    _require_profile(store, name)

    data = store.load_profile(name)
    set_value(data, key, value)
    applied = _save_and_apply(store, name, data)
    return KeyChange(name, key, applied)


def get_key(store: ProfileStore, key: str, profile: Optional[str] = None) -> Any:
    """Value at `key` in the target profile, or MISSING."""
    name = resolve_target(store, profile)
    _require_profile(store, name)
    return get_value(store.load_profile(name), key)


def unset_key(store: ProfileStore, key: str, profile: Optional[str] = None) -> KeyChange:
    name = resolve_target(store, profile)
    _require_profile(store, name)

    data = store.load_profile(name)
    if not unset_value(data, key):
        return KeyChange(name, key, applied_to_settings=False, removed=False)

    applied = _save_and_apply(store, name, data)
    return KeyChange(name, key, applied)


def save_configured(store: ProfileStore, name: str, data: Any) -> bool:
    """Persist an edited profile; returns True when it was also applied."""
    validate_name(name)
    _require_profile(store, name)
    return _save_and_apply(store, name, data)


# ---------------------------------------------------------------------------
# Export / import / diff
# ---------------------------------------------------------------------------


def export_profile(store: ProfileStore, name: Optional[str] = None) -> Any:
    target = resolve_target(store, name)
    _require_profile(store, target)
    return store.load_profile(target)


def import_profile(store: ProfileStore, name: str, text: str) -> None:
    validate_name(name)
    store.layout.ensure_dirs()
    _require_free(
        store,
        name,
        f"Profile '{name}' already exists. Delete it first or use a different name.",
    )

    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ParseError("<stdin>", exc) from exc

    store.save_profile(name, data)


def _pretty(data: Any) -> List[str]:
    return json.dumps(data, indent=2, ensure_ascii=False).splitlines()


def diff_profiles(store: ProfileStore, first: str, second: str) -> ProfileDiff:
    """Line diff of the two profiles' pretty-printed JSON."""
    validate_name(first)
    validate_name(second)
    _require_profile(store, first)
    _require_profile(store, second)

    a = _pretty(store.load_profile(first))
    b = _pretty(store.load_profile(second))
    if a == b:
        return ProfileDiff(identical=True)

    lines: List[Tuple[str, str]] = []
    for raw in difflib.ndiff(a, b):
        tag = raw[:1]
        if tag == "?":
            continue
        lines.append((tag, raw[2:]))
    return ProfileDiff(identical=False, lines=lines)


# ---------------------------------------------------------------------------
# Backup / restore
# ---------------------------------------------------------------------------


def backup_settings(store: ProfileStore, name: Optional[str] = None) -> BackupResult:
    """Snapshot settings.json into backups/<name>.json (overwrites same name)."""
    if name is not None:
        validate_name(name, "Backup")
    store.layout.ensure_dirs()

    if not store.settings_exist():
        raise NotFound("No settings.json found to backup")

    backup_name = name or _timestamp_name(BACKUP_NAME_FORMAT)
    store.save_backup(backup_name, store.load_settings())
    return BackupResult(backup_name, store.layout.backup_path(backup_name))


def _unused_backup_name(store: ProfileStore, base: str) -> str:
    candidate = base
    counter = 1
    while store.backup_exists(candidate):
        candidate = f"{base}-{counter}"
        counter += 1
    return candidate


def restore_backup(store: ProfileStore, name: str) -> RestoreResult:
    """
    Overwrite settings from a backup (or, failing that, a profile) of that
    name. Existing settings are first saved as a pre-restore backup.
    """
    validate_name(name, "Backup")
    if store.backup_exists(name):
        data = store.load_backup(name)
        kind = "backup"
    elif store.profile_exists(name):
        data = store.load_profile(name)
        kind = "profile"
    else:
        available = store.list_backups()
        if not available:
            raise NotFound(f"Backup '{name}' not found and no backups available")
        raise NotFound(
            f"Backup '{name}' not found. Available backups: " + ", ".join(available)
        )

    snapshot: Optional[str] = None
    if store.settings_exist():
        snapshot = _unused_backup_name(store, _timestamp_name(PRE_RESTORE_NAME_FORMAT))
        store.save_backup(snapshot, store.load_settings())

    store.save_settings(data)
    return RestoreResult(name, kind, snapshot)


__all__ = [
    "BackupResult",
    "DEFAULT_PROFILE",
    "DeleteResult",
    "InitResult",
    "KeyChange",
    "MISSING",
    "ProfileDiff",
    "RestoreResult",
    "SCHEMA_URL",
    "backup_settings",
    "check_deletable",
    "copy_profile",
    "create_profile",
    "default_settings",
    "delete_profile",
    "diff_profiles",
    "export_profile",
    "get_key",
    "import_profile",
    "init_store",
    "rename_profile",
    "resolve_target",
    "restore_backup",
    "save_configured",
    "set_key",
    "unset_key",
    "use_profile",
    "validate_name",
]
