"""
Command-line front end for the Claude settings profile manager.

Usage:

    ccp                         interactive profile selector
    ccp list | current | init
    ccp use NAME
    ccp create NAME [--from SRC]
    ccp delete NAME [--force]
    ccp copy SRC DST
    ccp rename OLD NEW
    ccp configure [PROFILE]
    ccp set KEY VALUE [--profile P]
    ccp get KEY [--profile P]
    ccp unset KEY [--profile P]
    ccp export [NAME]
    ccp import NAME < file.json
    ccp diff A B
    ccp backup [NAME]
    ccp restore NAME

The top-level option --home DIR, given before the command, operates on
DIR/.claude instead of the user's home directory.

Normal output goes to stdout; errors and notices go to stderr. The exit
status is 0 on success, 1 on any reported error and 130 when a prompt is
cancelled (Ctrl-C or end of input).
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from . import profile_ops as ops
from .cli_io import PromptAborted, _yes_no, choose_name
from .key_path import MISSING, parse_cli_value
from .profile_errors import CcpError, NotFound
from .profile_store import ProfileStore
from .profile_wizard import configure_profile_interactive
from .storage_layout import resolve_layout

PROG = "ccp"
NO_PROFILES_MSG = f"No profiles found. Run '{PROG} init' to initialize."


def _err(msg: str) -> None:
    print(msg, file=sys.stderr)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


def cmd_interactive(store: ProfileStore, args: argparse.Namespace) -> None:
    profiles = store.list_profiles()
    if not profiles:
        print(NO_PROFILES_MSG)
        return

    current = store.get_current_profile()
    selected = choose_name("Select profile", profiles, current)
    if selected is None:
        print("Cancelled")
        return

    if selected == current:
        print(f"Already on '{selected}'")
        return

    ops.use_profile(store, selected)
    print(f"Switched to profile '{selected}'")


def cmd_init(store: ProfileStore, args: argparse.Namespace) -> None:
    result = ops.init_store(store)
    if result.status == "created_from_settings":
        print("Created default profile from existing settings")
    elif result.status == "created_empty":
        print("Initialized with empty default profile")
    else:
        print("Profiles directory already initialized")
    print(f"  Profiles dir: {result.profiles_dir}")
    print(f"  Backups dir: {result.backups_dir}")


def cmd_list(store: ProfileStore, args: argparse.Namespace) -> None:
    profiles = store.list_profiles()
    if not profiles:
        print(NO_PROFILES_MSG)
        return

    current = store.get_current_profile()
    print("Available profiles:")
    for name in profiles:
        marker = "->" if name == current else "  "
        print(f"  {marker} {name}")


def cmd_current(store: ProfileStore, args: argparse.Namespace) -> None:
    current = store.get_current_profile()
    if current:
        print(current)
    else:
        print(f"No profile selected. Run '{PROG} init' or '{PROG} use <profile>'")


def cmd_use(store: ProfileStore, args: argparse.Namespace) -> None:
    ops.validate_name(args.name)
    if not store.profile_exists(args.name):
        raise NotFound(
            f"Profile '{args.name}' does not exist. "
            f"Use '{PROG} list' to see available profiles."
        )
    ops.use_profile(store, args.name)
    print(f"Switched to profile '{args.name}'")


def cmd_create(store: ProfileStore, args: argparse.Namespace) -> None:
    ops.create_profile(store, args.name, args.source)
    origin = f"'{args.source}'" if args.source else "current settings"
    print(f"Created profile '{args.name}' from {origin}")


def cmd_delete(store: ProfileStore, args: argparse.Namespace) -> None:
    name = args.name
    ops.check_deletable(store, name, args.force)

    if not args.force:
        if not _yes_no(f"Delete profile '{name}'?", default=False):
            print("Cancelled")
            return

    result = ops.delete_profile(store, name, force=args.force)
    if result.switched_to_default:
        print(f"Switched to profile '{ops.DEFAULT_PROFILE}'")
    print(f"Deleted profile '{name}'")


def cmd_copy(store: ProfileStore, args: argparse.Namespace) -> None:
    ops.copy_profile(store, args.src, args.dst)
    print(f"Copied '{args.src}' to '{args.dst}'")


def cmd_rename(store: ProfileStore, args: argparse.Namespace) -> None:
    ops.rename_profile(store, args.old, args.new)
    print(f"Renamed '{args.old}' to '{args.new}'")


def cmd_configure(store: ProfileStore, args: argparse.Namespace) -> None:
    name = ops.resolve_target(store, args.profile or args.name)
    if not store.profile_exists(name):
        raise NotFound(f"Profile '{name}' does not exist")

    data = store.load_profile(name)
    print(f"Configuring profile '{name}'")
    print("Press Enter to keep current value, or enter new value.\n")

    updated = configure_profile_interactive(data)
    if ops.save_configured(store, name, updated):
        print("\nConfiguration saved and applied")
    else:
        print("\nConfiguration saved")


def cmd_set(store: ProfileStore, args: argparse.Namespace) -> None:
    change = ops.set_key(store, args.key, parse_cli_value(args.value), args.profile)
    print(f"Set {change.key}={args.value} in '{change.profile}'")


def cmd_get(store: ProfileStore, args: argparse.Namespace) -> None:
    value = ops.get_key(store, args.key, args.profile)
    if value is MISSING:
        print("(not set)")
    else:
        print(json.dumps(value, indent=2, ensure_ascii=False))


def cmd_unset(store: ProfileStore, args: argparse.Namespace) -> None:
    change = ops.unset_key(store, args.key, args.profile)
    if change.removed:
        print(f"Removed '{change.key}' from '{change.profile}'")
    else:
        print(f"Key '{change.key}' not found in '{change.profile}'")


def cmd_export(store: ProfileStore, args: argparse.Namespace) -> None:
    data = ops.export_profile(store, args.name)
    print(json.dumps(data, indent=2, ensure_ascii=False))


def cmd_import(store: ProfileStore, args: argparse.Namespace) -> None:
    text = sys.stdin.read()
    ops.import_profile(store, args.name, text)
    # stderr, so stdout stays clean when used in a pipeline
    _err(f"Imported profile '{args.name}'")


def cmd_diff(store: ProfileStore, args: argparse.Namespace) -> None:
    result = ops.diff_profiles(store, args.first, args.second)
    if result.identical:
        print("Profiles are identical")
        return

    print(f"Diff: {args.first} vs {args.second}\n")
    for tag, text in result.lines:
        print(f"{tag} {text}")


def cmd_backup(store: ProfileStore, args: argparse.Namespace) -> None:
    result = ops.backup_settings(store, args.name)
    print(f"Created backup '{result.name}'")
    print(f"  Path: {result.path}")


def cmd_restore(store: ProfileStore, args: argparse.Namespace) -> None:
    result = ops.restore_backup(store, args.backup)
    if result.snapshot:
        _err(f"Created auto-backup '{result.snapshot}'")
    print(f"Restored from '{result.source}'")


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


COMMANDS: Dict[str, Callable[[ProfileStore, argparse.Namespace], None]] = {
    "init": cmd_init,
    "list": cmd_list,
    "current": cmd_current,
    "use": cmd_use,
    "create": cmd_create,
    "delete": cmd_delete,
    "copy": cmd_copy,
    "rename": cmd_rename,
    "configure": cmd_configure,
    "set": cmd_set,
    "get": cmd_get,
    "unset": cmd_unset,
    "export": cmd_export,
    "import": cmd_import,
    "diff": cmd_diff,
    "backup": cmd_backup,
    "restore": cmd_restore,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROG,
        description="Claude Code Profiles - manage your Claude Code settings",
    )
    parser.add_argument(
        "--home",
        type=Path,
        default=None,
        help="Use DIR/.claude instead of ~/.claude",
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    sub.add_parser("init", help="Initialize profiles directory structure")
    sub.add_parser("list", help="List all available profiles")
    sub.add_parser("current", help="Show current active profile")

    p = sub.add_parser("use", help="Switch to a profile")
    p.add_argument("name")

    p = sub.add_parser("create", help="Create a new profile")
    p.add_argument("name")
    p.add_argument("-f", "--from", dest="source", help="Copy settings from existing profile")

    p = sub.add_parser("delete", help="Delete a profile")
    p.add_argument("name")
    p.add_argument("-f", "--force", action="store_true", help="Skip confirmation")

    p = sub.add_parser("copy", help="Copy a profile")
    p.add_argument("src")
    p.add_argument("dst")

    p = sub.add_parser("rename", help="Rename a profile")
    p.add_argument("old")
    p.add_argument("new")

    p = sub.add_parser("configure", help="Interactive configuration")
    p.add_argument("name", nargs="?", metavar="PROFILE")
    p.add_argument("-p", "--profile", help="Profile to configure (default: current)")

    p = sub.add_parser("set", help="Set a configuration value")
    p.add_argument("key", help='Key path, e.g. "model" or "env.ANTHROPIC_BASE_URL"')
    p.add_argument("value", help="Value (parsed as JSON when possible)")
    p.add_argument("-p", "--profile", help="Profile to modify (default: current)")

    p = sub.add_parser("get", help="Get a configuration value")
    p.add_argument("key")
    p.add_argument("-p", "--profile", help="Profile to read from (default: current)")

    p = sub.add_parser("unset", help="Remove a configuration value")
    p.add_argument("key")
    p.add_argument("-p", "--profile", help="Profile to modify (default: current)")

    p = sub.add_parser("export", help="Export profile to stdout as JSON")
    p.add_argument("name", nargs="?")

    p = sub.add_parser("import", help="Import profile from stdin")
    p.add_argument("name")

    p = sub.add_parser("diff", help="Compare two profiles")
    p.add_argument("first")
    p.add_argument("second")

    p = sub.add_parser("backup", help="Create a backup of current settings")
    p.add_argument("name", nargs="?")

    p = sub.add_parser("restore", help="Restore from a backup")
    p.add_argument("backup")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    handler = COMMANDS.get(args.command, cmd_interactive)

    try:
        store = ProfileStore(resolve_layout(args.home))
        handler(store, args)
    except (KeyboardInterrupt, PromptAborted):
        _err("\nCancelled")
        return 130
    except CcpError as exc:
        _err(f"Error: {exc}")
        return 1

    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
