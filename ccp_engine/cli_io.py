from __future__ import annotations

import sys
from typing import Optional, Sequence


class PromptAborted(Exception):
    """Raised when stdin closes while waiting for an answer."""


def _read(prompt: str) -> str:
    try:
        return input(prompt).strip()
    except EOFError:
        raise PromptAborted("Input aborted (EOF) while prompting user.")


def _input_with_default(prompt: str, default: str = "") -> str:
    """
    Prompt the user for a value, showing the default in brackets.

    Returns the entered string, or the default if the user presses Enter.
    """
    if default:
        full_prompt = f"{prompt} [{default}]: "
    else:
        full_prompt = f"{prompt}: "

    value = _read(full_prompt)
    return value if value else default


def _input_int(
    prompt: str,
    *,
    default: int,
    minimum: int,
    maximum: int,
) -> int:
    """Prompt for a whole number in [minimum, maximum]."""
    while True:
        raw = _read(f"{prompt} [{default}]: ")

        if not raw:
            return default

        try:
            value = int(raw)
        except ValueError:
            print("Please enter a whole number.", file=sys.stderr)
            continue

        if value < minimum or value > maximum:
            print(f"Please enter a value between {minimum} and {maximum}.", file=sys.stderr)
            continue

        return value


def _yes_no(prompt: str, default: bool = True) -> bool:
    """
    Prompt for a yes/no response.

    Returns True for yes, False for no.
    """
    default_str = "Y/n" if default else "y/N"

    while True:
        raw = _read(f"{prompt} ({default_str}): ").lower()

        if not raw:
            return default
        if raw in {"y", "yes"}:
            return True
        if raw in {"n", "no"}:
            return False

        print("Please answer y or n.", file=sys.stderr)


def choose_name(
    title: str,
    names: Sequence[str],
    current: Optional[str] = None,
) -> Optional[str]:
    """
    Numbered picker. The current entry is marked and is the default.

    Returns the chosen name, or None when the user enters 0.
    """
    if not names:
        return None

    print(f"\n{title}:")
    for idx, name in enumerate(names, start=1):
        marker = "->" if name == current else "  "
        print(f"  {marker} {idx}) {name}")

    default = names.index(current) + 1 if current in names else 1
    choice = _input_int(
        "Choose number (0 to cancel)",
        default=default,
        minimum=0,
        maximum=len(names),
    )
    if choice == 0:
        return None
    return names[choice - 1]


def mask_secret(value: str) -> str:
    """Show only the ends of long secrets: 'sk-ant...wxyz'."""
    if len(value) > 10:
        return f"{value[:6]}...{value[-4:]}"
    return value
