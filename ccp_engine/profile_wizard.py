"""
Interactive editor for the handful of settings most people change:

    model
    env.ANTHROPIC_BASE_URL
    env.ANTHROPIC_AUTH_TOKEN
    alwaysThinkingEnabled

Pressing Enter keeps the current value. Text fields left blank stay unset.
"""

from __future__ import annotations

import copy
from typing import Any, Dict

from .cli_io import _input_with_default, _yes_no, mask_secret
from .key_path import get_value, set_value

BASE_URL_KEY = "env.ANTHROPIC_BASE_URL"
TOKEN_KEY = "env.ANTHROPIC_AUTH_TOKEN"
THINKING_KEY = "alwaysThinkingEnabled"


def _current_text(data: Any, key: str) -> str:
    value = get_value(data, key)
    return value if isinstance(value, str) else ""


def configure_profile_interactive(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Prompt for each field and return an updated copy of `data`.

    The input document is not modified.
    """
    updated = copy.deepcopy(data)

    model = _input_with_default("Model", _current_text(updated, "model"))
    if model:
        set_value(updated, "model", model)

    url = _input_with_default(
        f"API Base URL ({BASE_URL_KEY})", _current_text(updated, BASE_URL_KEY)
    )
    if url:
        set_value(updated, BASE_URL_KEY, url)

    # Never echo the full token as the bracketed default.
    current_token = _current_text(updated, TOKEN_KEY)
    token = _input_with_default(f"API Token [current: {mask_secret(current_token)}]", "")
    token = token or current_token
    if token:
        set_value(updated, TOKEN_KEY, token)

    current_thinking = get_value(updated, THINKING_KEY)
    thinking = _yes_no(
        "Always thinking enabled?",
        default=current_thinking if isinstance(current_thinking, bool) else False,
    )
    set_value(updated, THINKING_KEY, thinking)

    return updated
