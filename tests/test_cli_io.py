# file: tests/test_cli_io.py
from __future__ import annotations

import builtins
from typing import List

import pytest

from ccp_engine.cli_io import (
    PromptAborted,
    _input_int,
    _input_with_default,
    _yes_no,
    choose_name,
    mask_secret,
)


def test_input_with_default_uses_default_on_empty(monkeypatch):
    def fake_input(prompt: str) -> str:
        return ""  # simulate pressing Enter

    monkeypatch.setattr(builtins, "input", fake_input)
    assert _input_with_default("Model", default="sonnet-4") == "sonnet-4"


def test_input_with_default_returns_value(monkeypatch):
    prompts: List[str] = []

    def fake_input(prompt: str) -> str:
        prompts.append(prompt)
        return "  opus  "

    monkeypatch.setattr(builtins, "input", fake_input)
    assert _input_with_default("Model", default="x") == "opus"
    assert prompts == ["Model [x]: "]


def test_input_int_retries_until_in_range(monkeypatch, capsys):
    answers: List[str] = ["abc", "9", "2"]

    def fake_input(prompt: str) -> str:
        return answers.pop(0)

    monkeypatch.setattr(builtins, "input", fake_input)
    assert _input_int("Pick", default=1, minimum=0, maximum=3) == 2

    err = capsys.readouterr().err
    assert "Please enter a whole number." in err
    assert "Please enter a value between 0 and 3." in err


def test_input_int_uses_default(monkeypatch):
    monkeypatch.setattr(builtins, "input", lambda prompt: "")
    assert _input_int("Pick", default=2, minimum=0, maximum=3) == 2


def test_yes_no_defaults(monkeypatch):
    monkeypatch.setattr(builtins, "input", lambda prompt: "")

    assert _yes_no("Proceed?", default=True) is True
    assert _yes_no("Proceed?", default=False) is False


def test_yes_no_explicit_answers(monkeypatch):
    answers: List[str] = ["maybe", "y", "NO"]

    def fake_input(prompt: str) -> str:
        return answers.pop(0)

    monkeypatch.setattr(builtins, "input", fake_input)

    assert _yes_no("OK?", default=False) is True
    assert _yes_no("OK?", default=True) is False


def test_eof_raises_prompt_aborted(monkeypatch):
    def fake_input(prompt: str) -> str:
        raise EOFError

    monkeypatch.setattr(builtins, "input", fake_input)

    with pytest.raises(PromptAborted):
        _yes_no("OK?")


def test_choose_name_marks_current_and_defaults_to_it(monkeypatch, capsys):
    monkeypatch.setattr(builtins, "input", lambda prompt: "")

    assert choose_name("Select profile", ["a", "b", "c"], current="b") == "b"

    out = capsys.readouterr().out
    assert "-> 2) b" in out
    assert "   1) a" in out


def test_choose_name_cancel_and_empty(monkeypatch):
    monkeypatch.setattr(builtins, "input", lambda prompt: "0")

    assert choose_name("Select profile", ["a"]) is None
    assert choose_name("Select profile", []) is None


@pytest.mark.parametrize(
    "value, shown",
    [
        ("", ""),
        ("short", "short"),
        ("sk-ant-api03-abcdefwxyz", "sk-ant...wxyz"),
    ],
)
def test_mask_secret(value, shown):
    assert mask_secret(value) == shown
