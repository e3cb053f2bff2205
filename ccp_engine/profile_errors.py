from __future__ import annotations

from pathlib import Path
from typing import Union


class CcpError(Exception):
    """Base class for every failure the profile manager reports to the user."""


class ConfigError(CcpError):
    """Raised when the home directory cannot be determined."""


class NotFound(CcpError):
    """A profile, backup or settings file does not exist."""


class AlreadyExists(CcpError):
    """Create / copy / rename / import would overwrite an existing profile."""


class InvalidName(CcpError):
    """A profile or backup name cannot be used as a filename stem."""


class ProtectedProfile(CcpError):
    """Raised when deleting the default profile without force."""


class InvalidKeyPath(CcpError):
    """Raised when a key path has no usable segments."""


class TypeMismatch(CcpError):
    """
    A key path walks through a value that is not a JSON object.

    Example: setting 'a.b' when 'a' already holds a string.
    """

    def __init__(self, key: str, blocked_at: str, type_name: str) -> None:
        self.key = key
        self.blocked_at = blocked_at
        self.type_name = type_name
        if blocked_at:
            msg = f"cannot set '{key}' because '{blocked_at}' is {_article(type_name)}"
        else:
            msg = f"cannot set '{key}' because the document root is {_article(type_name)}"
        super().__init__(msg)


# ---------------------------------------------------------------------------
# File I/O failures (carry the offending path)
# ---------------------------------------------------------------------------


class FileError(CcpError):
    """Common base for read / write / parse failures on a specific path."""

    action = "access"

    def __init__(self, path: Union[Path, str], reason: object = "") -> None:
        self.path = path
        self.reason = str(reason)
        msg = f"Failed to {self.action} {path}"
        if self.reason:
            msg += f": {self.reason}"
        super().__init__(msg)


class ReadError(FileError):
    action = "read"


class WriteError(FileError):
    action = "write"


class ParseError(FileError):
    action = "parse JSON from"


def _article(type_name: str) -> str:
    return ("an " if type_name[:1] in "aeiou" else "a ") + type_name
