"""
Package entry point.

Allows:
  python -m ccp_engine ...

Delegates to the profile CLI.
"""

from __future__ import annotations

from .profile_cli import main

if __name__ == "__main__":
    raise SystemExit(main())
