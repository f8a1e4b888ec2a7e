"""Expansion of home-directory references in paths."""

from __future__ import annotations

import os

_HOMES = ("$HOME", "${HOME}", "~")


def _user_home_dir() -> str:
    variable = "USERPROFILE" if os.name == "nt" else "HOME"
    home = os.environ.get(variable, "")
    if not home:
        raise RuntimeError(f"determining current user: ${variable} is not defined")
    return home


def resolve(s: str) -> str:
    """Replace ``$HOME``, ``${HOME}`` and ``~`` in ``s`` with the home directory."""
    for home in _HOMES:
        if home in s:
            s = s.replace(home, _user_home_dir())
    return s