"""Random token generation."""

from __future__ import annotations

import secrets

CHARACTERS = "bcdfghjklmnpqrstvwxz2456789"
TOKEN_LENGTH = 54


def generate() -> str:
    """Return a cryptographically random token."""
    return "".join(secrets.choice(CHARACTERS) for _ in range(TOKEN_LENGTH))