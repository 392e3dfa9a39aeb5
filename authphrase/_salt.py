from __future__ import annotations

import secrets
import string

__all__ = ["DEFAULT_CHARS", "random_bytes", "random_chars"]

DEFAULT_CHARS = string.ascii_letters + string.digits


def random_bytes(length: int) -> bytes:
    return secrets.token_bytes(length)


def random_chars(length: int, chars: str = DEFAULT_CHARS) -> str:
    return "".join(secrets.choice(chars) for _ in range(length))
