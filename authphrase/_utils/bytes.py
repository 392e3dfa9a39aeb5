from __future__ import annotations

from typing import Union

StrOrBytes = Union[str, bytes]


def as_bytes(value: StrOrBytes) -> bytes:
    return value.encode("utf8") if isinstance(value, str) else value


def as_chars(value: StrOrBytes) -> str:
    """
    decode passphrase into characters, for schemes which hash characters
    rather than bytes. undecodable bytes map to lone surrogates,
    so this never fails.
    """
    if isinstance(value, bytes):
        return value.decode("utf8", "surrogateescape")
    return value


def is_printable_ascii(value: StrOrBytes, *, space: bool = True) -> bool:
    """check every character is in the printable ascii range"""
    low = 0x20 if space else 0x21
    data = as_bytes(value)
    return all(low <= c <= 0x7E for c in data)
