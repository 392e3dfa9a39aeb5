"""authphrase.crypto.digest -- lookup of message digests by name"""

from __future__ import annotations

import functools
import hashlib
import logging; log = logging.getLogger(__name__)
import re
from dataclasses import dataclass
from typing import Any, Callable

from authphrase.errors import UnsupportedSchemeError

__all__ = [
    "DigestInfo",
    "lookup_digest",
    "norm_digest_name",
]

#: list of known digests, used by norm_digest_name()
_known_digests = [
    # format: (iana name or standin, hashlib name, digest size, other known aliases ...)
    ("MD4", "md4", 16),
    ("MD5", "md5", 16),
    ("SHA-1", "sha1", 20, "sha"),
    ("SHA-224", "sha224", 28, "sha2-224"),
    ("SHA-256", "sha256", 32, "sha2-256"),
    ("SHA-384", "sha384", 48, "sha2-384"),
    ("SHA-512", "sha512", 64, "sha2-512"),
    # NOTE: there was an older "ripemd" and "ripemd-128",
    #       but python resolves "ripemd" -> "ripemd160",
    #       so treating "ripemd" as alias here.
    ("RIPEMD-160", "ripemd160", 20, "rmd160", "ripemd"),
]


def _find_row(name: str) -> tuple[Any, ...]:
    norm = re.sub("[_ /]", "-", name.strip().lower())
    for row in _known_digests:
        if norm == row[0].lower() or norm in row[1:2] + row[3:]:
            return row
    raise UnsupportedSchemeError(f"unknown digest: {name!r}")


def norm_digest_name(name: str) -> str:
    """
    normalize digest name to IANA-style format (e.g. ``"sha1"`` -> ``"SHA-1"``).

    :raises UnsupportedSchemeError: if the name isn't a known digest.
    """
    return _find_row(name)[0]


def _get_digest_const(name: str) -> Callable[..., Any] | None:
    """
    lookup digest constructor by hashlib name.

    :returns:
        digest constructor, e.g. ``hashlib.sha256()``;
        or None if the digest can't be located.
    """
    # check hashlib.<attr> for an efficient constructor
    const = getattr(hashlib, name, None)
    if const is not None:
        return const

    # check hashlib.new() in case openssl supports the digest
    try:
        # new() should throw ValueError if alg is unknown
        hashlib.new(name, b"")
    except ValueError:
        pass
    else:

        def const(msg: bytes = b"") -> Any:
            return hashlib.new(name, msg)

        const.__name__ = name
        return const

    # openssl 3 moved md4 into the legacy provider; use passlib's builtin
    if name == "md4":
        from passlib.crypto.digest import lookup_hash

        log.debug("md4 not provided by hashlib, using passlib fallback")
        return lookup_hash("md4").const

    return None


@dataclass(frozen=True)
class DigestInfo:
    """
    Record describing a digest algorithm, as returned by :func:`lookup_digest`.

    .. attribute:: name

        IANA-style name (e.g. ``"SHA-256"``).

    .. attribute:: hashlib_name

        hashlib-compatible name (e.g. ``"sha256"``).

    .. attribute:: digest_size

        output size in bytes; known even when the digest isn't available.

    .. attribute:: const

        digest constructor; if the digest isn't available on this system,
        calling it raises :exc:`~authphrase.errors.UnsupportedSchemeError`.
    """

    name: str
    hashlib_name: str
    digest_size: int
    const: Callable[..., Any]

    def digest(self, data: bytes) -> bytes:
        return self.const(data).digest()


@functools.lru_cache(maxsize=None)
def lookup_digest(name: str) -> DigestInfo:
    """
    Returns a :class:`DigestInfo` record for the named digest.

    :arg name: digest name, in IANA or hashlib format (case-insensitive).
    :raises UnsupportedSchemeError: if the name isn't a known digest.
    """
    row = _find_row(name)
    iana_name, hashlib_name, digest_size = row[:3]
    const = _get_digest_const(hashlib_name)
    if const is not None:
        return DigestInfo(iana_name, hashlib_name, digest_size, const)

    log.debug("digest %r not available on this system", iana_name)

    def stub_const(msg: bytes = b"") -> Any:
        raise UnsupportedSchemeError(
            f"{iana_name} digest not available on this system"
        )

    return DigestInfo(iana_name, hashlib_name, digest_size, stub_const)
