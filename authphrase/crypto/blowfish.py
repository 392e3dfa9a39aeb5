"""authphrase.crypto.blowfish -- Eksblowfish (bcrypt) and plain Blowfish

Eksblowfish has two backends:

* the ``bcrypt`` package, used for ``$2a$`` style keys
  (passphrase plus NUL) which contain no other NUL bytes.
* the pure python implementation shipped with passlib,
  used for ``$2$`` style keys, keys with embedded NULs,
  or everything when ``AUTHPHRASE_BCRYPT_BACKEND=builtin``.
"""

from __future__ import annotations

import logging; log = logging.getLogger(__name__)
from importlib import metadata

import bcrypt as _bcrypt
from cryptography.hazmat.decrepit.ciphers.algorithms import Blowfish
from cryptography.hazmat.primitives.ciphers import Cipher, modes
from passlib.crypto._blowfish import raw_bcrypt

from authphrase._utils.const import (
    BCRYPT_BACKEND,
    BCRYPT_MAX_KEY_SIZE,
    BLOWFISH_MAX_KEY_SIZE,
)
from authphrase.binary import decode_bcrypt_hash, encode_bcrypt_salt
from authphrase.errors import UnsupportedSchemeError

__all__ = [
    "BCRYPT_MIN_COST",
    "BCRYPT_MAX_COST",
    "bcrypt_hash",
    "blowfish_encrypt_block",
]

#: cost range supported by every Eksblowfish backend
BCRYPT_MIN_COST = 4
BCRYPT_MAX_COST = 31

_backends = ("auto", "bcrypt", "builtin")

if BCRYPT_BACKEND not in _backends:
    raise ValueError(
        f"AUTHPHRASE_BCRYPT_BACKEND must be one of {', '.join(_backends)}, "
        f"not {BCRYPT_BACKEND!r}"
    )

try:
    _bcrypt_version = metadata.version("bcrypt")
except Exception:
    log.warning("(trapped) error reading bcrypt version", exc_info=True)
    _bcrypt_version = "<unknown>"

log.debug(
    "eksblowfish backend %r selected ('bcrypt' package version %r)",
    BCRYPT_BACKEND,
    _bcrypt_version,
)


def _bcrypt_package_hash(cost: int, salt64: str, passphrase: bytes) -> bytes:
    # bcrypt package appends the NUL terminator itself
    config = f"$2a${cost:02d}${salt64}".encode("ascii")
    result = _bcrypt.hashpw(passphrase, config)
    return decode_bcrypt_hash(result[-31:].decode("ascii"))


def _builtin_hash(cost: int, salt64: str, key: bytes) -> bytes:
    # ident "2" keeps raw_bcrypt from adding a NUL of its own;
    # an empty key is read as its NUL terminator, as the C code does.
    key = key or b"\x00"
    result = raw_bcrypt(key, "2", salt64.encode("ascii"), cost)
    return decode_bcrypt_hash(result.decode("ascii"))


def bcrypt_hash(key_nul: bool, cost: int, salt: bytes, passphrase: bytes) -> bytes:
    """
    compute the 23 byte Eksblowfish result for a passphrase.

    :arg key_nul: whether a NUL is appended to the passphrase to form the key
    :arg cost: base-2 log of the number of key expansion rounds
    :arg salt: 16 bytes of salt
    :arg passphrase: passphrase as bytes

    :raises UnsupportedSchemeError: if cost is outside of 4..31.
    """
    if not BCRYPT_MIN_COST <= cost <= BCRYPT_MAX_COST:
        raise UnsupportedSchemeError(
            f"bcrypt cost must be in range {BCRYPT_MIN_COST}..{BCRYPT_MAX_COST}: {cost}"
        )
    salt64 = encode_bcrypt_salt(salt)
    key = (passphrase + b"\x00" if key_nul else passphrase)[:BCRYPT_MAX_KEY_SIZE]
    if (
        BCRYPT_BACKEND != "builtin"
        and key_nul
        and b"\x00" not in passphrase[:BCRYPT_MAX_KEY_SIZE]
    ):
        return _bcrypt_package_hash(cost, salt64, passphrase[:BCRYPT_MAX_KEY_SIZE])
    if BCRYPT_BACKEND == "bcrypt":
        raise UnsupportedSchemeError(
            "'bcrypt' backend can't hash keys without NUL terminator or with embedded NULs"
        )
    return _builtin_hash(cost, salt64, key)


def blowfish_encrypt_block(key: bytes, block: bytes) -> bytes:
    """
    encrypt a single 8 byte block with plain Blowfish.

    :raises UnsupportedSchemeError: if key is longer than 56 bytes.
    """
    if len(key) > BLOWFISH_MAX_KEY_SIZE:
        raise UnsupportedSchemeError(
            f"blowfish key must be at most {BLOWFISH_MAX_KEY_SIZE} bytes"
        )
    encryptor = Cipher(Blowfish(key), modes.ECB()).encryptor()
    return encryptor.update(block) + encryptor.finalize()
