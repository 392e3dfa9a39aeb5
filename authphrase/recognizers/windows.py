"""authphrase.recognizers.windows -- Microsoft NT and LAN Manager hashes"""

from __future__ import annotations

import dataclasses

from typing_extensions import Self

from authphrase._utils.attributes import choose, require
from authphrase._utils.bytes import StrOrBytes, as_chars
from authphrase._utils.const import NTHASH_MAX_CHARS
from authphrase.binary import hex_decode, hex_encode
from authphrase.crypto.des import lanman_half
from authphrase.crypto.digest import lookup_digest
from authphrase.errors import InvalidAttributeError
from authphrase.recognizers.base import Recognizer, check_bytes, consteq, prepare

__all__ = [
    "NTHash",
    "LANManagerHalf",
    "LANManager",
]

#: longest passphrase accepted by each LAN Manager half
LANMAN_HALF_SIZE = 7


def _hash_from(
    size: int,
    hash: bytes | None,
    hash_hex: str | None,
    passphrase: StrOrBytes | None,
) -> tuple[str, bytes | StrOrBytes]:
    name, value = require(
        "hash", choose("hash", hash=hash, hash_hex=hash_hex, passphrase=passphrase)
    )
    if name == "hash_hex":
        if len(value) != size * 2:
            raise InvalidAttributeError(f"hash_hex must be {size * 2} hex digits")
        value = hex_decode(value)
    return name, value


# =============================================================================
# NT hash
# =============================================================================


def nthash_digest(passphrase: StrOrBytes) -> bytes:
    """
    MD4 of the passphrase's first 128 characters,
    each as a 16-bit little-endian code unit.
    """
    if not isinstance(passphrase, (str, bytes)):
        raise TypeError(f"passphrase must be str or bytes, not {type(passphrase).__name__}")
    chars = as_chars(passphrase)[:NTHASH_MAX_CHARS]
    data = b"".join((ord(c) & 0xFFFF).to_bytes(2, "little") for c in chars)
    return lookup_digest("MD4").digest(data)


@dataclasses.dataclass(frozen=True)
class NTHash(Recognizer):
    """
    Recognizer for the Microsoft NT hash, also used by Samba.

    Characters beyond the 128th are ignored. Byte passphrases are
    decoded as UTF-8; undecodable bytes are kept as lone surrogates.

    :param hash: 16 byte MD4 digest.
    """

    hash: bytes

    def __post_init__(self) -> None:
        check_bytes("hash", self.hash, size=16)

    @classmethod
    def new(
        cls,
        *,
        hash: bytes | None = None,
        hash_hex: str | None = None,
        passphrase: StrOrBytes | None = None,
    ) -> Self:
        name, value = _hash_from(16, hash, hash_hex, passphrase)
        if name == "passphrase":
            value = nthash_digest(value)
        return cls(hash=value)

    @property
    def hash_hex(self) -> str:
        return hex_encode(self.hash)

    def match(self, passphrase: StrOrBytes) -> bool:
        return consteq(nthash_digest(passphrase), self.hash)

    def as_crypt(self) -> str:
        return "$3$$" + self.hash_hex

    def as_rfc2307(self) -> str:
        return "{MSNT}" + self.hash_hex


# =============================================================================
# LAN Manager
# =============================================================================


def _lanman_key(secret: bytes) -> bytes:
    # bytes.upper() only changes ascii letters
    return secret.upper().ljust(LANMAN_HALF_SIZE, b"\x00")


@dataclasses.dataclass(frozen=True)
class LANManagerHalf(Recognizer):
    """
    Recognizer for one half of a LAN Manager hash.

    Accepts passphrases of at most 7 bytes: uppercased, NUL padded,
    and used as a DES key to encrypt ``KGS!@#$%``.

    :param hash: 8 byte DES output.
    """

    hash: bytes

    def __post_init__(self) -> None:
        check_bytes("hash", self.hash, size=8)

    @classmethod
    def new(
        cls,
        *,
        hash: bytes | None = None,
        hash_hex: str | None = None,
        passphrase: StrOrBytes | None = None,
    ) -> Self:
        name, value = _hash_from(8, hash, hash_hex, passphrase)
        if name == "passphrase":
            secret = prepare(value)
            if len(secret) > LANMAN_HALF_SIZE:
                raise InvalidAttributeError(
                    f"passphrase must be at most {LANMAN_HALF_SIZE} bytes"
                )
            value = lanman_half(_lanman_key(secret))
        return cls(hash=value)

    @property
    def hash_hex(self) -> str:
        return hex_encode(self.hash)

    def match(self, passphrase: StrOrBytes) -> bool:
        secret = prepare(passphrase)
        if len(secret) > LANMAN_HALF_SIZE:
            return False
        return consteq(lanman_half(_lanman_key(secret)), self.hash)

    def as_crypt(self) -> str:
        return "$LM$" + self.hash_hex


@dataclasses.dataclass(frozen=True)
class LANManager(Recognizer):
    """
    Recognizer for the full LAN Manager hash.

    The passphrase (at most 14 bytes) is split into two 7 byte pieces,
    each checked by its own :class:`LANManagerHalf`.
    """

    first_half: LANManagerHalf
    second_half: LANManagerHalf

    def __post_init__(self) -> None:
        for name in ("first_half", "second_half"):
            if not isinstance(getattr(self, name), LANManagerHalf):
                raise InvalidAttributeError(f"{name} must be a LANManagerHalf")

    @classmethod
    def new(
        cls,
        *,
        hash: bytes | None = None,
        hash_hex: str | None = None,
        passphrase: StrOrBytes | None = None,
    ) -> Self:
        name, value = _hash_from(16, hash, hash_hex, passphrase)
        if name == "passphrase":
            secret = prepare(value)
            if len(secret) > 2 * LANMAN_HALF_SIZE:
                raise InvalidAttributeError(
                    f"passphrase must be at most {2 * LANMAN_HALF_SIZE} bytes"
                )
            return cls(
                first_half=LANManagerHalf.new(passphrase=secret[:LANMAN_HALF_SIZE]),
                second_half=LANManagerHalf.new(passphrase=secret[LANMAN_HALF_SIZE:]),
            )
        check_bytes("hash", value, size=16)
        return cls(
            first_half=LANManagerHalf(value[:8]),
            second_half=LANManagerHalf(value[8:]),
        )

    @property
    def hash(self) -> bytes:
        return self.first_half.hash + self.second_half.hash

    @property
    def hash_hex(self) -> str:
        return hex_encode(self.hash)

    def match(self, passphrase: StrOrBytes) -> bool:
        secret = prepare(passphrase)
        if len(secret) > 2 * LANMAN_HALF_SIZE:
            return False
        first = self.first_half.match(secret[:LANMAN_HALF_SIZE])
        second = self.second_half.match(secret[LANMAN_HALF_SIZE:])
        return first and second

    def as_rfc2307(self) -> str:
        return "{LANMAN}" + self.hash_hex
