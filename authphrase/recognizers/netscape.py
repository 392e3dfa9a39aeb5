"""authphrase.recognizers.netscape -- Netscape Mail Server's salted MD5"""

from __future__ import annotations

import dataclasses
from hashlib import md5

from typing_extensions import Self

from authphrase._utils.attributes import choose, require
from authphrase._utils.bytes import StrOrBytes, as_bytes, is_printable_ascii
from authphrase.binary import hex_decode, hex_encode
from authphrase.errors import UnrepresentableError
from authphrase.recognizers.base import (
    RandomSource,
    Recognizer,
    check_bytes,
    consteq,
    default_random_bytes,
    prepare,
)

__all__ = ["NetscapeMail"]


def _calc_hash(salt: bytes, secret: bytes) -> bytes:
    return md5(salt + b"\x59" + secret + b"\xf7" + salt).digest()


@dataclasses.dataclass(frozen=True, kw_only=True)
class NetscapeMail(Recognizer):
    """
    Recognizer for ``{NS-MTA-MD5}`` hashes:
    ``MD5(salt . 0x59 . passphrase . 0xF7 . salt)``.

    :param salt: 32 byte salt, conventionally 32 hex digits.
    :param hash: 16 byte MD5 digest.
    """

    salt: bytes
    hash: bytes

    def __post_init__(self) -> None:
        check_bytes("salt", self.salt, size=32)
        check_bytes("hash", self.hash, size=16)

    @classmethod
    def new(
        cls,
        *,
        salt: StrOrBytes | None = None,
        salt_random: bool | None = None,
        hash: bytes | None = None,
        hash_hex: str | None = None,
        passphrase: StrOrBytes | None = None,
        random_bytes: RandomSource = default_random_bytes,
    ) -> Self:
        """
        Construct from any of the attribute spellings.

        ``salt_random`` generates 128 random bits, as 32 hex digits.
        """
        name, salt_value = require(
            "salt", choose("salt", salt=salt, salt_random=salt_random or None)
        )
        if name == "salt_random":
            salt_value = hex_encode(random_bytes(16)).encode("ascii")
        else:
            salt_value = as_bytes(salt_value)

        name, hash_value = require(
            "hash", choose("hash", hash=hash, hash_hex=hash_hex, passphrase=passphrase)
        )
        if name == "hash_hex":
            hash_value = hex_decode(hash_value)
        elif name == "passphrase":
            check_bytes("salt", salt_value, size=32)
            hash_value = _calc_hash(salt_value, prepare(hash_value))
        return cls(salt=salt_value, hash=hash_value)

    @property
    def hash_hex(self) -> str:
        return hex_encode(self.hash)

    def match(self, passphrase: StrOrBytes) -> bool:
        return consteq(_calc_hash(self.salt, prepare(passphrase)), self.hash)

    def as_rfc2307(self) -> str:
        if not is_printable_ascii(self.salt, space=False):
            raise UnrepresentableError("salt can't be expressed in an RFC 2307 string")
        return "{NS-MTA-MD5}" + self.hash_hex + self.salt.decode("ascii")
