"""authphrase.recognizers.md5_crypt -- FreeBSD's MD5-based crypt"""

from __future__ import annotations

import dataclasses

from typing_extensions import Self

from authphrase._salt import random_chars
from authphrase._utils.attributes import choose, require
from authphrase._utils.bytes import StrOrBytes, as_bytes, is_printable_ascii
from authphrase.binary import HASH64_CHARS, decode_md5_crypt_hash, encode_md5_crypt_hash
from authphrase.crypto.md5_crypt import md5_crypt_digest
from authphrase.errors import UnrepresentableError
from authphrase.recognizers.base import (
    RandomSource,
    Recognizer,
    check_bytes,
    consteq,
    default_random_bytes,
    prepare,
)

__all__ = ["MD5Crypt"]

#: salts longer than this are truncated by the algorithm
MD5_CRYPT_MAX_SALT_SIZE = 8


@dataclasses.dataclass(frozen=True, kw_only=True)
class MD5Crypt(Recognizer):
    """
    Recognizer for the MD5-based crypt() from FreeBSD (``$1$``).

    :param salt: up to 8 bytes of salt.
    :param hash: the raw 16 byte result, before the digit permutation.
    """

    salt: bytes
    hash: bytes

    def __post_init__(self) -> None:
        check_bytes("salt", self.salt, max_size=MD5_CRYPT_MAX_SALT_SIZE)
        check_bytes("hash", self.hash, size=16)

    @classmethod
    def new(
        cls,
        *,
        salt: StrOrBytes | None = None,
        salt_random: bool | None = None,
        hash: bytes | None = None,
        hash_base64: str | None = None,
        passphrase: StrOrBytes | None = None,
        random_bytes: RandomSource | None = None,
    ) -> Self:
        """
        Construct from any of the attribute spellings.

        ``salt_random`` draws 8 crypt-base64 digits, from *random_bytes*
        if given.
        """
        name, salt_value = require(
            "salt", choose("salt", salt=salt, salt_random=salt_random or None)
        )
        if name == "salt_random":
            if random_bytes is None:
                salt_value = random_chars(MD5_CRYPT_MAX_SALT_SIZE, HASH64_CHARS).encode("ascii")
            else:
                raw = random_bytes(MD5_CRYPT_MAX_SALT_SIZE)
                salt_value = bytes(ord(HASH64_CHARS[c & 0x3F]) for c in raw)
        else:
            salt_value = as_bytes(salt_value)

        name, hash_value = require(
            "hash", choose("hash", hash=hash, hash_base64=hash_base64, passphrase=passphrase)
        )
        if name == "hash_base64":
            hash_value = decode_md5_crypt_hash(hash_value)
        elif name == "passphrase":
            check_bytes("salt", salt_value, max_size=MD5_CRYPT_MAX_SALT_SIZE)
            hash_value = md5_crypt_digest(prepare(hash_value), salt_value)
        return cls(salt=salt_value, hash=hash_value)

    @property
    def hash_base64(self) -> str:
        return encode_md5_crypt_hash(self.hash)

    def match(self, passphrase: StrOrBytes) -> bool:
        return consteq(md5_crypt_digest(prepare(passphrase), self.salt), self.hash)

    def as_crypt(self) -> str:
        if not is_printable_ascii(self.salt) or any(
            c in b"$:" for c in self.salt
        ):
            raise UnrepresentableError("salt can't be expressed in a crypt string")
        return f"$1${self.salt.decode('ascii')}${self.hash_base64}"
