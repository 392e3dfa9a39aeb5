"""authphrase.recognizers.bcrypt -- Niels Provos' Eksblowfish crypt (``$2$`` / ``$2a$``)"""

from __future__ import annotations

import dataclasses

from typing_extensions import Self

from authphrase._utils.attributes import choose, require
from authphrase._utils.bytes import StrOrBytes
from authphrase.binary import (
    decode_bcrypt_hash,
    decode_bcrypt_salt,
    encode_bcrypt_hash,
    encode_bcrypt_salt,
)
from authphrase.crypto.blowfish import BCRYPT_MAX_COST, BCRYPT_MIN_COST, bcrypt_hash
from authphrase.errors import UnsupportedSchemeError
from authphrase.recognizers.base import (
    RandomSource,
    Recognizer,
    check_bool,
    check_bytes,
    check_int,
    consteq,
    default_random_bytes,
    prepare,
)

__all__ = ["BlowfishCrypt"]


@dataclasses.dataclass(frozen=True, kw_only=True)
class BlowfishCrypt(Recognizer):
    """
    Recognizer for the bcrypt algorithm.

    The passphrase (plus a NUL when *key_nul* is set, as in ``$2a$``)
    keys Eksblowfish with ``2**cost`` expensive setup rounds, which
    then encrypts ``OrpheanBeholderScryDoubt`` 64 times.
    Matching is CPU-bound, and exponential in *cost*.

    :param key_nul: whether a NUL terminator is appended to the passphrase.
    :param cost: base-2 log of the number of keying rounds.
    :param salt: 16 byte salt.
    :param hash: 23 byte result (the last ciphertext byte is dropped).
    """

    key_nul: bool = True
    cost: int
    salt: bytes
    hash: bytes

    def __post_init__(self) -> None:
        check_bool("key_nul", self.key_nul)
        check_int("cost", self.cost)
        if not BCRYPT_MIN_COST <= self.cost <= BCRYPT_MAX_COST:
            raise UnsupportedSchemeError(
                f"bcrypt cost must be in range {BCRYPT_MIN_COST}..{BCRYPT_MAX_COST}: {self.cost}"
            )
        check_bytes("salt", self.salt, size=16)
        check_bytes("hash", self.hash, size=23)

    @classmethod
    def new(
        cls,
        *,
        key_nul: bool = True,
        cost: int | None = None,
        keying_nrounds_log2: int | None = None,
        salt: bytes | None = None,
        salt_base64: str | None = None,
        salt_random: bool | None = None,
        hash: bytes | None = None,
        hash_base64: str | None = None,
        passphrase: StrOrBytes | None = None,
        random_bytes: RandomSource = default_random_bytes,
    ) -> Self:
        """
        Construct from any of the attribute spellings.

        ``keying_nrounds_log2`` is a synonym for ``cost``.
        """
        key_nul = bool(key_nul)
        _, cost_value = require(
            "cost", choose("cost", cost=cost, keying_nrounds_log2=keying_nrounds_log2)
        )

        name, salt_value = require(
            "salt",
            choose("salt", salt=salt, salt_base64=salt_base64, salt_random=salt_random or None),
        )
        if name == "salt_base64":
            salt_value = decode_bcrypt_salt(salt_value)
        elif name == "salt_random":
            salt_value = random_bytes(16)

        name, hash_value = require(
            "hash", choose("hash", hash=hash, hash_base64=hash_base64, passphrase=passphrase)
        )
        if name == "hash_base64":
            hash_value = decode_bcrypt_hash(hash_value)
        elif name == "passphrase":
            check_int("cost", cost_value)
            check_bytes("salt", salt_value, size=16)
            hash_value = bcrypt_hash(key_nul, cost_value, salt_value, prepare(hash_value))
        return cls(key_nul=key_nul, cost=cost_value, salt=salt_value, hash=hash_value)

    @property
    def keying_nrounds_log2(self) -> int:
        return self.cost

    @property
    def salt_base64(self) -> str:
        return encode_bcrypt_salt(self.salt)

    @property
    def hash_base64(self) -> str:
        return encode_bcrypt_hash(self.hash)

    def match(self, passphrase: StrOrBytes) -> bool:
        computed = bcrypt_hash(self.key_nul, self.cost, self.salt, prepare(passphrase))
        return consteq(computed, self.hash)

    def as_crypt(self) -> str:
        ident = "2a" if self.key_nul else "2"
        return f"${ident}${self.cost:02d}${self.salt_base64}{self.hash_base64}"
