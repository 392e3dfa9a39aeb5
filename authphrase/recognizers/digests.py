"""authphrase.recognizers.digests -- salted (and unsalted) message digests"""

from __future__ import annotations

import dataclasses

from typing_extensions import Self

from authphrase._utils.attributes import choose, require
from authphrase._utils.bytes import StrOrBytes
from authphrase._utils.const import SALTED_DIGEST_DEFAULT_SALT_SIZE
from authphrase.binary import b64_encode, hex_decode, hex_encode
from authphrase.crypto.digest import lookup_digest, norm_digest_name
from authphrase.errors import InvalidAttributeError, UnrepresentableError
from authphrase.recognizers.base import (
    RandomSource,
    Recognizer,
    check_bytes,
    consteq,
    default_random_bytes,
    prepare,
)

__all__ = [
    "SaltedDigest",
    "RFC2307_DIGEST_TAGS",
]

#: RFC 2307 tags for digests: tag -> (algorithm, salted)
RFC2307_DIGEST_TAGS = {
    "MD4": ("MD4", False),
    "MD5": ("MD5", False),
    "SMD5": ("MD5", True),
    "SHA": ("SHA-1", False),
    "SSHA": ("SHA-1", True),
    "RMD160": ("RIPEMD-160", False),
    "SHA256": ("SHA-256", False),
    "SSHA256": ("SHA-256", True),
    "SHA512": ("SHA-512", False),
    "SSHA512": ("SHA-512", True),
}

_tag_by_algorithm = {value: tag for tag, value in RFC2307_DIGEST_TAGS.items()}


@dataclasses.dataclass(frozen=True, kw_only=True)
class SaltedDigest(Recognizer):
    """
    Recognizer for ``digest(passphrase + salt)``.

    :param algorithm:
        digest name, e.g. ``"SHA-1"``; normalized to IANA style,
        so ``"sha1"`` is accepted too.
    :param salt: salt appended to the passphrase, may be empty.
    :param hash: the digest output.
    """

    algorithm: str
    salt: bytes = b""
    hash: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.algorithm, str):
            raise InvalidAttributeError("algorithm must be a string")
        object.__setattr__(self, "algorithm", norm_digest_name(self.algorithm))
        check_bytes("salt", self.salt)
        check_bytes("hash", self.hash, size=lookup_digest(self.algorithm).digest_size)

    @classmethod
    def new(
        cls,
        *,
        algorithm: str,
        salt: bytes | None = None,
        salt_hex: str | None = None,
        salt_random: bool | int | None = None,
        hash: bytes | None = None,
        hash_hex: str | None = None,
        passphrase: StrOrBytes | None = None,
        random_bytes: RandomSource = default_random_bytes,
    ) -> Self:
        """
        Construct from any of the attribute spellings.

        ``salt_random`` may be ``True`` (8 bytes) or a byte count.
        Exactly one of ``hash``, ``hash_hex``, ``passphrase`` must be given.
        """
        info = lookup_digest(algorithm)
        salt_value = b""
        chosen = choose("salt", salt=salt, salt_hex=salt_hex, salt_random=salt_random or None)
        if chosen is not None:
            name, value = chosen
            if name == "salt_hex":
                salt_value = hex_decode(value)
            elif name == "salt_random":
                size = SALTED_DIGEST_DEFAULT_SALT_SIZE if value is True else value
                salt_value = random_bytes(size)
            else:
                salt_value = value
        name, value = require(
            "hash", choose("hash", hash=hash, hash_hex=hash_hex, passphrase=passphrase)
        )
        if name == "hash_hex":
            value = hex_decode(value)
        elif name == "passphrase":
            value = info.digest(prepare(value) + salt_value)
        return cls(algorithm=info.name, salt=salt_value, hash=value)

    @property
    def salt_hex(self) -> str:
        return hex_encode(self.salt)

    @property
    def hash_hex(self) -> str:
        return hex_encode(self.hash)

    def match(self, passphrase: StrOrBytes) -> bool:
        computed = lookup_digest(self.algorithm).digest(prepare(passphrase) + self.salt)
        return consteq(computed, self.hash)

    def as_rfc2307(self) -> str:
        tag = _tag_by_algorithm.get((self.algorithm, bool(self.salt)))
        if tag is None:
            raise UnrepresentableError(
                f"no RFC 2307 tag for {'salted ' if self.salt else ''}{self.algorithm} digest"
            )
        return f"{{{tag}}}" + b64_encode(self.hash + self.salt)
