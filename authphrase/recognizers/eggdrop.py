"""authphrase.recognizers.eggdrop -- the Eggdrop IRC bot's Blowfish hash"""

from __future__ import annotations

import dataclasses

from typing_extensions import Self

from authphrase._utils.attributes import choose, require
from authphrase._utils.bytes import StrOrBytes
from authphrase._utils.const import EGGDROP_MAGIC
from authphrase.binary import decode_eggdrop64, encode_eggdrop64
from authphrase.crypto.blowfish import blowfish_encrypt_block
from authphrase.errors import InvalidAttributeError
from authphrase.recognizers.base import Recognizer, check_bytes, consteq, prepare

__all__ = ["EggdropBlowfish"]


def _calc_hash(secret: bytes) -> bytes:
    key = secret
    while len(key) < 8:
        key += key
    return blowfish_encrypt_block(key, EGGDROP_MAGIC)


@dataclasses.dataclass(frozen=True)
class EggdropBlowfish(Recognizer):
    """
    Recognizer for Eggdrop's Blowfish passphrase hash.

    The passphrase is repeated until at least 8 bytes long,
    then used as a Blowfish key to encrypt a fixed block.
    The empty passphrase is never accepted. There is no crypt or
    RFC 2307 form.

    :param hash: 8 byte Blowfish output.
    """

    hash: bytes

    def __post_init__(self) -> None:
        check_bytes("hash", self.hash, size=8)

    @classmethod
    def new(
        cls,
        *,
        hash: bytes | None = None,
        hash_base64: str | None = None,
        passphrase: StrOrBytes | None = None,
    ) -> Self:
        name, value = require(
            "hash", choose("hash", hash=hash, hash_base64=hash_base64, passphrase=passphrase)
        )
        if name == "hash_base64":
            value = decode_eggdrop64(value)
        elif name == "passphrase":
            secret = prepare(value)
            if not secret:
                raise InvalidAttributeError("can't accept empty passphrase")
            value = _calc_hash(secret)
        return cls(value)

    @property
    def hash_base64(self) -> str:
        return encode_eggdrop64(self.hash)

    def match(self, passphrase: StrOrBytes) -> bool:
        secret = prepare(passphrase)
        if not secret:
            return False
        return consteq(_calc_hash(secret), self.hash)
