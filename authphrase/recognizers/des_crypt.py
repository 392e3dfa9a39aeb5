"""authphrase.recognizers.des_crypt -- DES-based crypt(3) and its BSDi extension"""

from __future__ import annotations

import dataclasses

from typing_extensions import Self

from authphrase._utils.attributes import choose, require
from authphrase._utils.bytes import StrOrBytes
from authphrase._utils.const import (
    DES_CRYPT_DEFAULT_ROUNDS,
    DES_CRYPT_MAX_INT12,
    DES_CRYPT_MAX_INT24,
)
from authphrase.binary import (
    decode_des_block,
    decode_des_int12,
    decode_des_int24,
    encode_des_block,
    encode_des_int12,
    encode_des_int24,
)
from authphrase.crypto.des import crypt_rounds, des_key, fold_key
from authphrase.errors import MalformedEncodingError, UnrepresentableError
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

__all__ = ["DESCrypt"]

_ZERO_BLOCK = bytes(8)


@dataclasses.dataclass(frozen=True, kw_only=True)
class DESCrypt(Recognizer):
    """
    Recognizer for the DES-based crypt() algorithm and its generalisations.

    The passphrase is turned into a DES key (its first 8 bytes, or all of it
    folded down by the BSDi scheme when *fold* is set); the *initial* block is
    then encrypted *nrounds* times, using a variant of DES perturbed by *salt*.

    The traditional crypt() has ``fold=False``, a zero initial block,
    25 rounds and a 12-bit salt; BSDi's extended form folds the passphrase
    and allows any round count and a 24-bit salt.

    :param fold: whether to fold the whole passphrase into the key.
    :param initial: 8 byte block to encrypt.
    :param nrounds: number of encryptions, ``0 <= nrounds < 2**24``.
    :param salt: salt, ``0 <= salt < 2**24``.
    :param hash: 8 byte result of the encryption.
    """

    fold: bool = False
    initial: bytes = _ZERO_BLOCK
    nrounds: int = DES_CRYPT_DEFAULT_ROUNDS
    salt: int
    hash: bytes

    def __post_init__(self) -> None:
        check_bool("fold", self.fold)
        check_bytes("initial", self.initial, size=8)
        check_int("nrounds", self.nrounds, max=DES_CRYPT_MAX_INT24)
        check_int("salt", self.salt, max=DES_CRYPT_MAX_INT24)
        check_bytes("hash", self.hash, size=8)

    @classmethod
    def new(
        cls,
        *,
        fold: bool = False,
        initial: bytes | None = None,
        initial_base64: str | None = None,
        nrounds: int | None = None,
        nrounds_base64: str | None = None,
        salt: int | None = None,
        salt_base64: str | None = None,
        salt_random: bool | None = None,
        hash: bytes | None = None,
        hash_base64: str | None = None,
        passphrase: StrOrBytes | None = None,
        random_bytes: RandomSource = default_random_bytes,
    ) -> Self:
        """
        Construct from any of the attribute spellings.

        ``salt_base64`` may be 2 or 4 digits. ``salt_random`` draws
        a 24-bit salt when folding, and a 12-bit one otherwise.
        """
        fold = bool(fold)
        initial_value = _ZERO_BLOCK
        chosen = choose("initial block", initial=initial, initial_base64=initial_base64)
        if chosen is not None:
            name, initial_value = chosen
            if name == "initial_base64":
                initial_value = decode_des_block(initial_value)

        nrounds_value = DES_CRYPT_DEFAULT_ROUNDS
        chosen = choose("nrounds", nrounds=nrounds, nrounds_base64=nrounds_base64)
        if chosen is not None:
            name, nrounds_value = chosen
            if name == "nrounds_base64":
                nrounds_value = decode_des_int24(nrounds_value)

        name, salt_value = require(
            "salt",
            choose("salt", salt=salt, salt_base64=salt_base64, salt_random=salt_random or None),
        )
        if name == "salt_base64":
            if len(salt_value) == 2:
                salt_value = decode_des_int12(salt_value)
            elif len(salt_value) == 4:
                salt_value = decode_des_int24(salt_value)
            else:
                raise MalformedEncodingError("salt must be 2 or 4 base64 digits")
        elif name == "salt_random":
            salt_value = int.from_bytes(random_bytes(3 if fold else 2), "big")
            salt_value &= DES_CRYPT_MAX_INT24 if fold else DES_CRYPT_MAX_INT12

        name, hash_value = require(
            "hash", choose("hash", hash=hash, hash_base64=hash_base64, passphrase=passphrase)
        )
        if name == "hash_base64":
            hash_value = decode_des_block(hash_value)
        elif name == "passphrase":
            check_int("nrounds", nrounds_value, max=DES_CRYPT_MAX_INT24)
            check_int("salt", salt_value, max=DES_CRYPT_MAX_INT24)
            check_bytes("initial", initial_value, size=8)
            hash_value = _calc_hash(
                prepare(hash_value), fold, nrounds_value, salt_value, initial_value
            )

        return cls(
            fold=fold,
            initial=initial_value,
            nrounds=nrounds_value,
            salt=salt_value,
            hash=hash_value,
        )

    # ---------------------------------------------------------------
    # encoded accessors
    # ---------------------------------------------------------------

    @property
    def salt_base64_2(self) -> str:
        if self.salt > DES_CRYPT_MAX_INT12:
            raise UnrepresentableError("salt too large for two base64 digits")
        return encode_des_int12(self.salt)

    @property
    def salt_base64_4(self) -> str:
        return encode_des_int24(self.salt)

    @property
    def nrounds_base64_4(self) -> str:
        return encode_des_int24(self.nrounds)

    @property
    def initial_base64(self) -> str:
        return encode_des_block(self.initial)

    @property
    def hash_base64(self) -> str:
        return encode_des_block(self.hash)

    # ---------------------------------------------------------------
    # recognizer interface
    # ---------------------------------------------------------------

    def match(self, passphrase: StrOrBytes) -> bool:
        computed = _calc_hash(prepare(passphrase), self.fold, self.nrounds, self.salt, self.initial)
        return consteq(computed, self.hash)

    def as_crypt(self) -> str:
        if self.initial == _ZERO_BLOCK:
            if (
                not self.fold
                and self.nrounds == DES_CRYPT_DEFAULT_ROUNDS
                and self.salt <= DES_CRYPT_MAX_INT12
            ):
                return self.salt_base64_2 + self.hash_base64
            if self.fold:
                return "_" + self.nrounds_base64_4 + self.salt_base64_4 + self.hash_base64
        raise UnrepresentableError("DES parameters can't be expressed as a crypt string")


def _calc_hash(secret: bytes, fold: bool, nrounds: int, salt: int, initial: bytes) -> bytes:
    key = fold_key(secret) if fold else des_key(secret)
    return crypt_rounds(key, nrounds, salt, initial)
