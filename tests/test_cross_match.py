from __future__ import annotations

from typing import Callable

import pytest

from authphrase import (
    BlowfishCrypt,
    Clear,
    DESCrypt,
    EggdropBlowfish,
    LANManager,
    LANManagerHalf,
    MD5Crypt,
    NetscapeMail,
    NTHash,
    Recognizer,
    SaltedDigest,
)

# distinct under upper-casing, 7 and 8 byte truncation, and key repetition
PASSPHRASES = ["alpha", "bravo", "charlie", "delta", "echo", "foxtrot"]

FACTORIES: dict[str, Callable[[str], Recognizer]] = {
    "clear": lambda p: Clear.new(passphrase=p),
    "sha1": lambda p: SaltedDigest.new(algorithm="SHA-1", passphrase=p),
    "ssha256": lambda p: SaltedDigest.new(algorithm="SHA-256", salt=b"pepper", passphrase=p),
    "des": lambda p: DESCrypt.new(salt_base64="Lg", passphrase=p),
    "ext-des": lambda p: DESCrypt.new(fold=True, nrounds=725, salt_base64="CC", passphrase=p),
    "md5-crypt": lambda p: MD5Crypt.new(salt="NaCl", passphrase=p),
    "bcrypt": lambda p: BlowfishCrypt.new(cost=4, salt=bytes(16), passphrase=p),
    "bcrypt-2": lambda p: BlowfishCrypt.new(
        key_nul=False, cost=4, salt=bytes(16), passphrase=p
    ),
    "nthash": lambda p: NTHash.new(passphrase=p),
    "lanman-half": lambda p: LANManagerHalf.new(passphrase=p),
    "lanman": lambda p: LANManager.new(passphrase=p),
    "netscape": lambda p: NetscapeMail.new(salt="0123456789abcdef" * 2, passphrase=p),
    "eggdrop": lambda p: EggdropBlowfish.new(passphrase=p),
}


@pytest.mark.parametrize("variant", sorted(FACTORIES))
def test_only_own_passphrase_matches(variant: str) -> None:
    factory = FACTORIES[variant]
    for own in PASSPHRASES:
        recognizer = factory(own)
        for candidate in PASSPHRASES:
            assert recognizer.match(candidate) == (candidate == own), (own, candidate)


@pytest.mark.parametrize("variant", sorted(FACTORIES))
def test_distinct_passphrases_give_distinct_recognizers(variant: str) -> None:
    recognizers = [FACTORIES[variant](p) for p in PASSPHRASES]
    assert len(set(recognizers)) == len(PASSPHRASES)
