from __future__ import annotations

import pytest

from authphrase import MD5Crypt, decode_crypt
from authphrase.errors import (
    InvalidAttributeError,
    MalformedEncodingError,
    UnrecognisedCryptSyntaxError,
    UnrepresentableError,
)


@pytest.mark.parametrize(
    ("secret", "hash"),
    [
        # from JTR 1.7.9
        ("U*U*U*U*", "$1$dXc3I7Rw$ctlgjDdWJLMT.qwHsWhXR1"),
        # custom tests
        ("", "$1$dOHYPKoP$tnxS1T8Q6VVn3kpV8cN6o."),
        (" ", "$1$m/5ee7ol$bZn0kIBFipq39e.KDXX8I0"),
        ("test", "$1$ec6XvcoW$ghEtNK2U1MC5l.Dwgi3020"),
        ("s", "$1$ssssssss$YgmLTApYTv12qgTwBoj8i/"),
        ("pass", "$1$YeNsbWdH$wvOF8JdqsoiLix754LTW90"),
    ],
)
def test_known_hashes(secret: str, hash: str) -> None:
    recognizer = decode_crypt(hash)
    assert isinstance(recognizer, MD5Crypt)
    assert recognizer.match(secret)
    assert not recognizer.match(secret + "x")
    assert recognizer.as_crypt() == hash

    salt = hash.split("$")[2]
    assert MD5Crypt.new(salt=salt, passphrase=secret) == recognizer


def test_hash_base64() -> None:
    recognizer = MD5Crypt.new(salt="NaCl", passphrase="wibble")
    assert recognizer.salt == b"NaCl"
    assert recognizer.hash_base64 == "xdhxXxtV42/rvGFe//aQu/"
    assert recognizer.as_crypt() == "$1$NaCl$xdhxXxtV42/rvGFe//aQu/"
    assert MD5Crypt.new(salt=b"NaCl", hash_base64="xdhxXxtV42/rvGFe//aQu/") == recognizer
    assert recognizer.match(b"wibble")


def test_empty_salt() -> None:
    recognizer = MD5Crypt.new(salt="", passphrase="x")
    assert recognizer.as_crypt().startswith("$1$$")
    assert decode_crypt(recognizer.as_crypt()) == recognizer


def test_salt_limits() -> None:
    with pytest.raises(InvalidAttributeError):
        MD5Crypt.new(salt="123456789", passphrase="x")
    with pytest.raises(UnrecognisedCryptSyntaxError):
        decode_crypt("$1$123456789$xdhxXxtV42/rvGFe//aQu/")


@pytest.mark.parametrize("salt", [b"a$b", b"a:b", b"\x00", b"\xc3\xa9"])
def test_unrepresentable_salt(salt: bytes) -> None:
    recognizer = MD5Crypt.new(salt=salt, passphrase="x")
    assert recognizer.match("x")
    with pytest.raises(UnrepresentableError):
        recognizer.as_crypt()


def test_bad_padding_bits() -> None:
    with pytest.raises(MalformedEncodingError):
        decode_crypt("$1$NaCl$xdhxXxtV42/rvGFe//aQu2")


def test_salt_random() -> None:
    recognizer = MD5Crypt.new(salt_random=True, passphrase="x")
    assert len(recognizer.salt) == 8
    assert decode_crypt(recognizer.as_crypt()) == recognizer

    recognizer = MD5Crypt.new(
        salt_random=True, passphrase="x", random_bytes=lambda n: bytes(range(n))
    )
    assert recognizer.salt == b"./012345"
