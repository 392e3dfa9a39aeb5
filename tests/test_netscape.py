from __future__ import annotations

from hashlib import md5

import pytest

from authphrase import NetscapeMail, decode_rfc2307
from authphrase.errors import InvalidAttributeError, MalformedEncodingError, UnrepresentableError

SALT = "0123456789abcdef0123456789abcdef"


def test_hash() -> None:
    recognizer = NetscapeMail.new(salt=SALT, passphrase="wibble")
    expected = md5(SALT.encode() + b"\x59" + b"wibble" + b"\xf7" + SALT.encode()).digest()
    assert recognizer.hash == expected
    assert recognizer.salt == SALT.encode()
    assert recognizer.match("wibble")
    assert not recognizer.match("wobble")


def test_rfc2307_round_trip() -> None:
    recognizer = NetscapeMail.new(salt=SALT, passphrase="wibble")
    text = recognizer.as_rfc2307()
    assert text == "{NS-MTA-MD5}" + recognizer.hash_hex + SALT
    assert decode_rfc2307(text) == recognizer
    assert decode_rfc2307(text.replace("NS-MTA-MD5", "ns-mta-md5")) == recognizer
    assert decode_rfc2307(text).match("wibble")


def test_salt_random() -> None:
    recognizer = NetscapeMail.new(
        salt_random=True, passphrase="x", random_bytes=lambda n: b"\xab" * n
    )
    assert recognizer.salt == b"ab" * 16
    assert recognizer.match("x")
    assert len(NetscapeMail.new(salt_random=True, passphrase="x").salt) == 32


def test_unrepresentable_salt() -> None:
    recognizer = NetscapeMail.new(salt=" " * 32, passphrase="x")
    with pytest.raises(UnrepresentableError):
        recognizer.as_rfc2307()


def test_errors() -> None:
    with pytest.raises(InvalidAttributeError):
        NetscapeMail.new(salt="short", passphrase="x")
    with pytest.raises(MalformedEncodingError):
        decode_rfc2307("{NS-MTA-MD5}" + "0" * 32 + "short")
