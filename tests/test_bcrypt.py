from __future__ import annotations

import pytest

from authphrase import BlowfishCrypt, decode_crypt
from authphrase.crypto import blowfish
from authphrase.errors import (
    InvalidAttributeError,
    MalformedEncodingError,
    UnsupportedSchemeError,
)

CONFIG_2 = "$2$05$" + "." * 22
CONFIG_A = "$2a$05$" + "." * 22


@pytest.mark.parametrize(
    ("secret", "hash"),
    [
        # from JTR 1.7.9
        ("U*U", "$2a$05$CCCCCCCCCCCCCCCCCCCCC.E5YPO9kmyuRGyh0XouQYb4YMJKvyOeW"),
        ("U*U*U*U*", "$2a$05$c92SVSfjeiCD6F2nAD6y0uBpJDjdRkt0EgeC4/31Rf2LUZbDRDE.O"),
        ("", "$2a$05$CCCCCCCCCCCCCCCCCCCCC.7uG0VCzI2bS7j6ymqJi9CdcdxiRTWNy"),
        # 8bit character
        (b"\xa3", "$2a$05$/OK.fbVrR/bpIqNJ5ianF.Sa7shbm4.OzKpvFnX1pQLmQW96oUlCq"),
        # ensures 72 chars significant
        ("abc" * 24, CONFIG_A + "XuQjdH.wPVNUZ/bOfstdW/FqB8QSjte"),
        ("abc" * 24 + "qwerty", CONFIG_A + "XuQjdH.wPVNUZ/bOfstdW/FqB8QSjte"),
    ],
)
def test_known_hashes(secret: str | bytes, hash: str) -> None:
    recognizer = decode_crypt(hash)
    assert isinstance(recognizer, BlowfishCrypt)
    assert recognizer.key_nul
    assert recognizer.cost == 5
    assert recognizer.match(secret)
    assert not recognizer.match(b"x" + (secret if isinstance(secret, bytes) else secret.encode()))
    assert recognizer.as_crypt() == hash


@pytest.mark.parametrize(
    ("secret", "hash"),
    [
        # $2$ keys have no NUL terminator
        ("", CONFIG_2 + "J2ihDv8vVf7QZ9BsaRrKyqs2tkn55Yq"),
        ("abc", CONFIG_2 + "XuQjdH.wPVNUZ/bOfstdW/FqB8QSjte"),
    ],
)
def test_no_terminator_known_hashes(secret: str, hash: str) -> None:
    recognizer = decode_crypt(hash)
    assert isinstance(recognizer, BlowfishCrypt)
    assert not recognizer.key_nul
    assert recognizer.match(secret)
    assert recognizer.as_crypt() == hash


def test_builtin_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(blowfish, "BCRYPT_BACKEND", "builtin")
    recognizer = decode_crypt("$2a$05$CCCCCCCCCCCCCCCCCCCCC.E5YPO9kmyuRGyh0XouQYb4YMJKvyOeW")
    assert recognizer.match("U*U")
    assert not recognizer.match("U*V")


def test_bcrypt_backend_refuses_unterminated(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(blowfish, "BCRYPT_BACKEND", "bcrypt")
    recognizer = decode_crypt(CONFIG_2 + "XuQjdH.wPVNUZ/bOfstdW/FqB8QSjte")
    with pytest.raises(UnsupportedSchemeError):
        recognizer.match("abc")


def test_embedded_nul() -> None:
    recognizer = BlowfishCrypt.new(cost=4, salt=bytes(16), passphrase=b"a\x00b")
    assert recognizer.match(b"a\x00b")
    assert not recognizer.match(b"a")


def test_fields() -> None:
    recognizer = decode_crypt("$2a$05$CCCCCCCCCCCCCCCCCCCCC.E5YPO9kmyuRGyh0XouQYb4YMJKvyOeW")
    assert recognizer.keying_nrounds_log2 == 5
    assert recognizer.salt_base64 == "CCCCCCCCCCCCCCCCCCCCC."
    assert recognizer.hash_base64 == "E5YPO9kmyuRGyh0XouQYb4YMJKvyOeW"
    assert len(recognizer.salt) == 16
    assert len(recognizer.hash) == 23
    assert (
        BlowfishCrypt.new(
            keying_nrounds_log2=5,
            salt_base64=recognizer.salt_base64,
            passphrase="U*U",
        )
        == recognizer
    )


def test_salt_random() -> None:
    recognizer = BlowfishCrypt.new(
        cost=4, salt_random=True, passphrase="x", random_bytes=lambda n: bytes(n)
    )
    assert recognizer.salt == bytes(16)
    assert recognizer.as_crypt().startswith("$2a$04$" + "." * 22)
    assert recognizer.match("x")


def test_cost_limits() -> None:
    with pytest.raises(UnsupportedSchemeError):
        BlowfishCrypt.new(cost=3, salt=bytes(16), passphrase="x")
    with pytest.raises(UnsupportedSchemeError):
        BlowfishCrypt(cost=3, salt=bytes(16), hash=bytes(23))
    with pytest.raises(UnsupportedSchemeError):
        BlowfishCrypt(cost=32, salt=bytes(16), hash=bytes(23))
    with pytest.raises(InvalidAttributeError):
        BlowfishCrypt(cost=-1, salt=bytes(16), hash=bytes(23))


@pytest.mark.parametrize("cost", ["00", "03", "32", "99"])
def test_decode_rejects_uncomputable_cost(cost: str) -> None:
    with pytest.raises(UnsupportedSchemeError):
        decode_crypt(f"$2a${cost}$CCCCCCCCCCCCCCCCCCCCC.E5YPO9kmyuRGyh0XouQYb4YMJKvyOeW")


def test_empty_unterminated_key_reads_as_nul() -> None:
    # an empty key is hashed as its NUL terminator alone
    recognizer = decode_crypt(CONFIG_2 + "J2ihDv8vVf7QZ9BsaRrKyqs2tkn55Yq")
    assert recognizer.match("")
    assert recognizer.match(b"\x00")
    assert not recognizer.match("x")


def test_malformed() -> None:
    # salt's final digit has padding bits set
    with pytest.raises(MalformedEncodingError):
        BlowfishCrypt.new(cost=5, salt_base64="C" * 22, hash=bytes(23))
