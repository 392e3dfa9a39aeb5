from __future__ import annotations

import pytest

from authphrase import (
    BlowfishCrypt,
    DESCrypt,
    LANManager,
    MD5Crypt,
    NTHash,
    SaltedDigest,
    decode_crypt,
    decode_rfc2307,
    encode_crypt,
    encode_rfc2307,
)
from authphrase.errors import (
    ExternalAuthenticationPlaceholder,
    InvalidCharacterError,
    MalformedEncodingError,
    PassphraseError,
    TruncatedHashError,
    UnrecognisedCryptSyntaxError,
    UnrecognisedRfc2307SchemeError,
    UnsupportedSchemeError,
)
from authphrase.recognizers.misc import ACCEPT_ALL, REJECT_ALL
from authphrase.registry import crypt_identifiers, rfc2307_tags


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Lg3RoTEkqxIwA", DESCrypt),
        ("_J9..CCCCXBrJUJV154M", DESCrypt),
        ("$1$NaCl$xdhxXxtV42/rvGFe//aQu/", MD5Crypt),
        ("$2a$05$CCCCCCCCCCCCCCCCCCCCC.E5YPO9kmyuRGyh0XouQYb4YMJKvyOeW", BlowfishCrypt),
    ],
)
def test_decode_crypt_dispatch(text: str, expected: type) -> None:
    recognizer = decode_crypt(text)
    assert type(recognizer) is expected
    assert encode_crypt(recognizer) == text
    assert encode_rfc2307(recognizer) == "{CRYPT}" + text
    assert decode_rfc2307("{CRYPT}" + text) == recognizer
    assert decode_rfc2307("{crypt}" + text) == recognizer
    assert decode_rfc2307("{WM-CRY}" + text) == recognizer


def test_nt_hash_crypt_form_prefers_msnt() -> None:
    text = "$3$$7f8fe03093cc84b267b109625f6bbf4b"
    recognizer = decode_crypt(text)
    assert type(recognizer) is NTHash
    assert encode_crypt(recognizer) == text
    assert encode_rfc2307(recognizer) == "{MSNT}7f8fe03093cc84b267b109625f6bbf4b"
    assert decode_rfc2307("{CRYPT}" + text) == recognizer


def test_traditional_des_round_trip() -> None:
    recognizer = decode_crypt("Lg3RoTEkqxIwA")
    assert recognizer.salt == 2839
    assert recognizer.salt_base64_2 == "Lg"
    assert recognizer.hash_base64 == "3RoTEkqxIwA"


@pytest.mark.parametrize(
    "text",
    [
        # short strings are conventional "locked" markers
        "*",
        "!",
        "*LK*",
        "x",
        # twelve base64 digits is just too short for DES
        "CCNf8Sbh3HDf",
    ],
)
def test_short_strings_reject(text: str) -> None:
    assert decode_crypt(text) is REJECT_ALL


def test_empty_accepts() -> None:
    assert decode_crypt("") is ACCEPT_ALL
    assert decode_rfc2307("{CRYPT}") is ACCEPT_ALL


@pytest.mark.parametrize(
    "text",
    [
        # dollar-prefixed strings are never "locked" markers
        "$1$",
        "$x",
        "$",
        # unknown identifier
        "$9$abc$def",
        # too long for anything
        "CCNf8Sbh3HDfQQ",
        "!!" * 10,
        # bcrypt cost must be two digits
        "$2a$5$CCCCCCCCCCCCCCCCCCCCC.E5YPO9kmyuRGyh0XouQYb4YMJKvyOeW",
        # nt hash in crypt form is lower case
        "$3$$7F8FE03093CC84B267B109625F6BBF4B",
    ],
)
def test_unrecognised_crypt(text: str) -> None:
    with pytest.raises(UnrecognisedCryptSyntaxError):
        decode_crypt(text)


@pytest.mark.parametrize(
    "text",
    [
        "$5$rounds=5000$toolongsaltstring$9ZLwtuN3ibRMyjHcEEagr1V9/y2VF1dAFH8ipHAs5v8",
        "$6$saltstring$svn8UoSVapNtMuq1ukKS4tPQd8iKwSMHWjl",
        "$2y$05$CCCCCCCCCCCCCCCCCCCCC.E5YPO9kmyuRGyh0XouQYb4YMJKvyOeW",
        "$2b$05$CCCCCCCCCCCCCCCCCCCCC.E5YPO9kmyuRGyh0XouQYb4YMJKvyOeW",
        "$md5$rounds=904$iPPKEBnEkp3JV8uX$0L6m7rOFTVFn.SGqo2M9W1",
    ],
)
def test_unsupported_crypt(text: str) -> None:
    with pytest.raises(UnsupportedSchemeError):
        decode_crypt(text)


@pytest.mark.parametrize("text", ["ab:cdefghijklm", "CCNf8Sbh3HDf\n", "\x7f", "é"])
def test_crypt_invalid_characters(text: str) -> None:
    with pytest.raises(InvalidCharacterError):
        decode_crypt(text)


def test_crypt_requires_str() -> None:
    with pytest.raises(TypeError):
        decode_crypt(b"CCNf8Sbh3HDfQ")  # type: ignore[arg-type]


def test_errors_share_base() -> None:
    with pytest.raises(PassphraseError):
        decode_crypt("$9$")
    with pytest.raises(ValueError):
        decode_crypt("$9$")


@pytest.mark.parametrize("tag", ["K5KEY", "KERBEROS", "SASL", "UNIX", "sasl"])
def test_rfc2307_placeholders(tag: str) -> None:
    with pytest.raises(ExternalAuthenticationPlaceholder) as excinfo:
        decode_rfc2307("{" + tag + "}someone@EXAMPLE.ORG")
    assert excinfo.value.scheme == tag.upper()
    assert excinfo.value.payload == "someone@EXAMPLE.ORG"
    assert not isinstance(excinfo.value, ValueError)


@pytest.mark.parametrize("text", ["{FOO}bar", "nobraces", "{}x", "{SHA", "SHA}x"])
def test_rfc2307_unrecognised(text: str) -> None:
    with pytest.raises(UnrecognisedRfc2307SchemeError):
        decode_rfc2307(text)


def test_rfc2307_invalid_characters() -> None:
    with pytest.raises(InvalidCharacterError):
        decode_rfc2307("{CLEARTEXT}tab\there")


def test_rfc2307_crypt_errors_propagate() -> None:
    with pytest.raises(InvalidCharacterError):
        decode_rfc2307("{CRYPT}a:b")
    with pytest.raises(UnsupportedSchemeError):
        decode_rfc2307("{CRYPT}$6$salt$hash")


def test_rfc2307_truncated() -> None:
    with pytest.raises(TruncatedHashError):
        decode_rfc2307("{SHA}at+xg6SiyUovktq1redi")


def test_rfc2307_nonzero_padding_bits() -> None:
    with pytest.raises(MalformedEncodingError):
        decode_rfc2307("{SHA}at+xg6SiyUovktq1redipHiJpaF=")
    with pytest.raises(MalformedEncodingError):
        decode_rfc2307("{SHA}at+xg6SiyUovktq1redipHiJpaE" + "=" * 3)


def test_rfc2307_dispatch() -> None:
    assert isinstance(decode_rfc2307("{SHA}at+xg6SiyUovktq1redipHiJpaE="), SaltedDigest)
    assert isinstance(decode_rfc2307("{lanman}aad3b435b51404eeaad3b435b51404ee"), LANManager)


def test_tables() -> None:
    idents = crypt_identifiers()
    assert idents["1"] is MD5Crypt
    assert idents["2a"] is BlowfishCrypt
    assert idents["NT"] is NTHash
    assert idents["6"] is None
    with pytest.raises(TypeError):
        idents["1"] = None  # type: ignore[index]

    tags = rfc2307_tags()
    assert tags["SSHA"] is SaltedDigest
    assert tags["MSNT"] is NTHash
    assert tags["CRYPT"] is None
    assert tags["KERBEROS"] is None
    assert "WM-CRY" in tags
