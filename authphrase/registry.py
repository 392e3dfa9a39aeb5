"""authphrase.registry -- decoding of crypt and RFC 2307 strings into recognizers"""

from __future__ import annotations

import logging; log = logging.getLogger(__name__)
import re
from types import MappingProxyType
from typing import Callable, Mapping, NamedTuple, Optional

from authphrase._utils.bytes import is_printable_ascii
from authphrase.binary import b64s_decode
from authphrase.crypto.digest import lookup_digest
from authphrase.errors import (
    ExternalAuthenticationPlaceholder,
    InvalidCharacterError,
    MalformedEncodingError,
    TruncatedHashError,
    UnrecognisedCryptSyntaxError,
    UnrecognisedRfc2307SchemeError,
    UnsupportedSchemeError,
)
from authphrase.recognizers import (
    BlowfishCrypt,
    Clear,
    DESCrypt,
    LANManager,
    LANManagerHalf,
    MD5Crypt,
    NetscapeMail,
    NTHash,
    Recognizer,
    SaltedDigest,
)
from authphrase.recognizers.digests import RFC2307_DIGEST_TAGS
from authphrase.recognizers.misc import ACCEPT_ALL, REJECT_ALL

__all__ = [
    "SchemeEntry",
    "decode_crypt",
    "decode_rfc2307",
    "encode_crypt",
    "encode_rfc2307",
    "crypt_identifiers",
    "rfc2307_tags",
]


class SchemeEntry(NamedTuple):
    """
    One row of a dispatch table.

    ``recognizer`` is None for schemes which are known
    but have no local implementation.
    """

    recognizer: Optional[type[Recognizer]]
    parse: Callable[[str], Recognizer]


# =============================================================================
# crypt syntax
# =============================================================================

#: printable ascii, except colon (the passwd field separator)
_CRYPT_CHARSET_RE = re.compile(r"[ -9;-~]*")

_GENERALISED_RE = re.compile(r"\$([^$]+)\$")

_TRADITIONAL_DES_RE = re.compile(r"([./0-9A-Za-z]{2})([./0-9A-Za-z]{11})")

_EXTENDED_DES_RE = re.compile(r"_([./0-9A-Za-z]{4})([./0-9A-Za-z]{4})([./0-9A-Za-z]{11})")

_MD5_CRYPT_RE = re.compile(r"\$1\$([^$]{0,8})\$([./0-9A-Za-z]{22})")

_BCRYPT_RE = re.compile(
    r"""
    \$2(a?)\$
    ([0-9]{2})\$
    ([./A-Za-z0-9]{21}[.Oeu])
    ([./A-Za-z0-9]{30}[.CGKOSWaeimquy26])
    """,
    re.X,
)

_NTHASH_RE = re.compile(r"\$(?:3\$|NT)\$([0-9a-f]{32})")

_LANMAN_HALF_RE = re.compile(r"\$LM\$([0-9a-f]{16})")


def _grammar(regex: re.Pattern[str], text: str) -> re.Match[str]:
    m = regex.fullmatch(text)
    if m is None:
        raise UnrecognisedCryptSyntaxError(f"malformed crypt string: {text!r}")
    return m


def _parse_md5_crypt(text: str) -> Recognizer:
    salt, hash = _grammar(_MD5_CRYPT_RE, text).groups()
    return MD5Crypt.new(salt=salt, hash_base64=hash)


def _parse_bcrypt(text: str) -> Recognizer:
    key_nul, cost, salt, hash = _grammar(_BCRYPT_RE, text).groups()
    return BlowfishCrypt.new(
        key_nul=bool(key_nul),
        cost=int(cost),
        salt_base64=salt,
        hash_base64=hash,
    )


def _parse_nthash(text: str) -> Recognizer:
    (hash,) = _grammar(_NTHASH_RE, text).groups()
    return NTHash.new(hash_hex=hash)


def _parse_lanman_half(text: str) -> Recognizer:
    (hash,) = _grammar(_LANMAN_HALF_RE, text).groups()
    return LANManagerHalf.new(hash_hex=hash)


def _unsupported_crypt(ident: str) -> Callable[[str], Recognizer]:
    def parse(text: str) -> Recognizer:
        raise UnsupportedSchemeError(f"crypt scheme ${ident}$ is not supported")

    return parse


_crypt_schemes: dict[str, SchemeEntry] = {
    "1": SchemeEntry(MD5Crypt, _parse_md5_crypt),
    "2": SchemeEntry(BlowfishCrypt, _parse_bcrypt),
    "2a": SchemeEntry(BlowfishCrypt, _parse_bcrypt),
    "3": SchemeEntry(NTHash, _parse_nthash),
    "NT": SchemeEntry(NTHash, _parse_nthash),
    "LM": SchemeEntry(LANManagerHalf, _parse_lanman_half),
}

#: recognised identifiers with no implementation here
_unsupported_crypt_idents = (
    "2b",  # bcrypt, OpenBSD length fix
    "2x",  # crypt_blowfish, sign extension bug
    "2y",  # crypt_blowfish, fixed
    "5",  # sha256-crypt
    "6",  # sha512-crypt
    "7",  # scrypt
    "md5",  # sun md5-crypt
    "sha1",  # netbsd sha1-crypt
    "y",  # yescrypt
    "gy",  # gost-yescrypt
)

for _ident in _unsupported_crypt_idents:
    _crypt_schemes[_ident] = SchemeEntry(None, _unsupported_crypt(_ident))
del _ident


def decode_crypt(text: str) -> Recognizer:
    """
    Decode a crypt string into the recognizer it describes.

    Forms are tried in order:

    1. ``$<id>$...``, dispatched on the identifier.
    2. 13 base64 digits, traditional DES crypt.
    3. ``_`` and 19 base64 digits, BSDi extended DES crypt.
    4. the empty string, which accepts any passphrase.
    5. any other string shorter than 13 characters not starting with ``$``,
       which by convention accepts no passphrase.

    :raises InvalidCharacterError: if text has anything but printable ascii, or a colon.
    :raises UnsupportedSchemeError: if the ``$<id>$`` scheme is known but not implemented.
    :raises UnrecognisedCryptSyntaxError: if text is not a crypt string this module understands.
    :raises MalformedEncodingError: if an encoded field has nonzero padding bits.
    """
    if not isinstance(text, str):
        raise TypeError(f"crypt string must be str, not {type(text).__name__}")
    if not _CRYPT_CHARSET_RE.fullmatch(text):
        raise InvalidCharacterError("invalid character in crypt string")

    m = _GENERALISED_RE.match(text)
    if m:
        ident = m.group(1)
        entry = _crypt_schemes.get(ident)
        if entry is None:
            raise UnrecognisedCryptSyntaxError(f"unrecognised crypt scheme ${ident}$")
        log.debug("decoding crypt string with scheme $%s$", ident)
        return entry.parse(text)

    m = _TRADITIONAL_DES_RE.fullmatch(text)
    if m:
        salt, hash = m.groups()
        return DESCrypt.new(salt_base64=salt, hash_base64=hash)

    m = _EXTENDED_DES_RE.fullmatch(text)
    if m:
        nrounds, salt, hash = m.groups()
        return DESCrypt.new(fold=True, nrounds_base64=nrounds, salt_base64=salt, hash_base64=hash)

    if not text:
        return ACCEPT_ALL

    if len(text) < 13 and not text.startswith("$"):
        return REJECT_ALL

    raise UnrecognisedCryptSyntaxError(f"not a supported type of crypt string: {text!r}")


def encode_crypt(recognizer: Recognizer) -> str:
    """
    Render recognizer as a crypt string.

    :raises UnrepresentableError: if crypt syntax can't express it.
    """
    return recognizer.as_crypt()


def crypt_identifiers() -> Mapping[str, Optional[type[Recognizer]]]:
    """map of ``$<id>$`` identifiers to their recognizer class (None if unsupported)"""
    return MappingProxyType({k: v.recognizer for k, v in _crypt_schemes.items()})


# =============================================================================
# RFC 2307 syntax
# =============================================================================

_RFC2307_TAG_RE = re.compile(r"\{([0-9A-Za-z-]+)\}")

_HEX32_RE = re.compile(r"[0-9A-Fa-f]{32}")

_NETSCAPE_RE = re.compile(r"([0-9A-Fa-f]{32})([!-~]{32})")


def _digest_parser(tag: str, algorithm: str, salted: bool) -> Callable[[str], Recognizer]:
    def parse(payload: str) -> Recognizer:
        raw = b64s_decode(payload)
        size = lookup_digest(algorithm).digest_size
        if len(raw) < size:
            raise TruncatedHashError(
                f"{{{tag}}} payload is {len(raw)} bytes, shorter than {algorithm} digest"
            )
        if not salted and len(raw) > size:
            raise MalformedEncodingError(f"{{{tag}}} payload has trailing data")
        return SaltedDigest(algorithm=algorithm, hash=raw[:size], salt=raw[size:])

    return parse


def _parse_cleartext(payload: str) -> Recognizer:
    return Clear(payload.encode("ascii"))


def _parse_lanman(payload: str) -> Recognizer:
    if not _HEX32_RE.fullmatch(payload):
        raise MalformedEncodingError("LAN Manager hash must be 32 hex digits")
    return LANManager.new(hash_hex=payload)


def _parse_msnt(payload: str) -> Recognizer:
    if not _HEX32_RE.fullmatch(payload):
        raise MalformedEncodingError("NT hash must be 32 hex digits")
    return NTHash.new(hash_hex=payload)


def _parse_netscape(payload: str) -> Recognizer:
    m = _NETSCAPE_RE.fullmatch(payload)
    if m is None:
        raise MalformedEncodingError(
            "Netscape mail hash must be 32 hex digits and 32 salt characters"
        )
    hash, salt = m.groups()
    return NetscapeMail.new(hash_hex=hash, salt=salt)


def _placeholder(tag: str) -> Callable[[str], Recognizer]:
    def parse(payload: str) -> Recognizer:
        raise ExternalAuthenticationPlaceholder(tag, payload)

    return parse


_rfc2307_schemes: dict[str, SchemeEntry] = {
    "CLEARTEXT": SchemeEntry(Clear, _parse_cleartext),
    "CRYPT": SchemeEntry(None, decode_crypt),
    "WM-CRY": SchemeEntry(None, decode_crypt),
    "LANM": SchemeEntry(LANManager, _parse_lanman),
    "LANMAN": SchemeEntry(LANManager, _parse_lanman),
    "MSNT": SchemeEntry(NTHash, _parse_msnt),
    "NS-MTA-MD5": SchemeEntry(NetscapeMail, _parse_netscape),
}

for _tag, (_algorithm, _salted) in RFC2307_DIGEST_TAGS.items():
    _rfc2307_schemes[_tag] = SchemeEntry(SaltedDigest, _digest_parser(_tag, _algorithm, _salted))

#: tags deferring to an external authentication system
_placeholder_tags = ("K5KEY", "KERBEROS", "SASL", "UNIX")

for _tag in _placeholder_tags:
    _rfc2307_schemes[_tag] = SchemeEntry(None, _placeholder(_tag))
del _tag, _algorithm, _salted


def decode_rfc2307(text: str) -> Recognizer:
    """
    Decode an RFC 2307 ``{TAG}payload`` string into the recognizer it describes.

    Tags are case-insensitive. ``{CRYPT}`` (and its alias ``{WM-CRY}``) wraps
    any crypt string, see :func:`decode_crypt`.

    :raises InvalidCharacterError: if text isn't printable ascii.
    :raises UnrecognisedRfc2307SchemeError: if there's no ``{TAG}``, or the tag is unknown.
    :raises ExternalAuthenticationPlaceholder:
        for tags naming an external authentication mechanism
        (``K5KEY``, ``KERBEROS``, ``SASL``, ``UNIX``).
    :raises TruncatedHashError: if a digest payload is shorter than the digest.
    :raises MalformedEncodingError: if the payload doesn't decode.
    """
    if not isinstance(text, str):
        raise TypeError(f"RFC 2307 string must be str, not {type(text).__name__}")
    if not is_printable_ascii(text):
        raise InvalidCharacterError("invalid character in RFC 2307 string")
    m = _RFC2307_TAG_RE.match(text)
    if m is None:
        raise UnrecognisedRfc2307SchemeError(f"bad RFC 2307 syntax in {text!r}")
    tag = m.group(1).upper()
    entry = _rfc2307_schemes.get(tag)
    if entry is None:
        raise UnrecognisedRfc2307SchemeError(f"unrecognised RFC 2307 scheme {{{tag}}}")
    log.debug("decoding RFC 2307 string with scheme {%s}", tag)
    return entry.parse(text[m.end() :])


def encode_rfc2307(recognizer: Recognizer) -> str:
    """
    Render recognizer as an RFC 2307 string; schemes without a
    tag of their own are wrapped as ``{CRYPT}<crypt string>``.

    :raises UnrepresentableError: if neither form can express it.
    """
    return recognizer.as_rfc2307()


def rfc2307_tags() -> Mapping[str, Optional[type[Recognizer]]]:
    """map of RFC 2307 tags to their recognizer class (None for ``CRYPT`` and placeholders)"""
    return MappingProxyType({k: v.recognizer for k, v in _rfc2307_schemes.items()})
