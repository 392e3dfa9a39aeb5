"""authphrase -- recognizers for hashed passphrases in crypt and RFC 2307 syntax"""

from authphrase.recognizers import (
    AcceptAll,
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
    RejectAll,
    SaltedDigest,
)
from authphrase.registry import (
    decode_crypt,
    decode_rfc2307,
    encode_crypt,
    encode_rfc2307,
)

__version__ = "0.1.0"

__all__ = [
    "decode_crypt",
    "decode_rfc2307",
    "encode_crypt",
    "encode_rfc2307",
    "Recognizer",
    "AcceptAll",
    "RejectAll",
    "Clear",
    "SaltedDigest",
    "DESCrypt",
    "MD5Crypt",
    "BlowfishCrypt",
    "NTHash",
    "LANManagerHalf",
    "LANManager",
    "NetscapeMail",
    "EggdropBlowfish",
]
