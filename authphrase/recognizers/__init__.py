from authphrase.recognizers.base import Recognizer
from authphrase.recognizers.bcrypt import BlowfishCrypt
from authphrase.recognizers.des_crypt import DESCrypt
from authphrase.recognizers.digests import SaltedDigest
from authphrase.recognizers.eggdrop import EggdropBlowfish
from authphrase.recognizers.md5_crypt import MD5Crypt
from authphrase.recognizers.misc import AcceptAll, Clear, RejectAll
from authphrase.recognizers.netscape import NetscapeMail
from authphrase.recognizers.windows import LANManager, LANManagerHalf, NTHash

__all__ = [
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
