"""authphrase.recognizers.misc -- trivial recognizers"""

from __future__ import annotations

import dataclasses
from typing import Any

from typing_extensions import Self

from authphrase._utils.attributes import choose, require
from authphrase._utils.bytes import StrOrBytes, as_bytes, is_printable_ascii
from authphrase.errors import UnrepresentableError
from authphrase.recognizers.base import Recognizer, check_bytes, consteq, prepare

__all__ = [
    "AcceptAll",
    "RejectAll",
    "Clear",
    "ACCEPT_ALL",
    "REJECT_ALL",
]


class _Singleton(Recognizer):
    """base for recognizers with exactly one instance, created at import"""

    __slots__ = ()

    def __copy__(self) -> Any:
        return self

    def __deepcopy__(self, memo: Any) -> Any:
        return self

    def __reduce__(self) -> Any:
        return (type(self), ())

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class AcceptAll(_Singleton):
    """
    Recognizer which accepts any passphrase.

    Encoded as the empty crypt string; ``AcceptAll() is AcceptAll()``.
    """

    __slots__ = ()

    def __new__(cls) -> AcceptAll:
        return ACCEPT_ALL

    def match(self, passphrase: StrOrBytes) -> bool:
        prepare(passphrase)
        return True

    def reveal_passphrase(self) -> bytes:
        return b""

    def as_crypt(self) -> str:
        return ""


class RejectAll(_Singleton):
    """
    Recognizer which accepts no passphrase.

    Encoded as the crypt string ``*``; ``RejectAll() is RejectAll()``.
    """

    __slots__ = ()

    def __new__(cls) -> RejectAll:
        return REJECT_ALL

    def match(self, passphrase: StrOrBytes) -> bool:
        prepare(passphrase)
        return False

    def as_crypt(self) -> str:
        return "*"


ACCEPT_ALL: AcceptAll = object.__new__(AcceptAll)
REJECT_ALL: RejectAll = object.__new__(RejectAll)


@dataclasses.dataclass(frozen=True)
class Clear(Recognizer):
    """
    Recognizer holding the passphrase itself.

    :param plaintext: the accepted passphrase.
    """

    plaintext: bytes

    def __post_init__(self) -> None:
        check_bytes("plaintext", self.plaintext)

    @classmethod
    def new(
        cls,
        *,
        plaintext: StrOrBytes | None = None,
        passphrase: StrOrBytes | None = None,
    ) -> Self:
        _, value = require(
            "plaintext", choose("plaintext", plaintext=plaintext, passphrase=passphrase)
        )
        return cls(plaintext=as_bytes(value))

    def match(self, passphrase: StrOrBytes) -> bool:
        return consteq(prepare(passphrase), self.plaintext)

    def reveal_passphrase(self) -> bytes:
        return self.plaintext

    def as_rfc2307(self) -> str:
        if not is_printable_ascii(self.plaintext):
            raise UnrepresentableError("can't put non-printing characters in RFC 2307 string")
        return "{CLEARTEXT}" + self.plaintext.decode("ascii")
