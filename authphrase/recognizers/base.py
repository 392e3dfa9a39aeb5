"""authphrase.recognizers.base -- abstract interface shared by all recognizers"""

from __future__ import annotations

import abc
import hmac
from typing import Any, Callable

from authphrase._salt import random_bytes
from authphrase._utils.bytes import StrOrBytes, as_bytes
from authphrase.errors import (
    InfeasibleError,
    InvalidAttributeError,
    UnrepresentableError,
)

__all__ = [
    "Recognizer",
    "RandomSource",
]

#: signature of the entropy source accepted by ``new(random_bytes=...)``
RandomSource = Callable[[int], bytes]

#: default entropy source
default_random_bytes: RandomSource = random_bytes


class Recognizer(abc.ABC):
    """
    A stored passphrase recognizer.

    Each subclass represents one hash scheme, holding the scheme's
    parameters (salt, cost, hash, ...). Instances are immutable and
    compare equal when they are the same scheme with the same fields.
    """

    __slots__ = ()

    @abc.abstractmethod
    def match(self, passphrase: StrOrBytes) -> bool:
        """
        Check whether *passphrase* is accepted by this recognizer.

        ``str`` passphrases are encoded as UTF-8.
        """
        raise NotImplementedError

    def reveal_passphrase(self) -> bytes:
        """
        Return a passphrase which this recognizer accepts.

        :raises InfeasibleError: unless the scheme stores the passphrase in a recoverable form.
        """
        raise InfeasibleError(
            f"can't reveal passphrase from {type(self).__name__} recognizer"
        )

    def as_crypt(self) -> str:
        """
        Render this recognizer as a crypt string.

        :raises UnrepresentableError: if crypt syntax can't express it.
        """
        raise UnrepresentableError(
            f"{type(self).__name__} recognizer can't be expressed as a crypt string"
        )

    def as_rfc2307(self) -> str:
        """
        Render this recognizer in RFC 2307 ``{TAG}payload`` syntax.

        Schemes without a tag of their own are wrapped as ``{CRYPT}<crypt string>``.

        :raises UnrepresentableError: if neither form can express it.
        """
        return "{CRYPT}" + self.as_crypt()


# =============================================================================
# helpers shared by the concrete recognizers
# =============================================================================


def consteq(left: bytes, right: bytes) -> bool:
    """compare two hashes in time independent of where they differ"""
    return hmac.compare_digest(left, right)


def check_bytes(
    name: str, value: Any, size: int | None = None, max_size: int | None = None
) -> None:
    if not isinstance(value, bytes):
        raise InvalidAttributeError(f"{name} must be bytes, not {type(value).__name__}")
    if size is not None and len(value) != size:
        raise InvalidAttributeError(f"{name} must be exactly {size} bytes, got {len(value)}")
    if max_size is not None and len(value) > max_size:
        raise InvalidAttributeError(f"{name} must be at most {max_size} bytes, got {len(value)}")


def check_int(name: str, value: Any, min: int = 0, max: int | None = None) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidAttributeError(f"{name} must be an integer, not {type(value).__name__}")
    if value < min or (max is not None and value > max):
        bounds = f"{min}..{max}" if max is not None else f">= {min}"
        raise InvalidAttributeError(f"{name} must be in range {bounds}: {value}")


def check_bool(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise InvalidAttributeError(f"{name} must be a bool, not {type(value).__name__}")


def prepare(passphrase: StrOrBytes) -> bytes:
    if not isinstance(passphrase, (str, bytes)):
        raise TypeError(f"passphrase must be str or bytes, not {type(passphrase).__name__}")
    return as_bytes(passphrase)
