"""authphrase.errors -- exceptions raised by authphrase"""

from __future__ import annotations

__all__ = [
    "PassphraseError",
    "InvalidCharacterError",
    "MalformedEncodingError",
    "UnrecognisedCryptSyntaxError",
    "UnrecognisedRfc2307SchemeError",
    "UnsupportedSchemeError",
    "ExternalAuthenticationPlaceholder",
    "TruncatedHashError",
    "InvalidAttributeError",
    "RedundantAttributeError",
    "MissingAttributeError",
    "UnrepresentableError",
    "InfeasibleError",
]


class PassphraseError(Exception):
    """base class for all errors raised by authphrase"""


# =============================================================================
# decoding errors
# =============================================================================


class InvalidCharacterError(PassphraseError, ValueError):
    """Error raised when an encoded string contains a character
    which its syntax does not allow (e.g. a colon in a crypt string).
    """


class MalformedEncodingError(PassphraseError, ValueError):
    """Error raised by the codecs when encoded data has the wrong length,
    contains characters outside the codec's alphabet,
    or has nonzero padding bits in its final digit.
    """


class UnrecognisedCryptSyntaxError(PassphraseError, ValueError):
    """Error raised when a string is not any known kind of crypt string."""


class UnrecognisedRfc2307SchemeError(PassphraseError, ValueError):
    """Error raised when an RFC 2307 string is malformed,
    or its ``{TAG}`` is not a known scheme.
    """


class UnsupportedSchemeError(PassphraseError, ValueError):
    """Error raised when a scheme is known, but cannot be handled.

    This covers crypt identifiers such as ``$5$`` which are recognised
    but not implemented, digest algorithms not available from the
    running Python, and parameters no backend can compute.
    """


class ExternalAuthenticationPlaceholder(PassphraseError):
    """Raised for RFC 2307 schemes which defer to an external
    authentication system (``{KERBEROS}``, ``{SASL}``, ``{UNIX}``, ...).

    This is not a malformed value: the string is valid, but there is no
    local recognizer which could check a passphrase against it.
    Deliberately not a :exc:`ValueError`.
    """

    def __init__(self, scheme: str, payload: str) -> None:
        super().__init__(
            f"{{{scheme}}} defers to an external authentication mechanism"
        )
        self.scheme = scheme
        self.payload = payload


class TruncatedHashError(PassphraseError, ValueError):
    """Error raised when a decoded digest payload is shorter
    than the digest's output size.
    """


# =============================================================================
# construction errors
# =============================================================================


class InvalidAttributeError(PassphraseError, ValueError):
    """Error raised when a recognizer field has the wrong type, size or range."""


class RedundantAttributeError(PassphraseError, TypeError):
    """Error raised when a recognizer field is specified more than once,
    e.g. as both ``salt`` and ``salt_base64``.
    """

    def __init__(self, field: str, attributes: tuple[str, ...]) -> None:
        super().__init__(
            f"{field} specified redundantly (by {', '.join(attributes)})"
        )
        self.field = field
        self.attributes = attributes


class MissingAttributeError(PassphraseError, TypeError):
    """Error raised when a required recognizer field is not specified."""

    def __init__(self, field: str) -> None:
        super().__init__(f"{field} not specified")
        self.field = field


# =============================================================================
# encoding / reveal errors
# =============================================================================


class UnrepresentableError(PassphraseError, ValueError):
    """Error raised when a recognizer cannot be expressed in the requested format."""


class InfeasibleError(PassphraseError, NotImplementedError):
    """Error raised when a matching passphrase cannot be recovered from a recognizer."""
