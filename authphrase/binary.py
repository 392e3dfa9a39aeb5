"""
authphrase.binary - fixed-width binary <-> text codecs used by hash strings
"""

from __future__ import annotations

import binascii
from typing import Callable, Iterator

from authphrase.errors import MalformedEncodingError

__all__ = [
    # constants
    "BASE64_CHARS",
    "HASH64_CHARS",
    "BCRYPT_CHARS",
    "EGGDROP64_CHARS",
    "HEX_CHARS",
    # hex / standard base64
    "hex_encode",
    "hex_decode",
    "b64s_encode",
    "b64s_decode",
    "b64_encode",
    # custom encodings
    "Base64Engine",
    "h64",
    "h64big",
    "bcrypt64",
    # fixed-width helpers
    "encode_des_block",
    "decode_des_block",
    "encode_des_int12",
    "decode_des_int12",
    "encode_des_int24",
    "decode_des_int24",
    "encode_bcrypt_salt",
    "decode_bcrypt_salt",
    "encode_bcrypt_hash",
    "decode_bcrypt_hash",
    "encode_md5_crypt_hash",
    "decode_md5_crypt_hash",
    "encode_eggdrop64",
    "decode_eggdrop64",
]

# -------------------------------------------------------------
# character maps
# -------------------------------------------------------------

#: standard base64 charmap
BASE64_CHARS = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"

#: charmap used by crypt(3): des-crypt, bsdi-crypt, md5-crypt
HASH64_CHARS = "./0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"

#: charmap used by BCrypt
BCRYPT_CHARS = "./ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"

#: charmap used by eggdrop's blowfish hash
EGGDROP64_CHARS = "./0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

#: all hex chars
HEX_CHARS = "0123456789abcdefABCDEF"

_BASE64_STRIP = "=\n"


# -------------------------------------------------------------
# hex & standard base64
# -------------------------------------------------------------


def hex_encode(data: bytes) -> str:
    """encode bytes as lower-case hex"""
    return binascii.hexlify(data).decode("ascii")


def hex_decode(source: str) -> bytes:
    """decode hex string (either case) to bytes"""
    if len(source) & 1:
        raise MalformedEncodingError("hex string must have even length")
    if not all(c in HEX_CHARS for c in source):
        raise MalformedEncodingError("invalid character in hex string")
    return binascii.unhexlify(source)


def b64s_encode(data: bytes) -> str:
    """
    encode using shortened base64 format which omits padding & whitespace.
    uses default ``+/`` altchars.
    """
    return binascii.b2a_base64(data).decode("ascii").rstrip(_BASE64_STRIP)


def b64_encode(data: bytes) -> str:
    """encode using standard padded base64, without trailing newline"""
    return binascii.b2a_base64(data, newline=False).decode("ascii")


def b64s_decode(source: str) -> bytes:
    """
    decode standard base64, with the trailing ``=`` padding optional.

    padding, if present, must be complete, and the unused bits
    of the final digit must be zero.
    """
    data = source.rstrip("=")
    pad = len(source) - len(data)
    if pad and (pad > 2 or len(source) & 3):
        raise MalformedEncodingError("incomplete base64 padding")
    return _b64s.decode_bytes(data)


# -------------------------------------------------------------
# custom base64 engine
# -------------------------------------------------------------


def _encode_bytes_little(
    next_value: Callable[[], int], chunks: int, tail: int
) -> Iterator[int]:
    """helper used by encode_bytes() to handle little-endian encoding"""
    #
    # output bit layout:
    #
    # first byte:   v1 543210
    #
    # second byte:  v1 ....76
    #              +v2 3210..
    #
    # third byte:   v2 ..7654
    #              +v3 10....
    #
    # fourth byte:  v3 765432
    #
    idx = 0
    while idx < chunks:
        v1 = next_value()
        v2 = next_value()
        v3 = next_value()
        yield v1 & 0x3F
        yield ((v2 & 0x0F) << 2) | (v1 >> 6)
        yield ((v3 & 0x03) << 4) | (v2 >> 4)
        yield v3 >> 2
        idx += 1
    if tail:
        v1 = next_value()
        if tail == 1:
            # note: 4 msb of last byte are padding
            yield v1 & 0x3F
            yield v1 >> 6
        else:
            assert tail == 2
            # note: 2 msb of last byte are padding
            v2 = next_value()
            yield v1 & 0x3F
            yield ((v2 & 0x0F) << 2) | (v1 >> 6)
            yield v2 >> 4


def _encode_bytes_big(
    next_value: Callable[[], int], chunks: int, tail: int
) -> Iterator[int]:
    """helper used by encode_bytes() to handle big-endian encoding"""
    #
    # output bit layout:
    #
    # first byte:   v1 765432
    #
    # second byte:  v1 10....
    #              +v2 ..7654
    #
    # third byte:   v2 3210..
    #              +v3 ....76
    #
    # fourth byte:  v3 543210
    #
    idx = 0
    while idx < chunks:
        v1 = next_value()
        v2 = next_value()
        v3 = next_value()
        yield v1 >> 2
        yield ((v1 & 0x03) << 4) | (v2 >> 4)
        yield ((v2 & 0x0F) << 2) | (v3 >> 6)
        yield v3 & 0x3F
        idx += 1
    if tail:
        v1 = next_value()
        if tail == 1:
            # note: 4 lsb of last byte are padding
            yield v1 >> 2
            yield (v1 & 0x03) << 4
        else:
            assert tail == 2
            # note: 2 lsb of last byte are padding
            v2 = next_value()
            yield v1 >> 2
            yield ((v1 & 0x03) << 4) | (v2 >> 4)
            yield (v2 & 0x0F) << 2


def _decode_bytes_little(
    next_value: Callable[[], int], chunks: int, tail: int
) -> Iterator[int]:
    """helper used by decode_bytes() to handle little-endian encoding"""
    #
    # input bit layout:
    #
    # first byte:   v1 ..543210
    #              +v2 10......
    #
    # second byte:  v2 ....5432
    #              +v3 3210....
    #
    # third byte:   v3 ......54
    #              +v4 543210..
    #
    idx = 0
    while idx < chunks:
        v1 = next_value()
        v2 = next_value()
        v3 = next_value()
        v4 = next_value()
        yield v1 | ((v2 & 0x3) << 6)
        yield (v2 >> 2) | ((v3 & 0xF) << 4)
        yield (v3 >> 4) | (v4 << 2)
        idx += 1
    if tail:
        # tail is 2 or 3; padding bits were checked by caller
        v1 = next_value()
        v2 = next_value()
        yield v1 | ((v2 & 0x3) << 6)
        if tail == 3:
            v3 = next_value()
            yield (v2 >> 2) | ((v3 & 0xF) << 4)


def _decode_bytes_big(
    next_value: Callable[[], int], chunks: int, tail: int
) -> Iterator[int]:
    """helper used by decode_bytes() to handle big-endian encoding"""
    #
    # input bit layout:
    #
    # first byte:   v1 543210..
    #              +v2 ......54
    #
    # second byte:  v2 3210....
    #              +v3 ....5432
    #
    # third byte:   v3 10......
    #              +v4 ..543210
    #
    idx = 0
    while idx < chunks:
        v1 = next_value()
        v2 = next_value()
        v3 = next_value()
        v4 = next_value()
        yield (v1 << 2) | (v2 >> 4)
        yield ((v2 & 0xF) << 4) | (v3 >> 2)
        yield ((v3 & 0x3) << 6) | v4
        idx += 1
    if tail:
        # tail is 2 or 3; padding bits were checked by caller
        v1 = next_value()
        v2 = next_value()
        yield (v1 << 2) | (v2 >> 4)
        if tail == 3:
            v3 = next_value()
            yield ((v2 & 0xF) << 4) | (v3 >> 2)


class Base64Engine:
    """Provides routines for encoding/decoding base64 data using
    arbitrary character mappings, selectable endianness, etc.

    Unlike standard base64, there is no padding character; instead
    the unused bits of the final digit must be zero. Decoding
    rejects strings where they aren't, so every byte string has
    exactly one encoding.

    :arg charmap:
        A string of 64 unique characters,
        which will be used to encode successive 6-bit chunks of data.
        A character's position within the string should correspond
        to its 6-bit value.

    :param big:
        Whether the encoding should be big-endian (default False).

    .. attribute:: charmap

        string containing list of characters used in encoding;
        position in string matches 6bit value of character.

    .. attribute:: big

        boolean flag indicating this using big-endian encoding.
    """

    def __init__(self, charmap: str, big: bool = False) -> None:
        if len(charmap) != 64:
            raise ValueError("charmap must be 64 characters in length")
        if len(set(charmap)) != 64:
            raise ValueError("charmap must not contain duplicate characters")
        self.charmap = charmap
        self.big = big
        self._encode64 = charmap.__getitem__
        self._decode_map = {char: idx for idx, char in enumerate(charmap)}
        if big:
            self._encode_bytes = _encode_bytes_big
            self._decode_bytes = _decode_bytes_big
        else:
            self._encode_bytes = _encode_bytes_little
            self._decode_bytes = _decode_bytes_little

    def __repr__(self) -> str:
        return f"<Base64Engine {self.charmap[:4]}... big={self.big}>"

    def _decode64(self, char: str) -> int:
        try:
            return self._decode_map[char]
        except KeyError:
            raise MalformedEncodingError(f"invalid character: {char!r}") from None

    # ---------------------------------------------------------------
    # padding helpers
    # ---------------------------------------------------------------

    def _padding_mask(self, tail: int) -> int:
        """bits of final digit which are unused, for a string of length ``tail`` mod 4"""
        if tail == 2:
            # 4 bits of last char unused (lsb for big, msb for little)
            return 15 if self.big else (15 << 2)
        if tail == 3:
            # 2 bits of last char unused (lsb for big, msb for little)
            return 3 if self.big else (3 << 4)
        return 0

    def padding_chars(self, length: int) -> str:
        """return the characters which may end an encoded string of *length* digits"""
        mask = self._padding_mask(length & 3)
        return "".join(c for i, c in enumerate(self.charmap) if not i & mask)

    # ---------------------------------------------------------------
    # bytes
    # ---------------------------------------------------------------

    def encode_bytes(self, source: bytes) -> str:
        """encode bytes to base64 string.

        :arg source: byte string to encode.
        :returns: string containing encoded data.
        """
        if not isinstance(source, bytes):
            raise TypeError(f"source must be bytes, not {type(source)}")
        chunks, tail = divmod(len(source), 3)
        next_value = iter(source).__next__
        gen = self._encode_bytes(next_value, chunks, tail)
        return "".join(map(self._encode64, gen))

    def decode_bytes(self, source: str) -> bytes:
        """decode bytes from base64 string.

        :arg source: string to decode.
        :returns: byte string containing decoded data.
        :raises MalformedEncodingError:
            if the length is 1 mod 4, a character is not in the charmap,
            or the unused bits of the last character are set.
        """
        chunks, tail = divmod(len(source), 4)
        if tail == 1:
            # only 6 bits left, can't encode a whole byte!
            raise MalformedEncodingError("input string length cannot be == 1 mod 4")
        values = [self._decode64(c) for c in source]
        if tail and values[-1] & self._padding_mask(tail):
            raise MalformedEncodingError(
                f"nonzero padding bits in final character {source[-1]!r}"
            )
        return bytes(self._decode_bytes(iter(values).__next__, chunks, tail))

    def encode_transposed_bytes(self, source: bytes, offsets: tuple[int, ...]) -> str:
        """encode byte string, first transposing source using offset list"""
        tmp = bytes(source[off] for off in offsets)
        return self.encode_bytes(tmp)

    def decode_transposed_bytes(self, source: str, offsets: tuple[int, ...]) -> bytes:
        """decode byte string, then reverse transposition described by offset list"""
        tmp = self.decode_bytes(source)
        if len(tmp) != len(offsets):
            raise MalformedEncodingError(
                f"expected {len(offsets)} bytes, decoded {len(tmp)}"
            )
        buf = bytearray(len(offsets))
        for off, char in zip(offsets, tmp):
            buf[off] = char
        return bytes(buf)

    # ---------------------------------------------------------------
    # integers
    # ---------------------------------------------------------------

    def _decode_int(self, source: str, bits: int) -> int:
        """decode base64 string -> integer

        :arg source: base64 string to decode.
        :arg bits: number of bits in resulting integer.

        :raises MalformedEncodingError:
            * if the string contains invalid base64 characters.
            * if the string is not exactly ``ceil(bits/6)`` in length.
            * if any padding bits are set.

        :returns:
            a integer in the range ``0 <= n < 2**bits``
        """
        pad = -bits % 6
        chars = (bits + pad) // 6
        if len(source) != chars:
            raise MalformedEncodingError(f"source must be {chars} chars")
        out = 0
        for c in source if self.big else reversed(source):
            out = (out << 6) + self._decode64(c)
        if pad:
            if self.big:
                if out & ((1 << pad) - 1):
                    raise MalformedEncodingError("nonzero padding bits in final character")
                out >>= pad
            elif out >> bits:
                raise MalformedEncodingError("nonzero padding bits in final character")
        return out

    def _encode_int(self, value: int, bits: int) -> str:
        """encode integer into base64 format

        :arg value: non-negative integer to encode
        :arg bits: number of bits to encode

        :returns:
            a string of length ``int(ceil(bits/6.0))``.
        """
        if value < 0 or value >> bits:
            raise ValueError("value out of range")
        pad = -bits % 6
        bits += pad
        if self.big:
            itr = range(bits - 6, -6, -6)
            # shift to add lsb padding.
            value <<= pad
        else:
            itr = range(0, bits, 6)
            # padding is msb, so no change needed.
        return "".join(self._encode64((value >> off) & 0x3F) for off in itr)

    def decode_int12(self, source: str) -> int:
        """decodes 2 char string -> 12-bit integer"""
        return self._decode_int(source, 12)

    def encode_int12(self, value: int) -> str:
        """encodes 12-bit integer -> 2 char string"""
        return self._encode_int(value, 12)

    def decode_int24(self, source: str) -> int:
        """decodes 4 char string -> 24-bit integer"""
        return self._decode_int(source, 24)

    def encode_int24(self, value: int) -> str:
        """encodes 24-bit integer -> 4 char string"""
        return self._encode_int(value, 24)

    def decode_int64(self, source: str) -> int:
        """decode 11 char base64 string -> 64-bit integer

        this format is used primarily by des-crypt & variants to encode
        the DES output value used as a checksum.
        """
        return self._decode_int(source, 64)

    def encode_int64(self, value: int) -> str:
        """encode 64-bit integer -> 11 char string"""
        return self._encode_int(value, 64)


h64 = Base64Engine(HASH64_CHARS)
h64big = Base64Engine(HASH64_CHARS, big=True)
bcrypt64 = Base64Engine(BCRYPT_CHARS, big=True)

# standard base64, used by b64s_decode
_b64s = Base64Engine(BASE64_CHARS, big=True)


# -------------------------------------------------------------
# fixed-width helpers used by the hash formats
# -------------------------------------------------------------


def _check_size(data: bytes, size: int, what: str) -> None:
    if not isinstance(data, bytes) or len(data) != size:
        raise ValueError(f"{what} must be {size} bytes")


def _decode_sized(engine: Base64Engine, source: str, digits: int, what: str) -> bytes:
    if len(source) != digits:
        raise MalformedEncodingError(f"{what} must be {digits} characters")
    return engine.decode_bytes(source)


def encode_des_block(block: bytes) -> str:
    """encode 8-byte DES block as 11 crypt-base64 digits"""
    _check_size(block, 8, "block")
    return h64big.encode_int64(int.from_bytes(block, "big"))


def decode_des_block(source: str) -> bytes:
    """decode 11 crypt-base64 digits into an 8-byte DES block.

    the last digit carries 2 padding bits, so it must be one of
    ``.26AEIMQUYcgkosw``.
    """
    return h64big.decode_int64(source).to_bytes(8, "big")


def encode_des_int12(value: int) -> str:
    return h64.encode_int12(value)


def decode_des_int12(source: str) -> int:
    return h64.decode_int12(source)


def encode_des_int24(value: int) -> str:
    return h64.encode_int24(value)


def decode_des_int24(source: str) -> int:
    return h64.decode_int24(source)


def encode_bcrypt_salt(salt: bytes) -> str:
    _check_size(salt, 16, "salt")
    return bcrypt64.encode_bytes(salt)


def decode_bcrypt_salt(source: str) -> bytes:
    return _decode_sized(bcrypt64, source, 22, "bcrypt salt")


def encode_bcrypt_hash(hash: bytes) -> str:
    _check_size(hash, 23, "hash")
    return bcrypt64.encode_bytes(hash)


def decode_bcrypt_hash(source: str) -> bytes:
    return _decode_sized(bcrypt64, source, 31, "bcrypt hash")


#: map used to transpose bytes when encoding final md5_crypt digest
_md5_crypt_transpose_map = (12, 6, 0, 13, 7, 1, 14, 8, 2, 15, 9, 3, 5, 10, 4, 11)


def encode_md5_crypt_hash(hash: bytes) -> str:
    _check_size(hash, 16, "hash")
    return h64.encode_transposed_bytes(hash, _md5_crypt_transpose_map)


def decode_md5_crypt_hash(source: str) -> bytes:
    if len(source) != 22:
        raise MalformedEncodingError("md5-crypt hash must be 22 characters")
    return h64.decode_transposed_bytes(source, _md5_crypt_transpose_map)


_eggdrop_decode_map = {char: idx for idx, char in enumerate(EGGDROP64_CHARS)}


def encode_eggdrop64(data: bytes) -> str:
    """
    encode 8 bytes in eggdrop's layout: the two big-endian 32-bit words
    are emitted last word first, each as 6 digits, least significant first.
    """
    _check_size(data, 8, "hash")
    digits = []
    for offset in (4, 0):
        word = int.from_bytes(data[offset : offset + 4], "big")
        for _ in range(6):
            digits.append(EGGDROP64_CHARS[word & 0x3F])
            word >>= 6
    return "".join(digits)


def decode_eggdrop64(source: str) -> bytes:
    if len(source) != 12:
        raise MalformedEncodingError("eggdrop hash must be 12 characters")
    words = []
    for start in (0, 6):
        word = 0
        for c in reversed(source[start : start + 6]):
            try:
                word = (word << 6) | _eggdrop_decode_map[c]
            except KeyError:
                raise MalformedEncodingError(f"invalid character: {c!r}") from None
        if word >> 32:
            raise MalformedEncodingError("nonzero padding bits in eggdrop hash")
        words.append(word)
    return words[1].to_bytes(4, "big") + words[0].to_bytes(4, "big")
