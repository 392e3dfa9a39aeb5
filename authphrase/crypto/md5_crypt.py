"""authphrase.crypto.md5_crypt -- the BSD MD5-crypt construction"""

from __future__ import annotations

from hashlib import md5

__all__ = ["MD5_CRYPT_MAGIC", "MD5_CRYPT_ROUNDS", "md5_crypt_digest"]

#: magic string mixed into the first digest
MD5_CRYPT_MAGIC = b"$1$"

#: number of extra rounds of MD5 mixing
MD5_CRYPT_ROUNDS = 1000


def md5_crypt_digest(passphrase: bytes, salt: bytes) -> bytes:
    """
    run the FreeBSD MD5-crypt algorithm.

    :arg passphrase: passphrase as bytes
    :arg salt: up to 8 bytes of salt

    :returns:
        the raw 16 byte MD5 state; see
        :func:`authphrase.binary.encode_md5_crypt_hash` for the
        permuted base64 form used in the crypt string.
    """
    # the passphrase first, since that is what is most unknown,
    # then the magic string, then the raw salt
    ctx = md5(passphrase + MD5_CRYPT_MAGIC + salt)

    # then as many bytes of MD5(pw, salt, pw) as the passphrase has
    mixin = md5(passphrase + salt + passphrase).digest()
    size = len(passphrase)
    ctx.update(mixin * (size // 16) + mixin[: size % 16])

    # then a NUL or the first passphrase byte for each bit of the length
    first = passphrase[:1]
    i = size
    while i:
        ctx.update(b"\x00" if i & 1 else first)
        i >>= 1

    final = ctx.digest()

    for i in range(MD5_CRYPT_ROUNDS):
        ctx = md5(passphrase if i & 1 else final)
        if i % 3:
            ctx.update(salt)
        if i % 7:
            ctx.update(passphrase)
        ctx.update(final if i & 1 else passphrase)
        final = ctx.digest()

    return final
