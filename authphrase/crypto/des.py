"""authphrase.crypto.des -- DES based constructions used by crypt(3) and LAN Manager

The DES primitive itself comes from :mod:`passlib.crypto.des`,
whose integer interface supports the 24-bit salt perturbation
of the crypt(3) family.
"""

from __future__ import annotations

from passlib.crypto.des import des_encrypt_block, des_encrypt_int_block

from authphrase._utils.const import LANMAN_MAGIC

__all__ = [
    "des_key",
    "fold_key",
    "crypt_rounds",
    "lanman_half",
]


def des_key(secret: bytes) -> int:
    """
    convert first 8 bytes of secret into a 64-bit DES key.

    the low 7 bits of each byte are used; the parity bit
    of each key byte is left clear.
    """
    return sum((c & 0x7F) << (57 - i * 8) for i, c in enumerate(secret[:8]))


def fold_key(secret: bytes) -> int:
    """
    convert secret of any length into a DES key, BSDi style:
    each further 8-byte chunk is mixed in by encrypting the key
    with itself and xoring in the chunk's key.
    """
    key = des_key(secret)
    for idx in range(8, len(secret), 8):
        key = des_encrypt_int_block(key, key) ^ des_key(secret[idx : idx + 8])
    return key


def crypt_rounds(key: int, nrounds: int, salt: int, block: bytes) -> bytes:
    """
    encrypt *block* with salt-perturbed DES, *nrounds* times.

    :arg key: 64-bit key, from :func:`des_key` or :func:`fold_key`
    :arg nrounds: number of encryptions, 0 leaves the block unchanged
    :arg salt: 24-bit salt; bit ``n`` swaps E-box outputs ``n`` and ``n + 24``
    :arg block: 8 byte input block
    """
    if not nrounds:
        return block
    result = des_encrypt_int_block(key, int.from_bytes(block, "big"), salt, nrounds)
    return result.to_bytes(8, "big")


def lanman_half(secret: bytes) -> bytes:
    """
    compute one half of a LAN Manager hash.

    :arg secret: exactly 7 bytes, already uppercased and padded
    """
    assert len(secret) == 7
    return des_encrypt_block(secret, LANMAN_MAGIC)
