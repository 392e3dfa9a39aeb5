import os

#: rounds used by traditional DES crypt
DES_CRYPT_DEFAULT_ROUNDS = 25

#: largest value storable in a 4-digit crypt-base64 field
DES_CRYPT_MAX_INT24 = (1 << 24) - 1

#: largest salt storable in a 2-digit crypt-base64 field
DES_CRYPT_MAX_INT12 = (1 << 12) - 1

#: block encrypted by each LAN Manager half
LANMAN_MAGIC = b"KGS!@#$%"

#: NT hash only looks at this many characters
NTHASH_MAX_CHARS = 128

#: Eksblowfish keys are truncated to this many bytes
BCRYPT_MAX_KEY_SIZE = 72

#: block encrypted by eggdrop's blowfish hash
EGGDROP_MAGIC = b"\xde\xad\xd0\x61\x23\xf6\xb0\x95"

#: largest key accepted by the blowfish cipher
BLOWFISH_MAX_KEY_SIZE = 56

#: default number of random salt bytes for salted digests
SALTED_DIGEST_DEFAULT_SALT_SIZE = 8

#: which Eksblowfish implementation to use: "auto", "bcrypt" or "builtin"
BCRYPT_BACKEND = (os.environ.get("AUTHPHRASE_BCRYPT_BACKEND") or "auto").lower()
