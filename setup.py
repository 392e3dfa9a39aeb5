"""
authphrase setup script
"""
#=============================================================================
# init script env -- ensure cwd = root of source dir
#=============================================================================
import os
root_dir = os.path.abspath(os.path.join(__file__, ".."))
os.chdir(root_dir)

#=============================================================================
# imports
#=============================================================================
from setuptools import setup, find_packages

#=============================================================================
# version string
#=============================================================================

# read version without importing authphrase (its dependencies may be absent)
with open(os.path.join(root_dir, "authphrase", "__init__.py")) as fh:
    for line in fh:
        if line.startswith("__version__"):
            version = line.split("=", 1)[1].strip().strip("\"'")
            break
    else:
        raise RuntimeError("can't find __version__ in authphrase/__init__.py")

#=============================================================================
# static text
#=============================================================================
SUMMARY = "recognize passphrases against crypt(3) and RFC 2307 hash strings"

DESCRIPTION = """\
Authphrase decodes the many historical textual formats for stored passphrase
hashes -- Unix crypt strings (DES, BSDi, MD5, bcrypt, NT, LAN Manager) and
LDAP RFC 2307 ``{TAG}`` values -- into immutable recognizer objects,
which can check a candidate passphrase and re-encode themselves.
"""

KEYWORDS = """\
password passphrase hash crypt rfc2307 ldap
des-crypt bsdi-crypt md5-crypt bcrypt nthash lanman
"""

CLASSIFIERS = """\
Intended Audience :: Developers
License :: OSI Approved :: BSD License
Natural Language :: English
Operating System :: OS Independent
Programming Language :: Python :: 3
Programming Language :: Python :: Implementation :: CPython
Topic :: Security :: Cryptography
Topic :: Software Development :: Libraries
""".splitlines()

if '.dev' in version:
    CLASSIFIERS.append("Development Status :: 3 - Alpha")
else:
    CLASSIFIERS.append("Development Status :: 4 - Beta")

#=============================================================================
# run setup
#=============================================================================
setup(
    # package info
    packages=find_packages(root_dir, include=["authphrase", "authphrase.*"]),
    zip_safe=True,
    python_requires=">=3.10",

    # metadata
    name="authphrase",
    version=version,
    license="BSD",

    description=SUMMARY,
    long_description=DESCRIPTION,
    keywords=KEYWORDS,
    classifiers=CLASSIFIERS,

    install_requires=[
        "bcrypt>=4.1",
        "cryptography>=43",
        "passlib>=1.7.4",
        "typing_extensions>=4.0",
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-archon",
        ],
    },
)

#=============================================================================
# eof
#=============================================================================
