from pytest_archon import archrule


def test_codecs_are_standalone() -> None:
    (
        archrule("binary-codecs-standalone")
        .match("authphrase.binary")
        .should_not_import("authphrase.recognizers*")
        .should_not_import("authphrase.registry")
        .should_not_import("authphrase.crypto*")
        .check("authphrase")
    )


def test_recognizers_do_not_import_registry() -> None:
    (
        archrule("recognizers-below-registry")
        .match("authphrase.recognizers*")
        .should_not_import("authphrase.registry")
        .check("authphrase")
    )


def test_crypto_does_not_import_recognizers() -> None:
    (
        archrule("crypto-below-recognizers")
        .match("authphrase.crypto*")
        .should_not_import("authphrase.recognizers*")
        .should_not_import("authphrase.registry")
        .check("authphrase")
    )
