from openpgp_mime.exceptions import (
    ArgumentOutOfRangeError,
    CryptoError,
    FormatError,
    KeyNotFoundError,
    KeyUnlockError,
    NotSupportedError,
    NullArgumentError,
    PgpMimeError,
    UsageError,
)


def test_pgp_mime_error_str_without_context() -> None:
    error = PgpMimeError("Something failed")

    assert str(error) == "Something failed"


def test_pgp_mime_error_str_with_context() -> None:
    error = PgpMimeError("Failed", key_id="ABCD", attempt=3)

    assert "Failed" in str(error)
    assert "key_id='ABCD'" in str(error)
    assert "attempt=3" in str(error)


def test_null_argument_error_names_argument() -> None:
    error = NullArgumentError("recipients")

    assert error.argument == "recipients"
    assert "recipients must not be None" in str(error)


def test_usage_errors_are_value_errors() -> None:
    assert isinstance(NullArgumentError("x"), ValueError)
    assert isinstance(ArgumentOutOfRangeError("bad", argument="digest", value=0), UsageError)


def test_argument_out_of_range_error_keeps_value() -> None:
    error = ArgumentOutOfRangeError("bad digest", argument="digest", value=4)

    assert error.value == 4
    assert error.argument == "digest"


def test_not_supported_error_is_not_usage_error() -> None:
    error = NotSupportedError("RC2 is not supported", algorithm="RC2_40")

    assert not isinstance(error, ValueError)
    assert error.algorithm == "RC2_40"


def test_crypto_error_subclasses() -> None:
    assert isinstance(KeyUnlockError("locked", key_id="ABCD"), CryptoError)
    assert isinstance(FormatError("bad"), CryptoError)


def test_key_not_found_error_keeps_identity() -> None:
    error = KeyNotFoundError("No key", identity="bob@example.com")

    assert error.identity == "bob@example.com"
    assert "identity='bob@example.com'" in str(error)
