"""
openpgp_mime exception hierarchy.

All exceptions inherit from PgpMimeError for easy catching. Usage errors
additionally inherit from ValueError.
"""

from typing import Any


class PgpMimeError(Exception):
    """Base exception for all openpgp_mime errors."""

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        if self.context:
            ctx = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx})"
        return self.message


class UsageError(PgpMimeError, ValueError):
    """The caller passed arguments that can never succeed."""


class NullArgumentError(UsageError):
    """A required argument was None."""

    def __init__(self, argument: str, message: str | None = None) -> None:
        super().__init__(message or f"{argument} must not be None", argument=argument)
        self.argument = argument


class InvalidArgumentError(UsageError):
    """An argument has an invalid value, e.g. an empty required collection."""

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        super().__init__(message, argument=argument)
        self.argument = argument


class ArgumentOutOfRangeError(UsageError):
    """An enum value or native tag falls outside the accepted set."""

    def __init__(self, message: str, *, argument: str | None = None, value: Any = None) -> None:
        super().__init__(message, argument=argument, value=value)
        self.argument = argument
        self.value = value


class NotSupportedError(PgpMimeError):
    """A legacy or broken algorithm was requested."""

    def __init__(self, message: str, *, algorithm: str | None = None) -> None:
        super().__init__(message, algorithm=algorithm)
        self.algorithm = algorithm


class InvalidStateError(PgpMimeError):
    """A message lacks the body, sender or recipients an operation needs."""


class KeyNotFoundError(PgpMimeError):
    """No key in the key store matches the requested identity."""

    def __init__(self, message: str, *, identity: str | None = None) -> None:
        super().__init__(message, identity=identity)
        self.identity = identity


class CryptoError(PgpMimeError):
    """Cryptographic operation failed."""


class KeyUnlockError(CryptoError):
    """A passphrase-protected secret key could not be unlocked."""

    def __init__(self, message: str, *, key_id: str | None = None) -> None:
        super().__init__(message, key_id=key_id)
        self.key_id = key_id


class FormatError(CryptoError):
    """Malformed multipart structure or unparseable OpenPGP data."""


class DecryptionError(CryptoError):
    """Encrypted content could not be decrypted."""


class SignatureVerifyError(CryptoError):
    """The validity of a signature could not be determined."""

    def __init__(self, message: str, *, key_id: str | None = None) -> None:
        super().__init__(message, key_id=key_id)
        self.key_id = key_id
