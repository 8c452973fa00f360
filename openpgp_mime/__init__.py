"""
OpenPGP/MIME for Python.

Signs, verifies, encrypts and decrypts email entities as RFC 3156
multipart/signed and multipart/encrypted, with pgpy as the OpenPGP engine.

Example:
    ```python
    from email.mime.text import MIMEText

    from openpgp_mime import DigestAlgorithm, KeyStore, MultipartSigned, OpenPgpContext

    store = KeyStore()
    store.import_secret_keys(armored_secret_key)
    ctx = OpenPgpContext(store)

    signed = MultipartSigned.create(store.get_signing_key(alice), DigestAlgorithm.SHA256, MIMEText("hi"), ctx)
    for signature in signed.verify(ctx):
        print(signature.key_id, signature.status)
    ```
"""

from openpgp_mime.config import OpenPgpConfig
from openpgp_mime.core import registry
from openpgp_mime.crypto.context import OpenPgpContext
from openpgp_mime.crypto.key_store import KeyStore
from openpgp_mime.exceptions import (
    ArgumentOutOfRangeError,
    CryptoError,
    DecryptionError,
    FormatError,
    InvalidArgumentError,
    InvalidStateError,
    KeyNotFoundError,
    KeyUnlockError,
    NotSupportedError,
    NullArgumentError,
    PgpMimeError,
    SignatureVerifyError,
    UsageError,
)
from openpgp_mime.filters.detection import OpenPgpDataType, OpenPgpDetectionFilter
from openpgp_mime.mime.message import encrypt_message, sign_and_encrypt_message, sign_message
from openpgp_mime.mime.multipart import MultipartEncrypted, MultipartSigned
from openpgp_mime.models import (
    DecryptedData,
    DigestAlgorithm,
    DigitalSignature,
    EncryptionAlgorithm,
    MailboxAddress,
    PublicKeyAlgorithm,
    SecureMailboxAddress,
    SignatureStatus,
)

__version__ = "0.1.0"

__all__ = [
    # Context
    "OpenPgpContext",
    "OpenPgpConfig",
    "KeyStore",
    "registry",
    # MIME
    "MultipartSigned",
    "MultipartEncrypted",
    "sign_message",
    "encrypt_message",
    "sign_and_encrypt_message",
    # Detection
    "OpenPgpDataType",
    "OpenPgpDetectionFilter",
    # Models
    "MailboxAddress",
    "SecureMailboxAddress",
    "DigestAlgorithm",
    "EncryptionAlgorithm",
    "PublicKeyAlgorithm",
    "DigitalSignature",
    "SignatureStatus",
    "DecryptedData",
    # Exceptions
    "PgpMimeError",
    "UsageError",
    "NullArgumentError",
    "InvalidArgumentError",
    "ArgumentOutOfRangeError",
    "NotSupportedError",
    "InvalidStateError",
    "KeyNotFoundError",
    "CryptoError",
    "KeyUnlockError",
    "FormatError",
    "DecryptionError",
    "SignatureVerifyError",
]
