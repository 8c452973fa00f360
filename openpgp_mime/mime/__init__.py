"""
PGP/MIME entities (RFC 3156).

This module provides:
- multipart/signed creation and verification
- multipart/encrypted creation and decryption
- Whole-message helpers that protect a message body in place
"""

from openpgp_mime.mime.canonical import canonicalize, prepare
from openpgp_mime.mime.message import encrypt_message, sign_and_encrypt_message, sign_message
from openpgp_mime.mime.multipart import MultipartEncrypted, MultipartSigned
from openpgp_mime.mime.parts import (
    ApplicationPgpEncrypted,
    ApplicationPgpKeys,
    ApplicationPgpSignature,
    EncryptedContent,
)

__all__ = [
    "MultipartSigned",
    "MultipartEncrypted",
    "ApplicationPgpSignature",
    "ApplicationPgpEncrypted",
    "ApplicationPgpKeys",
    "EncryptedContent",
    "canonicalize",
    "prepare",
    "sign_message",
    "encrypt_message",
    "sign_and_encrypt_message",
]
