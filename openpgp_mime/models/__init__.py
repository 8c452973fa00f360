"""
Domain models for openpgp_mime.

These are immutable (frozen) dataclasses and enums shared by the crypto and MIME layers.
"""

from openpgp_mime.models.address import MailboxAddress, SecureMailboxAddress, parse_addresses
from openpgp_mime.models.algorithms import DigestAlgorithm, EncryptionAlgorithm, PublicKeyAlgorithm
from openpgp_mime.models.signature import DecryptedData, DigitalSignature, SignatureStatus

__all__ = [
    # Addresses
    "MailboxAddress",
    "SecureMailboxAddress",
    "parse_addresses",
    # Algorithms
    "DigestAlgorithm",
    "EncryptionAlgorithm",
    "PublicKeyAlgorithm",
    # Signatures
    "DigitalSignature",
    "SignatureStatus",
    "DecryptedData",
]
