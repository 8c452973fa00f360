"""
OpenPGP operations for PGP/MIME.

This module provides:
- Algorithm name and tag mappings (micalg names, pgpy constants)
- Key resolution by mailbox address or fingerprint
- Signing, verification, encryption and decryption through pgpy
"""

from openpgp_mime.crypto.algorithms import (
    get_cipher,
    get_digest_algorithm,
    get_digest_algorithm_from_tag,
    get_digest_algorithm_name,
    get_encryption_algorithm,
    get_hash_algorithm,
    get_public_key_algorithm,
    validate_default_encryption_algorithm,
)
from openpgp_mime.crypto.context import OpenPgpContext
from openpgp_mime.crypto.key_store import KeyStore
from openpgp_mime.crypto.keys import PgpyPublicKey, PgpySecretKey
from openpgp_mime.crypto.protocol import CryptographyContext, PublicKey, Recipient, SecretKey, Signer

__all__ = [
    "OpenPgpContext",
    "KeyStore",
    "CryptographyContext",
    "PublicKey",
    "SecretKey",
    "Signer",
    "Recipient",
    "PgpyPublicKey",
    "PgpySecretKey",
    "get_cipher",
    "get_digest_algorithm",
    "get_digest_algorithm_from_tag",
    "get_digest_algorithm_name",
    "get_encryption_algorithm",
    "get_hash_algorithm",
    "get_public_key_algorithm",
    "validate_default_encryption_algorithm",
]
