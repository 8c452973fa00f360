"""
Cryptography context protocol definitions.

The MIME layer only talks to these interfaces, so the pgpy implementation can
be swapped for another engine without changing the multipart builders.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import Protocol, runtime_checkable

from openpgp_mime.models.address import MailboxAddress
from openpgp_mime.models.algorithms import DigestAlgorithm, EncryptionAlgorithm, PublicKeyAlgorithm
from openpgp_mime.models.signature import DecryptedData, DigitalSignature


@runtime_checkable
class PublicKey(Protocol):
    """Protocol for a public key (primary key or subkey)."""

    @property
    def key_id(self) -> str:
        """Get the 16 hex digit key ID."""
        ...

    @property
    def fingerprint(self) -> str:
        """Get the key fingerprint."""
        ...

    @property
    def algorithm(self) -> PublicKeyAlgorithm: ...

    @property
    def created(self) -> datetime: ...

    @property
    def is_master(self) -> bool: ...

    @property
    def can_sign(self) -> bool: ...

    @property
    def can_encrypt(self) -> bool: ...

    @property
    def emails(self) -> list[str]:
        """Email addresses bound to the key's ring."""
        ...


@runtime_checkable
class SecretKey(PublicKey, Protocol):
    """Protocol for a key with private material."""

    @property
    def public_key(self) -> PublicKey:
        """Get the public half of this key."""
        ...


Signer = SecretKey | MailboxAddress
Recipient = PublicKey | MailboxAddress


@runtime_checkable
class CryptographyContext(Protocol):
    """
    Abstract interface for the operations the multipart builders need.
    """

    @property
    def signature_protocol(self) -> str:
        """Content type of detached signatures."""
        ...

    @property
    def encryption_protocol(self) -> str:
        """Content type of the multipart/encrypted control part."""
        ...

    @property
    def key_exchange_protocol(self) -> str: ...

    def supports(self, mime_type: str) -> bool:
        """
        Check whether a content type belongs to this context's protocol.

        Raises:
            NullArgumentError: If mime_type is None.
        """
        ...

    def get_digest_algorithm_name(self, digest: DigestAlgorithm) -> str:
        """
        Get the micalg parameter value for a digest.

        Raises:
            ArgumentOutOfRangeError: If the digest has no micalg name.
        """
        ...

    def get_digest_algorithm(self, name: str) -> DigestAlgorithm: ...

    def sign(self, signer: Signer, digest: DigestAlgorithm, data: bytes) -> bytes:
        """
        Create a detached signature.

        Args:
            signer: Secret key, or a mailbox to resolve one for.
            digest: Digest algorithm.
            data: Canonical bytes to sign.

        Returns:
            The signature bytes.

        Raises:
            KeyNotFoundError: If a mailbox has no signing key.
            NotSupportedError: If the digest is not supported.
        """
        ...

    def verify(self, data: bytes, signature_data: bytes) -> list[DigitalSignature]:
        """
        Verify a detached signature.

        Args:
            data: Canonical bytes that were signed.
            signature_data: Detached signature bytes.

        Returns:
            One record per signature.

        Raises:
            FormatError: If the signature data cannot be read.
        """
        ...

    def encrypt(
        self,
        recipients: Sequence[Recipient],
        data: bytes,
        algorithm: EncryptionAlgorithm | None = None,
    ) -> bytes:
        """
        Encrypt data to recipients.

        Args:
            recipients: Public keys or mailboxes to resolve.
            data: Plaintext bytes.
            algorithm: Cipher, negotiated from preferences when omitted.

        Returns:
            The ciphertext bytes.

        Raises:
            InvalidArgumentError: If recipients is empty.
            NotSupportedError: If the cipher is not supported.
        """
        ...

    def sign_and_encrypt(
        self,
        signer: Signer,
        digest: DigestAlgorithm,
        recipients: Sequence[Recipient],
        data: bytes,
        algorithm: EncryptionAlgorithm | None = None,
    ) -> bytes:
        """Sign data, then encrypt the signed result to recipients."""
        ...

    def decrypt(self, data: bytes) -> DecryptedData:
        """
        Decrypt data.

        Returns:
            The plaintext plus the results for any embedded signatures.

        Raises:
            DecryptionError: If no secret key can decrypt the data.
        """
        ...
