"""
Signature verification results.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from openpgp_mime.exceptions import SignatureVerifyError
from openpgp_mime.models.algorithms import DigestAlgorithm, PublicKeyAlgorithm

if TYPE_CHECKING:
    from openpgp_mime.crypto.protocol import PublicKey


class SignatureStatus(StrEnum):
    VALID = "valid"
    INVALID = "invalid"
    ERROR = "error"


@dataclass(frozen=True, kw_only=True)
class DigitalSignature:
    """
    Outcome of checking one signature.

    A signer whose check could not complete (unknown key, engine failure)
    is reported with ``status=ERROR`` and a reason in ``error``.

    Attributes:
        key_id: Issuer key id from the signature packet.
        status: Verification outcome.
        signer: The signing public key, when present in the key store.
        digest_algorithm: Digest used by the signer.
        public_key_algorithm: Public key algorithm used by the signer.
        created: Signature creation time.
        error: Reason for an ERROR status.
    """

    key_id: str
    status: SignatureStatus
    signer: "PublicKey | None" = None
    digest_algorithm: DigestAlgorithm = DigestAlgorithm.NONE
    public_key_algorithm: PublicKeyAlgorithm = PublicKeyAlgorithm.NONE
    created: datetime | None = None
    error: str | None = None

    def verify(self) -> bool:
        """
        Returns:
            True if the signature is valid, False if it is invalid.

        Raises:
            SignatureVerifyError: If the signature could not be checked.
        """
        if self.status is SignatureStatus.ERROR:
            msg = f"Signature could not be verified: {self.error}"
            raise SignatureVerifyError(msg, key_id=self.key_id)
        return self.status is SignatureStatus.VALID


@dataclass(frozen=True, kw_only=True)
class DecryptedData:
    """
    Plaintext recovered from an encrypted message.

    Attributes:
        data: The decrypted bytes.
        signatures: Per-signer results when the payload was signed, else empty.
    """

    data: bytes
    signatures: tuple[DigitalSignature, ...] = ()
