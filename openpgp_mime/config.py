"""
OpenPGP context configuration.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from openpgp_mime.models.algorithms import DigestAlgorithm, EncryptionAlgorithm

if TYPE_CHECKING:
    from openpgp_mime.crypto.protocol import SecretKey

_UNUSABLE_DIGESTS = (
    DigestAlgorithm.NONE,
    DigestAlgorithm.DOUBLE_SHA,
    DigestAlgorithm.MD2,
    DigestAlgorithm.TIGER192,
    DigestAlgorithm.HAVAL5_160,
    DigestAlgorithm.MD4,
)


@dataclass(frozen=True, kw_only=True)
class OpenPgpConfig:
    """
    Attributes:
        enabled_encryption_algorithms: Ciphers in negotiation order, most preferred first.
        enabled_digest_algorithms: Digests in preference order, most preferred first.
        default_encryption_algorithm: Cipher used when negotiation finds no common choice.
        default_digest_algorithm: Digest suggested to callers that do not pick one.
        compress: ZIP-compress payloads before encryption.
        passphrase_provider: Called with a protected secret key, returns its passphrase.
    """

    enabled_encryption_algorithms: tuple[EncryptionAlgorithm, ...] = (
        EncryptionAlgorithm.AES256,
        EncryptionAlgorithm.AES192,
        EncryptionAlgorithm.AES128,
        EncryptionAlgorithm.TRIPLE_DES,
    )
    enabled_digest_algorithms: tuple[DigestAlgorithm, ...] = (
        DigestAlgorithm.SHA256,
        DigestAlgorithm.SHA512,
        DigestAlgorithm.SHA1,
    )
    default_encryption_algorithm: EncryptionAlgorithm = EncryptionAlgorithm.AES256
    default_digest_algorithm: DigestAlgorithm = DigestAlgorithm.SHA256
    compress: bool = False
    passphrase_provider: "Callable[[SecretKey], str] | None" = None

    def __post_init__(self) -> None:
        if not self.enabled_encryption_algorithms:
            msg = "enabled_encryption_algorithms must not be empty"
            raise ValueError(msg)
        if not self.enabled_digest_algorithms:
            msg = "enabled_digest_algorithms must not be empty"
            raise ValueError(msg)
        if any(algorithm.is_rc2 for algorithm in self.enabled_encryption_algorithms):
            msg = "RC2 ciphers cannot be enabled"
            raise ValueError(msg)
        if any(digest in _UNUSABLE_DIGESTS for digest in self.enabled_digest_algorithms):
            msg = "enabled_digest_algorithms contains an unsupported digest"
            raise ValueError(msg)
        if self.default_encryption_algorithm.is_rc2:
            msg = "default_encryption_algorithm cannot be an RC2 cipher"
            raise ValueError(msg)
        if self.default_digest_algorithm in _UNUSABLE_DIGESTS:
            msg = "default_digest_algorithm is not supported"
            raise ValueError(msg)
