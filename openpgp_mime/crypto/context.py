"""
OpenPGP cryptography context implemented with pgpy.
"""

from collections.abc import Iterator, Sequence
from contextlib import ExitStack, contextmanager
from typing import BinaryIO

import pgpy
import structlog
from pgpy.constants import CompressionAlgorithm
from pgpy.errors import PGPDecryptionError
from pgpy.types import Armorable

from openpgp_mime.config import OpenPgpConfig
from openpgp_mime.core.packets import iter_packets
from openpgp_mime.crypto import algorithms
from openpgp_mime.crypto.key_store import KeyStore
from openpgp_mime.crypto.keys import PgpyPublicKey, PgpySecretKey
from openpgp_mime.crypto.protocol import PublicKey, Recipient, SecretKey, Signer
from openpgp_mime.exceptions import (
    ArgumentOutOfRangeError,
    CryptoError,
    DecryptionError,
    FormatError,
    InvalidArgumentError,
    KeyNotFoundError,
    KeyUnlockError,
    NullArgumentError,
)
from openpgp_mime.mime.parts import ApplicationPgpKeys
from openpgp_mime.models.address import MailboxAddress
from openpgp_mime.models.algorithms import DigestAlgorithm, EncryptionAlgorithm, PublicKeyAlgorithm
from openpgp_mime.models.signature import DecryptedData, DigitalSignature, SignatureStatus

logger = structlog.get_logger(__name__)

_SIGNATURE_PACKET_TAG = 2


class OpenPgpContext:
    """
    pgpy implementation of the CryptographyContext protocol.

    Signatures are detached and armored; encrypted output is an armored
    OpenPGP message. Protected secret keys are unlocked on demand through
    the configured passphrase provider.

    Example:
        store = KeyStore()
        store.import_secret_keys(armored_secret_key)
        ctx = OpenPgpContext(store, OpenPgpConfig(passphrase_provider=lambda key: "secret"))
        signature = ctx.sign(MailboxAddress(address="alice@example.com"), DigestAlgorithm.SHA256, data)
    """

    SIGNATURE_PROTOCOL = "application/pgp-signature"
    ENCRYPTION_PROTOCOL = "application/pgp-encrypted"
    KEY_EXCHANGE_PROTOCOL = "application/pgp-keys"

    _SUPPORTED_TYPES = frozenset(
        {
            "application/pgp-signature",
            "application/x-pgp-signature",
            "application/pgp-encrypted",
            "application/x-pgp-encrypted",
            "application/pgp-keys",
            "application/x-pgp-keys",
        }
    )

    def __init__(self, key_store: KeyStore | None = None, config: OpenPgpConfig | None = None) -> None:
        """
        Args:
            key_store: Keys available to the context. Defaults to an empty store.
            config: Algorithm preferences and passphrase provider.
        """
        self._key_store = key_store if key_store is not None else KeyStore()
        self._config = config if config is not None else OpenPgpConfig()
        self._default_encryption_algorithm = self._config.default_encryption_algorithm

    @property
    def key_store(self) -> KeyStore:
        return self._key_store

    @property
    def signature_protocol(self) -> str:
        return self.SIGNATURE_PROTOCOL

    @property
    def encryption_protocol(self) -> str:
        return self.ENCRYPTION_PROTOCOL

    @property
    def key_exchange_protocol(self) -> str:
        return self.KEY_EXCHANGE_PROTOCOL

    @property
    def enabled_encryption_algorithms(self) -> tuple[EncryptionAlgorithm, ...]:
        return tuple(self._config.enabled_encryption_algorithms)

    @property
    def enabled_digest_algorithms(self) -> tuple[DigestAlgorithm, ...]:
        return tuple(self._config.enabled_digest_algorithms)

    @property
    def default_encryption_algorithm(self) -> EncryptionAlgorithm:
        """Cipher used when encrypt() is not given one and every recipient accepts it."""
        return self._default_encryption_algorithm

    @default_encryption_algorithm.setter
    def default_encryption_algorithm(self, algorithm: EncryptionAlgorithm) -> None:
        self._default_encryption_algorithm = algorithms.validate_default_encryption_algorithm(algorithm)

    def supports(self, mime_type: str) -> bool:
        if mime_type is None:
            raise NullArgumentError("mime_type")
        return mime_type.strip().lower() in self._SUPPORTED_TYPES

    def get_digest_algorithm_name(self, digest: DigestAlgorithm) -> str:
        return algorithms.get_digest_algorithm_name(digest)

    def get_digest_algorithm(self, name: str) -> DigestAlgorithm:
        return algorithms.get_digest_algorithm(name)

    def can_sign(self, mailbox: MailboxAddress) -> bool:
        return self._key_store.can_sign(mailbox)

    def can_encrypt(self, mailbox: MailboxAddress) -> bool:
        return self._key_store.can_encrypt(mailbox)

    def get_signing_key(self, mailbox: MailboxAddress) -> PgpySecretKey:
        return self._key_store.get_signing_key(mailbox)

    def get_public_keys(self, mailboxes: Sequence[MailboxAddress]) -> list[PgpyPublicKey]:
        return self._key_store.get_public_keys(mailboxes)

    def import_key(self, key: pgpy.PGPKey) -> None:
        self._key_store.import_key(key)

    def import_keys(self, data: bytes | str | BinaryIO) -> int:
        return self._key_store.import_keys(data)

    def import_secret_keys(self, data: bytes | str | BinaryIO) -> int:
        return self._key_store.import_secret_keys(data)

    def export_keys(
        self,
        keys: Sequence[PgpyPublicKey | MailboxAddress],
        stream: BinaryIO | None = None,
        armor: bool = True,
    ) -> ApplicationPgpKeys | None:
        """
        Export public keys.

        Returns:
            An application/pgp-keys part, or None when written to stream.
        """
        data = self._key_store.export_keys(keys, armor=armor)
        if stream is not None:
            stream.write(data)
            return None
        return ApplicationPgpKeys(data)

    def sign(self, signer: Signer, digest: DigestAlgorithm, data: bytes) -> bytes:
        """
        Create an armored detached signature over data.

        Raises:
            NullArgumentError: If an argument is None.
            KeyNotFoundError: If no signing key is available.
            NotSupportedError: If the digest is not supported.
            KeyUnlockError: If the signing key cannot be unlocked.
            CryptoError: If the engine fails to sign.
        """
        if data is None:
            raise NullArgumentError("data")
        hash_algorithm = algorithms.get_hash_algorithm(digest)
        key = self._resolve_signer(signer)

        with self._unlocked(key):
            try:
                signature = key.pgpy_key.sign(bytes(data), hash=hash_algorithm)
            except Exception as e:
                msg = f"Failed to sign data: {e}"
                raise CryptoError(msg) from e

        logger.debug("Signed data", key_id=key.key_id, digest=DigestAlgorithm(digest).name)
        return str(signature).encode("ascii")

    def verify(self, data: bytes, signature_data: bytes) -> list[DigitalSignature]:
        """
        Verify detached signatures, armored or binary.

        Raises:
            NullArgumentError: If an argument is None.
            FormatError: If no signature can be read.
        """
        if data is None:
            raise NullArgumentError("data")
        if signature_data is None:
            raise NullArgumentError("signature_data")

        signatures = _load_signatures(signature_data)
        return [self._verify_signature(bytes(data), signature) for signature in signatures]

    def encrypt(
        self,
        recipients: Sequence[Recipient],
        data: bytes,
        algorithm: EncryptionAlgorithm | None = None,
    ) -> bytes:
        """
        Encrypt data to every recipient with a single session key.

        Raises:
            NullArgumentError: If an argument is None.
            InvalidArgumentError: If recipients is empty.
            KeyNotFoundError: If a mailbox has no encryption key.
            NotSupportedError: If the cipher is not supported.
        """
        if data is None:
            raise NullArgumentError("data")
        keys = self._resolve_recipients(recipients)
        message = self._new_message(data)
        return self._encrypt_message(keys, message, algorithm)

    def sign_and_encrypt(
        self,
        signer: Signer,
        digest: DigestAlgorithm,
        recipients: Sequence[Recipient],
        data: bytes,
        algorithm: EncryptionAlgorithm | None = None,
    ) -> bytes:
        """
        Sign data inline, then encrypt the signed message.

        Raises:
            The union of sign() and encrypt() errors.
        """
        if data is None:
            raise NullArgumentError("data")
        hash_algorithm = algorithms.get_hash_algorithm(digest)
        key = self._resolve_signer(signer)
        keys = self._resolve_recipients(recipients)
        message = self._new_message(data)

        with self._unlocked(key):
            try:
                message |= key.pgpy_key.sign(message, hash=hash_algorithm)
            except Exception as e:
                msg = f"Failed to sign data: {e}"
                raise CryptoError(msg) from e

        return self._encrypt_message(keys, message, algorithm)

    def decrypt(self, data: bytes) -> DecryptedData:
        """
        Decrypt an OpenPGP message and check any signatures it carries.

        Raises:
            NullArgumentError: If data is None.
            FormatError: If data is not an encrypted OpenPGP message.
            DecryptionError: If no secret key can decrypt it.
            KeyUnlockError: If the secret key cannot be unlocked.
        """
        if data is None:
            raise NullArgumentError("data")
        try:
            message = pgpy.PGPMessage.from_blob(bytes(data))
        except Exception as e:
            msg = f"Failed to read encrypted message: {e}"
            raise FormatError(msg) from e
        if not message.is_encrypted:
            msg = "Data is not an encrypted OpenPGP message"
            raise FormatError(msg)

        key = self._find_decryption_key(message.encrypters)
        with self._unlocked(key):
            try:
                decrypted = key.pgpy_ring.decrypt(message)
            except Exception as e:
                msg = f"Failed to decrypt message: {e}"
                raise DecryptionError(msg) from e

        content = self._normalize_decrypted_content(decrypted.message)
        signatures = tuple(self._verify_signature(content, signature) for signature in decrypted.signatures)
        logger.debug("Decrypted message", key_id=key.key_id, signatures=len(signatures))
        return DecryptedData(data=content, signatures=signatures)

    def negotiate_encryption_algorithm(self, keys: Sequence[PgpyPublicKey]) -> EncryptionAlgorithm:
        """
        Pick the cipher used when encrypt() is not given one.

        The current default is used whenever every recipient accepts it.
        Otherwise the first enabled cipher every recipient prefers is used, and
        the default again when there is none. Keys without cipher preferences
        do not constrain the choice.
        """
        candidates = (self._default_encryption_algorithm, *self._config.enabled_encryption_algorithms)
        for algorithm in candidates:
            if all(algorithm in key.cipher_preferences for key in keys if key.cipher_preferences):
                return algorithm
        return self._default_encryption_algorithm

    def _encrypt_message(
        self,
        keys: Sequence[PgpyPublicKey],
        message: pgpy.PGPMessage,
        algorithm: EncryptionAlgorithm | None,
    ) -> bytes:
        if algorithm is None:
            algorithm = self.negotiate_encryption_algorithm(keys)
        cipher = algorithms.get_cipher(algorithm)
        session_key = cipher.gen_key()

        try:
            for key in keys:
                message = key.pgpy_key.encrypt(message, cipher=cipher, sessionkey=session_key)
        except Exception as e:
            msg = f"Failed to encrypt data: {e}"
            raise CryptoError(msg) from e
        finally:
            del session_key

        logger.debug("Encrypted data", recipients=len(keys), algorithm=EncryptionAlgorithm(algorithm).name)
        return str(message).encode("ascii")

    def _new_message(self, data: bytes) -> pgpy.PGPMessage:
        compression = CompressionAlgorithm.ZIP if self._config.compress else CompressionAlgorithm.Uncompressed
        return pgpy.PGPMessage.new(bytes(data), compression=compression, format="b")

    def _resolve_signer(self, signer: Signer) -> PgpySecretKey:
        if signer is None:
            raise NullArgumentError("signer")
        if isinstance(signer, MailboxAddress):
            return self._key_store.get_signing_key(signer)
        if isinstance(signer, PgpySecretKey):
            return signer
        if isinstance(signer, SecretKey):
            key = self._key_store.find_secret_key(signer.key_id)
            if key is not None:
                return key
            msg = f"Secret key {signer.key_id} is not in the key store"
            raise KeyNotFoundError(msg, identity=signer.key_id)
        msg = f"Unsupported signer type: {type(signer).__name__}"
        raise InvalidArgumentError(msg, argument="signer")

    def _resolve_recipients(self, recipients: Sequence[Recipient]) -> list[PgpyPublicKey]:
        if recipients is None:
            raise NullArgumentError("recipients")
        if not recipients:
            msg = "At least one recipient is required"
            raise InvalidArgumentError(msg, argument="recipients")

        resolved: dict[str, PgpyPublicKey] = {}
        mailboxes = []
        for recipient in recipients:
            if recipient is None:
                raise NullArgumentError("recipients", "recipients must not contain None")
            if isinstance(recipient, MailboxAddress):
                mailboxes.append(recipient)
            elif isinstance(recipient, PgpySecretKey):
                key = recipient.public_key
                resolved.setdefault(key.fingerprint, key)
            elif isinstance(recipient, PgpyPublicKey):
                resolved.setdefault(recipient.fingerprint, recipient)
            elif isinstance(recipient, PublicKey):
                key = self._key_store.find_public_key(recipient.key_id)
                if key is None:
                    msg = f"Public key {recipient.key_id} is not in the key store"
                    raise KeyNotFoundError(msg, identity=recipient.key_id)
                resolved.setdefault(key.fingerprint, key)
            else:
                msg = f"Unsupported recipient type: {type(recipient).__name__}"
                raise InvalidArgumentError(msg, argument="recipients")

        if mailboxes:
            for key in self._key_store.get_public_keys(mailboxes):
                resolved.setdefault(key.fingerprint, key)
        return list(resolved.values())

    def _find_decryption_key(self, key_ids: set[str]) -> PgpySecretKey:
        for key_id in sorted(key_ids):
            key = self._key_store.find_secret_key(key_id)
            if key is not None:
                return key
        msg = f"No secret key available to decrypt the message (key ids: {', '.join(sorted(key_ids))})"
        raise DecryptionError(msg)

    @contextmanager
    def _unlocked(self, key: PgpySecretKey) -> Iterator[PgpySecretKey]:
        """
        Unlock a key's ring for the duration of the block.

        Raises:
            KeyUnlockError: If no passphrase is available or it is wrong.
        """
        ring = key.pgpy_ring
        if not ring.is_protected or ring.is_unlocked:
            yield key
            return

        provider = self._config.passphrase_provider
        if provider is None:
            msg = "Secret key is protected and no passphrase provider is configured"
            raise KeyUnlockError(msg, key_id=key.key_id)

        with ExitStack() as stack:
            try:
                stack.enter_context(ring.unlock(provider(key)))
            except PGPDecryptionError as e:
                msg = f"Failed to unlock secret key: {e}"
                raise KeyUnlockError(msg, key_id=key.key_id) from e
            logger.debug("Unlocked secret key", key_id=key.key_id)
            yield key

    def _verify_signature(self, content: bytes, signature: pgpy.PGPSignature) -> DigitalSignature:
        key_id = str(signature.signer)
        digest = _digest_of(signature)
        public_key_algorithm = _public_key_algorithm_of(signature)

        signer = self._key_store.find_public_key(key_id)
        if signer is None:
            logger.warning("No public key for signature", key_id=key_id)
            return DigitalSignature(
                key_id=key_id,
                status=SignatureStatus.ERROR,
                digest_algorithm=digest,
                public_key_algorithm=public_key_algorithm,
                created=signature.created,
                error=f"No public key found for key id {key_id}",
            )

        try:
            verification = signer.pgpy_ring.verify(content, signature)
        except Exception as e:
            logger.warning("Signature check failed", key_id=key_id, error=str(e))
            return DigitalSignature(
                key_id=key_id,
                status=SignatureStatus.ERROR,
                signer=signer,
                digest_algorithm=digest,
                public_key_algorithm=public_key_algorithm,
                created=signature.created,
                error=str(e),
            )

        return DigitalSignature(
            key_id=key_id,
            status=SignatureStatus.VALID if verification else SignatureStatus.INVALID,
            signer=signer,
            digest_algorithm=digest,
            public_key_algorithm=public_key_algorithm,
            created=signature.created,
        )

    @staticmethod
    def _normalize_decrypted_content(content: bytes | bytearray | str) -> bytes:
        if isinstance(content, bytearray):
            return bytes(content)
        if isinstance(content, str):
            return content.encode("utf-8")
        return content


def _load_signatures(signature_data: bytes) -> list[pgpy.PGPSignature]:
    """
    Read every signature packet from armored or binary data.

    Raises:
        FormatError: If the data holds no readable signature.
    """
    try:
        body = bytes(Armorable.ascii_unarmor(bytes(signature_data))["body"])
        signatures = [
            pgpy.PGPSignature.from_blob(packet)
            for tag, packet in iter_packets(body)
            if tag == _SIGNATURE_PACKET_TAG
        ]
    except FormatError:
        raise
    except Exception as e:
        msg = f"Failed to read signature data: {e}"
        raise FormatError(msg) from e

    if not signatures:
        msg = "No signatures found in signature data"
        raise FormatError(msg)
    return signatures


def _digest_of(signature: pgpy.PGPSignature) -> DigestAlgorithm:
    try:
        return algorithms.get_digest_algorithm_from_tag(int(signature.hash_algorithm))
    except ArgumentOutOfRangeError:
        return DigestAlgorithm.NONE


def _public_key_algorithm_of(signature: pgpy.PGPSignature) -> PublicKeyAlgorithm:
    try:
        return algorithms.get_public_key_algorithm(int(signature.key_algorithm))
    except ArgumentOutOfRangeError:
        return PublicKeyAlgorithm.NONE
