"""
multipart/signed and multipart/encrypted containers (RFC 3156).

Example:
    signed = MultipartSigned.create(signer, DigestAlgorithm.SHA256, MIMEText("hello"), ctx)
    signatures = MultipartSigned.from_message(received).verify(ctx)

    encrypted = MultipartEncrypted.encrypt([recipient], MIMEText("hello"), ctx)
    entity, signatures = MultipartEncrypted.from_message(received).decrypt_and_verify(ctx)
"""

from collections.abc import Sequence
from copy import deepcopy
from email.message import Message
from email.mime.multipart import MIMEMultipart
from email.parser import BytesParser
from email.policy import Policy, compat32
from typing import Self

import structlog

from openpgp_mime.core import registry
from openpgp_mime.crypto.protocol import CryptographyContext, Recipient, Signer
from openpgp_mime.exceptions import FormatError, NullArgumentError
from openpgp_mime.mime.canonical import canonicalize, prepare
from openpgp_mime.mime.parts import ApplicationPgpEncrypted, ApplicationPgpSignature, EncryptedContent
from openpgp_mime.models.algorithms import DigestAlgorithm, EncryptionAlgorithm
from openpgp_mime.models.signature import DecryptedData, DigitalSignature

logger = structlog.get_logger(__name__)

_VERSION_LINE = b"Version: 1"


class _PgpMultipart(MIMEMultipart):
    """Shared construction and parsing for the PGP/MIME containers."""

    SUBTYPE = "mixed"

    def __init__(self, *, policy: Policy | None = None, **params: str) -> None:
        super().__init__(self.SUBTYPE, policy=policy if policy is not None else compat32, **params)

    @classmethod
    def from_message(cls, message: Message) -> Self:
        """
        Wrap a parsed message of this container's content type.

        Raises:
            NullArgumentError: If message is None.
            FormatError: If message has another content type.
        """
        if message is None:
            raise NullArgumentError("message")
        if isinstance(message, cls):
            return message

        expected = f"multipart/{cls.SUBTYPE}"
        if message.get_content_type() != expected or not message.is_multipart():
            msg = f"Expected {expected}, got {message.get_content_type()}"
            raise FormatError(msg)

        container = cls(policy=message.policy)
        del container["Content-Type"]
        del container["MIME-Version"]
        for name, value in message.raw_items():
            container.set_raw(name, value)
        container.set_payload(message.get_payload())
        container.preamble = message.preamble
        container.epilogue = message.epilogue
        return container

    def _protocol(self) -> str:
        protocol = self.get_param("protocol")
        if not protocol:
            msg = f"multipart/{self.SUBTYPE} is missing the protocol parameter"
            raise FormatError(msg)
        return str(protocol).strip().lower()

    def _children(self) -> list[Message]:
        parts = self.get_payload()
        if not isinstance(parts, list) or len(parts) != 2:
            count = len(parts) if isinstance(parts, list) else 0
            msg = f"multipart/{self.SUBTYPE} must have exactly 2 parts, found {count}"
            raise FormatError(msg)
        return parts


class MultipartSigned(_PgpMultipart):
    """
    multipart/signed container.

    The first child is the signed entity; the second is the detached
    signature over the entity's canonical form.
    """

    SUBTYPE = "signed"

    @classmethod
    def create(
        cls,
        signer: Signer,
        digest: DigestAlgorithm,
        entity: Message,
        ctx: CryptographyContext | None = None,
    ) -> Self:
        """
        Sign an entity.

        Args:
            signer: Secret key, or mailbox to resolve one for.
            digest: Digest algorithm; also sets the micalg parameter.
            entity: The entity to sign. It is left untouched; a copy with 8bit
                parts re-encoded is signed and attached.
            ctx: Cryptography context. Defaults to the registered one.

        Returns:
            The multipart/signed container.

        Raises:
            NullArgumentError: If entity is None.
            ArgumentOutOfRangeError: If the digest has no micalg name.
        """
        if entity is None:
            raise NullArgumentError("entity")
        ctx = registry.resolve(ctx)

        micalg = ctx.get_digest_algorithm_name(digest)
        entity = prepare(deepcopy(entity))
        signature = ctx.sign(signer, digest, canonicalize(entity))

        signed = cls(micalg=micalg, protocol=ctx.signature_protocol)
        signed.attach(entity)
        signed.attach(ApplicationPgpSignature(signature))
        logger.debug("Created multipart/signed", micalg=micalg)
        return signed

    @property
    def content(self) -> Message:
        """The signed entity."""
        return self._children()[0]

    def verify(self, ctx: CryptographyContext | None = None) -> list[DigitalSignature]:
        """
        Verify the detached signature against the signed entity.

        Returns:
            One record per signature.

        Raises:
            FormatError: If the container is malformed or uses another protocol.
        """
        protocol = self._protocol()
        if not self.get_param("micalg"):
            msg = "multipart/signed is missing the micalg parameter"
            raise FormatError(msg)
        ctx = registry.resolve(ctx)
        if not protocol.endswith("pgp-signature") or not ctx.supports(protocol):
            msg = f"Unsupported multipart/signed protocol: {protocol}"
            raise FormatError(msg)

        content, signature_part = self._children()
        if signature_part.get_content_type() != protocol:
            msg = f"Signature part is {signature_part.get_content_type()}, expected {protocol}"
            raise FormatError(msg)

        signature = signature_part.get_payload(decode=True)
        if not signature:
            msg = "Signature part is empty"
            raise FormatError(msg)
        return ctx.verify(canonicalize(content), signature)


class MultipartEncrypted(_PgpMultipart):
    """
    multipart/encrypted container.

    The first child is the application/pgp-encrypted control part; the
    second holds the armored ciphertext.
    """

    SUBTYPE = "encrypted"

    @classmethod
    def encrypt(
        cls,
        recipients: Sequence[Recipient],
        entity: Message,
        ctx: CryptographyContext | None = None,
        algorithm: EncryptionAlgorithm | None = None,
    ) -> Self:
        """
        Encrypt an entity to recipients.

        Raises:
            NullArgumentError: If entity or recipients is None.
            InvalidArgumentError: If recipients is empty.
        """
        if entity is None:
            raise NullArgumentError("entity")
        ctx = registry.resolve(ctx)
        ciphertext = ctx.encrypt(recipients, canonicalize(entity), algorithm)
        logger.debug("Created multipart/encrypted", recipients=len(recipients))
        return cls._wrap(ctx, ciphertext)

    @classmethod
    def sign_and_encrypt(
        cls,
        signer: Signer,
        digest: DigestAlgorithm,
        recipients: Sequence[Recipient],
        entity: Message,
        ctx: CryptographyContext | None = None,
        algorithm: EncryptionAlgorithm | None = None,
    ) -> Self:
        """
        Sign an entity, then encrypt it, as one OpenPGP message.

        The signature travels inside the ciphertext rather than in a nested
        multipart/signed.
        """
        if entity is None:
            raise NullArgumentError("entity")
        ctx = registry.resolve(ctx)
        entity = prepare(deepcopy(entity))
        ciphertext = ctx.sign_and_encrypt(signer, digest, recipients, canonicalize(entity), algorithm)
        logger.debug("Created signed multipart/encrypted", recipients=len(recipients))
        return cls._wrap(ctx, ciphertext)

    @classmethod
    def _wrap(cls, ctx: CryptographyContext, ciphertext: bytes) -> Self:
        encrypted = cls(protocol=ctx.encryption_protocol)
        encrypted.attach(ApplicationPgpEncrypted())
        encrypted.attach(EncryptedContent(ciphertext))
        return encrypted

    def decrypt(self, ctx: CryptographyContext | None = None) -> Message:
        """
        Decrypt the content.

        Returns:
            The decrypted entity. A decrypted multipart/signed is returned
            as a MultipartSigned so it can be verified.

        Raises:
            FormatError: If the container is malformed.
            DecryptionError: If no secret key can decrypt it.
        """
        ctx = registry.resolve(ctx)
        return self._parse(self._decrypt(ctx).data)

    def decrypt_and_verify(
        self,
        ctx: CryptographyContext | None = None,
    ) -> tuple[Message, list[DigitalSignature]]:
        """
        Decrypt the content and verify any signatures.

        Signatures embedded in the OpenPGP message are reported first. When
        there are none and the plaintext is a multipart/signed, its detached
        signature is verified and its signed entity is returned.

        Returns:
            Tuple of (entity, signatures). signatures is empty for unsigned content.
        """
        ctx = registry.resolve(ctx)
        decrypted = self._decrypt(ctx)
        entity = self._parse(decrypted.data)
        if decrypted.signatures:
            return entity, list(decrypted.signatures)
        if isinstance(entity, MultipartSigned):
            return entity.content, entity.verify(ctx)
        return entity, []

    def _decrypt(self, ctx: CryptographyContext) -> DecryptedData:
        protocol = self._protocol()
        control, content = self._children()

        if control.get_content_type() != protocol:
            msg = f"Control part is {control.get_content_type()}, expected {protocol}"
            raise FormatError(msg)
        if not ctx.supports(protocol):
            msg = f"Unsupported multipart/encrypted protocol: {protocol}"
            raise FormatError(msg)

        version = control.get_payload(decode=True) or b""
        if _VERSION_LINE not in (line.strip() for line in version.splitlines()):
            msg = "Control part does not contain 'Version: 1'"
            raise FormatError(msg)

        ciphertext = content.get_payload(decode=True)
        if not ciphertext:
            msg = "Encrypted part is empty"
            raise FormatError(msg)
        return ctx.decrypt(ciphertext)

    def _parse(self, data: bytes) -> Message:
        entity = BytesParser(policy=self.policy).parsebytes(data)
        if entity.get_content_type() == "multipart/signed":
            return MultipartSigned.from_message(entity)
        return entity
