"""
Sign and encrypt whole email messages in place.

The message's body (its Content-* headers and payload) becomes the protected
entity; routing headers such as From, To and Subject stay on the outer
message.
"""

from email.message import Message

from openpgp_mime.core import registry
from openpgp_mime.crypto.protocol import CryptographyContext
from openpgp_mime.exceptions import InvalidStateError, NullArgumentError
from openpgp_mime.mime.multipart import MultipartEncrypted, MultipartSigned
from openpgp_mime.models.address import MailboxAddress, parse_addresses
from openpgp_mime.models.algorithms import DigestAlgorithm, EncryptionAlgorithm

_RECIPIENT_HEADERS = ("To", "Cc", "Bcc")


def sign_message(
    message: Message,
    digest: DigestAlgorithm,
    ctx: CryptographyContext | None = None,
) -> Message:
    """
    Replace the body of a message with a multipart/signed.

    The signer is the Sender, or else the single From address.

    Returns:
        The same message.

    Raises:
        InvalidStateError: If the message has no body or no signer.
    """
    _check_body(message)
    signer = _get_signer(message)
    signed = MultipartSigned.create(signer, digest, _body_entity(message), registry.resolve(ctx))
    _replace_body(message, signed)
    return message


def encrypt_message(
    message: Message,
    ctx: CryptographyContext | None = None,
    algorithm: EncryptionAlgorithm | None = None,
) -> Message:
    """
    Replace the body of a message with a multipart/encrypted.

    Recipients are taken from To, Cc and Bcc.

    Raises:
        InvalidStateError: If the message has no body or no recipients.
    """
    _check_body(message)
    recipients = _get_recipients(message)
    encrypted = MultipartEncrypted.encrypt(recipients, _body_entity(message), registry.resolve(ctx), algorithm)
    _replace_body(message, encrypted)
    return message


def sign_and_encrypt_message(
    message: Message,
    digest: DigestAlgorithm,
    ctx: CryptographyContext | None = None,
    algorithm: EncryptionAlgorithm | None = None,
) -> Message:
    """
    Replace the body of a message with a signed multipart/encrypted.

    Raises:
        InvalidStateError: If the message has no body, signer or recipients.
    """
    _check_body(message)
    signer = _get_signer(message)
    recipients = _get_recipients(message)
    encrypted = MultipartEncrypted.sign_and_encrypt(
        signer, digest, recipients, _body_entity(message), registry.resolve(ctx), algorithm
    )
    _replace_body(message, encrypted)
    return message


def _check_body(message: Message) -> None:
    if message is None:
        raise NullArgumentError("message")
    if not message.get_payload():
        msg = "Message has no body"
        raise InvalidStateError(msg)


def _get_signer(message: Message) -> MailboxAddress:
    senders = parse_addresses(message.get_all("Sender", []))
    if senders:
        return senders[0]
    authors = parse_addresses(message.get_all("From", []))
    if len(authors) != 1:
        msg = "Message needs a Sender or a single From address to sign"
        raise InvalidStateError(msg)
    return authors[0]


def _get_recipients(message: Message) -> list[MailboxAddress]:
    recipients: dict[str, MailboxAddress] = {}
    for header in _RECIPIENT_HEADERS:
        for address in parse_addresses(message.get_all(header, [])):
            recipients.setdefault(address.address.casefold(), address)
    if not recipients:
        msg = "Message has no recipients to encrypt to"
        raise InvalidStateError(msg)
    return list(recipients.values())


def _body_entity(message: Message) -> Message:
    entity = Message(policy=message.policy)
    for name, value in message.raw_items():
        if name.lower().startswith("content-"):
            entity.set_raw(name, value)
    entity.set_payload(message.get_payload())
    entity.preamble = message.preamble
    entity.epilogue = message.epilogue
    return entity


def _replace_body(message: Message, container: Message) -> None:
    for name in {name for name in message.keys() if name.lower().startswith("content-")}:
        del message[name]
    for name, value in container.raw_items():
        if name.lower() != "mime-version":
            message.set_raw(name, value)
    if "MIME-Version" not in message:
        message["MIME-Version"] = "1.0"
    message.set_payload(container.get_payload())
    message.preamble = None
    message.epilogue = None
