"""
Canonical form of MIME entities for signing (RFC 3156 section 5).

The bytes that are signed must be exactly the bytes the receiver sees, so
8bit and binary parts are re-encoded for 7bit transport and line endings are
CRLF.
"""

from email import encoders
from email.generator import BytesGenerator
from email.message import Message
from io import BytesIO

from openpgp_mime.exceptions import NullArgumentError
from openpgp_mime.filters.unix2dos import Unix2DosFilter

_UNSAFE_ENCODINGS = ("8bit", "binary")


def prepare(entity: Message) -> Message:
    """
    Re-encode 8bit and binary leaf parts as quoted-printable, in place.

    Returns:
        The same entity.
    """
    if entity is None:
        raise NullArgumentError("entity")
    for part in entity.walk():
        if part.is_multipart():
            continue
        encoding = str(part.get("Content-Transfer-Encoding", "")).strip().lower()
        if encoding not in _UNSAFE_ENCODINGS:
            continue
        payload = part.get_payload(decode=True)
        del part["Content-Transfer-Encoding"]
        part.set_payload(payload)
        encoders.encode_quopri(part)
    return entity


def canonicalize(entity: Message) -> bytes:
    """
    Serialize an entity with CRLF line endings.

    Args:
        entity: The MIME entity, headers included.

    Returns:
        The canonical bytes.
    """
    if entity is None:
        raise NullArgumentError("entity")
    buffer = BytesIO()
    policy = entity.policy.clone(linesep="\r\n")
    BytesGenerator(buffer, mangle_from_=False, policy=policy).flatten(entity)
    return Unix2DosFilter().flush(buffer.getvalue())
