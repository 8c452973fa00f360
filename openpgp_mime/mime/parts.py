"""
Leaf MIME parts used by PGP/MIME containers (RFC 3156).
"""

from email.encoders import encode_7or8bit, encode_base64
from email.mime.application import MIMEApplication


class ApplicationPgpSignature(MIMEApplication):
    """application/pgp-signature part holding a detached signature."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data, "pgp-signature", encode_7or8bit, name="signature.asc")
        self["Content-Description"] = "OpenPGP digital signature"


class ApplicationPgpEncrypted(MIMEApplication):
    """application/pgp-encrypted control part of a multipart/encrypted."""

    VERSION = b"Version: 1\n"

    def __init__(self) -> None:
        super().__init__(self.VERSION, "pgp-encrypted", encode_7or8bit)
        self["Content-Description"] = "PGP/MIME version identification"


class EncryptedContent(MIMEApplication):
    """application/octet-stream part holding the armored ciphertext."""

    def __init__(self, data: bytes) -> None:
        super().__init__(data, "octet-stream", encode_7or8bit, name="encrypted.asc")
        self["Content-Description"] = "OpenPGP encrypted message"
        self["Content-Disposition"] = 'inline; filename="encrypted.asc"'


class ApplicationPgpKeys(MIMEApplication):
    """application/pgp-keys part holding exported public keys."""

    def __init__(self, data: bytes) -> None:
        encoder = encode_7or8bit if data.isascii() else encode_base64
        super().__init__(data, "pgp-keys", encoder)

    @property
    def content(self) -> bytes:
        return self.get_payload(decode=True)
