"""
In-memory key store.

Keys are held as pgpy key rings (a primary key plus its subkeys) indexed by
the primary key's fingerprint. Lookups by mailbox match the email of any
user id on the ring; a SecureMailboxAddress additionally pins the ring by
fingerprint.
"""

from collections.abc import Iterable, Iterator, Sequence
from typing import BinaryIO

import pgpy
import structlog

from openpgp_mime.crypto.keys import PgpyPublicKey, PgpySecretKey, iter_ring
from openpgp_mime.exceptions import (
    FormatError,
    InvalidArgumentError,
    KeyNotFoundError,
    NullArgumentError,
)
from openpgp_mime.filters.detection import OpenPgpDataType, iter_blocks
from openpgp_mime.models.address import MailboxAddress, SecureMailboxAddress

logger = structlog.get_logger(__name__)

_KEY_BLOCKS = (OpenPgpDataType.PUBLIC_KEY, OpenPgpDataType.PRIVATE_KEY)
_ARMOR_PREFIX = b"-----BEGIN PGP "


class KeyStore:
    """
    Public and secret key rings available to a context.

    Example:
        store = KeyStore()
        store.import_keys(armored_public_keys)
        keys = store.get_public_keys([MailboxAddress(address="bob@example.com")])
    """

    def __init__(self) -> None:
        self._public_rings: dict[str, pgpy.PGPKey] = {}
        self._secret_rings: dict[str, pgpy.PGPKey] = {}

    def __len__(self) -> int:
        return len(self._public_rings.keys() | self._secret_rings.keys())

    def import_key(self, key: pgpy.PGPKey) -> None:
        """
        Add a pgpy key ring to the store.

        A secret ring also makes its public half available.

        Raises:
            NullArgumentError: If key is None.
            InvalidArgumentError: If key is a subkey.
        """
        if key is None:
            raise NullArgumentError("key")
        if not key.is_primary:
            msg = "Only primary keys can be imported"
            raise InvalidArgumentError(msg, argument="key")

        fingerprint = _ring_fingerprint(key)
        if key.is_public:
            self._public_rings[fingerprint] = key
        else:
            self._secret_rings[fingerprint] = key
            self._public_rings.setdefault(fingerprint, key.pubkey)
        logger.debug("Imported key", fingerprint=fingerprint, secret=not key.is_public)

    def import_keys(self, data: bytes | str | BinaryIO) -> int:
        """
        Import every key ring found in armored or binary data.

        Returns:
            Number of key rings imported.

        Raises:
            NullArgumentError: If data is None.
            FormatError: If the data holds no readable keys.
        """
        rings = _load_rings(data)
        for ring in rings:
            self.import_key(ring)
        return len(rings)

    def import_secret_keys(self, data: bytes | str | BinaryIO) -> int:
        """
        Import secret key rings.

        Raises:
            InvalidArgumentError: If any ring in the data is a public key.
            FormatError: If the data holds no readable keys.
        """
        rings = _load_rings(data)
        if any(ring.is_public for ring in rings):
            msg = "Data contains public keys, expected secret keys"
            raise InvalidArgumentError(msg, argument="data")
        for ring in rings:
            self.import_key(ring)
        return len(rings)

    def enumerate_public_keys(self, mailbox: MailboxAddress | None = None) -> Iterator[PgpyPublicKey]:
        """
        Yield public keys (primaries and subkeys), optionally filtered by mailbox.
        """
        for ring in self._matching_rings(self._public_rings, mailbox):
            for key in iter_ring(ring):
                yield PgpyPublicKey(key, ring)

    def enumerate_secret_keys(self, mailbox: MailboxAddress | None = None) -> Iterator[PgpySecretKey]:
        """
        Yield secret keys (primaries and subkeys), optionally filtered by mailbox.
        """
        for ring in self._matching_rings(self._secret_rings, mailbox):
            for key in iter_ring(ring):
                yield PgpySecretKey(key, ring)

    def can_sign(self, mailbox: MailboxAddress) -> bool:
        """
        Check for an unexpired secret key able to sign for the mailbox.

        Raises:
            NullArgumentError: If mailbox is None.
        """
        if mailbox is None:
            raise NullArgumentError("mailbox")
        return any(key.can_sign and not key.is_expired for key in self.enumerate_secret_keys(mailbox))

    def can_encrypt(self, mailbox: MailboxAddress) -> bool:
        """
        Check for an unexpired public key able to encrypt to the mailbox.

        Raises:
            NullArgumentError: If mailbox is None.
        """
        if mailbox is None:
            raise NullArgumentError("mailbox")
        return any(key.can_encrypt and not key.is_expired for key in self.enumerate_public_keys(mailbox))

    def get_signing_key(self, mailbox: MailboxAddress) -> PgpySecretKey:
        """
        Get the newest unexpired signing key for a mailbox.

        Raises:
            NullArgumentError: If mailbox is None.
            KeyNotFoundError: If no such key exists.
        """
        if mailbox is None:
            raise NullArgumentError("mailbox")
        candidates = [
            key for key in self.enumerate_secret_keys(mailbox) if key.can_sign and not key.is_expired
        ]
        if not candidates:
            msg = f"No signing key found for {mailbox}"
            raise KeyNotFoundError(msg, identity=str(mailbox))
        return max(candidates, key=lambda key: key.created)

    def get_public_keys(self, mailboxes: Sequence[MailboxAddress]) -> list[PgpyPublicKey]:
        """
        Resolve one encryption key per mailbox.

        The newest unexpired encryption-capable key is picked for each
        mailbox. Keys shared by several mailboxes are returned once.

        Raises:
            NullArgumentError: If mailboxes or one of its items is None.
            InvalidArgumentError: If mailboxes is empty.
            KeyNotFoundError: If a mailbox has no usable key.
        """
        if mailboxes is None:
            raise NullArgumentError("mailboxes")
        if not mailboxes:
            msg = "At least one mailbox is required"
            raise InvalidArgumentError(msg, argument="mailboxes")

        resolved: dict[str, PgpyPublicKey] = {}
        for mailbox in mailboxes:
            if mailbox is None:
                raise NullArgumentError("mailboxes", "mailboxes must not contain None")
            candidates = [
                key for key in self.enumerate_public_keys(mailbox) if key.can_encrypt and not key.is_expired
            ]
            if not candidates:
                msg = f"No encryption key found for {mailbox}"
                raise KeyNotFoundError(msg, identity=str(mailbox))
            key = max(candidates, key=lambda key: key.created)
            resolved.setdefault(key.fingerprint, key)
        return list(resolved.values())

    def find_public_key(self, key_id: str) -> PgpyPublicKey | None:
        """Find a public primary key or subkey by key id."""
        found = _find_in_rings(self._public_rings.values(), key_id)
        return PgpyPublicKey(*found) if found else None

    def find_secret_key(self, key_id: str) -> PgpySecretKey | None:
        """Find a secret primary key or subkey by key id."""
        found = _find_in_rings(self._secret_rings.values(), key_id)
        return PgpySecretKey(*found) if found else None

    def export_keys(
        self,
        keys: Sequence[PgpyPublicKey | MailboxAddress],
        stream: BinaryIO | None = None,
        armor: bool = True,
    ) -> bytes:
        """
        Export the public key rings of keys or mailboxes.

        Args:
            keys: Public keys, or mailboxes whose rings are exported.
            stream: Optional binary stream to also write the result to.
            armor: ASCII-armor the output.

        Returns:
            The exported key data.

        Raises:
            NullArgumentError: If keys is None.
            InvalidArgumentError: If keys is empty.
            KeyNotFoundError: If a mailbox has no public key.
        """
        if keys is None:
            raise NullArgumentError("keys")
        if not keys:
            msg = "At least one key or mailbox is required"
            raise InvalidArgumentError(msg, argument="keys")

        rings: dict[str, pgpy.PGPKey] = {}
        for item in keys:
            if isinstance(item, MailboxAddress):
                matches = list(self._matching_rings(self._public_rings, item))
                if not matches:
                    msg = f"No public key found for {item}"
                    raise KeyNotFoundError(msg, identity=str(item))
                for ring in matches:
                    rings.setdefault(_ring_fingerprint(ring), ring)
            else:
                ring = item.public_key.pgpy_ring if isinstance(item, PgpySecretKey) else item.pgpy_ring
                rings.setdefault(_ring_fingerprint(ring), ring)

        if armor:
            data = "".join(str(ring) for ring in rings.values()).encode("ascii")
        else:
            data = b"".join(bytes(ring) for ring in rings.values())

        if stream is not None:
            stream.write(data)
        logger.debug("Exported keys", count=len(rings), armor=armor)
        return data

    @staticmethod
    def _matching_rings(
        rings: dict[str, pgpy.PGPKey],
        mailbox: MailboxAddress | None,
    ) -> Iterator[pgpy.PGPKey]:
        for ring in rings.values():
            if mailbox is None:
                yield ring
                continue
            if isinstance(mailbox, SecureMailboxAddress):
                if any(mailbox.matches_fingerprint(str(key.fingerprint)) for key in iter_ring(ring)):
                    yield ring
                continue
            if any(uid.email and mailbox.matches(uid.email) for uid in ring.userids):
                yield ring


def _ring_fingerprint(key: pgpy.PGPKey) -> str:
    return str(key.fingerprint).replace(" ", "")


def _find_in_rings(
    rings: Iterable[pgpy.PGPKey],
    key_id: str,
) -> tuple[pgpy.PGPKey, pgpy.PGPKey] | None:
    if key_id is None:
        raise NullArgumentError("key_id")
    wanted = key_id.replace(" ", "").upper()
    for ring in rings:
        for key in iter_ring(ring):
            if str(key.fingerprint).replace(" ", "").upper().endswith(wanted):
                return key, ring
    return None


def _load_rings(data: bytes | str | BinaryIO) -> list[pgpy.PGPKey]:
    """
    Load every primary key from armored or binary key data.

    Raises:
        NullArgumentError: If data is None.
        FormatError: If nothing can be loaded.
    """
    if data is None:
        raise NullArgumentError("data")
    if isinstance(data, str):
        data = data.encode("utf-8")
    elif not isinstance(data, (bytes, bytearray)):
        data = data.read()
    data = bytes(data)

    blobs = [
        block.decode("utf-8", errors="replace") if block.startswith(_ARMOR_PREFIX) else block
        for data_type, block in iter_blocks(data)
        if data_type in _KEY_BLOCKS
    ]

    rings: dict[str, pgpy.PGPKey] = {}
    for blob in blobs:
        try:
            key, others = pgpy.PGPKey.from_blob(blob)
        except Exception as e:
            msg = f"Failed to load key data: {e}"
            raise FormatError(msg) from e
        for candidate in (key, *others.values()):
            if candidate.is_primary:
                rings.setdefault(_ring_fingerprint(candidate) + str(candidate.is_public), candidate)

    if not rings:
        msg = "No keys found in key data"
        raise FormatError(msg)
    return list(rings.values())
