"""
pgpy key wrappers.

Each wrapper pairs a key (primary or subkey) with the primary key of its ring,
since user ids and preferences live on the primary.
"""

from dataclasses import dataclass
from datetime import datetime

import pgpy
from pgpy.constants import KeyFlags

from openpgp_mime.crypto.algorithms import get_encryption_algorithm, get_public_key_algorithm
from openpgp_mime.exceptions import ArgumentOutOfRangeError
from openpgp_mime.models.algorithms import EncryptionAlgorithm, PublicKeyAlgorithm

_ENCRYPTION_FLAGS = {KeyFlags.EncryptCommunications, KeyFlags.EncryptStorage}


@dataclass(frozen=True)
class PgpyPublicKey:
    """Wrapper around pgpy.PGPKey to implement the PublicKey protocol."""

    _key: pgpy.PGPKey
    _ring: pgpy.PGPKey

    @property
    def key_id(self) -> str:
        return str(self._key.fingerprint.keyid)

    @property
    def fingerprint(self) -> str:
        return str(self._key.fingerprint).replace(" ", "")

    @property
    def algorithm(self) -> PublicKeyAlgorithm:
        try:
            return get_public_key_algorithm(int(self._key.key_algorithm))
        except ArgumentOutOfRangeError:
            return PublicKeyAlgorithm.NONE

    @property
    def created(self) -> datetime:
        return self._key.created

    @property
    def expires_at(self) -> datetime | None:
        return self._key.expires_at

    @property
    def is_expired(self) -> bool:
        return self._key.is_expired

    @property
    def is_master(self) -> bool:
        return self._key.is_primary

    @property
    def can_sign(self) -> bool:
        usage = self._usage()
        if usage:
            return KeyFlags.Sign in usage
        return self.algorithm.can_sign

    @property
    def can_encrypt(self) -> bool:
        usage = self._usage()
        if usage:
            return bool(_ENCRYPTION_FLAGS & usage)
        return self.algorithm.can_encrypt

    @property
    def user_ids(self) -> list[str]:
        return [uid.userid for uid in self._ring.userids if uid.is_uid]

    @property
    def emails(self) -> list[str]:
        return [uid.email for uid in self._ring.userids if uid.is_uid and uid.email]

    @property
    def cipher_preferences(self) -> tuple[EncryptionAlgorithm, ...]:
        """Ciphers from the primary user id's self-signature, in preference order."""
        uid = next(iter(self._ring.userids), None)
        if uid is None or uid.selfsig is None:
            return ()
        preferences = (get_encryption_algorithm(cipher) for cipher in uid.selfsig.cipherprefs)
        return tuple(algorithm for algorithm in preferences if algorithm is not None)

    @property
    def pgpy_key(self) -> pgpy.PGPKey:
        return self._key

    @property
    def pgpy_ring(self) -> pgpy.PGPKey:
        return self._ring

    def _usage(self) -> set[KeyFlags]:
        if self._key.is_primary:
            uid = next(iter(self._key.userids), None)
            if uid is None or uid.selfsig is None:
                return set()
            return set(uid.selfsig.key_flags)
        binding = next(iter(self._key.self_signatures), None)
        return set(binding.key_flags) if binding is not None else set()


@dataclass(frozen=True)
class PgpySecretKey(PgpyPublicKey):
    """Wrapper around a secret pgpy.PGPKey to implement the SecretKey protocol."""

    @property
    def is_protected(self) -> bool:
        return self._ring.is_protected

    @property
    def public_key(self) -> PgpyPublicKey:
        public_ring = self._ring.pubkey
        if self._key.is_primary:
            return PgpyPublicKey(public_ring, public_ring)
        return PgpyPublicKey(public_ring.subkeys[self.key_id], public_ring)


def iter_ring(ring: pgpy.PGPKey) -> list[pgpy.PGPKey]:
    """Primary key followed by its subkeys."""
    return [ring, *ring.subkeys.values()]
