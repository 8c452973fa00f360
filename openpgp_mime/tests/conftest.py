from collections.abc import Callable, Iterator
from typing import Any

import pgpy
import pytest
from pgpy.constants import (
    CompressionAlgorithm,
    HashAlgorithm,
    KeyFlags,
    PubKeyAlgorithm,
    SymmetricKeyAlgorithm,
)

from openpgp_mime.config import OpenPgpConfig
from openpgp_mime.core import registry
from openpgp_mime.crypto.context import OpenPgpContext
from openpgp_mime.crypto.key_store import KeyStore
from openpgp_mime.tests.constants import ALICE, BOB, CAROL, CAROL_PASSPHRASE

_ENCRYPT_USAGE = {KeyFlags.EncryptCommunications, KeyFlags.EncryptStorage}


def _create_key(name: str, email: str, *, with_subkey: bool = False) -> pgpy.PGPKey:
    key = pgpy.PGPKey.new(PubKeyAlgorithm.RSAEncryptOrSign, 2048)
    usage = {KeyFlags.Certify, KeyFlags.Sign}
    if not with_subkey:
        usage |= _ENCRYPT_USAGE
    key.add_uid(
        pgpy.PGPUID.new(name, email=email),
        usage=usage,
        hashes=[
            HashAlgorithm.SHA256,
            HashAlgorithm.SHA384,
            HashAlgorithm.SHA512,
            HashAlgorithm.SHA224,
            HashAlgorithm.SHA1,
        ],
        ciphers=[
            SymmetricKeyAlgorithm.AES256,
            SymmetricKeyAlgorithm.AES192,
            SymmetricKeyAlgorithm.AES128,
            SymmetricKeyAlgorithm.Camellia256,
            SymmetricKeyAlgorithm.Camellia192,
            SymmetricKeyAlgorithm.Camellia128,
        ],
        compression=[
            CompressionAlgorithm.ZLIB,
            CompressionAlgorithm.ZIP,
            CompressionAlgorithm.Uncompressed,
        ],
    )
    if with_subkey:
        subkey = pgpy.PGPKey.new(PubKeyAlgorithm.RSAEncryptOrSign, 2048)
        key.add_subkey(subkey, usage=_ENCRYPT_USAGE)
    return key


@pytest.fixture(scope="session")
def alice_key() -> pgpy.PGPKey:
    """Single RSA key that signs and encrypts."""
    return _create_key(ALICE.name, ALICE.address)


@pytest.fixture(scope="session")
def bob_key() -> pgpy.PGPKey:
    """Signing primary key with a separate encryption subkey."""
    return _create_key(BOB.name, BOB.address, with_subkey=True)


@pytest.fixture(scope="session")
def carol_key() -> pgpy.PGPKey:
    """Passphrase-protected key."""
    key = _create_key(CAROL.name, CAROL.address)
    key.protect(CAROL_PASSPHRASE, SymmetricKeyAlgorithm.AES256, HashAlgorithm.SHA256)
    return key


@pytest.fixture
def key_store(alice_key: pgpy.PGPKey, bob_key: pgpy.PGPKey, carol_key: pgpy.PGPKey) -> KeyStore:
    store = KeyStore()
    for key in (alice_key, bob_key, carol_key):
        store.import_key(key)
    return store


@pytest.fixture
def make_context(key_store: KeyStore) -> Callable[..., OpenPgpContext]:
    def _make(**config: Any) -> OpenPgpContext:
        config.setdefault("passphrase_provider", lambda key: CAROL_PASSPHRASE)
        return OpenPgpContext(key_store, OpenPgpConfig(**config))

    return _make


@pytest.fixture
def context(make_context: Callable[..., OpenPgpContext]) -> OpenPgpContext:
    return make_context()


@pytest.fixture
def default_context(context: OpenPgpContext) -> Iterator[OpenPgpContext]:
    """Register context as the default for the duration of a test."""
    registry.register(lambda: context)
    yield context
    registry.unregister()
