import pytest
from pgpy.constants import HashAlgorithm, SymmetricKeyAlgorithm

from openpgp_mime.crypto.algorithms import (
    get_cipher,
    get_digest_algorithm,
    get_digest_algorithm_from_tag,
    get_digest_algorithm_name,
    get_encryption_algorithm,
    get_hash_algorithm,
    get_public_key_algorithm,
    validate_default_encryption_algorithm,
)
from openpgp_mime.exceptions import (
    ArgumentOutOfRangeError,
    InvalidArgumentError,
    NotSupportedError,
    NullArgumentError,
)
from openpgp_mime.models.algorithms import DigestAlgorithm, EncryptionAlgorithm, PublicKeyAlgorithm


@pytest.mark.parametrize(
    ("digest", "name"),
    [
        (DigestAlgorithm.MD5, "pgp-md5"),
        (DigestAlgorithm.SHA1, "pgp-sha1"),
        (DigestAlgorithm.RIPEMD160, "pgp-ripemd160"),
        (DigestAlgorithm.MD2, "pgp-md2"),
        (DigestAlgorithm.TIGER192, "pgp-tiger192"),
        (DigestAlgorithm.HAVAL5_160, "pgp-haval-5-160"),
        (DigestAlgorithm.SHA256, "pgp-sha256"),
        (DigestAlgorithm.SHA384, "pgp-sha384"),
        (DigestAlgorithm.SHA512, "pgp-sha512"),
        (DigestAlgorithm.SHA224, "pgp-sha224"),
        (DigestAlgorithm.MD4, "pgp-md4"),
    ],
)
def test_digest_algorithm_names_map_both_ways(digest: DigestAlgorithm, name: str) -> None:
    assert get_digest_algorithm_name(digest) == name
    assert get_digest_algorithm(name) is digest


def test_get_digest_algorithm_is_case_insensitive() -> None:
    assert get_digest_algorithm(" PGP-SHA256 ") is DigestAlgorithm.SHA256


@pytest.mark.parametrize("digest", [DigestAlgorithm.NONE, DigestAlgorithm.DOUBLE_SHA])
def test_get_digest_algorithm_name_rejects_unnamed_digests(digest: DigestAlgorithm) -> None:
    with pytest.raises(ArgumentOutOfRangeError):
        get_digest_algorithm_name(digest)


def test_get_digest_algorithm_name_rejects_none() -> None:
    with pytest.raises(NullArgumentError):
        get_digest_algorithm_name(None)  # type: ignore[arg-type]


def test_get_digest_algorithm_rejects_unknown_name() -> None:
    with pytest.raises(InvalidArgumentError, match="Unknown micalg"):
        get_digest_algorithm("pgp-sha3")


def test_get_digest_algorithm_rejects_none() -> None:
    with pytest.raises(NullArgumentError):
        get_digest_algorithm(None)  # type: ignore[arg-type]


def test_get_hash_algorithm_maps_supported_digests() -> None:
    assert get_hash_algorithm(DigestAlgorithm.SHA256) is HashAlgorithm.SHA256
    assert get_hash_algorithm(DigestAlgorithm.SHA1) is HashAlgorithm.SHA1
    assert get_hash_algorithm(DigestAlgorithm.RIPEMD160) is HashAlgorithm.RIPEMD160


@pytest.mark.parametrize(
    "digest",
    [DigestAlgorithm.MD2, DigestAlgorithm.TIGER192, DigestAlgorithm.HAVAL5_160, DigestAlgorithm.MD4],
)
def test_get_hash_algorithm_rejects_unsupported_digests(digest: DigestAlgorithm) -> None:
    with pytest.raises(NotSupportedError):
        get_hash_algorithm(digest)


def test_get_hash_algorithm_rejects_none_digest() -> None:
    with pytest.raises(ArgumentOutOfRangeError):
        get_hash_algorithm(DigestAlgorithm.NONE)


def test_get_hash_algorithm_rejects_unknown_value() -> None:
    with pytest.raises(ArgumentOutOfRangeError):
        get_hash_algorithm(999)  # type: ignore[arg-type]


def test_get_digest_algorithm_from_tag() -> None:
    assert get_digest_algorithm_from_tag(8) is DigestAlgorithm.SHA256
    assert get_digest_algorithm_from_tag(11) is DigestAlgorithm.SHA224


@pytest.mark.parametrize("tag", [0, 12, 301])
def test_get_digest_algorithm_from_tag_rejects_unknown_tags(tag: int) -> None:
    with pytest.raises(ArgumentOutOfRangeError):
        get_digest_algorithm_from_tag(tag)


def test_get_public_key_algorithm() -> None:
    assert get_public_key_algorithm(1) is PublicKeyAlgorithm.RSA_GENERAL
    assert get_public_key_algorithm(22) is PublicKeyAlgorithm.EDWARDS_CURVE_DSA


@pytest.mark.parametrize("tag", [0, 4, 99])
def test_get_public_key_algorithm_rejects_unknown_tags(tag: int) -> None:
    with pytest.raises(ArgumentOutOfRangeError):
        get_public_key_algorithm(tag)


@pytest.mark.parametrize(
    ("algorithm", "cipher"),
    [
        (EncryptionAlgorithm.AES128, SymmetricKeyAlgorithm.AES128),
        (EncryptionAlgorithm.AES256, SymmetricKeyAlgorithm.AES256),
        (EncryptionAlgorithm.TRIPLE_DES, SymmetricKeyAlgorithm.TripleDES),
        (EncryptionAlgorithm.CAST5, SymmetricKeyAlgorithm.CAST5),
        (EncryptionAlgorithm.CAMELLIA256, SymmetricKeyAlgorithm.Camellia256),
    ],
)
def test_get_cipher_maps_both_ways(algorithm: EncryptionAlgorithm, cipher: SymmetricKeyAlgorithm) -> None:
    assert get_cipher(algorithm) is cipher
    assert get_encryption_algorithm(cipher) is algorithm


@pytest.mark.parametrize(
    "algorithm",
    [
        EncryptionAlgorithm.IDEA,
        EncryptionAlgorithm.TWOFISH,
        EncryptionAlgorithm.DES,
        EncryptionAlgorithm.RC2_40,
        EncryptionAlgorithm.RC2_64,
        EncryptionAlgorithm.RC2_128,
    ],
)
def test_get_cipher_rejects_unsupported_ciphers(algorithm: EncryptionAlgorithm) -> None:
    with pytest.raises(NotSupportedError):
        get_cipher(algorithm)


def test_get_cipher_rejects_unknown_value() -> None:
    with pytest.raises(ArgumentOutOfRangeError):
        get_cipher(42)  # type: ignore[arg-type]


def test_get_encryption_algorithm_returns_none_for_unmapped_cipher() -> None:
    assert get_encryption_algorithm(SymmetricKeyAlgorithm.IDEA) is None


def test_validate_default_encryption_algorithm() -> None:
    assert validate_default_encryption_algorithm(EncryptionAlgorithm.AES128) is EncryptionAlgorithm.AES128

    with pytest.raises(NotSupportedError):
        validate_default_encryption_algorithm(EncryptionAlgorithm.RC2_128)
    with pytest.raises(NullArgumentError):
        validate_default_encryption_algorithm(None)  # type: ignore[arg-type]
