"""
Mappings between algorithm identifiers and pgpy's native tags.

micalg names follow RFC 3156 section 5 (``pgp-`` prefix, lowercase).
"""

from pgpy.constants import HashAlgorithm, SymmetricKeyAlgorithm

from openpgp_mime.exceptions import (
    ArgumentOutOfRangeError,
    InvalidArgumentError,
    NotSupportedError,
    NullArgumentError,
)
from openpgp_mime.models.algorithms import DigestAlgorithm, EncryptionAlgorithm, PublicKeyAlgorithm

_DIGEST_NAMES: dict[DigestAlgorithm, str] = {
    DigestAlgorithm.MD5: "pgp-md5",
    DigestAlgorithm.SHA1: "pgp-sha1",
    DigestAlgorithm.RIPEMD160: "pgp-ripemd160",
    DigestAlgorithm.MD2: "pgp-md2",
    DigestAlgorithm.TIGER192: "pgp-tiger192",
    DigestAlgorithm.HAVAL5_160: "pgp-haval-5-160",
    DigestAlgorithm.SHA256: "pgp-sha256",
    DigestAlgorithm.SHA384: "pgp-sha384",
    DigestAlgorithm.SHA512: "pgp-sha512",
    DigestAlgorithm.SHA224: "pgp-sha224",
    DigestAlgorithm.MD4: "pgp-md4",
}
_DIGESTS_BY_NAME = {name: digest for digest, name in _DIGEST_NAMES.items()}

_HASH_ALGORITHMS: dict[DigestAlgorithm, HashAlgorithm] = {
    DigestAlgorithm.MD5: HashAlgorithm.MD5,
    DigestAlgorithm.SHA1: HashAlgorithm.SHA1,
    DigestAlgorithm.RIPEMD160: HashAlgorithm.RIPEMD160,
    DigestAlgorithm.SHA256: HashAlgorithm.SHA256,
    DigestAlgorithm.SHA384: HashAlgorithm.SHA384,
    DigestAlgorithm.SHA512: HashAlgorithm.SHA512,
    DigestAlgorithm.SHA224: HashAlgorithm.SHA224,
}

# OpenPGP hash tags 1-11
_MAX_HASH_TAG = DigestAlgorithm.SHA224.value

_CIPHERS: dict[EncryptionAlgorithm, SymmetricKeyAlgorithm] = {
    EncryptionAlgorithm.TRIPLE_DES: SymmetricKeyAlgorithm.TripleDES,
    EncryptionAlgorithm.CAST5: SymmetricKeyAlgorithm.CAST5,
    EncryptionAlgorithm.BLOWFISH: SymmetricKeyAlgorithm.Blowfish,
    EncryptionAlgorithm.AES128: SymmetricKeyAlgorithm.AES128,
    EncryptionAlgorithm.AES192: SymmetricKeyAlgorithm.AES192,
    EncryptionAlgorithm.AES256: SymmetricKeyAlgorithm.AES256,
    EncryptionAlgorithm.CAMELLIA128: SymmetricKeyAlgorithm.Camellia128,
    EncryptionAlgorithm.CAMELLIA192: SymmetricKeyAlgorithm.Camellia192,
    EncryptionAlgorithm.CAMELLIA256: SymmetricKeyAlgorithm.Camellia256,
}


def get_digest_algorithm_name(digest: DigestAlgorithm) -> str:
    """
    Get the micalg parameter value for a digest.

    Raises:
        ArgumentOutOfRangeError: For NONE, DOUBLE_SHA or an unknown value.
    """
    if digest is None:
        raise NullArgumentError("digest")
    try:
        return _DIGEST_NAMES[digest]
    except KeyError:
        msg = f"No micalg name for digest {digest!r}"
        raise ArgumentOutOfRangeError(msg, argument="digest", value=digest) from None


def get_digest_algorithm(name: str) -> DigestAlgorithm:
    """
    Get the digest for a micalg parameter value.

    Raises:
        NullArgumentError: If name is None.
        InvalidArgumentError: If the name is not recognized.
    """
    if name is None:
        raise NullArgumentError("name")
    try:
        return _DIGESTS_BY_NAME[name.strip().lower()]
    except KeyError:
        msg = f"Unknown micalg name: {name}"
        raise InvalidArgumentError(msg, argument="name") from None


def get_hash_algorithm(digest: DigestAlgorithm) -> HashAlgorithm:
    """
    Get pgpy's hash algorithm for a digest.

    Raises:
        NotSupportedError: For digests the engine cannot compute.
        ArgumentOutOfRangeError: For NONE or an unknown value.
    """
    if digest is None:
        raise NullArgumentError("digest")
    try:
        digest = DigestAlgorithm(digest)
    except ValueError:
        digest = DigestAlgorithm.NONE
    if digest is DigestAlgorithm.NONE:
        msg = "Invalid digest algorithm"
        raise ArgumentOutOfRangeError(msg, argument="digest", value=digest)
    if digest not in _HASH_ALGORITHMS:
        msg = f"Digest algorithm {digest.name} is not supported"
        raise NotSupportedError(msg, algorithm=digest.name)
    return _HASH_ALGORITHMS[digest]


def get_digest_algorithm_from_tag(tag: int) -> DigestAlgorithm:
    """
    Map a native OpenPGP hash tag to a digest.

    Raises:
        ArgumentOutOfRangeError: If the tag is not a known hash tag.
    """
    if 1 <= int(tag) <= _MAX_HASH_TAG:
        return DigestAlgorithm(int(tag))
    msg = f"Unknown hash algorithm tag: {tag}"
    raise ArgumentOutOfRangeError(msg, argument="tag", value=tag)


def get_public_key_algorithm(tag: int) -> PublicKeyAlgorithm:
    """
    Map a native OpenPGP public key tag to a public key algorithm.

    Raises:
        ArgumentOutOfRangeError: If the tag is not a known public key tag.
    """
    try:
        algorithm = PublicKeyAlgorithm(int(tag))
    except ValueError:
        algorithm = PublicKeyAlgorithm.NONE
    if algorithm is PublicKeyAlgorithm.NONE:
        msg = f"Unknown public key algorithm tag: {tag}"
        raise ArgumentOutOfRangeError(msg, argument="tag", value=tag)
    return algorithm


def get_cipher(algorithm: EncryptionAlgorithm) -> SymmetricKeyAlgorithm:
    """
    Get pgpy's symmetric algorithm for an encryption algorithm.

    Raises:
        NotSupportedError: For ciphers the engine cannot encrypt with.
        ArgumentOutOfRangeError: For an unknown value.
    """
    if algorithm is None:
        raise NullArgumentError("algorithm")
    try:
        algorithm = EncryptionAlgorithm(algorithm)
    except ValueError:
        msg = f"Invalid encryption algorithm: {algorithm!r}"
        raise ArgumentOutOfRangeError(msg, argument="algorithm", value=algorithm) from None
    if algorithm not in _CIPHERS:
        msg = f"Encryption algorithm {algorithm.name} is not supported"
        raise NotSupportedError(msg, algorithm=algorithm.name)
    return _CIPHERS[algorithm]


def get_encryption_algorithm(cipher: SymmetricKeyAlgorithm) -> EncryptionAlgorithm | None:
    """Map a native cipher tag back to an encryption algorithm, None if unmapped."""
    for algorithm, native in _CIPHERS.items():
        if native == cipher:
            return algorithm
    return None


def validate_default_encryption_algorithm(algorithm: EncryptionAlgorithm) -> EncryptionAlgorithm:
    """
    Raises:
        NullArgumentError: If algorithm is None.
        NotSupportedError: For the RC2 variants.
    """
    if algorithm is None:
        raise NullArgumentError("algorithm")
    algorithm = EncryptionAlgorithm(algorithm)
    if algorithm.is_rc2:
        msg = f"{algorithm.name} cannot be used as the default encryption algorithm"
        raise NotSupportedError(msg, algorithm=algorithm.name)
    return algorithm
