"""
Algorithm identifiers.

Values follow the OpenPGP registry (RFC 4880 section 9) where one exists.
"""

from enum import IntEnum


class DigestAlgorithm(IntEnum):
    """Message digest algorithms."""

    NONE = 0
    MD5 = 1
    SHA1 = 2
    RIPEMD160 = 3
    DOUBLE_SHA = 4
    MD2 = 5
    TIGER192 = 6
    HAVAL5_160 = 7
    SHA256 = 8
    SHA384 = 9
    SHA512 = 10
    SHA224 = 11
    # No OpenPGP identifier
    MD4 = 301


class EncryptionAlgorithm(IntEnum):
    """Symmetric encryption algorithms."""

    IDEA = 1
    TRIPLE_DES = 2
    CAST5 = 3
    BLOWFISH = 4
    AES128 = 7
    AES192 = 8
    AES256 = 9
    TWOFISH = 10
    CAMELLIA128 = 11
    CAMELLIA192 = 12
    CAMELLIA256 = 13
    # No OpenPGP identifiers
    DES = 101
    RC2_40 = 102
    RC2_64 = 103
    RC2_128 = 104

    @property
    def key_size(self) -> int:
        """Get key size in bytes for this algorithm."""
        match self:
            case self.RC2_40:
                return 5
            case self.RC2_64 | self.DES:
                return 8
            case (
                self.AES128
                | self.CAST5
                | self.BLOWFISH
                | self.CAMELLIA128
                | self.IDEA
                | self.RC2_128
            ):
                return 16
            case self.AES192 | self.TRIPLE_DES | self.CAMELLIA192:
                return 24
            case self.AES256 | self.TWOFISH | self.CAMELLIA256:
                return 32
            case _:
                return 0

    @property
    def is_rc2(self) -> bool:
        return self in (self.RC2_40, self.RC2_64, self.RC2_128)


class PublicKeyAlgorithm(IntEnum):
    """OpenPGP public key algorithm identifiers."""

    NONE = 0
    RSA_GENERAL = 1
    RSA_ENCRYPT = 2
    RSA_SIGN = 3
    ELGAMAL_ENCRYPT = 16
    DSA = 17
    ELLIPTIC_CURVE = 18
    ELLIPTIC_CURVE_DSA = 19
    ELGAMAL_GENERAL = 20
    DIFFIE_HELLMAN = 21
    EDWARDS_CURVE_DSA = 22

    @property
    def can_sign(self) -> bool:
        match self:
            case (
                self.RSA_GENERAL
                | self.RSA_SIGN
                | self.DSA
                | self.ELLIPTIC_CURVE_DSA
                | self.ELGAMAL_GENERAL
                | self.EDWARDS_CURVE_DSA
            ):
                return True
            case _:
                return False

    @property
    def can_encrypt(self) -> bool:
        match self:
            case (
                self.RSA_GENERAL
                | self.RSA_ENCRYPT
                | self.ELGAMAL_ENCRYPT
                | self.ELLIPTIC_CURVE
                | self.ELGAMAL_GENERAL
                | self.DIFFIE_HELLMAN
            ):
                return True
            case _:
                return False
