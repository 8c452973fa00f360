"""
Mailbox addresses used for key resolution.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from email.utils import formataddr, getaddresses


@dataclass(frozen=True, kw_only=True)
class MailboxAddress:
    """
    A display name plus an email address.

    Attributes:
        name: Display name, may be empty.
        address: The addr-spec, e.g. ``alice@example.com``.
    """

    name: str = ""
    address: str

    def __post_init__(self) -> None:
        if not self.address:
            msg = "address must not be empty"
            raise ValueError(msg)

    @classmethod
    def parse(cls, text: str) -> "MailboxAddress":
        """
        Parse a single address such as ``Alice <alice@example.com>``.

        Raises:
            ValueError: If text holds no addr-spec.
        """
        addresses = parse_addresses([text])
        if len(addresses) != 1:
            msg = f"Expected exactly one address: {text!r}"
            raise ValueError(msg)
        return cls(name=addresses[0].name, address=addresses[0].address)

    def matches(self, email: str) -> bool:
        """Case-insensitive comparison against a user id email."""
        return self.address.casefold() == email.casefold()

    def __str__(self) -> str:
        return formataddr((self.name, self.address))


@dataclass(frozen=True, kw_only=True)
class SecureMailboxAddress(MailboxAddress):
    """
    A mailbox pinned to a specific key.

    Attributes:
        fingerprint: Full fingerprint or key id; matched as a suffix.
    """

    fingerprint: str

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.fingerprint:
            msg = "fingerprint must not be empty"
            raise ValueError(msg)

    def matches_fingerprint(self, fingerprint: str) -> bool:
        pinned = _normalize_fingerprint(self.fingerprint)
        return _normalize_fingerprint(fingerprint).endswith(pinned)


def parse_addresses(values: Iterable[str]) -> list[MailboxAddress]:
    """
    Parse header values (To, Cc, From...) into mailbox addresses.

    Group syntax and entries without an addr-spec are skipped.
    """
    return [
        MailboxAddress(name=name, address=address)
        for name, address in getaddresses([str(value) for value in values])
        if address
    ]


def _normalize_fingerprint(value: str) -> str:
    return value.replace(" ", "").upper()
