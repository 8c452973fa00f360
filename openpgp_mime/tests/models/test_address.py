import pytest

from openpgp_mime.models.address import MailboxAddress, SecureMailboxAddress, parse_addresses


def test_mailbox_address_str_formats_display_name() -> None:
    address = MailboxAddress(name="Alice", address="alice@example.com")

    assert str(address) == "Alice <alice@example.com>"


def test_mailbox_address_matches_case_insensitively() -> None:
    address = MailboxAddress(address="Alice@Example.com")

    assert address.matches("alice@example.COM")
    assert not address.matches("bob@example.com")


def test_mailbox_address_rejects_empty_address() -> None:
    with pytest.raises(ValueError, match="address"):
        MailboxAddress(name="Nobody", address="")


def test_mailbox_address_parse_single() -> None:
    address = MailboxAddress.parse("Bob Smith <bob@example.com>")

    assert address.name == "Bob Smith"
    assert address.address == "bob@example.com"


def test_mailbox_address_parse_rejects_multiple() -> None:
    with pytest.raises(ValueError, match="exactly one"):
        MailboxAddress.parse("a@example.com, b@example.com")


def test_parse_addresses_reads_every_header_value() -> None:
    addresses = parse_addresses(["Alice <alice@example.com>, bob@example.com", "carol@example.com"])

    assert [address.address for address in addresses] == [
        "alice@example.com",
        "bob@example.com",
        "carol@example.com",
    ]


def test_parse_addresses_skips_empty_entries() -> None:
    assert parse_addresses(["undisclosed-recipients:;"]) == []


def test_secure_mailbox_address_matches_fingerprint_suffix() -> None:
    address = SecureMailboxAddress(
        address="alice@example.com",
        fingerprint="89ab cdef 0123 4567",
    )

    assert address.matches_fingerprint("0123456789ABCDEF0123456789ABCDEF01234567")
    assert not address.matches_fingerprint("0123456789ABCDEF0123456789ABCDEF76543210")


def test_secure_mailbox_address_requires_fingerprint() -> None:
    with pytest.raises(ValueError, match="fingerprint"):
        SecureMailboxAddress(address="alice@example.com", fingerprint="")
