"""
OpenPGP packet framing (RFC 4880 section 4.2).

Only packet headers are parsed here; packet bodies are left to pgpy.
The header parsers return None when more bytes are needed so that the
stream detector can feed them incrementally.
"""

from collections.abc import Iterator
from dataclasses import dataclass

from openpgp_mime.exceptions import FormatError

# Longest header: one tag byte plus a five-byte new-format length.
MAX_HEADER_LENGTH = 6


@dataclass(frozen=True, kw_only=True)
class PacketHeader:
    """
    Attributes:
        tag: Packet tag.
        header_length: Bytes used by the tag and length octets.
        body_length: Length of the (first) body chunk, None if indeterminate.
        partial: True if more body chunks follow.
    """

    tag: int
    header_length: int
    body_length: int | None
    partial: bool = False


def is_packet_start(first_byte: int) -> bool:
    return (first_byte & 0x80) == 0x80


def parse_packet_header(data: bytes | bytearray) -> PacketHeader | None:
    """
    Parse a packet header.

    Args:
        data: Bytes starting at the packet tag.

    Returns:
        The header, or None if data ends before the header does.

    Raises:
        FormatError: If the first byte is not a packet tag.
    """
    if not data:
        return None

    first_byte = data[0]

    if _is_new_format_packet(first_byte):
        parsed = parse_body_length(data[1:])
        if parsed is None:
            return None
        body_length, length_bytes, partial = parsed
        return PacketHeader(
            tag=first_byte & 0x3F,
            header_length=1 + length_bytes,
            body_length=body_length,
            partial=partial,
        )

    if _is_old_format_packet(first_byte):
        length_type = first_byte & 0x03
        parsed_old = _parse_old_format_length(data[1:], length_type)
        if parsed_old is None:
            return None
        body_length, length_bytes = parsed_old
        return PacketHeader(
            tag=(first_byte & 0x3C) >> 2,
            header_length=1 + length_bytes,
            body_length=body_length,
        )

    msg = f"Invalid packet header: 0x{first_byte:02x}"
    raise FormatError(msg)


def parse_body_length(data: bytes | bytearray) -> tuple[int, int, bool] | None:
    """
    Parse new-format length octets.

    Also used for the length that follows each partial body chunk.

    Returns:
        Tuple of (body_length, length_bytes, partial), or None if incomplete.
    """
    if not data:
        return None

    first_byte = data[0]

    if first_byte < 192:
        return first_byte, 1, False

    if first_byte < 224:
        if len(data) < 2:
            return None
        length = ((first_byte - 192) << 8) + data[1] + 192
        return length, 2, False

    if first_byte == 255:
        if len(data) < 5:
            return None
        length = int.from_bytes(data[1:5], "big")
        return length, 5, False

    return 1 << (first_byte & 0x1F), 1, True


def iter_packets(data: bytes | bytearray) -> Iterator[tuple[int, bytes]]:
    """
    Split a buffer of binary OpenPGP packets.

    Yields:
        Tuple of (tag, raw packet bytes including the header).

    Raises:
        FormatError: If a header is invalid or a packet is truncated.
    """
    offset = 0
    while offset < len(data):
        start = offset
        header = parse_packet_header(data[offset : offset + MAX_HEADER_LENGTH])
        if header is None:
            msg = "Truncated packet header"
            raise FormatError(msg, offset=offset)

        if header.body_length is None:
            yield header.tag, bytes(data[start:])
            return

        offset += header.header_length + header.body_length
        partial = header.partial
        while partial:
            parsed = parse_body_length(data[offset : offset + 5])
            if parsed is None:
                msg = "Truncated partial body length"
                raise FormatError(msg, offset=offset)
            body_length, length_bytes, partial = parsed
            offset += length_bytes + body_length

        if offset > len(data):
            msg = "Truncated packet body"
            raise FormatError(msg, offset=start, tag=header.tag)
        yield header.tag, bytes(data[start:offset])


def _is_new_format_packet(first_byte: int) -> bool:
    return (first_byte & 0xC0) == 0xC0


def _is_old_format_packet(first_byte: int) -> bool:
    return (first_byte & 0x80) == 0x80


def _parse_old_format_length(data: bytes | bytearray, length_type: int) -> tuple[int | None, int] | None:
    if length_type == 0:
        if len(data) < 1:
            return None
        return data[0], 1

    if length_type == 1:
        if len(data) < 2:
            return None
        return int.from_bytes(data[:2], "big"), 2

    if length_type == 2:
        if len(data) < 4:
            return None
        return int.from_bytes(data[:4], "big"), 4

    # Indeterminate length, the packet runs to the end of the stream
    return None, 0
