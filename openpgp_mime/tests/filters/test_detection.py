import io

import pgpy
import pytest

from openpgp_mime.filters.detection import OpenPgpDataType, OpenPgpDetectionFilter, iter_blocks, scan


def _scan_in_chunks(data: bytes, chunk_size: int) -> OpenPgpDetectionFilter:
    detector = OpenPgpDetectionFilter()
    for start in range(0, len(data), chunk_size):
        assert detector.filter(data[start : start + chunk_size]) == data[start : start + chunk_size]
    detector.flush()
    return detector


def _result(detector: OpenPgpDetectionFilter) -> tuple[OpenPgpDataType, int | None, int | None]:
    return detector.data_type, detector.begin_offset, detector.end_offset


def _armored(obj: object, *, crlf: bool = False) -> bytes:
    text = str(obj).strip() + "\n"
    if crlf:
        text = text.replace("\n", "\r\n")
    return text.encode("ascii")


def _signed_cleartext(key: pgpy.PGPKey) -> pgpy.PGPMessage:
    message = pgpy.PGPMessage.new("Signed text\n", cleartext=True)
    message |= key.sign(message)
    return message


def test_detects_armored_public_key(alice_key: pgpy.PGPKey) -> None:
    prefix = b"Here is my key:\n\n"
    block = _armored(alice_key.pubkey)

    detector = scan(prefix + block + b"\nthanks\n")

    assert _result(detector) == (OpenPgpDataType.PUBLIC_KEY, len(prefix), len(prefix) + len(block))
    assert detector.is_complete


def test_detects_armored_private_key(alice_key: pgpy.PGPKey) -> None:
    detector = scan(_armored(alice_key))

    assert detector.data_type is OpenPgpDataType.PRIVATE_KEY


def test_detects_armored_signature(alice_key: pgpy.PGPKey) -> None:
    detector = scan(_armored(alice_key.sign(b"data")))

    assert detector.data_type is OpenPgpDataType.SIGNATURE


def test_detects_armored_message() -> None:
    detector = scan(_armored(pgpy.PGPMessage.new(b"data")))

    assert detector.data_type is OpenPgpDataType.MESSAGE


def test_signed_message_ends_at_signature_marker(alice_key: pgpy.PGPKey) -> None:
    block = _armored(_signed_cleartext(alice_key))

    detector = scan(block + b"trailing text\n")

    assert _result(detector) == (OpenPgpDataType.SIGNED_MESSAGE, 0, len(block))


def test_end_marker_without_final_newline(alice_key: pgpy.PGPKey) -> None:
    block = _armored(alice_key.pubkey).rstrip(b"\n")

    detector = scan(block)

    assert detector.end_offset == len(block)


def test_unterminated_block_is_incomplete(alice_key: pgpy.PGPKey) -> None:
    block = _armored(alice_key.pubkey)

    detector = scan(block[: len(block) // 2])

    assert detector.data_type is OpenPgpDataType.PUBLIC_KEY
    assert detector.begin_offset == 0
    assert detector.end_offset is None
    assert not detector.is_complete


def test_plain_text_is_not_openpgp() -> None:
    detector = scan(b"Just a normal email body.\n-----BEGIN NOTHING-----\n")

    assert _result(detector) == (OpenPgpDataType.NONE, None, None)


def test_marker_must_be_whole_line() -> None:
    detector = scan(b"quoted: -----BEGIN PGP MESSAGE-----\n")

    assert detector.data_type is OpenPgpDataType.NONE


@pytest.mark.parametrize("chunk_size", [1, 3, 64])
def test_armored_result_does_not_depend_on_chunking(alice_key: pgpy.PGPKey, chunk_size: int) -> None:
    data = b"prefix\r\n" + _armored(alice_key.pubkey, crlf=True) + b"suffix\r\n"

    assert _result(_scan_in_chunks(data, chunk_size)) == _result(scan(data))


@pytest.mark.parametrize("chunk_size", [1, 5, 100])
def test_binary_result_does_not_depend_on_chunking(bob_key: pgpy.PGPKey, chunk_size: int) -> None:
    data = bytes(bob_key.pubkey)

    assert _result(_scan_in_chunks(data, chunk_size)) == (OpenPgpDataType.PUBLIC_KEY, 0, len(data))


def test_detects_binary_private_key(alice_key: pgpy.PGPKey) -> None:
    data = bytes(alice_key)

    assert _result(scan(data)) == (OpenPgpDataType.PRIVATE_KEY, 0, len(data))


def test_detects_binary_signature(alice_key: pgpy.PGPKey) -> None:
    data = bytes(alice_key.sign(b"data"))

    assert _result(scan(data)) == (OpenPgpDataType.SIGNATURE, 0, len(data))


def test_binary_block_ends_before_non_packet_byte(alice_key: pgpy.PGPKey) -> None:
    data = bytes(alice_key.pubkey)

    detector = scan(data + b"\x00trailing")

    assert detector.end_offset == len(data)


def test_truncated_binary_packet_keeps_last_complete_packet(alice_key: pgpy.PGPKey) -> None:
    data = bytes(alice_key.pubkey)

    detector = scan(data[:-1])

    assert detector.data_type is OpenPgpDataType.PUBLIC_KEY
    assert detector.end_offset is not None
    assert detector.end_offset < len(data) - 1


def test_reset_clears_state(alice_key: pgpy.PGPKey) -> None:
    detector = OpenPgpDetectionFilter()
    detector.flush(_armored(alice_key.pubkey))

    detector.reset()
    detector.flush(b"nothing here\n")

    assert _result(detector) == (OpenPgpDataType.NONE, None, None)


def test_reset_allows_scanning_another_block(alice_key: pgpy.PGPKey, bob_key: pgpy.PGPKey) -> None:
    detector = OpenPgpDetectionFilter()
    detector.flush(b"prefix\n" + _armored(bob_key.pubkey))
    data = b"xx\n" + _armored(alice_key)

    detector.reset()
    for start in range(len(data)):
        detector.filter(data[start : start + 1])
    detector.flush()

    assert _result(detector) == (OpenPgpDataType.PRIVATE_KEY, 3, len(data))


def test_non_ascii_text_is_not_binary_openpgp() -> None:
    detector = scan("été\n".encode())

    assert _result(detector) == (OpenPgpDataType.NONE, None, None)


@pytest.mark.parametrize("chunk_size", [1, 7, 4096])
def test_detects_armored_key_after_non_ascii_line(alice_key: pgpy.PGPKey, chunk_size: int) -> None:
    prefix = "Émile's key:\n".encode()
    block = _armored(alice_key.pubkey)

    detector = _scan_in_chunks(prefix + block, chunk_size)

    assert _result(detector) == (OpenPgpDataType.PUBLIC_KEY, len(prefix), len(prefix) + len(block))


def test_scan_reads_streams(alice_key: pgpy.PGPKey) -> None:
    data = _armored(alice_key.pubkey)

    detector = scan(io.BytesIO(data), chunk_size=7)

    assert _result(detector) == (OpenPgpDataType.PUBLIC_KEY, 0, len(data))


def test_iter_blocks_yields_each_block(alice_key: pgpy.PGPKey, bob_key: pgpy.PGPKey) -> None:
    first = _armored(alice_key.pubkey)
    second = _armored(bob_key.sign(b"data"))

    blocks = list(iter_blocks(b"intro\n" + first + b"middle\n" + second + b"outro\n"))

    assert blocks == [(OpenPgpDataType.PUBLIC_KEY, first), (OpenPgpDataType.SIGNATURE, second)]


def test_iter_blocks_on_plain_text_yields_nothing() -> None:
    assert list(iter_blocks(b"hello\n")) == []
