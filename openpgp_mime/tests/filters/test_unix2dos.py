import pytest

from openpgp_mime.filters.base import PassThroughFilter, apply_filters
from openpgp_mime.filters.unix2dos import Unix2DosFilter


def test_converts_bare_line_feeds() -> None:
    assert Unix2DosFilter().flush(b"one\ntwo\n") == b"one\r\ntwo\r\n"


def test_keeps_existing_crlf() -> None:
    assert Unix2DosFilter().flush(b"one\r\ntwo\nthree\r\n") == b"one\r\ntwo\r\nthree\r\n"


def test_crlf_split_across_chunks() -> None:
    mime_filter = Unix2DosFilter()

    output = mime_filter.filter(b"one\r") + mime_filter.filter(b"\ntwo\n") + mime_filter.flush()

    assert output == b"one\r\ntwo\r\n"


@pytest.mark.parametrize("chunk_size", [1, 2, 3, 7])
def test_output_does_not_depend_on_chunking(chunk_size: int) -> None:
    data = b"a\r\nb\nc\r\r\n\n\rd\n"
    chunks = [data[i : i + chunk_size] for i in range(0, len(data), chunk_size)]

    assert apply_filters(chunks, Unix2DosFilter()) == Unix2DosFilter().flush(data)


def test_reset_forgets_pending_cr() -> None:
    mime_filter = Unix2DosFilter()
    mime_filter.filter(b"one\r")

    mime_filter.reset()

    assert mime_filter.flush(b"\n") == b"\r\n"


def test_pass_through_filter_returns_input() -> None:
    assert apply_filters([b"a\n", b"b"], PassThroughFilter()) == b"a\nb"
