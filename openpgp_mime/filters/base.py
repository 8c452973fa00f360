"""
Incremental byte filters.

A filter is fed a stream chunk by chunk through ``filter`` and finished with
``flush``. Output must not depend on how the input was chunked.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable


class MimeFilter(ABC):
    """Base class for incremental byte filters."""

    @abstractmethod
    def filter(self, data: bytes) -> bytes:
        """
        Filter the next chunk of the stream.

        Args:
            data: Next chunk of input.

        Returns:
            Filtered output for this chunk.
        """

    def flush(self, data: bytes = b"") -> bytes:
        """Filter the final chunk and emit any buffered output."""
        return self.filter(data)

    @abstractmethod
    def reset(self) -> None:
        """Return the filter to its initial state."""


class PassThroughFilter(MimeFilter):
    """Filter that returns its input unchanged."""

    def filter(self, data: bytes) -> bytes:
        return data

    def reset(self) -> None:
        pass


def apply_filters(chunks: Iterable[bytes], *filters: MimeFilter) -> bytes:
    """
    Run chunks through a filter chain, flushing at the end.

    Each chunk passes through the filters in order.
    """
    output = bytearray()
    for chunk in chunks:
        for mime_filter in filters:
            chunk = mime_filter.filter(chunk)
        output += chunk

    tail = b""
    for mime_filter in filters:
        tail = mime_filter.flush(tail)
    output += tail
    return bytes(output)
