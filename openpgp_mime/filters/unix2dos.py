"""
Line ending canonicalization.
"""

import re

from openpgp_mime.filters.base import MimeFilter

_BARE_LF = re.compile(rb"(?<!\r)\n")


class Unix2DosFilter(MimeFilter):
    """
    Convert bare LF line endings to CRLF.

    Existing CRLF pairs are left alone, including pairs split across chunks.
    """

    def __init__(self) -> None:
        self._after_cr = False

    def filter(self, data: bytes) -> bytes:
        if not data:
            return b""

        prefix = b""
        if self._after_cr and data[:1] == b"\n":
            prefix, data = b"\n", data[1:]

        self._after_cr = data.endswith(b"\r") if data else False
        return prefix + _BARE_LF.sub(b"\r\n", data)

    def reset(self) -> None:
        self._after_cr = False
