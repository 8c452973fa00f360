"""
Streaming byte filters.

This module provides:
- Line ending canonicalization (LF to CRLF)
- OpenPGP block detection for armored and binary streams
"""

from openpgp_mime.filters.base import MimeFilter, PassThroughFilter, apply_filters
from openpgp_mime.filters.detection import OpenPgpDataType, OpenPgpDetectionFilter, iter_blocks, scan
from openpgp_mime.filters.unix2dos import Unix2DosFilter

__all__ = [
    "MimeFilter",
    "PassThroughFilter",
    "apply_filters",
    "Unix2DosFilter",
    "OpenPgpDataType",
    "OpenPgpDetectionFilter",
    "iter_blocks",
    "scan",
]
