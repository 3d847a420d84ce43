"""
Exceptions raised by the SHN codec.

Every failure of a read or write call surfaces as one of these; the call is
aborted in full and nothing partial is returned or written.
"""

from __future__ import annotations


class ShnError(Exception):
    """Base class for all SHN codec errors."""


class InvalidFileError(ShnError):
    """I/O failure, short read/write, or a structurally malformed payload."""


class InvalidSchemaError(ShnError):
    """Record length mismatch, or a row whose schema differs from its file's."""


class InvalidEncodingError(ShnError):
    """The text codec failed to decode or encode a name or string cell."""
