"""
SHN reader: bytes -> ShnFile.

Layout (little-endian)
  [0x00..0x20)  crypt header, kept verbatim
  [0x20..0x24)  i32 L, payload length + 0x24
  [0x24..)      obfuscated payload:
                  u32 header, u32 record_count, u32 record_length, u32 column_count
                  column_count x (48-byte name, u32 type id, i32 length)
                  record_count x row (one cell per column, __ID__ included)
"""

from __future__ import annotations

import io
import logging
import struct
from pathlib import Path
from typing import Any, BinaryIO, List, Union

from .shn_codec import DECODE_ERRORS, resolve_codec
from .shn_crypt import transform
from .shn_errors import InvalidEncodingError, InvalidFileError
from .shn_schema import Column, Schema
from .shn_table import CRYPT_HEADER_LEN, Row, ShnFile
from .shn_types import STRUCT_FORMATS, Cell, DataType, from_id


LOGGER = logging.getLogger(__name__)

LENGTH_OFFSET = 0x24
COLUMN_NAME_LEN = 48


class Cursor:
    """Read position over a decoded payload; every read advances it."""

    def __init__(self, data: bytes, position: int = 0) -> None:
        self.data = bytes(data)
        self.position = position

    @property
    def remaining(self) -> int:
        return len(self.data) - self.position

    def take(self, n: int) -> bytes:
        if n < 0 or n > self.remaining:
            raise InvalidFileError(f'short read: need {n} bytes at 0x{self.position:X}, have {self.remaining}')
        chunk = self.data[self.position:self.position + n]
        self.position += n
        return chunk

    def unpack(self, fmt: str) -> tuple:
        return struct.unpack(fmt, self.take(struct.calcsize(fmt)))

    def u32(self) -> int:
        return self.unpack('<I')[0]

    def i32(self) -> int:
        return self.unpack('<i')[0]

    def until_nul(self) -> bytes:
        end = self.data.find(b'\x00', self.position)
        if end < 0:
            raise InvalidFileError(f'unterminated string at 0x{self.position:X}')
        chunk = self.data[self.position:end]
        self.position = end + 1
        return chunk


def _decode(codec: Any, raw: bytes) -> str:
    """Decode tolerantly; TextCodec already raises InvalidEncodingError, other codec objects may raise UnicodeError."""
    try:
        return codec.decode(raw, DECODE_ERRORS)
    except UnicodeError as exc:
        raise InvalidEncodingError(f'cannot decode {raw!r}') from exc


def read_cell(cursor: Cursor, column: Column, codec: Any) -> Cell:
    kind = column.data_type
    if kind is DataType.STRING_FIXED_LEN:
        raw = cursor.take(column.data_length)
        return Cell(kind, _decode(codec, raw).rstrip('\x00'))
    if kind is DataType.STRING_ZERO_TERMINATED:
        return Cell(kind, _decode(codec, cursor.until_nul()))
    (value,) = cursor.unpack(STRUCT_FORMATS[kind])
    return Cell(kind, value)


def read_schema(cursor: Cursor, column_count: int, expected_length: int, codec: Any) -> Schema:
    columns: List[Column] = []
    for _ in range(column_count):
        name = _decode(codec, cursor.take(COLUMN_NAME_LEN)).rstrip('\x00')
        kind = from_id(cursor.u32())
        length = cursor.i32()
        columns.append(Column(name, kind, length))
    return Schema.build(columns, expected_length=expected_length)


def read_row(cursor: Cursor, schema: Schema, codec: Any) -> Row:
    return Row(schema, [read_cell(cursor, c, codec) for c in schema.columns])


def _read_exact(source: BinaryIO, n: int) -> bytes:
    try:
        data = source.read(n)
    except OSError as exc:
        raise InvalidFileError(f'read failed: {exc}') from exc
    if data is None or len(data) != n:
        got = 0 if data is None else len(data)
        raise InvalidFileError(f'short read: expected {n} bytes, got {got}')
    return data


def read(source: BinaryIO, text_codec: Any = None) -> ShnFile:
    """Decode a whole SHN file from a binary stream."""
    codec = resolve_codec(text_codec)
    crypt_header = _read_exact(source, CRYPT_HEADER_LEN)
    (length,) = struct.unpack('<i', _read_exact(source, 4))
    payload_len = length - LENGTH_OFFSET
    if payload_len < 0:
        raise InvalidFileError(f'invalid payload length field 0x{length:X}')

    payload = bytearray(_read_exact(source, payload_len))
    transform(payload)
    cursor = Cursor(payload)

    header, record_count, record_length, column_count = cursor.unpack('<4I')
    LOGGER.debug('header=0x%08X records=%d record_length=%d columns=%d',
                 header, record_count, record_length, column_count)
    schema = read_schema(cursor, column_count, record_length, codec)
    rows = [read_row(cursor, schema, codec) for _ in range(record_count)]
    if cursor.remaining:
        LOGGER.debug('ignoring %d trailing payload bytes', cursor.remaining)

    return ShnFile(schema=schema, crypt_header=crypt_header, header=header, rows=rows)


def read_bytes(data: bytes, text_codec: Any = None) -> ShnFile:
    return read(io.BytesIO(data), text_codec)


def read_file(path: Union[str, Path], text_codec: Any = None) -> ShnFile:
    try:
        with open(path, 'rb') as fh:
            return read(fh, text_codec)
    except OSError as exc:
        raise InvalidFileError(f'cannot open {path}: {exc}') from exc
