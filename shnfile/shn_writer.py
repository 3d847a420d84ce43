"""
SHN writer: ShnFile -> bytes, the mirror of shn_reader.

The complete output is assembled in memory first, so a failing call never
leaves a partially written destination behind.
"""

from __future__ import annotations

import logging
import struct
from pathlib import Path
from typing import Any, BinaryIO, Union

from .shn_codec import ENCODE_ERRORS, resolve_codec
from .shn_crypt import transform
from .shn_errors import InvalidEncodingError, InvalidFileError, InvalidSchemaError
from .shn_reader import COLUMN_NAME_LEN, LENGTH_OFFSET
from .shn_schema import Column, Schema
from .shn_table import Row, ShnFile
from .shn_types import STRUCT_FORMATS, Cell, DataType, to_id


LOGGER = logging.getLogger(__name__)


def _encode(codec: Any, text: str) -> bytes:
    """Encode strictly; TextCodec already raises InvalidEncodingError, other codec objects may raise UnicodeError."""
    try:
        return bytes(codec.encode(text, ENCODE_ERRORS))
    except UnicodeError as exc:
        raise InvalidEncodingError(f'cannot encode {text!r}') from exc


def encode_cell(cell: Cell, column: Column, codec: Any) -> bytes:
    kind = cell.data_type()
    if kind is DataType.STRING_FIXED_LEN:
        if column.data_length < 0:
            raise InvalidSchemaError(f'column {column.name!r} has negative length {column.data_length}')
        raw = _encode(codec, cell.value)
        if len(raw) > column.data_length:
            raise InvalidSchemaError(
                f'{cell.value!r} encodes to {len(raw)} bytes, column {column.name!r} holds {column.data_length}'
            )
        return raw.ljust(column.data_length, b'\x00')
    if kind is DataType.STRING_ZERO_TERMINATED:
        raw = _encode(codec, cell.value)
        if b'\x00' in raw[:-1]:
            raise InvalidEncodingError(f'{cell.value!r} encodes with an inner NUL byte')
        if not raw.endswith(b'\x00'):
            raw += b'\x00'
        return raw
    return struct.pack(STRUCT_FORMATS[kind], cell.value)


def _write_schema(out: bytearray, schema: Schema, codec: Any) -> None:
    for column in schema.stored_columns:
        name = _encode(codec, column.name)
        if len(name) > COLUMN_NAME_LEN:
            raise InvalidSchemaError(
                f'column name {column.name!r} encodes to {len(name)} bytes, limit is {COLUMN_NAME_LEN}'
            )
        out += name.ljust(COLUMN_NAME_LEN, b'\x00')
        out += struct.pack('<Ii', to_id(column.data_type), column.data_length)


def _write_row(out: bytearray, row: Row, codec: Any) -> None:
    for cell, column in zip(row.cells, row.schema.columns):
        out += encode_cell(cell, column, codec)


def to_bytes(shn_file: ShnFile, text_codec: Any = None) -> bytes:
    codec = resolve_codec(text_codec)
    schema = shn_file.schema
    for i, row in enumerate(shn_file.rows):
        if row.schema != schema:
            raise InvalidSchemaError(f'row {i} schema does not match file schema')

    record_length = schema.record_length()
    if record_length < 0:
        raise InvalidSchemaError(f'negative record length {record_length}')

    out = bytearray()
    try:
        out += struct.pack('<4I', shn_file.header, len(shn_file.rows),
                           record_length, len(schema.columns) - 1)
    except struct.error as exc:
        raise InvalidFileError(f'header fields out of range: {exc}') from exc
    _write_schema(out, schema, codec)
    for row in shn_file.rows:
        _write_row(out, row, codec)

    LOGGER.debug('payload %d bytes: %d rows, %d columns',
                 len(out), len(shn_file.rows), len(schema.columns))
    transform(out)
    try:
        length = struct.pack('<i', len(out) + LENGTH_OFFSET)
    except struct.error as exc:
        raise InvalidFileError(f'payload too large ({len(out)} bytes)') from exc
    return bytes(shn_file.crypt_header) + length + bytes(out)


def write(shn_file: ShnFile, text_codec: Any, dest: BinaryIO) -> None:
    """Encode ``shn_file`` and write it to a binary stream."""
    data = to_bytes(shn_file, text_codec)
    try:
        written = dest.write(data)
    except OSError as exc:
        raise InvalidFileError(f'write failed: {exc}') from exc
    if written is not None and written != len(data):
        raise InvalidFileError(f'short write: {written} of {len(data)} bytes')


def write_file(shn_file: ShnFile, path: Union[str, Path], text_codec: Any = None) -> None:
    data = to_bytes(shn_file, text_codec)
    try:
        Path(path).write_bytes(data)
    except OSError as exc:
        raise InvalidFileError(f'cannot write {path}: {exc}') from exc
