"""
Lossless JSON document form of an SHN table.

dump_document(file) produces a plain dict that json.dumps can render;
load_document(doc) rebuilds an equal ShnFile. The crypt header is embedded as
base64 so a build from the document reproduces the original file.

Document
  format            "SHN"
  crypt_header_b64  32 bytes, base64
  header            opaque u32 header word
  columns           [{name, type, type_id, length}], __ID__ first
  rows              [[value, ...]] in column order
"""

from __future__ import annotations

import base64
import binascii
from typing import Any, Dict, List

from .shn_errors import InvalidFileError, InvalidSchemaError
from .shn_schema import ID_COLUMN, Column, Schema
from .shn_table import Row, ShnFile
from .shn_types import DataType, to_id


FORMAT = 'SHN'


def dump_document(shn_file: ShnFile) -> Dict[str, Any]:
    return {
        'format': FORMAT,
        'crypt_header_b64': base64.b64encode(shn_file.crypt_header).decode('ascii'),
        'header': shn_file.header,
        'columns': [
            {
                'name': c.name,
                'type': c.data_type.value,
                'type_id': to_id(c.data_type),
                'length': c.data_length,
            }
            for c in shn_file.schema.columns
        ],
        'rows': [row.values() for row in shn_file.rows],
    }


def _load_column(entry: Any) -> Column:
    if not isinstance(entry, dict):
        raise InvalidFileError(f'column entry must be an object, got {entry!r}')
    try:
        kind = DataType(entry['type'])
        return Column(str(entry['name']), kind, int(entry['length']))
    except KeyError as exc:
        raise InvalidFileError(f'column entry missing {exc}') from exc
    except ValueError as exc:
        raise InvalidFileError(f'bad column entry {entry!r}: {exc}') from exc


def load_document(doc: Dict[str, Any]) -> ShnFile:
    if not isinstance(doc, dict):
        raise InvalidFileError('document must be a JSON object')
    if str(doc.get('format', FORMAT)).upper() != FORMAT:
        raise InvalidFileError(f"unsupported document format {doc.get('format')!r}")

    try:
        crypt_header = base64.b64decode(doc['crypt_header_b64'], validate=True)
        header = int(doc['header'])
        columns = [_load_column(e) for e in doc['columns']]
        raw_rows: List[Any] = list(doc.get('rows') or [])
    except KeyError as exc:
        raise InvalidFileError(f'document missing {exc}') from exc
    except (binascii.Error, TypeError, ValueError) as exc:
        raise InvalidFileError(f'malformed document: {exc}') from exc

    if not columns or columns[0] != ID_COLUMN:
        raise InvalidSchemaError(f'first column must be {ID_COLUMN!r}')
    schema = Schema.build(columns[1:])

    shn_file = ShnFile(schema=schema, crypt_header=crypt_header, header=header)
    for i, values in enumerate(raw_rows):
        if not isinstance(values, list):
            raise InvalidFileError(f'row {i} must be a list, got {values!r}')
        try:
            row = Row.from_values(schema, values)
        except ValueError as exc:
            raise InvalidFileError(f'row {i}: {exc}') from exc
        shn_file.append_row(row)
    return shn_file
