"""
shnfile: Read and write SHN game data tables.

Modules
- shn_crypt: length/position keyed payload obfuscation.
- shn_types: column data kinds, wire ids and typed cells.
- shn_schema: columns and the record layout.
- shn_table: ShnFile and Row, the in-memory table.
- shn_reader / shn_writer: bytes <-> ShnFile.
- shn_json: lossless JSON document form.
- shn_tool: dump/build/repack/info command line.
"""

from .shn_codec import DEFAULT_ENCODING, TextCodec
from .shn_crypt import transform, transformed
from .shn_errors import InvalidEncodingError, InvalidFileError, InvalidSchemaError, ShnError
from .shn_json import dump_document, load_document
from .shn_reader import read, read_bytes, read_file
from .shn_schema import ID_COLUMN_NAME, Column, Schema
from .shn_table import Row, ShnFile
from .shn_types import Cell, DataType, default_length, from_id, to_id
from .shn_writer import to_bytes, write, write_file

__all__ = [
    "Cell",
    "Column",
    "DataType",
    "DEFAULT_ENCODING",
    "ID_COLUMN_NAME",
    "InvalidEncodingError",
    "InvalidFileError",
    "InvalidSchemaError",
    "Row",
    "Schema",
    "ShnError",
    "ShnFile",
    "TextCodec",
    "default_length",
    "dump_document",
    "from_id",
    "load_document",
    "read",
    "read_bytes",
    "read_file",
    "to_bytes",
    "to_id",
    "transform",
    "transformed",
    "write",
    "write_file",
]

__version__ = "0.1.0"
