"""
In-memory table model: a file of rows sharing one schema.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List

from .shn_errors import InvalidFileError, InvalidSchemaError
from .shn_schema import Schema
from .shn_types import Cell, CellValue


CRYPT_HEADER_LEN = 0x20


@dataclass
class Row:
    schema: Schema
    cells: List[Cell]

    def __post_init__(self) -> None:
        self.cells = list(self.cells)
        columns = self.schema.columns
        if len(self.cells) != len(columns):
            raise InvalidSchemaError(f'row has {len(self.cells)} cells, schema has {len(columns)} columns')
        for cell, column in zip(self.cells, columns):
            if cell.data_type() is not column.data_type:
                raise InvalidSchemaError(
                    f'column {column.name!r} is {column.data_type.value}, cell is {cell.data_type().value}'
                )

    @classmethod
    def from_values(cls, schema: Schema, values: Iterable[CellValue]) -> Row:
        values = list(values)
        if len(values) != len(schema.columns):
            raise InvalidSchemaError(f'got {len(values)} values for {len(schema.columns)} columns')
        return cls(schema, [Cell(c.data_type, v) for c, v in zip(schema.columns, values)])

    def values(self) -> List[CellValue]:
        return [c.value for c in self.cells]

    def get(self, name: str) -> CellValue:
        return self.cells[self.schema.index_of(name)].value


@dataclass
class ShnFile:
    schema: Schema
    crypt_header: bytes = bytes(CRYPT_HEADER_LEN)
    header: int = 0
    rows: List[Row] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.crypt_header = bytes(self.crypt_header)
        if len(self.crypt_header) != CRYPT_HEADER_LEN:
            raise InvalidFileError(
                f'crypt header must be {CRYPT_HEADER_LEN} bytes, got {len(self.crypt_header)}'
            )
        if isinstance(self.header, bool) or not isinstance(self.header, int) or not 0 <= self.header <= 0xFFFFFFFF:
            raise InvalidFileError(f'header word {self.header!r} is not a u32')
        rows = list(self.rows)
        self.rows = []
        for row in rows:
            self.append_row(row)

    @property
    def record_count(self) -> int:
        return len(self.rows)

    def append_row(self, row: Row) -> None:
        """Append ``row``; its schema must equal this file's schema by value."""
        if row.schema != self.schema:
            raise InvalidSchemaError('row schema does not match file schema')
        self.rows.append(row)

    def new_row(self, values: Iterable[Any]) -> Row:
        row = Row.from_values(self.schema, values)
        self.rows.append(row)
        return row
