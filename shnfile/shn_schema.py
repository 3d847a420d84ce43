"""
Column definitions and the row layout they describe.

Every schema starts with the synthetic ``__ID__`` unsigned-short column. It is
not stored in the file's column table but its two bytes are part of each
record and of the declared record length.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from .shn_errors import InvalidSchemaError
from .shn_types import DataType, default_length


LOGGER = logging.getLogger(__name__)

ID_COLUMN_NAME = '__ID__'
INT32_MIN, INT32_MAX = -0x80000000, 0x7FFFFFFF


@dataclass(frozen=True)
class Column:
    name: str
    data_type: DataType
    data_length: int

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise InvalidSchemaError(f'column name must be a str, got {self.name!r}')
        if not isinstance(self.data_type, DataType):
            raise InvalidSchemaError(f'column {self.name!r}: not a data type: {self.data_type!r}')
        if not INT32_MIN <= self.data_length <= INT32_MAX:
            raise InvalidSchemaError(f'column {self.name!r}: length {self.data_length} is not an i32')

    @classmethod
    def of(cls, name: str, data_type: DataType, data_length: Optional[int] = None) -> Column:
        if data_length is None:
            data_length = default_length(data_type)
        return cls(name, data_type, data_length)

    @classmethod
    def string_fixed_len(cls, name: str, length: int) -> Column:
        return cls(name, DataType.STRING_FIXED_LEN, length)

    @classmethod
    def string_terminated(cls, name: str) -> Column:
        return cls.of(name, DataType.STRING_ZERO_TERMINATED)

    @classmethod
    def byte(cls, name: str) -> Column:
        return cls.of(name, DataType.BYTE)

    @classmethod
    def signed_byte(cls, name: str) -> Column:
        return cls.of(name, DataType.SIGNED_BYTE)

    @classmethod
    def unsigned_short(cls, name: str) -> Column:
        return cls.of(name, DataType.UNSIGNED_SHORT)

    @classmethod
    def signed_short(cls, name: str) -> Column:
        return cls.of(name, DataType.SIGNED_SHORT)

    @classmethod
    def unsigned_integer(cls, name: str) -> Column:
        return cls.of(name, DataType.UNSIGNED_INTEGER)

    @classmethod
    def signed_integer(cls, name: str) -> Column:
        return cls.of(name, DataType.SIGNED_INTEGER)

    @classmethod
    def single_floating_point(cls, name: str) -> Column:
        return cls.of(name, DataType.SINGLE_FLOATING_POINT)


ID_COLUMN = Column(ID_COLUMN_NAME, DataType.UNSIGNED_SHORT, 2)


@dataclass(frozen=True)
class Schema:
    """Ordered columns of a table, synthetic ``__ID__`` column first.

    Use :meth:`build` to create one from the stored columns only.
    """

    columns: Tuple[Column, ...]

    def __post_init__(self) -> None:
        columns = tuple(self.columns)
        if not columns or columns[0] != ID_COLUMN:
            raise InvalidSchemaError(f'first column must be the synthetic {ID_COLUMN_NAME} column')
        object.__setattr__(self, 'columns', columns)

    @classmethod
    def build(cls, columns: Iterable[Column], expected_length: Optional[int] = None) -> Schema:
        schema = cls((ID_COLUMN,) + tuple(columns))
        if expected_length is not None:
            actual = schema.record_length()
            if actual != expected_length:
                LOGGER.warning('record length %d does not match declared length %d', actual, expected_length)
                raise InvalidSchemaError(
                    f'record length {actual} does not match declared length {expected_length}'
                )
        return schema

    @property
    def stored_columns(self) -> Tuple[Column, ...]:
        """Columns as they appear in the file's column table."""
        return self.columns[1:]

    def record_length(self) -> int:
        return sum(c.data_length for c in self.columns)

    def column_names(self) -> Tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    def index_of(self, name: str) -> int:
        for i, c in enumerate(self.columns):
            if c.name == name:
                return i
        raise KeyError(name)

    def __len__(self) -> int:
        return len(self.columns)
