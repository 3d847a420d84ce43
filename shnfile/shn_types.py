"""
Column data kinds, their wire ids, and typed cells.

Contents
- DataType: the nine kinds a column can hold.
- from_id / to_id: legacy wire ids -> kind, kind -> canonical id.
- default_length: natural byte width of a kind (0 for strings).
- Cell: one typed value of a row.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Union

from .shn_errors import InvalidFileError


class DataType(Enum):
    STRING_FIXED_LEN = 'StringFixedLen'
    STRING_ZERO_TERMINATED = 'StringZeroTerminated'
    BYTE = 'Byte'
    SIGNED_BYTE = 'SignedByte'
    SIGNED_SHORT = 'SignedShort'
    UNSIGNED_SHORT = 'UnsignedShort'
    SIGNED_INTEGER = 'SignedInteger'
    UNSIGNED_INTEGER = 'UnsignedInteger'
    SINGLE_FLOATING_POINT = 'SingleFloatingPoint'

    @property
    def is_string(self) -> bool:
        return self in (DataType.STRING_FIXED_LEN, DataType.STRING_ZERO_TERMINATED)


_ID_TO_TYPE: Dict[int, DataType] = {}
for _ids, _kind in (
    ((1, 12, 16), DataType.BYTE),
    ((2,), DataType.UNSIGNED_SHORT),
    ((3, 11, 18, 27), DataType.UNSIGNED_INTEGER),
    ((5,), DataType.SINGLE_FLOATING_POINT),
    ((9, 24), DataType.STRING_FIXED_LEN),
    ((13, 21), DataType.SIGNED_SHORT),
    ((20,), DataType.SIGNED_BYTE),
    ((22,), DataType.SIGNED_INTEGER),
    ((26,), DataType.STRING_ZERO_TERMINATED),
):
    for _id in _ids:
        _ID_TO_TYPE[_id] = _kind

_CANONICAL_ID: Dict[DataType, int] = {
    DataType.BYTE: 1,
    DataType.UNSIGNED_SHORT: 2,
    DataType.UNSIGNED_INTEGER: 3,
    DataType.SINGLE_FLOATING_POINT: 5,
    DataType.STRING_FIXED_LEN: 9,
    DataType.SIGNED_SHORT: 13,
    DataType.SIGNED_BYTE: 20,
    DataType.SIGNED_INTEGER: 22,
    DataType.STRING_ZERO_TERMINATED: 26,
}

# Little-endian struct formats of the numeric kinds
STRUCT_FORMATS: Dict[DataType, str] = {
    DataType.BYTE: '<B',
    DataType.SIGNED_BYTE: '<b',
    DataType.UNSIGNED_SHORT: '<H',
    DataType.SIGNED_SHORT: '<h',
    DataType.UNSIGNED_INTEGER: '<I',
    DataType.SIGNED_INTEGER: '<i',
    DataType.SINGLE_FLOATING_POINT: '<f',
}

_INT_RANGES: Dict[DataType, Tuple[int, int]] = {
    DataType.BYTE: (0, 0xFF),
    DataType.SIGNED_BYTE: (-0x80, 0x7F),
    DataType.UNSIGNED_SHORT: (0, 0xFFFF),
    DataType.SIGNED_SHORT: (-0x8000, 0x7FFF),
    DataType.UNSIGNED_INTEGER: (0, 0xFFFFFFFF),
    DataType.SIGNED_INTEGER: (-0x80000000, 0x7FFFFFFF),
}


def from_id(type_id: int) -> DataType:
    try:
        return _ID_TO_TYPE[type_id]
    except KeyError:
        raise InvalidFileError(f'unknown column type id {type_id}') from None


def to_id(kind: DataType) -> int:
    return _CANONICAL_ID[kind]


def default_length(kind: DataType) -> int:
    if kind.is_string:
        return 0
    return struct.calcsize(STRUCT_FORMATS[kind])


CellValue = Union[int, float, str]


@dataclass(frozen=True, eq=False)
class Cell:
    """A single typed value; ``value`` is checked against ``kind`` on creation.

    Float cells compare by their packed 32-bit form, so NaN payloads compare
    equal to themselves.
    """

    kind: DataType
    value: CellValue

    def __post_init__(self) -> None:
        kind, value = self.kind, self.value
        if not isinstance(kind, DataType):
            raise ValueError(f'not a data type: {kind!r}')
        if kind.is_string:
            if not isinstance(value, str):
                raise ValueError(f'{kind.value} cell needs a str, got {value!r}')
            # Only a final NUL is allowed; an inner one would end the string on read
            if kind is DataType.STRING_ZERO_TERMINATED and '\x00' in value[:-1]:
                raise ValueError(f'{kind.value} cell contains an inner NUL: {value!r}')
        elif kind is DataType.SINGLE_FLOATING_POINT:
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f'{kind.value} cell needs a number, got {value!r}')
            try:
                # Store the value exactly as a 32-bit float will hold it
                (single,) = struct.unpack('<f', struct.pack('<f', float(value)))
            except (OverflowError, struct.error) as exc:
                raise ValueError(f'{value!r} does not fit a 32-bit float') from exc
            object.__setattr__(self, 'value', single)
        else:
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f'{kind.value} cell needs an int, got {value!r}')
            lo, hi = _INT_RANGES[kind]
            if not lo <= value <= hi:
                raise ValueError(f'{value} out of range for {kind.value} [{lo}, {hi}]')

    def _key(self) -> Tuple[DataType, Any]:
        if self.kind is DataType.SINGLE_FLOATING_POINT:
            return self.kind, struct.pack('<f', self.value)
        return self.kind, self.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def data_type(self) -> DataType:
        return self.kind
