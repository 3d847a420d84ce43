"""
Tests for shnfile/shn_schema.py
"""

import pytest

from shnfile.shn_errors import InvalidSchemaError
from shnfile.shn_schema import ID_COLUMN, ID_COLUMN_NAME, Column, Schema
from shnfile.shn_types import DataType


def test_build_prepends_synthetic_id_column():
    schema = Schema.build([Column.byte('A')])
    assert schema.columns[0].name == ID_COLUMN_NAME
    assert schema.columns[0].data_type is DataType.UNSIGNED_SHORT
    assert schema.columns[0].data_length == 2
    assert schema.stored_columns == (Column.byte('A'),)
    assert len(schema) == 2


def test_record_length_counts_synthetic_column():
    assert Schema.build([]).record_length() == 2
    schema = Schema.build([
        Column.byte('A'),
        Column.unsigned_integer('B'),
        Column.string_fixed_len('C', 32),
        Column.string_terminated('D'),
    ])
    assert schema.record_length() == 2 + 1 + 4 + 32 + 0


def test_expected_length_accepted():
    schema = Schema.build([Column.signed_short('A')], expected_length=4)
    assert schema.record_length() == 4


def test_expected_length_mismatch_rejected():
    with pytest.raises(InvalidSchemaError):
        Schema.build([Column.signed_short('A')], expected_length=5)


def test_schema_without_id_column_rejected():
    with pytest.raises(InvalidSchemaError):
        Schema((Column.byte('A'),))
    with pytest.raises(InvalidSchemaError):
        Schema(())


def test_schema_equality_is_by_value():
    a = Schema.build([Column.byte('A'), Column.string_fixed_len('B', 4)])
    b = Schema.build([Column.byte('A'), Column.string_fixed_len('B', 4)])
    assert a == b
    assert a is not b
    assert a != Schema.build([Column.byte('A'), Column.string_fixed_len('B', 5)])


def test_schema_is_immutable():
    schema = Schema.build([Column.byte('A')])
    with pytest.raises(AttributeError):
        schema.columns = ()
    with pytest.raises(AttributeError):
        schema.columns[1].name = 'B'


def test_column_factories_use_default_widths():
    assert Column.byte('x').data_length == 1
    assert Column.signed_byte('x').data_length == 1
    assert Column.unsigned_short('x').data_length == 2
    assert Column.signed_short('x').data_length == 2
    assert Column.unsigned_integer('x').data_length == 4
    assert Column.signed_integer('x').data_length == 4
    assert Column.single_floating_point('x').data_length == 4
    assert Column.string_terminated('x').data_length == 0
    assert Column.string_fixed_len('x', 20).data_length == 20
    assert Column.of('x', DataType.SIGNED_INTEGER, 8).data_length == 8


def test_column_length_must_be_i32():
    with pytest.raises(InvalidSchemaError):
        Column('x', DataType.BYTE, 0x80000000)


def test_index_of():
    schema = Schema.build([Column.byte('A'), Column.byte('B')])
    assert schema.index_of('B') == 2
    assert schema.column_names() == (ID_COLUMN.name, 'A', 'B')
    with pytest.raises(KeyError):
        schema.index_of('missing')
