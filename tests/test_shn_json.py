"""
Tests for shnfile/shn_json.py
"""

import base64
import json

import pytest

from shnfile.shn_errors import InvalidFileError, InvalidSchemaError
from shnfile.shn_json import dump_document, load_document
from shnfile.shn_reader import read_bytes
from shnfile.shn_writer import to_bytes


def test_document_shape(item_file):
    doc = dump_document(item_file)
    assert doc['format'] == 'SHN'
    assert base64.b64decode(doc['crypt_header_b64']) == bytes(range(32))
    assert doc['header'] == 0x00010203
    assert doc['columns'][0] == {'name': '__ID__', 'type': 'UnsignedShort', 'type_id': 2, 'length': 2}
    assert doc['columns'][2] == {'name': 'InxName', 'type': 'StringFixedLen', 'type_id': 9, 'length': 8}
    assert doc['rows'][0][:4] == [0, 1001, 'Sword', 'A plain sword']


def test_document_survives_json_text(item_file):
    text = json.dumps(dump_document(item_file), indent=2)
    assert load_document(json.loads(text)) == item_file


def test_build_from_document_reproduces_bytes(item_file):
    raw = to_bytes(item_file)
    rebuilt = load_document(json.loads(json.dumps(dump_document(read_bytes(raw)))))
    assert to_bytes(rebuilt) == raw


def test_missing_keys_are_rejected(item_file):
    doc = dump_document(item_file)
    del doc['columns']
    with pytest.raises(InvalidFileError):
        load_document(doc)


def test_bad_crypt_header_is_rejected(item_file):
    doc = dump_document(item_file)
    doc['crypt_header_b64'] = base64.b64encode(b'short').decode('ascii')
    with pytest.raises(InvalidFileError):
        load_document(doc)
    doc['crypt_header_b64'] = '***'
    with pytest.raises(InvalidFileError):
        load_document(doc)


def test_unknown_kind_is_rejected(item_file):
    doc = dump_document(item_file)
    doc['columns'][1]['type'] = 'Double'
    with pytest.raises(InvalidFileError):
        load_document(doc)


def test_first_column_must_be_id(item_file):
    doc = dump_document(item_file)
    doc['columns'] = doc['columns'][1:]
    doc['rows'] = [r[1:] for r in doc['rows']]
    with pytest.raises(InvalidSchemaError):
        load_document(doc)


def test_other_format_is_rejected(item_file):
    doc = dump_document(item_file)
    doc['format'] = 'TH15'
    with pytest.raises(InvalidFileError):
        load_document(doc)


def test_bad_row_values(item_file):
    """Out-of-range or mistyped values reject the document as malformed."""
    doc = dump_document(item_file)
    doc['rows'][0][4] = 256  # Grade is a byte
    with pytest.raises(InvalidFileError):
        load_document(doc)
    doc['rows'][0][4] = 'three'
    with pytest.raises(InvalidFileError):
        load_document(doc)
    doc['rows'][0] = doc['rows'][0][:-1]
    with pytest.raises(InvalidSchemaError):
        load_document(doc)
