"""
Pytest configuration file.

Ensures the repo root is on sys.path so that 'import shnfile' works without an
install, and provides small hand-built tables shared by the test modules.
"""
import struct
import sys
from pathlib import Path

import pytest

# Add the repo root to sys.path
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from shnfile.shn_crypt import transformed  # noqa: E402
from shnfile.shn_schema import Column, Schema  # noqa: E402
from shnfile.shn_table import ShnFile  # noqa: E402


def _name(text):
    return text.encode('latin-1').ljust(48, b'\x00')


@pytest.fixture
def item_schema():
    """A schema covering every data kind."""
    return Schema.build([
        Column.unsigned_integer('ItemID'),
        Column.string_fixed_len('InxName', 8),
        Column.string_terminated('Desc'),
        Column.byte('Grade'),
        Column.signed_byte('Delta'),
        Column.signed_short('Offset'),
        Column.unsigned_short('Stack'),
        Column.signed_integer('Price'),
        Column.single_floating_point('Weight'),
    ])


@pytest.fixture
def item_file(item_schema):
    shn = ShnFile(schema=item_schema, crypt_header=bytes(range(32)), header=0x00010203)
    shn.new_row([0, 1001, 'Sword', 'A plain sword', 3, -2, -300, 20, -15000, 2.5])
    shn.new_row([1, 1002, 'Shield01', '', 255, 127, 32767, 65535, 2147483647, 0.1])
    shn.new_row([2, 4294967295, '', 'x', 0, -128, -32768, 0, -2147483648, -1e30])
    return shn


@pytest.fixture
def build_raw():
    """Assemble raw file bytes from plaintext payload parts, as the game would store them."""

    def _build(columns, rows_blob, record_count, record_length=None, header=7, crypt_header=b'\xAA' * 32):
        if record_length is None:
            record_length = 2 + sum(length for _, _, length in columns)
        payload = struct.pack('<4I', header, record_count, record_length, len(columns))
        for name, type_id, length in columns:
            payload += _name(name) + struct.pack('<Ii', type_id, length)
        payload += rows_blob
        return crypt_header + struct.pack('<i', len(payload) + 0x24) + transformed(payload)

    return _build
