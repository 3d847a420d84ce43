"""
SHN table tool.

Commands:
  - dump   <input.shn> <output.json>
      Decode a table into a JSON document (see shn_json). Building from the
      document reproduces an equal table.

  - build  <input.json> <output.shn>
      Encode a JSON document back into an .shn file.

  - repack <input.shn> <output.shn>
      Read then write in-memory.

  - info   <input.shn>
      Print the header word, record count and column table.

Options (before the command):
  -e, --encoding NAME   text encoding of names and strings
                        (default: $SHN_ENCODING, else latin-1)
  -v, --verbose         debug logging
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path
from typing import List

from .shn_codec import DEFAULT_ENCODING, TextCodec
from .shn_errors import ShnError
from .shn_json import dump_document, load_document
from .shn_reader import read_file
from .shn_types import to_id
from .shn_writer import write_file


ENCODING_ENV = 'SHN_ENCODING'


def _usage() -> int:
    print(__doc__.strip())
    return 2


def _info(path: Path, codec: TextCodec) -> None:
    shn = read_file(path, codec)
    schema = shn.schema
    print(f'File: {path}')
    print(f'Header: 0x{shn.header:08X}, records={shn.record_count}, '
          f'record_length={schema.record_length()}, columns={len(schema.stored_columns)}')
    for i, c in enumerate(schema.columns):
        print(f'  [{i:02d}] {c.name:<32} {c.data_type.value:<22} id={to_id(c.data_type):<2} len={c.data_length}')


def main(argv: List[str]) -> int:
    args = argv[1:]
    encoding = os.environ.get(ENCODING_ENV) or DEFAULT_ENCODING
    verbose = False
    while args and args[0].startswith('-'):
        if args[0] in ('--encoding', '-e') and len(args) >= 2:
            encoding = args[1]
            args = args[2:]
        elif args[0] in ('--verbose', '-v'):
            verbose = True
            args = args[1:]
        else:
            return _usage()
    if not args:
        return _usage()

    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')
    cmd, paths = args[0], [Path(a) for a in args[1:]]

    try:
        codec = TextCodec(encoding)
        if cmd == 'dump' and len(paths) == 2:
            inp, outp = paths
            doc = dump_document(read_file(inp, codec))
            outp.write_text(json.dumps(doc, indent=2, ensure_ascii=False), encoding='utf-8')
            print(f'Wrote {outp}')
            return 0

        if cmd == 'build' and len(paths) == 2:
            inp, outp = paths
            doc = json.loads(inp.read_text(encoding='utf-8'))
            shn = load_document(doc)
            write_file(shn, outp, codec)
            print(f'Wrote {outp} ({shn.record_count} records).')
            return 0

        if cmd == 'repack' and len(paths) == 2:
            inp, outp = paths
            shn = read_file(inp, codec)
            write_file(shn, outp, codec)
            print(f'Repacked {inp} -> {outp} ({shn.record_count} records).')
            return 0

        if cmd == 'info' and len(paths) == 1:
            _info(paths[0], codec)
            return 0
    except (ShnError, ValueError, OSError) as exc:
        print(f'error: {exc}', file=sys.stderr)
        return 1

    return _usage()


def cli() -> int:
    return main(sys.argv)


if __name__ == '__main__':
    raise SystemExit(cli())
