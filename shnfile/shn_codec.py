"""
Text codec adapter.

Names and string cells are stored in a game-specific 8-bit encoding. The
reader decodes them with an error-tolerant policy, the writer encodes them
strictly. Any object with compatible ``decode``/``encode`` methods may be
passed wherever a codec is expected.
"""

from __future__ import annotations

import codecs
from typing import Any

from .shn_errors import InvalidEncodingError


DEFAULT_ENCODING = 'latin-1'
DECODE_ERRORS = 'ignore'
ENCODE_ERRORS = 'strict'


class TextCodec:
    def __init__(self, encoding: str = DEFAULT_ENCODING) -> None:
        try:
            self.name = codecs.lookup(encoding).name
        except LookupError as exc:
            raise InvalidEncodingError(f'unknown text encoding {encoding!r}') from exc

    def decode(self, data: bytes, errors: str = DECODE_ERRORS) -> str:
        try:
            return bytes(data).decode(self.name, errors)
        except UnicodeError as exc:
            raise InvalidEncodingError(f'cannot decode {bytes(data)!r} as {self.name}') from exc

    def encode(self, text: str, errors: str = ENCODE_ERRORS) -> bytes:
        try:
            return text.encode(self.name, errors)
        except UnicodeError as exc:
            raise InvalidEncodingError(f'cannot encode {text!r} as {self.name}') from exc

    def __repr__(self) -> str:
        return f'TextCodec({self.name!r})'


def resolve_codec(codec: Any = None) -> Any:
    """Return a codec for ``None`` (the default), an encoding name, or a codec object."""
    if codec is None:
        return TextCodec()
    if isinstance(codec, str):
        return TextCodec(codec)
    if callable(getattr(codec, 'decode', None)) and callable(getattr(codec, 'encode', None)):
        return codec
    raise InvalidEncodingError(f'not a text codec: {codec!r}')
