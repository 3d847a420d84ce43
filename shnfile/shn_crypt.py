"""
Payload obfuscation used by SHN files.

The keystream depends only on the buffer length and byte position, so the
same transform both obfuscates and restores a payload.
"""

from __future__ import annotations


def transform(buf: bytearray) -> None:
    num = len(buf) & 0xFF
    for i in range(len(buf) - 1, -1, -1):
        buf[i] ^= num
        k = (i & 0x0F) + 0x55
        k ^= (i * 11) & 0xFF
        k ^= num
        k ^= 0xAA
        num = k & 0xFF


def transformed(data: bytes) -> bytes:
    out = bytearray(data)
    transform(out)
    return bytes(out)
