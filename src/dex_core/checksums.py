"""DEX Core - Deterministic integrity functions."""
from __future__ import annotations

import hashlib
import struct
import zlib

from .protocol import CHECKSUM_FMT, DEX_MAGIC


def has_dex_magic(buf: bytes, magic: bytes = DEX_MAGIC) -> bool:
    """Return True if buf starts with the DEX magic prefix."""
    if len(buf) < len(magic):
        return False
    return bytes(buf[: len(magic)]) == magic


def content_signature(buf: bytes, offset: int) -> bytes:
    """Compute the 20-byte SHA-1 signature of buf[offset:]."""
    return hashlib.sha1(memoryview(buf)[offset:]).digest()


def rolling_checksum(buf: bytes, offset: int) -> int:
    """Compute the Adler-32 checksum of buf[offset:].

    Sums a = 1 + bytes and b = running sum of a, both mod 65521, and
    packs the result as (b << 16) | a. Empty range gives 1.
    """
    return zlib.adler32(memoryview(buf)[offset:]) & 0xFFFFFFFF


def pack_checksum(value: int) -> bytes:
    """Serialize a checksum the way it is stored in the header."""
    return struct.pack(CHECKSUM_FMT, value)
