from __future__ import annotations

import struct
from typing import Callable
from warnings import warn

from dex_core.checksums import content_signature, has_dex_magic, pack_checksum, rolling_checksum
from dex_core.protocol import (
    CHECKSUM_END,
    CHECKSUM_FMT,
    CHECKSUM_OFFSET,
    FILE_SIZE_FMT,
    FILE_SIZE_OFFSET,
    MIN_HEADER_LEN,
    SIGNATURE_END,
    SIGNATURE_OFFSET,
)


class DexFormatError(ValueError):
    """Raised when a buffer cannot carry a DEX header."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


def _check_file_size(buf: bytearray) -> None:
    if len(buf) < FILE_SIZE_OFFSET + struct.calcsize(FILE_SIZE_FMT):
        return
    (declared,) = struct.unpack_from(FILE_SIZE_FMT, buf, FILE_SIZE_OFFSET)
    if declared != len(buf):
        warn(f"Header file_size {int(declared)} does not match actual size {len(buf)}")


def patch_header(buf: bytearray, progress: Callable[[str], None] | None = None) -> dict:
    """Recompute and rewrite the signature and checksum fields of buf in place.

    The signature is written before the checksum is computed, since the
    checksum covers the signature field. Returns the validity of the
    original fields and the new values.
    """
    # 1. Magic check, before any hashing
    if not has_dex_magic(buf):
        raise DexFormatError("E_DEX_MAGIC", "Input file is not a dex file!")
    if len(buf) < MIN_HEADER_LEN:
        raise DexFormatError(
            "E_HEADER_SHORT", f"Input file is too small for a dex header ({len(buf)} < {MIN_HEADER_LEN} bytes)!"
        )

    _check_file_size(buf)
    say = progress or (lambda _msg: None)

    # 2. Signature over [32, EOF)
    say("Calculating new SHA1 signature...")
    old_signature = bytes(buf[SIGNATURE_OFFSET:SIGNATURE_END])
    new_signature = content_signature(buf, SIGNATURE_END)
    signature_valid = old_signature == new_signature
    buf[SIGNATURE_OFFSET:SIGNATURE_END] = new_signature
    say("Done!")

    # 3. Checksum over [12, EOF), now including the new signature
    say("Calculating new Adler32 checksum...")
    (old_checksum,) = struct.unpack_from(CHECKSUM_FMT, buf, CHECKSUM_OFFSET)
    new_checksum = rolling_checksum(buf, CHECKSUM_END)
    checksum_valid = old_checksum == new_checksum
    buf[CHECKSUM_OFFSET:CHECKSUM_END] = pack_checksum(new_checksum)
    say("Done!")

    return {
        "signature_valid": signature_valid,
        "checksum_valid": checksum_valid,
        "old_signature": old_signature.hex(),
        "signature": new_signature.hex(),
        "old_checksum": int(old_checksum),
        "checksum": int(new_checksum),
    }

