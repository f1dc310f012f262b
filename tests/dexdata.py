import random
import struct

HEADER_LEN = 0x70


def make_dex(payload_len: int = 256, seed: int = 0) -> bytearray:
    """Build a DEX-shaped buffer with zeroed checksum and signature fields."""
    rnd = random.Random(seed)
    size = HEADER_LEN + payload_len
    buf = bytearray(b"dex\n035\x00")
    buf += bytes(24)  # checksum + signature
    buf += struct.pack("<I", size)
    buf += bytes(rnd.randrange(256) for _ in range(size - len(buf)))
    return buf
