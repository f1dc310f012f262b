"""DEX header layout constants.

Single source of truth for the on-disk magic and the fixed header offsets.
Keep this file stable. Checksum functions and the patcher must remain synchronized.
"""

# File magic. The full magic is b"dex\n035\x00"; only the prefix is checked
# so every format version is accepted.
DEX_MAGIC = b"dex"

# Adler-32 of bytes [12, EOF), little-endian u32
CHECKSUM_OFFSET = 8
CHECKSUM_END = 12
CHECKSUM_FMT = "<I"

# SHA-1 of bytes [32, EOF)
SIGNATURE_OFFSET = 12
SIGNATURE_END = 32
SIGNATURE_LEN = SIGNATURE_END - SIGNATURE_OFFSET

# Declared file size, informational only
FILE_SIZE_OFFSET = 32
FILE_SIZE_FMT = "<I"

# Smallest buffer in which both integrity fields exist
MIN_HEADER_LEN = SIGNATURE_END

ADLER_MOD = 65521

# Output naming: <stem>_headerFixed<suffix>
FIXED_SUFFIX = "_headerFixed"
