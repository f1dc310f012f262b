"""DEX Core - Header layout and integrity functions."""
from .checksums import has_dex_magic, content_signature, rolling_checksum, pack_checksum

__all__ = ["has_dex_magic", "content_signature", "rolling_checksum", "pack_checksum"]
