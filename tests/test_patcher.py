import hashlib
import struct
import warnings
import zlib

import pytest

import dex_fix.patcher as patcher
from dex_fix.patcher import DexFormatError, patch_header
from dexdata import make_dex


def _assert_self_consistent(buf: bytearray):
    assert bytes(buf[12:32]) == hashlib.sha1(bytes(buf[32:])).digest()
    assert struct.unpack_from("<I", buf, 8)[0] == zlib.adler32(bytes(buf[12:]))


def test_zeroed_header_is_repaired():
    buf = make_dex()
    res = patch_header(buf)
    assert res["signature_valid"] is False
    assert res["checksum_valid"] is False
    assert res["old_signature"] == "00" * 20
    assert res["old_checksum"] == 0
    _assert_self_consistent(buf)


def test_second_pass_is_a_fixed_point():
    buf = make_dex(seed=7)
    patch_header(buf)
    once = bytes(buf)
    res = patch_header(buf)
    assert res["signature_valid"] and res["checksum_valid"]
    assert bytes(buf) == once


def test_deterministic():
    a, b = make_dex(seed=3), make_dex(seed=3)
    patch_header(a)
    patch_header(b)
    assert a == b


def test_checksum_sees_new_signature():
    buf = make_dex(seed=5)
    stale = zlib.adler32(bytes(buf[12:]))
    res = patch_header(buf)
    assert res["checksum"] != stale
    assert res["checksum"] == zlib.adler32(bytes(buf[12:]))


def test_stale_signature_also_invalidates_checksum():
    buf = make_dex(seed=9)
    patch_header(buf)
    # Change payload, then fix the checksum against the stale signature.
    buf[200] ^= 0xFF
    struct.pack_into("<I", buf, 8, zlib.adler32(bytes(buf[12:])))
    res = patch_header(buf)
    assert res["signature_valid"] is False
    assert res["checksum_valid"] is False
    _assert_self_consistent(buf)


def test_only_checksum_stale():
    buf = make_dex(seed=11)
    patch_header(buf)
    buf[8] ^= 0x01
    res = patch_header(buf)
    assert res["signature_valid"] is True
    assert res["checksum_valid"] is False
    _assert_self_consistent(buf)


@pytest.mark.parametrize("data", [b"", b"d", b"de", b"\x00" * 64, b"DEX\n035\x00" + bytes(64)])
def test_magic_rejected_before_hashing(monkeypatch, data):
    def boom(*_args):
        raise AssertionError("hashing must not start")

    monkeypatch.setattr(patcher, "content_signature", boom)
    monkeypatch.setattr(patcher, "rolling_checksum", boom)
    buf = bytearray(data)
    with pytest.raises(DexFormatError) as exc:
        patch_header(buf)
    assert exc.value.code == "E_DEX_MAGIC"
    assert buf == bytearray(data)


def test_header_too_short():
    buf = bytearray(b"dex\n035\x00" + bytes(10))
    with pytest.raises(DexFormatError) as exc:
        patch_header(buf)
    assert exc.value.code == "E_HEADER_SHORT"
    assert len(buf) == 18


def test_minimal_header_hashes_empty_payload():
    buf = bytearray(b"dex\n035\x00" + bytes(24))
    res = patch_header(buf)
    assert bytes(buf[12:32]) == hashlib.sha1(b"").digest()
    assert res["checksum"] == zlib.adler32(bytes(buf[12:]))
    assert len(buf) == 32


def test_file_size_mismatch_warns():
    buf = make_dex()
    struct.pack_into("<I", buf, 32, 1)
    with pytest.warns(UserWarning, match="file_size"):
        patch_header(buf)
    _assert_self_consistent(buf)


def test_matching_file_size_is_silent():
    buf = make_dex()
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        patch_header(buf)


def test_progress_order():
    seen = []
    patch_header(make_dex(), progress=seen.append)
    assert seen == [
        "Calculating new SHA1 signature...",
        "Done!",
        "Calculating new Adler32 checksum...",
        "Done!",
    ]
