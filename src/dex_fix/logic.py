import os
from pathlib import Path
from typing import Callable
from .const import ERRORS
from .patcher import DexFormatError, patch_header
from dex_core.protocol import FIXED_SUFFIX


def _quiet(_msg: str) -> None:
    pass


def _fail(code: str, **extra) -> dict:
    err = {"code": code, "message": ERRORS[code], **extra}
    return {"status": "FAIL", "error_count": 1, "errors": [err]}


def fixed_output_path(input_path: Path) -> Path:
    """Derive <dir>/<stem>_headerFixed<suffix> for input_path."""
    return input_path.with_name(f"{input_path.stem}{FIXED_SUFFIX}{input_path.suffix}")


def _write_all_or_nothing(path: Path, data: bytes) -> None:
    tmp = path.with_name(path.name + ".tmp")
    try:
        tmp.write_bytes(data)
        os.replace(tmp, path)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise


def fix_file(input_path: Path, check_only: bool = False, echo: Callable[[str], None] = _quiet) -> dict:
    input_path = Path(input_path)
    if not input_path.is_file():
        return _fail("E_INPUT_MISSING", path=str(input_path))

    echo("Reading input file...")
    try:
        buf = bytearray(input_path.read_bytes())
    except OSError as e:
        return _fail("E_IO", path=str(input_path), detail=str(e))
    echo("Done!")

    try:
        header = patch_header(buf, progress=echo)
    except DexFormatError as e:
        return _fail(e.code, path=str(input_path), detail=str(e))

    result = {"status": "VALID", "error_count": 0, "errors": [], "input": str(input_path), "output": None, **header}
    if header["signature_valid"] and header["checksum_valid"]:
        return result

    if check_only:
        result["status"] = "INVALID"
        return result

    out_path = fixed_output_path(input_path)
    echo(f"Writing the output to {out_path}")
    try:
        _write_all_or_nothing(out_path, bytes(buf))
    except OSError as e:
        return _fail("E_IO", path=str(out_path), detail=str(e))

    result["status"] = "FIXED"
    result["output"] = str(out_path)
    return result
