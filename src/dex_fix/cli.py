import json
from pathlib import Path
import click
from .const import ERRORS, EXIT_FAIL, EXIT_OK, EXIT_USAGE
from .logic import fix_file

BANNER = "Dex Signature/Checksum Fixer"

MESSAGES = {
    "E_INPUT_MISSING": "Input file does not exist! See usage by not passing any arguments.",
    "E_DEX_MAGIC": "Input file is not a dex file! See usage by not passing any arguments.",
}


def _emit_json(result: dict) -> None:
    click.echo(json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False))


def _report_failure(result: dict) -> int:
    err = result["errors"][0]
    if err["code"] == "E_IO":
        # Fatal, single-line reason
        click.echo(f"FATAL: {ERRORS['E_IO']}: {err['detail']}")
        return EXIT_FAIL
    click.echo(MESSAGES.get(err["code"], err.get("detail", err["message"])))
    return EXIT_USAGE


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("paths", nargs=-1, type=click.Path(path_type=Path))
@click.option("--check", is_flag=True, help="Only report whether the header is valid; never write output")
@click.option("--json", "as_json", is_flag=True, help="Print a single JSON result object")
def main(paths: tuple[Path, ...], check: bool, as_json: bool) -> None:
    """Recompute the SHA-1 signature and Adler-32 checksum of a DEX file header."""
    echo = (lambda _msg: None) if as_json else click.echo
    echo(BANNER)

    if len(paths) != 1:
        if as_json:
            _emit_json({"status": "FAIL", "error_count": 1,
                        "errors": [{"code": "E_USAGE", "message": ERRORS["E_USAGE"], "count": len(paths)}]})
        else:
            click.echo(f"Usage: {click.get_current_context().info_name} inputFilePath")
        raise SystemExit(EXIT_USAGE)

    result = fix_file(paths[0], check_only=check, echo=echo)

    if as_json:
        _emit_json(result)
        if result["status"] == "FAIL":
            raise SystemExit(EXIT_FAIL if result["errors"][0]["code"] == "E_IO" else EXIT_USAGE)
        raise SystemExit(EXIT_FAIL if result["status"] == "INVALID" else EXIT_OK)

    status = result["status"]
    if status == "FAIL":
        raise SystemExit(_report_failure(result))
    if status == "VALID":
        click.echo("Checksum and signature are already valid for the input file, program exiting...")
    elif status == "INVALID":
        click.echo(
            f"Header is not valid (signature valid: {result['signature_valid']}, "
            f"checksum valid: {result['checksum_valid']}), nothing written."
        )
        raise SystemExit(EXIT_FAIL)
    else:
        click.echo("Done, program exiting...")
    raise SystemExit(EXIT_OK)


if __name__ == "__main__":
    main()
