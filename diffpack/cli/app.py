import json
from importlib.metadata import PackageNotFoundError, version as package_version
from pathlib import Path
from dataclasses import dataclass
from typing import Any

import typer

from diffpack.core.config import (
    DEFAULT_CONFIG,
    Config,
    equal_funcs as equal_funcs_option,
    load_config_file,
    verbosity as verbosity_option,
)
from diffpack.core.exceptions import DiffConfigError
from diffpack.diff import ComparisonResult, compare, render_differences, render_summary
from diffpack.render import format_full, format_short

app = typer.Typer(help="diffkit CLI")

VERBOSITY_ENV_VAR = "DIFFKIT_VERBOSITY"


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("diffkit")
    except PackageNotFoundError:
        from diffkit import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show diffkit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err)


def _load_json(path: Path) -> Any:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as error:
        raise DiffConfigError(f"document is not valid UTF-8 text: {path}") from error

    try:
        return json.loads(raw_text)
    except json.JSONDecodeError as error:
        raise DiffConfigError(f"invalid JSON document ({path}): {error}") from error


def _resolve_config(
    config_path: Path | None,
    verbosity: str | None,
    equal_funcs: bool,
) -> Config:
    base = DEFAULT_CONFIG
    if config_path is not None:
        try:
            base = load_config_file(config_path)
        except FileNotFoundError as error:
            raise DiffConfigError(f"config not found: {config_path}") from error
    options = []
    if verbosity is not None:
        options.append(verbosity_option(verbosity))
    if equal_funcs:
        options.append(equal_funcs_option(True))
    return base.with_options(*options)


def _compare_files(
    command: str,
    left: Path,
    right: Path,
    *,
    config_path: Path | None,
    verbosity: str | None,
    equal_funcs: bool,
    json_output: bool,
) -> tuple[ComparisonResult, Config]:
    try:
        config = _resolve_config(config_path, verbosity, equal_funcs)
        left_value = _load_json(left)
        right_value = _load_json(right)
    except (DiffConfigError, FileNotFoundError) as error:
        message = f"{command} failed: {error}"
        if json_output:
            _echo_json(
                {
                    "status": "error",
                    "exit_code": 1,
                    "message": message,
                    "left_path": str(left),
                    "right_path": str(right),
                }
            )
        else:
            _echo(message, err=True)
        raise typer.Exit(code=1) from error
    return compare(left_value, right_value, config=config), config


_LEFT_ARGUMENT = typer.Argument(..., help="Path to left JSON document.")
_RIGHT_ARGUMENT = typer.Argument(..., help="Path to right JSON document.")
_VERBOSITY_OPTION = typer.Option(
    None,
    "--verbosity",
    envvar=VERBOSITY_ENV_VAR,
    help="Difference output: auto, path-only, full.",
)
_CONFIG_OPTION = typer.Option(
    None,
    "--config",
    help="Path to JSON comparison config (verbosity, equal_funcs).",
)
_EQUAL_FUNCS_OPTION = typer.Option(
    False,
    "--equal-funcs",
    help="Treat all function values as equal.",
)
_JSON_OPTION = typer.Option(
    False,
    "--json",
    help="Emit machine-readable output.",
)
_MAX_DIFFERENCES_OPTION = typer.Option(
    None,
    "--max-differences",
    min=1,
    help="Maximum number of differences to print in text mode.",
)


@app.command()
def diff(
    left: Path = _LEFT_ARGUMENT,
    right: Path = _RIGHT_ARGUMENT,
    verbosity: str | None = _VERBOSITY_OPTION,
    config_path: Path | None = _CONFIG_OPTION,
    equal_funcs: bool = _EQUAL_FUNCS_OPTION,
    json_output: bool = _JSON_OPTION,
    max_differences: int | None = _MAX_DIFFERENCES_OPTION,
) -> None:
    """Print every difference between two JSON documents."""
    result, config = _compare_files(
        "diff",
        left,
        right,
        config_path=config_path,
        verbosity=verbosity,
        equal_funcs=equal_funcs,
        json_output=json_output,
    )

    if json_output:
        _echo_json(
            {
                **result.to_dict(),
                "status": "ok",
                "exit_code": 0,
                "message": "diff completed",
                "left_path": str(left),
                "right_path": str(right),
            }
        )
        return

    _echo(render_differences(result, level=config.level, max_differences=max_differences))


@app.command(name="assert")
def assert_documents(
    left: Path = _LEFT_ARGUMENT,
    right: Path = _RIGHT_ARGUMENT,
    verbosity: str | None = _VERBOSITY_OPTION,
    config_path: Path | None = _CONFIG_OPTION,
    equal_funcs: bool = _EQUAL_FUNCS_OPTION,
    json_output: bool = _JSON_OPTION,
    max_differences: int | None = _MAX_DIFFERENCES_OPTION,
) -> None:
    """Fail when two JSON documents differ."""
    result, config = _compare_files(
        "assert",
        left,
        right,
        config_path=config_path,
        verbosity=verbosity,
        equal_funcs=equal_funcs,
        json_output=json_output,
    )
    exit_code = 0 if result.identical else 1

    if json_output:
        _echo_json(
            {
                **result.to_dict(),
                "status": "pass" if result.identical else "fail",
                "exit_code": exit_code,
                "left_path": str(left),
                "right_path": str(right),
            }
        )
    elif result.identical:
        _echo(f"assert passed: left={left} right={right}")
    else:
        _echo(
            f"assert failed: {render_summary(result)} (left={left} right={right})",
            force=True,
        )
        _echo(render_differences(result, level=config.level, max_differences=max_differences))

    if exit_code:
        raise typer.Exit(code=exit_code)


@app.command()
def show(
    document: Path = typer.Argument(..., help="Path to JSON document."),
    short: bool = typer.Option(
        False,
        "--short",
        help="Render on one line, eliding nested content.",
    ),
) -> None:
    """Pretty-print a JSON document."""
    try:
        value = _load_json(document)
    except (DiffConfigError, FileNotFoundError) as error:
        _echo(f"show failed: {error}", err=True)
        raise typer.Exit(code=1) from error

    _echo(format_short(value, False) if short else format_full(value))


def main() -> None:
    app()
