import json
from importlib.metadata import PackageNotFoundError, version as package_version
import logging
from pathlib import Path
import sys
from dataclasses import dataclass
from typing import Any

import typer

from changepack.cli.documents import DocumentError, load_document
from changepack.core.exceptions import UnsupportedStrategyError
from changepack.diff import diff_with, list_strategies
from changepack.plugins import PluginError
from changepack.reporting import (
    changeset_to_dict,
    flatten_changes,
    render_changes,
    render_changeset_summary,
)

app = typer.Typer(help="ChangeKit CLI")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("changekit")
    except PackageNotFoundError:
        from changekit import __version__ as local_version

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
        help="Show ChangeKit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log engine debug records to stderr.",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, separators=(",", ":"))
    else:
        rendered = json.dumps(payload, ensure_ascii=True, sort_keys=True, indent=2)
    typer.echo(rendered, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _fail(
    message: str,
    *,
    exit_code: int,
    json_output: bool,
    source: Path,
    target: Path,
) -> typer.Exit:
    if json_output:
        _echo_json(
            {
                "status": "error",
                "exit_code": exit_code,
                "message": message,
                "source_path": str(source),
                "target_path": str(target),
            }
        )
    else:
        _echo(message, err=True)
    return typer.Exit(code=exit_code)


@app.command()
def diff(
    source: Path = typer.Argument(..., help="Path to the source JSON document."),
    target: Path = typer.Argument(..., help="Path to the target JSON document."),
    strategy: str | None = typer.Option(
        None,
        "--strategy",
        help="Value strategy for mappings, e.g. 'simple', 'arbitrary' or 'arbitrarily>simply'.",
    ),
    sort_keys: bool = typer.Option(
        False,
        "--sort-keys",
        help="Report mapping keys and set members in sorted order at every depth.",
    ),
    lists_as_sets: bool = typer.Option(
        False,
        "--lists-as-sets",
        help=(
            "Treat JSON arrays of scalars as sets. Members that compare equal "
            "merge, so 1, 1.0 and true count as one member."
        ),
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable changeset output.",
    ),
    max_changes: int = typer.Option(
        8,
        "--max-changes",
        help="Maximum number of leaf changes to print in text mode.",
    ),
) -> None:
    """Diff two JSON documents and list the changes between them."""
    try:
        source_doc = load_document(source, lists_as_sets=lists_as_sets)
        target_doc = load_document(target, lists_as_sets=lists_as_sets)
    except DocumentError as error:
        raise _fail(
            f"diff failed: {error}",
            exit_code=1,
            json_output=json_output,
            source=source,
            target=target,
        ) from error

    try:
        result = diff_with(source_doc, target_doc, strategy, sort_keys=sort_keys)
    except UnsupportedStrategyError as error:
        raise _fail(
            f"diff failed: {error}",
            exit_code=2,
            json_output=json_output,
            source=source,
            target=target,
        ) from error
    except PluginError as error:
        raise _fail(
            f"diff failed: plugin error: {error}",
            exit_code=1,
            json_output=json_output,
            source=source,
            target=target,
        ) from error

    if json_output:
        _echo_json(
            {
                **changeset_to_dict(result),
                "changes": [line.to_dict() for line in flatten_changes(result)],
                "status": "ok",
                "exit_code": 0,
                "message": "diff completed",
                "source_path": str(source),
                "target_path": str(target),
            }
        )
        return

    _echo(render_changeset_summary(result))
    _echo(render_changes(result, max_changes=max_changes))


@app.command()
def strategies(
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable strategy list.",
    ),
) -> None:
    """List registered value strategies and the result shape they produce."""
    registered = list_strategies()
    if json_output:
        _echo_json({"strategies": [{"name": name, "shape": shape} for name, shape in registered]})
        return
    for name, shape in registered:
        _echo(f"{name}\t{shape}")


def main() -> None:
    app()


if __name__ == "__main__":
    main()
