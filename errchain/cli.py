from __future__ import annotations

import json
import logging
from typing import Any

import typer
from rich.console import Console
from rich.markup import escape
from rich.tree import Tree

from errchain.core.build.build_chains import build_chains, check_expectations
from errchain.core.chain import ErrorChain
from errchain.core.errors import ChainError, ChainLoadError, ChainValidationError
from errchain.core.io.load_chains import load_chain_file

app = typer.Typer(add_completion=False, no_args_is_help=True)
console = Console()


@app.callback()
def _callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """errchain CLI."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@app.command("render")
def render(
    path: str = typer.Argument(..., help="Path to a chain file (.yaml/.yml/.json)"),
    name: str | None = typer.Option(None, "--name", help="Render only this entry"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Build the chains described in a file and print their renderings."""
    _check_format("render", format)

    doc, built = _load_and_build("render", path, format)

    if name is not None:
        if name not in built:
            err = ChainValidationError(
                code="E_RENDER_UNKNOWN_NAME",
                message=f"--name references unknown entry: {name}",
                file=doc.get("__file__"),
                path="name",
            )
            if format == "json":
                _emit_json("render", False, errors=[err], exit_code=2)
            _print_errors([err])
            raise typer.Exit(code=2)
        built = {name: built[name]}

    rendered = {k: str(v) for k, v in built.items()}
    if format == "json":
        _emit_json("render", True, errors=[], exit_code=0, chains=rendered)

    for k, v in rendered.items():
        typer.echo(f"{k}: {v}")


@app.command("check")
def check(
    path: str = typer.Argument(..., help="Path to a chain file (.yaml/.yml/.json)"),
    format: str = typer.Option("text", "--format", help="Output format: text|json"),
) -> None:
    """Check every `expect` value in a chain file against the actual rendering."""
    _check_format("check", format)

    doc, built = _load_and_build("check", path, format)
    mismatches = check_expectations(doc, built)
    checked = sum(1 for raw in doc["errors"].values() if isinstance(raw, dict) and "expect" in raw)

    if format == "json":
        _emit_json(
            "check",
            not mismatches,
            errors=mismatches,
            exit_code=2 if mismatches else 0,
            chains={k: str(v) for k, v in built.items()},
        )

    if mismatches:
        _print_errors(mismatches)
        raise typer.Exit(code=2)
    typer.echo(f"OK: {checked} expectation(s) matched")


@app.command("show")
def show(
    path: str = typer.Argument(..., help="Path to a chain file (.yaml/.yml/.json)"),
    name: str = typer.Argument(..., help="Entry to show"),
) -> None:
    """Print the structure of one chain as a tree."""
    doc, built = _load_and_build("show", path, "text")
    if name not in built:
        _print_errors(
            [
                ChainValidationError(
                    code="E_SHOW_UNKNOWN_NAME",
                    message=f"unknown entry: {name}",
                    file=doc.get("__file__"),
                    path="name",
                )
            ]
        )
        raise typer.Exit(code=2)

    err = built[name]
    console.print(escape(f"{name}: {err}"))
    console.print(_chain_tree(err))


def _chain_tree(err: Any, label: str = "") -> Tree:
    if not isinstance(err, ErrorChain):
        return Tree(escape(f"{label}{type(err).__name__}: {err}"))

    title = f"{label}{err.text!r}"
    if err.is_template:
        title += " (template)"
    tree = Tree(escape(title))
    if err.data is not None:
        tree.add(escape(f"data: {err.data!r}"))
    if err.cause is not None:
        tree.add(_chain_tree(err.cause, "cause: "))
    for x in err.extras:
        tree.add(_chain_tree(x, "extra: "))
    if err.wrapped is not None:
        tree.add(_chain_tree(err.wrapped, "wraps: "))
    return tree


def _check_format(command: str, format: str) -> None:
    if format in ("text", "json"):
        return
    _print_errors(
        [
            ChainValidationError(
                code=f"E_{command.upper()}_UNKNOWN_FORMAT",
                message=f"unknown format: {format} (choose one of: text, json)",
                file=None,
                path="format",
            )
        ]
    )
    raise typer.Exit(code=2)


def _load_and_build(command: str, path: str, format: str) -> tuple[dict[str, Any], dict[str, Any]]:
    try:
        doc = load_chain_file(path)
    except ChainLoadError as e:
        if format == "json":
            _emit_json(command, False, errors=[e], exit_code=1)
        _print_errors([e])
        raise typer.Exit(code=1)

    built, errors = build_chains(doc)
    if errors or built is None:
        if format == "json":
            _emit_json(command, False, errors=errors, exit_code=2)
        _print_errors(errors)
        raise typer.Exit(code=2)
    return doc, built


def _emit_json(
    command: str,
    ok: bool,
    *,
    errors: list[ChainError],
    exit_code: int,
    chains: dict[str, str] | None = None,
) -> None:
    payload = {
        "tool": "errchain",
        "command": command,
        "ok": ok,
        "error_count": len(errors),
        "errors": [e.to_item() for e in errors],
        "chains": chains,
    }
    typer.echo(json.dumps(payload, indent=2, sort_keys=True))
    raise typer.Exit(code=exit_code)


def _print_errors(errors: list[ChainError]) -> None:
    errors_sorted = sorted(errors, key=lambda e: (e.file or "", e.path or "", e.code))
    for e in errors_sorted:
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="errchain")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
