"""
Main CLI entry point using Typer.

This module defines the command-line interface for descriptor-schema. It
provides two commands: schema and validate.
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from descriptor_schema.utils import setup_logging

from .commands import schema_command, validate_command
from .display import print_error


app = typer.Typer(
    name="descriptor-schema",
    help="descriptor-schema - JSON Schema from structural type descriptors",
    add_completion=False,
    rich_markup_mode="rich"
)


@app.command("schema")
def schema(
    descriptor: Annotated[
        Optional[Path],
        typer.Option("--descriptor", "-d", help="Path to descriptor JSON file", exists=True, file_okay=True, dir_okay=False)
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Pydantic model as module:ClassName")
    ] = None,
    keep_undefined: Annotated[
        bool,
        typer.Option("--keep-undefined", help="Keep a top-level '| undefined' as an anyOf branch")
    ] = False,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Fail on shapes JSON Schema can't express instead of accepting anything")
    ] = False,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Path to save the schema")
    ] = None,
) -> None:
    """
    Print the JSON Schema of a descriptor or Pydantic model.

    Example:
        descriptor-schema schema --descriptor user.descriptor.json --output user.schema.json
    """
    try:
        schema_command(
            descriptor_path=descriptor,
            model_ref=model,
            keep_undefined=keep_undefined,
            strict=strict,
            output_path=output
        )
    except Exception as e:
        print_error(f"Command failed: {e}")
        raise typer.Exit(code=1)


@app.command("validate")
def validate(
    json_file: Annotated[
        Path,
        typer.Option("--json", "-j", help="Path to JSON file to validate", exists=True, file_okay=True, dir_okay=False)
    ],
    descriptor: Annotated[
        Optional[Path],
        typer.Option("--descriptor", "-d", help="Path to descriptor JSON file", exists=True, file_okay=True, dir_okay=False)
    ] = None,
    model: Annotated[
        Optional[str],
        typer.Option("--model", "-m", help="Pydantic model as module:ClassName")
    ] = None,
    show_schema: Annotated[
        bool,
        typer.Option("--show-schema", help="Display the schema")
    ] = False,
) -> None:
    """
    Validate a JSON document against the schema of a descriptor or model.

    Example:
        descriptor-schema validate --json user.json --model app.models:User
    """
    try:
        validate_command(
            json_path=json_file,
            descriptor_path=descriptor,
            model_ref=model,
            show_schema=show_schema
        )
    except Exception as e:
        print_error(f"Command failed: {e}")
        raise typer.Exit(code=1)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit")
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log debug output")
    ] = False,
) -> None:
    """
    descriptor-schema - JSON Schema from structural type descriptors.
    """
    if version:
        from descriptor_schema import __version__
        typer.echo(f"descriptor-schema version {__version__}")
        raise typer.Exit()

    setup_logging("DEBUG" if verbose else "WARNING")

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def cli() -> None:
    """CLI entry point for the console script."""
    app()


if __name__ == "__main__":
    cli()
