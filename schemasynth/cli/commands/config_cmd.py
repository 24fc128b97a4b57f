"""Configuration management commands."""

import dataclasses
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.syntax import Syntax

from schemasynth.cli.utils import apply_logging, render
from schemasynth.core.config import load_config
from schemasynth.core.exceptions import SchemaSynthError

app = typer.Typer(help="Configuration management commands")
console = Console()


@app.command("show")
def show_config(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a configuration file"),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (yaml, json)"),
    ] = "yaml",
    pretty: Annotated[
        bool,
        typer.Option("--pretty/--plain", help="Syntax-highlight the output"),
    ] = False,
) -> None:
    """Show the effective configuration (file values with env overrides applied)."""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, SchemaSynthError) as e:
        Console(stderr=True).print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    apply_logging(ctx, config)

    data = dataclasses.asdict(config)
    data["default_content_types"] = list(config.default_content_types)
    output = render(data, format)
    if pretty:
        console.print(Syntax(output, format, theme="monokai", line_numbers=False))
    else:
        typer.echo(output)
