"""Schema derivation commands for schemasynth CLI."""

import dataclasses
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from schemasynth.cli.utils import apply_logging, import_target, render
from schemasynth.core.config import SynthConfig, load_config
from schemasynth.core.exceptions import SchemaSynthError
from schemasynth.openapi import OpenAPIDocument, Response, option_add_response

app = typer.Typer(help="Derive schemas and response descriptors")
console = Console(stderr=True)


def _build_document(
    ctx: typer.Context, config_path: Path | None, max_depth: int | None
) -> OpenAPIDocument:
    try:
        config: SynthConfig = load_config(config_path)
        if max_depth is not None:
            config = dataclasses.replace(config, max_depth=max_depth)
    except (FileNotFoundError, SchemaSynthError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e
    apply_logging(ctx, config)
    return OpenAPIDocument(config)


@app.command("show")
def show_schema(
    ctx: typer.Context,
    target: Annotated[str, typer.Argument(help="Type to resolve (e.g., myapp.models:User)")],
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (json, yaml)"),
    ] = "json",
    max_depth: Annotated[
        int | None,
        typer.Option("--max-depth", help="Override the configured depth bound"),
    ] = None,
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a configuration file"),
    ] = None,
) -> None:
    """Resolve a type and print its tag and the component schemas it registered.

    Examples
    --------
    schemasynth schema show myapp.models:User
    schemasynth schema show myapp.models:User --format yaml --max-depth 3
    """
    type_hint = import_target(target)
    document = _build_document(ctx, config_path, max_depth)

    try:
        tag = document.schema_tag_from_type(type_hint)
    except SchemaSynthError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    output: dict[str, Any] = {
        "name": tag.name,
        "schema": tag.as_ref().to_dict(),
        "components": {"schemas": document.registry.to_dict()},
    }
    typer.echo(render(output, format))


@app.command("response")
def show_response(
    ctx: typer.Context,
    target: Annotated[str, typer.Argument(help="Response type (e.g., myapp.models:User)")],
    code: Annotated[int, typer.Option("--code", help="HTTP status code")] = 200,
    description: Annotated[
        str, typer.Option("--description", "-d", help="Response description")
    ] = "OK",
    content_types: Annotated[
        list[str] | None,
        typer.Option("--content-type", help="Content type (repeatable)"),
    ] = None,
    format: Annotated[
        str,
        typer.Option("--format", "-f", help="Output format (json, yaml)"),
    ] = "json",
    config_path: Annotated[
        Path | None,
        typer.Option("--config", "-c", help="Path to a configuration file"),
    ] = None,
) -> None:
    """Describe a type as an operation response and print the document.

    Examples
    --------
    schemasynth schema response myapp.models:User --code 201
    schemasynth schema response myapp.models:User --content-type application/json
    """
    type_hint = import_target(target)
    document = _build_document(ctx, config_path, None)

    response = Response(type=type_hint, content_types=list(content_types or []))
    try:
        document.add_route("get", "/", option_add_response(code, description, response))
    except SchemaSynthError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    operation = document.paths["/"]["get"].to_dict()
    output = {
        "responses": operation["responses"],
        "components": {"schemas": document.registry.to_dict()},
    }
    typer.echo(render(output, format))
