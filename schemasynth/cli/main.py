"""Top-level ``schemasynth`` command."""

from typing import Annotated

import typer
from rich.console import Console

from schemasynth import __version__
from schemasynth.cli.commands import config_cmd, schema_cmd
from schemasynth.core.logging import configure_logging

app = typer.Typer(
    name="schemasynth",
    help="Turn Python type hints into OpenAPI component schemas and response tables.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)
app.add_typer(schema_cmd.app, name="schema", help="Derive schemas and response descriptors")
app.add_typer(config_cmd.app, name="config", help="Inspect the effective settings")

console = Console()


def _print_version(requested: bool) -> None:
    # eager: must run before click complains about the missing subcommand
    if not requested:
        return
    console.print(f"[bold blue]schemasynth[/bold blue] {__version__}")
    raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    quiet: Annotated[bool, typer.Option("-q", "--quiet", help="Only report errors")] = False,
    verbose: Annotated[
        bool, typer.Option("-V", "--verbose", help="Report debug detail")
    ] = False,
    log_level: Annotated[
        str | None, typer.Option("--log-level", help="debug, info, warning or error")
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version", "-v", callback=_print_version, is_eager=True, help="Print the version"
        ),
    ] = False,
) -> None:
    """Derive OpenAPI component schemas from Python types."""
    if quiet:
        log_level = "error"
    elif verbose:
        log_level = "debug"
    # subcommands swap in the configured handlers; only an explicit level survives that
    ctx.obj = {"log_level": log_level}
    early_level = (log_level or "warning").upper()
    configure_logging(level=early_level, format="console")  # type: ignore[arg-type]


def main() -> None:
    app()


if __name__ == "__main__":
    main()
