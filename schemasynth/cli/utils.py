"""CLI helper utilities for schemasynth commands."""

from __future__ import annotations

import dataclasses
import importlib
import json
from typing import Any

import typer
import yaml

from schemasynth.core.config import SynthConfig
from schemasynth.core.logging import configure_logging, get_logger

logger = get_logger(__name__)


def import_target(target: str) -> Any:
    """Import the object named by ``package.module:Attribute``.

    Dotted attribute paths after the colon are followed (``mod:Outer.Inner``).

    Raises
    ------
    typer.BadParameter
        If the target is malformed or cannot be imported
    """
    module_name, sep, attr_path = target.partition(":")
    if not sep or not module_name or not attr_path:
        raise typer.BadParameter(f"Expected 'package.module:TypeName', got {target!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise typer.BadParameter(f"Cannot import module '{module_name}': {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise typer.BadParameter(f"'{attr}' not found in '{module_name}'") from e
    return obj


def render(data: Any, format: str) -> str:
    """Serialize ``data`` as JSON or YAML for terminal output."""
    if format == "json":
        return json.dumps(data, default=str, indent=2)
    if format == "yaml":
        return yaml.safe_dump(data, sort_keys=False, default_flow_style=False)
    raise typer.BadParameter(f"Unknown format {format!r}, expected 'json' or 'yaml'")


def apply_logging(ctx: typer.Context, config: SynthConfig) -> None:
    """Install the configured logging, keeping a level given on the command line."""
    settings = dataclasses.asdict(config.logging)
    if level := (ctx.obj or {}).get("log_level"):
        settings["level"] = level.upper()
    configure_logging(**settings, force_reconfigure=True)
    logger.debug(
        "Logging set to {level} ({format})", level=settings["level"], format=settings["format"]
    )
