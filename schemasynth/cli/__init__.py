"""schemasynth command line interface."""

from schemasynth.cli.main import app, main

__all__ = ["app", "main"]
