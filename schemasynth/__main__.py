"""Entry point for running schemasynth as a module: ``python -m schemasynth``."""

from __future__ import annotations


def main() -> None:
    """Main entry point for module execution."""
    from schemasynth.cli import main as cli_main

    cli_main()


if __name__ == "__main__":
    main()
