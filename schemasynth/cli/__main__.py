#!/usr/bin/env python3
"""Entry point for schemasynth CLI when run as python -m schemasynth.cli."""

if __name__ == "__main__":
    from schemasynth.cli.main import main

    main()
