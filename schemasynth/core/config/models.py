"""Configuration data models for schemasynth."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from schemasynth.core.exceptions import ConfigurationError


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging configuration.

    Attributes
    ----------
    level : str, default="WARNING"
        Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    format : str, default="structured"
        Output format (console, json, structured, rich)
    output_file : str | None, default=None
        Optional file path to write JSON logs to
    use_color : bool, default=True
        Use ANSI color codes (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include timestamp in log output

    Examples
    --------
    TOML configuration:

    ```toml
    [tool.schemasynth.logging]
    level = "DEBUG"
    format = "rich"
    ```
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "structured", "rich"] = "structured"
    output_file: str | None = None
    use_color: bool = True
    include_timestamp: bool = True


@dataclass(frozen=True, slots=True)
class SynthConfig:
    """Settings for one API description build.

    Attributes
    ----------
    max_depth : int, default=5
        Levels of indirection/collection/wrapper nesting resolved before the
        ``default`` sentinel is substituted
    default_content_types : tuple[str, ...], default=("application/xml",)
        Content types used for a response that names none
    openapi_version : str, default="3.0.3"
        Value of the document's ``openapi`` member
    logging : LoggingConfig
        Logging settings

    Examples
    --------
    ```toml
    [tool.schemasynth]
    max_depth = 8
    default_content_types = ["application/json", "application/xml"]
    ```
    """

    max_depth: int = 5
    default_content_types: tuple[str, ...] = ("application/xml",)
    openapi_version: str = "3.0.3"
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        if self.max_depth < 1:
            raise ConfigurationError("max_depth", f"must be at least 1, got {self.max_depth}")
        if not self.default_content_types:
            raise ConfigurationError("default_content_types", "at least one content type required")
