"""Locate and read schemasynth settings.

Settings come from one of three places:

- the ``[tool.schemasynth]`` table of a ``pyproject.toml`` found in the
  working directory or above it;
- a standalone TOML file whose top level holds the settings;
- a YAML document with ``kind: Config`` whose ``spec`` holds the settings,
  named explicitly or through ``SCHEMASYNTH_CONFIG_PATH``.

``${VAR}`` placeholders in string values are expanded, then ``SCHEMASYNTH_*``
variables replace whatever the file said.
"""

from __future__ import annotations

import os
import re
import tomllib
from collections.abc import Iterator
from functools import lru_cache
from pathlib import Path
from typing import Any, cast

import yaml

from schemasynth.core.config.models import LoggingConfig, SynthConfig
from schemasynth.core.exceptions import ConfigurationError
from schemasynth.core.logging import get_logger

TOOL_SECTION = "schemasynth"
PYPROJECT = "pyproject.toml"

_BOOL_WORDS = {
    **dict.fromkeys(("true", "1", "yes", "on", "enabled"), True),
    **dict.fromkeys(("false", "0", "no", "off", "disabled"), False),
}

logger = get_logger(__name__)


def _parse_bool_env(value: str) -> bool:
    """Interpret an on/off style environment value.

    Raises
    ------
    ValueError
        For anything outside the known spellings
    """
    try:
        return _BOOL_WORDS[value.strip().lower()]
    except KeyError:
        raise ValueError(f"{value!r} is not one of {sorted(_BOOL_WORDS)}") from None


def _csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def _has_tool_section(pyproject: Path) -> bool:
    with pyproject.open("rb") as fh:
        return TOOL_SECTION in tomllib.load(fh).get("tool", {})


@lru_cache(maxsize=32)
def _cached_read(resolved: str) -> SynthConfig:
    return ConfigLoader().read(Path(resolved))


class ConfigLoader:
    """Reads a settings file into a :class:`SynthConfig`."""

    PLACEHOLDER = re.compile(r"\$\{([^}]+)\}")

    def load_config_file(self, path: str | Path | None = None) -> SynthConfig:
        """Read the settings file at ``path``, or the first one discovered.

        Results are cached per absolute path until clear_config_cache().

        Raises
        ------
        FileNotFoundError
            When ``path`` does not exist, or nothing is discovered
        """
        found = self._locate(path)
        return _cached_read(str(found.absolute()))

    def read(self, config_path: Path) -> SynthConfig:
        """Parse one file without consulting the cache."""
        logger.info("Reading settings from {path}", path=config_path)
        if config_path.suffix in {".yml", ".yaml"}:
            raw = self._yaml_spec(config_path)
        else:
            raw = self._toml_table(config_path)
        return self._parse_config(self.expand(raw))

    def _yaml_spec(self, config_path: Path) -> dict[str, Any]:
        document = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        if not isinstance(document, dict) or document.get("kind") != "Config":
            raise ConfigurationError(str(config_path), "expected a 'kind: Config' document")
        spec = document.get("spec", {})
        if not isinstance(spec, dict):
            raise ConfigurationError(str(config_path), "'spec' must be a mapping")
        return spec

    def _toml_table(self, config_path: Path) -> dict[str, Any]:
        document = tomllib.loads(config_path.read_text(encoding="utf-8"))
        table = document.get("tool", {}).get(TOOL_SECTION)
        if table is not None:
            return table
        if config_path.name != PYPROJECT:
            return document
        logger.warning(
            "No [tool.schemasynth] section in {path}, falling back to defaults",
            path=config_path,
        )
        return {}

    def _candidates(self) -> Iterator[Path]:
        if env_path := os.getenv("SCHEMASYNTH_CONFIG_PATH"):
            chosen = Path(env_path)
            if chosen.exists():
                logger.debug("SCHEMASYNTH_CONFIG_PATH points at {}", chosen)
                yield chosen
            else:
                logger.warning("SCHEMASYNTH_CONFIG_PATH names a missing file: {}", chosen)

        here = Path.cwd()
        for directory in (here, *here.parents):
            pyproject = directory / PYPROJECT
            if not pyproject.exists():
                continue
            if _has_tool_section(pyproject):
                yield pyproject
            else:
                logger.debug("Skipping {path}: no [tool.schemasynth] table", path=pyproject)

    def _locate(self, path: str | Path | None) -> Path:
        """Resolve the settings file.

        An explicit ``path`` wins. Otherwise ``SCHEMASYNTH_CONFIG_PATH`` is
        tried, then the nearest ``pyproject.toml`` with a ``[tool.schemasynth]``
        table, starting in the working directory and walking up.
        """
        if path:
            explicit = Path(path)
            if not explicit.exists():
                raise FileNotFoundError(f"Configuration file not found: {explicit}")
            return explicit

        found = next(self._candidates(), None)
        if found is None:
            raise FileNotFoundError(
                "No schemasynth settings found; pass a file, set SCHEMASYNTH_CONFIG_PATH "
                "or add [tool.schemasynth] to pyproject.toml"
            )
        return found

    def expand(self, value: Any) -> Any:
        """Replace ``${VAR}`` in every string nested in ``value``.

        Unset variables are left as written and reported.
        """
        match value:
            case str():
                return self.PLACEHOLDER.sub(self._lookup, value)
            case dict():
                return {key: self.expand(item) for key, item in value.items()}
            case list():
                return [self.expand(item) for item in value]
            case _:
                return value

    @staticmethod
    def _lookup(match: re.Match[str]) -> str:
        name = match.group(1)
        if name in os.environ:
            return os.environ[name]
        logger.warning("Environment variable {} is unset, leaving the placeholder", name)
        return match.group(0)

    def _parse_config(self, data: dict[str, Any]) -> SynthConfig:
        if depth := os.getenv("SCHEMASYNTH_MAX_DEPTH"):
            logger.debug("max_depth taken from SCHEMASYNTH_MAX_DEPTH={}", depth)
            data = {**data, "max_depth": depth}
        if content_types := os.getenv("SCHEMASYNTH_CONTENT_TYPES"):
            logger.debug("content types taken from SCHEMASYNTH_CONTENT_TYPES={}", content_types)
            data = {**data, "default_content_types": _csv(content_types)}

        raw_depth = data.get("max_depth", 5)
        try:
            max_depth = int(raw_depth)
        except (TypeError, ValueError):
            raise ConfigurationError("max_depth", f"not an integer: {raw_depth!r}") from None

        content = data.get("default_content_types", ("application/xml",))
        return SynthConfig(
            max_depth=max_depth,
            default_content_types=(content,) if isinstance(content, str) else tuple(content),
            openapi_version=str(data.get("openapi_version", "3.0.3")),
            logging=self._logging(data.get("logging", {})),
        )

    def _logging(self, table: dict[str, Any]) -> LoggingConfig:
        """Build the logging settings.

        ``SCHEMASYNTH_LOG_LEVEL``, ``SCHEMASYNTH_LOG_FORMAT``,
        ``SCHEMASYNTH_LOG_FILE`` and ``SCHEMASYNTH_LOG_COLOR`` override the table.
        """
        level = os.getenv("SCHEMASYNTH_LOG_LEVEL") or table.get("level", "WARNING")
        fmt = os.getenv("SCHEMASYNTH_LOG_FORMAT") or table.get("format", "structured")
        use_color = table.get("use_color", True)

        if color := os.getenv("SCHEMASYNTH_LOG_COLOR"):
            try:
                use_color = _parse_bool_env(color)
            except ValueError as e:
                logger.warning("Ignoring SCHEMASYNTH_LOG_COLOR: {}", e)

        return LoggingConfig(
            level=cast("Any", level.upper()),
            format=cast("Any", fmt.lower()),
            output_file=os.getenv("SCHEMASYNTH_LOG_FILE") or table.get("output_file"),
            use_color=use_color,
            include_timestamp=table.get("include_timestamp", True),
        )


def load_config(path: str | Path | None = None) -> SynthConfig:
    """Return the discovered settings, or defaults when there are none.

    A ``path`` that does not exist is still an error.
    """
    loader = ConfigLoader()
    try:
        return loader.load_config_file(path)
    except FileNotFoundError:
        if path:
            raise
    logger.info("No settings file found, using defaults")
    return loader._parse_config({})


def clear_config_cache() -> None:
    """Forget parsed files so edits and env changes are picked up."""
    _cached_read.cache_clear()
