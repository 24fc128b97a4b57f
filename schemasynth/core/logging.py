"""Loguru setup shared by every schemasynth module.

Schema derivation never raises for recoverable problems such as a tag that
names no property, a non-numeric integer example or a broken ``min=`` bound.
Those are reported as warnings on the loggers handed out here.

Examples
--------
>>> from schemasynth.core.logging import get_logger
>>> log = get_logger(__name__)
>>> log.debug("Registered schema {name}", name="User")

Switching output style for a whole process::

    from schemasynth.core.logging import configure_logging
    configure_logging(level="DEBUG", format="rich")
"""

import os
import sys
from collections.abc import Callable
from dataclasses import asdict, dataclass
from functools import lru_cache
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from loguru import logger
from rich.logging import RichHandler

if TYPE_CHECKING:
    from loguru import Logger

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_TIME = "{time:YYYY-MM-DD HH:mm:ss}"

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []


@dataclass(frozen=True, slots=True)
class _Settings:
    level: str
    format: str
    output_file: str | None
    use_color: bool
    include_timestamp: bool


def _plain_sink(settings: _Settings) -> int:
    stamp = f"{_TIME} " if settings.include_timestamp else ""
    return logger.add(
        sys.stderr,
        level=settings.level,
        format=stamp + "{level: <8} | {name} | {message}",
        colorize=False,
    )


def _json_sink(settings: _Settings) -> int:
    return logger.add(sys.stderr, level=settings.level, serialize=True)


def _located_sink(settings: _Settings) -> int:
    tty = settings.use_color and sys.stderr.isatty()
    stamp = f"<green>{_TIME}</green> " if settings.include_timestamp else ""
    level = "<level>{level: <8}</level>" if tty else "{level: <8}"
    where = "<cyan>{name}:{function}:{line}</cyan>"
    return logger.add(
        sys.stderr,
        level=settings.level,
        format=f"{stamp}[{level}]{where} | <level>{{message}}</level>",
        colorize=tty,
    )


def _rich_sink(settings: _Settings) -> int:
    handler = RichHandler(
        markup=False,
        rich_tracebacks=True,
        show_path=True,
        show_time=settings.include_timestamp,
    )
    return logger.add(handler, level=settings.level, format="{message}")


_SINKS: dict[str, Callable[[_Settings], int]] = {
    "console": _plain_sink,
    "json": _json_sink,
    "structured": _located_sink,
    "rich": _rich_sink,
}


def _drop_handlers() -> None:
    while _HANDLER_IDS:
        handler_id = _HANDLER_IDS.pop()
        try:
            logger.remove(handler_id)
        except ValueError:
            # already removed elsewhere, e.g. by logger.remove()
            continue


def configure_logging(
    level: LogLevel = "INFO",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
) -> None:
    """Install the schemasynth handlers on the global loguru logger.

    Only handlers added here are ever replaced, so sinks owned by the host
    application or by pytest survive. A repeat call with identical settings
    does nothing unless ``force_reconfigure`` is set.

    Parameters
    ----------
    level : LogLevel, default="INFO"
        Lowest level that reaches the sinks
    format : LogFormat, default="structured"
        ``console`` writes one plain line per record, ``json`` serializes
        records, ``structured`` adds the call site and colors, and ``rich``
        goes through a Rich handler
    output_file : str | Path | None, default=None
        Extra destination for serialized records, rotated at 10 MB
    use_color : bool, default=True
        Allow ANSI colors for ``structured`` when stderr is a terminal
    include_timestamp : bool, default=True
        Prefix records with the time
    force_reconfigure : bool, default=False
        Replace the handlers even if nothing changed
    """
    global _CURRENT_CONFIG

    settings = _Settings(
        level=level,
        format=format,
        output_file=str(output_file) if output_file else None,
        use_color=use_color,
        include_timestamp=include_timestamp,
    )
    wanted = asdict(settings)
    if wanted == _CURRENT_CONFIG and not force_reconfigure:
        return

    _drop_handlers()
    _HANDLER_IDS.append(_SINKS.get(format, _plain_sink)(settings))

    if settings.output_file is not None:
        target = Path(settings.output_file)
        target.parent.mkdir(parents=True, exist_ok=True)
        _HANDLER_IDS.append(
            logger.add(target, level=level, serialize=True, rotation="10 MB", retention="1 week")
        )

    _CURRENT_CONFIG = wanted


@lru_cache(maxsize=128)
def get_logger(name: str) -> "Logger":
    """Return the shared logger with ``module`` bound to ``name``.

    The first call in a process installs a default setup read from
    ``SCHEMASYNTH_LOG_LEVEL`` (default ``WARNING``) and
    ``SCHEMASYNTH_LOG_FORMAT`` (default ``structured``) unless
    configure_logging() ran already.
    """
    if _CURRENT_CONFIG is None:
        env_level = os.getenv("SCHEMASYNTH_LOG_LEVEL", "WARNING").upper()
        env_format = os.getenv("SCHEMASYNTH_LOG_FORMAT", "structured").lower()
        configure_logging(level=env_level, format=env_format)  # type: ignore[arg-type]
    return logger.bind(module=name)


def reset_logging() -> None:
    """Remove the handlers installed by configure_logging() and forget its settings."""
    global _CURRENT_CONFIG

    _drop_handlers()
    _CURRENT_CONFIG = None
