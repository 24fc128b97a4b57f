"""Shared pytest fixtures for schemasynth tests.

- log_capture: loguru records emitted during the test
- registry / walker / document: a fresh schema build context per test
"""

import pytest
from loguru import logger

from schemasynth.core.config import clear_config_cache
from schemasynth.core.schema import SchemaRegistry, TypeWalker
from schemasynth.openapi import OpenAPIDocument

_ENV_VARS = (
    "SCHEMASYNTH_CONFIG_PATH",
    "SCHEMASYNTH_MAX_DEPTH",
    "SCHEMASYNTH_CONTENT_TYPES",
    "SCHEMASYNTH_LOG_LEVEL",
    "SCHEMASYNTH_LOG_FORMAT",
    "SCHEMASYNTH_LOG_FILE",
    "SCHEMASYNTH_LOG_COLOR",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate tests from SCHEMASYNTH_* variables and cached config files."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def log_capture():
    """Fixture to capture loguru logs."""
    captured_logs: list[dict] = []

    def sink(message):
        record = message.record
        captured_logs.append({
            "level": record["level"].name,
            "message": record["message"],
            "extra": dict(record["extra"]),
        })

    handler_id = logger.add(sink, level="DEBUG", format="{message}")
    yield captured_logs
    logger.remove(handler_id)


@pytest.fixture
def registry() -> SchemaRegistry:
    return SchemaRegistry()


@pytest.fixture
def walker(registry: SchemaRegistry) -> TypeWalker:
    return TypeWalker(registry)


@pytest.fixture
def document() -> OpenAPIDocument:
    return OpenAPIDocument(title="Test API", version="1.0.0")
