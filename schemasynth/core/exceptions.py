"""Core exception hierarchy for schemasynth.

All schemasynth exceptions inherit from SchemaSynthError so callers can catch
every fatal derivation failure in one place. Recoverable conditions (missing
properties, malformed examples, malformed bounds) are logged and never raised.
"""

from __future__ import annotations

# ============================================================================
# Base Exception
# ============================================================================


class SchemaSynthError(Exception):
    """Base exception for all schemasynth errors."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(SchemaSynthError):
    """Raised when configuration is invalid or a helper is misused.

    Examples
    --------
    Example usage::

        raise ConfigurationError("option_add_error", "at most one error type may be supplied")
    """

    def __init__(self, component: str, reason: str) -> None:
        """Initialize configuration error.

        Args
        ----
            component: Name of the component with invalid configuration
            reason: Explanation of what's wrong
        """
        super().__init__(f"Configuration error in '{component}': {reason}")
        self.component = component
        self.reason = reason


# ============================================================================
# Derivation Errors
# ============================================================================


class MissingTypeError(SchemaSynthError):
    """Raised when a type is mandatory but none was supplied.

    Examples
    --------
    Example usage::

        raise MissingTypeError("Response")
    """

    def __init__(self, context: str) -> None:
        super().__init__(f"Type in {context} cannot be None")
        self.context = context


class SchemaNameCollisionError(SchemaSynthError):
    """Raised when two distinct types resolve to the same schema name.

    Examples
    --------
    Example usage::

        raise SchemaNameCollisionError("User", "app.v1.User", "app.v2.User")
    """

    def __init__(self, name: str, existing: str, requested: str) -> None:
        """Initialize collision error.

        Args
        ----
            name: Schema name both types resolve to
            existing: Qualified name of the type already registered under ``name``
            requested: Qualified name of the type that collided
        """
        super().__init__(
            f"Schema name '{name}' is already taken by {existing}; cannot register {requested}"
        )
        self.name = name
        self.existing = existing
        self.requested = requested


class SchemaGenerationError(SchemaSynthError):
    """Raised when the baseline schema for a type cannot be synthesized."""

    def __init__(self, name: str, reason: str) -> None:
        super().__init__(f"Error generating schema '{name}': {reason}")
        self.name = name
        self.reason = reason


__all__ = [
    "SchemaSynthError",
    "ConfigurationError",
    "MissingTypeError",
    "SchemaNameCollisionError",
    "SchemaGenerationError",
]
