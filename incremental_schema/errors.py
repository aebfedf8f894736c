"""
Errors raised by the incremental schema engine.

Every failure propagates to the caller of the per-operation resolution
step. The engine never retries on its own: module loads and schema
composition leave no state behind when they fail, so callers may retry.
"""

from __future__ import annotations


class IncrementalSchemaError(Exception):
    """Base class for all incremental schema errors."""


class MalformedOperation(IncrementalSchemaError):
    """Raised when a request document holds no usable operation definition."""

    def __init__(self, message: str = "No operation definition found in document"):
        super().__init__(message)


class InvalidSchemaDefinition(IncrementalSchemaError):
    """Raised at construction time when the module map is inconsistent."""

    def __init__(self, message: str):
        super().__init__(f"[schema_map] {message}")


class SchemaCompositionError(IncrementalSchemaError):
    """Raised by the schema builder when resolvers cannot be attached."""


class UnknownTypeError(SchemaCompositionError):
    """A resolver targets a type missing from the merged type definitions."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Type {type_name} is missing")


class UnknownFieldError(SchemaCompositionError):
    """A resolver targets a field missing from an existing type."""

    def __init__(self, type_name: str, field_name: str):
        self.type_name = type_name
        self.field_name = field_name
        super().__init__(f"{type_name}.{field_name} is missing")


class ModuleLoadError(IncrementalSchemaError):
    """
    Raised when a schema module loader fails.

    Attributes:
        module_id: Index of the failing module, or None for the shared module
    """

    def __init__(self, module_id: int | None, cause: BaseException):
        self.module_id = module_id
        self.cause = cause
        name = "shared module" if module_id is None else f"module {module_id}"
        super().__init__(f"Failed to load {name}: {cause}")
