"""
Configuration Schemas for the incremental schema engine.

Pydantic models describing how a schema is split into lazily loaded
modules, and the runtime switches of the manager.

Usage:
    schema_map = SchemaModuleMap(
        modules=[load_calendar, load_chats],
        shared_module=load_shared,
        dependencies={0: [1]},
        types={
            "Query": {"events": 0, "chats": 1},
            "Mutation": {"addEvent": 0},
        },
    )
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidSchemaDefinition


class RootTypeNames(BaseModel):
    """
    Names of the three root operation types.

    Override when the schema renames its roots, e.g.
    ``schema { query: RootQuery }``.
    """

    model_config = ConfigDict(frozen=True)

    query: str = Field(default="Query", description="Root type for query operations")
    mutation: str = Field(default="Mutation", description="Root type for mutations")
    subscription: str = Field(default="Subscription", description="Root type for subscriptions")

    def for_operation(self, operation: str) -> str:
        """Map an operation keyword (query, mutation, subscription) to its root type."""
        return getattr(self, operation)

    def names(self) -> tuple[str, str, str]:
        return (self.query, self.mutation, self.subscription)


class IncrementalSchemaOptions(BaseModel):
    """
    Runtime switches for SchemaModulesManager.

    Attributes:
        memoize_loaders: Run each module loader at most once per manager.
            When disabled, every cache-missing build calls the loaders again.
        serialize_operations: Guard the active set and schema cache with a
            lock so overlapping operations resolve one at a time. When
            disabled, the manager must be used by a single caller at a time.
    """

    memoize_loaders: bool = True
    serialize_operations: bool = True


class SchemaModuleMap(BaseModel):
    """
    Map between root-level fields and lazily loaded schema modules.

    Attributes:
        modules: Ordered loaders, the index of a loader is its module id
        shared_module: Loader of the module included in every schema
        dependencies: Module id -> ids of modules it needs
        types: Root type name -> {field name: owning module id}
        root_types: Names of the root operation types
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    modules: list[Callable[[], Any]] = Field(default_factory=list)
    shared_module: Callable[[], Any]
    dependencies: dict[int, list[int]] = Field(default_factory=dict)
    types: dict[str, dict[str, int]] = Field(default_factory=dict)
    root_types: RootTypeNames = Field(default_factory=RootTypeNames)

    def check(self) -> None:
        """
        Validate root type naming and field ownership.

        Raises:
            InvalidSchemaDefinition: If a root type name is empty or repeated,
                if ``types`` uses an unknown root type, or if a field is owned
                by a module id that does not exist.
        """
        names = self.root_types.names()
        for kind, name in zip(("query", "mutation", "subscription"), names):
            if not name:
                raise InvalidSchemaDefinition(f"Root type for '{kind}' is not defined")
        if len(set(names)) != len(names):
            raise InvalidSchemaDefinition(f"Root type names must be unique, got {list(names)}")

        for type_name, fields in self.types.items():
            if type_name not in names:
                raise InvalidSchemaDefinition(
                    f"'{type_name}' is not a root type (expected one of {list(names)})"
                )
            for field_name, module_id in fields.items():
                if not 0 <= module_id < len(self.modules):
                    raise InvalidSchemaDefinition(
                        f"{type_name}.{field_name} points at module {module_id}, "
                        f"but only {len(self.modules)} modules are defined"
                    )
