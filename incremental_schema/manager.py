"""
Schema Modules Manager.

Orchestrates lazy loading of schema modules for each operation:

    1. Route root-level fields to the modules that own them
    2. Expand those modules through the dependency map
    3. Add the modules not yet in use to the ones already in use
    4. Build the schema for that set, or reuse the last one built
    5. Build the context value
    6. Execute (``execute`` only; ``prepare`` stops after step 5)

The set of modules in use only ever grows, so once a session has asked
for a field, later operations keep getting a schema that contains it and
the single cached schema keeps matching.

Usage:
    manager = SchemaModulesManager(schema_map)
    result = await manager.execute(Operation.from_source("{ chats { id } }"))
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from contextlib import nullcontext
from dataclasses import dataclass
from typing import Any

from graphql import DocumentNode, ExecutionResult, GraphQLSchema, concat_ast, execute

from .builder import build_executable_schema
from .config import IncrementalSchemaOptions, SchemaModuleMap
from .dependencies import expand_dependencies
from .memo import SingleSlotMemo, hash_module_ids
from .modules import ModuleLoader, SchemaModule
from .operation import Operation
from .routing import collect_required_modules

logger = logging.getLogger(__name__)

SchemaBuilder = Callable[..., GraphQLSchema]
ContextBuilder = Callable[..., Any]


@dataclass(frozen=True)
class ComposedSchema:
    """
    Schema built from a set of modules.

    Attributes:
        schema: Executable schema
        modules: Loaded modules, requested ones first and the shared one last
        module_ids: Ids the schema was built from, in merge order
    """

    schema: GraphQLSchema
    modules: tuple[SchemaModule, ...]
    module_ids: tuple[int, ...]


@dataclass(frozen=True)
class PreparedOperation:
    """Schema and context value an operation should execute with."""

    schema: GraphQLSchema
    context_value: Any
    module_ids: tuple[int, ...]


class SchemaModulesManager:
    """
    Owns the modules in use and the last built schema for one session.

    Not a process-wide singleton: create one manager per client/session.
    With ``serialize_operations`` enabled (default) overlapping operations
    are resolved one at a time; otherwise callers must not overlap them.
    """

    def __init__(
        self,
        schema_map: SchemaModuleMap,
        *,
        schema_builder: SchemaBuilder = build_executable_schema,
        context_builder: ContextBuilder | None = None,
        options: IncrementalSchemaOptions | None = None,
    ):
        """
        Initialize manager.

        Args:
            schema_map: Modules, dependencies and field ownership
            schema_builder: Called with ``type_defs`` and ``resolvers``
            context_builder: Called with ``modules`` and ``operation``
            options: Runtime switches

        Raises:
            InvalidSchemaDefinition: If the map is inconsistent
        """
        schema_map.check()

        self._map = schema_map
        self._options = options or IncrementalSchemaOptions()
        self._loader = ModuleLoader(
            schema_map.modules,
            schema_map.shared_module,
            memoize=self._options.memoize_loaders,
        )
        self._schema_builder = schema_builder
        self._context_builder = context_builder
        self._used_modules: list[int] = []
        self._builds = 0
        self._build_schema = SingleSlotMemo(self._compose, hash_module_ids)
        self._lock = asyncio.Lock() if self._options.serialize_operations else None

    @property
    def used_modules(self) -> tuple[int, ...]:
        """Ids of modules already folded into the schema."""
        return tuple(self._used_modules)

    @property
    def builds(self) -> int:
        """Number of schemas composed so far."""
        return self._builds

    def required_modules(self, operation: Operation) -> list[int]:
        """Modules an operation needs, dependencies included."""
        required = collect_required_modules(
            operation.query,
            self._map.types,
            self._map.root_types,
            operation.operation_name,
        )
        return expand_dependencies(required, self._map.dependencies, len(self._loader))

    async def build_schema(self, ids: Sequence[int]) -> ComposedSchema:
        """Schema for ``ids`` plus the shared module, reused when ``ids`` match the last build."""
        return await self._build_schema(list(ids))

    async def prepare(self, operation: Operation) -> PreparedOperation:
        """
        Resolve the schema and context value for an operation.

        Raises:
            MalformedOperation: If the document holds no operation
            ModuleLoadError: If a module fails to load
            SchemaCompositionError: If resolvers do not match type definitions
        """
        required = self.required_modules(operation)

        async with self._lock or nullcontext():
            to_load = [m for m in required if m not in self._used_modules]
            composed = await self.build_schema(to_load + self._used_modules)

        if self._context_builder is not None:
            context_value = self._context_builder(
                modules=list(composed.modules),
                operation=operation,
            )
            if asyncio.iscoroutine(context_value):
                context_value = await context_value
        else:
            context_value = {}

        return PreparedOperation(
            schema=composed.schema,
            context_value=context_value,
            module_ids=composed.module_ids,
        )

    async def execute(self, operation: Operation) -> ExecutionResult:
        """Prepare an operation and execute it against the composed schema."""
        prepared = await self.prepare(operation)
        return await execute_prepared(operation, prepared.schema, prepared.context_value)

    async def _compose(self, ids: list[int]) -> ComposedSchema:
        modules = await self._loader.load(ids)

        type_defs: DocumentNode = concat_ast([m.type_defs for m in modules])
        schema = self._schema_builder(
            type_defs=type_defs,
            resolvers=[m.resolvers or {} for m in modules],
        )
        if asyncio.iscoroutine(schema):
            schema = await schema

        for module_id in ids:
            if module_id not in self._used_modules:
                self._used_modules.append(module_id)
        self._builds += 1

        logger.info(
            f"[manager] Schema built | "
            f"modules={hash_module_ids(ids) or '-'} | "
            f"in_use={len(self._used_modules)}"
        )

        return ComposedSchema(schema=schema, modules=tuple(modules), module_ids=tuple(ids))


async def execute_prepared(
    operation: Operation,
    schema: GraphQLSchema,
    context_value: Any = None,
) -> ExecutionResult:
    """Execute an operation against an already prepared schema."""
    result = execute(
        schema,
        operation.query,
        context_value=context_value,
        variable_values=operation.variables,
        operation_name=operation.operation_name,
    )
    if asyncio.iscoroutine(result):
        result = await result
    return result
