"""
Incremental Schema Link.

Entry point used by a transport/request chain. Two flavours:

- terminating: resolves the schema and executes the operation, returning
  an ExecutionResult
- non-terminating: resolves the schema and context value only, and hands
  the operation on with ``context["incremental"]`` set, so a later step
  can execute it (see ``execute_incremental``)

Usage:
    link = create_incremental_schema_link(schema_map=schema_map)
    result = await link(Operation.from_source("{ events { id } }"))
"""

from __future__ import annotations

import logging
from typing import Any

from graphql import ExecutionResult

from .builder import build_executable_schema
from .config import IncrementalSchemaOptions, SchemaModuleMap
from .manager import ContextBuilder, SchemaBuilder, SchemaModulesManager, execute_prepared
from .operation import Operation

logger = logging.getLogger(__name__)

CONTEXT_KEY = "incremental"


class IncrementalSchemaLink:
    """Callable link wrapping a SchemaModulesManager."""

    def __init__(self, manager: SchemaModulesManager, *, terminating: bool = True):
        self.manager = manager
        self.terminating = terminating

    async def __call__(self, operation: Operation) -> ExecutionResult | Operation:
        if self.terminating:
            return await self.manager.execute(operation)

        prepared = await self.manager.prepare(operation)
        logger.debug(f"[link] Prepared operation with modules={list(prepared.module_ids)}")

        return operation.with_context(
            **{
                CONTEXT_KEY: {
                    "schema": prepared.schema,
                    "context_value": prepared.context_value,
                }
            }
        )


def create_incremental_schema_link(
    *,
    schema_map: SchemaModuleMap,
    schema_builder: SchemaBuilder = build_executable_schema,
    context_builder: ContextBuilder | None = None,
    terminating: bool = True,
    options: IncrementalSchemaOptions | None = None,
) -> IncrementalSchemaLink:
    """
    Create a link that lazy-loads parts of the schema, with resolvers and context.

    Args:
        schema_map: Modules, dependencies and field ownership
        schema_builder: Turns type definitions and resolvers into a schema
        context_builder: Builds the context value from loaded modules
        terminating: Execute the operation, or only prepare it
        options: Manager runtime switches

    Returns:
        IncrementalSchemaLink

    Raises:
        InvalidSchemaDefinition: If the map is inconsistent
    """
    manager = SchemaModulesManager(
        schema_map,
        schema_builder=schema_builder,
        context_builder=context_builder,
        options=options,
    )
    return IncrementalSchemaLink(manager, terminating=terminating)


async def execute_incremental(operation: Operation) -> ExecutionResult:
    """Execute an operation prepared by a non-terminating link."""
    prepared: dict[str, Any] | None = operation.context.get(CONTEXT_KEY)
    if prepared is None:
        raise KeyError(f"Operation has no '{CONTEXT_KEY}' context, prepare it with a link first")

    return await execute_prepared(operation, prepared["schema"], prepared["context_value"])
