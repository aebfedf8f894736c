"""
Default schema builder.

Turns merged type definitions and a list of resolver maps into an
executable GraphQLSchema. Resolver maps follow the usual layout:

    {
        "Query": {"chats": resolve_chats},
        "Node": {"__resolveType": resolve_node_type},
        "DateTime": DateTimeScalar,  # a GraphQLScalarType
    }

Field resolvers use graphql-core's signature ``(obj, info, **args)``.
A field entry may also be a mapping with ``resolve`` and/or ``subscribe``.
Later maps win over earlier ones for the same field.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import Any

from graphql import (
    DocumentNode,
    GraphQLNamedType,
    GraphQLScalarType,
    GraphQLSchema,
    build_ast_schema,
)

from .errors import UnknownFieldError, UnknownTypeError

logger = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def build_executable_schema(
    *,
    type_defs: DocumentNode,
    resolvers: Sequence[Mapping[str, Any]],
) -> GraphQLSchema:
    """
    Build a schema from SDL and attach resolvers to it.

    Raises:
        UnknownTypeError: A resolver map names a type that is not defined
        UnknownFieldError: A resolver map names a field that is not defined
    """
    schema = build_ast_schema(type_defs)
    add_resolvers_to_schema(schema, resolvers)
    logger.debug(f"[builder] Built schema with {len(resolvers)} resolver maps")
    return schema


def add_resolvers_to_schema(
    schema: GraphQLSchema,
    resolvers: Mapping[str, Any] | Sequence[Mapping[str, Any]],
) -> None:
    """Attach one resolver map, or a list of them in order."""
    if isinstance(resolvers, Mapping):
        resolvers = [resolvers]

    for resolver_map in resolvers:
        for type_name, fields in (resolver_map or {}).items():
            if isinstance(fields, GraphQLScalarType):
                _set_scalar(schema, type_name, fields)
            else:
                for field_name, resolver in fields.items():
                    add_resolver(schema, type_name, field_name, resolver)


def add_resolver(schema: GraphQLSchema, type_name: str, field_name: str, resolver: Any) -> None:
    """Attach a single resolver, or a ``__method`` override on the type itself."""
    named_type = _get_type(schema, type_name)

    if field_name.startswith("__"):
        setattr(named_type, _to_snake_case(field_name[2:]), resolver)
        return

    fields = getattr(named_type, "fields", None)
    if not isinstance(fields, Mapping) or field_name not in fields:
        raise UnknownFieldError(type_name, field_name)

    field = fields[field_name]
    if isinstance(resolver, Mapping):
        if "resolve" in resolver:
            field.resolve = resolver["resolve"]
        if "subscribe" in resolver:
            field.subscribe = resolver["subscribe"]
    else:
        field.resolve = resolver


def _set_scalar(schema: GraphQLSchema, type_name: str, scalar: GraphQLScalarType) -> None:
    named_type = _get_type(schema, type_name)
    if not isinstance(named_type, GraphQLScalarType):
        raise UnknownTypeError(type_name)

    named_type.serialize = scalar.serialize  # type: ignore[method-assign]
    named_type.parse_value = scalar.parse_value  # type: ignore[method-assign]
    named_type.parse_literal = scalar.parse_literal  # type: ignore[method-assign]


def _get_type(schema: GraphQLSchema, type_name: str) -> GraphQLNamedType:
    named_type = schema.get_type(type_name)
    if named_type is None:
        raise UnknownTypeError(type_name)
    return named_type


def _to_snake_case(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()
