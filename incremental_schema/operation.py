"""
Operation passed through the incremental schema engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from graphql import DocumentNode, parse


@dataclass(frozen=True)
class Operation:
    """
    A single GraphQL request.

    Attributes:
        query: Parsed request document
        variables: Variable values
        operation_name: Operation to run when the document holds several
        context: Values carried alongside the request (transport data,
            prepared schema for a downstream executor, ...)
    """

    query: DocumentNode
    variables: dict[str, Any] = field(default_factory=dict)
    operation_name: str | None = None
    context: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_source(
        cls,
        source: str,
        variables: dict[str, Any] | None = None,
        operation_name: str | None = None,
    ) -> Operation:
        """Parse a request string into an Operation."""
        return cls(query=parse(source), variables=variables or {}, operation_name=operation_name)

    def with_context(self, **values: Any) -> Operation:
        """Copy of the operation with ``values`` merged into its context."""
        return replace(self, context={**self.context, **values})
