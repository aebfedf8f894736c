"""
Field routing: from an operation document to the modules it needs.

Only root-level fields are inspected. A field nobody owns is skipped;
it may live in the shared module, or the operation is invalid and
validation will say so later.
"""

from __future__ import annotations

from collections.abc import Mapping

from graphql import (
    DocumentNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    OperationDefinitionNode,
    SelectionSetNode,
)

from .config import RootTypeNames
from .errors import MalformedOperation


def find_operation(
    document: DocumentNode,
    operation_name: str | None = None,
) -> OperationDefinitionNode:
    """
    Pick the operation to run from a document.

    Raises:
        MalformedOperation: If the document has no matching operation
    """
    operations = [d for d in document.definitions if isinstance(d, OperationDefinitionNode)]
    if operation_name is not None:
        operations = [op for op in operations if op.name and op.name.value == operation_name]
        if not operations:
            raise MalformedOperation(f"Unknown operation named '{operation_name}'")
    if not operations:
        raise MalformedOperation()
    return operations[0]


def find_root_fields_and_kind(
    document: DocumentNode,
    root_types: RootTypeNames | None = None,
    operation_name: str | None = None,
) -> tuple[list[str], str]:
    """
    Root-level field names of an operation and the root type they belong to.

    Inline fragments and fragment spreads on the root are flattened.
    """
    root_types = root_types or RootTypeNames()
    operation = find_operation(document, operation_name)
    fragments = {
        d.name.value: d for d in document.definitions if isinstance(d, FragmentDefinitionNode)
    }

    fields: list[str] = []
    _collect_fields(operation.selection_set, fragments, fields, set())

    return fields, root_types.for_operation(operation.operation.value)


def _collect_fields(
    selection_set: SelectionSetNode,
    fragments: Mapping[str, FragmentDefinitionNode],
    fields: list[str],
    visited_fragments: set[str],
) -> None:
    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            fields.append(selection.name.value)
        elif isinstance(selection, InlineFragmentNode):
            _collect_fields(selection.selection_set, fragments, fields, visited_fragments)
        elif isinstance(selection, FragmentSpreadNode):
            name = selection.name.value
            if name in visited_fragments or name not in fragments:
                continue
            visited_fragments.add(name)
            _collect_fields(fragments[name].selection_set, fragments, fields, visited_fragments)


def collect_required_modules(
    document: DocumentNode,
    types: Mapping[str, Mapping[str, int]],
    root_types: RootTypeNames | None = None,
    operation_name: str | None = None,
) -> list[int]:
    """
    Module ids owning the root fields of an operation.

    Returns:
        Unique ids in the order their fields first appear
    """
    root_fields, root_type = find_root_fields_and_kind(document, root_types, operation_name)
    owners = types.get(root_type, {})

    required: list[int] = []
    for field_name in root_fields:
        module_id = owners.get(field_name)
        if module_id is not None and module_id not in required:
            required.append(module_id)

    return required
