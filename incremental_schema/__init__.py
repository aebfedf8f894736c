"""
Incremental Schema - lazy-load chunks of a GraphQL schema.

A schema is split into modules that are loaded only when an operation
selects a root field they own. Modules already loaded stay in the schema,
and the last built schema is reused while the set of modules is unchanged.

Quick Start:
    >>> from incremental_schema import (
    ...     Operation,
    ...     SchemaModuleMap,
    ...     create_incremental_schema_link,
    ... )
    >>>
    >>> link = create_incremental_schema_link(
    ...     schema_map=SchemaModuleMap(
    ...         modules=[load_calendar, load_chats],
    ...         shared_module=load_shared,
    ...         types={"Query": {"events": 0, "chats": 1}},
    ...     ),
    ... )
    >>> result = await link(Operation.from_source("{ chats { id } }"))
"""

__version__ = "0.1.0"
__license__ = "MIT"

from incremental_schema.builder import add_resolvers_to_schema, build_executable_schema
from incremental_schema.config import IncrementalSchemaOptions, RootTypeNames, SchemaModuleMap
from incremental_schema.dependencies import expand_dependencies
from incremental_schema.errors import (
    IncrementalSchemaError,
    InvalidSchemaDefinition,
    MalformedOperation,
    ModuleLoadError,
    SchemaCompositionError,
    UnknownFieldError,
    UnknownTypeError,
)
from incremental_schema.link import (
    IncrementalSchemaLink,
    create_incremental_schema_link,
    execute_incremental,
)
from incremental_schema.manager import (
    ComposedSchema,
    PreparedOperation,
    SchemaModulesManager,
    execute_prepared,
)
from incremental_schema.memo import SingleSlotMemo, hash_module_ids
from incremental_schema.modules import ModuleLoader, SchemaModule, memoize_loader
from incremental_schema.operation import Operation
from incremental_schema.routing import collect_required_modules, find_root_fields_and_kind

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Entry points
    "IncrementalSchemaLink",
    "create_incremental_schema_link",
    "execute_incremental",
    "SchemaModulesManager",
    "execute_prepared",
    "ComposedSchema",
    "PreparedOperation",
    "Operation",
    # Configuration
    "SchemaModuleMap",
    "RootTypeNames",
    "IncrementalSchemaOptions",
    # Building blocks
    "SchemaModule",
    "ModuleLoader",
    "memoize_loader",
    "expand_dependencies",
    "collect_required_modules",
    "find_root_fields_and_kind",
    "SingleSlotMemo",
    "hash_module_ids",
    "build_executable_schema",
    "add_resolvers_to_schema",
    # Errors
    "IncrementalSchemaError",
    "InvalidSchemaDefinition",
    "MalformedOperation",
    "ModuleLoadError",
    "SchemaCompositionError",
    "UnknownTypeError",
    "UnknownFieldError",
]
