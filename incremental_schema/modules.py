"""
Schema Modules and their Loaders.

A schema module is the unit of lazy loading: a chunk of type definitions,
the resolvers for them and an optional context hook. Loaders are plain
async callables returning either a SchemaModule or any object that
exposes ``type_defs`` / ``resolvers`` / ``context`` attributes (a python
module imported on demand works out of the box).

Usage:
    async def load_chats():
        from myapp.schema import chats
        return chats

    loader = ModuleLoader([load_chats], shared_module=load_shared)
    modules = await loader.load([0])  # [chats, shared]
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from graphql import DocumentNode, parse

from .errors import ModuleLoadError

logger = logging.getLogger(__name__)

SchemaModuleLoader = Callable[[], Awaitable[Any]]


@dataclass(frozen=True)
class SchemaModule:
    """
    Loaded schema module.

    Attributes:
        type_defs: Parsed type definitions contributed by the module
        resolvers: {type name: {field name: resolver}} or scalar overrides
        context: Optional hook building a per-module context value
    """

    type_defs: DocumentNode
    resolvers: Mapping[str, Any] = field(default_factory=dict)
    context: Callable[[Any], Any] | None = None

    @classmethod
    def from_object(cls, obj: Any) -> SchemaModule:
        """Normalize whatever a loader returned into a SchemaModule."""
        if isinstance(obj, SchemaModule):
            return obj

        type_defs = getattr(obj, "type_defs", None)
        if type_defs is None and isinstance(obj, Mapping):
            type_defs = obj.get("type_defs")
            resolvers = obj.get("resolvers")
            context = obj.get("context")
        else:
            resolvers = getattr(obj, "resolvers", None)
            context = getattr(obj, "context", None)

        if type_defs is None:
            raise TypeError(f"Schema module {obj!r} has no type_defs")
        if isinstance(type_defs, str):
            type_defs = parse(type_defs)

        return cls(type_defs=type_defs, resolvers=resolvers or {}, context=context)


def memoize_loader(loader: SchemaModuleLoader) -> SchemaModuleLoader:
    """
    Wrap a loader so the module is constructed at most once.

    Concurrent callers share the same in-flight load. A failed load is
    forgotten, so the next call tries again.
    """
    task: asyncio.Future | None = None

    def forget_failure(future: asyncio.Future) -> None:
        nonlocal task
        # retrieving the exception also marks it as handled
        if future.cancelled() or future.exception() is not None:
            if task is future:
                task = None

    async def load() -> Any:
        nonlocal task
        if task is None:
            task = asyncio.ensure_future(loader())
            task.add_done_callback(forget_failure)
        return await asyncio.shield(task)

    load.__wrapped__ = loader  # type: ignore[attr-defined]
    return load


class ModuleLoader:
    """
    Loads schema modules by id, always adding the shared module.

    The loader does not know which modules are already part of the
    active schema; the caller decides what to ask for.
    """

    def __init__(
        self,
        modules: Sequence[SchemaModuleLoader],
        shared_module: SchemaModuleLoader,
        *,
        memoize: bool = True,
    ):
        """
        Initialize loader.

        Args:
            modules: Loader per module id
            shared_module: Loader of the always-included module
            memoize: Run each loader at most once
        """
        wrap = memoize_loader if memoize else (lambda fn: fn)
        self._modules = [wrap(m) for m in modules]
        self._shared_module = wrap(shared_module)

    def __len__(self) -> int:
        return len(self._modules)

    async def load(self, ids: Sequence[int]) -> list[SchemaModule]:
        """
        Load requested modules and the shared module concurrently.

        Args:
            ids: Module ids, in the order their definitions should merge

        Returns:
            Loaded modules in ``ids`` order, shared module last

        Raises:
            ModuleLoadError: If an id is out of range, or any loader fails
                (the whole batch fails)
        """
        for module_id in ids:
            if not 0 <= module_id < len(self._modules):
                raise ModuleLoadError(
                    module_id,
                    IndexError(f"only {len(self._modules)} modules are defined"),
                )

        targets: list[int | None] = [*ids, None]
        return list(await asyncio.gather(*(self._load_one(module_id) for module_id in targets)))

    async def _load_one(self, module_id: int | None) -> SchemaModule:
        loader = self._shared_module if module_id is None else self._modules[module_id]
        try:
            loaded = await loader()
            return SchemaModule.from_object(loaded)
        except Exception as e:
            name = "shared" if module_id is None else module_id
            logger.error(f"[loader] Failed to load module {name}: {e}")
            raise ModuleLoadError(module_id, e) from e
