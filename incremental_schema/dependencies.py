"""
Dependency expansion between schema modules.

A module may need types defined by other modules. The dependency map
lists those edges; it may contain cycles and references to modules that
do not exist. Both are tolerated.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

logger = logging.getLogger(__name__)


def expand_dependencies(
    seed: Iterable[int],
    dependencies: Mapping[int, Sequence[int]] | None,
    bound: int,
) -> list[int]:
    """
    Collect the seed modules and everything they transitively depend on.

    Depth-first, each module visited once. Ids outside ``[0, bound)`` are
    dropped instead of raising.

    Args:
        seed: Module ids required by the operation
        dependencies: Module id -> ids it depends on
        bound: Number of declared modules

    Returns:
        Visited module ids in visit order
    """
    dependencies = dependencies or {}
    visited: list[int] = []
    seen: set[int] = set()

    for root in seed:
        stack = [root]
        while stack:
            module_id = stack.pop()
            if module_id in seen:
                continue
            if not 0 <= module_id < bound:
                logger.debug(f"[dependencies] Ignoring unknown module {module_id}")
                continue

            seen.add(module_id)
            visited.append(module_id)
            # reversed so the first listed dependency is visited first
            stack.extend(reversed(dependencies.get(module_id, ())))

    return visited
