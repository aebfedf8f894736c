"""
Single-slot memoization of schema builds.

Only the most recent build is remembered. Asking for any other set of
modules rebuilds, which is idempotent but not free.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

A = TypeVar("A")
R = TypeVar("R")

_MISSING = object()


def hash_module_ids(ids: Iterable[int]) -> str:
    """
    Canonical key of a set of module ids.

    Order and repetition do not matter: ``[2, 0, 2]`` and ``[0, 2]`` both
    give ``"0-2"``.
    """
    return "-".join(str(module_id) for module_id in sorted(set(ids)))


class SingleSlotMemo(Generic[A, R]):
    """
    Remembers the result of the last successful call, keyed by ``hash_fn``.

    A failing call leaves the remembered result untouched.

    Example:
        build = SingleSlotMemo(build_schema, hash_module_ids)
        schema = await build([1, 0])
        same = await build([0, 1])  # no second build
    """

    def __init__(
        self,
        fn: Callable[[A], Awaitable[R]],
        hash_fn: Callable[[A], str],
    ):
        self._fn = fn
        self._hash_fn = hash_fn
        self._key: str | None = None
        self._result: object = _MISSING
        self.hits = 0
        self.misses = 0

    @property
    def key(self) -> str | None:
        """Key of the remembered result, if any."""
        return self._key

    async def __call__(self, arg: A) -> R:
        key = self._hash_fn(arg)
        if self._result is not _MISSING and key == self._key:
            self.hits += 1
            logger.debug(f"[memo] Cache hit: {key!r}")
            return self._result  # type: ignore[return-value]

        self.misses += 1
        logger.debug(f"[memo] Cache miss: {key!r} (previous={self._key!r})")
        result = await self._fn(arg)

        self._key = key
        self._result = result
        return result

    def clear(self) -> None:
        """Forget the remembered result."""
        self._key = None
        self._result = _MISSING
