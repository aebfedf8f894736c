"""
Tests for single-slot schema memoization.
"""

import pytest

from incremental_schema import SingleSlotMemo, hash_module_ids


class TestHashModuleIds:
    """Tests for the canonical key of a module set."""

    def test_order_independent(self):
        assert hash_module_ids([2, 0, 1]) == hash_module_ids([0, 1, 2]) == "0-1-2"

    def test_duplicates_ignored(self):
        assert hash_module_ids([1, 1, 0, 1]) == "0-1"

    def test_numeric_sort(self):
        assert hash_module_ids([10, 2]) == "2-10"

    def test_empty(self):
        assert hash_module_ids([]) == ""


class TestSingleSlotMemo:
    """Tests for SingleSlotMemo."""

    @pytest.fixture
    def calls(self):
        return []

    @pytest.fixture
    def memo(self, calls):
        async def build(ids):
            calls.append(list(ids))
            return f"schema:{hash_module_ids(ids)}"

        return SingleSlotMemo(build, hash_module_ids)

    @pytest.mark.asyncio
    async def test_hit_on_equal_key(self, memo, calls):
        first = await memo([1, 0])
        second = await memo([0, 1, 1])

        assert first == second == "schema:0-1"
        assert calls == [[1, 0]]
        assert memo.hits == 1
        assert memo.misses == 1

    @pytest.mark.asyncio
    async def test_capacity_is_one(self, memo, calls):
        await memo([0])
        await memo([1])
        await memo([0])

        assert len(calls) == 3
        assert memo.key == "0"

    @pytest.mark.asyncio
    async def test_empty_key_is_cached(self, memo, calls):
        await memo([])
        await memo([])
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_failure_keeps_previous_result(self, calls):
        async def build(ids):
            calls.append(ids)
            if 9 in ids:
                raise RuntimeError("boom")
            return "ok"

        memo = SingleSlotMemo(build, hash_module_ids)
        await memo([0])

        with pytest.raises(RuntimeError):
            await memo([9])

        assert memo.key == "0"
        assert await memo([0]) == "ok"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_clear(self, memo, calls):
        await memo([0])
        memo.clear()
        await memo([0])
        assert len(calls) == 2
