"""
Tests for dependency expansion between schema modules.
"""

from incremental_schema import expand_dependencies


class TestExpandDependencies:
    """Tests for expand_dependencies."""

    def test_no_dependencies(self):
        assert expand_dependencies([1], None, bound=2) == [1]
        assert expand_dependencies([1], {}, bound=2) == [1]

    def test_empty_seed(self):
        assert expand_dependencies([], {0: [1]}, bound=2) == []

    def test_direct_dependency(self):
        assert expand_dependencies([0], {0: [1]}, bound=2) == [0, 1]

    def test_transitive_dependencies(self):
        deps = {0: [1], 1: [2], 2: [3]}
        assert expand_dependencies([0], deps, bound=4) == [0, 1, 2, 3]

    def test_circular_dependency(self):
        deps = {0: [1], 1: [0]}
        assert set(expand_dependencies([0], deps, bound=2)) == {0, 1}
        assert set(expand_dependencies([1], deps, bound=2)) == {0, 1}

    def test_self_dependency(self):
        assert expand_dependencies([0], {0: [0]}, bound=1) == [0]

    def test_out_of_range_dependency_is_dropped(self):
        deps = {0: [2, 1, -1]}
        assert expand_dependencies([0], deps, bound=2) == [0, 1]

    def test_out_of_range_seed_is_dropped(self):
        assert expand_dependencies([5, 0], {}, bound=2) == [0]

    def test_shared_dependency_visited_once(self):
        deps = {0: [2], 1: [2]}
        assert expand_dependencies([0, 1], deps, bound=3) == [0, 2, 1]

    def test_deterministic_order(self):
        deps = {0: [3, 1], 1: [2]}
        first = expand_dependencies([0], deps, bound=4)
        assert first == [0, 3, 1, 2]
        assert expand_dependencies([0], deps, bound=4) == first

    def test_deep_chain_does_not_recurse(self):
        size = 5000
        deps = {i: [i + 1] for i in range(size - 1)}
        assert len(expand_dependencies([0], deps, bound=size)) == size
