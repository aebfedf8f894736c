"""
Tests for schema map configuration.
"""

from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from incremental_schema import InvalidSchemaDefinition, RootTypeNames, SchemaModuleMap


class TestRootTypeNames:
    """Tests for RootTypeNames."""

    def test_defaults(self):
        names = RootTypeNames()
        assert names.names() == ("Query", "Mutation", "Subscription")
        assert names.for_operation("mutation") == "Mutation"

    def test_custom(self):
        names = RootTypeNames(query="RootQuery")
        assert names.for_operation("query") == "RootQuery"
        assert names.for_operation("subscription") == "Subscription"


class TestSchemaModuleMap:
    """Tests for SchemaModuleMap validation."""

    def test_valid_map(self, schema_map):
        schema_map.check()
        assert len(schema_map.modules) == 2

    def test_dependency_keys_are_coerced(self):
        schema_map = SchemaModuleMap(
            modules=[AsyncMock()],
            shared_module=AsyncMock(),
            dependencies={"0": ["0"]},
        )
        assert schema_map.dependencies == {0: [0]}

    def test_shared_module_required(self):
        with pytest.raises(ValidationError):
            SchemaModuleMap(modules=[])

    def test_loader_must_be_callable(self):
        with pytest.raises(ValidationError):
            SchemaModuleMap(modules=["not a loader"], shared_module=AsyncMock())

    def test_duplicate_root_type_names(self, make_map):
        schema_map = make_map(root_types=RootTypeNames(query="Root", mutation="Root"))
        with pytest.raises(InvalidSchemaDefinition, match="unique"):
            schema_map.check()

    def test_missing_root_type_name(self, make_map):
        schema_map = make_map(root_types=RootTypeNames(subscription=""))
        with pytest.raises(InvalidSchemaDefinition, match="subscription"):
            schema_map.check()

    def test_unknown_root_type_in_types(self, make_map):
        schema_map = make_map(types={"Querry": {"events": 0}})
        with pytest.raises(InvalidSchemaDefinition, match="Querry"):
            schema_map.check()

    def test_field_owned_by_missing_module(self, make_map):
        schema_map = make_map(types={"Query": {"posts": 2}})
        with pytest.raises(InvalidSchemaDefinition, match="Query.posts"):
            schema_map.check()
