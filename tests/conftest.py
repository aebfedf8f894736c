"""
Pytest configuration and fixtures for incremental schema tests.
"""

import importlib
import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

# Add the repository root to path for imports
# This allows `from incremental_schema import ...` to work
repo_root = Path(__file__).parent.parent
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from incremental_schema import SchemaModuleMap  # noqa: E402


def fixture_loader(name: str):
    """Async loader importing one of the schema_fixtures modules."""

    async def load():
        return importlib.import_module(f"schema_fixtures.{name}")

    return load


@pytest.fixture(autouse=True)
def reset_calendar_events():
    """Keep events added by mutation tests from leaking into other tests."""
    calendar = importlib.import_module("schema_fixtures.calendar")
    calendar.reset_events()
    yield
    calendar.reset_events()


@pytest.fixture
def loaders():
    """Spied loaders: calendar (0), chats (1) and the shared module."""
    return SimpleNamespace(
        calendar=AsyncMock(side_effect=fixture_loader("calendar")),
        chats=AsyncMock(side_effect=fixture_loader("chats")),
        shared=AsyncMock(side_effect=fixture_loader("shared")),
    )


@pytest.fixture
def make_map(loaders):
    """Build a SchemaModuleMap over the spied loaders."""

    def factory(**overrides) -> SchemaModuleMap:
        values = {
            "modules": [loaders.calendar, loaders.chats],
            "shared_module": loaders.shared,
            "types": {
                "Query": {"events": 0, "chats": 1},
                "Mutation": {"addEvent": 0},
                "Subscription": {},
            },
        }
        values.update(overrides)
        return SchemaModuleMap(**values)

    return factory


@pytest.fixture
def schema_map(make_map) -> SchemaModuleMap:
    return make_map()
