"""
Lazy Loading Example.

Splits a small schema into a shared module and two feature modules, then
runs a few operations against one manager to show which modules load and
when the schema is rebuilt.

    python examples/lazy_loading.py
"""

import asyncio
import logging

from incremental_schema import (
    Operation,
    SchemaModule,
    SchemaModuleMap,
    create_incremental_schema_link,
)

SHARED = """
    type Query { ping: String }
"""

CALENDAR = """
    extend type Query { events: [Event!] }
    type Event { id: ID! name: String! }
"""

CHATS = """
    extend type Query { chats: [Chat!] }
    type Chat { id: ID! title: String! }
"""


async def load_shared():
    print("  loading shared module")
    return SchemaModule.from_object(
        {"type_defs": SHARED, "resolvers": {"Query": {"ping": lambda obj, info: "pong"}}}
    )


async def load_calendar():
    print("  loading calendar module")
    events = [{"id": 0, "name": "Shopping"}, {"id": 1, "name": "Vet"}]
    return SchemaModule.from_object(
        {"type_defs": CALENDAR, "resolvers": {"Query": {"events": lambda obj, info: events}}}
    )


async def load_chats():
    print("  loading chats module")
    chats = [{"id": 0, "title": "General"}]
    return SchemaModule.from_object(
        {"type_defs": CHATS, "resolvers": {"Query": {"chats": lambda obj, info: chats}}}
    )


async def main():
    logging.basicConfig(level=logging.INFO, format="%(name)s %(message)s")

    link = create_incremental_schema_link(
        schema_map=SchemaModuleMap(
            modules=[load_calendar, load_chats],
            shared_module=load_shared,
            types={"Query": {"events": 0, "chats": 1}},
        ),
    )

    for source in ("{ ping }", "{ chats { title } }", "{ chats { id } }", "{ events { name } }"):
        print(f"> {source}")
        result = await link(Operation.from_source(source))
        print(f"  {result.data}")

    print(f"modules in use: {link.manager.used_modules}, builds: {link.manager.builds}")


if __name__ == "__main__":
    asyncio.run(main())
