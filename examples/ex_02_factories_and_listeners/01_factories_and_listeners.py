"""Factories, existing singletons and instantiation listeners.

This module covers:

1. ``add_singleton(tp, factory, *dependencies, on_cleanup=...)`` for types
   that are not built from their own constructor.
2. ``add_existing_singleton(value, call_listeners=True)`` for prebuilt values.
3. ``add_instantiation_listener`` reacting to every matching instance, with
   its own dependencies injected.
"""

from __future__ import annotations

from autowirer import AutoWirer


class Command:
    name = "command"


class PingCommand(Command):
    name = "ping"


class HelpCommand(Command):
    name = "help"


class CommandRegistry:
    def __init__(self) -> None:
        self.names: list[str] = []


class Connection:
    def __init__(self, url: str) -> None:
        self.url = url
        self.closed = False

    def close(self) -> None:
        self.closed = True


def main() -> None:
    wirer = AutoWirer()

    wirer.add_instantiation_listener(
        Command,
        lambda command, registry: registry.names.append(command.name),
        CommandRegistry,
    )
    wirer.add_singleton(CommandRegistry)
    wirer.add_singleton(PingCommand)
    wirer.add_existing_singleton(HelpCommand(), call_listeners=True)
    wirer.add_singleton(
        Connection,
        lambda registry: Connection(f"memory://{len(registry.names)}"),
        CommandRegistry,
        on_cleanup=Connection.close,
    )
    wirer.wire()

    registry = wirer.find_instance(CommandRegistry)
    connection = wirer.find_instance(Connection)
    assert registry is not None
    assert connection is not None
    print(f"commands={registry.names}")  # => commands=['ping', 'help']
    print(f"connection={connection.url}")  # => connection=memory://1

    wirer.cleanup()
    print(f"closed={connection.closed}")  # => closed=True


if __name__ == "__main__":
    main()
