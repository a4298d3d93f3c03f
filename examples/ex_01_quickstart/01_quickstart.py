"""Quickstart: wire singletons from their constructor type hints.

Register plain classes in any order, call ``wire()`` once, and see that
dependencies are built first and torn down last.
"""

from __future__ import annotations

from autowirer import AutoWirer, Cleanable

events: list[str] = []


class Config:
    def __init__(self) -> None:
        self.dsn = "sqlite:///app.db"
        events.append("build Config")


class Engine(Cleanable):
    def __init__(self, config: Config) -> None:
        self.config = config
        events.append("build Engine")

    def cleanup(self) -> None:
        events.append("cleanup Engine")


class ConfigCleanup(Config, Cleanable):
    def cleanup(self) -> None:
        events.append("cleanup Config")


def main() -> None:
    wirer = AutoWirer()
    wirer.add_singleton(Engine).add_singleton(ConfigCleanup).wire()

    engine = wirer.find_instance(Engine)
    assert engine is not None
    print(f"dsn={engine.config.dsn}")  # => dsn=sqlite:///app.db
    print(f"instances={wirer.instances_count}")  # => instances=3

    wirer.cleanup()
    print(" > ".join(events))  # => build Config > build Engine > cleanup Engine > cleanup Config


if __name__ == "__main__":
    main()
