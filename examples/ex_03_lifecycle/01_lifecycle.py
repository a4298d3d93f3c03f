"""Initialization hooks and aggregated cleanup failures.

``Initializable.initialize`` runs after every singleton exists, in
construction order. ``cleanup`` keeps going when teardown hooks fail and
raises one ``AutoWirerCleanupError`` carrying all of them.
"""

from __future__ import annotations

from autowirer import AutoWirer, AutoWirerCleanupError, Cleanable, Initializable


class Cache(Initializable, Cleanable):
    def __init__(self) -> None:
        self.warm = False

    def initialize(self) -> None:
        self.warm = True

    def cleanup(self) -> None:
        msg = "cache flush failed"
        raise RuntimeError(msg)


class Worker(Initializable, Cleanable):
    def __init__(self, cache: Cache) -> None:
        self.cache = cache
        self.saw_warm_cache = False

    def initialize(self) -> None:
        self.saw_warm_cache = self.cache.warm

    def cleanup(self) -> None:
        msg = "worker stop failed"
        raise RuntimeError(msg)


def main() -> None:
    wirer = AutoWirer().add_singleton(Worker).add_singleton(Cache).wire()

    worker = wirer.find_instance(Worker)
    assert worker is not None
    print(f"worker_saw_warm_cache={worker.saw_warm_cache}")  # => worker_saw_warm_cache=True

    try:
        wirer.cleanup()
    except AutoWirerCleanupError as error:
        print(f"primary={error.primary}")  # => primary=worker stop failed
        print(f"suppressed={[str(e) for e in error.suppressed]}")  # => suppressed=['cache flush failed']

    print(f"instances_after_cleanup={wirer.instances_count}")  # => instances_after_cleanup=1


if __name__ == "__main__":
    main()
