from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from autowirer._internal.type_checks import type_name

if TYPE_CHECKING:
    from autowirer._internal.resolver import Resolver

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class InstantiationListener:
    """Callback fired for every instance of ``trigger_type`` made available."""

    trigger_type: Any
    callback: Callable[..., Any]
    dependency_types: tuple[Any, ...] = ()


class ListenerDispatcher:
    """Invoke matching instantiation listeners, in registration order."""

    def __init__(self, resolver: Resolver) -> None:
        self._resolver = resolver
        self._listeners: list[InstantiationListener] = []

    def add(self, listener: InstantiationListener) -> None:
        self._listeners.append(listener)

    def dispatch(self, instance: Any) -> None:
        """Call every listener whose trigger type ``instance`` is an instance of.

        Listener dependencies are resolved as singletons right before the
        call. The first failing callback stops the dispatch and propagates.
        """
        for listener in tuple(self._listeners):
            if not isinstance(instance, listener.trigger_type):
                continue

            arguments = [
                self._resolver.resolve(dependency_type)
                for dependency_type in listener.dependency_types
            ]
            logger.debug(
                "Calling instantiation listener %s for %s",
                type_name(listener.trigger_type),
                type_name(type(instance)),
            )
            listener.callback(instance, *arguments)
