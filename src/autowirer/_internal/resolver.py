from __future__ import annotations

import logging
from typing import Any

from autowirer._internal.listeners import ListenerDispatcher
from autowirer._internal.registry import InstanceRegistry
from autowirer._internal.type_checks import type_name
from autowirer.exceptions import AutoWirerUnknownDependencyError
from autowirer.policies import GuardPolicy

logger = logging.getLogger(__name__)


class Resolver:
    """Satisfy a type's dependency list depth-first and memoize singletons.

    Transitive dependencies are always resolved as singletons. Failures are
    never retried: the first one aborts the whole resolution.
    """

    def __init__(
        self,
        registry: InstanceRegistry,
        guard_policy: GuardPolicy = GuardPolicy.CALL_STACK,
    ) -> None:
        self._registry = registry
        self._remember_encountered = guard_policy is GuardPolicy.REMEMBER_ENCOUNTERED
        self.dispatcher = ListenerDispatcher(self)

    def resolve(
        self,
        dependency_type: Any,
        parent: Any | None = None,
        *,
        as_singleton: bool = True,
    ) -> Any:
        """Return an instance of ``dependency_type``.

        Args:
            dependency_type: Type to look up or construct.
            parent: Type whose construction requested this one, used in
                error messages.
            as_singleton: Reuse a held instance when one matches and hold the
                new instance afterwards.

        Raises:
            AutoWirerAmbiguousInstanceError: Several held instances match.
            AutoWirerCircularDependencyError: The type is already being built.
            AutoWirerUnknownDependencyError: Nothing registered can build it.
            AutoWirerAmbiguousConstructorError: Several registrations match.

        """
        registry = self._registry
        if as_singleton:
            record = registry.find_record(dependency_type)
            if record is not None:
                return record.instance

        registry.enter_construction(
            dependency_type,
            parent,
            remember_encountered=self._remember_encountered,
        )
        try:
            info = registry.find_constructor(dependency_type)
            if info is None:
                raise AutoWirerUnknownDependencyError(dependency_type, parent)

            arguments = [self.resolve(dependency, dependency_type) for dependency in info.dependency_types]
            instance = info.factory(*arguments)
            logger.debug("Instantiated %s", type_name(dependency_type))

            self.dispatcher.dispatch(instance)

            if as_singleton:
                registry.add_record(instance, info)
            return instance
        finally:
            registry.exit_construction(dependency_type)
