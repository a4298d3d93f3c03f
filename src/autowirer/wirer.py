from __future__ import annotations

import logging
from collections.abc import Callable
from types import TracebackType
from typing import TYPE_CHECKING, Any, TypeVar, overload

if TYPE_CHECKING:
    from typing_extensions import Self

from autowirer._internal.collector import ExceptionCollector
from autowirer._internal.constructors import ConstructorInfo, ConstructorInspector
from autowirer._internal.listeners import InstantiationListener
from autowirer._internal.registry import InstanceRegistry
from autowirer._internal.resolver import Resolver
from autowirer._internal.type_checks import type_name
from autowirer._internal.validators import RegistrationValidator
from autowirer.exceptions import AutoWirerInvalidRegistrationError
from autowirer.lifecycle import Cleanable, Initializable
from autowirer.policies import GuardPolicy
from autowirer.wirer_interface import IAutoWirer

T = TypeVar("T")

logger = logging.getLogger(__name__)


class AutoWirer(IAutoWirer):
    """Register singletons, wire their dependency graph and tear it down.

    Types are registered either from their constructor signature
    (``add_singleton(Service)``) or with an explicit factory
    (``add_singleton(Service, build_service, Config)``). ``wire`` builds every
    registered type once, dependencies first, fires instantiation listeners
    and runs ``Initializable.initialize`` hooks. ``cleanup`` tears the
    singletons down in reverse construction order and reports every failure
    at once.

    The wirer holds itself as a singleton, so constructors may depend on
    ``AutoWirer`` or ``IAutoWirer``.

    Usage:
        wirer = AutoWirer()
        wirer.add_singleton(Config).add_singleton(Engine)
        wirer.wire()
        ...
        wirer.cleanup()
    """

    def __init__(self, *, guard_policy: GuardPolicy = GuardPolicy.CALL_STACK) -> None:
        """Initialize an empty wirer.

        Args:
            guard_policy: Rule deciding when a type counts as already being
                constructed. ``GuardPolicy.REMEMBER_ENCOUNTERED`` keeps every
                type that entered construction guarded until ``cleanup``.

        """
        self._registry = InstanceRegistry()
        self._resolver = Resolver(self._registry, guard_policy)
        self._inspector = ConstructorInspector()
        self._validator = RegistrationValidator()
        self._exception_handler: Callable[[Exception], Any] | None = None

        self._registry.add_record(self)

    # region Registration

    def add_instantiation_listener(
        self,
        trigger_type: type[T],
        callback: Callable[..., Any],
        *dependencies: type[Any],
    ) -> Self:
        """Call ``callback(instance, *dependencies)`` for every new or existing instance.

        Args:
            trigger_type: Instances of this type (subclasses included) fire the listener.
            callback: Receives the instance followed by the resolved dependencies.
            *dependencies: Types resolved as singletons right before each call.

        """
        self._validator.validate_type_key(trigger_type, role="Listener trigger type")
        self._validator.validate_callable(callback, role="Instantiation listener")
        self._validator.validate_dependency_types(dependencies, owner=callback)

        self._resolver.dispatcher.add(
            InstantiationListener(
                trigger_type=trigger_type,
                callback=callback,
                dependency_types=dependencies,
            ),
        )
        return self

    @overload
    def add_singleton(self, dependency_type: type[Any], /) -> Self: ...

    @overload
    def add_singleton(
        self,
        dependency_type: type[T],
        factory: Callable[..., T],
        /,
        *dependencies: type[Any],
        on_cleanup: Callable[[T], Any] | None = None,
    ) -> Self: ...

    def add_singleton(
        self,
        dependency_type: type[Any],
        factory: Callable[..., Any] | None = None,
        /,
        *dependencies: type[Any],
        on_cleanup: Callable[[Any], Any] | None = None,
    ) -> Self:
        """Register a singleton built on ``wire`` or on first request.

        Without a factory the type is built from its constructor: every
        required ``__init__`` parameter must be annotated with a class and
        becomes a dependency. With a factory, ``factory(*resolved)`` is called
        with the listed dependencies resolved in order.

        Args:
            dependency_type: Type key the singleton is registered under.
            factory: Optional callable building the instance.
            *dependencies: Types passed to ``factory``, in order.
            on_cleanup: Optional teardown action receiving the instance.

        Raises:
            AutoWirerInvalidConstructorShapeError: If the constructor cannot be
                auto-wired.
            AutoWirerInvalidRegistrationError: If arguments are invalid.

        """
        if factory is None:
            if dependencies or on_cleanup is not None:
                msg = (
                    f"Dependencies and on_cleanup for {type_name(dependency_type)} "
                    "require an explicit factory."
                )
                raise AutoWirerInvalidRegistrationError(msg)
            self._register_concrete(dependency_type)
            return self

        self._validator.validate_type_key(dependency_type, role="Singleton type")
        self._validator.validate_callable(factory, role=f"Factory of {type_name(dependency_type)}")
        self._validator.validate_dependency_types(dependencies, owner=dependency_type)
        if on_cleanup is not None:
            self._validator.validate_callable(on_cleanup, role=f"Cleanup of {type_name(dependency_type)}")

        self._registry.register_constructor(
            dependency_type,
            ConstructorInfo(
                dependency_types=dependencies,
                factory=factory,
                external_cleanup=on_cleanup,
            ),
        )
        return self

    def add_existing_singleton(self, value: object, *, call_listeners: bool = False) -> Self:
        """Hold an already built instance as a singleton.

        Args:
            value: Instance to hold. It is never constructed nor passed to a
                registration cleanup, but ``Initializable``/``Cleanable``
                hooks still apply.
            call_listeners: Fire matching instantiation listeners for the
                instance during the next ``wire``.

        """
        self._registry.add_record(value)
        if call_listeners:
            self._registry.listener_targets.append(value)
        return self

    def on_exception(self, handler: Callable[[Exception], Any]) -> Self:
        """Route wiring failures to ``handler`` instead of logging them."""
        self._validator.validate_callable(handler, role="Exception handler")
        self._exception_handler = handler
        return self

    def _register_concrete(self, dependency_type: Any) -> None:
        self._registry.register_constructor(dependency_type, self._inspector.inspect(dependency_type))

    # endregion Registration

    # region Wiring and lookup

    def wire(self, on_success: Callable[[AutoWirer], Any] | None = None) -> Self:
        """Build every registered singleton and run lifecycle hooks.

        Steps, each completed before the next:

        1. Resolve every registered type as a singleton.
        2. Fire instantiation listeners for existing singletons added with
           ``call_listeners=True``.
        3. Call ``initialize`` on every ``Initializable`` singleton, in
           construction order.
        4. Call ``on_success(self)``.

        The first failure stops wiring and is passed to the handler set with
        ``on_exception``, or logged when there is none. The wirer is returned
        in both cases.
        """
        try:
            for dependency_type in list(self._registry.constructors):
                self._resolver.resolve(dependency_type)

            for instance in tuple(self._registry.listener_targets):
                self._resolver.dispatcher.dispatch(instance)

            for record in tuple(self._registry.records):
                if isinstance(record.instance, Initializable):
                    record.instance.initialize()

            if on_success is not None:
                on_success(self)
        except Exception as e:
            if self._exception_handler is None:
                logger.exception("Wiring failed")
            else:
                self._exception_handler(e)
        return self

    def find_instance(self, dependency_type: type[T]) -> T | None:
        """Return the single held instance of ``dependency_type``, or None.

        Raises:
            AutoWirerAmbiguousInstanceError: If several held instances match.
            AutoWirerInvalidRegistrationError: If ``dependency_type`` cannot be
                used with ``isinstance``.

        """
        self._validator.validate_type_key(dependency_type, role="Requested type")
        record = self._registry.find_record(dependency_type)
        return None if record is None else record.instance

    def get_or_instantiate_class(self, dependency_type: type[T], as_singleton: bool = True) -> T:  # noqa: FBT001, FBT002
        """Return an instance of ``dependency_type`` outside of ``wire``.

        With ``as_singleton`` a held instance is returned when one matches,
        and a newly built one is held afterwards. Types nothing is registered
        for are registered from their constructor first.

        Raises:
            AutoWirerError: Any resolution or registration failure.

        """
        self._validator.validate_type_key(dependency_type, role="Requested type")
        if as_singleton:
            record = self._registry.find_record(dependency_type)
            if record is not None:
                return record.instance

        if not self._registry.has_constructor_for(dependency_type):
            self._register_concrete(dependency_type)
        return self._resolver.resolve(dependency_type, as_singleton=as_singleton)

    @property
    def instances_count(self) -> int:
        """Return the number of held singletons, the wirer itself included."""
        return len(self._registry.records)

    # endregion Wiring and lookup

    # region Cleanup

    def cleanup(self) -> None:
        """Tear every held singleton down, newest first.

        For each singleton ``Cleanable.cleanup`` runs, then the ``on_cleanup``
        action it was registered with. Every call runs even when earlier ones
        fail. Registrations are forgotten afterwards and the wirer holds only
        itself again.

        Raises:
            AutoWirerCleanupError: If any teardown call failed. The first
                failure is ``primary``, the others are ``suppressed``.

        """
        collector = ExceptionCollector()
        for record in self._registry.drain_records():
            instance = record.instance
            logger.debug("Cleaning up %s", type_name(type(instance)))

            if isinstance(instance, Cleanable):
                collector.run(instance.cleanup)

            info = record.constructor_info
            if info is not None and info.external_cleanup is not None:
                collector.run(info.external_cleanup, instance)

        self._registry.reset()
        self._registry.add_record(self)
        collector.raise_if_failed()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        """Run ``cleanup`` when leaving the ``with`` block."""
        self.cleanup()

    # endregion Cleanup
