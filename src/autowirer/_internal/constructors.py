from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from inspect import Parameter
from typing import Any, get_type_hints

from autowirer._internal.integrations.pydantic_settings import is_pydantic_settings_subclass
from autowirer._internal.type_checks import is_instance_checkable, is_protocol, is_runtime_class
from autowirer.exceptions import AutoWirerInvalidConstructorShapeError

_POSITIONAL_KINDS = (Parameter.POSITIONAL_ONLY, Parameter.POSITIONAL_OR_KEYWORD)
_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class ConstructorInfo:
    """Describe how a single type is produced and torn down.

    The factory receives the resolved dependency values as positional
    arguments, in the order of ``dependency_types``.
    """

    dependency_types: tuple[Any, ...]
    """Types resolved as singletons and passed to the factory."""
    factory: Callable[..., Any]
    """Callable building the instance from the resolved dependency values."""
    external_cleanup: Callable[[Any], Any] | None = None
    """Optional teardown action receiving the built instance."""


class ConstructorInspector:
    """Derive ``ConstructorInfo`` from a class constructor signature.

    Required parameters become dependencies and must be annotated with a
    class. Parameters with a default keep it and are not injected.
    """

    def inspect(self, concrete_type: Any) -> ConstructorInfo:
        """Return the constructor description of ``concrete_type``.

        Args:
            concrete_type: Class to build from its own ``__init__``.

        Raises:
            AutoWirerInvalidConstructorShapeError: If the class or one of its
                constructor parameters cannot be auto-wired.

        """
        self._validate_class(concrete_type)

        if is_pydantic_settings_subclass(concrete_type):
            return ConstructorInfo(dependency_types=(), factory=concrete_type)

        if concrete_type.__init__ is object.__init__ and concrete_type.__new__ is object.__new__:
            return ConstructorInfo(dependency_types=(), factory=concrete_type)

        try:
            sig = inspect.signature(concrete_type)
        except (TypeError, ValueError) as e:
            raise AutoWirerInvalidConstructorShapeError(
                concrete_type,
                f"constructor signature is not inspectable ({e})",
            ) from e

        hints = self._get_init_type_hints(concrete_type)

        positional: list[Any] = []
        keyword_names: list[str] = []
        keyword_types: list[Any] = []
        for name, p in sig.parameters.items():
            if p.kind in _VARIADIC_KINDS:
                raise AutoWirerInvalidConstructorShapeError(
                    concrete_type,
                    f"variadic parameter '{name}' cannot be injected",
                )
            if p.default is not Parameter.empty:
                continue

            dependency_type = hints.get(name, Parameter.empty)
            if dependency_type is Parameter.empty:
                raise AutoWirerInvalidConstructorShapeError(
                    concrete_type,
                    f"parameter '{name}' has no type annotation",
                )
            if not is_runtime_class(dependency_type):
                raise AutoWirerInvalidConstructorShapeError(
                    concrete_type,
                    f"parameter '{name}' is annotated with {dependency_type!r}, which is not a class",
                )
            if not is_instance_checkable(dependency_type):
                raise AutoWirerInvalidConstructorShapeError(
                    concrete_type,
                    f"parameter '{name}' is annotated with protocol {dependency_type.__qualname__}, "
                    "which is not runtime checkable",
                )

            if p.kind in _POSITIONAL_KINDS:
                positional.append(dependency_type)
            else:
                keyword_names.append(name)
                keyword_types.append(dependency_type)

        return ConstructorInfo(
            dependency_types=(*positional, *keyword_types),
            factory=_build_factory(concrete_type, len(positional), keyword_names),
        )

    def _validate_class(self, concrete_type: Any) -> None:
        if not is_runtime_class(concrete_type):
            raise AutoWirerInvalidConstructorShapeError(concrete_type, "it is not a class")
        if is_protocol(concrete_type):
            raise AutoWirerInvalidConstructorShapeError(concrete_type, "protocols cannot be instantiated")
        if inspect.isabstract(concrete_type):
            raise AutoWirerInvalidConstructorShapeError(concrete_type, "abstract classes cannot be instantiated")

    def _get_init_type_hints(self, concrete_type: type[Any]) -> dict[str, Any]:
        # Classes like NamedTuple declare their parameters on __new__ only.
        method_name = "__new__" if concrete_type.__init__ is object.__init__ else "__init__"
        constructor = inspect.getattr_static(concrete_type, method_name)
        if isinstance(constructor, staticmethod | classmethod):
            constructor = constructor.__func__
        try:
            return get_type_hints(constructor)
        except NameError as e:
            raise AutoWirerInvalidConstructorShapeError(
                concrete_type,
                f"annotation '{e.name}' cannot be resolved",
            ) from e
        except TypeError:
            return {}


def _build_factory(
    concrete_type: type[Any],
    positional_count: int,
    keyword_names: Sequence[str],
) -> Callable[..., Any]:
    if not keyword_names:
        return concrete_type

    def factory(*arguments: Any) -> Any:
        keywords = dict(zip(keyword_names, arguments[positional_count:], strict=True))
        return concrete_type(*arguments[:positional_count], **keywords)

    return factory
