from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from autowirer._internal.type_checks import is_instance_checkable, is_runtime_class, type_name
from autowirer.exceptions import AutoWirerInvalidRegistrationError


class RegistrationValidator:
    """Validates registration arguments before they reach the registry."""

    def validate_type_key(self, value: object, *, role: str) -> None:
        """Validate that a type key is a runtime class usable with isinstance/issubclass."""
        if not is_runtime_class(value):
            msg = f"{role} must be a class, got {value!r}."
            raise AutoWirerInvalidRegistrationError(msg)
        if not is_instance_checkable(value):
            msg = f"{role} must be a runtime checkable protocol, got {type_name(value)}."
            raise AutoWirerInvalidRegistrationError(msg)

    def validate_dependency_types(self, values: Iterable[Any], *, owner: object) -> None:
        for value in values:
            self.validate_type_key(value, role=f"Dependency of {owner!r}")

    def validate_callable(self, value: object, *, role: str) -> None:
        if not callable(value):
            msg = f"{role} must be callable, got {value!r}."
            raise AutoWirerInvalidRegistrationError(msg)
