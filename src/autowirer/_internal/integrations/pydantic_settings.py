from __future__ import annotations

import importlib
import warnings
from typing import Any

from autowirer._internal.type_checks import is_runtime_class

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _import_settings_base(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base = getattr(module, "BaseSettings", None)
    return base if is_runtime_class(base) else None


def _collect_settings_bases() -> tuple[type[Any], ...]:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        found = (
            _import_settings_base("pydantic_settings"),
            _import_settings_base("pydantic.v1"),
        )

    bases: list[type[Any]] = []
    for base in found:
        if base is not None and base not in bases:
            bases.append(base)
    return tuple(bases)


SETTINGS_BASES: tuple[type[Any], ...] = _collect_settings_bases()


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return true when candidate is a settings class loaded from the environment."""
    if not is_runtime_class(candidate):
        return False
    return any(issubclass(candidate, base) and candidate is not base for base in SETTINGS_BASES)


__all__ = ["SETTINGS_BASES", "is_pydantic_settings_subclass"]
