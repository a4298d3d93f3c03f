from enum import Enum


class GuardPolicy(str, Enum):
    """Policy deciding when a type counts as already being constructed."""

    CALL_STACK = "call_stack"
    """Guard a type only while its own resolution is running."""

    REMEMBER_ENCOUNTERED = "remember_encountered"
    """Keep every type that ever entered construction guarded until cleanup.

    Requesting such a type again, even from an unrelated on-demand call,
    raises ``AutoWirerCircularDependencyError``.
    """
