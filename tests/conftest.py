"""Shared pytest fixtures for autowirer tests."""

import pytest

from autowirer import AutoWirer, GuardPolicy


@pytest.fixture()
def wirer() -> AutoWirer:
    """Default wirer guarding only the active construction chain."""
    return AutoWirer()


@pytest.fixture()
def remembering_wirer() -> AutoWirer:
    """Wirer that keeps every encountered type guarded until cleanup."""
    return AutoWirer(guard_policy=GuardPolicy.REMEMBER_ENCOUNTERED)


@pytest.fixture()
def errors() -> list[Exception]:
    """Collects exceptions routed to a wiring exception handler."""
    return []
