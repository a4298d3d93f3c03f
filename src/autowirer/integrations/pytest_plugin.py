"""Pytest fixtures for tests built on an ``AutoWirer``.

Enable the plugin with ``pytest_plugins = ["autowirer.integrations.pytest_plugin"]``
and override the ``autowirer`` fixture with a configured wirer. Tests that
request ``wired_autowirer`` receive it wired, and it is cleaned up when the
test finishes.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from autowirer.wirer import AutoWirer


@pytest.fixture()
def autowirer() -> AutoWirer:
    """Fixture hook for the plugin-managed wirer.

    Users must override this fixture in their own test suite to provide
    registrations.

    """
    msg = (
        "The autowirer pytest plugin requires overriding the 'autowirer' fixture in your "
        "test suite. Define @pytest.fixture() def autowirer() -> AutoWirer: ... "
        "and return a configured wirer."
    )
    raise RuntimeError(msg)


def _reraise(error: Exception) -> None:
    raise error


@pytest.fixture()
def wired_autowirer(autowirer: AutoWirer) -> Iterator[AutoWirer]:
    """Wire the ``autowirer`` fixture, failing the test on wiring errors, and clean it up afterwards."""
    autowirer.on_exception(_reraise)
    autowirer.wire()
    try:
        yield autowirer
    finally:
        autowirer.cleanup()
