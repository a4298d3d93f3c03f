from __future__ import annotations

import pytest

pytest_plugins = ["pytester"]


def test_default_autowirer_fixture_requires_override(pytester: pytest.Pytester) -> None:
    pytester.makepyfile(
        """
        pytest_plugins = ["autowirer.integrations.pytest_plugin"]


        def test_uses_default_fixture(wired_autowirer):
            pass
        """,
    )

    result = pytester.runpytest()

    result.assert_outcomes(errors=1)
    result.stdout.fnmatch_lines(["*requires overriding the 'autowirer' fixture*"])


def test_wired_autowirer_reraises_wiring_failures(pytester: pytest.Pytester) -> None:
    pytester.makepyfile(
        """
        import pytest

        from autowirer import AutoWirer

        pytest_plugins = ["autowirer.integrations.pytest_plugin"]


        class Missing:
            pass


        class NeedsMissing:
            def __init__(self, missing: Missing) -> None:
                self.missing = missing


        @pytest.fixture()
        def autowirer():
            return AutoWirer().add_singleton(NeedsMissing)


        def test_never_runs(wired_autowirer):
            pass
        """,
    )

    result = pytester.runpytest()

    result.assert_outcomes(errors=1)
    result.stdout.fnmatch_lines(["*AutoWirerUnknownDependencyError*"])
