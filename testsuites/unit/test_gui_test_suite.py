"""
End-to-end lifecycle scenarios run through pytester.

Each inner run records test bodies and termination requests into
events.log, in order, so ordering and counts can be checked from outside.
"""

import pytest

pytestmark = [pytest.mark.lifecycle, pytest.mark.integration]


RECORDING_CONFTEST = """
    from pathlib import Path

    import pytest

    EVENTS = Path(__file__).parent / "events.log"


    class RecordingTerminator:
        def terminate(self):
            with EVENTS.open("a") as f:
                f.write("terminate\\n")


    class FailingTerminator:
        def terminate(self):
            with EVENTS.open("a") as f:
                f.write("terminate\\n")
            raise RuntimeError("termination API unavailable")


    @pytest.fixture(scope="session")
    def process_terminator(request):
        if request.config.getoption("--failing-terminator"):
            return FailingTerminator()
        return RecordingTerminator()


    def pytest_addoption(parser):
        parser.addoption("--failing-terminator", action="store_true")
"""

RECORD_HELPER = """
    from pathlib import Path

    def record(event):
        with (Path(__file__).parent / "events.log").open("a") as f:
            f.write(event + "\\n")
"""


@pytest.fixture
def lifecycle_pytester(pytester):
    pytester.makeconftest(RECORDING_CONFTEST)
    return pytester


def _events(pytester):
    path = pytester.path / "events.log"
    return path.read_text().splitlines() if path.exists() else []


def test_three_passing_tests_terminate_once_after_all(lifecycle_pytester):
    lifecycle_pytester.makepyfile(
        RECORD_HELPER
        + """
    from guitest_tools.lifecycle.gui_test_suite import GuiTestSuite


    class TestEditor(GuiTestSuite):
        def test_one(self):
            record("test_one")

        def test_two(self):
            record("test_two")

        def test_three(self):
            record("test_three")
    """
    )

    result = lifecycle_pytester.runpytest_inprocess()

    result.assert_outcomes(passed=3)
    assert _events(lifecycle_pytester) == ["test_one", "test_two", "test_three", "terminate"]


def test_failing_test_still_terminates_after_both(lifecycle_pytester):
    lifecycle_pytester.makepyfile(
        RECORD_HELPER
        + """
    from guitest_tools.lifecycle.gui_test_suite import GuiTestSuite


    class TestWizard(GuiTestSuite):
        def test_fails(self):
            record("test_fails")
            assert False, "dialog never opened"

        def test_passes(self):
            record("test_passes")
    """
    )

    result = lifecycle_pytester.runpytest_inprocess()

    result.assert_outcomes(passed=1, failed=1)
    assert _events(lifecycle_pytester) == ["test_fails", "test_passes", "terminate"]


def test_termination_failure_leaves_results_unchanged(lifecycle_pytester):
    lifecycle_pytester.makepyfile(
        RECORD_HELPER
        + """
    from guitest_tools.lifecycle.gui_test_suite import GuiTestSuite


    class TestSettings(GuiTestSuite):
        def test_a(self):
            record("test_a")

        def test_b(self):
            record("test_b")
    """
    )

    result = lifecycle_pytester.runpytest_inprocess("--failing-terminator")

    # errors=0 is asserted implicitly: the teardown failure never surfaces
    result.assert_outcomes(passed=2)
    assert result.ret == 0
    assert _events(lifecycle_pytester) == ["test_a", "test_b", "terminate"]


def test_each_class_gets_its_own_termination(lifecycle_pytester):
    lifecycle_pytester.makepyfile(
        RECORD_HELPER
        + """
    from guitest_tools.lifecycle.gui_test_suite import GuiTestSuite


    class TestFirst(GuiTestSuite):
        def test_first(self):
            record("test_first")


    class TestSecond(GuiTestSuite):
        def test_second(self):
            record("test_second")


    def test_plain_function():
        record("test_plain_function")
    """
    )

    result = lifecycle_pytester.runpytest_inprocess()

    result.assert_outcomes(passed=3)
    assert _events(lifecycle_pytester) == [
        "test_first",
        "terminate",
        "test_second",
        "terminate",
        "test_plain_function",
    ]


def test_guard_fixture_is_available_to_tests(lifecycle_pytester):
    lifecycle_pytester.makepyfile(
        """
    from guitest_tools.lifecycle import SuiteLifecycleGuard
    from guitest_tools.lifecycle.gui_test_suite import GuiTestSuite


    class TestIntrospection(GuiTestSuite):
        def test_guard_state(self, suite_lifecycle_guard):
            assert isinstance(suite_lifecycle_guard, SuiteLifecycleGuard)
            assert suite_lifecycle_guard.started
            assert not suite_lifecycle_guard.finished
            assert suite_lifecycle_guard.suite_name == "TestIntrospection"
    """
    )

    result = lifecycle_pytester.runpytest_inprocess()

    result.assert_outcomes(passed=1)


def test_module_guard_from_plugin(pytester):
    pytester.makeconftest(
        'pytest_plugins = ["guitest_tools.lifecycle.plugin"]\n'
        + RECORDING_CONFTEST.replace("\n    ", "\n")
    )
    pytester.makepyfile(
        test_module_suite=RECORD_HELPER
        + """
    import pytest

    pytestmark = pytest.mark.usefixtures("module_lifecycle_guard")


    def test_one():
        record("test_one")


    def test_two():
        record("test_two")
        raise RuntimeError("unexpected crash")
    """
    )

    result = pytester.runpytest_inprocess()

    result.assert_outcomes(passed=1, failed=1)
    assert _events(pytester) == ["test_one", "test_two", "terminate"]
