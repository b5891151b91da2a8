"""
Live scenario runs.

Run a single group with its marker, e.g. `pytest -m booking`. The tracking
group reads the booking id the booking group handed off, so run booking first.
"""

import pytest

from harness.scenarios import booking, manage, shift, tracking
from harness.services.scenario_runner import Scenario, ScenarioRunner

pytestmark = pytest.mark.e2e


def run_and_check(runner: ScenarioRunner, scenario: Scenario) -> None:
    report = runner.run(scenario)
    report.raise_for_status()


@pytest.mark.booking
@pytest.mark.parametrize("scenario", booking.SCENARIOS, ids=lambda s: s.name)
def test_booking(runner: ScenarioRunner, scenario: Scenario) -> None:
    run_and_check(runner, scenario)


@pytest.mark.tracking
@pytest.mark.parametrize("scenario", tracking.SCENARIOS, ids=lambda s: s.name)
def test_tracking(runner: ScenarioRunner, scenario: Scenario) -> None:
    run_and_check(runner, scenario)


@pytest.mark.shift
@pytest.mark.parametrize("scenario", shift.SCENARIOS, ids=lambda s: s.name)
def test_shift(runner: ScenarioRunner, scenario: Scenario) -> None:
    run_and_check(runner, scenario)


@pytest.mark.manage
def test_manage_sweep(runner: ScenarioRunner) -> None:
    run_and_check(runner, manage.VISIT_ALL_ENTITIES)
