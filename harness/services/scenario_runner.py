"""
Scenario orchestration.

A scenario is an ordered list of named steps run against its own browser
session. The runner tracks NOT_STARTED -> IN_PROGRESS -> COMPLETED | FAILED,
records the last step attempted, and enforces an overall time budget. The
budget is a Deadline shared by every wait and retry the steps make through
ctx.waits, so they stop when the budget runs out. A step that fails once the
deadline has passed, or a step due to start after it, is a timeout. A
scenario whose steps all finished is COMPLETED even if the last one ran over.
A failed scenario is not rolled back: entities it already created stay in
the application.
"""

import logging
import time as time_module
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import BaseModel, PrivateAttr

from harness.config import settings
from harness.data.factories import unique_token
from harness.errors import HarnessError, ScenarioTimeoutError
from harness.models.schemas import ScenarioStatus, StepRecord
from harness.providers.base import Surface
from harness.providers.wait_helper import Deadline, WaitStrategy
from harness.services.handoff_store import HandoffStore

logger = logging.getLogger(__name__)


@dataclass
class ScenarioContext:
    """
    Everything a step needs: its session, the handoff store, a per-run token,
    and the wait strategy bound to the scenario deadline. Steps build their
    pages with ctx.waits.
    """

    surface: Surface
    store: HandoffStore
    token: str = field(default_factory=unique_token)
    values: dict[str, Any] = field(default_factory=dict)
    waits: WaitStrategy = field(default_factory=WaitStrategy)


Step = tuple[str, Callable[[ScenarioContext], Any]]


@dataclass
class Scenario:
    name: str
    group: str
    steps: list[Step]
    description: str = ""
    timeout: float | None = None

    @property
    def qualified_name(self) -> str:
        return f"{self.group}/{self.name}"


class ScenarioReport(BaseModel):
    scenario: str
    status: ScenarioStatus = ScenarioStatus.NOT_STARTED
    steps: list[StepRecord] = []
    last_action: str | None = None
    error: str | None = None
    timed_out: bool = False
    started_at: datetime | None = None
    duration_seconds: float = 0.0

    _exception: BaseException | None = PrivateAttr(default=None)

    @property
    def succeeded(self) -> bool:
        return self.status == ScenarioStatus.COMPLETED

    @property
    def steps_completed(self) -> int:
        return sum(1 for s in self.steps if s.succeeded)

    def raise_for_status(self) -> None:
        """Re-raise the underlying error of a failed scenario."""
        if self.status == ScenarioStatus.COMPLETED:
            return
        if self._exception is not None:
            raise self._exception
        raise HarnessError(f"Scenario {self.scenario} did not complete (status: {self.status.value})")


class ScenarioRunner:
    """
    Runs scenarios, each in an isolated session obtained from surface_factory.

    Usage:
        runner = ScenarioRunner(open_surface)
        report = runner.run(scenario)
        report.raise_for_status()
    """

    def __init__(
        self,
        surface_factory: Callable[[], Surface],
        store: HandoffStore | None = None,
        timeout: float | None = None,
        clock: Callable[[], float] = time_module.monotonic,
        screenshot_dir: str | None = None,
    ) -> None:
        self.surface_factory = surface_factory
        self.store = store or HandoffStore()
        self.timeout = timeout if timeout is not None else settings.scenario_timeout_seconds
        self.clock = clock
        self.screenshot_dir = screenshot_dir if screenshot_dir is not None else settings.screenshot_dir

    def run(self, scenario: Scenario) -> ScenarioReport:
        report = ScenarioReport(scenario=scenario.qualified_name)
        budget = scenario.timeout if scenario.timeout is not None else self.timeout
        started = self.clock()
        deadline = Deadline(expires_at=started + budget, clock=self.clock)
        report.started_at = datetime.now(UTC)
        logger.info(f"Starting scenario {scenario.qualified_name} ({len(scenario.steps)} steps)")

        surface: Surface | None = None
        try:
            report.last_action = "open session"
            surface = self.surface_factory()
            report.status = ScenarioStatus.IN_PROGRESS
            context = ScenarioContext(surface=surface, store=self.store, waits=WaitStrategy(deadline=deadline))

            for step_name, action in scenario.steps:
                if deadline.expired():
                    raise ScenarioTimeoutError(scenario.qualified_name, budget, report.last_action)
                record = StepRecord(name=step_name, started_at=datetime.now(UTC))
                report.steps.append(record)
                report.last_action = step_name
                logger.info(f"[{scenario.qualified_name}] {step_name}")
                action(context)
                record.finished_at = datetime.now(UTC)
                record.succeeded = True

            report.status = ScenarioStatus.COMPLETED
            logger.info(f"Scenario {scenario.qualified_name} completed")
        except Exception as e:
            error = e
            if not isinstance(e, ScenarioTimeoutError) and report.steps and deadline.expired():
                error = ScenarioTimeoutError(scenario.qualified_name, budget, report.last_action)
                error.__cause__ = e
            report.status = ScenarioStatus.FAILED
            report.error = f"{type(error).__name__}: {error}"
            if error is not e:
                report.error += f" ({type(e).__name__}: {e})"
            report.timed_out = isinstance(error, ScenarioTimeoutError)
            report._exception = error
            if report.steps and report.steps[-1].finished_at is None:
                report.steps[-1].finished_at = datetime.now(UTC)
            logger.error(
                f"Scenario {scenario.qualified_name} failed at '{report.last_action}': {report.error}"
            )
            if surface is not None:
                self._capture_failure(surface, scenario)
        finally:
            if surface is not None:
                surface.close()
            report.duration_seconds = round(self.clock() - started, 3)
        return report

    def run_all(self, scenarios: Iterable[Scenario]) -> list[ScenarioReport]:
        return [self.run(scenario) for scenario in scenarios]

    def _capture_failure(self, surface: Surface, scenario: Scenario) -> None:
        path = Path(self.screenshot_dir) / f"{scenario.group}-{scenario.name}-{unique_token()}.png"
        if surface.screenshot(str(path)):
            logger.info(f"Failure screenshot saved to {path}")
