from harness.data.factories import (
    CANCEL_SHIFT_DRIVER,
    CANCEL_SHIFT_VEHICLE,
    make_incentive_data,
    make_shift_data,
)
from harness.pages.shift_page import ShiftPage
from harness.scenarios.common import SIGN_IN
from harness.services.scenario_runner import Scenario, ScenarioContext

GROUP = "shift"


def open_shifts(ctx: ScenarioContext) -> None:
    page = ShiftPage(ctx.surface, ctx.waits)
    page.navigate_to_shifts()
    page.search_shifts()


def create_shift(ctx: ScenarioContext) -> None:
    shift = make_shift_data(ctx.token)
    ShiftPage(ctx.surface, ctx.waits).create_shift(shift)


def create_shift_for_cancellation(ctx: ScenarioContext) -> None:
    shift = make_shift_data(ctx.token, driver=CANCEL_SHIFT_DRIVER, vehicle=CANCEL_SHIFT_VEHICLE)
    ShiftPage(ctx.surface, ctx.waits).create_shift(shift)


def incentive_step(amount: float):
    def add_incentive(ctx: ScenarioContext) -> None:
        ShiftPage(ctx.surface, ctx.waits).add_incentive(make_incentive_data(amount))

    return add_incentive


def close_shift(ctx: ScenarioContext) -> None:
    ShiftPage(ctx.surface, ctx.waits).close_shift()


def approve_shift(ctx: ScenarioContext) -> None:
    ShiftPage(ctx.surface, ctx.waits).approve_shift()


def cancel_shift(ctx: ScenarioContext) -> None:
    ShiftPage(ctx.surface, ctx.waits).cancel_shift()


CREATE_SHIFT_AND_APPROVE = Scenario(
    name="create_shift_and_approve",
    group=GROUP,
    description="Create a shift with a job incentive, close it and approve it",
    steps=[
        SIGN_IN,
        ("open shifts", open_shifts),
        ("create shift", create_shift),
        ("add incentive", incentive_step(50)),
        ("close shift", close_shift),
        ("approve shift", approve_shift),
    ],
)

CREATE_SHIFT_AND_CANCEL = Scenario(
    name="create_shift_and_cancel",
    group=GROUP,
    description="Create a shift with a job incentive, close it and cancel it",
    steps=[
        SIGN_IN,
        ("open shifts", open_shifts),
        ("create shift", create_shift_for_cancellation),
        ("add incentive", incentive_step(15)),
        ("close shift", close_shift),
        ("cancel shift", cancel_shift),
    ],
)

SCENARIOS = [CREATE_SHIFT_AND_APPROVE, CREATE_SHIFT_AND_CANCEL]
