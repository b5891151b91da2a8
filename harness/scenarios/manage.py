from harness.data.manage_entities import get_all_manage_entities
from harness.errors import VerificationError
from harness.pages.manage_entities_page import ManageEntitiesPage
from harness.scenarios.common import SIGN_IN
from harness.services.scenario_runner import Scenario, ScenarioContext

GROUP = "manage"

# Some entities are legitimately empty or restricted for the bot user.
PASS_THRESHOLD = 0.8


def open_manage(ctx: ScenarioContext) -> None:
    ManageEntitiesPage(ctx.surface, ctx.waits).navigate_to_manage()


def visit_all_entities(ctx: ScenarioContext) -> None:
    ctx.values["sweep"] = ManageEntitiesPage(ctx.surface, ctx.waits).visit_all(get_all_manage_entities())


def check_pass_rate(ctx: ScenarioContext) -> None:
    sweep = ctx.values["sweep"]
    if not sweep.passed(PASS_THRESHOLD):
        raise VerificationError(
            f"Only {len(sweep.visited)}/{sweep.total} Manage entities displayed "
            f"(need more than {PASS_THRESHOLD:.0%}). Failed: {', '.join(sweep.failed)}"
        )


VISIT_ALL_ENTITIES = Scenario(
    name="visit_all_entities",
    group=GROUP,
    description="Open every entity under Manage and check more than 80% display",
    steps=[
        SIGN_IN,
        ("open Manage", open_manage),
        ("visit every entity", visit_all_entities),
        ("check pass rate", check_pass_rate),
    ],
)

SCENARIOS = [VISIT_ALL_ENTITIES]
