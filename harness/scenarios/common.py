from harness.pages.login_page import LoginPage
from harness.services.scenario_runner import ScenarioContext, Step


def sign_in(ctx: ScenarioContext) -> None:
    LoginPage(ctx.surface, ctx.waits).login_with_settings()


SIGN_IN: Step = ("sign in", sign_in)
