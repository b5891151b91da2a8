import logging
import re

from harness.config import settings
from harness.pages.base_page import BasePage
from harness.providers.dom_schema import DOM, text_containing, text_exact

logger = logging.getLogger(__name__)

COMPANY_SELECTION_TIMEOUT_SECONDS = 15.0


class LoginPage(BasePage):
    """Auth0 sign-in followed by base-company selection."""

    def navigate_to_login(self) -> None:
        self.goto(DOM.LOGIN.sign_in_path)

    def click_proceed(self) -> None:
        self.click(DOM.LOGIN.proceed_button)

    def enter_email(self, email: str) -> None:
        self.fill(DOM.LOGIN.email_input, email)

    def enter_password(self, password: str) -> None:
        self.fill(DOM.LOGIN.password_input, password)

    def click_login(self) -> None:
        self.click(DOM.LOGIN.login_button)

    def login(self, email: str, password: str) -> None:
        logger.info(f"Logging in as {email}")
        self.navigate_to_login()
        self.click_proceed()
        self.enter_email(email)
        self.enter_password(password)
        self.click_login()
        self.wait_for_page_load()

    def select_company(self, company_name: str) -> None:
        """
        Pick the company to work in.

        The chooser groups companies under their parent, so the parent entry
        (the name without a trailing "Testing") is expanded first.
        """
        logger.info(f'Selecting company: "{company_name}"')
        parent_name = re.sub(r"\s+Testing$", "", company_name)
        self.click(text_containing(parent_name))
        self.click(text_exact(company_name))
        self.waits.wait_for_url(
            self.surface, DOM.LOGIN.landing_url_pattern, COMPANY_SELECTION_TIMEOUT_SECONDS
        )
        logger.info(f'Selected company: "{company_name}"')

    def login_with_company(self, email: str, password: str, company_name: str | None = None) -> None:
        self.login(email, password)
        company = company_name or settings.base_company
        if not company:
            raise ValueError("No company to select: pass company_name or set BASE_COMPANY")
        self.select_company(company)

    def login_with_settings(self) -> None:
        """Sign in with BOT_EMAIL / BOT_PASSWORD and select BASE_COMPANY."""
        if not settings.credentials_configured():
            raise ValueError("BOT_EMAIL and BOT_PASSWORD must be set to sign in")
        self.login_with_company(settings.bot_email, settings.bot_password)
