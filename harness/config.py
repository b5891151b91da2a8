from enum import Enum

from pydantic_settings import BaseSettings


class WaitMode(str, Enum):
    EVENT_DRIVEN = "event_driven"
    HYBRID = "hybrid"


class BackoffMode(str, Enum):
    FIXED = "fixed"
    INCREMENTAL = "incremental"
    EXPONENTIAL = "exponential"


class Settings(BaseSettings):
    base_url: str = "http://localhost:3000"
    bot_email: str = ""
    bot_password: str = ""
    base_company: str = ""

    auth0_domain: str = ""
    entity_app_url: str = "http://localhost:3001"

    headless: bool = True
    chromedriver_path: str = ""
    window_size: str = "1920,1080"

    wait_mode: WaitMode = WaitMode.EVENT_DRIVEN
    default_timeout_seconds: float = 10.0
    poll_interval_seconds: float = 0.2

    retry_max_attempts: int = 3
    retry_backoff_seconds: float = 0.5
    retry_backoff_mode: BackoffMode = BackoffMode.INCREMENTAL

    handoff_dir: str = "test-data"
    scenario_timeout_seconds: float = 120.0
    screenshot_dir: str = "screenshots"

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def credentials_configured(self) -> bool:
        return bool(self.bot_email and self.bot_password)


settings = Settings()
