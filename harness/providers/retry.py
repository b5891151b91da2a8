"""
Bounded retries for interactions that fail because the UI is still rendering.

Only transient errors consume attempts. Anything else (ambiguity, missing
options, missing handoff state, programming errors) propagates on the attempt
that raised it.
"""

import logging
import time as time_module
from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from selenium.common.exceptions import (
    ElementClickInterceptedException,
    ElementNotInteractableException,
    StaleElementReferenceException,
    TimeoutException,
)

from harness.config import BackoffMode, settings
from harness.errors import RetryExhaustedError, TransientSurfaceError
from harness.models.results import Exhausted, RetryOutcome, Success
from harness.providers.wait_helper import Deadline

logger = logging.getLogger(__name__)

T = TypeVar("T")

TRANSIENT_EXCEPTIONS: tuple[type[BaseException], ...] = (
    StaleElementReferenceException,
    ElementClickInterceptedException,
    ElementNotInteractableException,
    TimeoutException,
    TransientSurfaceError,
)


@dataclass(frozen=True)
class Backoff:
    """Delay schedule between attempts."""

    base_seconds: float = 0.5
    mode: BackoffMode = BackoffMode.INCREMENTAL

    def delay(self, attempt: int) -> float:
        """Delay after the given failed attempt (1-based)."""
        if self.mode == BackoffMode.FIXED:
            return self.base_seconds
        if self.mode == BackoffMode.EXPONENTIAL:
            return self.base_seconds * (2 ** (attempt - 1))
        return self.base_seconds * attempt

    @classmethod
    def from_settings(cls) -> "Backoff":
        return cls(base_seconds=settings.retry_backoff_seconds, mode=settings.retry_backoff_mode)


def retry(
    action: Callable[[], T],
    max_attempts: int | None = None,
    backoff: Backoff | None = None,
    transient: tuple[type[BaseException], ...] = TRANSIENT_EXCEPTIONS,
    description: str | None = None,
    sleep: Callable[[float], None] | None = None,
    deadline: Deadline | None = None,
) -> RetryOutcome:
    """
    Run action until it succeeds or max_attempts transient failures occur.

    Attempts are strictly sequential. Between attempts the caller's thread
    sleeps for the backoff delay. There is no sleep after the final attempt.
    Once deadline has passed no further attempt is started, and no backoff
    sleep outlasts it.

    Args:
        action: Zero-argument callable performing the interaction
        max_attempts: Maximum number of attempts (default from settings)
        backoff: Delay schedule (default from settings)
        transient: Exception types that count as a failed attempt
        description: Name used in log messages
        sleep: Sleep function, injectable for tests
        deadline: Scenario deadline, if any

    Returns:
        Success(attempts, value) on the first successful attempt, otherwise
        Exhausted(attempts, last_error) with the attempts actually made.

    Raises:
        Any non-transient exception raised by action, unchanged.
    """
    attempts_allowed = max_attempts if max_attempts is not None else settings.retry_max_attempts
    if attempts_allowed < 1:
        raise ValueError(f"max_attempts must be at least 1, got {attempts_allowed}")
    schedule = backoff or Backoff.from_settings()
    name = description or getattr(action, "__name__", "action")
    sleep = sleep or time_module.sleep

    attempt = 1
    while True:
        try:
            value = action()
        except transient as e:
            if attempt >= attempts_allowed:
                logger.error(f"All {attempts_allowed} attempts failed for {name}: {e}")
                return Exhausted(attempts=attempt, last_error=e)
            if deadline is not None and deadline.expired():
                logger.error(f"Scenario deadline passed after attempt {attempt} of {name}: {e}")
                return Exhausted(attempts=attempt, last_error=e)
            delay = schedule.delay(attempt)
            if deadline is not None:
                delay = min(delay, deadline.remaining())
            logger.warning(
                f"Attempt {attempt}/{attempts_allowed} failed for {name}: {e}. "
                f"Retrying in {delay:.1f}s..."
            )
            sleep(delay)
            attempt += 1
            continue
        if attempt > 1:
            logger.info(f"{name} succeeded on attempt {attempt}/{attempts_allowed}")
        return Success(attempts=attempt, value=value)


def retry_call(
    action: Callable[[], T],
    max_attempts: int | None = None,
    backoff: Backoff | None = None,
    transient: tuple[type[BaseException], ...] = TRANSIENT_EXCEPTIONS,
    description: str | None = None,
    sleep: Callable[[float], None] | None = None,
    deadline: Deadline | None = None,
) -> T:
    """Like retry(), but return the value directly and raise RetryExhaustedError on exhaustion."""
    name = description or getattr(action, "__name__", "action")
    outcome = retry(action, max_attempts, backoff, transient, name, sleep, deadline)
    if isinstance(outcome, Exhausted):
        raise RetryExhaustedError(name, outcome.attempts, outcome.last_error) from outcome.last_error
    return outcome.value  # type: ignore[return-value]
