"""
Error taxonomy for the automation harness.

Errors fall into two families:

- TransientSurfaceError: timing/rendering races. The retrier may absorb these.
- HarnessLogicError: ambiguity or absence that retrying cannot fix. These are
  always re-raised immediately with full diagnostic context.
"""

from collections.abc import Sequence


class HarnessError(Exception):
    """Base class for all harness errors."""


class TransientSurfaceError(HarnessError):
    """The UI was not ready yet; the same action may succeed on a later attempt."""


class NoActiveSurfaceError(TransientSurfaceError):
    """No selectable surface became active within the wait ceiling."""

    def __init__(self, description: str, timeout: float) -> None:
        self.description = description
        self.timeout = timeout
        super().__init__(f"No active {description} found after {timeout:.1f}s")


class HarnessLogicError(HarnessError):
    """A condition retrying will not fix."""


class AmbiguousSurfaceError(HarnessLogicError):
    """More than one instance of a selectable surface is active at once."""

    def __init__(self, description: str, count: int) -> None:
        self.description = description
        self.count = count
        super().__init__(
            f"Found {count} active {description} instances; refusing to guess which one is current"
        )


class OptionNotFoundError(HarnessLogicError):
    """No single option matched the target. Carries every available label."""

    def __init__(
        self,
        target: str,
        available: Sequence[str],
        candidates: Sequence[str] = (),
    ) -> None:
        self.target = target
        self.available = tuple(available)
        self.candidates = tuple(candidates)
        if self.candidates:
            message = (
                f'Option "{target}" is ambiguous: {len(self.candidates)} options match '
                f"({', '.join(self.candidates)}). Available: {', '.join(self.available)}"
            )
        else:
            message = (
                f'Option "{target}" not found. '
                f"Available: {', '.join(self.available) or 'none'}"
            )
        super().__init__(message)


class MissingStateError(HarnessLogicError):
    """A required handoff value has not been produced by an earlier run."""

    def __init__(self, key: str, producer: str | None = None, location: str | None = None) -> None:
        self.key = key
        self.producer = producer
        self.location = location
        hint = f"Run the '{producer}' scenario first" if producer else "Run the producing scenario first"
        if location:
            hint += f" or create {location} manually"
        super().__init__(f'Required handoff key "{key}" not found. {hint}.')


class RetryExhaustedError(HarnessError):
    """Every attempt of a flaky action failed with a transient error."""

    def __init__(self, description: str, attempts: int, last_error: BaseException) -> None:
        self.description = description
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(f"{description} failed after {attempts} attempts: {last_error}")


class ScenarioTimeoutError(HarnessError):
    """A scenario ran past its overall time budget and was abandoned."""

    def __init__(self, scenario: str, timeout: float, last_action: str | None) -> None:
        self.scenario = scenario
        self.timeout = timeout
        self.last_action = last_action
        super().__init__(
            f"Scenario '{scenario}' exceeded {timeout:.0f}s (last action: {last_action or 'none'})"
        )


class VerificationError(HarnessError):
    """The application did not reach the state a scenario checks for."""
