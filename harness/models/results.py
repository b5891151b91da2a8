from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class OptionSnapshot:
    """Labels of one selectable surface, read in a single pass after it opened."""

    labels: tuple[str, ...]
    captured_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __len__(self) -> int:
        return len(self.labels)


@dataclass(frozen=True)
class Found:
    label: str
    index: int


@dataclass(frozen=True)
class NotFound:
    searched: str
    available: OptionSnapshot
    candidates: tuple[str, ...] = ()

    @property
    def ambiguous(self) -> bool:
        return len(self.candidates) > 1


MatchResult = Found | NotFound


@dataclass(frozen=True)
class Success(Generic[T]):
    attempts: int
    value: T | None = None


@dataclass(frozen=True)
class Exhausted:
    attempts: int
    last_error: BaseException


RetryOutcome = Success | Exhausted
