"""
Explicit outcomes for the asynchronous steps of a refresh cycle.
"""

from dataclasses import dataclass, field
from typing import Awaitable, Generic, Optional, TypeVar

T = TypeVar("T")


@dataclass
class FetchResult(Generic[T]):
    """Either a value or the exception that prevented it."""

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "FetchResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: BaseException) -> "FetchResult[T]":
        return cls(error=error)

    def unwrap(self) -> T:
        """Return the value, re-raising the stored error if there is one."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


async def capture(awaitable: Awaitable[T]) -> FetchResult[T]:
    """Await and wrap the outcome; cancellation still propagates."""
    try:
        return FetchResult.success(await awaitable)
    except Exception as e:
        return FetchResult.failure(e)


@dataclass
class CycleReport:
    """What happened in one refresh cycle, per failure domain."""

    cycle: int
    cards: FetchResult[bool] = field(default_factory=FetchResult)
    charts: FetchResult[bool] = field(default_factory=FetchResult)
    skipped: bool = False

    @property
    def ok(self) -> bool:
        return not self.skipped and self.cards.ok and self.charts.ok
