"""Run blocking agent calls side by side and collect every outcome."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Generic, List, Optional, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of one call in a fan-out: a value or the exception it raised."""

    value: Optional[T] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def gather_settled(calls: Sequence[Callable[[], T]]) -> List[Outcome[T]]:
    """Await every call; one failure never cancels or hides the others."""
    results = await asyncio.gather(
        *(asyncio.to_thread(call) for call in calls), return_exceptions=True
    )
    outcomes: List[Outcome[Any]] = []
    for result in results:
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            outcomes.append(Outcome(error=result))
        else:
            outcomes.append(Outcome(value=result))
    return outcomes


def settle_all(calls: Sequence[Callable[[], T]]) -> List[Outcome[T]]:
    """Blocking entry point for callers without a running event loop."""
    if not calls:
        return []
    return asyncio.run(gather_settled(calls))
