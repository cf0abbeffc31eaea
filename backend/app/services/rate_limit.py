"""Rate-limit and retry policies for upstream data providers.

Both policies take an injectable ``sleep`` coroutine so callers (and tests)
can control time without patching asyncio.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[None]]


@dataclass
class FixedDelayPolicy:
    """Waits a fixed interval after each upstream call.

    Used for the sequential flight fan-out: one pair at a time, then a pause.
    """

    delay_seconds: float = 0.25
    sleep: Sleep = field(default=asyncio.sleep, repr=False)

    async def pause(self) -> None:
        if self.delay_seconds > 0:
            await self.sleep(self.delay_seconds)


class RetryableStatus(Exception):
    """Raised inside a retried call to request another attempt (e.g. HTTP 429)."""

    def __init__(self, status_code: int):
        super().__init__(f"retryable status {status_code}")
        self.status_code = status_code


@dataclass
class BackoffPolicy:
    """Exponential backoff for HTTP 429 and transport errors.

    Attempt ``n`` (0-based) that fails waits ``base_seconds * 2**n`` before the
    next one. The last failure is re-raised unchanged.
    """

    max_attempts: int = 3
    base_seconds: float = 1.0
    sleep: Sleep = field(default=asyncio.sleep, repr=False)

    def delay_for(self, attempt: int) -> float:
        return self.base_seconds * (2 ** attempt)

    async def run(self, call: Callable[[], Awaitable[T]]) -> T:
        for attempt in range(self.max_attempts):
            try:
                return await call()
            except (RetryableStatus, httpx.TransportError) as e:
                if attempt >= self.max_attempts - 1:
                    raise
                delay = self.delay_for(attempt)
                logger.info(f"Retrying after {e!r} in {delay:.1f}s (attempt {attempt + 1})")
                await self.sleep(delay)
        raise RuntimeError("BackoffPolicy.max_attempts must be >= 1")
