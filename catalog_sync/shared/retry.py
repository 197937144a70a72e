"""
Retry and backoff helpers for outbound requests

Every remote call in the pipeline goes through RetryPolicy.run. Attempts are
strictly sequential and the delay between them doubles from the base delay
(1s, 2s, 4s, ...). The sleep function is injectable so tests never wait.
"""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, TypeVar

from catalog_sync.core.logging import get_logger
from catalog_sync.core.exceptions import error_message
from catalog_sync.shared.constants import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_RETRY_BASE_DELAY_MS,
    DEFAULT_RATE_LIMIT_DELAY_MS,
)

logger = get_logger(__name__)

T = TypeVar("T")

SleepFunc = Callable[[int], Awaitable[None]]


async def sleep(ms: int) -> None:
    """Suspend the calling task for the given number of milliseconds"""
    await asyncio.sleep(max(ms, 0) / 1000)


@dataclass
class RetryState:
    """Progress of one retried operation"""

    max_attempts: int
    base_delay_ms: int
    attempt: int = 0
    last_error: Optional[BaseException] = None

    @property
    def exhausted(self) -> bool:
        return self.attempt >= self.max_attempts

    @property
    def next_delay_ms(self) -> int:
        """Delay to wait after the current (failed) attempt"""
        return (2 ** (self.attempt - 1)) * self.base_delay_ms

    def start_attempt(self) -> int:
        self.attempt += 1
        return self.attempt

    def record_failure(self, error: BaseException) -> None:
        self.last_error = error


class RetryPolicy:
    """Bounded exponential backoff for async operations"""

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_RETRIES,
        base_delay_ms: int = DEFAULT_RETRY_BASE_DELAY_MS,
        rate_limit_delay_ms: int = DEFAULT_RATE_LIMIT_DELAY_MS,
        sleep_func: Optional[SleepFunc] = None,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.max_attempts = max_attempts
        self.base_delay_ms = base_delay_ms
        self.rate_limit_delay_ms = rate_limit_delay_ms
        self.sleep = sleep_func or sleep

    @classmethod
    def from_settings(cls, scraper_settings, sleep_func: Optional[SleepFunc] = None):
        return cls(
            max_attempts=scraper_settings.MAX_RETRIES,
            base_delay_ms=scraper_settings.RETRY_BASE_DELAY_MS,
            rate_limit_delay_ms=scraper_settings.RATE_LIMIT_DELAY_MS,
            sleep_func=sleep_func,
        )

    def rate_limit_delay(self) -> int:
        """Delay between consecutive catalog pages, in milliseconds"""
        return self.rate_limit_delay_ms

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        label: str,
        max_attempts: Optional[int] = None,
    ) -> T:
        """Run operation until it succeeds or attempts run out.

        On final failure the last error is re-raised unchanged, with a note
        naming the label and the number of attempts made.
        """
        state = RetryState(
            max_attempts=max_attempts or self.max_attempts,
            base_delay_ms=self.base_delay_ms,
        )

        while True:
            attempt = state.start_attempt()
            try:
                return await operation()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                state.record_failure(e)

                if state.exhausted:
                    logger.error(
                        f"All {state.max_attempts} attempts failed",
                        operation=label,
                        final_error=error_message(e),
                    )
                    e.add_note(f"{label}: failed after {attempt} attempt(s)")
                    raise

                delay = state.next_delay_ms
                logger.warning(
                    f"Attempt {attempt} failed, retrying in {delay}ms",
                    operation=label,
                    error=error_message(e),
                    attempt=attempt,
                    max_attempts=state.max_attempts,
                )
                await self.sleep(delay)
