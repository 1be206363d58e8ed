"""
Exponential backoff policy and retry runner.

The policy is a plain value object: it only describes how long to wait after
each failed attempt and when to give up. ``retry_call`` turns it into a
tenacity ``Retrying`` controller and applies it to an arbitrary callable, so
the connection-opening side effect never has to know about delays.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, Field
from tenacity import (
    RetryCallState,
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    stop_after_delay,
    stop_never,
)

from message_service.config import Settings
from message_service.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")


class BackoffPolicy(BaseModel):
    """
    Exponential backoff description.

    Attributes
    ----------
    initial_interval : float
        Delay in seconds after the first failed attempt.
    multiplier : float
        Growth factor applied to the delay after every further failure.
    max_interval : float
        Upper bound for a single delay.
    max_attempts : Optional[int]
        Total attempts before giving up; ``None`` means unbounded.
    max_elapsed : Optional[float]
        Seconds after which no further attempt is started; ``None`` means unbounded.
    """

    initial_interval: float = Field(0.5, gt=0)
    multiplier: float = Field(1.5, ge=1)
    max_interval: float = Field(60.0, gt=0)
    max_attempts: Optional[int] = Field(None, ge=1)
    max_elapsed: Optional[float] = Field(None, gt=0)

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Settings) -> "BackoffPolicy":
        return cls(
            initial_interval=settings.backoff_initial_interval,
            multiplier=settings.backoff_multiplier,
            max_interval=settings.backoff_max_interval,
            max_attempts=settings.backoff_max_attempts,
            max_elapsed=settings.backoff_max_elapsed,
        )

    def delay(self, attempt: int) -> float:
        """
        Seconds to wait after the given 1-based failed attempt.

        Grows geometrically from ``initial_interval`` and stays at
        ``max_interval`` once reached, however many attempts have failed.
        """
        if attempt < 1:
            raise ValueError(f"attempt must be >= 1, got {attempt}")
        try:
            grown = self.initial_interval * self.multiplier ** (attempt - 1)
        except OverflowError:
            return self.max_interval
        return min(grown, self.max_interval)

    def stop(self):
        """Tenacity stop condition equivalent to this policy."""
        stop = stop_never
        if self.max_attempts is not None:
            stop = stop_after_attempt(self.max_attempts)
        if self.max_elapsed is not None:
            by_delay = stop_after_delay(self.max_elapsed)
            stop = by_delay if stop is stop_never else stop | by_delay
        return stop

    def wait(self, retry_state: RetryCallState) -> float:
        """Tenacity wait callback; delegates to ``delay``."""
        return self.delay(retry_state.attempt_number)


def retry_call(
    fn: Callable[[], T],
    policy: Optional[BackoffPolicy] = None,
    retry_on: Tuple[Type[BaseException], ...] = (Exception,),
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """
    Call ``fn`` until it succeeds or ``policy`` is exhausted.

    Only exceptions listed in ``retry_on`` are retried; anything else
    propagates on the first occurrence. When the policy gives up, the last
    exception is re-raised unchanged.
    """
    policy = policy or BackoffPolicy()
    retrying = Retrying(
        stop=policy.stop(),
        wait=policy.wait,
        retry=retry_if_exception_type(retry_on),
        before_sleep=before_sleep_log(log, logging.WARNING),
        sleep=sleep,
        reraise=True,
    )
    return retrying(fn)


__all__ = ["BackoffPolicy", "retry_call"]
