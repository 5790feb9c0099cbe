# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Retries and circuit breaking for outbound HTTP calls."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from webclipper.shared.config.settings import ResilienceConfig
from webclipper.shared.logging import logger

T = TypeVar("T")


class CircuitOpenError(RuntimeError):
    pass


@dataclass
class CircuitBreaker:
    """Thread-safe in-memory breaker; opens after ``failure_threshold`` consecutive failures."""

    failure_threshold: int
    reset_timeout: float
    clock: Callable[[], float] = time.monotonic
    _failures: int = field(default=0, init=False)
    _opened_at: float | None = field(default=None, init=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @classmethod
    def from_config(cls, config: ResilienceConfig) -> CircuitBreaker:
        return cls(
            failure_threshold=config.circuit_fail_threshold,
            reset_timeout=config.circuit_reset_timeout,
        )

    @property
    def is_open(self) -> bool:
        return self._opened_at is not None

    def allow(self) -> bool:
        with self._lock:
            if self._opened_at is None:
                return True
            if self.clock() - self._opened_at >= self.reset_timeout:
                logger.info("breaker: half-open state")
                self._opened_at = None
                self._failures = 0
                return True
            logger.warning("breaker: open state refusing call")
            return False

    def on_success(self) -> None:
        with self._lock:
            self._failures = 0
            self._opened_at = None

    def on_failure(self) -> None:
        with self._lock:
            self._failures += 1
            if self._failures >= self.failure_threshold and self._opened_at is None:
                self._opened_at = self.clock()
                logger.error(f"breaker: opening circuit after {self._failures} failures")


def resilient_call(  # noqa: UP047
    func: Callable[..., T],
    *args: Any,
    config: ResilienceConfig,
    breaker: CircuitBreaker | None = None,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
    **kwargs: Any,
) -> T:
    """Run ``func`` with exponential-backoff retries behind an optional breaker.

    Only exceptions in ``retry_on`` are retried; anything else propagates on
    the first attempt. The last exception is re-raised once attempts run out.
    """

    if breaker is not None and not breaker.allow():
        raise CircuitOpenError("Circuit breaker is open")

    retrying = Retrying(
        stop=stop_after_attempt(config.max_retries + 1),
        wait=wait_exponential(multiplier=config.backoff_base, max=config.backoff_cap),
        retry=retry_if_exception_type(retry_on),
        reraise=True,
    )

    try:
        for attempt in retrying:
            with attempt:
                logger.debug(
                    f"resilience: attempt={attempt.retry_state.attempt_number} "
                    f"func={getattr(func, '__name__', repr(func))}"
                )
                result = func(*args, **kwargs)
    except Exception:
        if breaker is not None:
            breaker.on_failure()
        raise

    if breaker is not None:
        breaker.on_success()
    return result


__all__ = ["CircuitBreaker", "CircuitOpenError", "resilient_call"]
