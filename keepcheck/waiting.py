"""Bounded polling against live UI state.

The application under test never tells us when it has finished rendering,
so every wait in the harness is a predicate polled until it holds or a
deadline passes. The same primitive answers both "did X appear?" and "did X
stay away?": a short wait that times out is the only sound way to claim the
UI did not show something.
"""

import logging
import time
from typing import Callable, Optional, Tuple, Type, TypeVar

from .errors import StaleElementError, TimedOut

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_POLL_INTERVAL = 0.25


def wait_until(
    predicate: Callable[[], T],
    timeout: float,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    *,
    description: str = "condition",
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
    backoff: float = 1.0,
    max_interval: Optional[float] = None,
    ignored: Tuple[Type[BaseException], ...] = (StaleElementError,),
) -> T:
    """Poll ``predicate`` until it returns a truthy value and return it.

    The predicate runs at least once, even with a zero timeout. Sleeps are
    clipped to the remaining time, so the call never runs past the deadline
    by more than one predicate evaluation. Exceptions listed in ``ignored``
    count as a falsy observation and are kept as the last observed state.

    Raises:
        TimedOut: if the deadline passes first.
    """
    deadline = clock() + timeout
    interval = poll_interval
    last = None
    attempts = 0
    while True:
        attempts += 1
        try:
            value = predicate()
        except ignored as exc:
            last = exc
        else:
            if value:
                logger.debug("%s satisfied after %d poll(s)", description, attempts)
                return value
            last = value
        remaining = deadline - clock()
        if remaining <= 0:
            logger.debug("%s not satisfied after %d poll(s)", description, attempts)
            raise TimedOut(description, timeout, last)
        sleep(min(interval, remaining))
        if backoff != 1.0:
            interval = interval * backoff
            if max_interval is not None:
                interval = min(interval, max_interval)


class Waiter:
    """``wait_until`` bound to one session's clock and default timeouts."""

    def __init__(self, clock=time.monotonic, sleep=time.sleep, timeout=10.0,
                 short_timeout=3.0, poll_interval=DEFAULT_POLL_INTERVAL):
        self.clock = clock
        self.sleep = sleep
        self.timeout = timeout
        self.short_timeout = short_timeout
        self.poll_interval = poll_interval

    def until(self, predicate, description="condition", timeout=None):
        return wait_until(
            predicate,
            self.timeout if timeout is None else timeout,
            self.poll_interval,
            description=description,
            clock=self.clock,
            sleep=self.sleep,
        )

    def holds_within(self, predicate, description="condition", timeout=None) -> bool:
        """True if the predicate holds before a short deadline."""
        try:
            self.until(predicate, description, self.short_timeout if timeout is None else timeout)
        except TimedOut:
            return False
        return True

    def never_within(self, predicate, description="condition", timeout=None) -> bool:
        """Bounded absence proof: True if the predicate never held in time."""
        return not self.holds_within(predicate, description, timeout)
