"""Utilities for injecting the time source used when stamping status updates.

Status updates read the current time from a context variable rather than the
system clock directly, so a reconciler or a test may install its own clock for
the duration of a reconciliation pass:

    with clock_context(lambda: fixed_time):
        status.mark_running()
"""

from collections.abc import Callable
import contextvars
from contextlib import contextmanager
import datetime
import logging
from typing import Generator


_LOGGER = logging.getLogger(__name__)

__all__ = [
    "Clock",
    "clock_context",
    "now",
    "utcnow",
]

Clock = Callable[[], datetime.datetime]


def utcnow() -> datetime.datetime:
    """Return the current time in UTC."""
    return datetime.datetime.now(datetime.timezone.utc)


CLOCK: contextvars.ContextVar[Clock] = contextvars.ContextVar("clock", default=utcnow)


def now() -> datetime.datetime:
    """Return the current time from the installed clock."""
    return CLOCK.get()()


@contextmanager
def clock_context(clock: Clock) -> Generator[None, None, None]:
    """Install a clock for status updates made within the context."""
    token = CLOCK.set(clock)
    _LOGGER.debug("Installed clock %s", clock)
    try:
        yield
    finally:
        CLOCK.reset(token)
