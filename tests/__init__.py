"""Test helpers for gitsync."""

import datetime

START_TIME = datetime.datetime(2023, 5, 1, 12, 0, 0, tzinfo=datetime.timezone.utc)


class FakeClock:
    """A clock that only moves when advanced."""

    def __init__(self, start: datetime.datetime) -> None:
        self.current = start

    def __call__(self) -> datetime.datetime:
        return self.current

    def advance(self, seconds: int = 1) -> datetime.datetime:
        """Move the clock forward and return the new time."""
        self.current += datetime.timedelta(seconds=seconds)
        return self.current
