"""Test fixtures for gitsync."""

from collections.abc import Generator

import pytest

from gitsync.context import clock_context

from . import START_TIME, FakeClock


@pytest.fixture
def fake_clock() -> FakeClock:
    """Create a clock fixed at the start time."""
    return FakeClock(START_TIME)


@pytest.fixture(autouse=True)
def install_clock(fake_clock: FakeClock) -> Generator[None, None, None]:
    """Stamp all status updates made by a test with the fake clock."""
    with clock_context(fake_clock):
        yield
