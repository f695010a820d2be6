"""
Pytest configuration and shared fixtures

Most generator tests run against a TestClock so that "the same millisecond",
"the next millisecond" and "the clock jumped backwards" are exact, not
timing-dependent.
"""

import pytest

from shardflake.generator import Generator
from shardflake.kernel.clock import TestClock

# 2025-01-15 12:00:00 UTC
TEST_START_MS = 1_736_942_400_000


@pytest.fixture
def test_clock() -> TestClock:
    """Provide a frozen clock that only moves when told to (or slept on)"""
    return TestClock(TEST_START_MS)


@pytest.fixture
def generator(test_clock: TestClock) -> Generator:
    """Provide a shard-1 generator driven by the test clock"""
    return Generator(shard_id=1, clock=test_clock)
