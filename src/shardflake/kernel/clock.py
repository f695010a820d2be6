"""
Clock abstraction for deterministic testing

The generator reads wall-clock milliseconds and sleeps while it waits for
the clock to move. Both go through a Clock so tests can freeze time, push
it forward, or wind it backwards to simulate an NTP correction.

Fun fact: Leap seconds used to be inserted by repeating 23:59:59 - exactly
the kind of backward step a Snowflake generator has to survive.
"""

import threading
import time
from typing import Protocol


class Clock(Protocol):
    """Protocol for clocks - allows deterministic testing"""

    def now_ms(self) -> int:
        """Return current Unix time in milliseconds"""
        ...

    def sleep(self, seconds: float) -> None:
        """Block for the given number of seconds"""
        ...


class SystemClock:
    """Production clock using the system wall clock"""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)


class TestClock:
    """
    Controllable clock for deterministic tests

    Time only moves when a test moves it, or when someone sleeps on it:
    sleep() advances the clock by the slept duration (at least 1 ms), so
    wait loops always terminate without real waiting.
    """

    __test__ = False  # not a pytest test class

    def __init__(self, start_ms: int = 1_736_942_400_000) -> None:
        """
        Initialize with optional fixed time

        Args:
            start_ms: Starting Unix time in ms (defaults to 2025-01-15 12:00:00 UTC)
        """
        self._now_ms = start_ms
        self._lock = threading.Lock()
        self.sleep_calls = 0

    def now_ms(self) -> int:
        with self._lock:
            return self._now_ms

    def sleep(self, seconds: float) -> None:
        with self._lock:
            self.sleep_calls += 1
            self._now_ms += max(1, int(seconds * 1000))

    def set_ms(self, now_ms: int) -> None:
        """Set current time to a specific value"""
        with self._lock:
            self._now_ms = now_ms

    def advance_ms(self, ms: int) -> None:
        """Move time forward by ms milliseconds"""
        with self._lock:
            self._now_ms += ms

    def rewind_ms(self, ms: int) -> None:
        """Move time backward by ms milliseconds"""
        with self._lock:
            self._now_ms -= ms
