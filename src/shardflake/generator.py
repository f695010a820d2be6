"""
Generator - per-shard Snowflake ID state machine

A Generator owns one shard ID and one epoch and hands out 64-bit IDs on
demand. It is safe to share between threads: one lock covers the
compare-and-update of (last_timestamp, sequence), so no two callers can
ever be handed the same (timestamp, sequence) pair.

Example:
    >>> from shardflake import Generator
    >>> gen = Generator(shard_id=42)
    >>> snowflake_id = gen.generate_id()
    >>> gen.parse(snowflake_id).shard_id
    42
"""

import threading
import time
from datetime import datetime
from typing import TYPE_CHECKING

from shardflake import encoding
from shardflake.kernel.clock import Clock, SystemClock
from shardflake.kernel.errors import InvalidEpochError
from shardflake.kernel.ids import (
    DEFAULT_EPOCH_MS,
    MAX_SEQUENCE,
    MAX_TIMESTAMP,
    IdParts,
    compose_id,
    decompose_id,
    validate_shard_id,
)
from shardflake.kernel.logging import get_logger
from shardflake.kernel.metrics import (
    clock_regressions_total,
    clock_wait_seconds,
    ids_generated_total,
    sequence_exhausted_total,
)
from shardflake.kernel.retry import wait_for_clock

if TYPE_CHECKING:
    from shardflake.config import GeneratorSettings

logger = get_logger(__name__)


class Generator:
    """
    Concurrency-safe Snowflake ID generator for one shard

    Each ID is (timestamp << 23) | (shard_id << 10) | sequence, where
    timestamp is milliseconds since the epoch and sequence counts IDs
    issued within the current millisecond.

    Clock anomalies never surface as errors. When 1024 IDs have been issued
    in one millisecond, or the clock has moved backwards, generate_id()
    waits for the clock to catch up - usually well under a millisecond,
    but there is no upper bound and no cancellation.
    """

    def __init__(
        self,
        shard_id: int,
        epoch: int = 0,
        *,
        clock: Clock | None = None,
        wait_interval_us: int = 100,
    ) -> None:
        """
        Initialize generator

        Args:
            shard_id: Shard identifier (0-8191)
            epoch: Epoch in Unix milliseconds (0 selects DEFAULT_EPOCH_MS)
            clock: Clock to read (uses the system clock if None)
            wait_interval_us: Sleep between clock reads while waiting (1-1000)

        Raises:
            InvalidShardIDError: If shard_id does not fit 13 bits
            InvalidEpochError: If epoch is negative, lies after the current clock
                reading, or is so old that timestamps overflow 41 bits
            ValueError: If wait_interval_us is out of range
        """
        validate_shard_id(shard_id)
        if not 1 <= wait_interval_us <= 1000:
            raise ValueError(
                f"wait_interval_us must be between 1 and 1000, got {wait_interval_us}"
            )

        self._clock = clock or SystemClock()
        self._epoch = epoch or DEFAULT_EPOCH_MS

        now_ms = self._clock.now_ms()
        if self._epoch < 0:
            raise InvalidEpochError(self._epoch, now_ms, "epoch must not be negative")
        if self._epoch > now_ms:
            raise InvalidEpochError(self._epoch, now_ms)
        if now_ms - self._epoch > MAX_TIMESTAMP:
            raise InvalidEpochError(
                self._epoch,
                now_ms,
                f"elapsed time exceeds the 41-bit timestamp range ({MAX_TIMESTAMP} ms)",
            )

        self._shard_id = shard_id
        self._wait_interval_s = wait_interval_us / 1_000_000
        self._last_timestamp = 0
        self._sequence = 0
        self._lock = threading.Lock()

        shard_label = str(shard_id)
        self._ids_generated = ids_generated_total.labels(shard_id=shard_label)
        self._sequence_exhausted = sequence_exhausted_total.labels(shard_id=shard_label)
        self._clock_regressions = clock_regressions_total.labels(shard_id=shard_label)

        self._logger = logger.bind(shard_id=shard_id)
        self._logger.info("Generator created", epoch=self._epoch)

    @classmethod
    def from_settings(
        cls, settings: "GeneratorSettings", clock: Clock | None = None
    ) -> "Generator":
        """Build a generator from validated settings"""
        return cls(
            settings.shard_id,
            settings.epoch_ms,
            clock=clock,
            wait_interval_us=settings.wait_interval_us,
        )

    @property
    def shard_id(self) -> int:
        return self._shard_id

    @property
    def epoch(self) -> int:
        return self._epoch

    @property
    def last_timestamp(self) -> int:
        return self._last_timestamp

    @property
    def sequence(self) -> int:
        return self._sequence

    def generate_id(self) -> int:
        """
        Generate the next ID

        Returns:
            64-bit unsigned integer ID, strictly greater than any ID this
            generator issued before
        """
        with self._lock:
            while True:
                now = self._clock.now_ms() - self._epoch

                if now > self._last_timestamp:
                    sequence = 0
                    break

                if now == self._last_timestamp:
                    sequence = (self._sequence + 1) & MAX_SEQUENCE
                    if sequence != 0:
                        break
                    # Sequence space for this millisecond is used up
                    self._sequence_exhausted.inc()
                    self._logger.debug("Sequence exhausted", timestamp=now)
                    self._wait(now, inclusive=False, reason="sequence_exhausted")
                    continue

                # Clock moved backwards - never reuse a (timestamp, sequence) pair
                self._clock_regressions.inc()
                self._logger.warning(
                    "Clock moved backwards, waiting for it to catch up",
                    last_timestamp=self._last_timestamp,
                    now=now,
                    drift_ms=self._last_timestamp - now,
                )
                self._wait(self._last_timestamp, inclusive=True, reason="clock_regressed")

            # State is only committed once the ID is known to fit
            snowflake_id = compose_id(now, self._shard_id, sequence)
            self._last_timestamp = now
            self._sequence = sequence

        self._ids_generated.inc()
        return snowflake_id

    def _wait(self, target: int, *, inclusive: bool, reason: str) -> None:
        start = time.perf_counter()
        wait_for_clock(
            self._clock,
            self._epoch,
            target,
            interval_s=self._wait_interval_s,
            inclusive=inclusive,
        )
        clock_wait_seconds.labels(reason=reason).observe(time.perf_counter() - start)

    def generate_hex(self) -> str:
        """Generate a new ID as 16 lowercase hex characters (big-endian)"""
        return encoding.to_hex(self.generate_id())

    def generate_base64(self) -> str:
        """Generate a new ID as unpadded URL-safe base64 (big-endian)"""
        return encoding.to_base64(self.generate_id())

    def generate_buffer(self) -> bytes:
        """Generate a new ID as 8 little-endian bytes"""
        return encoding.to_bytes_le(self.generate_id())

    def generate_buffer_be(self) -> bytes:
        """Generate a new ID as 8 big-endian bytes"""
        return encoding.to_bytes_be(self.generate_id())

    def parse(self, snowflake_id: int) -> IdParts:
        """Split an ID into its timestamp, shard ID and sequence fields"""
        return decompose_id(snowflake_id)

    def issued_at(self, snowflake_id: int) -> datetime:
        """Return when an ID was issued, interpreted against this generator's epoch"""
        return decompose_id(snowflake_id).issued_at(self._epoch)

    def __repr__(self) -> str:
        return f"Generator(shard_id={self._shard_id}, epoch={self._epoch})"
