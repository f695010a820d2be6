"""
Kernel - bit layout, clocks and infrastructure

The kernel holds everything the generator builds on: the ID bit layout,
the injectable clock, the wait loop and the error hierarchy.
"""

from shardflake.kernel.clock import Clock, SystemClock, TestClock
from shardflake.kernel.errors import (
    ConfigurationError,
    InvalidEncodingError,
    InvalidEpochError,
    InvalidShardIDError,
    ShardflakeError,
    TimestampOverflowError,
)
from shardflake.kernel.ids import (
    DEFAULT_EPOCH_MS,
    MAX_SEQUENCE,
    MAX_SHARD_ID,
    MAX_TIMESTAMP,
    IdParts,
    compose_id,
    decompose_id,
)

__all__ = [
    # IDs
    "DEFAULT_EPOCH_MS",
    "MAX_SEQUENCE",
    "MAX_SHARD_ID",
    "MAX_TIMESTAMP",
    "IdParts",
    "compose_id",
    "decompose_id",
    # Clocks
    "Clock",
    "SystemClock",
    "TestClock",
    # Errors
    "ShardflakeError",
    "ConfigurationError",
    "InvalidShardIDError",
    "InvalidEpochError",
    "TimestampOverflowError",
    "InvalidEncodingError",
]
