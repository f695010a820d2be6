"""
Shardflake - coordination-free 64-bit Snowflake IDs

Each shard runs its own Generator and packs a millisecond timestamp, its
shard ID and a per-millisecond sequence into one 64-bit integer. Shards
never talk to each other; the shard field keeps their IDs apart.

Fun fact: Instagram's sharded ID scheme used the same 41/13/10 split,
with one logical shard per PostgreSQL schema.
"""

from shardflake.config import GeneratorSettings
from shardflake.generator import Generator
from shardflake.kernel.errors import (
    ConfigurationError,
    InvalidEncodingError,
    InvalidEpochError,
    InvalidShardIDError,
    ShardflakeError,
    TimestampOverflowError,
)
from shardflake.kernel.ids import DEFAULT_EPOCH_MS, IdParts, compose_id, decompose_id

__version__ = "0.1.0"
__all__ = [
    "Generator",
    "GeneratorSettings",
    "IdParts",
    "compose_id",
    "decompose_id",
    "DEFAULT_EPOCH_MS",
    "ShardflakeError",
    "ConfigurationError",
    "InvalidShardIDError",
    "InvalidEpochError",
    "TimestampOverflowError",
    "InvalidEncodingError",
    "__version__",
]
