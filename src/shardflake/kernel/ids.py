"""
Snowflake ID bit layout

An ID is a 64-bit unsigned integer, most significant bits first:

    bits 63-23 (41 bits): milliseconds elapsed since the generator's epoch
    bits 22-10 (13 bits): shard ID
    bits  9-0  (10 bits): per-millisecond sequence

41 bits of milliseconds last about 69.7 years, so with the default epoch
(August 2011) the timestamp field runs out in 2081.
"""

from datetime import datetime, timedelta, timezone

from pydantic import BaseModel, ConfigDict, Field

from shardflake.kernel.errors import InvalidShardIDError, TimestampOverflowError

SEQUENCE_BITS = 10
SHARD_BITS = 13
TIMESTAMP_BITS = 41

MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1  # 1023
MAX_SHARD_ID = (1 << SHARD_BITS) - 1  # 8191
MAX_TIMESTAMP = (1 << TIMESTAMP_BITS) - 1
MAX_ID = (1 << 64) - 1

SHARD_SHIFT = SEQUENCE_BITS
TIMESTAMP_SHIFT = SEQUENCE_BITS + SHARD_BITS  # 23

# 2011-08-24T21:07:01.721Z
DEFAULT_EPOCH_MS = 1314220021721


class IdParts(BaseModel):
    """The three fields of a decomposed ID"""

    model_config = ConfigDict(frozen=True)

    timestamp: int = Field(ge=0, le=MAX_TIMESTAMP, description="Milliseconds since epoch")
    shard_id: int = Field(ge=0, le=MAX_SHARD_ID)
    sequence: int = Field(ge=0, le=MAX_SEQUENCE)

    def issued_at(self, epoch_ms: int = DEFAULT_EPOCH_MS) -> datetime:
        """Return the wall-clock time (UTC) the ID was issued at"""
        return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(
            milliseconds=self.timestamp + epoch_ms
        )


def validate_shard_id(shard_id: int) -> int:
    """Return shard_id unchanged, or raise InvalidShardIDError"""
    if isinstance(shard_id, bool) or not isinstance(shard_id, int):
        raise InvalidShardIDError(shard_id, MAX_SHARD_ID)
    if not 0 <= shard_id <= MAX_SHARD_ID:
        raise InvalidShardIDError(shard_id, MAX_SHARD_ID)
    return shard_id


def compose_id(timestamp: int, shard_id: int, sequence: int) -> int:
    """
    Pack timestamp, shard ID and sequence into one 64-bit ID

    Args:
        timestamp: Milliseconds since the generator's epoch
        shard_id: Shard identifier (0-8191)
        sequence: Sequence within the millisecond (0-1023)

    Returns:
        (timestamp << 23) | (shard_id << 10) | sequence

    Raises:
        TimestampOverflowError: If timestamp does not fit 41 bits
        InvalidShardIDError: If shard_id does not fit 13 bits
        ValueError: If sequence does not fit 10 bits
    """
    if not 0 <= timestamp <= MAX_TIMESTAMP:
        raise TimestampOverflowError(timestamp, MAX_TIMESTAMP)
    validate_shard_id(shard_id)
    if not 0 <= sequence <= MAX_SEQUENCE:
        raise ValueError(f"Sequence {sequence} is outside the allowed range 0-{MAX_SEQUENCE}")

    return (timestamp << TIMESTAMP_SHIFT) | (shard_id << SHARD_SHIFT) | sequence


def decompose_id(snowflake_id: int) -> IdParts:
    """Split an ID back into its timestamp, shard ID and sequence fields"""
    if not 0 <= snowflake_id <= MAX_ID:
        raise ValueError(f"ID {snowflake_id} is not an unsigned 64-bit integer")

    return IdParts(
        timestamp=snowflake_id >> TIMESTAMP_SHIFT,
        shard_id=(snowflake_id >> SHARD_SHIFT) & MAX_SHARD_ID,
        sequence=snowflake_id & MAX_SEQUENCE,
    )
