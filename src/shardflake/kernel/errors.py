"""
Custom exceptions for Shardflake

Configuration mistakes are raised at construction time so a misconfigured
shard never issues a single ID. Clock anomalies are not errors at all:
the generator waits them out.

Fun fact: Twitter's Snowflake IdWorker threw on construction when its
worker ID was out of range - a bad worker ID silently corrupts every ID.
"""


class ShardflakeError(Exception):
    """Base exception for all Shardflake errors"""

    pass


class ConfigurationError(ShardflakeError, ValueError):
    """Base class for invalid generator configuration"""

    pass


class InvalidShardIDError(ConfigurationError):
    """
    Raised when a shard ID does not fit the 13-bit shard field

    The shard ID is never truncated or wrapped - an out-of-range value would
    collide with another shard's IDs.
    """

    def __init__(self, shard_id: int, max_shard_id: int) -> None:
        self.shard_id = shard_id
        self.max_shard_id = max_shard_id
        super().__init__(
            f"Shard ID {shard_id} is outside the allowed range 0-{max_shard_id}"
        )


class InvalidEpochError(ConfigurationError):
    """Raised when the epoch would put the clock outside the 41-bit timestamp range"""

    def __init__(self, epoch: int, now_ms: int, reason: str = "") -> None:
        self.epoch = epoch
        self.now_ms = now_ms
        super().__init__(
            f"Epoch {epoch} is unusable at clock reading {now_ms} - "
            + (reason or "timestamps would be negative until the epoch arrives")
        )


class TimestampOverflowError(ShardflakeError, OverflowError):
    """Raised when a timestamp does not fit the 41-bit timestamp field"""

    def __init__(self, timestamp: int, max_timestamp: int) -> None:
        self.timestamp = timestamp
        self.max_timestamp = max_timestamp
        super().__init__(
            f"Timestamp {timestamp} is outside the representable range 0-{max_timestamp}"
        )


class InvalidEncodingError(ShardflakeError, ValueError):
    """Raised when an encoded ID cannot be decoded"""

    def __init__(self, value: object, reason: str) -> None:
        self.value = value
        self.reason = reason
        super().__init__(f"Cannot decode ID {value!r}: {reason}")
