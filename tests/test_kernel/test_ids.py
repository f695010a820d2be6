"""
Tests for the ID bit layout

Verifies the 41/13/10 packing is exact and that every field is range-checked
rather than silently masked.
"""

from datetime import datetime, timezone

import pytest

from shardflake.kernel.errors import InvalidShardIDError, TimestampOverflowError
from shardflake.kernel.ids import (
    DEFAULT_EPOCH_MS,
    MAX_ID,
    MAX_SEQUENCE,
    MAX_SHARD_ID,
    MAX_TIMESTAMP,
    SHARD_SHIFT,
    TIMESTAMP_SHIFT,
    IdParts,
    compose_id,
    decompose_id,
    validate_shard_id,
)


def test_layout_constants() -> None:
    """Test field widths add up to 64 bits"""
    assert MAX_SEQUENCE == 1023
    assert MAX_SHARD_ID == 8191
    assert SHARD_SHIFT == 10
    assert TIMESTAMP_SHIFT == 23
    assert MAX_TIMESTAMP == (1 << 41) - 1


def test_compose_known_values() -> None:
    """Test T=100, S=5, Q=7 assembles to exactly (T << 23) | (S << 10) | Q"""
    snowflake_id = compose_id(100, 5, 7)

    assert snowflake_id == (100 << 23) | (5 << 10) | 7
    assert snowflake_id == 838_865_927


def test_compose_zero_and_max() -> None:
    """Test the extremes of every field"""
    assert compose_id(0, 0, 0) == 0
    assert compose_id(MAX_TIMESTAMP, MAX_SHARD_ID, MAX_SEQUENCE) == MAX_ID


def test_fields_do_not_overlap() -> None:
    """Test each field lands in its own bits"""
    assert compose_id(1, 0, 0) == 1 << 23
    assert compose_id(0, 1, 0) == 1 << 10
    assert compose_id(0, 0, 1) == 1
    assert compose_id(0, MAX_SHARD_ID, 0) & MAX_SEQUENCE == 0


def test_decompose_recovers_fields() -> None:
    """Test decompose is the inverse of compose"""
    parts = decompose_id(compose_id(123_456_789, 4321, 999))

    assert parts == IdParts(timestamp=123_456_789, shard_id=4321, sequence=999)


@pytest.mark.parametrize("timestamp", [-1, MAX_TIMESTAMP + 1])
def test_compose_rejects_timestamp_overflow(timestamp: int) -> None:
    with pytest.raises(TimestampOverflowError) as exc_info:
        compose_id(timestamp, 0, 0)

    assert exc_info.value.timestamp == timestamp
    assert isinstance(exc_info.value, OverflowError)


@pytest.mark.parametrize("shard_id", [-1, MAX_SHARD_ID + 1])
def test_compose_rejects_shard_id_out_of_range(shard_id: int) -> None:
    with pytest.raises(InvalidShardIDError):
        compose_id(0, shard_id, 0)


@pytest.mark.parametrize("shard_id", [1.0, 5.5, "5", False])
def test_validate_shard_id_rejects_non_integers(shard_id: object) -> None:
    """Test a shard ID must be a plain int, not merely comparable to one"""
    with pytest.raises(InvalidShardIDError) as exc_info:
        validate_shard_id(shard_id)  # type: ignore[arg-type]

    assert exc_info.value.shard_id == shard_id


def test_validate_shard_id_returns_value() -> None:
    assert validate_shard_id(MAX_SHARD_ID) == MAX_SHARD_ID


@pytest.mark.parametrize("sequence", [-1, MAX_SEQUENCE + 1])
def test_compose_rejects_sequence_out_of_range(sequence: int) -> None:
    with pytest.raises(ValueError):
        compose_id(0, 0, sequence)


@pytest.mark.parametrize("snowflake_id", [-1, MAX_ID + 1])
def test_decompose_rejects_non_uint64(snowflake_id: int) -> None:
    with pytest.raises(ValueError):
        decompose_id(snowflake_id)


def test_issued_at_uses_default_epoch() -> None:
    """Test timestamp 0 maps back to the default epoch itself"""
    parts = IdParts(timestamp=0, shard_id=0, sequence=0)

    assert parts.issued_at() == datetime(2011, 8, 24, 21, 7, 1, 721000, tzinfo=timezone.utc)


def test_issued_at_custom_epoch() -> None:
    parts = IdParts(timestamp=1500, shard_id=0, sequence=0)

    assert parts.issued_at(epoch_ms=0) == datetime(1970, 1, 1, 0, 0, 1, 500000, tzinfo=timezone.utc)
    assert parts.issued_at(DEFAULT_EPOCH_MS) > parts.issued_at(epoch_ms=0)


def test_id_parts_are_frozen() -> None:
    parts = IdParts(timestamp=1, shard_id=2, sequence=3)

    with pytest.raises(Exception):
        parts.shard_id = 4  # type: ignore[misc]
