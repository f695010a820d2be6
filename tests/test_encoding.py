"""
Tests for ID encodings
"""

import pytest

from shardflake import encoding
from shardflake.kernel.errors import InvalidEncodingError
from shardflake.kernel.ids import MAX_ID, compose_id

SAMPLE_ID = 0x0123456789ABCDEF


def test_hex_is_big_endian_lowercase() -> None:
    assert encoding.to_hex(SAMPLE_ID) == "0123456789abcdef"
    assert encoding.to_hex(1) == "0000000000000001"


def test_base64_is_unpadded_url_safe() -> None:
    assert encoding.to_base64(0) == "AAAAAAAAAAA"
    assert encoding.to_base64(MAX_ID) == "__________8"


def test_byte_orders() -> None:
    assert encoding.to_bytes_be(1) == b"\x00" * 7 + b"\x01"
    assert encoding.to_bytes_le(1) == b"\x01" + b"\x00" * 7
    assert encoding.to_bytes_le(SAMPLE_ID) == encoding.to_bytes_be(SAMPLE_ID)[::-1]


def test_decoders_agree_with_big_endian_bytes() -> None:
    """Test hex and base64 decode to the same bytes as the BE buffer"""
    snowflake_id = compose_id(987_654_321, 42, 17)
    be = encoding.to_bytes_be(snowflake_id)

    assert encoding.to_bytes_be(encoding.from_hex(encoding.to_hex(snowflake_id))) == be
    assert encoding.to_bytes_be(encoding.from_base64(encoding.to_base64(snowflake_id))) == be
    assert encoding.from_bytes_le(encoding.to_bytes_le(snowflake_id)) == snowflake_id
    assert encoding.from_bytes_be(be) == snowflake_id


def test_hex_order_matches_numeric_order() -> None:
    ids = [compose_id(t, 3, s) for t in (1, 2, 1000) for s in (0, 5, 1023)]

    assert sorted(ids, key=encoding.to_hex) == sorted(ids)


@pytest.mark.parametrize("snowflake_id", [-1, MAX_ID + 1])
def test_encoders_reject_non_uint64(snowflake_id: int) -> None:
    with pytest.raises(ValueError):
        encoding.to_hex(snowflake_id)
    with pytest.raises(ValueError):
        encoding.to_bytes_le(snowflake_id)


@pytest.mark.parametrize("text", ["", "0123", "0123456789abcdeg", "0123456789abcdef0"])
def test_from_hex_rejects_malformed(text: str) -> None:
    with pytest.raises(InvalidEncodingError):
        encoding.from_hex(text)


@pytest.mark.parametrize("text", ["", "AAAA", "AAAAAAAAAA+", "AAAAAAAAAAAA"])
def test_from_base64_rejects_malformed(text: str) -> None:
    with pytest.raises(InvalidEncodingError):
        encoding.from_base64(text)


@pytest.mark.parametrize("raw", [b"", b"\x00" * 7, b"\x00" * 9])
def test_from_bytes_rejects_wrong_length(raw: bytes) -> None:
    with pytest.raises(InvalidEncodingError):
        encoding.from_bytes_be(raw)
    with pytest.raises(InvalidEncodingError):
        encoding.from_bytes_le(raw)


class TestDecode:
    def test_decimal(self) -> None:
        assert encoding.decode("838865927") == compose_id(100, 5, 7)
        assert encoding.decode("  42\n") == 42

    def test_hex(self) -> None:
        assert encoding.decode("0123456789abcdef") == SAMPLE_ID
        assert encoding.decode("0123456789ABCDEF") == SAMPLE_ID

    def test_base64(self) -> None:
        assert encoding.decode(encoding.to_base64(SAMPLE_ID)) == SAMPLE_ID

    def test_all_digit_strings_are_decimal(self) -> None:
        assert encoding.decode("1" * 16) == 1_111_111_111_111_111

    @pytest.mark.parametrize("text", ["", "not an id", "-5", str(MAX_ID + 1)])
    def test_rejects_garbage(self, text: str) -> None:
        with pytest.raises(InvalidEncodingError):
            encoding.decode(text)
