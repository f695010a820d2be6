"""
Encodings of a 64-bit ID

Hex and base64 both encode the 8 big-endian bytes; hex strings sort in
the same order as the IDs they encode. The little-endian buffer is for
storage engines that compare raw native integers.
"""

import base64
import binascii
import re

from shardflake.kernel.errors import InvalidEncodingError
from shardflake.kernel.ids import MAX_ID

ID_BYTES = 8
HEX_LENGTH = 2 * ID_BYTES  # 16
BASE64_LENGTH = 11  # ceil(8 * 8 / 6), unpadded

_HEX_RE = re.compile(r"^[0-9a-fA-F]{16}$")
_BASE64_RE = re.compile(r"^[A-Za-z0-9_-]{11}$")


def _check_range(snowflake_id: int) -> None:
    if not 0 <= snowflake_id <= MAX_ID:
        raise ValueError(f"ID {snowflake_id} is not an unsigned 64-bit integer")


def to_bytes_be(snowflake_id: int) -> bytes:
    """Return the 8 raw bytes of the ID, big-endian"""
    _check_range(snowflake_id)
    return snowflake_id.to_bytes(ID_BYTES, "big")


def to_bytes_le(snowflake_id: int) -> bytes:
    """Return the 8 raw bytes of the ID, little-endian"""
    _check_range(snowflake_id)
    return snowflake_id.to_bytes(ID_BYTES, "little")


def to_hex(snowflake_id: int) -> str:
    """Return 16 lowercase hex characters of the big-endian bytes"""
    return to_bytes_be(snowflake_id).hex()


def to_base64(snowflake_id: int) -> str:
    """Return unpadded URL-safe base64 of the big-endian bytes"""
    return base64.urlsafe_b64encode(to_bytes_be(snowflake_id)).rstrip(b"=").decode("ascii")


def _from_bytes(raw: bytes, byteorder: str) -> int:
    if len(raw) != ID_BYTES:
        raise InvalidEncodingError(raw, f"expected {ID_BYTES} bytes, got {len(raw)}")
    return int.from_bytes(raw, byteorder)


def from_bytes_be(raw: bytes) -> int:
    return _from_bytes(raw, "big")


def from_bytes_le(raw: bytes) -> int:
    return _from_bytes(raw, "little")


def from_hex(text: str) -> int:
    """Decode a 16-character hex ID"""
    if not _HEX_RE.match(text):
        raise InvalidEncodingError(text, f"expected {HEX_LENGTH} hex characters")
    return from_bytes_be(bytes.fromhex(text))


def from_base64(text: str) -> int:
    """Decode an 11-character unpadded URL-safe base64 ID"""
    if not _BASE64_RE.match(text):
        raise InvalidEncodingError(text, f"expected {BASE64_LENGTH} URL-safe base64 characters")
    try:
        raw = base64.urlsafe_b64decode(text + "=")
    except binascii.Error as e:
        raise InvalidEncodingError(text, str(e)) from e
    return from_bytes_be(raw)


def decode(text: str) -> int:
    """
    Decode an ID given in any supported text form

    Accepts, in this order of precedence:
    - a decimal integer
    - 16 hex characters
    - 11 URL-safe base64 characters

    A 16-digit string of decimal digits is read as decimal.

    Raises:
        InvalidEncodingError: If the text matches none of the forms
    """
    text = text.strip()
    if text.isascii() and text.isdigit():
        value = int(text)
        if value > MAX_ID:
            raise InvalidEncodingError(text, "decimal value exceeds 64 bits")
        return value
    if _HEX_RE.match(text):
        return from_hex(text)
    if _BASE64_RE.match(text):
        return from_base64(text)
    raise InvalidEncodingError(text, "not a decimal, hex or base64 ID")
