"""Runtime value types and their query-engine encodings."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

RFC3339_MILLI = "2006-01-02T15:04:05.999Z07:00"

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")


class NotFoundError(LookupError):
    """Raised when a database record does not exist."""

    def __init__(self, message: str = "ErrNotFound") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class BatchResult:
    """The number of records touched by a batch operation."""

    count: int


class Direction(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


def _zone(value: datetime) -> str:
    offset = value.utcoffset()
    if not offset:
        return "Z"
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def format_datetime(value: datetime) -> str:
    """Format as RFC 3339 with at most millisecond precision.

    Trailing zero digits of the fraction are dropped; naive values count as UTC.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    millis = value.microsecond // 1000
    if millis:
        text += "." + f"{millis:03d}".rstrip("0")
    return text + _zone(value)


def _unquote(data: bytes | str) -> str:
    text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
    if len(text) >= 2 and text[0] == text[-1] == "`" and "`" not in text[1:-1]:
        return text[1:-1]
    if not text.startswith('"'):
        raise ValueError("invalid syntax")
    try:
        result = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError("invalid syntax") from exc
    if not isinstance(result, str):
        raise ValueError("invalid syntax")
    return result


def decode_bigint(data: bytes | str) -> int:
    """Decode a 64-bit integer that the engine sends as a quoted string."""
    try:
        text = _unquote(data)
    except ValueError as exc:
        raise ValueError(f"BigInt: unquote: {exc}") from exc
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"BigInt: UnmarshalJSON error: invalid syntax: {text!r}")
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"BigInt: UnmarshalJSON error: value out of range: {text!r}")
    return number


def encode_json_value(value: bytes | str | None) -> bytes:
    """Encode raw JSON as the quoted string the engine expects."""
    if value is None:
        return b"null"
    text = value.decode("utf-8") if isinstance(value, (bytes, bytearray)) else value
    return json.dumps(text, ensure_ascii=False).encode("utf-8")


def decode_json_value(data: bytes | str) -> bytes:
    """Decode a quoted JSON document received from the engine into raw JSON."""
    try:
        return _unquote(data).encode("utf-8")
    except ValueError as exc:
        raise ValueError(f"JSON: UnmarshalJSON error: {exc}") from exc