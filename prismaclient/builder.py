"""Builds query-engine request documents and sends them to an engine."""

from __future__ import annotations

import base64
import json
import math
import time
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol

from . import logger


class Engine(Protocol):
    """What a query engine must provide."""

    def connect(self) -> None:
        """Start or attach to the engine."""

    def disconnect(self) -> None:
        """Stop or detach from the engine."""

    def do(self, payload: Any) -> Any:
        """Send one request and return the decoded response."""

    def batch(self, payload: Any) -> Any:
        """Send a batch request and return the decoded batch response."""


@dataclass
class Field:
    """An input field; holds either a value or a subselection of fields."""

    name: str = ""
    is_list: bool = False
    wrap_list: bool = False
    value: Any = None
    fields: list[Field] | None = None


@dataclass
class Input:
    """A named argument, given as a value or as fields."""

    name: str
    fields: list[Field] | None = None
    value: Any = None


@dataclass
class Output:
    """A selected output field, optionally with arguments and nested outputs."""

    name: str
    inputs: list[Input] = field(default_factory=list)
    outputs: list[Output] = field(default_factory=list)


def _zone(value: datetime) -> str:
    offset = value.utcoffset()
    if not offset:
        return "Z"
    total = int(offset.total_seconds())
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


def _format_timestamp(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    return text + _zone(value)


def _default(value: Any) -> Any:
    if isinstance(value, datetime):
        return _format_timestamp(value)
    if isinstance(value, (bytes, bytearray)):
        return base64.b64encode(value).decode("ascii")
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    raise TypeError(f"cannot encode value of type {type(value).__name__}")


def _normalize(value: Any) -> Any:
    if isinstance(value, float) and math.isfinite(value) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    if isinstance(value, dict):
        return {key: _normalize(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_normalize(item) for item in value]
    return value


_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def encode_value(value: Any) -> str:
    """Encode a value as compact JSON, escaping HTML-sensitive characters."""
    text = json.dumps(
        _normalize(value),
        ensure_ascii=False,
        separators=(",", ":"),
        sort_keys=True,
        allow_nan=False,
        default=_default,
    )
    for char, escape in _ESCAPES.items():
        text = text.replace(char, escape)
    return text


def transform_equals(fields: list[Field]) -> list[Field]:
    """Collapse fields whose subselection holds an `equals` entry into plain values."""
    result = []
    for item in fields:
        equals = [inner for inner in item.fields or () if inner.name == "equals"]
        if equals:
            item = replace(item, value=equals[-1].value, fields=None)
        result.append(item)
    return result


@dataclass
class Query:
    """A single query or mutation against one model."""

    engine: Engine | None = None
    operation: str = ""
    name: str = ""
    method: str = ""
    model: str = ""
    inputs: list[Input] = field(default_factory=list)
    outputs: list[Output] = field(default_factory=list)
    start: float = field(default_factory=time.monotonic)
    tx_result: Any = None

    def build(self) -> str:
        """Return the full request document."""
        return f"{self.operation} {self.name}{{result: {self.build_inner()}}}"

    def build_inner(self) -> str:
        """Return the selection for this query without the operation wrapper."""
        parts = [self.method + self.model]
        if self.inputs:
            parts.append(self._build_inputs(self.inputs))
        parts.append(" ")
        if self.outputs:
            parts.append(self._build_outputs(self.outputs))
        return "".join(parts)

    def _build_inputs(self, inputs: list[Input]) -> str:
        parts = ["("]
        for item in inputs:
            parts.append(item.name + ":")
            if item.value is not None:
                parts.append(encode_value(item.value))
            else:
                parts.append(self._build_fields(False, False, item.fields))
            parts.append(",")
        parts.append(")")
        return "".join(parts)

    def _build_outputs(self, outputs: list[Output]) -> str:
        parts = ["{"]
        for item in outputs:
            parts.append(item.name + " ")
            if item.inputs:
                parts.append(self._build_inputs(item.inputs))
            if item.outputs:
                parts.append(self._build_outputs(item.outputs))
        parts.append("}")
        return "".join(parts)

    def _build_fields(self, is_list: bool, wrap_list: bool, fields: list[Field] | None) -> str:
        parts = [] if is_list else ["{"]
        for item in fields or ():
            if wrap_list:
                parts.append("{")
            if item.name:
                parts.append(item.name + ":")
            if item.is_list:
                parts.append("[")
            if item.fields is not None:
                parts.append(self._build_fields(item.is_list, item.wrap_list, item.fields))
            if item.value is not None:
                parts.append(encode_value(item.value))
            if item.is_list:
                parts.append("]")
            if wrap_list:
                parts.append("}")
            parts.append(",")
        if not is_list:
            parts.append("}")
        return "".join(parts)

    def exec(self) -> Any:
        """Build this query, send it and return the engine's response."""
        payload = {"query": self.build(), "variables": {}}
        return self.do(payload)

    def do(self, payload: Any) -> Any:
        """Send a prepared payload to the engine and return its response."""
        if self.engine is None:
            raise RuntimeError("client.Prisma.Connect() needs to be called before sending queries")
        logger.debug(f"[timing] building {time.monotonic() - self.start:.6f}s")
        try:
            return self.engine.do(payload)
        finally:
            logger.debug(f"[timing] TOTAL {time.monotonic() - self.start:.6f}s")