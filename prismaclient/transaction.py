"""Running several queries in one transaction and collecting their results."""

from __future__ import annotations

import json
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Any, Protocol

from .builder import Engine, Query


class ResultChannel:
    """A one-slot channel that carries one raw JSON result to its reader."""

    def __init__(self, capacity: int = 1) -> None:
        self._capacity = capacity
        self._items: deque[bytes] = deque()
        self._closed = False
        self._cond = threading.Condition()

    @property
    def closed(self) -> bool:
        with self._cond:
            return self._closed

    def send(self, data: bytes) -> None:
        """Put raw JSON into the channel, waiting while it is full."""
        with self._cond:
            while not self._closed and len(self._items) >= self._capacity:
                self._cond.wait()
            if self._closed:
                raise RuntimeError("send on closed channel")
            self._items.append(bytes(data))
            self._cond.notify_all()

    def close(self) -> None:
        """Close the channel; readers still get what was already sent."""
        with self._cond:
            self._closed = True
            self._cond.notify_all()

    def receive(self) -> bytes:
        """Take the next item, waiting for one; raise EOFError once closed and empty."""
        with self._cond:
            while not self._items and not self._closed:
                self._cond.wait()
            if self._items:
                data = self._items.popleft()
                self._cond.notify_all()
                return data
            raise EOFError("channel closed")


@dataclass
class Result:
    """Reads a transaction result once and keeps it for later reads."""

    _cache: bytes | None = None

    def get(self, channel: ResultChannel) -> Any:
        """Return the decoded result, reading it from the channel the first time."""
        if self._cache is None:
            try:
                self._cache = channel.receive()
            except EOFError:
                raise RuntimeError("result not fetched") from None
        return json.loads(self._cache)


class TxParam(Protocol):
    """An operation that can take part in a transaction."""

    def is_tx(self) -> None:
        """Mark the operation as a transaction member."""

    def extract_query(self) -> Query:
        """Return the query of the operation."""


def _message(error: Any) -> str:
    if isinstance(error, dict):
        return str(error.get("message") or error.get("error") or "")
    return str(error)


@dataclass
class TransactionExec:
    """A prepared batch of queries that runs as one transaction."""

    queries: list[TxParam]
    engine: Engine
    requests: list[dict]

    def exec(self) -> None:
        """Send the batch and hand each query its result; raise on any error."""
        try:
            payload = {"batch": self.requests, "transaction": True}
            try:
                response = self.engine.batch(payload)
            except Exception as exc:
                raise RuntimeError(f"could not send raw query: {exc}") from exc
            response = response or {}
            errors = response.get("errors") or []
            if errors:
                raise RuntimeError(f"pql error: {_message(errors[0])}")
            for query, inner in zip(self.queries, response.get("batchResult") or []):
                inner_errors = inner.get("errors") or []
                if inner_errors:
                    raise RuntimeError(f"pql error: {_message(inner_errors[0])}")
                data = (inner.get("data") or {}).get("result")
                query.extract_query().tx_result.send(json.dumps(data).encode("utf-8"))
        finally:
            for query in self.queries:
                channel = query.extract_query().tx_result
                if channel is not None:
                    channel.close()


@dataclass
class TX:
    """Creates transactions on an engine."""

    engine: Engine | None = None
    _unused: list = field(default_factory=list, repr=False)

    def transaction(self, *args: TxParam) -> TransactionExec:
        """Prepare a transaction of the given operations."""
        requests = [
            {"query": query.extract_query().build(), "variables": {}} for query in args
        ]
        return TransactionExec(queries=list(args), engine=self.engine, requests=requests)