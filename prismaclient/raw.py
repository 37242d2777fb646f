"""Raw SQL queries and statements sent through the query engine."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any

from .builder import Engine, Input, Query, encode_value
from .runtime_types import BatchResult
from .transaction import Result, ResultChannel


def _encode_param(param: Any) -> str:
    if isinstance(param, datetime):
        return '{"prisma__type":"date","prisma__value":%s}' % encode_value(param)
    return encode_value(param)


def build_raw_query(engine: Engine | None, action: str, query: str, *args: Any) -> Query:
    """Build a raw query mutation with its parameters encoded as a JSON array."""
    params = "[" + ",".join(_encode_param(param) for param in args) + "]"
    return Query(
        engine=engine,
        operation="mutation",
        method=action,
        inputs=[Input(name="query", value=query), Input(name="parameters", value=params)],
    )


def _send(query: Query) -> Any:
    try:
        return query.exec()
    except Exception as exc:
        raise RuntimeError(f"could not send raw query: {exc}") from exc


@dataclass
class TxExecuteResult:
    """A raw statement taking part in a transaction."""

    query: Query
    _result: Result = field(default_factory=Result)

    def extract_query(self) -> Query:
        return self.query

    def is_tx(self) -> None:
        """Mark this operation as a transaction member."""

    def result(self) -> BatchResult:
        """Return the number of affected rows once the transaction ran."""
        return BatchResult(count=self._result.get(self.query.tx_result))


@dataclass
class ExecuteExec:
    """A raw statement ready to run."""

    query: Query

    def extract_query(self) -> Query:
        return self.query

    def tx(self) -> TxExecuteResult:
        """Prepare this statement for a transaction."""
        return TxExecuteResult(query=replace(self.query, tx_result=ResultChannel()))

    def exec(self) -> BatchResult:
        """Run the statement and return the number of affected rows."""
        return BatchResult(count=_send(self.query))


@dataclass
class TxQueryResult:
    """A raw query taking part in a transaction."""

    query: Query
    _result: Result = field(default_factory=Result)

    def extract_query(self) -> Query:
        return self.query

    def is_tx(self) -> None:
        """Mark this operation as a transaction member."""

    def into(self) -> Any:
        """Return the decoded rows once the transaction ran."""
        return self._result.get(self.query.tx_result)


@dataclass
class QueryExec:
    """A raw query ready to run."""

    query: Query

    def extract_query(self) -> Query:
        return self.query

    def tx(self) -> TxQueryResult:
        """Prepare this query for a transaction."""
        return TxQueryResult(query=replace(self.query, tx_result=ResultChannel()))

    def exec(self) -> Any:
        """Run the query and return the decoded rows."""
        return _send(self.query)


@dataclass
class Raw:
    """Entry point for raw queries."""

    engine: Engine | None = None

    def execute_raw(self, query: str, *args: Any) -> ExecuteExec:
        """Prepare a raw statement that returns an affected row count."""
        return ExecuteExec(query=build_raw_query(self.engine, "executeRaw", query, *args))

    def query_raw(self, query: str, *args: Any) -> QueryExec:
        """Prepare a raw query that returns rows."""
        return QueryExec(query=build_raw_query(self.engine, "queryRaw", query, *args))