# prismaclient

Building blocks for a client that talks to a Prisma query engine. The package
has no dependencies outside the standard library.

## Modules

- `prismaclient.builder`: the `Query`, `Input`, `Output` and `Field` classes
  describe an operation. `Query.build()` renders the operation to the
  query-engine text form, and `Query.build_inner()` renders it without the
  operation wrapper. `Query.exec()` sends the built query to an engine, and
  `Query.do(payload)` sends a payload that you have already prepared. If no
  engine is set, both raise `RuntimeError`. `encode_value` gives the compact
  JSON encoding that is used for literal values. `transform_equals` turns
  fields whose sub-selection holds an `equals` entry into plain values.
- `prismaclient.raw`: `Raw.query_raw(query, *args)` and
  `Raw.execute_raw(query, *args)` build raw SQL requests, and
  `build_raw_query` does the same on its own. Parameters are sent as a JSON
  array, and `datetime` parameters are tagged as dates. `exec()` runs the
  request. `tx()` prepares it for use in a transaction, and afterwards you read
  the outcome with `TxQueryResult.into()` or `TxExecuteResult.result()`.
- `prismaclient.transaction`: `TX.transaction(*ops)` gathers operations into
  one batched transaction, and `TransactionExec.exec()` sends that batch. If
  the engine reports an error, `exec()` raises `RuntimeError`. Each
  operation's result arrives through a `ResultChannel`. `Result` reads it
  once and caches it for later reads. If the channel closed before a result
  arrived, for example after a failed transaction, reading raises
  `RuntimeError`.
- `prismaclient.lifecycle`: `Lifecycle` connects to an engine and disconnects
  from it. It also works as a context manager.
- `prismaclient.dmmf`: data classes for the data model meta format document:
  models, fields, enums and schema types. `parse_document` builds one from
  JSON text or from a dict.
- `prismaclient.generator`: data classes for the generator input that the
  Prisma CLI sends: generator config, datasources and binary paths.
  `parse_root` builds one from JSON text or from a dict.
- `prismaclient.jsonrpc`: `Request`, `Response`, `Manifest` and
  `ManifestResponse`, together with `new_response` and `parse_request`.
- `prismaclient.casing`: `String` and `Type` are string types with identifier
  casing helpers (`go_case`, `go_lower_case`, `camel_case`; also `tag` on
  `String` and `value` on `Type`). The module also has the plain functions
  `to_camel`, `to_lower_camel` and `apply_initialisms`.
- `prismaclient.runtime_types`: `BatchResult`, `Direction` and
  `NotFoundError`. It also has `format_datetime`, `decode_bigint`,
  `encode_json_value` and `decode_json_value`.

## Building a query

```python
from prismaclient.builder import Field, Input, Output, Query

query = Query(
    operation="query",
    method="findMany",
    model="User",
    inputs=[Input(name="where", fields=[Field(name="email", value="a@example.com")])],
    outputs=[Output(name="id"), Output(name="email")],
)
print(query.build())
```

To run a query you need an engine. An engine is any object that has
`connect()`, `disconnect()`, `do(payload)` and `batch(payload)` methods, as
described by the `prismaclient.builder.Engine` protocol.

## What the package does not do

- It does not include a query engine, and it cannot download or start one.
  You supply the engine object yourself.
- It does not generate typed model clients from a schema. The `dmmf` and
  `generator` modules only parse and describe the generator's input.
- It provides no command-line program.

## Debug logging

Set the `PHOTON_GO_LOG` environment variable to any non-empty value to turn on
debug lines on standard output from `prismaclient.logger`. Info lines are
always written.

## Tests

```
pip install -e ".[test]"
pytest
```