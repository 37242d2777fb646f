import json
from datetime import datetime, timezone

import pytest

from prismaclient.builder import (
    Field,
    Input,
    Output,
    Query,
    encode_value,
    transform_equals,
)


class FakeEngine:
    def __init__(self, response):
        self.response = response
        self.payloads = []

    def connect(self):
        pass

    def disconnect(self):
        pass

    def do(self, payload):
        self.payloads.append(payload)
        return self.response

    def batch(self, payload):
        return self.response


def _find_query():
    return Query(
        operation="query",
        name="findUser",
        method="findMany",
        model="User",
        inputs=[Input(name="where", fields=[Field(name="email", value="a")])],
        outputs=[Output(name="id"), Output(name="email")],
    )


def test_build_full_document():
    assert (
        _find_query().build()
        == 'query findUser{result: findManyUser(where:{email:"a",},) {id email }}'
    )


def test_build_list_wrapped_fields():
    query = Query(
        operation="mutation",
        method="createOne",
        model="User",
        inputs=[
            Input(
                name="data",
                fields=[
                    Field(
                        name="posts",
                        is_list=True,
                        wrap_list=True,
                        fields=[Field(name="id", value="a"), Field(name="id", value="b")],
                    )
                ],
            )
        ],
    )
    assert query.build_inner() == 'createOneUser(data:{posts:[{id:"a"},{id:"b"},],},) '


def test_build_wraps_inner():
    query = _find_query()
    assert query.build() == f"query findUser{{result: {query.build_inner()}}}"


def test_empty_input_fields():
    query = Query(operation="query", method="findMany", model="User", inputs=[Input(name="where")])
    assert "(where:{},)" in query.build_inner()


def test_input_value_is_encoded():
    query = Query(method="findMany", model="User", inputs=[Input(name="take", value=5)])
    inner = query.build_inner()
    assert inner.startswith("findManyUser(take:")
    assert encode_value(5) in inner


def test_nested_outputs_balanced():
    query = Query(
        operation="query",
        method="findUnique",
        model="User",
        outputs=[
            Output(name="id"),
            Output(
                name="posts",
                inputs=[Input(name="take", value=2)],
                outputs=[Output(name="id"), Output(name="title")],
            ),
        ],
    )
    built = query.build()
    assert built.count("{") == built.count("}")
    assert built.count("(") == built.count(")")
    assert "posts " in built


def test_encode_value_round_trip():
    data = {"b": [1, "x", None, True], "a": "\"'`\n\t}{äö€🤪"}
    assert json.loads(encode_value(data)) == data


def test_encode_value_escapes_html():
    encoded = encode_value("<a>&")
    assert "<" not in encoded and ">" not in encoded and "&" not in encoded
    assert json.loads(encoded) == "<a>&"


def test_encode_value_integral_float():
    encoded = encode_value(2.0)
    assert "." not in encoded
    assert json.loads(encoded) == 2


def test_encode_value_datetime():
    value = datetime(2000, 1, 1, tzinfo=timezone.utc)
    assert json.loads(encode_value(value)) == "2000-01-01T00:00:00Z"


def test_encode_value_nan_raises():
    with pytest.raises(ValueError):
        encode_value(float("nan"))


def test_transform_equals():
    fields = [
        Field(name="email", fields=[Field(name="equals", value="john@example.com")]),
        Field(name="name", fields=[Field(name="contains", value="jo")]),
        Field(name="id", value="x"),
    ]
    result = transform_equals(fields)
    assert result[0].value == "john@example.com"
    assert result[0].fields is None
    assert result[1] == fields[1]
    assert result[2] == fields[2]


def test_exec_sends_built_query():
    engine = FakeEngine({"data": {"result": []}})
    query = _find_query()
    query.engine = engine
    assert query.exec() == {"data": {"result": []}}
    assert engine.payloads == [{"query": query.build(), "variables": {}}]


def test_do_without_engine_raises():
    with pytest.raises(RuntimeError, match="Connect"):
        Query().do({"query": "", "variables": {}})