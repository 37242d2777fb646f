import json

import pytest

from prismaclient.jsonrpc import (
    Manifest,
    ManifestResponse,
    Request,
    new_response,
    parse_request,
)


def test_new_response_dict():
    response = new_response(7, {"a": 1})
    assert response.to_dict() == {"jsonrpc": "2.0", "id": 7, "result": {"a": 1}}


def test_manifest_response_keys():
    manifest = Manifest(pretty_name="Prisma Client Go", default_output="db")
    data = ManifestResponse(manifest).to_dict()
    assert set(data["manifest"]) == {
        "prettyName",
        "defaultOutput",
        "denylist",
        "requiresGenerators",
        "requiresEngines",
    }
    assert data["manifest"]["prettyName"] == "Prisma Client Go"
    assert data["manifest"]["defaultOutput"] == "db"


def test_response_nests_manifest():
    manifest = Manifest(pretty_name="Prisma Client Go", requires_engines=["queryEngine"])
    response = new_response(1, ManifestResponse(manifest))
    data = response.to_dict()
    assert data["result"]["manifest"]["requiresEngines"] == ["queryEngine"]
    assert json.loads(json.dumps(data)) == data


def test_parse_request():
    raw = json.dumps(
        {"jsonrpc": "2.0", "id": 3, "method": "getManifest", "params": {"x": [1]}}
    )
    assert parse_request(raw) == Request("2.0", 3, "getManifest", {"x": [1]})
    assert parse_request(raw.encode()) == parse_request(raw)


def test_parse_request_invalid_json():
    with pytest.raises(ValueError):
        parse_request("{not json")


def test_parse_request_not_object():
    with pytest.raises(ValueError):
        parse_request("[1, 2]")