"""JSON-RPC messages exchanged with the Prisma CLI."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class Request:
    """A JSON-RPC request from the CLI."""

    jsonrpc: str
    id: int
    method: str
    params: Any = None


@dataclass
class Response:
    """A JSON-RPC response sent back to the CLI."""

    id: int
    result: Any
    jsonrpc: str = "2.0"

    def to_dict(self) -> dict:
        result = self.result
        if hasattr(result, "to_dict"):
            result = result.to_dict()
        return {"jsonrpc": self.jsonrpc, "id": self.id, "result": result}


@dataclass
class Manifest:
    """Generator information reported to the CLI."""

    pretty_name: str = ""
    default_output: str = ""
    denylist: list[str] = field(default_factory=list)
    requires_generators: list[str] = field(default_factory=list)
    requires_engines: list[str] = field(default_factory=list)


@dataclass
class ManifestResponse:
    """The reply to a manifest request."""

    manifest: Manifest

    def to_dict(self) -> dict:
        m = self.manifest
        return {
            "manifest": {
                "prettyName": m.pretty_name,
                "defaultOutput": m.default_output,
                "denylist": list(m.denylist),
                "requiresGenerators": list(m.requires_generators),
                "requiresEngines": list(m.requires_engines),
            }
        }


def new_response(id: int, result: Any) -> Response:
    """Create a JSON-RPC 2.0 response."""
    return Response(id=id, result=result)


def parse_request(data: str | bytes) -> Request:
    """Parse a JSON-RPC request; raises ValueError on malformed input."""
    decoded = json.loads(data)
    if not isinstance(decoded, dict):
        raise ValueError("JSON-RPC request must be an object")
    return Request(
        jsonrpc=decoded.get("jsonrpc", ""),
        id=decoded.get("id", 0),
        method=decoded.get("method", ""),
        params=decoded.get("params"),
    )