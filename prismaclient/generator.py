"""The input the Prisma CLI hands to a generator."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from typing import Any

from .casing import String
from .dmmf import Document, parse_document


class ConnectorType(str, enum.Enum):
    """The database a datasource connects to."""

    MYSQL = "mysql"
    MONGO = "mongo"
    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"


@dataclass
class Value:
    """A value that may be taken from an environment variable."""

    from_env_var: str = ""
    value: String = String("")


@dataclass
class Config:
    """Options of the client generator."""

    package: String = String("")
    disable_gitignore: str = ""
    disable_go_binaries: str = ""


@dataclass
class Generator:
    """A generator defined in the schema."""

    output: Value | None = None
    name: String = String("")
    provider: Value | None = None
    config: Config = field(default_factory=Config)
    binary_targets: list[str] = field(default_factory=list)
    pinned_binary_target: str = ""


@dataclass
class EnvValue:
    """A string value, possibly read from an environment variable."""

    from_env_var: str = ""
    value: str = ""


@dataclass
class Datasource:
    """A data source of any database type."""

    name: String = String("")
    connector_type: ConnectorType | str = ""
    url: EnvValue = field(default_factory=EnvValue)
    config: Any = None


@dataclass
class BinaryPaths:
    """Paths of the engine binaries, keyed by target."""

    migration_engine: dict[str, str] = field(default_factory=dict)
    query_engine: dict[str, str] = field(default_factory=dict)
    introspection_engine: dict[str, str] = field(default_factory=dict)


@dataclass
class Root:
    """The full generator input."""

    generator: Generator = field(default_factory=Generator)
    other_generators: list[Generator] = field(default_factory=list)
    schema_path: str = ""
    dmmf: Document = field(default_factory=Document)
    datasources: list[Datasource] = field(default_factory=list)
    datamodel: str = ""
    binary_paths: BinaryPaths = field(default_factory=BinaryPaths)


def _value(data: Any) -> Value | None:
    if data is None:
        return None
    return Value(
        from_env_var=data.get("fromEnvVar") or "",
        value=String(data.get("value") or ""),
    )


def _generator(data: dict) -> Generator:
    config = data.get("config") or {}
    return Generator(
        output=_value(data.get("output")),
        name=String(data.get("name") or ""),
        provider=_value(data.get("provider")),
        config=Config(
            package=String(config.get("package") or ""),
            disable_gitignore=config.get("disableGitignore") or "",
            disable_go_binaries=config.get("disableGoBinaries") or "",
        ),
        binary_targets=list(data.get("binaryTargets") or []),
        pinned_binary_target=data.get("pinnedBinaryTarget") or "",
    )


def _connector(value: Any) -> ConnectorType | str:
    value = value or ""
    try:
        return ConnectorType(value)
    except ValueError:
        return str(value)


def _datasource(data: dict) -> Datasource:
    url = data.get("url") or {}
    return Datasource(
        name=String(data.get("name") or ""),
        connector_type=_connector(data.get("connectorType")),
        url=EnvValue(
            from_env_var=url.get("fromEnvVar") or "",
            value=url.get("value") or "",
        ),
        config=data.get("config"),
    )


def parse_root(data: str | bytes | dict) -> Root:
    """Parse the generator input from JSON text or a decoded mapping."""
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, dict):
        raise ValueError("generator input must be an object")
    paths = data.get("binaryPaths") or {}
    return Root(
        generator=_generator(data.get("generator") or {}),
        other_generators=[_generator(g) for g in data.get("otherGenerators") or []],
        schema_path=data.get("schemaPath") or "",
        dmmf=parse_document(data.get("DMMF") or {}),
        datasources=[_datasource(d) for d in data.get("datasources") or []],
        datamodel=data.get("datamodel") or "",
        binary_paths=BinaryPaths(
            migration_engine=dict(paths.get("migrationEngine") or {}),
            query_engine=dict(paths.get("queryEngine") or {}),
            introspection_engine=dict(paths.get("introspectionEngine") or {}),
        ),
    )