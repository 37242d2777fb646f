"""The data model meta format: models, fields and schema types of a Prisma schema."""

from __future__ import annotations

import enum
import json
from dataclasses import dataclass, field
from typing import Any

from .casing import String, Type


class FieldKind(str, enum.Enum):
    """Whether a field is a scalar, an object (relation) or an enum."""

    SCALAR = "scalar"
    OBJECT = "object"
    ENUM = "enum"

    def include_in_struct(self) -> bool:
        """Return whether the field belongs in a model struct."""
        return self in (FieldKind.SCALAR, FieldKind.ENUM)

    def is_relation(self) -> bool:
        """Return whether the field is a relation."""
        return self is FieldKind.OBJECT


class DatamodelFieldKind(str, enum.Enum):
    """Whether a datamodel field is a scalar, a relation or an enum."""

    SCALAR = "scalar"
    RELATION = "relation"
    ENUM = "enum"

    def include_in_struct(self) -> bool:
        """Return whether the field belongs in a model struct."""
        return self in (DatamodelFieldKind.SCALAR, DatamodelFieldKind.ENUM)

    def is_relation(self) -> bool:
        """Return whether the field is a relation."""
        return self is DatamodelFieldKind.RELATION


@dataclass(frozen=True)
class Operator:
    """A query operator such as NOT or OR."""

    name: str
    action: str


@dataclass(frozen=True)
class Action:
    """A CRUD operation, either a query or a mutation."""

    type: str
    name: String


@dataclass(frozen=True)
class ActionType:
    """A query variation such as Unique, First or Many."""

    name: String
    inner_name: String
    is_list: bool = False
    return_list: bool = False


@dataclass(frozen=True)
class Method:
    """A method of a virtual type."""

    name: str
    action: str


@dataclass(frozen=True)
class VirtualType:
    """A virtual type and its methods."""

    name: str
    methods: tuple[Method, ...] = ()


@dataclass
class SchemaEnum:
    """An enumerated type of the schema."""

    name: String = String("")
    values: list[String] = field(default_factory=list)
    db_name: String = String("")


@dataclass
class EnumValue:
    """One value of an enumerated type."""

    name: String = String("")
    db_name: String = String("")


@dataclass
class Enum:
    """An enumerated type of the datamodel."""

    name: String = String("")
    values: list[EnumValue] = field(default_factory=list)
    db_name: String = String("")


def _concat_fields_to_name(fields: list[String]) -> String:
    return String("_".join(fields))


@dataclass
class UniqueIndex:
    """A unique index over one or more fields."""

    internal_name: String = String("")
    fields: list[String] = field(default_factory=list)

    def name(self) -> String:
        """Return the index name, or the cased field names joined together."""
        if self.internal_name:
            return self.internal_name
        return String("".join(String(f).go_case() for f in self.fields))

    def ast_name(self) -> String:
        """Return the index name, or the field names joined by underscores."""
        if self.internal_name:
            return self.internal_name
        return _concat_fields_to_name(self.fields)


@dataclass(frozen=True)
class RelationMethod:
    """A query method offered for a relation."""

    name: str
    action: str


@dataclass
class Field:
    """The properties of a single model field."""

    kind: FieldKind | str = ""
    name: String = String("")
    is_required: bool = False
    is_list: bool = False
    is_unique: bool = False
    is_read_only: bool = False
    is_id: bool = False
    type: Type = Type("")
    db_name: String = String("")
    is_generated: bool = False
    is_updated_at: bool = False
    relation_to_fields: list[Any] = field(default_factory=list)
    relation_on_delete: String = String("")
    relation_name: String = String("")
    has_default_value: bool = False

    def required_on_create(self) -> bool:
        """Return whether a value must be given when creating a record."""
        if (
            not self.is_required
            or self.is_updated_at
            or self.has_default_value
            or self.is_read_only
        ):
            return False
        if self.relation_name and self.is_list:
            return False
        return True

    def relation_methods(self) -> list[RelationMethod]:
        """Return the query methods available for this relation."""
        if self.is_list:
            return [RelationMethod("Some", "some"), RelationMethod("Every", "every")]
        return [RelationMethod("Where", "is")]


@dataclass
class Model:
    """A model, usually mapped to a database table or collection."""

    name: String = String("")
    is_embedded: bool = False
    db_name: String = String("")
    fields: list[Field] = field(default_factory=list)
    unique_indexes: list[UniqueIndex] = field(default_factory=list)
    id_fields: list[String] = field(default_factory=list)

    def actions(self) -> list[str]:
        return ["Set", "Equals"]

    def composite_indexes(self) -> list[UniqueIndex]:
        """Return the unique indexes plus a compound id index, if any."""
        indexes = list(self.unique_indexes)
        if self.id_fields:
            indexes.append(
                UniqueIndex(
                    internal_name=_concat_fields_to_name(self.id_fields),
                    fields=list(self.id_fields),
                )
            )
        return indexes

    def relation_fields_plus_one(self) -> list[Field]:
        """Return all relation fields followed by one empty field."""
        fields = [f for f in self.fields if f.kind == FieldKind.OBJECT]
        fields.append(Field())
        return fields


@dataclass
class Datamodel:
    """All models and enums of the datamodel."""

    models: list[Model] = field(default_factory=list)
    enums: list[Enum] = field(default_factory=list)


@dataclass
class SchemaInputType:
    """An input type of a given field."""

    is_required: bool = False
    is_list: bool = False
    type: Type = Type("")
    kind: FieldKind | str = ""


@dataclass
class SchemaArg:
    """An argument of a given field."""

    name: String = String("")
    input_types: list[SchemaInputType] = field(default_factory=list)
    is_relation_filter: bool = False


@dataclass
class SchemaOutputType:
    """An output type of a given field."""

    type: String = String("")
    is_list: bool = False
    is_required: bool = False
    kind: FieldKind | str = ""


@dataclass
class SchemaField:
    """A field of an output type."""

    name: String = String("")
    output_type: SchemaOutputType = field(default_factory=SchemaOutputType)
    args: list[SchemaArg] = field(default_factory=list)


@dataclass
class OutputType:
    """A return type of the schema."""

    name: String = String("")
    fields: list[SchemaField] = field(default_factory=list)
    is_embedded: bool = False


@dataclass
class InputType:
    """An input type of the schema."""

    name: String = String("")
    is_where_type: bool = False
    is_order_type: bool = False
    at_least_one: bool = False
    at_most_one: bool = False
    fields: list[SchemaArg] = field(default_factory=list)


@dataclass
class Schema:
    """The query schema."""

    root_query_type: String = String("")
    root_mutation_type: String = String("")
    input_object_types: list[InputType] = field(default_factory=list)
    output_object_types: list[OutputType] = field(default_factory=list)
    enums: list[SchemaEnum] = field(default_factory=list)


_NUMBER_METHODS = (
    ("LT", "lt"),
    ("GT", "gt"),
    ("LTE", "lte"),
    ("GTE", "gte"),
)

_WRITE_NUMBER_METHODS = (
    ("Increment", "increment"),
    ("Decrement", "decrement"),
    ("Multiply", "multiply"),
    ("Divide", "divide"),
)


def _methods(pairs) -> tuple[Method, ...]:
    return tuple(Method(name, action) for name, action in pairs)


@dataclass
class Document:
    """The root of the data model meta format."""

    datamodel: Datamodel = field(default_factory=Datamodel)
    schema: Schema = field(default_factory=Schema)

    def operators(self) -> list[Operator]:
        """Return the query operators."""
        return [Operator("Not", "NOT"), Operator("Or", "OR")]

    def variations(self) -> list[ActionType]:
        """Return the query variations Unique, First and Many."""
        return [
            ActionType(name=String("Unique"), inner_name=String("One")),
            ActionType(name=String("First"), inner_name=String("One"), is_list=True),
            ActionType(
                name=String("Many"),
                inner_name=String("Many"),
                is_list=True,
                return_list=True,
            ),
        ]

    def actions(self) -> list[Action]:
        """Return all CRUD operations."""
        return [
            Action("query", String("Find")),
            Action("mutation", String("Create")),
            Action("mutation", String("Update")),
            Action("mutation", String("Delete")),
        ]

    def write_types(self) -> list[VirtualType]:
        """Return the virtual types used in updates and their methods."""
        number = _methods(_WRITE_NUMBER_METHODS)
        return [VirtualType("Int", number), VirtualType("Float", number)]

    def read_types(self) -> list[VirtualType]:
        """Return the virtual types used in filters and their methods."""
        number = _methods(_NUMBER_METHODS)
        return [
            VirtualType(
                "String",
                _methods(
                    (
                        ("Contains", "contains"),
                        ("HasPrefix", "starts_with"),
                        ("HasSuffix", "ends_with"),
                    )
                ),
            ),
            VirtualType("Boolean", ()),
            VirtualType("Int", number),
            VirtualType("Float", number),
            VirtualType(
                "DateTime",
                _methods(
                    (
                        ("Before", "lt"),
                        ("After", "gt"),
                        ("BeforeEquals", "lte"),
                        ("AfterEquals", "gte"),
                    )
                ),
            ),
        ]


def _str(data: dict, key: str) -> String:
    return String(data.get(key) or "")


def _list(data: dict, key: str) -> list:
    return list(data.get(key) or [])


def _kind(value: Any) -> FieldKind | str:
    value = value or ""
    try:
        return FieldKind(value)
    except ValueError:
        return str(value)


def _parse_field(data: dict) -> Field:
    return Field(
        kind=_kind(data.get("kind")),
        name=_str(data, "name"),
        is_required=bool(data.get("isRequired")),
        is_list=bool(data.get("isList")),
        is_unique=bool(data.get("isUnique")),
        is_read_only=bool(data.get("isReadOnly")),
        is_id=bool(data.get("isId")),
        type=Type(data.get("type") or ""),
        db_name=_str(data, "dBName"),
        is_generated=bool(data.get("isGenerated")),
        is_updated_at=bool(data.get("isUpdatedAt")),
        relation_to_fields=_list(data, "relationToFields"),
        relation_on_delete=_str(data, "relationOnDelete"),
        relation_name=_str(data, "relationName"),
        has_default_value=bool(data.get("hasDefaultValue")),
    )


def _parse_model(data: dict) -> Model:
    return Model(
        name=_str(data, "name"),
        is_embedded=bool(data.get("isEmbedded")),
        db_name=_str(data, "dbName"),
        fields=[_parse_field(f) for f in _list(data, "fields")],
        unique_indexes=[
            UniqueIndex(
                internal_name=_str(u, "name"),
                fields=[String(f) for f in _list(u, "fields")],
            )
            for u in _list(data, "uniqueIndexes")
        ],
        id_fields=[String(f) for f in _list(data, "idFields")],
    )


def _parse_enum(data: dict) -> Enum:
    return Enum(
        name=_str(data, "name"),
        values=[
            EnumValue(name=_str(v, "name"), db_name=_str(v, "dBName"))
            for v in _list(data, "values")
        ],
        db_name=_str(data, "dBName"),
    )


def _parse_arg(data: dict) -> SchemaArg:
    return SchemaArg(
        name=_str(data, "name"),
        input_types=[
            SchemaInputType(
                is_required=bool(t.get("isRequired")),
                is_list=bool(t.get("isList")),
                type=Type(t.get("type") or ""),
                kind=_kind(t.get("kind")),
            )
            for t in _list(data, "inputTypes")
        ],
        is_relation_filter=bool(data.get("isRelationFilter")),
    )


def _parse_output_type(data: dict) -> OutputType:
    fields = []
    for f in _list(data, "fields"):
        out = f.get("outputType") or {}
        fields.append(
            SchemaField(
                name=_str(f, "name"),
                output_type=SchemaOutputType(
                    type=_str(out, "type"),
                    is_list=bool(out.get("isList")),
                    is_required=bool(out.get("isRequired")),
                    kind=_kind(out.get("kind")),
                ),
                args=[_parse_arg(a) for a in _list(f, "args")],
            )
        )
    return OutputType(
        name=_str(data, "name"),
        fields=fields,
        is_embedded=bool(data.get("isEmbedded")),
    )


def _parse_input_type(data: dict) -> InputType:
    return InputType(
        name=_str(data, "name"),
        is_where_type=bool(data.get("isWhereType")),
        is_order_type=bool(data.get("isOrderType")),
        at_least_one=bool(data.get("atLeastOne")),
        at_most_one=bool(data.get("atMostOne")),
        fields=[_parse_arg(a) for a in _list(data, "fields")],
    )


def _parse_schema(data: dict) -> Schema:
    inputs = data.get("inputObjectTypes") or {}
    outputs = data.get("outputObjectTypes") or {}
    return Schema(
        root_query_type=_str(data, "rootQueryType"),
        root_mutation_type=_str(data, "rootMutationType"),
        input_object_types=[_parse_input_type(t) for t in _list(inputs, "prisma")],
        output_object_types=[_parse_output_type(t) for t in _list(outputs, "prisma")],
        enums=[
            SchemaEnum(
                name=_str(e, "name"),
                values=[String(v) for v in _list(e, "values")],
                db_name=_str(e, "dBName"),
            )
            for e in _list(data, "enums")
        ],
    )


def parse_document(data: str | bytes | dict) -> Document:
    """Parse a document from JSON text or an already decoded mapping."""
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    if not isinstance(data, dict):
        raise ValueError("DMMF document must be an object")
    datamodel = data.get("datamodel") or {}
    return Document(
        datamodel=Datamodel(
            models=[_parse_model(m) for m in _list(datamodel, "models")],
            enums=[_parse_enum(e) for e in _list(datamodel, "enums")],
        ),
        schema=_parse_schema(data.get("schema") or {}),
    )