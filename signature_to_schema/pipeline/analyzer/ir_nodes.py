"""
IR (Intermediate Representation) node definitions.

These nodes describe the shape of a value, resolved from a type
expression. Every node has exactly one ``kind``; consumers (validator
generators, declaration printers, serializers) switch on it, so adding a
kind is a breaking change for all of them.

Nodes are immutable and built fresh for every resolution call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class SchemaKind(str, Enum):
    """Kind of schema node in the IR."""

    ANY = "any"  # any, unknown
    BIGINT = "bigInt"
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    UNDEFINED = "undefined"  # undefined, void
    BOOLEAN_LITERAL = "booleanLiteral"
    STRING_LITERAL = "stringLiteral"
    NUMBER_LITERAL = "numberLiteral"
    BIGINT_LITERAL = "bigIntLiteral"
    ARRAY = "array"
    UNION = "union"
    INTERSECTION = "intersection"
    TUPLE = "tuple"
    TUPLE_ELEMENT = "tupleElement"
    OBJECT = "object"
    MEMBER = "member"
    ENUM = "enum"
    ENUM_MEMBER = "enumMember"
    REFERENCE = "reference"  # Named entry of the dependency table


@dataclass(frozen=True)
class Schema:
    """Base class for all IR nodes."""

    kind: ClassVar[SchemaKind]


@dataclass(frozen=True)
class AnySchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.ANY


@dataclass(frozen=True)
class BigIntSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.BIGINT


@dataclass(frozen=True)
class NumberSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.NUMBER


@dataclass(frozen=True)
class StringSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.STRING


@dataclass(frozen=True)
class BooleanSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.BOOLEAN


@dataclass(frozen=True)
class NullSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.NULL


@dataclass(frozen=True)
class UndefinedSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.UNDEFINED


@dataclass(frozen=True)
class BooleanLiteralSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.BOOLEAN_LITERAL

    literal: bool = False


@dataclass(frozen=True)
class StringLiteralSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.STRING_LITERAL

    literal: str = ""


@dataclass(frozen=True)
class NumberLiteralSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.NUMBER_LITERAL

    # int for integral source text (exact at any size), float otherwise
    literal: int | float = 0


@dataclass(frozen=True)
class BigIntLiteralSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.BIGINT_LITERAL

    literal: int = 0


@dataclass(frozen=True)
class ArraySchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.ARRAY

    element: Schema = field(default_factory=AnySchema)


@dataclass(frozen=True)
class UnionSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.UNION

    one_of: tuple[Schema, ...] = ()


@dataclass(frozen=True)
class IntersectionSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.INTERSECTION

    parts: tuple[Schema, ...] = ()


@dataclass(frozen=True)
class TupleElement(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.TUPLE_ELEMENT

    position: int = 0
    schema: Schema = field(default_factory=AnySchema)


@dataclass(frozen=True)
class TupleSchema(Schema):
    """Positions are 0-based and contiguous."""

    kind: ClassVar[SchemaKind] = SchemaKind.TUPLE

    elements: tuple[TupleElement, ...] = ()


@dataclass(frozen=True)
class MemberSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.MEMBER

    name: str = ""
    optional: bool = False
    schema: Schema = field(default_factory=AnySchema)


@dataclass(frozen=True)
class ObjectSchema(Schema):
    """Member names are unique within the object."""

    kind: ClassVar[SchemaKind] = SchemaKind.OBJECT

    members: tuple[MemberSchema, ...] = ()

    def get_member(self, name: str) -> MemberSchema | None:
        for member in self.members:
            if member.name == name:
                return member
        return None


@dataclass(frozen=True)
class EnumMemberSchema(Schema):
    """``schema`` is always a StringLiteralSchema or NumberLiteralSchema."""

    kind: ClassVar[SchemaKind] = SchemaKind.ENUM_MEMBER

    name: str = ""
    schema: StringLiteralSchema | NumberLiteralSchema = field(default_factory=StringLiteralSchema)


@dataclass(frozen=True)
class EnumSchema(Schema):
    kind: ClassVar[SchemaKind] = SchemaKind.ENUM

    name: str = ""
    members: tuple[EnumMemberSchema, ...] = ()


@dataclass(frozen=True)
class ReferenceSchema(Schema):
    """Points at an entry of the dependency table by qualified name."""

    kind: ClassVar[SchemaKind] = SchemaKind.REFERENCE

    name: str = ""


@dataclass
class SchemaModel:
    """The resolved schema of one type expression.

    ``deps`` maps qualified declaration names to their schema; every
    ReferenceSchema under ``root`` (or under another dependency) names a
    key of this table.
    """

    root: Schema = field(default_factory=AnySchema)
    deps: dict[str, Schema] = field(default_factory=dict)


@dataclass
class ParameterSchema:
    """A resolved function parameter."""

    name: str = ""
    optional: bool = False
    model: SchemaModel = field(default_factory=SchemaModel)


@dataclass
class SignatureSchema:
    """The resolved parameter and return schemas of one function."""

    name: str = ""
    parameters: list[ParameterSchema] = field(default_factory=list)
    returns: SchemaModel = field(default_factory=SchemaModel)
