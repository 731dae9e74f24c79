"""
Serialization of the IR to JSON-compatible dictionaries.

Every node becomes a dict tagged with its kind under ``"type"``.
Bigint literals are written as decimal strings so that consumers using
double precision numbers do not lose digits.
"""

from __future__ import annotations

from typing import Any

from .analyzer.ir_nodes import (
    AnySchema,
    ArraySchema,
    BigIntLiteralSchema,
    BigIntSchema,
    BooleanLiteralSchema,
    BooleanSchema,
    EnumMemberSchema,
    EnumSchema,
    IntersectionSchema,
    MemberSchema,
    NullSchema,
    NumberLiteralSchema,
    NumberSchema,
    ObjectSchema,
    ReferenceSchema,
    Schema,
    SchemaModel,
    SignatureSchema,
    StringLiteralSchema,
    StringSchema,
    TupleElement,
    TupleSchema,
    UndefinedSchema,
    UnionSchema,
)


def schema_to_dict(schema: Schema) -> dict[str, Any]:
    """Convert a schema node (and its children) to a dict."""
    result: dict[str, Any] = {"type": schema.kind.value}

    match schema:
        case (
            AnySchema() | BigIntSchema() | NumberSchema() | StringSchema() | BooleanSchema() | NullSchema() | UndefinedSchema()
        ):
            pass
        case BooleanLiteralSchema() | StringLiteralSchema() | NumberLiteralSchema():
            result["literal"] = schema.literal
        case BigIntLiteralSchema():
            result["literal"] = str(schema.literal)
        case ArraySchema():
            result["element"] = schema_to_dict(schema.element)
        case UnionSchema():
            result["oneOf"] = [schema_to_dict(s) for s in schema.one_of]
        case IntersectionSchema():
            result["parsers"] = [schema_to_dict(s) for s in schema.parts]
        case TupleSchema():
            result["elements"] = [schema_to_dict(e) for e in schema.elements]
        case TupleElement():
            result["position"] = schema.position
            result["parser"] = schema_to_dict(schema.schema)
        case ObjectSchema():
            result["members"] = [schema_to_dict(m) for m in schema.members]
        case MemberSchema():
            result["name"] = schema.name
            result["optional"] = schema.optional
            result["parser"] = schema_to_dict(schema.schema)
        case EnumSchema():
            result["name"] = schema.name
            result["members"] = [schema_to_dict(m) for m in schema.members]
        case EnumMemberSchema():
            result["name"] = schema.name
            result["parser"] = schema_to_dict(schema.schema)
        case ReferenceSchema():
            result["name"] = schema.name
        case _:
            raise ValueError(f"Unknown schema node: {type(schema).__name__}")

    return result


def model_to_dict(model: SchemaModel) -> dict[str, Any]:
    """Convert a schema model to a dict with ``root`` and ``deps``."""
    return {
        "root": schema_to_dict(model.root),
        "deps": {name: schema_to_dict(schema) for name, schema in model.deps.items()},
    }


def signature_to_dict(signature: SignatureSchema) -> dict[str, Any]:
    """Convert a resolved function signature to a dict."""
    return {
        "name": signature.name,
        "parameters": [
            {
                "name": parameter.name,
                "optional": parameter.optional,
                **model_to_dict(parameter.model),
            }
            for parameter in signature.parameters
        ],
        "returns": model_to_dict(signature.returns),
    }
