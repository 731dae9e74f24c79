"""
Literal evaluator.

Turns a type already evaluated by the environment into an exact literal
schema. Only string and number literal types are accepted.
"""

from __future__ import annotations

from ..errors import ResolutionFailure, SchemaResolutionError
from ..syntax.nodes import SyntaxNode
from .environment import ResolvedType, TypeFlags, type_flag_names
from .ir_nodes import NumberLiteralSchema, StringLiteralSchema


def literal_of(resolved: ResolvedType, node: SyntaxNode | None = None) -> StringLiteralSchema | NumberLiteralSchema:
    """
    Build the literal schema of a resolved type.

    Args:
        resolved: Type evaluated by the environment
        node: Node the type was evaluated from (for error messages)

    Returns:
        StringLiteralSchema or NumberLiteralSchema carrying the exact value

    Raises:
        SchemaResolutionError: If the type is not a string or number literal
    """
    if TypeFlags.STRING_LITERAL in resolved.flags:
        return StringLiteralSchema(literal=resolved.value)
    if TypeFlags.NUMBER_LITERAL in resolved.flags:
        return NumberLiteralSchema(literal=resolved.value)

    flags = " | ".join(type_flag_names(resolved.flags)) or "NONE"
    raise SchemaResolutionError(
        f"Literal schema for type with flags ({flags}) is not supported",
        node,
        ResolutionFailure.UNSUPPORTED_LITERAL_TYPE,
    )
