"""
Symbol environment used by the resolver.

The environment answers two questions the syntax alone cannot: which
declaration a type name refers to, and which exact value a literal (or
an enum member) evaluates to. The resolver only depends on the
``SymbolEnvironment`` protocol; ``DeclarationTable`` is the in-memory
implementation built from the declarations of a syntax document.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Flag, auto
from typing import Any, Protocol

from ..errors import ResolutionFailure, SchemaResolutionError
from ..syntax.nodes import (
    Declaration,
    EnumDeclaration,
    EnumMemberDeclaration,
    LiteralExpression,
    LiteralKind,
    LiteralTypeNode,
    TypeReferenceNode,
)

logger = logging.getLogger(__name__)


class TypeFlags(Flag):
    """Checker flags of a resolved type."""

    NONE = 0
    ANY = auto()
    UNKNOWN = auto()
    STRING = auto()
    NUMBER = auto()
    BOOLEAN = auto()
    ENUM = auto()
    BIGINT = auto()
    STRING_LITERAL = auto()
    NUMBER_LITERAL = auto()
    BOOLEAN_LITERAL = auto()
    ENUM_LITERAL = auto()
    BIGINT_LITERAL = auto()
    NULL = auto()
    UNDEFINED = auto()
    UNION = auto()
    OBJECT = auto()


def type_flag_names(flags: TypeFlags) -> list[str]:
    """Names of the individual flags set in ``flags``, in declaration order."""
    return [member.name for member in TypeFlags if member.value and member in flags]


@dataclass(frozen=True)
class ResolvedType:
    """A type as evaluated by the environment."""

    flags: TypeFlags = TypeFlags.NONE
    value: Any = None


class SymbolEnvironment(Protocol):
    """Read-only lookup capability supplied by the front-end."""

    def resolve_reference(self, node: TypeReferenceNode) -> Declaration | None:
        """Return the declaration a type reference points to, if any."""
        ...

    def resolve_literal_type(self, node: LiteralTypeNode | EnumMemberDeclaration) -> ResolvedType:
        """Evaluate a literal type or an enum member to its exact value."""
        ...


def parse_numeric_literal(text: str) -> int | float:
    """
    Evaluate numeric literal source text.

    Integral literals (decimal, hex, octal, binary) become ``int`` so no
    digit is lost; literals with a fraction or exponent become ``float``.

    Raises:
        ValueError: If the text is not a numeric literal or its value is not finite
    """
    cleaned = text.replace("_", "")
    lowered = cleaned.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        return int(lowered, 0)
    if any(c in lowered for c in ".e"):
        value = float(lowered)
        if not math.isfinite(value):
            raise ValueError(f"Numeric literal {text!r} is not finite")
        return value
    return int(lowered, 10)


def parse_bigint_literal(text: str) -> int:
    """Evaluate bigint source text such as ``123n`` or ``0xFFn``."""
    cleaned = text.replace("_", "").lower()
    if cleaned.endswith("n"):
        cleaned = cleaned[:-1]
    if cleaned.startswith(("0x", "0o", "0b")):
        return int(cleaned, 0)
    return int(cleaned, 10)


class DeclarationTable:
    """In-memory symbol environment over a list of declarations."""

    def __init__(self, declarations: Iterable[Declaration] = ()):
        """
        Initialize the table.

        Args:
            declarations: Declarations in source order; enum members are
                registered under ``Enum.Member`` as well
        """
        self._declarations: dict[str, list[Declaration]] = {}
        self._enum_values: dict[str, ResolvedType] = {}
        for declaration in declarations:
            self.add(declaration)

    def add(self, declaration: Declaration) -> None:
        """Register a declaration. Later declarations of a name merge behind the first."""
        self._declarations.setdefault(declaration.qualified_name, []).append(declaration)

        if isinstance(declaration, EnumDeclaration):
            for member in declaration.members:
                self._declarations.setdefault(member.qualified_name, []).append(member)
            self._evaluate_enum(declaration)

    def get_declarations(self, name: str) -> list[Declaration]:
        """Get all declarations registered for a name."""
        return list(self._declarations.get(name, []))

    def resolve_reference(self, node: TypeReferenceNode) -> Declaration | None:
        declarations = self._declarations.get(node.type_name)
        if not declarations:
            return None
        if len(declarations) > 1:
            logger.debug("%d declarations found for %s, using the first", len(declarations), node.type_name)
        return declarations[0]

    def resolve_literal_type(self, node: LiteralTypeNode | EnumMemberDeclaration) -> ResolvedType:
        if isinstance(node, EnumMemberDeclaration):
            resolved = self._enum_values.get(node.qualified_name)
            if resolved is None:
                # Member of an enum that was never registered
                return self._evaluate_constant(node.initializer) if node.initializer else ResolvedType(TypeFlags.NUMBER)
            return resolved
        return self._evaluate_literal(node.literal)

    def _evaluate_literal(self, literal: LiteralExpression) -> ResolvedType:
        """Evaluate a literal type node."""
        if literal.kind == LiteralKind.STRING:
            return ResolvedType(TypeFlags.STRING_LITERAL, literal.text)
        if literal.kind in (LiteralKind.NUMERIC, LiteralKind.BIGINT):
            try:
                if literal.kind == LiteralKind.BIGINT:
                    return ResolvedType(TypeFlags.BIGINT_LITERAL, parse_bigint_literal(literal.text))
                return ResolvedType(TypeFlags.NUMBER_LITERAL, parse_numeric_literal(literal.text))
            except ValueError as e:
                raise SchemaResolutionError(
                    f"Literal '{literal.text}' is not a valid {literal.kind.value} literal",
                    literal,
                    ResolutionFailure.UNSUPPORTED_LITERAL_TYPE,
                ) from e
        if literal.kind in (LiteralKind.TRUE, LiteralKind.FALSE):
            return ResolvedType(TypeFlags.BOOLEAN_LITERAL, literal.kind == LiteralKind.TRUE)
        if literal.kind == LiteralKind.NULL:
            return ResolvedType(TypeFlags.NULL)
        return ResolvedType(TypeFlags.ANY)

    def _evaluate_enum(self, enum: EnumDeclaration) -> None:
        """Compute member values the way constant enums are numbered."""
        previous: ResolvedType | None = None
        for member in enum.members:
            if member.initializer is not None:
                resolved = self._evaluate_constant(member.initializer)
            elif previous is None:
                resolved = ResolvedType(TypeFlags.NUMBER_LITERAL | TypeFlags.ENUM_LITERAL, 0)
            elif TypeFlags.NUMBER_LITERAL in previous.flags:
                resolved = ResolvedType(TypeFlags.NUMBER_LITERAL | TypeFlags.ENUM_LITERAL, previous.value + 1)
            else:
                # Auto-numbering cannot continue after a string or computed member
                resolved = ResolvedType(TypeFlags.NUMBER | TypeFlags.ENUM)
            self._enum_values[member.qualified_name] = resolved
            previous = resolved

    def _evaluate_constant(self, expression: LiteralExpression) -> ResolvedType:
        """Evaluate an enum initializer."""
        if expression.kind in (LiteralKind.STRING, LiteralKind.NO_SUBSTITUTION_TEMPLATE):
            return ResolvedType(TypeFlags.STRING_LITERAL | TypeFlags.ENUM_LITERAL, expression.text)
        if expression.kind == LiteralKind.NUMERIC:
            try:
                return ResolvedType(TypeFlags.NUMBER_LITERAL | TypeFlags.ENUM_LITERAL, parse_numeric_literal(expression.text))
            except ValueError:
                logger.debug("Enum initializer %r is not a numeric constant", expression.text)
                return ResolvedType(TypeFlags.NUMBER | TypeFlags.ENUM)
        if expression.kind == LiteralKind.PREFIX_UNARY:
            value = self._evaluate_prefix_unary(expression.text)
            if value is not None:
                return ResolvedType(TypeFlags.NUMBER_LITERAL | TypeFlags.ENUM_LITERAL, value)
        return ResolvedType(TypeFlags.NUMBER | TypeFlags.ENUM)

    def _evaluate_prefix_unary(self, text: str) -> int | float | None:
        """Evaluate ``-1``, ``+1`` or ``~1``; ``None`` for anything else."""
        text = text.strip()
        if len(text) < 2 or text[0] not in "-+~":
            return None
        operator, operand = text[0], text[1:].strip()
        try:
            value = parse_numeric_literal(operand)
        except ValueError:
            return None
        if operator == "-":
            return -value
        if operator == "+":
            return value
        if isinstance(value, float):
            if not value.is_integer():
                return None
            value = int(value)
        return ~value
