"""
Syntax node definitions for type expressions.

These nodes represent the type annotations of a function signature as
produced by the front-end, before any symbol lookup or schema building.
They form a closed family: the resolver matches on every class below.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class SourceLocation:
    """Where a node came from (for error messages)."""

    file: str = ""
    line: int = 0
    column: int = 0

    # Path of the node inside the syntax document, e.g. "#/functions/0/returnType"
    path: str = ""

    def __str__(self) -> str:
        if self.file and self.line:
            return f"{self.file}:{self.line}:{self.column}"
        return f"{self.file}{self.path}"


@dataclass(frozen=True)
class SyntaxNode:
    """Base class for all syntax nodes."""

    location: SourceLocation | None = field(default=None, kw_only=True, compare=False)


class Keyword(str, Enum):
    """Keyword types that can appear in type position."""

    ANY = "any"
    UNKNOWN = "unknown"
    BIGINT = "bigint"
    BOOLEAN = "boolean"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"
    NUMBER = "number"
    STRING = "string"
    UNDEFINED = "undefined"
    VOID = "void"
    NEVER = "never"
    OBJECT = "object"
    SYMBOL = "symbol"


class LiteralKind(str, Enum):
    """Kind of a literal expression."""

    NULL = "null"
    TRUE = "true"
    FALSE = "false"
    STRING = "string"
    NUMERIC = "numeric"
    BIGINT = "bigint"
    REGULAR_EXPRESSION = "regular_expression"
    NO_SUBSTITUTION_TEMPLATE = "no_substitution_template"
    JSX_ATTRIBUTES = "jsx_attributes"
    OBJECT_LITERAL = "object_literal"
    PREFIX_UNARY = "prefix_unary"
    EXPRESSION = "expression"  # Any non-constant expression (enum initializers only)


@dataclass(frozen=True)
class LiteralExpression(SyntaxNode):
    """A literal as written in source.

    ``text`` is the cooked value for strings (escapes already applied) and
    the source text for everything else, e.g. ``"0x1F"``, ``"12n"`` or ``"-1"``.
    """

    kind: LiteralKind = LiteralKind.STRING
    text: str = ""


# ---------------------------------------------------------------------------
# Type nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypeNode(SyntaxNode):
    """Base class for type expression nodes."""


@dataclass(frozen=True)
class KeywordTypeNode(TypeNode):
    """A keyword type such as ``string`` or ``unknown``."""

    keyword: Keyword = Keyword.ANY


@dataclass(frozen=True)
class LiteralTypeNode(TypeNode):
    """A literal used as a type, e.g. ``"foo"`` or ``42``."""

    literal: LiteralExpression = field(default_factory=LiteralExpression)


@dataclass(frozen=True)
class ArrayTypeNode(TypeNode):
    """``T[]``"""

    element_type: TypeNode = field(default_factory=lambda: KeywordTypeNode(keyword=Keyword.ANY))


@dataclass(frozen=True)
class UnionTypeNode(TypeNode):
    """``A | B``"""

    types: tuple[TypeNode, ...] = ()


@dataclass(frozen=True)
class IntersectionTypeNode(TypeNode):
    """``A & B``"""

    types: tuple[TypeNode, ...] = ()


@dataclass(frozen=True)
class ParenthesizedTypeNode(TypeNode):
    """``(T)``"""

    type: TypeNode = field(default_factory=lambda: KeywordTypeNode(keyword=Keyword.ANY))


@dataclass(frozen=True)
class TupleTypeNode(TypeNode):
    """``[A, B]``"""

    elements: tuple[TypeNode, ...] = ()


@dataclass(frozen=True)
class TypeLiteralNode(TypeNode):
    """An inline object type ``{ a: string }``."""

    members: tuple[TypeElement, ...] = ()


@dataclass(frozen=True)
class TypeReferenceNode(TypeNode):
    """A named type, e.g. ``User`` or ``Color.Red``."""

    type_name: str = ""
    type_arguments: tuple[TypeNode, ...] = ()


@dataclass(frozen=True)
class UnsupportedTypeNode(TypeNode):
    """Any other type syntax (function, mapped, conditional types, ...)."""

    kind: str = ""


# ---------------------------------------------------------------------------
# Property names
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PropertyName(SyntaxNode):
    """Base class for member names."""

    text: str = ""


@dataclass(frozen=True)
class Identifier(PropertyName):
    pass


@dataclass(frozen=True)
class StringLiteralName(PropertyName):
    pass


@dataclass(frozen=True)
class NumericLiteralName(PropertyName):
    pass


@dataclass(frozen=True)
class ComputedPropertyName(PropertyName):
    """``[expr]``; ``text`` holds the expression source."""


@dataclass(frozen=True)
class PrivateIdentifier(PropertyName):
    """``#name``"""


# ---------------------------------------------------------------------------
# Members of object types and interfaces
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TypeElement(SyntaxNode):
    """Base class for members of a type literal or interface body."""


@dataclass(frozen=True)
class PropertySignature(TypeElement):
    """``name?: T``"""

    name: PropertyName = field(default_factory=Identifier)
    type: TypeNode | None = None
    optional: bool = False


@dataclass(frozen=True)
class IndexSignature(TypeElement):
    """``[key: K]: T``"""

    parameter_name: str = ""
    key_type: TypeNode | None = None
    type: TypeNode | None = None


@dataclass(frozen=True)
class OtherMember(TypeElement):
    """Method, call or construct signatures."""

    kind: str = ""
    name: PropertyName | None = None


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Declaration(SyntaxNode):
    """Base class for named declarations a reference can point to."""

    name: str = ""

    @property
    def qualified_name(self) -> str:
        return self.name


@dataclass(frozen=True)
class EnumMemberDeclaration(Declaration):
    """A member of an enum; ``initializer`` is ``None`` when auto-numbered."""

    enum_name: str = ""
    member_name: PropertyName = field(default_factory=Identifier)
    initializer: LiteralExpression | None = None

    @property
    def qualified_name(self) -> str:
        return f"{self.enum_name}.{self.name}"


@dataclass(frozen=True)
class EnumDeclaration(Declaration):
    members: tuple[EnumMemberDeclaration, ...] = ()


@dataclass(frozen=True)
class InterfaceDeclaration(Declaration):
    members: tuple[TypeElement, ...] = ()

    # extends clauses; their members are not part of the resolved schema
    heritage: tuple[TypeReferenceNode, ...] = ()


@dataclass(frozen=True)
class TypeAliasDeclaration(Declaration):
    type: TypeNode = field(default_factory=lambda: KeywordTypeNode(keyword=Keyword.ANY))


@dataclass(frozen=True)
class OtherDeclaration(Declaration):
    """Classes, type parameters, functions, namespaces, ..."""

    kind: str = ""


# ---------------------------------------------------------------------------
# Functions
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Parameter(SyntaxNode):
    name: str = ""
    type: TypeNode | None = None
    optional: bool = False


@dataclass(frozen=True)
class FunctionSignature(SyntaxNode):
    """A function whose parameter and return types are turned into schemas."""

    name: str = ""
    parameters: tuple[Parameter, ...] = ()
    return_type: TypeNode | None = None


@dataclass
class SyntaxDocument:
    """Root of a loaded syntax document."""

    declarations: list[Declaration] = field(default_factory=list)
    functions: list[FunctionSignature] = field(default_factory=list)

    # File the document was loaded from
    source_file: str = ""
