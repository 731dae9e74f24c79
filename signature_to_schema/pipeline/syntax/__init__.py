"""
Syntax module.

Contains the type expression node definitions and the syntax document parser.
"""

from __future__ import annotations

from .nodes import (
    ArrayTypeNode,
    Declaration,
    EnumDeclaration,
    EnumMemberDeclaration,
    FunctionSignature,
    InterfaceDeclaration,
    IntersectionTypeNode,
    Keyword,
    KeywordTypeNode,
    LiteralExpression,
    LiteralKind,
    LiteralTypeNode,
    ParenthesizedTypeNode,
    PropertySignature,
    SourceLocation,
    SyntaxDocument,
    TupleTypeNode,
    TypeAliasDeclaration,
    TypeLiteralNode,
    TypeNode,
    TypeReferenceNode,
    UnionTypeNode,
    UnsupportedTypeNode,
)
from .parser import SyntaxDocumentParser

__all__ = [
    "TypeNode",
    "KeywordTypeNode",
    "Keyword",
    "LiteralTypeNode",
    "LiteralExpression",
    "LiteralKind",
    "ArrayTypeNode",
    "UnionTypeNode",
    "IntersectionTypeNode",
    "ParenthesizedTypeNode",
    "TupleTypeNode",
    "TypeLiteralNode",
    "TypeReferenceNode",
    "UnsupportedTypeNode",
    "PropertySignature",
    "Declaration",
    "EnumDeclaration",
    "EnumMemberDeclaration",
    "InterfaceDeclaration",
    "TypeAliasDeclaration",
    "FunctionSignature",
    "SourceLocation",
    "SyntaxDocument",
    "SyntaxDocumentParser",
]
