"""
Analyzer module.

Contains the symbol environment, reference resolution, member extraction,
literal evaluation and the schema resolver building the IR.
"""

from __future__ import annotations

from .environment import DeclarationTable, ResolvedType, SymbolEnvironment, TypeFlags
from .ir_nodes import (
    Schema,
    SchemaKind,
    SchemaModel,
    SignatureSchema,
)
from .resolver import SchemaResolver, resolve

__all__ = [
    "Schema",
    "SchemaKind",
    "SchemaModel",
    "SignatureSchema",
    "SchemaResolver",
    "SymbolEnvironment",
    "DeclarationTable",
    "ResolvedType",
    "TypeFlags",
    "resolve",
]
