"""
Pipeline - function signature to schema resolver.

1. Phase 1 (Parser): Load the syntax document into type expression nodes
2. Phase 2 (Analyzer): Resolve references and literals, build the IR
3. Phase 3 (Serializer): Convert the IR to JSON-compatible dictionaries
"""

from __future__ import annotations

from .analyzer import DeclarationTable, SchemaModel, SchemaResolver, SignatureSchema, SymbolEnvironment, resolve
from .config import ReferenceMode, ResolverConfig
from .errors import DocumentFormatError, ResolutionFailure, SchemaResolutionError
from .serializer import model_to_dict, schema_to_dict, signature_to_dict
from .syntax import SyntaxDocumentParser

__all__ = [
    "SchemaResolver",
    "SchemaModel",
    "SignatureSchema",
    "SymbolEnvironment",
    "DeclarationTable",
    "SyntaxDocumentParser",
    "ResolverConfig",
    "ReferenceMode",
    "SchemaResolutionError",
    "ResolutionFailure",
    "DocumentFormatError",
    "schema_to_dict",
    "model_to_dict",
    "signature_to_dict",
    "resolve",
]
