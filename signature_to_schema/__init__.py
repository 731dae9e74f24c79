"""Function Signature to Schema

A Python package for turning the type annotations of RPC function
signatures into a self-describing schema IR, used to generate request
and response validators and type declarations.
"""

__version__ = "0.3.0"

from .pipeline import (
    DeclarationTable,
    DocumentFormatError,
    ReferenceMode,
    ResolutionFailure,
    ResolverConfig,
    SchemaModel,
    SchemaResolutionError,
    SchemaResolver,
    SignatureSchema,
    SyntaxDocumentParser,
)

__all__ = [
    "SchemaResolver",
    "SchemaModel",
    "SignatureSchema",
    "DeclarationTable",
    "SyntaxDocumentParser",
    "ResolverConfig",
    "ReferenceMode",
    "SchemaResolutionError",
    "ResolutionFailure",
    "DocumentFormatError",
]
