"""
Errors raised while turning type expressions into schemas.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .syntax.nodes import SourceLocation, SyntaxNode


class ResolutionFailure(str, Enum):
    """Why a resolution failed. Every failure has exactly one cause."""

    UNSUPPORTED_NODE = "unsupported_node"
    UNSUPPORTED_KEYWORD = "unsupported_keyword"
    UNSUPPORTED_LITERAL = "unsupported_literal"
    MISSING_TYPE = "missing_type"
    MISSING_RETURN_TYPE = "missing_return_type"
    COMPUTED_NAME = "computed_name"
    PRIVATE_NAME = "private_name"
    INVALID_NAME = "invalid_name"
    DUPLICATE_MEMBER = "duplicate_member"
    UNSUPPORTED_MEMBER = "unsupported_member"
    INDEX_SIGNATURE = "index_signature"
    UNRESOLVED_REFERENCE = "unresolved_reference"
    UNSUPPORTED_DECLARATION = "unsupported_declaration"
    INVALID_ENUM_MEMBER = "invalid_enum_member"
    UNSUPPORTED_LITERAL_TYPE = "unsupported_literal_type"
    NESTING_TOO_DEEP = "nesting_too_deep"


class SchemaResolutionError(Exception):
    """Raised when a type expression cannot be turned into a schema.

    The error is fatal for the resolution call that raised it; there is
    no partial schema. ``node`` is the offending syntax node when known.
    """

    def __init__(
        self,
        message: str,
        node: SyntaxNode | None = None,
        cause: ResolutionFailure = ResolutionFailure.UNSUPPORTED_NODE,
    ):
        super().__init__(message)
        self.message = message
        self.node = node
        self.cause = cause

    @property
    def location(self) -> SourceLocation | None:
        return self.node.location if self.node is not None else None

    def __str__(self) -> str:
        location = self.location
        if location is not None and str(location):
            return f"{location}: {self.message}"
        return self.message


class DocumentFormatError(ValueError):
    """Raised when a syntax document does not have the expected shape."""

    def __init__(self, message: str, path: str = ""):
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
