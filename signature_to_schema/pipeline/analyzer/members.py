"""
Member extraction for object types and interface bodies.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

from ..errors import ResolutionFailure, SchemaResolutionError
from ..syntax.nodes import (
    ComputedPropertyName,
    Identifier,
    IndexSignature,
    NumericLiteralName,
    PrivateIdentifier,
    PropertyName,
    PropertySignature,
    StringLiteralName,
    TypeElement,
    TypeNode,
)
from .ir_nodes import MemberSchema, Schema

if TYPE_CHECKING:
    from .reference_resolver import ResolutionContext


def property_name_as_text(name: PropertyName) -> str:
    """Get the plain text of a member name."""
    match name:
        case Identifier() | StringLiteralName() | NumericLiteralName():
            return name.text
        case ComputedPropertyName():
            raise SchemaResolutionError(
                f"Member name must not be a computed property: [{name.text}]",
                name,
                ResolutionFailure.COMPUTED_NAME,
            )
        case PrivateIdentifier():
            raise SchemaResolutionError(
                f"Member name must not be a private identifier: {name.text}",
                name,
                ResolutionFailure.PRIVATE_NAME,
            )
        case _:
            raise SchemaResolutionError(
                f"Unexpected value for member name: {type(name).__name__}",
                name,
                ResolutionFailure.INVALID_NAME,
            )


class MemberExtractor:
    """Turns the members of an object type into member schemas."""

    def __init__(self, resolve: Callable[[TypeNode, ResolutionContext], Schema]):
        """
        Initialize the extractor.

        Args:
            resolve: Resolves the type of a member
        """
        self._resolve = resolve

    def extract(self, members: Iterable[TypeElement], ctx: ResolutionContext) -> tuple[MemberSchema, ...]:
        """Extract member schemas in declaration order."""
        result = []
        seen: set[str] = set()
        for member in members:
            member_schema = self.extract_member(member, ctx)
            if member_schema.name in seen:
                raise SchemaResolutionError(
                    f"Duplicate member '{member_schema.name}'",
                    member,
                    ResolutionFailure.DUPLICATE_MEMBER,
                )
            seen.add(member_schema.name)
            result.append(member_schema)
        return tuple(result)

    def extract_member(self, member: TypeElement, ctx: ResolutionContext) -> MemberSchema:
        match member:
            case PropertySignature(type=None) | IndexSignature(type=None):
                raise SchemaResolutionError("Member must have a type", member, ResolutionFailure.MISSING_TYPE)
            case PropertySignature():
                return MemberSchema(
                    name=property_name_as_text(member.name),
                    optional=member.optional,
                    schema=self._resolve(member.type, ctx),
                )
            case IndexSignature():
                # TODO: produce a dictionary schema once the IR has a variant for it
                raise SchemaResolutionError(
                    "Index signature members are not implemented",
                    member,
                    ResolutionFailure.INDEX_SIGNATURE,
                )
            case _:
                raise SchemaResolutionError("Member type is not supported", member, ResolutionFailure.UNSUPPORTED_MEMBER)
