"""
Reference resolver for named type references.

Looks up the declaration a type name points to and builds its schema.
Keeps track of the declarations currently being resolved so recursive
types end in a ReferenceSchema instead of expanding forever.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from ..config import ReferenceMode, ResolverConfig
from ..errors import ResolutionFailure, SchemaResolutionError
from ..syntax.nodes import (
    Declaration,
    EnumDeclaration,
    EnumMemberDeclaration,
    InterfaceDeclaration,
    OtherDeclaration,
    TypeAliasDeclaration,
    TypeNode,
    TypeReferenceNode,
)
from .environment import SymbolEnvironment
from .ir_nodes import EnumMemberSchema, EnumSchema, ObjectSchema, ReferenceSchema, Schema
from .literals import literal_of
from .members import MemberExtractor, property_name_as_text

logger = logging.getLogger(__name__)


@dataclass
class ResolutionContext:
    """Working state of a single resolution call."""

    # Dependency table: qualified name -> schema
    deps: dict[str, Schema] = field(default_factory=dict)

    # Qualified names of the declarations being resolved, outermost first
    resolving: list[str] = field(default_factory=list)

    # Declarations that were re-entered while being resolved
    recursive: set[str] = field(default_factory=set)


def describe_declaration(declaration: Declaration) -> str:
    """Human readable kind of a declaration."""
    if isinstance(declaration, OtherDeclaration):
        return declaration.kind or "declaration"
    if isinstance(declaration, TypeAliasDeclaration):
        return "type alias"
    return type(declaration).__name__


class ReferenceResolver:
    """Resolves type references to enum, enum member, interface and alias schemas."""

    def __init__(
        self,
        env: SymbolEnvironment,
        config: ResolverConfig,
        members: MemberExtractor,
        resolve: Callable[[TypeNode, ResolutionContext], Schema],
    ):
        """
        Initialize the resolver.

        Args:
            env: Symbol environment used for lookups
            config: Resolver configuration
            members: Extractor for interface bodies
            resolve: Resolves nested type expressions (aliased types)
        """
        self.env = env
        self.config = config
        self.members = members
        self._resolve = resolve

    def resolve(self, node: TypeReferenceNode, ctx: ResolutionContext) -> Schema:
        """
        Resolve a type reference to its schema.

        Args:
            node: The reference to resolve
            ctx: State of the current resolution call

        Returns:
            The schema of the referenced declaration, or a ReferenceSchema
        """
        declaration = self.env.resolve_reference(node)
        if declaration is None:
            raise SchemaResolutionError(
                f"Cannot resolve type reference '{node.type_name}'",
                node,
                ResolutionFailure.UNRESOLVED_REFERENCE,
            )

        if node.type_arguments:
            logger.debug("Ignoring type arguments of reference to %s", node.type_name)

        match declaration:
            case EnumMemberDeclaration():
                return self.resolve_enum_member(declaration)
            case EnumDeclaration() | InterfaceDeclaration():
                return self._resolve_named(declaration, ctx)
            case TypeAliasDeclaration() if self.config.resolve_type_aliases:
                return self._resolve_named(declaration, ctx)
            case _:
                raise SchemaResolutionError(
                    f"Type reference '{node.type_name}' to {describe_declaration(declaration)} is not implemented",
                    node,
                    ResolutionFailure.UNSUPPORTED_DECLARATION,
                )

    def _resolve_named(self, declaration: Declaration, ctx: ResolutionContext) -> Schema:
        """Resolve a declaration that can take part in recursion."""
        name = declaration.qualified_name
        share = self.config.reference_mode == ReferenceMode.SHARE

        if name in ctx.deps:
            return ReferenceSchema(name=name) if share else ctx.deps[name]

        if name in ctx.resolving:
            logger.debug("Recursive reference to %s (via %s)", name, " -> ".join(ctx.resolving))
            ctx.recursive.add(name)
            return ReferenceSchema(name=name)

        ctx.resolving.append(name)
        try:
            schema = self._resolve_declaration(declaration, ctx)
        finally:
            ctx.resolving.pop()

        if share or name in ctx.recursive:
            logger.debug("Adding %s to the dependency table", name)
            ctx.deps[name] = schema
            if share:
                return ReferenceSchema(name=name)
        return schema

    def _resolve_declaration(self, declaration: Declaration, ctx: ResolutionContext) -> Schema:
        match declaration:
            case EnumDeclaration():
                return EnumSchema(
                    name=declaration.name,
                    members=tuple(self.resolve_enum_member(member) for member in declaration.members),
                )
            case InterfaceDeclaration():
                if declaration.heritage:
                    logger.warning(
                        "Members inherited by interface %s from %s are not included in its schema",
                        declaration.name,
                        ", ".join(ref.type_name for ref in declaration.heritage),
                    )
                return ObjectSchema(members=self.members.extract(declaration.members, ctx))
            case TypeAliasDeclaration():
                return self._resolve(declaration.type, ctx)
            case _:
                raise SchemaResolutionError(
                    f"Declaration '{declaration.name}' of kind {describe_declaration(declaration)} is not implemented",
                    declaration,
                    ResolutionFailure.UNSUPPORTED_DECLARATION,
                )

    def resolve_enum_member(self, member: EnumMemberDeclaration) -> EnumMemberSchema:
        """
        Resolve an enum member to its literal value.

        Raises:
            SchemaResolutionError: If the member value is not a string or number literal
        """
        name = property_name_as_text(member.member_name)
        resolved = self.env.resolve_literal_type(member)
        try:
            schema = literal_of(resolved, member)
        except SchemaResolutionError as e:
            raise SchemaResolutionError(
                f"Enum member '{member.qualified_name}' should be either of type string or number ({e.message})",
                member,
                ResolutionFailure.INVALID_ENUM_MEMBER,
            ) from e
        return EnumMemberSchema(name=name, schema=schema)
