"""
Schema resolver that transforms type expressions to IR.

Classifies every type expression node and dispatches it to the matching
rule: keywords and literals map directly, composite types recurse, and
named references go through the ReferenceResolver.
"""

from __future__ import annotations

import logging

from ..config import ResolverConfig
from ..errors import ResolutionFailure, SchemaResolutionError
from ..syntax.nodes import (
    ArrayTypeNode,
    FunctionSignature,
    IntersectionTypeNode,
    Keyword,
    KeywordTypeNode,
    LiteralKind,
    LiteralTypeNode,
    ParenthesizedTypeNode,
    TupleTypeNode,
    TypeLiteralNode,
    TypeNode,
    TypeReferenceNode,
    UnionTypeNode,
    UnsupportedTypeNode,
)
from .environment import SymbolEnvironment, TypeFlags
from .ir_nodes import (
    AnySchema,
    ArraySchema,
    BigIntLiteralSchema,
    BigIntSchema,
    BooleanLiteralSchema,
    BooleanSchema,
    IntersectionSchema,
    NullSchema,
    NumberSchema,
    ObjectSchema,
    ParameterSchema,
    Schema,
    SchemaModel,
    SignatureSchema,
    StringSchema,
    TupleElement,
    TupleSchema,
    UndefinedSchema,
    UnionSchema,
)
from .literals import literal_of
from .members import MemberExtractor
from .reference_resolver import ReferenceResolver, ResolutionContext

logger = logging.getLogger(__name__)

# Keyword types with a fixed schema; object, symbol and never are not supported
KEYWORD_SCHEMAS: dict[Keyword, Schema] = {
    Keyword.ANY: AnySchema(),
    Keyword.UNKNOWN: AnySchema(),
    Keyword.BIGINT: BigIntSchema(),
    Keyword.BOOLEAN: BooleanSchema(),
    Keyword.TRUE: BooleanLiteralSchema(literal=True),
    Keyword.FALSE: BooleanLiteralSchema(literal=False),
    Keyword.NULL: NullSchema(),
    Keyword.NUMBER: NumberSchema(),
    Keyword.STRING: StringSchema(),
    Keyword.UNDEFINED: UndefinedSchema(),
    Keyword.VOID: UndefinedSchema(),
}


class SchemaResolver:
    """Resolves type expressions into schema models."""

    def __init__(self, env: SymbolEnvironment, config: ResolverConfig | None = None):
        """
        Initialize the resolver.

        Args:
            env: Symbol environment for references and literal values
            config: Resolver configuration (defaults apply when omitted)
        """
        self.env = env
        self.config = config or ResolverConfig()
        self.members = MemberExtractor(self._resolve)
        self.references = ReferenceResolver(self.env, self.config, self.members, self._resolve)

    def resolve(self, node: TypeNode) -> SchemaModel:
        """
        Resolve a type expression.

        Args:
            node: The type expression to resolve

        Returns:
            SchemaModel with the root schema and the dependency table

        Raises:
            SchemaResolutionError: If any part of the expression is not supported
        """
        ctx = ResolutionContext()
        try:
            root = self._resolve(node, ctx)
        except RecursionError as e:
            raise SchemaResolutionError(
                "Type expression is nested too deeply",
                node,
                ResolutionFailure.NESTING_TOO_DEEP,
            ) from e
        return SchemaModel(root=root, deps=ctx.deps)

    def resolve_signature(self, function: FunctionSignature) -> SignatureSchema:
        """Resolve the parameter and return types of a function."""
        logger.debug("Resolving signature of %s", function.name)

        if function.return_type is None:
            raise SchemaResolutionError(
                f"Function '{function.name}' must have a return type",
                function,
                ResolutionFailure.MISSING_RETURN_TYPE,
            )

        parameters = []
        for parameter in function.parameters:
            if parameter.type is None:
                raise SchemaResolutionError(
                    f"Parameter '{parameter.name}' of '{function.name}' must have a type",
                    parameter,
                    ResolutionFailure.MISSING_TYPE,
                )
            parameters.append(
                ParameterSchema(
                    name=parameter.name,
                    optional=parameter.optional,
                    model=self.resolve(parameter.type),
                )
            )

        return SignatureSchema(
            name=function.name,
            parameters=parameters,
            returns=self.resolve(function.return_type),
        )

    def _resolve(self, node: TypeNode, ctx: ResolutionContext) -> Schema:
        match node:
            case KeywordTypeNode():
                return self._resolve_keyword(node)
            case LiteralTypeNode():
                return self._resolve_literal(node)
            case ArrayTypeNode():
                return ArraySchema(element=self._resolve(node.element_type, ctx))
            case UnionTypeNode():
                return UnionSchema(one_of=tuple(self._resolve(t, ctx) for t in node.types))
            case IntersectionTypeNode():
                return IntersectionSchema(parts=tuple(self._resolve(t, ctx) for t in node.types))
            case ParenthesizedTypeNode():
                return self._resolve(node.type, ctx)
            case TupleTypeNode():
                return TupleSchema(
                    elements=tuple(
                        TupleElement(position=position, schema=self._resolve(element, ctx))
                        for position, element in enumerate(node.elements)
                    )
                )
            case TypeLiteralNode():
                return ObjectSchema(members=self.members.extract(node.members, ctx))
            case TypeReferenceNode():
                return self.references.resolve(node, ctx)
            case UnsupportedTypeNode():
                raise SchemaResolutionError(
                    f"Type node {node.kind or 'unknown'} is not implemented",
                    node,
                    ResolutionFailure.UNSUPPORTED_NODE,
                )
            case _:
                raise SchemaResolutionError(
                    f"Type node {type(node).__name__} is not implemented",
                    node,
                    ResolutionFailure.UNSUPPORTED_NODE,
                )

    def _resolve_keyword(self, node: KeywordTypeNode) -> Schema:
        schema = KEYWORD_SCHEMAS.get(node.keyword)
        if schema is None:
            raise SchemaResolutionError(
                f"Keyword type '{node.keyword.value}' is not implemented",
                node,
                ResolutionFailure.UNSUPPORTED_KEYWORD,
            )
        return schema

    def _resolve_literal(self, node: LiteralTypeNode) -> Schema:
        match node.literal.kind:
            case LiteralKind.NULL:
                return NullSchema()
            case LiteralKind.TRUE:
                return BooleanLiteralSchema(literal=True)
            case LiteralKind.FALSE:
                return BooleanLiteralSchema(literal=False)
            case LiteralKind.STRING | LiteralKind.NUMERIC:
                return literal_of(self.env.resolve_literal_type(node), node)
            case LiteralKind.BIGINT:
                resolved = self.env.resolve_literal_type(node)
                if TypeFlags.BIGINT_LITERAL not in resolved.flags:
                    raise SchemaResolutionError(
                        f"Bigint literal {node.literal.text} did not evaluate to a bigint literal type",
                        node,
                        ResolutionFailure.UNSUPPORTED_LITERAL_TYPE,
                    )
                return BigIntLiteralSchema(literal=int(resolved.value))
            case _:
                raise SchemaResolutionError(
                    f"Literal type {node.literal.kind.value} is not implemented",
                    node,
                    ResolutionFailure.UNSUPPORTED_LITERAL,
                )


def resolve(node: TypeNode, env: SymbolEnvironment, config: ResolverConfig | None = None) -> SchemaModel:
    """Resolve a single type expression with a fresh resolver."""
    return SchemaResolver(env, config).resolve(node)
