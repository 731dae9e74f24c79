"""
Syntax document parser.

Loads the JSON syntax document emitted by the front-end into syntax
nodes. Node kinds use the TypeScript ``SyntaxKind`` names
(``"StringKeyword"``, ``"UnionType"``, ``"TypeReference"``, ...) and
fields use the compiler's camelCase names.
"""

from __future__ import annotations

from typing import Any

from ..errors import DocumentFormatError
from .nodes import (
    ArrayTypeNode,
    ComputedPropertyName,
    Declaration,
    EnumDeclaration,
    EnumMemberDeclaration,
    FunctionSignature,
    Identifier,
    IndexSignature,
    InterfaceDeclaration,
    IntersectionTypeNode,
    Keyword,
    KeywordTypeNode,
    LiteralExpression,
    LiteralKind,
    LiteralTypeNode,
    NumericLiteralName,
    OtherDeclaration,
    OtherMember,
    Parameter,
    ParenthesizedTypeNode,
    PrivateIdentifier,
    PropertyName,
    PropertySignature,
    SourceLocation,
    StringLiteralName,
    SyntaxDocument,
    TupleTypeNode,
    TypeAliasDeclaration,
    TypeElement,
    TypeLiteralNode,
    TypeNode,
    TypeReferenceNode,
    UnionTypeNode,
    UnsupportedTypeNode,
)


class SyntaxDocumentParser:
    """Parses a syntax document into syntax nodes."""

    KEYWORD_KINDS = {
        "AnyKeyword": Keyword.ANY,
        "UnknownKeyword": Keyword.UNKNOWN,
        "BigIntKeyword": Keyword.BIGINT,
        "BooleanKeyword": Keyword.BOOLEAN,
        "TrueKeyword": Keyword.TRUE,
        "FalseKeyword": Keyword.FALSE,
        "NullKeyword": Keyword.NULL,
        "NumberKeyword": Keyword.NUMBER,
        "StringKeyword": Keyword.STRING,
        "UndefinedKeyword": Keyword.UNDEFINED,
        "VoidKeyword": Keyword.VOID,
        "NeverKeyword": Keyword.NEVER,
        "ObjectKeyword": Keyword.OBJECT,
        "SymbolKeyword": Keyword.SYMBOL,
    }

    LITERAL_KINDS = {
        "NullKeyword": LiteralKind.NULL,
        "TrueKeyword": LiteralKind.TRUE,
        "FalseKeyword": LiteralKind.FALSE,
        "StringLiteral": LiteralKind.STRING,
        "NumericLiteral": LiteralKind.NUMERIC,
        "BigIntLiteral": LiteralKind.BIGINT,
        "RegularExpressionLiteral": LiteralKind.REGULAR_EXPRESSION,
        "NoSubstitutionTemplateLiteral": LiteralKind.NO_SUBSTITUTION_TEMPLATE,
        "JsxAttributes": LiteralKind.JSX_ATTRIBUTES,
        "ObjectLiteralExpression": LiteralKind.OBJECT_LITERAL,
        "PrefixUnaryExpression": LiteralKind.PREFIX_UNARY,
    }

    # Literals whose value is their text; the text is required
    VALUE_LITERAL_KINDS = {LiteralKind.STRING, LiteralKind.NUMERIC, LiteralKind.BIGINT}

    NAME_KINDS = {
        "Identifier": Identifier,
        "StringLiteral": StringLiteralName,
        "NumericLiteral": NumericLiteralName,
        "ComputedPropertyName": ComputedPropertyName,
        "PrivateIdentifier": PrivateIdentifier,
    }

    # Members that are recognized but never turned into schemas
    OTHER_MEMBER_KINDS = {
        "MethodSignature",
        "CallSignature",
        "ConstructSignature",
        "GetAccessor",
        "SetAccessor",
    }

    def __init__(self, source_file: str = ""):
        self.source_file = source_file

    def parse(self, document: dict[str, Any], source_file: str | None = None) -> SyntaxDocument:
        """
        Parse a syntax document.

        Args:
            document: The decoded JSON document
            source_file: File the document was loaded from (overrides the one given at init)

        Returns:
            SyntaxDocument with declarations and functions

        Raises:
            DocumentFormatError: If the document does not have the expected shape
        """
        if not isinstance(document, dict):
            raise DocumentFormatError("Syntax document must be an object", "#")

        if source_file is not None:
            self.source_file = source_file
        result = SyntaxDocument(source_file=self.source_file)

        for i, declaration in enumerate(self._list(document, "declarations", "#")):
            path = f"#/declarations/{i}"
            result.declarations.append(self._nested(self.parse_declaration, declaration, path))

        for i, function in enumerate(self._list(document, "functions", "#")):
            path = f"#/functions/{i}"
            result.functions.append(self._nested(self.parse_function, function, path))

        return result

    def _nested(self, parse, data: Any, path: str):
        try:
            return parse(data, path)
        except RecursionError as e:
            raise DocumentFormatError("Type expressions are nested too deeply", path) from e

    def parse_function(self, data: dict[str, Any], path: str) -> FunctionSignature:
        """Parse a function signature."""
        self._require_object(data, path)
        parameters = []
        for i, param in enumerate(self._list(data, "parameters", path)):
            param_path = f"{path}/parameters/{i}"
            self._require_object(param, param_path)
            parameters.append(
                Parameter(
                    name=self._string(param, "name", param_path),
                    type=self._optional_type(param, "type", param_path),
                    optional=bool(param.get("optional", False)),
                    location=self._location(param, param_path),
                )
            )

        return FunctionSignature(
            name=self._string(data, "name", path),
            parameters=tuple(parameters),
            return_type=self._optional_type(data, "returnType", path),
            location=self._location(data, path),
        )

    def parse_declaration(self, data: dict[str, Any], path: str) -> Declaration:
        """Parse a declaration a type reference can resolve to."""
        kind = self._kind(data, path)
        name = self._string(data, "name", path)
        location = self._location(data, path)

        if kind == "EnumDeclaration":
            members = []
            for i, member in enumerate(self._list(data, "members", path)):
                member_path = f"{path}/members/{i}"
                self._require_object(member, member_path)
                member_name = self.parse_property_name(member.get("name"), f"{member_path}/name")
                initializer = None
                if member.get("initializer") is not None:
                    initializer = self.parse_initializer(member["initializer"], f"{member_path}/initializer")
                members.append(
                    EnumMemberDeclaration(
                        name=member_name.text,
                        enum_name=name,
                        member_name=member_name,
                        initializer=initializer,
                        location=self._location(member, member_path),
                    )
                )
            return EnumDeclaration(name=name, members=tuple(members), location=location)

        if kind == "InterfaceDeclaration":
            heritage = []
            for i, ref in enumerate(self._list(data, "heritage", path)):
                ref_node = self.parse_type(ref, f"{path}/heritage/{i}")
                if not isinstance(ref_node, TypeReferenceNode):
                    raise DocumentFormatError("Interface heritage must be a TypeReference", f"{path}/heritage/{i}")
                heritage.append(ref_node)
            return InterfaceDeclaration(
                name=name,
                members=self._members(data, path),
                heritage=tuple(heritage),
                location=location,
            )

        if kind == "TypeAliasDeclaration":
            if "type" not in data:
                raise DocumentFormatError("Type alias must have a type", path)
            return TypeAliasDeclaration(name=name, type=self.parse_type(data["type"], f"{path}/type"), location=location)

        return OtherDeclaration(name=name, kind=kind, location=location)

    def parse_type(self, data: Any, path: str) -> TypeNode:
        """
        Parse a type node recursively.

        Unknown kinds are kept as UnsupportedTypeNode; rejecting them is up
        to the resolver.
        """
        kind = self._kind(data, path)
        location = self._location(data, path)

        if kind in self.KEYWORD_KINDS:
            return KeywordTypeNode(keyword=self.KEYWORD_KINDS[kind], location=location)

        if kind == "LiteralType":
            if "literal" not in data:
                raise DocumentFormatError("Literal type must have a literal", path)
            return LiteralTypeNode(literal=self.parse_literal(data["literal"], f"{path}/literal"), location=location)

        if kind == "ArrayType":
            if "elementType" not in data:
                raise DocumentFormatError("Array type must have an elementType", path)
            return ArrayTypeNode(element_type=self.parse_type(data["elementType"], f"{path}/elementType"), location=location)

        if kind == "UnionType":
            return UnionTypeNode(types=self._types(data, "types", path), location=location)

        if kind == "IntersectionType":
            return IntersectionTypeNode(types=self._types(data, "types", path), location=location)

        if kind == "ParenthesizedType":
            if "type" not in data:
                raise DocumentFormatError("Parenthesized type must have a type", path)
            return ParenthesizedTypeNode(type=self.parse_type(data["type"], f"{path}/type"), location=location)

        if kind == "TupleType":
            return TupleTypeNode(elements=self._types(data, "elements", path), location=location)

        if kind == "TypeLiteral":
            return TypeLiteralNode(members=self._members(data, path), location=location)

        if kind == "TypeReference":
            return TypeReferenceNode(
                type_name=self._string(data, "typeName", path),
                type_arguments=self._types(data, "typeArguments", path),
                location=location,
            )

        return UnsupportedTypeNode(kind=kind, location=location)

    def parse_literal(self, data: Any, path: str) -> LiteralExpression:
        """Parse the literal of a literal type."""
        kind = self._kind(data, path)
        if kind not in self.LITERAL_KINDS:
            raise DocumentFormatError(f"Unknown literal kind '{kind}'", path)
        literal_kind = self.LITERAL_KINDS[kind]
        return LiteralExpression(
            kind=literal_kind,
            text=self._literal_text(data, literal_kind, path),
            location=self._location(data, path),
        )

    def parse_initializer(self, data: Any, path: str) -> LiteralExpression:
        """Parse an enum member initializer; non-literals are kept as expressions."""
        kind = self._kind(data, path)
        literal_kind = self.LITERAL_KINDS.get(kind, LiteralKind.EXPRESSION)
        return LiteralExpression(
            kind=literal_kind,
            text=self._literal_text(data, literal_kind, path),
            location=self._location(data, path),
        )

    def parse_member(self, data: Any, path: str) -> TypeElement:
        """Parse a member of a type literal or interface."""
        kind = self._kind(data, path)
        location = self._location(data, path)

        if kind == "PropertySignature":
            return PropertySignature(
                name=self.parse_property_name(data.get("name"), f"{path}/name"),
                type=self._optional_type(data, "type", path),
                optional=bool(data.get("optional", False)),
                location=location,
            )

        if kind == "IndexSignature":
            parameters = self._list(data, "parameters", path)
            parameter = parameters[0] if parameters else {}
            self._require_object(parameter, f"{path}/parameters/0")
            return IndexSignature(
                parameter_name=str(parameter.get("name", "")),
                key_type=self._optional_type(parameter, "type", f"{path}/parameters/0"),
                type=self._optional_type(data, "type", path),
                location=location,
            )

        if kind in self.OTHER_MEMBER_KINDS:
            name = None
            if data.get("name") is not None:
                name = self.parse_property_name(data["name"], f"{path}/name")
            return OtherMember(kind=kind, name=name, location=location)

        raise DocumentFormatError(f"Unknown member kind '{kind}'", path)

    def parse_property_name(self, data: Any, path: str) -> PropertyName:
        """Parse a member name; a plain string is an identifier."""
        if isinstance(data, str):
            return Identifier(text=data, location=SourceLocation(file=self.source_file, path=path))
        kind = self._kind(data, path)
        if kind not in self.NAME_KINDS:
            raise DocumentFormatError(f"Unknown property name kind '{kind}'", path)
        return self.NAME_KINDS[kind](text=str(data.get("text", "")), location=self._location(data, path))

    def _members(self, data: dict[str, Any], path: str) -> tuple[TypeElement, ...]:
        return tuple(self.parse_member(m, f"{path}/members/{i}") for i, m in enumerate(self._list(data, "members", path)))

    def _types(self, data: dict[str, Any], key: str, path: str) -> tuple[TypeNode, ...]:
        return tuple(self.parse_type(t, f"{path}/{key}/{i}") for i, t in enumerate(self._list(data, key, path)))

    def _optional_type(self, data: dict[str, Any], key: str, path: str) -> TypeNode | None:
        if data.get(key) is None:
            return None
        return self.parse_type(data[key], f"{path}/{key}")

    def _kind(self, data: Any, path: str) -> str:
        self._require_object(data, path)
        kind = data.get("kind")
        if not isinstance(kind, str) or not kind:
            raise DocumentFormatError("Node must have a 'kind'", path)
        return kind

    def _string(self, data: dict[str, Any], key: str, path: str) -> str:
        value = data.get(key)
        if not isinstance(value, str):
            raise DocumentFormatError(f"'{key}' must be a string", path)
        return value

    def _list(self, data: dict[str, Any], key: str, path: str) -> list[Any]:
        value = data.get(key, [])
        if not isinstance(value, list):
            raise DocumentFormatError(f"'{key}' must be a list", path)
        return value

    def _require_object(self, data: Any, path: str) -> None:
        if not isinstance(data, dict):
            raise DocumentFormatError("Expected an object", path)

    def _literal_text(self, data: dict[str, Any], kind: LiteralKind, path: str) -> str:
        if kind in self.VALUE_LITERAL_KINDS:
            return self._string(data, "text", path)
        return str(data.get("text", ""))

    def _location(self, data: dict[str, Any], path: str) -> SourceLocation:
        """Source location from the optional ``loc`` field, falling back to the document path."""
        loc = data.get("loc")
        if loc is None:
            loc = {}
        if not isinstance(loc, dict):
            raise DocumentFormatError("'loc' must be an object", path)

        file = loc.get("file", self.source_file)
        if not isinstance(file, str):
            raise DocumentFormatError("'loc.file' must be a string", path)
        line = loc.get("line", 0)
        column = loc.get("column", 0)
        for key, value in (("line", line), ("column", column)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise DocumentFormatError(f"'loc.{key}' must be an integer", path)

        return SourceLocation(file=file, line=line, column=column, path=path)
