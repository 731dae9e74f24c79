"""
Tests for named type references: enums, enum members, interfaces,
type aliases and recursive declarations.
"""

from __future__ import annotations

import logging

import pytest

from signature_to_schema.pipeline import (
    DeclarationTable,
    ReferenceMode,
    ResolutionFailure,
    ResolverConfig,
    SchemaResolutionError,
    SchemaResolver,
)
from signature_to_schema.pipeline.analyzer.ir_nodes import (
    ArraySchema,
    EnumMemberSchema,
    EnumSchema,
    MemberSchema,
    NumberLiteralSchema,
    NumberSchema,
    ObjectSchema,
    ReferenceSchema,
    StringLiteralSchema,
    StringSchema,
    UndefinedSchema,
    UnionSchema,
)
from signature_to_schema.pipeline.syntax.nodes import (
    ArrayTypeNode,
    EnumDeclaration,
    EnumMemberDeclaration,
    Identifier,
    InterfaceDeclaration,
    Keyword,
    KeywordTypeNode,
    LiteralExpression,
    LiteralKind,
    OtherDeclaration,
    PropertySignature,
    TupleTypeNode,
    TypeAliasDeclaration,
    TypeLiteralNode,
    TypeReferenceNode,
    UnionTypeNode,
)


def ref(name: str) -> TypeReferenceNode:
    return TypeReferenceNode(type_name=name)


def prop(name: str, type_node, optional: bool = False) -> PropertySignature:
    return PropertySignature(name=Identifier(text=name), type=type_node, optional=optional)


def enum(name: str, *members: tuple[str, LiteralExpression | None]) -> EnumDeclaration:
    return EnumDeclaration(
        name=name,
        members=tuple(
            EnumMemberDeclaration(name=member, enum_name=name, member_name=Identifier(text=member), initializer=initializer)
            for member, initializer in members
        ),
    )


def num(text: str) -> LiteralExpression:
    return LiteralExpression(kind=LiteralKind.NUMERIC, text=text)


def string(text: str) -> LiteralExpression:
    return LiteralExpression(kind=LiteralKind.STRING, text=text)


STRING = KeywordTypeNode(keyword=Keyword.STRING)
NUMBER = KeywordTypeNode(keyword=Keyword.NUMBER)


def make_resolver(*declarations, **config) -> SchemaResolver:
    return SchemaResolver(DeclarationTable(declarations), ResolverConfig(**config))


class TestEnums:
    def test_numeric_enum(self):
        resolver = make_resolver(enum("Level", ("A", num("1")), ("B", num("2"))))
        model = resolver.resolve(ref("Level"))
        assert model.root == EnumSchema(
            name="Level",
            members=(
                EnumMemberSchema(name="A", schema=NumberLiteralSchema(literal=1)),
                EnumMemberSchema(name="B", schema=NumberLiteralSchema(literal=2)),
            ),
        )
        assert model.deps == {}

    def test_string_enum(self):
        resolver = make_resolver(enum("Color", ("Red", string("red")), ("Green", string("green"))))
        schema = resolver.resolve(ref("Color")).root
        assert [(m.name, m.schema) for m in schema.members] == [
            ("Red", StringLiteralSchema(literal="red")),
            ("Green", StringLiteralSchema(literal="green")),
        ]

    def test_auto_numbered_enum(self):
        resolver = make_resolver(enum("Direction", ("Up", None), ("Down", None), ("Left", num("10")), ("Right", None)))
        schema = resolver.resolve(ref("Direction")).root
        assert [m.schema.literal for m in schema.members] == [0, 1, 10, 11]

    def test_negative_initializer(self):
        initializer = LiteralExpression(kind=LiteralKind.PREFIX_UNARY, text="-1")
        resolver = make_resolver(enum("Sign", ("Negative", initializer), ("Zero", None)))
        schema = resolver.resolve(ref("Sign")).root
        assert [m.schema.literal for m in schema.members] == [-1, 0]

    def test_enum_member_reference(self):
        resolver = make_resolver(enum("Color", ("Red", string("red")), ("Green", string("green"))))
        assert resolver.resolve(ref("Color.Green")).root == EnumMemberSchema(
            name="Green",
            schema=StringLiteralSchema(literal="green"),
        )

    def test_computed_enum_member_fails(self):
        computed = LiteralExpression(kind=LiteralKind.EXPRESSION, text="'abc'.length")
        resolver = make_resolver(enum("Sizes", ("Small", num("1")), ("Computed", computed)))
        with pytest.raises(SchemaResolutionError) as exc_info:
            resolver.resolve(ref("Sizes"))
        error = exc_info.value
        assert error.cause == ResolutionFailure.INVALID_ENUM_MEMBER
        assert "Sizes.Computed" in error.message
        assert "string or number" in error.message
        assert "NUMBER" in error.message

    def test_malformed_numeric_initializer_fails_on_use(self):
        # The table still builds; only resolving the enum fails
        resolver = make_resolver(enum("Broken", ("A", num("abc"))), enum("Fine", ("A", num("1"))))
        assert resolver.resolve(ref("Fine.A")).root == EnumMemberSchema(name="A", schema=NumberLiteralSchema(literal=1))
        with pytest.raises(SchemaResolutionError) as exc_info:
            resolver.resolve(ref("Broken"))
        assert exc_info.value.cause == ResolutionFailure.INVALID_ENUM_MEMBER

    def test_auto_number_after_string_member_fails(self):
        resolver = make_resolver(enum("Mixed", ("A", string("a")), ("B", None)))
        with pytest.raises(SchemaResolutionError) as exc_info:
            resolver.resolve(ref("Mixed"))
        assert exc_info.value.cause == ResolutionFailure.INVALID_ENUM_MEMBER


class TestInterfaces:
    def test_interface_members(self):
        user = InterfaceDeclaration(
            name="User",
            members=(prop("id", NUMBER), prop("email", STRING, optional=True)),
        )
        resolver = make_resolver(user)
        assert resolver.resolve(ref("User")).root == ObjectSchema(
            members=(
                MemberSchema(name="id", optional=False, schema=NumberSchema()),
                MemberSchema(name="email", optional=True, schema=StringSchema()),
            )
        )

    def test_nested_interfaces(self):
        address = InterfaceDeclaration(name="Address", members=(prop("street", STRING),))
        user = InterfaceDeclaration(name="User", members=(prop("addresses", ArrayTypeNode(element_type=ref("Address"))),))
        schema = make_resolver(address, user).resolve(ref("User")).root
        assert schema.get_member("addresses").schema == ArraySchema(
            element=ObjectSchema(members=(MemberSchema(name="street", schema=StringSchema()),))
        )

    def test_inherited_members_are_not_included(self, caplog):
        base = InterfaceDeclaration(name="Base", members=(prop("id", NUMBER),))
        child = InterfaceDeclaration(name="Child", members=(prop("name", STRING),), heritage=(ref("Base"),))
        with caplog.at_level(logging.WARNING):
            schema = make_resolver(base, child).resolve(ref("Child")).root
        assert [m.name for m in schema.members] == ["name"]
        assert "Base" in caplog.text

    def test_first_declaration_wins(self):
        first = InterfaceDeclaration(name="Box", members=(prop("a", STRING),))
        second = InterfaceDeclaration(name="Box", members=(prop("b", NUMBER),))
        schema = make_resolver(first, second).resolve(ref("Box")).root
        assert [m.name for m in schema.members] == ["a"]


class TestUnsupportedReferences:
    def test_unresolved_reference(self):
        with pytest.raises(SchemaResolutionError) as exc_info:
            make_resolver().resolve(ref("Missing"))
        assert exc_info.value.cause == ResolutionFailure.UNRESOLVED_REFERENCE
        assert "Missing" in exc_info.value.message

    def test_other_declaration_kind(self):
        resolver = make_resolver(OtherDeclaration(name="Article", kind="ClassDeclaration"))
        with pytest.raises(SchemaResolutionError) as exc_info:
            resolver.resolve(ref("Article"))
        assert exc_info.value.cause == ResolutionFailure.UNSUPPORTED_DECLARATION
        assert "ClassDeclaration" in exc_info.value.message

    def test_type_alias_rejected_by_default(self):
        resolver = make_resolver(TypeAliasDeclaration(name="Id", type=STRING))
        with pytest.raises(SchemaResolutionError) as exc_info:
            resolver.resolve(ref("Id"))
        assert exc_info.value.cause == ResolutionFailure.UNSUPPORTED_DECLARATION

    def test_type_alias_resolved_when_enabled(self):
        resolver = make_resolver(TypeAliasDeclaration(name="Id", type=STRING), resolve_type_aliases=True)
        assert resolver.resolve(ref("Id")).root == StringSchema()


class TestRecursion:
    """Recursive named types terminate with back-references."""

    def test_self_referential_interface_terminates(self):
        node = InterfaceDeclaration(name="Node", members=(prop("next", ref("Node"), optional=True),))
        model = make_resolver(node).resolve(ref("Node"))

        expected = ObjectSchema(members=(MemberSchema(name="next", optional=True, schema=ReferenceSchema(name="Node")),))
        assert model.root == expected
        assert model.deps == {"Node": expected}

    def test_self_referential_type_alias_terminates(self):
        alias = TypeAliasDeclaration(
            name="Node",
            type=TypeLiteralNode(members=(prop("next", UnionTypeNode(types=(ref("Node"), KeywordTypeNode(keyword=Keyword.UNDEFINED)))),)),
        )
        model = make_resolver(alias, resolve_type_aliases=True).resolve(ref("Node"))
        next_schema = model.root.get_member("next").schema
        assert next_schema == UnionSchema(one_of=(ReferenceSchema(name="Node"), UndefinedSchema()))
        assert model.deps["Node"] == model.root

    def test_mutual_recursion(self):
        a = InterfaceDeclaration(name="A", members=(prop("b", ref("B")),))
        b = InterfaceDeclaration(name="B", members=(prop("a", ref("A")),))
        model = make_resolver(a, b).resolve(ref("A"))

        inner_b = model.root.get_member("b").schema
        assert inner_b == ObjectSchema(members=(MemberSchema(name="a", schema=ReferenceSchema(name="A")),))
        assert list(model.deps) == ["A"]

    def test_every_back_reference_is_in_deps(self):
        tree = InterfaceDeclaration(
            name="Tree",
            members=(prop("children", ArrayTypeNode(element_type=ref("Tree"))), prop("value", NUMBER)),
        )
        model = make_resolver(tree).resolve(TupleTypeNode(elements=(ref("Tree"), ref("Tree"))))
        assert set(model.deps) == {"Tree"}
        first, second = model.root.elements
        assert first.schema == second.schema == model.deps["Tree"]


class TestShareMode:
    """In share mode every named declaration lives in the dependency table."""

    def test_interface_is_shared(self):
        user = InterfaceDeclaration(name="User", members=(prop("id", NUMBER),))
        model = make_resolver(user, reference_mode=ReferenceMode.SHARE).resolve(ArrayTypeNode(element_type=ref("User")))
        assert model.root == ArraySchema(element=ReferenceSchema(name="User"))
        assert model.deps == {"User": ObjectSchema(members=(MemberSchema(name="id", schema=NumberSchema()),))}

    def test_repeated_references_resolve_once(self):
        color = enum("Color", ("Red", string("red")))
        model = make_resolver(color, reference_mode="share").resolve(UnionTypeNode(types=(ref("Color"), ref("Color"))))
        assert model.root == UnionSchema(one_of=(ReferenceSchema(name="Color"), ReferenceSchema(name="Color")))
        assert list(model.deps) == ["Color"]

    def test_enum_member_stays_inline(self):
        color = enum("Color", ("Red", string("red")))
        model = make_resolver(color, reference_mode=ReferenceMode.SHARE).resolve(ref("Color.Red"))
        assert model.root == EnumMemberSchema(name="Red", schema=StringLiteralSchema(literal="red"))
        assert model.deps == {}

    def test_recursive_interface(self):
        node = InterfaceDeclaration(name="Node", members=(prop("next", ref("Node")),))
        model = make_resolver(node, reference_mode=ReferenceMode.SHARE).resolve(ref("Node"))
        assert model.root == ReferenceSchema(name="Node")
        assert model.deps["Node"] == ObjectSchema(members=(MemberSchema(name="next", schema=ReferenceSchema(name="Node")),))

    def test_each_resolution_has_its_own_table(self):
        user = InterfaceDeclaration(name="User", members=(prop("id", NUMBER),))
        resolver = make_resolver(user, reference_mode=ReferenceMode.SHARE)
        first = resolver.resolve(ref("User"))
        second = resolver.resolve(STRING)
        assert list(first.deps) == ["User"]
        assert second.deps == {}
