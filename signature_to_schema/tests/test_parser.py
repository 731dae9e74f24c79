"""
Tests for loading syntax documents.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from signature_to_schema.pipeline import DocumentFormatError, SyntaxDocumentParser
from signature_to_schema.pipeline.syntax.nodes import (
    ArrayTypeNode,
    EnumDeclaration,
    Identifier,
    IndexSignature,
    InterfaceDeclaration,
    Keyword,
    KeywordTypeNode,
    LiteralKind,
    LiteralTypeNode,
    OtherDeclaration,
    OtherMember,
    PropertySignature,
    StringLiteralName,
    TypeAliasDeclaration,
    TypeReferenceNode,
    UnionTypeNode,
    UnsupportedTypeNode,
)

TEST_DATA = Path(__file__).parent / "test_data"


@pytest.fixture
def document():
    with open(TEST_DATA / "articles.syntax.json") as f:
        return json.load(f)


class TestSyntaxDocumentParser:
    def test_parse_document(self, document):
        syntax = SyntaxDocumentParser().parse(document, source_file="articles.syntax.json")

        assert [d.name for d in syntax.declarations] == ["ArticleStatus", "Author", "Article", "ArticleRepository"]
        assert [f.name for f in syntax.functions] == ["getArticle", "listArticles", "countWords", "getRepository", "onEvent"]
        assert syntax.source_file == "articles.syntax.json"

    def test_declaration_kinds(self, document):
        status, author, article, repository = SyntaxDocumentParser().parse(document).declarations

        assert isinstance(status, EnumDeclaration)
        assert [m.qualified_name for m in status.members] == ["ArticleStatus.Draft", "ArticleStatus.Published"]
        assert status.members[0].initializer.kind == LiteralKind.STRING

        assert isinstance(author, InterfaceDeclaration)
        assert author.members[1] == PropertySignature(
            name=StringLiteralName(text="e-mail"),
            type=KeywordTypeNode(keyword=Keyword.STRING),
            optional=True,
        )

        assert isinstance(article, InterfaceDeclaration)
        assert isinstance(repository, OtherDeclaration)
        assert repository.kind == "ClassDeclaration"

    def test_function_types(self, document):
        functions = SyntaxDocumentParser().parse(document).functions

        list_articles = functions[1]
        assert list_articles.parameters[0].optional is True
        assert list_articles.parameters[0].type == TypeReferenceNode(type_name="ArticleStatus.Published")
        assert isinstance(list_articles.return_type, UnionTypeNode)
        assert isinstance(list_articles.return_type.types[0], ArrayTypeNode)
        null_type = list_articles.return_type.types[1]
        assert isinstance(null_type, LiteralTypeNode)
        assert null_type.literal.kind == LiteralKind.NULL

        count_words = functions[2]
        assert count_words.return_type.literal.kind == LiteralKind.BIGINT
        assert count_words.return_type.literal.text == "9007199254740993n"

        on_event = functions[4]
        assert on_event.parameters[0].type == UnsupportedTypeNode(kind="FunctionType")

    def test_locations(self, document):
        syntax = SyntaxDocumentParser().parse(document, source_file="articles.syntax.json")
        article = syntax.declarations[2]
        assert str(article.location) == "samen.ts:12:1"

        get_article = syntax.functions[0]
        assert str(get_article.return_type.location) == "articles.syntax.json#/functions/0/returnType"

    def test_property_name_shorthand(self):
        member = SyntaxDocumentParser().parse_member(
            {"kind": "PropertySignature", "name": "title", "type": {"kind": "StringKeyword"}},
            "#",
        )
        assert member.name == Identifier(text="title")

    def test_other_members(self):
        parser = SyntaxDocumentParser()
        index = parser.parse_member(
            {
                "kind": "IndexSignature",
                "parameters": [{"name": "key", "type": {"kind": "StringKeyword"}}],
                "type": {"kind": "NumberKeyword"},
            },
            "#",
        )
        assert isinstance(index, IndexSignature)
        assert index.parameter_name == "key"
        assert index.key_type == KeywordTypeNode(keyword=Keyword.STRING)

        method = parser.parse_member({"kind": "MethodSignature", "name": "run"}, "#")
        assert isinstance(method, OtherMember)

    def test_type_alias(self):
        alias = SyntaxDocumentParser().parse_declaration(
            {"kind": "TypeAliasDeclaration", "name": "Id", "type": {"kind": "ParenthesizedType", "type": {"kind": "StringKeyword"}}},
            "#",
        )
        assert isinstance(alias, TypeAliasDeclaration)

    def test_enum_initializer_expression(self):
        enum = SyntaxDocumentParser().parse_declaration(
            {"kind": "EnumDeclaration", "name": "E", "members": [{"name": "A", "initializer": {"kind": "CallExpression", "text": "f()"}}]},
            "#",
        )
        assert enum.members[0].initializer.kind == LiteralKind.EXPRESSION


class TestDocumentErrors:
    @pytest.mark.parametrize(
        "document, path",
        [
            ([], "#"),
            ({"functions": {}}, "#"),
            ({"functions": [{"name": "f", "returnType": {"type": "StringKeyword"}}]}, "#/functions/0/returnType"),
            ({"functions": [{"returnType": {"kind": "StringKeyword"}}]}, "#/functions/0"),
            ({"declarations": [{"kind": "InterfaceDeclaration", "name": "I", "members": [{"kind": "Bogus"}]}]}, "#/declarations/0/members/0"),
            ({"declarations": [{"kind": "TypeAliasDeclaration", "name": "A"}]}, "#/declarations/0"),
            ({"functions": [{"name": "f", "returnType": {"kind": "LiteralType", "literal": {"kind": "Bogus"}}}]}, "#/functions/0/returnType/literal"),
            ({"functions": [{"name": "f", "returnType": {"kind": "LiteralType", "literal": {"kind": "NumericLiteral"}}}]}, "#/functions/0/returnType/literal"),
            ({"declarations": [{"kind": "EnumDeclaration", "name": "E", "members": [{"name": "A", "initializer": {"kind": "StringLiteral"}}]}]}, "#/declarations/0/members/0/initializer"),
            ({"functions": [{"name": "f", "loc": "api.ts:1:1", "returnType": {"kind": "VoidKeyword"}}]}, "#/functions/0"),
            ({"functions": [{"name": "f", "returnType": {"kind": "VoidKeyword", "loc": {"line": "3"}}}]}, "#/functions/0/returnType"),
            ({"functions": [{"name": "f", "returnType": {"kind": "VoidKeyword", "loc": {"file": 7}}}]}, "#/functions/0/returnType"),
        ],
    )
    def test_malformed_document(self, document, path):
        with pytest.raises(DocumentFormatError) as exc_info:
            SyntaxDocumentParser().parse(document)
        assert exc_info.value.path == path

    def test_deep_nesting(self):
        return_type = {"kind": "StringKeyword"}
        for _ in range(5000):
            return_type = {"kind": "ArrayType", "elementType": return_type}
        document = {"functions": [{"name": "f", "returnType": return_type}]}

        with pytest.raises(DocumentFormatError) as exc_info:
            SyntaxDocumentParser().parse(document)
        assert exc_info.value.path == "#/functions/0"
        assert "nested too deeply" in str(exc_info.value)

    def test_document_error_is_value_error(self):
        with pytest.raises(ValueError):
            SyntaxDocumentParser().parse({"declarations": "nope"})
