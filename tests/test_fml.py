"""Tests for the FHIR Mapping Language grammar.

Exercises every token class of the grammar plus the complete mapping
snippets used in documentation.
"""

import pytest

from tinct import FML, Token, get_grammar, tokenize
from tinct.tokens import iter_tokens, text_of, token_types


def _typed(tokens: list) -> list[Token]:
    return [t for t in tokens if isinstance(t, Token)]


def _find(tokens: list, token_type: str) -> Token | None:
    return next((t for t in _typed(tokens) if t.type == token_type), None)


class TestRegistration:
    """The grammar is reachable under its name and aliases."""

    def test_fml_registered(self) -> None:
        assert get_grammar("fml") is FML

    @pytest.mark.parametrize("alias", ["mapping", "structuremap"])
    def test_aliases_share_grammar(self, alias: str) -> None:
        assert get_grammar(alias) is get_grammar("fml")

    def test_entry_order(self) -> None:
        names = FML.names
        assert names[0] == "metadata-info"
        assert names.index("structure-keyword") < names.index("identifier")
        assert names.index("rule-label") < names.index("string")
        assert names.index("function") < names.index("identifier")
        assert names.index("path") < names.index("identifier")
        assert names[-1] == "punctuation"


class TestBasicScenarios:
    """The reference behaviours for the mapping language."""

    def test_integer(self) -> None:
        assert tokenize("42", FML) == [Token("number", "42")]

    def test_booleans(self) -> None:
        assert tokenize("true false", FML) == [
            Token("boolean", "true"),
            " ",
            Token("boolean", "false"),
        ]

    def test_path_arrow_path(self) -> None:
        tokens = tokenize("src.field -> tgt.field", FML)
        assert tokens == [
            Token("path", "src.field"),
            " ",
            Token("transformation-arrow", "->", ("operator",)),
            " ",
            Token("path", "tgt.field"),
        ]

    def test_keywords_inside_string_not_tokenized(self) -> None:
        tokens = tokenize('"map inside string"', FML)
        assert len(tokens) == 1
        assert tokens[0].type == "string"
        assert tokens[0].text == '"map inside string"'

    def test_empty_source(self) -> None:
        assert tokenize("", FML) == [""]

    def test_metadata_has_child_tokens(self) -> None:
        tokens = tokenize("/// key = 'value'", FML)
        assert tokens == [
            Token(
                "metadata-info",
                (
                    Token("comment", "///"),
                    " ",
                    Token("metadata-key", "key", ("property",)),
                    " ",
                    Token(
                        "metadata-value",
                        (Token("operator", "="), " ", Token("string", "'value'")),
                    ),
                ),
            )
        ]


class TestComments:
    def test_metadata_comment_is_single_token(self) -> None:
        tokens = tokenize("/// url = 'http://example.org/map'", FML)
        assert len(tokens) == 1
        assert tokens[0].type == "metadata-info"

    def test_line_comment(self) -> None:
        tokens = tokenize("// This is a comment", FML)
        assert tokens == [Token("comment", "// This is a comment")]

    def test_block_comment(self) -> None:
        tokens = tokenize("/* This is a\nmulti-line comment */", FML)
        assert len(tokens) == 1
        assert tokens[0].type == "comment"

    def test_block_comments_do_not_nest(self) -> None:
        tokens = tokenize("/* outer /* inner */ outer */", FML)
        assert tokens[0] == Token("comment", "/* outer /* inner */")

    def test_two_metadata_lines(self) -> None:
        code = """
        /// url = 'http://example.org/map'
        /// name = 'TestMap'
        map "TestMap" = "Test"
      """
        tokens = tokenize(code, FML)
        assert sum(1 for t in _typed(tokens) if t.type == "metadata-info") == 2


class TestStrings:
    def test_single_quoted(self) -> None:
        tokens = tokenize("'Patient'", FML)
        assert len(tokens) == 1
        assert tokens[0].type == "string"
        assert tokens[0].text == "'Patient'"

    def test_double_quoted(self) -> None:
        tokens = tokenize('"rule-name"', FML)
        assert len(tokens) == 1
        assert tokens[0].type == "string"

    def test_escape_sequence(self) -> None:
        tokens = tokenize(r'"Line 1\nLine 2"', FML)
        assert len(tokens) == 1
        assert tokens[0].type == "string"
        assert Token("escape", r"\n") in tokens[0].content

    def test_url_inside_string(self) -> None:
        tokens = tokenize('uses "http://hl7.org/fhir/StructureDefinition/Patient"', FML)
        string = _find(tokens, "string")
        assert string is not None
        assert any(isinstance(t, Token) and t.type == "url" for t in string.content)

    def test_unclosed_string_does_not_raise(self) -> None:
        code = '"unclosed string'
        assert text_of(tokenize(code, FML)) == code


class TestNumbersAndBooleans:
    def test_decimal(self) -> None:
        assert tokenize("3.14", FML) == [Token("number", "3.14")]


class TestKeywords:
    @pytest.mark.parametrize(
        "keyword", ["map", "uses", "group", "imports", "extends", "alias", "conceptmap"]
    )
    def test_structure_keywords(self, keyword: str) -> None:
        assert tokenize(keyword, FML) == [Token("structure-keyword", keyword, ("keyword",))]

    @pytest.mark.parametrize("keyword", ["source", "target", "queried", "produced"])
    def test_mode_keywords(self, keyword: str) -> None:
        assert tokenize(keyword, FML) == [Token("mode-keyword", keyword, ("keyword",))]

    @pytest.mark.parametrize(
        "keyword", ["for", "where", "check", "then", "first", "last", "only_one"]
    )
    def test_transformation_keywords(self, keyword: str) -> None:
        assert tokenize(keyword, FML) == [
            Token("transformation-keyword", keyword, ("keyword",))
        ]

    def test_variable_binding(self) -> None:
        tokens = tokenize("src.field as variable", FML)
        binding = _find(tokens, "variable-binding")
        assert binding is not None
        assert binding.content == "as"
        assert _find(tokens, "identifier") == Token("identifier", "variable")

    def test_keywords_in_paths_stay_paths(self) -> None:
        tokens = tokenize("src.group.source -> tgt.group.target", FML)
        paths = [t.content for t in _typed(tokens) if t.type == "path"]
        assert paths == ["src.group.source", "tgt.group.target"]
        assert _find(tokens, "structure-keyword") is None


class TestFunctions:
    @pytest.mark.parametrize(
        "func", ["create", "copy", "translate", "reference", "uuid", "cc", "qty"]
    )
    def test_builtin_functions(self, func: str) -> None:
        tokens = tokenize(f"{func}()", FML)
        assert tokens[0] == Token("function", func)
        assert tokens[1:] == [Token("punctuation", "("), Token("punctuation", ")")]

    def test_function_in_transformation(self) -> None:
        tokens = tokenize('src -> tgt.coding = cc("system", "code")', FML)
        assert _find(tokens, "function") == Token("function", "cc")

    def test_function_name_without_call_is_identifier(self) -> None:
        assert tokenize("copy", FML) == [Token("identifier", "copy")]


class TestOperators:
    def test_transformation_arrow(self) -> None:
        tokens = tokenize("src.field -> tgt.field", FML)
        arrow = _find(tokens, "transformation-arrow")
        assert arrow is not None
        assert arrow.content == "->"

    @pytest.mark.parametrize("op", ["=", "!=", "<", ">", "<=", ">="])
    def test_comparison_operators(self, op: str) -> None:
        assert tokenize(op, FML) == [Token("operator", op)]

    def test_logical_operators(self) -> None:
        tokens = tokenize("x > 5 and y < 10", FML)
        ops = [t.content for t in _typed(tokens) if t.type == "operator"]
        assert ops == [">", "and", "<"]

    @pytest.mark.parametrize("op", ["==", "<<", ">>"])
    def test_conceptmap_operators(self, op: str) -> None:
        assert tokenize(op, FML) == [Token("conceptmap-operator", op, ("operator",))]


class TestConstructs:
    def test_rule_label(self) -> None:
        tokens = tokenize('src.id -> tgt.id "copy-id";', FML)
        label = _find(tokens, "rule-label")
        assert label is not None
        assert label.text == '"copy-id"'
        assert tokens[-1] == Token("punctuation", ";")

    def test_quoted_text_without_semicolon_is_string(self) -> None:
        tokens = tokenize('"copy-id"', FML)
        assert tokens[0].type == "string"

    def test_prefix_definition(self) -> None:
        tokens = tokenize('prefix s = "http://hl7.org/fhir/gender"', FML)
        prefix = _find(tokens, "prefix")
        assert prefix is not None
        assert prefix.content == (
            Token("keyword", "prefix"),
            " ",
            Token("property", "s"),
            " ",
            Token("operator", "="),
        )

    @pytest.mark.parametrize("char", ["{", "}", "[", "]", ";", ",", "(", ")", ":"])
    def test_punctuation(self, char: str) -> None:
        assert tokenize(char, FML) == [Token("punctuation", char)]

    def test_whitespace_only(self) -> None:
        assert tokenize("   \n\t  ", FML) == ["   \n\t  "]


class TestCompleteSnippets:
    def test_group_definition(self) -> None:
        code = """
        group TransformPatient(source src : Patient, target tgt : Patient) {
          src.id as id -> tgt.id = id "copy-id";
        }
      """
        tokens = tokenize(code, FML)
        types = token_types(tokens)
        for expected in (
            "group-definition",
            "structure-keyword",
            "group-name",
            "inputs",
            "input-typed",
            "mode-keyword",
            "variable-binding",
            "transformation-arrow",
            "rule-label",
        ):
            assert expected in types
        assert text_of(tokens) == code

    def test_group_inputs_structure(self) -> None:
        (group, *_rest) = tokenize("group G(source src : Patient) {", FML)
        assert group.type == "group-definition"
        inputs = next(t for t, _ in iter_tokens(group.content) if t.type == "inputs")
        (typed,) = [t for t in inputs.content if isinstance(t, Token)]
        assert typed.content == (
            Token("mode-keyword", "source"),
            " ",
            Token("variable", "src"),
            " ",
            Token("punctuation", ":"),
            " ",
            Token("type", "Patient"),
        )

    def test_group_extends_and_stereotype(self) -> None:
        (group, *_rest) = tokenize("group Child extends Parent <<type+>> {", FML)
        assert group.type == "group-definition"
        # group-name runs first, so the parent name is claimed before extends-clause
        names = [t.content for t, _ in iter_tokens(group.content) if t.type == "group-name"]
        assert names == ["Child", "Parent"]
        stereotype = next(t for t, _ in iter_tokens(group.content) if t.type == "stereotype")
        assert stereotype.alias == ("annotation",)
        assert stereotype.content == (
            Token("punctuation", "<<"),
            Token("string", "type+"),
            Token("punctuation", ">>"),
        )

    def test_transformation_with_function(self) -> None:
        code = 'src.name as n -> tgt.display = translate(n, "#map", "display")'
        tokens = tokenize(code, FML)
        assert _find(tokens, "function") == Token("function", "translate")
        assert _find(tokens, "transformation-arrow") is not None
        assert _find(tokens, "variable-binding") is not None

    def test_uses_with_alias(self) -> None:
        code = 'uses "http://hl7.org/fhir/StructureDefinition/Patient" alias Patient as source'
        tokens = tokenize(code, FML)
        string = _find(tokens, "string")
        assert any(isinstance(t, Token) and t.type == "url" for t in string.content)
        assert [t.type for t in _typed(tokens)] == [
            "structure-keyword",
            "string",
            "structure-keyword",
            "identifier",
            "variable-binding",
            "mode-keyword",
        ]

    def test_large_input(self) -> None:
        code = "src.field as f -> tgt.field = f; // rule\n" * 200
        tokens = tokenize(code, FML)
        assert text_of(tokens) == code
        assert sum(1 for t in _typed(tokens) if t.type == "transformation-arrow") == 200

    def test_long_path(self) -> None:
        code = "src." + "field." * 50 + "value"
        assert tokenize(code, FML) == [Token("path", code)]
