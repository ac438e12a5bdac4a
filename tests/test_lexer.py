"""Tests for tokenization."""

import re

import pytest

from minicpp.errors import LexicalError
from minicpp.lang import language
from minicpp.lexer import Lexer, tokenize


def kinds(source):
    return [(t.kind, t.text) for t in tokenize(source)]


def test_declaration_tokens():
    assert kinds("int x = 5;") == [
        ("KEYWORD", "int"),
        ("IDENTIFIER", "x"),
        ("OPERATOR", "="),
        ("NUMBER", "5"),
        ("DELIMITER", ";"),
    ]


def test_comments_and_whitespace_are_dropped():
    assert kinds("a // line\n/* block\n comment */ b") == [("IDENTIFIER", "a"), ("IDENTIFIER", "b")]


def test_include_is_a_single_token():
    assert kinds("#include <iostream>\nint") == [("INCLUDE", "#include <iostream>"), ("KEYWORD", "int")]


@pytest.mark.parametrize("word", language["keywords"])
def test_every_keyword(word):
    assert kinds(word) == [("KEYWORD", word)]


def test_keywords_need_a_word_boundary():
    assert kinds("integer forx") == [("IDENTIFIER", "integer"), ("IDENTIFIER", "forx")]


@pytest.mark.parametrize("text", ["42", "3.14", "3.", "1e5", "3.14e+2", "6.02E-23"])
def test_numbers_take_the_longest_match(text):
    assert kinds(text) == [("NUMBER", text)]


def test_char_and_string_literals():
    assert kinds(r"'a' '\n' " + r'"say \"hi\""') == [
        ("CHAR", "'a'"),
        ("CHAR", r"'\n'"),
        ("STRING", r'"say \"hi\""'),
    ]


def test_stream_operators_are_not_split():
    assert kinds("cout << x >> y") == [
        ("KEYWORD", "cout"),
        ("STREAM", "<<"),
        ("IDENTIFIER", "x"),
        ("STREAM", ">>"),
        ("IDENTIFIER", "y"),
    ]


def test_multi_character_operators_win_over_prefixes():
    assert kinds("i++ -- += == <= && || -> :: :") == [
        ("IDENTIFIER", "i"),
        ("OPERATOR", "++"),
        ("OPERATOR", "--"),
        ("OPERATOR", "+="),
        ("OPERATOR", "=="),
        ("OPERATOR", "<="),
        ("OPERATOR", "&&"),
        ("OPERATOR", "||"),
        ("OPERATOR", "->"),
        ("SCOPE", "::"),
        ("DELIMITER", ":"),
    ]


def test_newlines_are_normalized_before_offsets():
    tokens = tokenize("a\r\nb")
    assert [t.offset for t in tokens] == [0, 2]


def test_invisible_characters_are_stripped():
    tokens = tokenize("\ufeffint\u200b x;")
    assert [(t.kind, t.text) for t in tokens] == [
        ("KEYWORD", "int"),
        ("IDENTIFIER", "x"),
        ("DELIMITER", ";"),
    ]
    assert tokens[0].offset == 0


def test_unknown_character_reports_offset():
    with pytest.raises(LexicalError) as excinfo:
        tokenize("int x = 5 @")
    assert excinfo.value.offset == 10
    assert excinfo.value.character == "@"
    assert str(excinfo.value) == "Syntax error at position 10: '@'"


def test_unterminated_string_is_rejected():
    with pytest.raises(LexicalError) as excinfo:
        tokenize('cout << "abc')
    assert excinfo.value.offset == 8


def test_tokens_cover_the_source_without_gaps():
    source = (
        "#include <iostream>\n"
        "using namespace std;\n"
        "// entry point\n"
        "int main() {\n"
        "    int a = 3; /* three */ float b = 2.5e1;\n"
        "    cout << a * b << \"!\" << endl;\n"
        "    return 0;\n"
        "}\n"
    )
    lexer = Lexer()
    normalized = lexer.normalize(source)
    skipped = re.compile(r"(?:\s+|//[^\n]*|/\*[\s\S]*?\*/)*")
    pos = 0
    for token in lexer.lex(source):
        assert skipped.fullmatch(normalized[pos:token.offset])
        assert normalized[token.offset:token.offset + len(token.text)] == token.text
        pos = token.offset + len(token.text)
    assert skipped.fullmatch(normalized[pos:])
