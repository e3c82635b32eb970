import pytest

from dotlang.ast import FilePosition
from dotlang.parser.lexer import GrammarError, SourceMap, lex


def kinds(source):
    return [token.kind for token in lex(source)]


def test_lexer_tokenizes_punctuation_and_edge_operators():
    assert kinds("a -> b -- c { } [ ] = , ; : +") == [
        "ID", "EDGEOP", "ID", "EDGEOP", "ID",
        "LBRACE", "RBRACE", "LBRACKET", "RBRACKET",
        "EQUALS", "COMMA", "SEMICOLON", "COLON", "PLUS", "EOF",
    ]


def test_lexer_reads_numerals_and_identifiers():
    tokens = lex("-1.5 .5 42 _id ノード x2")
    assert [token.value for token in tokens[:-1]] == ["-1.5", ".5", "42", "_id", "ノード", "x2"]
    assert all(token.kind == "ID" for token in tokens[:-1])


def test_quoted_string_unescapes_only_quotes():
    assert lex('"say \\"hi\\""')[0].value == 'say "hi"'
    assert lex('"a\\\\b"')[0].value == "a\\\\b"
    assert lex('"a\\nb"')[0].value == "a\\nb"


def test_quoted_string_drops_line_continuations():
    assert lex('"ab\\\ncd"')[0].value == "abcd"
    assert lex('"ab\\\r\ncd"')[0].value == "abcd"


def test_double_backslash_does_not_escape_closing_quote():
    tokens = lex('"a\\\\" b')
    assert tokens[0].value == "a\\"
    assert tokens[1].value == "b"


def test_backslash_run_before_closing_quote_is_halved():
    assert lex('"a\\\\\\\\"')[0].value == "a\\\\"
    assert lex('"a\\\\\\"" b')[0].value == 'a\\\\"'


def test_html_string_keeps_inner_markup():
    token = lex("<<b>x</b>>")[0]
    assert token.kind == "HTML"
    assert token.value == "<b>x</b>"


def test_html_nesting_depth_is_limited():
    assert lex("<<b>x</b>>", max_html_nesting_depth=2)[0].kind == "HTML"
    with pytest.raises(GrammarError, match="HTML nesting depth exceeds maximum allowed depth of 2"):
        lex("<<<x>>>", max_html_nesting_depth=2)


def test_comment_tokens():
    tokens = lex("// slash\n/* block */\n# macro\na")
    assert [(token.kind, token.value) for token in tokens] == [
        ("SLASH_COMMENT", " slash"),
        ("BLOCK_COMMENT", " block "),
        ("MACRO_COMMENT", " macro"),
        ("ID", "a"),
        ("EOF", ""),
    ]


def test_line_comment_range_includes_newline():
    token = lex("// c\na")[0]
    assert token.end == 5


def test_hash_inside_a_line_is_not_a_comment():
    with pytest.raises(GrammarError):
        lex("a # b")


@pytest.mark.parametrize("source", ['"open', "/* open", "<open", "a @ b"])
def test_malformed_input_raises(source):
    with pytest.raises(GrammarError):
        lex(source)


def test_source_map_positions_are_one_based():
    source_map = SourceMap("ab\ncd\r\nef")
    assert source_map.position(0) == FilePosition(offset=0, line=1, column=1)
    assert source_map.position(3) == FilePosition(offset=3, line=2, column=1)
    assert source_map.position(8) == FilePosition(offset=8, line=3, column=2)
