import pytest

from dotlang.ast import CommentKind
from dotlang.printer.escape import escape, escape_comment


class TestEscape:
    def test_quotes_get_a_backslash(self):
        assert escape('a"b') == 'a\\"b'

    def test_already_escaped_quote_is_left_alone(self):
        assert escape('a\\"b') == 'a\\"b'

    def test_even_backslash_run_does_not_escape_quote(self):
        assert escape('a\\\\"b') == 'a\\\\\\"b'

    def test_line_breaks_become_escape_sequences(self):
        assert escape("a\nb\rc") == "a\\nb\\rc"

    def test_nul_is_removed(self):
        assert escape("a\0b") == "ab"

    @pytest.mark.parametrize(
        "value",
        ['plain', 'say "hi"', 'mixed\\"and"', "multi\nline\r\n", "\0\"\0"],
    )
    def test_idempotent(self, value):
        once = escape(value)
        assert escape(once) == once

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("tail\\", "tail\\\\"), ("a\\\\", "a\\\\\\\\"), ("a\\b\\", "a\\b\\\\")],
    )
    def test_trailing_backslash_run_is_doubled(self, value, expected):
        assert escape(value) == expected

    def test_unicode_passes_through(self):
        assert escape("ノード → 節点") == "ノード → 節点"


class TestEscapeComment:
    def test_block_terminator_is_broken_up(self):
        escaped = escape_comment("a */ b", CommentKind.BLOCK)
        assert escaped == "a *\u200b/ b"
        assert "*/" not in escaped

    def test_every_terminator_is_broken_up(self):
        assert "*/" not in escape_comment("*/*/**//", "Block")

    @pytest.mark.parametrize("kind", [CommentKind.SLASH, CommentKind.MACRO])
    def test_line_comments_keep_terminator(self, kind):
        assert escape_comment("a */ b", kind) == "a */ b"

    def test_nul_is_removed(self):
        assert escape_comment("a\0b", CommentKind.BLOCK) == "ab"
        assert escape_comment("a\0b") == "ab"
