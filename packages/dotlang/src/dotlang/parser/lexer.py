import re
from bisect import bisect_right
from dataclasses import dataclass

from dotlang.ast.nodes import FilePosition, FileRange

DEFAULT_MAX_HTML_NESTING_DEPTH = 100


@dataclass(slots=True, frozen=True)
class Token:
    kind: str
    value: str
    position: int
    end: int


class GrammarError(ValueError):
    """Raw grammar failure with the offending source span."""

    def __init__(self, message: str, start: int, end: int):
        super().__init__(message)
        self.start = start
        self.end = end


SINGLE_CHAR_TOKENS = {
    "{": "LBRACE",
    "}": "RBRACE",
    "[": "LBRACKET",
    "]": "RBRACKET",
    "=": "EQUALS",
    ",": "COMMA",
    ";": "SEMICOLON",
    ":": "COLON",
    "+": "PLUS",
}

COMMENT_TOKENS = frozenset({"BLOCK_COMMENT", "SLASH_COMMENT", "MACRO_COMMENT"})

_NUMERAL = re.compile(r"-?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)")


class SourceMap:
    """Maps offsets in a source string to 1-based line/column positions."""

    def __init__(self, source: str):
        self._line_starts = [0]
        for match in re.finditer(r"\r\n|\r|\n", source):
            self._line_starts.append(match.end())

    def position(self, offset: int) -> FilePosition:
        line_index = bisect_right(self._line_starts, offset) - 1
        return FilePosition(
            offset=offset,
            line=line_index + 1,
            column=offset - self._line_starts[line_index] + 1,
        )

    def range(self, start: int, end: int) -> FileRange:
        return FileRange(start=self.position(start), end=self.position(end))


def lex(source: str, max_html_nesting_depth: int = DEFAULT_MAX_HTML_NESTING_DEPTH) -> list[Token]:
    tokens: list[Token] = []
    index = 0
    length = len(source)

    while index < length:
        char = source[index]
        if char.isspace():
            index += 1
            continue

        if source.startswith("//", index):
            value, end = _read_line_comment(source, index + 2)
            tokens.append(Token("SLASH_COMMENT", value, index, end))
            index = end
            continue

        if source.startswith("/*", index):
            close = source.find("*/", index + 2)
            if close == -1:
                raise GrammarError("Unterminated block comment", index, length)
            tokens.append(Token("BLOCK_COMMENT", source[index + 2 : close], index, close + 2))
            index = close + 2
            continue

        if char == "#" and _at_line_start(source, index):
            value, end = _read_line_comment(source, index + 1)
            tokens.append(Token("MACRO_COMMENT", value, index, end))
            index = end
            continue

        if char == '"':
            value, end = _read_string(source, index)
            tokens.append(Token("STRING", value, index, end))
            index = end
            continue

        if char == "<":
            value, end = _read_html(source, index, max_html_nesting_depth)
            tokens.append(Token("HTML", value, index, end))
            index = end
            continue

        if source.startswith("->", index) or source.startswith("--", index):
            tokens.append(Token("EDGEOP", source[index : index + 2], index, index + 2))
            index += 2
            continue

        token_kind = SINGLE_CHAR_TOKENS.get(char)
        if token_kind is not None:
            tokens.append(Token(token_kind, char, index, index + 1))
            index += 1
            continue

        numeral = _NUMERAL.match(source, index)
        if numeral is not None:
            tokens.append(Token("ID", numeral.group(), index, numeral.end()))
            index = numeral.end()
            continue

        if _is_identifier_start(char):
            value, end = _read_identifier(source, index)
            tokens.append(Token("ID", value, index, end))
            index = end
            continue

        raise GrammarError(f"Unexpected character {char!r}", index, index + 1)

    tokens.append(Token("EOF", "", length, length))
    return tokens


def _at_line_start(source: str, index: int) -> bool:
    line_start = max(source.rfind("\n", 0, index), source.rfind("\r", 0, index)) + 1
    return source[line_start:index].strip() == ""


def _read_line_comment(source: str, index: int) -> tuple[str, int]:
    """Read to the end of the line; the returned end includes the newline."""
    end = index
    while end < len(source) and source[end] not in "\r\n":
        end += 1
    value = source[index:end]
    if source.startswith("\r\n", end):
        return value, end + 2
    if end < len(source):
        return value, end + 1
    return value, end


def _read_string(source: str, index: int) -> tuple[str, int]:
    start = index
    index += 1
    result: list[str] = []

    while index < len(source):
        char = source[index]
        if char == '"':
            return "".join(result), index + 1
        if char == "\\" and index + 1 < len(source):
            run_end = index
            while run_end < len(source) and source[run_end] == "\\":
                run_end += 1
            run = run_end - index
            # An even run right before the closing quote is halved.
            if run % 2 == 0 and source.startswith('"', run_end):
                result.append("\\" * (run // 2))
                return "".join(result), run_end + 1
            following = source[index + 1]
            if following == '"':
                result.append('"')
                index += 2
                continue
            if following == "\\":
                result.append("\\\\")
                index += 2
                continue
            if following == "\n":
                index += 2
                continue
            if source.startswith("\r\n", index + 1):
                index += 3
                continue
        result.append(char)
        index += 1

    raise GrammarError("Unterminated string literal", start, len(source))


def _read_html(source: str, index: int, max_depth: int) -> tuple[str, int]:
    start = index
    depth = 0

    while index < len(source):
        char = source[index]
        if char == "<":
            depth += 1
            if depth > max_depth:
                raise GrammarError(
                    f"HTML nesting depth exceeds maximum allowed depth of {max_depth}",
                    start,
                    index + 1,
                )
        elif char == ">":
            depth -= 1
            if depth == 0:
                return source[start + 1 : index], index + 1
        index += 1

    raise GrammarError("Unterminated HTML-like string", start, len(source))


def _read_identifier(source: str, index: int) -> tuple[str, int]:
    start = index
    while index < len(source) and _is_identifier_part(source[index]):
        index += 1
    return source[start:index], index


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char == "_" or ord(char) >= 0x80


def _is_identifier_part(char: str) -> bool:
    return _is_identifier_start(char) or char.isdigit()
