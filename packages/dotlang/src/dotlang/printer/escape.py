"""Escaping applied to every quoted literal and comment the printer emits."""

from dotlang.ast.nodes import CommentKind

ZERO_WIDTH_SPACE = "\u200b"


def escape(value: str) -> str:
    """Make ``value`` safe to place between double quotes.

    CR and LF become ``\\r`` / ``\\n`` and NUL characters are dropped. A quote
    gets a backslash unless an odd run of backslashes already precedes it, so
    an escaped quote is not escaped twice. A trailing run of backslashes is
    doubled; the lexer halves the run in front of a closing quote.
    """
    result: list[str] = []
    backslashes = 0
    for char in value:
        if char == "\0":
            continue
        if char == "\r":
            result.append("\\r")
        elif char == "\n":
            result.append("\\n")
        elif char == '"':
            if backslashes % 2 == 0:
                result.append("\\")
            result.append('"')
        else:
            result.append(char)
        backslashes = backslashes + 1 if char == "\\" else 0
    result.append("\\" * backslashes)
    return "".join(result)


def escape_comment(value: str, kind: CommentKind | str = CommentKind.SLASH) -> str:
    """Strip NULs and, for block comments, break up any ``*/`` terminator."""
    cleaned = value.replace("\0", "")
    if CommentKind(kind) is CommentKind.BLOCK:
        return cleaned.replace("*/", f"*{ZERO_WIDTH_SPACE}/")
    return cleaned
