from dotlang.parser.lexer import SourceMap, Token, lex
from dotlang.parser.parser import DotParser, ParseOptions, StartRule, parse

__all__ = [
    "DotParser",
    "ParseOptions",
    "SourceMap",
    "StartRule",
    "Token",
    "lex",
    "parse",
]
