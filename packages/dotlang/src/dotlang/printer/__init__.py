from dotlang.printer.escape import escape, escape_comment
from dotlang.printer.printer import EndOfLine, IndentStyle, Printer, PrintOptions, stringify

__all__ = [
    "EndOfLine",
    "IndentStyle",
    "PrintOptions",
    "Printer",
    "escape",
    "escape_comment",
    "stringify",
]
