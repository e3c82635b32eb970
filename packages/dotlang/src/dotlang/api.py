"""Text <-> model round trips in one call."""

from dotlang.convert.from_model import FromModelOptions, from_model
from dotlang.convert.to_model import ToModelOptions, to_model
from dotlang.models.graphs import RootGraph
from dotlang.parser.parser import ParseOptions, parse
from dotlang.printer.printer import PrintOptions, stringify


def from_dot(
    text: str,
    parse_options: ParseOptions | None = None,
    convert_options: ToModelOptions | None = None,
) -> RootGraph:
    """Parse a DOT document and build its graph model."""
    return to_model(parse(text, parse_options), convert_options)


def to_dot(
    model: RootGraph,
    convert_options: FromModelOptions | None = None,
    print_options: PrintOptions | None = None,
) -> str:
    """Render a graph model as DOT text."""
    return stringify(from_model(model, convert_options), print_options)


__all__ = ["from_dot", "parse", "stringify", "to_dot"]
