from dotlang.api import from_dot, to_dot
from dotlang.convert import FromModelOptions, ToModelOptions, from_model, to_model
from dotlang.errors import (
    ConversionError,
    DotError,
    DotParseError,
    DotSyntaxError,
    EdgeTargetError,
    NodeCountExceededError,
    ValidationError,
)
from dotlang.models import (
    Digraph,
    Edge,
    ForwardRef,
    Graph,
    ModelsContext,
    Node,
    RootGraph,
    Subgraph,
    create_models_context,
    digraph,
    graph,
    strict_digraph,
    strict_graph,
)
from dotlang.parser import ParseOptions, parse
from dotlang.printer import PrintOptions, stringify
from dotlang.validation import ValidationResult, validate_model

__all__ = [
    "ConversionError",
    "Digraph",
    "DotError",
    "DotParseError",
    "DotSyntaxError",
    "Edge",
    "EdgeTargetError",
    "ForwardRef",
    "FromModelOptions",
    "Graph",
    "ModelsContext",
    "Node",
    "NodeCountExceededError",
    "ParseOptions",
    "PrintOptions",
    "RootGraph",
    "Subgraph",
    "ToModelOptions",
    "ValidationError",
    "ValidationResult",
    "create_models_context",
    "digraph",
    "from_dot",
    "from_model",
    "graph",
    "parse",
    "strict_digraph",
    "strict_graph",
    "stringify",
    "to_dot",
    "to_model",
    "validate_model",
]
