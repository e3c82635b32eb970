from dotlang.models.attributes import (
    AttributeList,
    Attributes,
    AttributesGroup,
    AttributesLike,
    AttributeValue,
)
from dotlang.models.builders import digraph, graph, strict_digraph, strict_graph
from dotlang.models.context import ModelsContext
from dotlang.models.graphs import (
    DEFAULT_MODELS_CONTEXT,
    Digraph,
    Graph,
    GraphBase,
    GraphCommonAttributes,
    RootGraph,
    Subgraph,
    create_models_context,
)
from dotlang.models.nodes import (
    Compass,
    Edge,
    EdgeTarget,
    ForwardRef,
    Node,
    NodeRefLike,
    is_compass,
    parse_node_ref,
    to_edge_targets,
)

__all__ = [
    "AttributeList",
    "AttributeValue",
    "Attributes",
    "AttributesGroup",
    "AttributesLike",
    "Compass",
    "DEFAULT_MODELS_CONTEXT",
    "Digraph",
    "Edge",
    "EdgeTarget",
    "ForwardRef",
    "Graph",
    "GraphBase",
    "GraphCommonAttributes",
    "ModelsContext",
    "Node",
    "NodeRefLike",
    "RootGraph",
    "Subgraph",
    "create_models_context",
    "digraph",
    "graph",
    "is_compass",
    "parse_node_ref",
    "strict_digraph",
    "strict_graph",
    "to_edge_targets",
]
