from dotlang.ast.builder import (
    Builder,
    BuilderOptions,
    NodeCounter,
    create_element_factory,
)
from dotlang.ast.nodes import (
    UNKNOWN_LOCATION,
    ASTNode,
    ASTType,
    Attribute,
    AttributeList,
    AttributeListKind,
    ClusterStatement,
    Comment,
    CommentKind,
    Dot,
    Edge,
    EdgeTarget,
    FilePosition,
    FileRange,
    Graph,
    Literal,
    Node,
    NodeRef,
    NodeRefGroup,
    Quoting,
    Subgraph,
)

__all__ = [
    "ASTNode",
    "ASTType",
    "Attribute",
    "AttributeList",
    "AttributeListKind",
    "Builder",
    "BuilderOptions",
    "ClusterStatement",
    "Comment",
    "CommentKind",
    "Dot",
    "Edge",
    "EdgeTarget",
    "FilePosition",
    "FileRange",
    "Graph",
    "Literal",
    "Node",
    "NodeCounter",
    "NodeRef",
    "NodeRefGroup",
    "Quoting",
    "Subgraph",
    "UNKNOWN_LOCATION",
    "create_element_factory",
]
