"""AST node types for the DOT language.

Every node is a frozen dataclass tagged with a class-level ``type`` so code
can dispatch on ``node.type`` instead of on the class hierarchy. Child
collections are tuples; a built tree is never mutated.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

from dotlang.errors import EdgeTargetError


class ASTType(str, Enum):
    LITERAL = "Literal"
    DOT = "Dot"
    GRAPH = "Graph"
    SUBGRAPH = "Subgraph"
    NODE = "Node"
    EDGE = "Edge"
    NODE_REF = "NodeRef"
    NODE_REF_GROUP = "NodeRefGroup"
    ATTRIBUTE = "Attribute"
    ATTRIBUTE_LIST = "AttributeList"
    COMMENT = "Comment"


class Quoting(str, Enum):
    """How a literal token is written."""

    BARE = "bare"
    QUOTED = "quoted"
    HTML = "html"


class AttributeListKind(str, Enum):
    GRAPH = "Graph"
    NODE = "Node"
    EDGE = "Edge"


class CommentKind(str, Enum):
    BLOCK = "Block"
    SLASH = "Slash"
    MACRO = "Macro"


@dataclass(slots=True, frozen=True)
class FilePosition:
    offset: float
    line: float
    column: float


@dataclass(slots=True, frozen=True)
class FileRange:
    start: FilePosition
    end: FilePosition


_NAN_POSITION = FilePosition(offset=math.nan, line=math.nan, column=math.nan)

# Location given to nodes built without a location source.
UNKNOWN_LOCATION = FileRange(start=_NAN_POSITION, end=_NAN_POSITION)


def _location() -> FileRange | None:
    return field(default=None, compare=False, repr=False, kw_only=True)


@dataclass(slots=True, frozen=True)
class Literal:
    type: ClassVar[ASTType] = ASTType.LITERAL

    value: str
    quoted: Quoting = Quoting.BARE
    location: FileRange | None = _location()


@dataclass(slots=True, frozen=True)
class Comment:
    type: ClassVar[ASTType] = ASTType.COMMENT

    value: str
    kind: CommentKind = CommentKind.SLASH
    location: FileRange | None = _location()


@dataclass(slots=True, frozen=True)
class Attribute:
    type: ClassVar[ASTType] = ASTType.ATTRIBUTE

    key: Literal
    value: Literal
    location: FileRange | None = _location()


@dataclass(slots=True, frozen=True)
class AttributeList:
    type: ClassVar[ASTType] = ASTType.ATTRIBUTE_LIST

    kind: AttributeListKind
    children: tuple[Attribute | Comment, ...] = ()
    location: FileRange | None = _location()


@dataclass(slots=True, frozen=True)
class NodeRef:
    type: ClassVar[ASTType] = ASTType.NODE_REF

    id: Literal
    port: Literal | None = None
    compass: Literal | None = None
    location: FileRange | None = _location()


@dataclass(slots=True, frozen=True)
class NodeRefGroup:
    type: ClassVar[ASTType] = ASTType.NODE_REF_GROUP

    children: tuple[NodeRef, ...] = ()
    location: FileRange | None = _location()


EdgeTarget = Union[NodeRef, NodeRefGroup]


@dataclass(slots=True, frozen=True)
class Node:
    type: ClassVar[ASTType] = ASTType.NODE

    id: Literal
    children: tuple[Attribute | Comment, ...] = ()
    location: FileRange | None = _location()


@dataclass(slots=True, frozen=True)
class Edge:
    type: ClassVar[ASTType] = ASTType.EDGE

    targets: tuple[EdgeTarget, ...]
    children: tuple[Attribute | Comment, ...] = ()
    location: FileRange | None = _location()

    def __post_init__(self) -> None:
        if len(self.targets) < 2:
            raise EdgeTargetError(
                f"Edge requires at least 2 targets, got {len(self.targets)}.",
                index=len(self.targets),
            )


@dataclass(slots=True, frozen=True)
class Subgraph:
    type: ClassVar[ASTType] = ASTType.SUBGRAPH

    id: Literal | None = None
    children: tuple[ClusterStatement, ...] = ()
    location: FileRange | None = _location()


@dataclass(slots=True, frozen=True)
class Graph:
    type: ClassVar[ASTType] = ASTType.GRAPH

    directed: bool
    strict: bool = False
    id: Literal | None = None
    children: tuple[ClusterStatement, ...] = ()
    location: FileRange | None = _location()


@dataclass(slots=True, frozen=True)
class Dot:
    type: ClassVar[ASTType] = ASTType.DOT

    children: tuple[Graph | Comment, ...] = ()
    location: FileRange | None = _location()


ClusterStatement = Union[Attribute, AttributeList, Edge, Node, Subgraph, Comment]

ASTNode = Union[
    Literal,
    Dot,
    Graph,
    Subgraph,
    Node,
    Edge,
    NodeRef,
    NodeRefGroup,
    Attribute,
    AttributeList,
    Comment,
]
