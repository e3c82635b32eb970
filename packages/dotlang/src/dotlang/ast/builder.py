"""Factory for AST nodes with defaults and a node-count cap."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any

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
    FileRange,
    Graph,
    Literal,
    Node,
    NodeRef,
    NodeRefGroup,
    Quoting,
    Subgraph,
)
from dotlang.errors import NodeCountExceededError

DEFAULT_MAX_AST_NODES = 100_000


@dataclass
class BuilderOptions:
    default_literal_quoted: Quoting = Quoting.QUOTED
    default_graph_strict: bool = False
    default_comment_kind: CommentKind = CommentKind.SLASH
    location_function: Callable[[], FileRange | None] | None = None
    # 0 disables the cap.
    max_ast_nodes: int = DEFAULT_MAX_AST_NODES


@dataclass
class NodeCounter:
    """Counts nodes created through a builder and enforces ``limit``."""

    limit: int = DEFAULT_MAX_AST_NODES
    count: int = 0

    def increment(self) -> None:
        if self.limit <= 0:
            return
        self.count += 1
        if self.count > self.limit:
            raise NodeCountExceededError(self.count, self.limit)

    def reset(self) -> None:
        self.count = 0


class Builder:
    """Creates AST nodes, filling in defaults and counting every node made.

    The counter is owned by whoever creates it: pass one in to share a budget
    between builders, or let each builder make its own.
    """

    def __init__(
        self,
        options: BuilderOptions | None = None,
        counter: NodeCounter | None = None,
    ):
        self.options = options or BuilderOptions()
        self.counter = counter or NodeCounter(limit=self.options.max_ast_nodes)

    def literal(
        self,
        value: str,
        quoted: Quoting | str | None = None,
        *,
        location: FileRange | None = None,
    ) -> Literal:
        mode = self.options.default_literal_quoted if quoted is None else Quoting(quoted)
        return self._make(Literal, location, value=str(value), quoted=mode)

    def comment(
        self,
        value: str,
        kind: CommentKind | str | None = None,
        *,
        location: FileRange | None = None,
    ) -> Comment:
        comment_kind = self.options.default_comment_kind if kind is None else CommentKind(kind)
        return self._make(Comment, location, value=value, kind=comment_kind)

    def attribute(
        self, key: Literal, value: Literal, *, location: FileRange | None = None
    ) -> Attribute:
        return self._make(Attribute, location, key=key, value=value)

    def attribute_list(
        self,
        kind: AttributeListKind | str,
        children: Iterable[Attribute | Comment] = (),
        *,
        location: FileRange | None = None,
    ) -> AttributeList:
        return self._make(
            AttributeList, location, kind=AttributeListKind(kind), children=tuple(children)
        )

    def node_ref(
        self,
        id: Literal,
        port: Literal | None = None,
        compass: Literal | None = None,
        *,
        location: FileRange | None = None,
    ) -> NodeRef:
        return self._make(NodeRef, location, id=id, port=port, compass=compass)

    def node_ref_group(
        self, children: Iterable[NodeRef], *, location: FileRange | None = None
    ) -> NodeRefGroup:
        return self._make(NodeRefGroup, location, children=tuple(children))

    def node(
        self,
        id: Literal,
        children: Iterable[Attribute | Comment] = (),
        *,
        location: FileRange | None = None,
    ) -> Node:
        return self._make(Node, location, id=id, children=tuple(children))

    def edge(
        self,
        targets: Iterable[EdgeTarget],
        children: Iterable[Attribute | Comment] = (),
        *,
        location: FileRange | None = None,
    ) -> Edge:
        return self._make(Edge, location, targets=tuple(targets), children=tuple(children))

    def subgraph(
        self,
        children: Iterable[ClusterStatement] = (),
        id: Literal | None = None,
        *,
        location: FileRange | None = None,
    ) -> Subgraph:
        return self._make(Subgraph, location, id=id, children=tuple(children))

    def graph(
        self,
        children: Iterable[ClusterStatement] = (),
        *,
        directed: bool,
        strict: bool | None = None,
        id: Literal | None = None,
        location: FileRange | None = None,
    ) -> Graph:
        strict_mode = self.options.default_graph_strict if strict is None else strict
        return self._make(
            Graph, location, directed=directed, strict=strict_mode, id=id, children=tuple(children)
        )

    def dot(
        self, children: Iterable[Graph | Comment] = (), *, location: FileRange | None = None
    ) -> Dot:
        return self._make(Dot, location, children=tuple(children))

    def create_element(self, type: ASTType | str, **props: Any) -> ASTNode:
        """Create a node by its type tag, e.g. ``create_element("Literal", value="a")``."""
        factory = _FACTORIES[ASTType(type)]
        return factory(self, **props)

    def _make(self, cls: type, location: FileRange | None, **props: Any) -> Any:
        self.counter.increment()
        return cls(**props, location=location if location is not None else self._location())

    def _location(self) -> FileRange:
        location_function = self.options.location_function
        if location_function is None:
            return UNKNOWN_LOCATION
        return location_function() or UNKNOWN_LOCATION


_FACTORIES: dict[ASTType, Callable[..., ASTNode]] = {
    ASTType.LITERAL: Builder.literal,
    ASTType.COMMENT: Builder.comment,
    ASTType.ATTRIBUTE: Builder.attribute,
    ASTType.ATTRIBUTE_LIST: Builder.attribute_list,
    ASTType.NODE_REF: Builder.node_ref,
    ASTType.NODE_REF_GROUP: Builder.node_ref_group,
    ASTType.NODE: Builder.node,
    ASTType.EDGE: Builder.edge,
    ASTType.SUBGRAPH: Builder.subgraph,
    ASTType.GRAPH: Builder.graph,
    ASTType.DOT: Builder.dot,
}


def create_element_factory(
    max_ast_nodes: int = DEFAULT_MAX_AST_NODES,
) -> Callable[..., ASTNode]:
    """Return a ``create_element`` bound to a fresh builder and counter."""
    return Builder(BuilderOptions(max_ast_nodes=max_ast_nodes)).create_element
