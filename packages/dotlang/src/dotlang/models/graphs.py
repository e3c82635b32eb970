from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from typing import Any, TypeVar

from dotlang.ast.nodes import AttributeListKind
from dotlang.models.attributes import Attributes, AttributeList, AttributesLike
from dotlang.models.context import ModelsContext
from dotlang.models.nodes import Edge, Node

T = TypeVar("T")


@dataclass(frozen=True)
class GraphCommonAttributes:
    graph: AttributeList
    node: AttributeList
    edge: AttributeList


class GraphBase(Attributes):
    """State shared by root graphs and subgraphs.

    The graph itself is the attribute map for its ``key = value`` statements;
    ``attributes.graph/node/edge`` hold the ``graph [...]``, ``node [...]`` and
    ``edge [...]`` defaults.
    """

    def __init__(
        self,
        id: str | None = None,
        attributes: AttributesLike | None = None,
        *,
        models: ModelsContext | None = None,
    ):
        super().__init__(attributes)
        self.id = id
        self.comment: str | None = None
        self.attributes = GraphCommonAttributes(
            graph=AttributeList(AttributeListKind.GRAPH),
            node=AttributeList(AttributeListKind.NODE),
            edge=AttributeList(AttributeListKind.EDGE),
        )
        self._models = models or DEFAULT_MODELS_CONTEXT
        self._nodes: dict[str, Node] = {}
        # dicts keep insertion order; values are unused.
        self._edges: dict[Edge, None] = {}
        self._subgraphs: dict[Subgraph, None] = {}

    @property
    def models(self) -> ModelsContext:
        return self._models

    @property
    def nodes(self) -> list[Node]:
        return list(self._nodes.values())

    @property
    def edges(self) -> list[Edge]:
        return list(self._edges)

    @property
    def subgraphs(self) -> list[Subgraph]:
        return list(self._subgraphs)

    def with_models(self, **overrides: type) -> None:
        self._models = replace(self._models, **overrides)

    # --- Nodes ---

    def add_node(self, node: Node) -> None:
        self._nodes[node.id] = node

    def exist_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def remove_node(self, node: Node | str) -> None:
        self._nodes.pop(node if isinstance(node, str) else node.id, None)

    def create_node(self, id: str, attributes: AttributesLike | None = None) -> Node:
        node = self._models.node(id, attributes)
        self.add_node(node)
        return node

    def get_node(self, node_id: str) -> Node | None:
        return self._nodes.get(node_id)

    def node(
        self,
        id: str | Mapping[str, Any],
        attributes: AttributesLike | None = None,
        callback: Callable[[Node], None] | None = None,
    ) -> Node | None:
        """Get or create node ``id``, or merge a mapping into the node defaults."""
        if isinstance(id, Mapping):
            self.attributes.node.apply(id)
            return None
        node = self.get_node(id) or self.create_node(id)
        if attributes is not None:
            node.attributes.apply(attributes)
        return _run_callback(node, callback)

    # --- Edges ---

    def add_edge(self, edge: Edge) -> None:
        self._edges[edge] = None

    def exist_edge(self, edge: Edge) -> bool:
        return edge in self._edges

    def remove_edge(self, edge: Edge) -> None:
        self._edges.pop(edge, None)

    def create_edge(self, targets: Iterable[Any], attributes: AttributesLike | None = None) -> Edge:
        edge = self._models.edge(targets, attributes)
        self.add_edge(edge)
        return edge

    def edge(
        self,
        targets: Iterable[Any] | Mapping[str, Any],
        attributes: AttributesLike | None = None,
        callback: Callable[[Edge], None] | None = None,
    ) -> Edge | None:
        """Create an edge between ``targets``, or merge a mapping into the edge defaults."""
        if isinstance(targets, Mapping):
            self.attributes.edge.apply(targets)
            return None
        return _run_callback(self.create_edge(targets, attributes), callback)

    # --- Subgraphs ---

    def add_subgraph(self, subgraph: Subgraph) -> None:
        self._subgraphs[subgraph] = None

    def exist_subgraph(self, subgraph: Subgraph) -> bool:
        return subgraph in self._subgraphs

    def remove_subgraph(self, subgraph: Subgraph) -> None:
        self._subgraphs.pop(subgraph, None)

    def create_subgraph(
        self, id: str | None = None, attributes: AttributesLike | None = None
    ) -> Subgraph:
        subgraph = self._models.subgraph(id, attributes, models=self._models)
        self.add_subgraph(subgraph)
        return subgraph

    def get_subgraph(self, subgraph_id: str) -> Subgraph | None:
        for subgraph in self._subgraphs:
            if subgraph.id == subgraph_id:
                return subgraph
        return None

    def subgraph(
        self,
        id: str | Mapping[str, Any] | None = None,
        attributes: AttributesLike | None = None,
        callback: Callable[[Subgraph], None] | None = None,
    ) -> Subgraph:
        """Get or create subgraph ``id``; a mapping or no id creates an anonymous one."""
        if isinstance(id, Mapping):
            id, attributes = None, id
        subgraph = self.get_subgraph(id) if id is not None else None
        if subgraph is None:
            subgraph = self.create_subgraph(id)
        if attributes is not None:
            subgraph.apply(attributes)
        return _run_callback(subgraph, callback)

    def graph(self, attributes: AttributesLike) -> None:
        """Merge ``attributes`` into the ``graph [...]`` defaults."""
        self.attributes.graph.apply(attributes)


class Subgraph(GraphBase):
    def is_cluster(self) -> bool:
        return self.id is not None and (self.id == "cluster" or self.id.startswith("cluster_"))

    def __repr__(self) -> str:
        return f"Subgraph(id={self.id!r})"


class RootGraph(GraphBase):
    def __init__(
        self,
        id: str | None = None,
        attributes: AttributesLike | None = None,
        *,
        directed: bool,
        strict: bool = False,
        models: ModelsContext | None = None,
    ):
        super().__init__(id, attributes, models=models)
        self.directed = directed
        self.strict = strict

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(id={self.id!r}, directed={self.directed!r}, "
            f"strict={self.strict!r})"
        )


class Digraph(RootGraph):
    def __init__(
        self,
        id: str | None = None,
        attributes: AttributesLike | None = None,
        *,
        strict: bool = False,
        models: ModelsContext | None = None,
    ):
        super().__init__(id, attributes, directed=True, strict=strict, models=models)


class Graph(RootGraph):
    def __init__(
        self,
        id: str | None = None,
        attributes: AttributesLike | None = None,
        *,
        strict: bool = False,
        models: ModelsContext | None = None,
    ):
        super().__init__(id, attributes, directed=False, strict=strict, models=models)


def _run_callback(model: T, callback: Callable[[T], None] | None) -> T:
    if callback is not None:
        callback(model)
    return model


DEFAULT_MODELS_CONTEXT = ModelsContext(
    digraph=Digraph,
    graph=Graph,
    subgraph=Subgraph,
    node=Node,
    edge=Edge,
)


def create_models_context(**overrides: type) -> ModelsContext:
    """Return the default context with some classes swapped out."""
    return replace(DEFAULT_MODELS_CONTEXT, **overrides)
