"""Model -> AST conversion."""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Any

from dotlang.ast.builder import DEFAULT_MAX_AST_NODES, Builder, BuilderOptions
from dotlang.ast.nodes import (
    ASTNode,
    Attribute,
    AttributeList as AttributeListNode,
    ClusterStatement,
    Comment,
    CommentKind,
    Dot,
    Edge as EdgeNode,
    EdgeTarget as EdgeTargetNode,
    Literal,
    Node as NodeNode,
    NodeRef,
    Quoting,
    Subgraph as SubgraphNode,
)
from dotlang.errors import ConversionError
from dotlang.models.attributes import AttributeList, AttributeValue
from dotlang.models.graphs import GraphBase, RootGraph, Subgraph
from dotlang.models.nodes import Edge, Node, NodeRefLike
from dotlang.parser.parser import KEYWORDS

logger = logging.getLogger(__name__)

_HTML_LIKE = re.compile(r"^<.+>$", re.DOTALL)
_BARE_ID = re.compile(r"^[A-Za-z_\x80-\U0010ffff][A-Za-z0-9_\x80-\U0010ffff]*$")
_NUMERAL = re.compile(r"^-?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?)$")


@dataclass
class FromModelOptions:
    comment_kind: CommentKind = CommentKind.SLASH
    max_ast_nodes: int = DEFAULT_MAX_AST_NODES


class FromModelConverter:
    def __init__(self, options: FromModelOptions | None = None):
        self.options = options or FromModelOptions()

    def convert(self, model: Any) -> ASTNode:
        builder = Builder(BuilderOptions(max_ast_nodes=self.options.max_ast_nodes))
        return _Conversion(builder, CommentKind(self.options.comment_kind)).convert(model)


class _Conversion:
    """One conversion run; owns the builder and therefore the node budget."""

    def __init__(self, builder: Builder, comment_kind: CommentKind):
        self.builder = builder
        self.comment_kind = comment_kind

    def convert(self, model: Any) -> ASTNode:
        for model_type, converter in _CONVERTERS:
            if isinstance(model, model_type):
                return converter(self, model)
        raise ConversionError(f"Cannot convert {type(model).__name__} to an AST node")

    def root_graph(self, model: RootGraph) -> Dot:
        logger.debug(
            "Converting %s %r with %d nodes and %d edges",
            "digraph" if model.directed else "graph",
            model.id,
            len(model.nodes),
            len(model.edges),
        )
        children: list[Any] = []
        if model.comment:
            children.append(self.comment(model.comment))
        children.append(
            self.builder.graph(
                self.cluster_children(model),
                directed=model.directed,
                strict=model.strict,
                id=self.quoted(model.id) if model.id is not None else None,
            )
        )
        return self.builder.dot(children)

    def subgraph(self, model: Subgraph) -> SubgraphNode:
        return self.builder.subgraph(
            self.cluster_children(model),
            self.quoted(model.id) if model.id is not None else None,
        )

    def node(self, model: Node) -> NodeNode:
        return self.builder.node(self.quoted(model.id), self.attributes(model.attributes.values))

    def edge(self, model: Edge) -> EdgeNode:
        return self.builder.edge(
            [self.edge_target(target) for target in model.targets],
            self.attributes(model.attributes.values),
        )

    def attribute_list(self, model: AttributeList) -> AttributeListNode:
        return self.builder.attribute_list(model.kind, self.attributes(model.values))

    def cluster_children(self, model: GraphBase) -> list[ClusterStatement]:
        return list(self._iter_cluster_children(model))

    def _iter_cluster_children(self, model: GraphBase) -> Iterator[ClusterStatement]:
        for key, value in model.values:
            yield self.attribute(key, value)
        defaults = model.attributes
        for attributes in (defaults.graph, defaults.edge, defaults.node):
            if attributes.size > 0:
                yield from self._with_comment(attributes.comment, attributes)
        for node in model.nodes:
            yield from self._with_comment(node.comment, node)
        for subgraph in model.subgraphs:
            yield from self._with_comment(subgraph.comment, subgraph)
        for edge in model.edges:
            yield from self._with_comment(edge.comment, edge)

    def _with_comment(self, comment: str | None, model: Any) -> Iterator[ClusterStatement]:
        if comment:
            yield self.comment(comment)
        yield self.convert(model)

    def edge_target(self, target: Any) -> EdgeTargetNode:
        if isinstance(target, tuple):
            return self.builder.node_ref_group([self.node_ref(member) for member in target])
        return self.node_ref(target)

    def node_ref(self, target: NodeRefLike) -> NodeRef:
        if isinstance(target, Node):
            return self.builder.node_ref(self.quoted(target.id))
        return self.builder.node_ref(
            self.quoted(target.id),
            self.quoted(target.port) if target.port else None,
            self.quoted(target.compass) if target.compass else None,
        )

    def attributes(self, values: list[tuple[str, AttributeValue]]) -> list[Attribute]:
        return [self.attribute(key, value) for key, value in values]

    def attribute(self, key: str, value: AttributeValue) -> Attribute:
        bare = _BARE_ID.match(key) and key.lower() not in KEYWORDS
        key_quoting = Quoting.BARE if bare else Quoting.QUOTED
        return self.builder.attribute(
            self.builder.literal(key, key_quoting), self.attribute_value(value)
        )

    def attribute_value(self, value: AttributeValue) -> Literal:
        if isinstance(value, bool):
            return self.builder.literal("true" if value else "false", Quoting.BARE)
        if isinstance(value, (int, float)):
            text = str(value)
            return self.builder.literal(text, Quoting.BARE if _NUMERAL.match(text) else Quoting.QUOTED)
        text = str(value)
        trimmed = text.strip()
        if _HTML_LIKE.match(trimmed):
            return self.builder.literal(trimmed[1:-1], Quoting.HTML)
        return self.builder.literal(text, Quoting.QUOTED)

    def quoted(self, value: str) -> Literal:
        return self.builder.literal(value, Quoting.QUOTED)

    def comment(self, value: str) -> Comment:
        return self.builder.comment(value, self.comment_kind)


# Checked in order; RootGraph before its GraphBase siblings.
_CONVERTERS: list[tuple[type, Callable[[_Conversion, Any], ASTNode]]] = [
    (RootGraph, _Conversion.root_graph),
    (Subgraph, _Conversion.subgraph),
    (Node, _Conversion.node),
    (Edge, _Conversion.edge),
    (AttributeList, _Conversion.attribute_list),
]


def from_model(model: Any, options: FromModelOptions | None = None) -> ASTNode:
    """Convert a graph model (or one of its parts) into an AST."""
    return FromModelConverter(options).convert(model)
