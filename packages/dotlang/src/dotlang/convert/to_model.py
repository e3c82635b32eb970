"""AST -> model conversion."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from dotlang.ast.nodes import (
    ASTType,
    Attribute,
    AttributeListKind,
    ClusterStatement,
    Comment,
    CommentKind,
    Dot,
    Edge as EdgeNode,
    FileRange,
    Graph as GraphNode,
    Literal,
    Node as NodeNode,
    NodeRef,
    Quoting,
    Subgraph as SubgraphNode,
)
from dotlang.errors import ConversionError
from dotlang.models.attributes import AttributeValue
from dotlang.models.context import ModelsContext
from dotlang.models.graphs import DEFAULT_MODELS_CONTEXT, GraphBase, RootGraph, Subgraph
from dotlang.models.nodes import Edge, ForwardRef, Node

logger = logging.getLogger(__name__)


@dataclass
class ToModelOptions:
    models: ModelsContext | None = None


class CommentHolder:
    """Holds the last free-standing comment until the next statement claims it.

    A block comment belongs to a statement starting on the line after it
    ends. A line comment's range already includes its newline, so it belongs
    to a statement starting on the line where the range ends.
    """

    def __init__(self):
        self.comment: Comment | None = None

    def set(self, comment: Comment) -> None:
        self.comment = comment

    def reset(self) -> None:
        self.comment = None

    def apply(self, model: Any, location: FileRange | None) -> None:
        comment, self.comment = self.comment, None
        if comment is None or comment.location is None or location is None:
            return
        end_line = comment.location.end.line
        start_line = location.start.line
        if comment.kind is CommentKind.BLOCK:
            adjacent = end_line == start_line - 1
        else:
            adjacent = end_line == start_line
        if adjacent:
            model.comment = comment.value


class ToModelConverter:
    def __init__(self, options: ToModelOptions | None = None):
        self.options = options or ToModelOptions()
        self.models = self.options.models or DEFAULT_MODELS_CONTEXT

    def convert(self, ast: Any) -> Any:
        converter = _CONVERTERS.get(getattr(ast, "type", None))
        if converter is None:
            raise ConversionError(f"Cannot convert {type(ast).__name__} to a model")
        return converter(self, ast)

    def dot(self, ast: Dot) -> RootGraph:
        holder = CommentHolder()
        for child in ast.children:
            if child.type is ASTType.COMMENT:
                holder.set(child)
            elif child.type is ASTType.GRAPH:
                root = self.graph(child)
                holder.apply(root, child.location)
                return root
        raise ConversionError("Dot contains no graph")

    def graph(self, ast: GraphNode) -> RootGraph:
        factory = self.models.digraph if ast.directed else self.models.graph
        root = factory(
            ast.id.value if ast.id is not None else None,
            strict=ast.strict,
            models=self.models,
        )
        logger.debug("Building %s model %r", "digraph" if ast.directed else "graph", root.id)
        self.apply_statements(root, ast.children)
        return root

    def subgraph(self, ast: SubgraphNode) -> Subgraph:
        subgraph = self.models.subgraph(
            ast.id.value if ast.id is not None else None, models=self.models
        )
        self.apply_statements(subgraph, ast.children)
        return subgraph

    def node(self, ast: NodeNode) -> Node:
        return self.models.node(ast.id.value, collect_attributes(ast.children))

    def edge(self, ast: EdgeNode) -> Edge:
        return self.models.edge(_edge_targets(ast), collect_attributes(ast.children))

    def apply_statements(self, graph: GraphBase, statements: Iterable[ClusterStatement]) -> None:
        holder = CommentHolder()
        for statement in statements:
            kind = statement.type
            if kind is ASTType.SUBGRAPH:
                subgraph_id = statement.id.value if statement.id is not None else None
                subgraph = graph.subgraph(subgraph_id)
                self.apply_statements(subgraph, statement.children)
                holder.apply(subgraph, statement.location)
            elif kind is ASTType.ATTRIBUTE:
                graph.set(statement.key.value, attribute_value(statement.value))
                holder.reset()
            elif kind is ASTType.NODE:
                node = graph.node(statement.id.value, collect_attributes(statement.children))
                holder.apply(node, statement.location)
            elif kind is ASTType.EDGE:
                edge = graph.create_edge(
                    _edge_targets(statement), collect_attributes(statement.children)
                )
                holder.apply(edge, statement.location)
            elif kind is ASTType.ATTRIBUTE_LIST:
                _DEFAULTS[statement.kind](graph, collect_attributes(statement.children))
                holder.reset()
            elif kind is ASTType.COMMENT:
                holder.set(statement)


_DEFAULTS = {
    AttributeListKind.GRAPH: GraphBase.graph,
    AttributeListKind.NODE: GraphBase.node,
    AttributeListKind.EDGE: GraphBase.edge,
}


def attribute_value(literal: Literal) -> AttributeValue:
    if literal.quoted is Quoting.HTML:
        return f"<{literal.value}>"
    return literal.value


def collect_attributes(children: Iterable[Attribute | Comment]) -> dict[str, AttributeValue]:
    """Reduce attribute children to a map; a repeated key keeps its last value."""
    return {
        child.key.value: attribute_value(child.value)
        for child in children
        if child.type is ASTType.ATTRIBUTE
    }


def _forward_ref(ref: NodeRef) -> ForwardRef:
    return ForwardRef(
        ref.id.value,
        ref.port.value if ref.port is not None else None,
        ref.compass.value if ref.compass is not None else None,
    )


def _edge_targets(ast: EdgeNode) -> list[Any]:
    targets: list[Any] = []
    for target in ast.targets:
        if target.type is ASTType.NODE_REF_GROUP:
            targets.append(tuple(_forward_ref(ref) for ref in target.children))
        else:
            targets.append(_forward_ref(target))
    return targets


_CONVERTERS = {
    ASTType.DOT: ToModelConverter.dot,
    ASTType.GRAPH: ToModelConverter.graph,
    ASTType.SUBGRAPH: ToModelConverter.subgraph,
    ASTType.NODE: ToModelConverter.node,
    ASTType.EDGE: ToModelConverter.edge,
}


def to_model(ast: Any, options: ToModelOptions | None = None) -> Any:
    """Convert a ``Dot``, ``Graph``, ``Subgraph``, ``Node`` or ``Edge`` AST into a model."""
    return ToModelConverter(options).convert(ast)
