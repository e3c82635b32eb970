"""Render AST nodes back to DOT text.

Rendering is a chain of generators. Renderers yield string fragments plus a
single ``_EOL`` marker for line breaks; each indentation level rewrites the
marker into "marker, then padding", and :meth:`Printer.chunks` finally turns
the marker into the configured newline. Nothing is buffered beyond one
fragment, so large documents stream.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Union

from dotlang.ast.nodes import (
    ASTNode,
    ASTType,
    Attribute,
    AttributeList,
    Comment,
    CommentKind,
    Dot,
    Edge,
    Graph,
    Literal,
    Node,
    NodeRef,
    NodeRefGroup,
    Quoting,
    Subgraph,
)
from dotlang.printer.escape import escape, escape_comment


class IndentStyle(str, Enum):
    SPACE = "space"
    TAB = "tab"


class EndOfLine(str, Enum):
    LF = "lf"
    CRLF = "crlf"


@dataclass
class PrintOptions:
    indent_style: IndentStyle | str = IndentStyle.SPACE
    indent_size: int = 2
    end_of_line: EndOfLine | str = EndOfLine.LF


class _Marker:
    __slots__ = ()

    def __repr__(self) -> str:
        return "<EOL>"


_EOL = _Marker()

_NEWLINES = {EndOfLine.LF: "\n", EndOfLine.CRLF: "\r\n"}

_LINE_BREAK = re.compile(r"\r\n|\r|\n")

Chunk = Union[str, _Marker]


class Printer:
    def __init__(self, options: PrintOptions | None = None):
        self.options = options or PrintOptions()
        if IndentStyle(self.options.indent_style) is IndentStyle.TAB:
            self._padding = "\t"
        else:
            self._padding = " " * self.options.indent_size
        self._newline = _NEWLINES[EndOfLine(self.options.end_of_line)]

    def print(self, ast: ASTNode) -> str:
        return "".join(self.chunks(ast))

    def chunks(self, ast: ASTNode) -> Iterator[str]:
        """Yield the rendered text of ``ast`` piece by piece."""
        for chunk in self._render(ast, None):
            yield self._newline if chunk is _EOL else chunk

    def _render(self, node: ASTNode, directed: bool | None) -> Iterator[Chunk]:
        return _RENDERERS[node.type](self, node, directed)

    def _indent(self, chunks: Iterable[Chunk]) -> Iterator[Chunk]:
        yield self._padding
        for chunk in chunks:
            yield chunk
            if chunk is _EOL:
                yield self._padding

    def _join(self, nodes: Iterable[ASTNode], directed: bool | None) -> Iterator[Chunk]:
        for index, node in enumerate(nodes):
            if index:
                yield _EOL
            yield from self._render(node, directed)

    def _body(self, children: tuple, directed: bool | None) -> Iterator[Chunk]:
        yield "{"
        if children:
            yield _EOL
            yield from self._indent(self._join(children, directed))
            yield _EOL
        yield "}"

    def _attribute_block(self, children: tuple, directed: bool | None) -> Iterator[Chunk]:
        yield " ["
        yield _EOL
        yield from self._indent(self._join(children, directed))
        yield _EOL
        yield "];"

    def _literal(self, node: Literal, directed: bool | None) -> Iterator[Chunk]:
        if node.quoted is Quoting.QUOTED:
            yield f'"{escape(node.value)}"'
        elif node.quoted is Quoting.HTML:
            yield f"<{node.value}>"
        else:
            yield node.value

    def _dot(self, node: Dot, directed: bool | None) -> Iterator[Chunk]:
        yield from self._join(node.children, directed)

    def _graph(self, node: Graph, directed: bool | None) -> Iterator[Chunk]:
        if node.strict:
            yield "strict "
        yield "digraph " if node.directed else "graph "
        if node.id is not None:
            yield from self._literal(node.id, node.directed)
            yield " "
        yield from self._body(node.children, node.directed)

    def _subgraph(self, node: Subgraph, directed: bool | None) -> Iterator[Chunk]:
        yield "subgraph "
        if node.id is not None:
            yield from self._literal(node.id, directed)
            yield " "
        yield from self._body(node.children, directed)

    def _attribute(self, node: Attribute, directed: bool | None) -> Iterator[Chunk]:
        yield from self._literal(node.key, directed)
        yield " = "
        yield from self._literal(node.value, directed)
        yield ";"

    def _attribute_list(self, node: AttributeList, directed: bool | None) -> Iterator[Chunk]:
        yield node.kind.value.lower()
        if not node.children:
            yield " [];"
            return
        yield from self._attribute_block(node.children, directed)

    def _node(self, node: Node, directed: bool | None) -> Iterator[Chunk]:
        yield from self._literal(node.id, directed)
        if node.children:
            yield from self._attribute_block(node.children, directed)
        else:
            yield ";"

    def _edge(self, node: Edge, directed: bool | None) -> Iterator[Chunk]:
        operator = " -- " if directed is False else " -> "
        for index, target in enumerate(node.targets):
            if index:
                yield operator
            yield from self._render(target, directed)
        if node.children:
            yield from self._attribute_block(node.children, directed)
        else:
            yield ";"

    def _node_ref(self, node: NodeRef, directed: bool | None) -> Iterator[Chunk]:
        yield from self._literal(node.id, directed)
        if node.port is not None:
            yield ":"
            yield from self._literal(node.port, directed)
        if node.compass is not None:
            yield ":"
            yield from self._literal(node.compass, directed)

    def _node_ref_group(self, node: NodeRefGroup, directed: bool | None) -> Iterator[Chunk]:
        yield "{"
        for index, ref in enumerate(node.children):
            if index:
                yield " "
            yield from self._node_ref(ref, directed)
        yield "}"

    def _comment(self, node: Comment, directed: bool | None) -> Iterator[Chunk]:
        lines = _LINE_BREAK.split(escape_comment(node.value, node.kind))
        if node.kind is CommentKind.BLOCK:
            yield "/**"
            for line in lines:
                yield _EOL
                yield f" * {line}" if line else " *"
            yield _EOL
            yield " */"
            return

        prefix = "//" if node.kind is CommentKind.SLASH else "#"
        for index, line in enumerate(lines):
            if index:
                yield _EOL
            yield f"{prefix} {line}" if line else prefix


_RENDERERS: dict[ASTType, Callable[[Printer, Any, bool | None], Iterator[Chunk]]] = {
    ASTType.LITERAL: Printer._literal,
    ASTType.DOT: Printer._dot,
    ASTType.GRAPH: Printer._graph,
    ASTType.SUBGRAPH: Printer._subgraph,
    ASTType.ATTRIBUTE: Printer._attribute,
    ASTType.ATTRIBUTE_LIST: Printer._attribute_list,
    ASTType.NODE: Printer._node,
    ASTType.EDGE: Printer._edge,
    ASTType.NODE_REF: Printer._node_ref,
    ASTType.NODE_REF_GROUP: Printer._node_ref_group,
    ASTType.COMMENT: Printer._comment,
}


def stringify(ast: ASTNode, options: PrintOptions | None = None, **overrides: Any) -> str:
    """Render ``ast`` as DOT text."""
    print_options = options or PrintOptions()
    if overrides:
        print_options = replace(print_options, **overrides)
    return Printer(print_options).print(ast)
