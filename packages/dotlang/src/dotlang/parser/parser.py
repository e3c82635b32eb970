from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from dotlang.ast.builder import DEFAULT_MAX_AST_NODES, Builder, BuilderOptions
from dotlang.ast.nodes import (
    ASTNode,
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
from dotlang.errors import DotError, DotParseError, DotSyntaxError
from dotlang.parser.lexer import (
    COMMENT_TOKENS,
    DEFAULT_MAX_HTML_NESTING_DEPTH,
    GrammarError,
    SourceMap,
    Token,
    lex,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_EDGE_CHAIN_DEPTH = 1000

KEYWORDS = frozenset({"strict", "graph", "digraph", "node", "edge", "subgraph"})

LITERAL_TOKENS = frozenset({"ID", "STRING", "HTML"})

_ATTRIBUTE_LIST_KINDS = {
    "graph": AttributeListKind.GRAPH,
    "node": AttributeListKind.NODE,
    "edge": AttributeListKind.EDGE,
}

_COMMENT_KINDS = {
    "BLOCK_COMMENT": CommentKind.BLOCK,
    "SLASH_COMMENT": CommentKind.SLASH,
    "MACRO_COMMENT": CommentKind.MACRO,
}

_GROUP_TOKENS = frozenset({"ID", "STRING", "HTML", "COLON", "COMMA", "SEMICOLON", "PLUS"})


class StartRule(str, Enum):
    DOT = "Dot"
    GRAPH = "Graph"
    SUBGRAPH = "Subgraph"
    NODE = "Node"
    EDGE = "Edge"
    ATTRIBUTE_LIST = "AttributeList"
    ATTRIBUTE = "Attribute"
    CLUSTER_STATEMENTS = "ClusterStatements"


@dataclass
class ParseOptions:
    start_rule: StartRule | str = StartRule.DOT
    filename: str | None = None
    max_html_nesting_depth: int = DEFAULT_MAX_HTML_NESTING_DEPTH
    max_edge_chain_depth: int = DEFAULT_MAX_EDGE_CHAIN_DEPTH
    max_ast_nodes: int = DEFAULT_MAX_AST_NODES


class DotParser:
    def __init__(self, source: str, options: ParseOptions | None = None):
        self._options = options or ParseOptions()
        self._source = source
        self._tokens = lex(source, self._options.max_html_nesting_depth)
        self._index = 0
        self._last_end = 0
        self._map = SourceMap(source)
        self._builder = Builder(BuilderOptions(max_ast_nodes=self._options.max_ast_nodes))
        # Direction of the enclosing graph; None outside of one.
        self._directed: bool | None = None

    def parse(self) -> ASTNode | tuple[ClusterStatement, ...]:
        rule = StartRule(self._options.start_rule)
        if rule is StartRule.DOT:
            return self._parse_dot()
        if rule is StartRule.CLUSTER_STATEMENTS:
            statements = self._parse_statements("EOF")
            self._expect("EOF")
            return tuple(statements)

        result = self._RULES[rule](self)
        if self._peek().kind == "SEMICOLON":
            self._consume()
        self._expect("EOF")
        return result

    # --- Documents and graphs ---

    def _parse_dot(self) -> Dot:
        children: list[Graph | Comment] = []
        while True:
            children.extend(self._take_comments())
            if self._peek().kind == "EOF":
                break
            children.append(self._parse_graph())
        if not any(isinstance(child, Graph) for child in children):
            token = self._peek()
            raise GrammarError(
                f'Expected "strict", "graph" or "digraph" but {_describe(token)} found.',
                token.position,
                token.end,
            )
        self._expect("EOF")
        return self._builder.dot(children, location=self._map.range(0, len(self._source)))

    def _parse_graph(self) -> Graph:
        start = self._peek().position
        strict = False
        if self._is_keyword(self._peek(), "strict"):
            self._consume()
            strict = True

        token = self._peek()
        if self._is_keyword(token, "digraph"):
            directed = True
        elif self._is_keyword(token, "graph"):
            directed = False
        else:
            raise self._unexpected(token, '"graph" or "digraph"')
        self._consume()

        graph_id = self._parse_literal() if self._peek().kind in LITERAL_TOKENS else None
        self._expect("LBRACE")
        enclosing, self._directed = self._directed, directed
        try:
            children = self._parse_statements("RBRACE")
        finally:
            self._directed = enclosing
        self._expect("RBRACE")
        return self._builder.graph(
            children,
            directed=directed,
            strict=strict,
            id=graph_id,
            location=self._span(start),
        )

    def _parse_subgraph(self) -> Subgraph:
        start = self._peek().position
        subgraph_id = None
        if self._is_keyword(self._peek(), "subgraph"):
            self._consume()
            if self._peek().kind in LITERAL_TOKENS:
                subgraph_id = self._parse_literal()
        self._expect("LBRACE")
        children = self._parse_statements("RBRACE")
        self._expect("RBRACE")
        return self._builder.subgraph(children, subgraph_id, location=self._span(start))

    # --- Statements ---

    def _parse_statements(self, closing: str) -> list[ClusterStatement]:
        statements: list[ClusterStatement] = []
        while True:
            statements.extend(self._take_comments())
            token = self._peek()
            if token.kind == closing:
                return statements
            if token.kind == "EOF":
                raise self._unexpected(token, '"}"')
            statements.append(self._parse_statement())
            if self._peek().kind == "SEMICOLON":
                self._consume()

    def _parse_statement(self) -> ClusterStatement:
        token = self._peek()
        keyword = token.value.lower() if token.kind == "ID" else None

        if keyword in _ATTRIBUTE_LIST_KINDS:
            return self._parse_attribute_list()
        if keyword == "subgraph" or token.kind == "LBRACE":
            if token.kind == "LBRACE" and self._group_starts_edge():
                return self._parse_edge()
            subgraph = self._parse_subgraph()
            following = self._peek()
            if following.kind == "EDGEOP":
                raise GrammarError(
                    "A subgraph cannot be used as an edge target; use a {a b} group instead.",
                    following.position,
                    following.end,
                )
            return subgraph
        if token.kind in LITERAL_TOKENS:
            if self._peek(1).kind == "EQUALS":
                return self._parse_attribute()
            start = token.position
            target = self._parse_node_ref()
            if self._peek().kind == "EDGEOP":
                return self._parse_edge_rest(target, start)
            return self._finish_node(target, start)
        raise self._unexpected(token, "a statement")

    def _parse_attribute(self) -> Attribute:
        start = self._peek().position
        key = self._parse_literal()
        self._expect("EQUALS")
        value = self._parse_literal()
        return self._builder.attribute(key, value, location=self._span(start))

    def _parse_attribute_list(self) -> AttributeList:
        token = self._peek()
        kind = _ATTRIBUTE_LIST_KINDS.get(token.value.lower()) if token.kind == "ID" else None
        if kind is None:
            raise self._unexpected(token, '"graph", "node" or "edge"')
        self._consume()
        children = self._parse_attribute_brackets(optional=False)
        return self._builder.attribute_list(kind, children, location=self._span(token.position))

    def _parse_node(self) -> Node:
        start = self._peek().position
        return self._finish_node(self._parse_node_ref(), start)

    def _finish_node(self, target: NodeRef, start: int) -> Node:
        if target.port is not None:
            logger.debug("Dropping port of node statement %r", target.id.value)
        children = self._parse_attribute_brackets(optional=True)
        return self._builder.node(target.id, children, location=self._span(start))

    def _parse_edge(self) -> Edge:
        start = self._peek().position
        first = self._parse_edge_target()
        if self._peek().kind != "EDGEOP":
            raise self._unexpected(self._peek(), '"->" or "--"')
        return self._parse_edge_rest(first, start)

    def _parse_edge_rest(self, first: EdgeTarget, start: int) -> Edge:
        targets = [first]
        operator: str | None = None
        limit = self._options.max_edge_chain_depth
        while self._peek().kind == "EDGEOP":
            token = self._consume()
            self._check_edge_operator(token, operator)
            operator = token.value
            if limit > 0 and len(targets) > limit:
                raise GrammarError(
                    f"Edge chain depth exceeds maximum allowed depth of {limit}",
                    token.position,
                    token.end,
                )
            targets.append(self._parse_edge_target())
        children = self._parse_attribute_brackets(optional=True)
        return self._builder.edge(targets, children, location=self._span(start))

    def _check_edge_operator(self, token: Token, previous: str | None) -> None:
        if self._directed is True and token.value != "->":
            raise GrammarError(
                "In digraph, it's necessary to describe with \"->\" operator to create edge.",
                token.position,
                token.end,
            )
        if self._directed is False and token.value != "--":
            raise GrammarError(
                "In graph, it's necessary to describe with \"--\" operator to create edge.",
                token.position,
                token.end,
            )
        if previous is not None and previous != token.value:
            raise GrammarError(
                f'Cannot mix "{previous}" and "{token.value}" in one edge statement.',
                token.position,
                token.end,
            )

    def _parse_edge_target(self) -> EdgeTarget:
        token = self._peek()
        if token.kind == "LBRACE":
            return self._parse_node_ref_group()
        if self._is_keyword(token, "subgraph"):
            raise GrammarError(
                "A subgraph cannot be used as an edge target; use a {a b} group instead.",
                token.position,
                token.end,
            )
        return self._parse_node_ref()

    def _parse_node_ref(self) -> NodeRef:
        start = self._peek().position
        node_id = self._parse_literal()
        port = compass = None
        if self._peek().kind == "COLON":
            self._consume()
            port = self._parse_literal()
            if self._peek().kind == "COLON":
                self._consume()
                compass = self._parse_literal()
        return self._builder.node_ref(node_id, port, compass, location=self._span(start))

    def _parse_node_ref_group(self) -> NodeRefGroup:
        start = self._expect("LBRACE").position
        refs: list[NodeRef] = []
        while self._peek().kind != "RBRACE":
            refs.append(self._parse_node_ref())
            if self._peek().kind in {"COMMA", "SEMICOLON"}:
                self._consume()
        if not refs:
            raise self._unexpected(self._peek(), "a node reference")
        self._expect("RBRACE")
        return self._builder.node_ref_group(refs, location=self._span(start))

    def _group_starts_edge(self) -> bool:
        """Look ahead from ``{`` for a plain node list followed by an edge operator."""
        index = self._skip_comment_tokens(self._index) + 1
        seen_literal = False
        while True:
            index = self._skip_comment_tokens(index)
            token = self._tokens[index]
            if token.kind == "RBRACE":
                break
            if token.kind not in _GROUP_TOKENS:
                return False
            if token.kind == "ID" and token.value.lower() in KEYWORDS:
                return False
            seen_literal = seen_literal or token.kind in LITERAL_TOKENS
            index += 1
        following = self._tokens[self._skip_comment_tokens(index + 1)]
        return seen_literal and following.kind == "EDGEOP"

    def _parse_attribute_brackets(self, optional: bool) -> list[Attribute | Comment]:
        if self._peek().kind != "LBRACKET":
            if optional:
                return []
            raise self._unexpected(self._peek(), '"["')

        children: list[Attribute | Comment] = []
        while self._peek().kind == "LBRACKET":
            self._consume()
            while True:
                children.extend(self._take_comments())
                if self._peek().kind == "RBRACKET":
                    break
                children.append(self._parse_attribute())
                if self._peek().kind in {"COMMA", "SEMICOLON"}:
                    self._consume()
            self._expect("RBRACKET")
        return children

    # --- Literals ---

    def _parse_literal(self) -> Literal:
        token = self._peek()
        if token.kind == "ID":
            if token.value.lower() in KEYWORDS:
                raise self._unexpected(token, "an identifier")
            self._consume()
            return self._builder.literal(
                token.value, Quoting.BARE, location=self._map.range(token.position, token.end)
            )
        if token.kind == "HTML":
            self._consume()
            return self._builder.literal(
                token.value, Quoting.HTML, location=self._map.range(token.position, token.end)
            )
        if token.kind == "STRING":
            self._consume()
            parts = [token.value]
            while self._peek().kind == "PLUS":
                self._consume()
                parts.append(self._expect("STRING").value)
            return self._builder.literal(
                "".join(parts), Quoting.QUOTED, location=self._span(token.position)
            )
        raise self._unexpected(token, "an identifier")

    # --- Comments ---

    def _take_comments(self) -> list[Comment]:
        """Turn comment tokens at the current position into Comment nodes."""
        groups: list[list[Token]] = []
        while self._tokens[self._index].kind in COMMENT_TOKENS:
            token = self._tokens[self._index]
            if groups and self._continues_line_comment(groups[-1][-1], token):
                groups[-1].append(token)
            else:
                groups.append([token])
            self._index += 1
            self._last_end = token.end
        return [self._make_comment(group) for group in groups]

    def _continues_line_comment(self, previous: Token, token: Token) -> bool:
        if previous.kind != token.kind or token.kind == "BLOCK_COMMENT":
            return False
        gap = self._source[previous.end : token.position]
        return gap.strip(" \t") == "" and self._ends_line(previous)

    def _ends_line(self, token: Token) -> bool:
        return self._source[token.end - 1 : token.end] in {"\n", "\r"}

    def _make_comment(self, tokens: list[Token]) -> Comment:
        kind = _COMMENT_KINDS[tokens[0].kind]
        if kind is CommentKind.BLOCK:
            value = _block_comment_value(tokens[0].value)
        else:
            value = "\n".join(_line_comment_value(token.value) for token in tokens)
        return self._builder.comment(
            value, kind, location=self._map.range(tokens[0].position, tokens[-1].end)
        )

    # --- Token helpers ---

    def _skip_comment_tokens(self, index: int) -> int:
        while self._tokens[index].kind in COMMENT_TOKENS:
            index += 1
        return index

    def _peek(self, offset: int = 0) -> Token:
        index = self._skip_comment_tokens(self._index)
        for _ in range(offset):
            if self._tokens[index].kind == "EOF":
                break
            index = self._skip_comment_tokens(index + 1)
        return self._tokens[index]

    def _consume(self) -> Token:
        self._index = self._skip_comment_tokens(self._index)
        token = self._tokens[self._index]
        if token.kind != "EOF":
            self._index += 1
        self._last_end = token.end
        return token

    def _expect(self, kind: str) -> Token:
        token = self._peek()
        if token.kind != kind:
            raise self._unexpected(token, _EXPECTED_NAMES.get(kind, kind))
        return self._consume()

    def _is_keyword(self, token: Token, keyword: str) -> bool:
        return token.kind == "ID" and token.value.lower() == keyword

    def _span(self, start: int) -> FileRange:
        return self._map.range(start, self._last_end)

    def _unexpected(self, token: Token, expected: str) -> GrammarError:
        return GrammarError(
            f"Expected {expected} but {_describe(token)} found.", token.position, token.end
        )

    _RULES: dict[StartRule, Any] = {
        StartRule.GRAPH: _parse_graph,
        StartRule.SUBGRAPH: _parse_subgraph,
        StartRule.NODE: _parse_node,
        StartRule.EDGE: _parse_edge,
        StartRule.ATTRIBUTE_LIST: _parse_attribute_list,
        StartRule.ATTRIBUTE: _parse_attribute,
    }


_EXPECTED_NAMES = {
    "EOF": "end of input",
    "LBRACE": '"{"',
    "RBRACE": '"}"',
    "LBRACKET": '"["',
    "RBRACKET": '"]"',
    "EQUALS": '"="',
    "STRING": "a quoted string",
}


def _describe(token: Token) -> str:
    if token.kind == "EOF":
        return "end of input"
    return f'"{token.value}"' if token.kind not in {"STRING", "HTML"} else f"{token.kind.lower()} literal"


def _line_comment_value(raw: str) -> str:
    return raw[1:] if raw.startswith(" ") else raw


def _block_comment_value(raw: str) -> str:
    body = raw[1:] if raw.startswith("*") else raw
    lines = []
    for line in body.replace("\r\n", "\n").split("\n"):
        line = line.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        lines.append(line)
    while lines and not lines[0]:
        lines.pop(0)
    while lines and not lines[-1]:
        lines.pop()
    return "\n".join(lines)


def parse(
    source: str,
    options: ParseOptions | None = None,
    **overrides: Any,
) -> ASTNode | tuple[ClusterStatement, ...]:
    """Parse DOT text into an AST.

    ``overrides`` replace single fields of ``options``, so
    ``parse(text, start_rule="Edge")`` works without building a
    :class:`ParseOptions` first.

    Raises:
        DotSyntaxError: the text does not match the grammar.
        DotParseError: parsing failed for any other reason.
    """
    parse_options = options or ParseOptions()
    if overrides:
        parse_options = replace(parse_options, **overrides)
    rule = StartRule(parse_options.start_rule)

    logger.debug(
        "Parsing %s (%d chars) with start rule %s",
        parse_options.filename or "<string>",
        len(source),
        rule.value,
    )
    try:
        return DotParser(source, parse_options).parse()
    except GrammarError as error:
        raise DotSyntaxError(
            str(error),
            location=SourceMap(source).range(error.start, error.end),
            filename=parse_options.filename,
            cause=error,
        ) from error
    except DotError:
        raise
    except Exception as error:
        raise DotParseError(f"Failed to parse DOT input: {error}", cause=error) from error
