import pytest

from dotlang import (
    EdgeTargetError,
    ParseOptions,
    RootGraph,
    digraph,
    from_dot,
    parse,
    stringify,
    to_dot,
)
from dotlang.ast import Attribute, Comment, CommentKind, Dot, Edge, Graph, Literal, Quoting
from dotlang.convert import FromModelOptions
from dotlang.models import ForwardRef, Node
from dotlang.printer import PrintOptions


class TestScenarios:
    def test_parse_digraph_with_edge(self):
        dot = parse("digraph { a -> b; }")

        assert isinstance(dot, Dot)
        (graph,) = dot.children
        assert isinstance(graph, Graph)
        assert (graph.directed, graph.strict) == (True, False)
        (edge,) = graph.children
        assert isinstance(edge, Edge)
        assert [target.id.value for target in edge.targets] == ["a", "b"]

    def test_model_to_dot(self):
        root = RootGraph(directed=True)
        root.node("a")
        root.node("b")
        root.edge(["a", "b"])

        assert to_dot(root) == 'digraph {\n  "a";\n  "b";\n  "a" -> "b";\n}'

    def test_bare_literals_survive_reprint(self):
        assert stringify(parse("graph { a -- b; }")) == "graph {\n  a -- b;\n}"

    def test_edge_without_targets(self):
        subgraph = digraph().subgraph("s")

        with pytest.raises(EdgeTargetError) as exc_info:
            subgraph.edge([])

        assert exc_info.value.index == 0


def _edge_ids(edge):
    ids = []
    for target in edge.targets:
        members = target if isinstance(target, tuple) else (target,)
        ids.append(
            tuple((member.id, member.port if isinstance(member, ForwardRef) else None) for member in members)
        )
    return ids


def _shape(cluster):
    return {
        "values": [(key, str(value)) for key, value in cluster.values],
        "defaults": {
            name: getattr(cluster.attributes, name).values for name in ("graph", "node", "edge")
        },
        "nodes": [(node.id, node.attributes.values) for node in cluster.nodes],
        "edges": [(_edge_ids(edge), edge.attributes.values) for edge in cluster.edges],
        "subgraphs": [(subgraph.id, _shape(subgraph)) for subgraph in cluster.subgraphs],
    }


def test_model_round_trip_keeps_structure():
    root = digraph("G", {"label": "Flow", "rankdir": "LR"})
    root.node({"shape": "box"})
    root.edge({"color": "gray"})
    start = root.node("start", {"label": 'say "hi"', "xlabel": "<<b>x</b>>"})
    root.node("end")
    cluster = root.subgraph("cluster_main", {"label": "Main"})
    cluster.node("work", {"color": "red"})
    root.edge([start, ForwardRef("work", "in"), ["end", "done"]], {"label": "go"})
    start.comment = "comments are not compared"

    again = from_dot(to_dot(root))

    assert again.directed is True
    assert again.id == "G"
    assert _shape(again) == _shape(root)


def test_from_dot_uses_options():
    root = from_dot("digraph { a }", ParseOptions(filename="inline.dot"))

    assert isinstance(root.get_node("a"), Node)


def test_to_dot_uses_options():
    root = digraph()
    root.comment = "header"
    root.node("a")

    text = to_dot(
        root,
        FromModelOptions(comment_kind=CommentKind.MACRO),
        PrintOptions(indent_size=4),
    )

    assert text == '# header\ndigraph {\n    "a";\n}'


@pytest.mark.parametrize(
    "source",
    [
        'digraph G { a -> b [label="x\\"y"]; }',
        "graph { subgraph cluster_1 { a -- {b c} } // c\n }",
        '/* multi\n line */ strict digraph { node [shape=box]; "a b":p:n -> c; }',
        "digraph { label = <<b>bold</b>>; }",
        '# macro\ndigraph { a [label="line\\nbreak"] }',
        'digraph { a [label="ends with backslash\\\\"] }',
        "digraph { /** a */ }",
    ],
)
def test_printing_is_idempotent(source):
    once = stringify(parse(source))

    assert stringify(parse(once)) == once


@pytest.mark.parametrize(
    "value",
    [
        'a"b',
        '"',
        'x" ; evil [',
        "} digraph {",
        "*/",
        "ノード",
        "tab\there",
        "",
        "tail\\",
        "a\\\\",
        "C:\\dir\\",
    ],
)
def test_quoted_literals_reparse_to_the_same_value(value):
    attribute = Attribute(Literal("label"), Literal(value, Quoting.QUOTED))

    reparsed = parse(stringify(attribute), start_rule="Attribute")

    assert reparsed.value.value == value


def test_trailing_backslash_cannot_swallow_the_next_attribute():
    root = digraph()
    root.node("a", {"label": "x\\", "tooltip": ' ; injected [shape=box]; b [class="'})

    again = from_dot(to_dot(root))

    assert [node.id for node in again.nodes] == ["a"]
    assert again.get_node("a").attributes.values == [
        ("label", "x\\"),
        ("tooltip", ' ; injected [shape=box]; b [class="'),
    ]


@pytest.mark.parametrize("value", ["*/", "a */ b", "*/*/", "end */"])
def test_block_comments_cannot_be_closed_from_content(value):
    text = stringify(Comment(value, CommentKind.BLOCK))

    assert text.count("*/") == 1
    assert text.endswith(" */")
