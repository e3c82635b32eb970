import pytest

from dotlang.ast import AttributeListKind
from dotlang.errors import EdgeTargetError
from dotlang.models import (
    AttributeList,
    Attributes,
    Compass,
    Digraph,
    Edge,
    ForwardRef,
    Graph,
    ModelsContext,
    Node,
    RootGraph,
    Subgraph,
    create_models_context,
    digraph,
    graph,
    is_compass,
    parse_node_ref,
    strict_digraph,
    strict_graph,
)


class TestAttributes:
    def test_empty_by_default(self):
        attributes = Attributes()
        assert attributes.size == 0
        assert attributes.get("label") is None

    def test_constructor_and_apply_accept_mappings_and_pairs(self):
        attributes = Attributes({"label": "Label"})
        attributes.apply([("color", "red"), ("fontsize", 16)])

        assert attributes.values == [("label", "Label"), ("color", "red"), ("fontsize", 16)]

    def test_set_get_delete(self):
        attributes = Attributes()
        attributes.set("label", "x")
        assert attributes.get("label") == "x"
        attributes.delete("label")
        assert attributes.get("label") is None

    def test_overwrite_keeps_position(self):
        attributes = Attributes({"a": 1, "b": 2})
        attributes.set("a", 3)

        assert attributes.values == [("a", 3), ("b", 2)]

    def test_none_is_ignored(self):
        attributes = Attributes({"a": 1})
        attributes.set("a", None)
        attributes.apply({"b": None})

        assert attributes.values == [("a", 1)]

    def test_clear(self):
        attributes = Attributes({"a": 1, "b": 2})
        attributes.clear()
        assert attributes.size == 0

    def test_attribute_list_kind_and_comment(self):
        attributes = AttributeList("Node", {"shape": "box"})

        assert attributes.kind is AttributeListKind.NODE
        assert attributes.comment is None


class TestGraphs:
    def test_node_is_get_or_create(self):
        root = Digraph()
        first = root.node("a", {"label": "A"})
        second = root.node("a", {"color": "red"})

        assert first is second
        assert first.attributes.values == [("label", "A"), ("color", "red")]
        assert root.nodes == [first]

    def test_mapping_sets_defaults(self):
        root = Digraph()
        assert root.node({"shape": "box"}) is None
        assert root.edge({"color": "gray"}) is None
        root.graph({"rankdir": "LR"})

        assert root.attributes.node.values == [("shape", "box")]
        assert root.attributes.edge.values == [("color", "gray")]
        assert root.attributes.graph.values == [("rankdir", "LR")]

    def test_callbacks_receive_created_objects(self):
        seen = []
        root = Digraph()
        root.node("a", callback=seen.append)
        root.edge(["a", "b"], callback=seen.append)
        root.subgraph("s", callback=seen.append)

        assert [type(item) for item in seen] == [Node, Edge, Subgraph]

    def test_graph_level_attributes(self):
        root = Graph(attributes={"label": "G"})
        root.set("rankdir", "LR")

        assert root.values == [("label", "G"), ("rankdir", "LR")]

    def test_add_exist_remove(self):
        root = Digraph()
        node = Node("a")
        edge = Edge([node, "b"])
        subgraph = Subgraph("s")
        root.add_node(node)
        root.add_edge(edge)
        root.add_subgraph(subgraph)

        assert root.exist_node("a")
        assert root.exist_edge(edge)
        assert root.exist_subgraph(subgraph)

        root.remove_node("a")
        root.remove_edge(edge)
        root.remove_subgraph(subgraph)

        assert not root.exist_node("a")
        assert root.edges == []
        assert root.subgraphs == []

    def test_add_node_replaces_same_id(self):
        root = Digraph()
        root.add_node(Node("a", {"label": "old"}))
        replacement = Node("a")
        root.add_node(replacement)

        assert root.get_node("a") is replacement

    def test_subgraph_get_or_create(self):
        root = Digraph()
        named = root.subgraph("cluster_a")

        assert root.subgraph("cluster_a") is named
        assert root.subgraph() is not root.subgraph()
        assert root.get_subgraph("cluster_a") is named

    def test_subgraph_from_mapping_is_anonymous(self):
        subgraph = Digraph().subgraph({"rank": "same"})

        assert subgraph.id is None
        assert subgraph.values == [("rank", "same")]

    def test_insertion_order(self):
        root = Digraph()
        for node_id in ["c", "a", "b"]:
            root.node(node_id)

        assert [node.id for node in root.nodes] == ["c", "a", "b"]

    @pytest.mark.parametrize(
        ("subgraph_id", "expected"),
        [("cluster", True), ("cluster_x", True), ("x_cluster", False), ("clusterx", False), (None, False)],
    )
    def test_cluster_convention(self, subgraph_id, expected):
        assert Subgraph(subgraph_id).is_cluster() is expected

    def test_comment_defaults_to_none(self):
        assert Digraph().comment is None
        assert Node("a").comment is None


class TestBuilders:
    @pytest.mark.parametrize(
        ("build", "cls", "strict"),
        [
            (digraph, Digraph, False),
            (graph, Graph, False),
            (strict_digraph, Digraph, True),
            (strict_graph, Graph, True),
        ],
    )
    def test_builders(self, build, cls, strict):
        root = build("G", {"label": "x"})

        assert isinstance(root, cls)
        assert isinstance(root, RootGraph)
        assert root.strict is strict
        assert root.id == "G"
        assert root.get("label") == "x"

    def test_builder_callback(self):
        root = digraph(callback=lambda g: g.node("a"))

        assert root.exist_node("a")
        assert root.directed is True


class TestModelsContext:
    def test_custom_classes_propagate_to_subgraphs(self):
        class TaggedNode(Node):
            pass

        models = create_models_context(node=TaggedNode)
        root = digraph(models=models)
        nested = root.subgraph("s")

        assert isinstance(models, ModelsContext)
        assert isinstance(root.node("a"), TaggedNode)
        assert isinstance(nested.node("b"), TaggedNode)
        assert nested.models is models

    def test_default_context_is_unchanged(self):
        create_models_context(node=Node)

        assert type(Digraph().node("a")) is Node


class TestEdgeTargets:
    def test_accepted_shapes(self):
        node = Node("a")
        edge = Edge(
            [
                node,
                ForwardRef("b", "p"),
                {"id": "c", "port": "q", "compass": "ne"},
                "d:r:sw",
                ["e", node.port("x")],
            ]
        )

        assert edge.targets == (
            node,
            ForwardRef("b", "p"),
            ForwardRef("c", "q", "ne"),
            ForwardRef("d", "r", "sw"),
            (ForwardRef("e"), ForwardRef("a", "x")),
        )

    def test_unknown_compass_is_dropped_but_port_kept(self):
        assert parse_node_ref("a:p:up") == ForwardRef("a", "p")
        assert parse_node_ref("a:n") == ForwardRef("a", "n")
        assert parse_node_ref("a") == ForwardRef("a")

    def test_node_port_with_mapping(self):
        assert Node("a").port({"port": "p", "compass": "s"}) == ForwardRef("a", "p", "s")

    @pytest.mark.parametrize("targets", [[], ["a"]])
    def test_too_few_targets(self, targets):
        with pytest.raises(EdgeTargetError) as exc_info:
            Digraph().subgraph("s").edge(targets)

        assert exc_info.value.index == len(targets)

    def test_invalid_target_names_its_index(self):
        with pytest.raises(EdgeTargetError) as exc_info:
            Edge(["a", 42])

        assert exc_info.value.index == 1
        assert exc_info.value.target == 42

    def test_empty_group_is_rejected(self):
        with pytest.raises(EdgeTargetError):
            Edge(["a", []])

    def test_mapping_without_id_is_rejected(self):
        with pytest.raises(EdgeTargetError):
            Edge(["a", {"port": "p"}])

    @pytest.mark.parametrize("count", [2, 3, 6])
    def test_arity_is_preserved(self, count):
        edge = Digraph().edge([str(index) for index in range(count)])

        assert len(edge.targets) == count

    def test_compass_values(self):
        assert {compass.value for compass in Compass} == {
            "n", "ne", "e", "se", "s", "sw", "w", "nw", "c", "_",
        }
        assert is_compass("_")
        assert not is_compass("north")
