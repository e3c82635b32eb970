import pytest

from dotlang.errors import ValidationError
from dotlang.models import Digraph, Node
from dotlang.validation import validate_model


def test_validation_accepts_known_attributes():
    root = Digraph(attributes={"rankdir": "LR"})
    root.node({"shape": "box"})
    root.edge({"color": "gray"})
    root.graph({"rank": "same"})
    root.node("a", {"label": "A"})
    root.edge(["a", "b"], {"weight": 2})
    root.subgraph("cluster_x", {"label": "X", "rank": "same"})

    result = validate_model(root)

    assert result.ok
    assert result.errors == []
    assert result.warnings == []


def test_validation_reports_unknown_keys_as_warnings():
    root = Digraph(attributes={"shape": "box"})
    root.node("a", {"arrowhead": "dot"})
    root.edge(["a", "b"], {"shape": "box"})
    root.subgraph("plain", {"label": "not a cluster"})

    result = validate_model(root)

    assert result.ok
    assert "unknown graph attribute: shape" in result.warnings
    assert "unknown node 'a' attribute: arrowhead" in result.warnings
    assert "unknown edge attribute: shape" in result.warnings
    assert "unknown subgraph attribute: label" in result.warnings


def test_strict_validation_turns_unknown_keys_into_errors():
    root = Digraph()
    root.subgraph("cluster_x").node({"rankdir": "LR"})

    result = validate_model(root, strict=True)

    assert not result.ok
    assert result.errors == ["unknown node default attribute: rankdir"]
    with pytest.raises(ValidationError) as exc_info:
        result.raise_for_errors()
    assert exc_info.value.errors == result.errors


def test_validation_rejects_empty_ids():
    root = Digraph()
    root.add_node(Node(""))
    root.edge(["", "b"])

    result = validate_model(root)

    assert "node id must not be empty" in result.errors
    assert "edge target id must not be empty" in result.errors


def test_raise_for_errors_is_silent_when_ok():
    validate_model(Digraph()).raise_for_errors()
