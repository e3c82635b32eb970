from collections.abc import Iterator
from dataclasses import dataclass, field

from dotlang.attribute_keys import (
    CLUSTER_SUBGRAPH_ATTRIBUTE_KEYS,
    EDGE_ATTRIBUTE_KEYS,
    GRAPH_ATTRIBUTE_KEYS,
    NODE_ATTRIBUTE_KEYS,
    SUBGRAPH_ATTRIBUTE_KEYS,
)
from dotlang.errors import ValidationError
from dotlang.models.attributes import Attributes
from dotlang.models.graphs import GraphBase, RootGraph, Subgraph
from dotlang.models.nodes import EdgeTarget


@dataclass(slots=True)
class ValidationResult:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise ValidationError("; ".join(self.errors), errors=self.errors)


def validate_model(root: RootGraph, strict: bool = False) -> ValidationResult:
    """Check attribute keys and ids throughout ``root``.

    Keys unknown in their scope are warnings, or errors when ``strict``.
    """
    result = ValidationResult()
    _validate_cluster(result, root, strict, "graph", GRAPH_ATTRIBUTE_KEYS)
    return result


def _validate_cluster(
    result: ValidationResult,
    cluster: GraphBase,
    strict: bool,
    label: str,
    keys: frozenset[str],
) -> None:
    _check_keys(result, cluster, keys, label, strict)
    _check_keys(
        result,
        cluster.attributes.graph,
        keys | SUBGRAPH_ATTRIBUTE_KEYS | CLUSTER_SUBGRAPH_ATTRIBUTE_KEYS,
        f"{label} default",
        strict,
    )
    _check_keys(result, cluster.attributes.node, NODE_ATTRIBUTE_KEYS, "node default", strict)
    _check_keys(result, cluster.attributes.edge, EDGE_ATTRIBUTE_KEYS, "edge default", strict)

    for node in cluster.nodes:
        if not node.id:
            result.errors.append("node id must not be empty")
        _check_keys(result, node.attributes, NODE_ATTRIBUTE_KEYS, f"node {node.id!r}", strict)

    for edge in cluster.edges:
        _check_keys(result, edge.attributes, EDGE_ATTRIBUTE_KEYS, "edge", strict)
        for node_id in _target_ids(edge.targets):
            if not node_id:
                result.errors.append("edge target id must not be empty")

    for subgraph in cluster.subgraphs:
        _validate_cluster(result, subgraph, strict, *_subgraph_scope(subgraph))


def _subgraph_scope(subgraph: Subgraph) -> tuple[str, frozenset[str]]:
    if subgraph.is_cluster():
        return f"cluster {subgraph.id!r}", SUBGRAPH_ATTRIBUTE_KEYS | CLUSTER_SUBGRAPH_ATTRIBUTE_KEYS
    return "subgraph", SUBGRAPH_ATTRIBUTE_KEYS


def _check_keys(
    result: ValidationResult,
    attributes: Attributes,
    keys: frozenset[str],
    label: str,
    strict: bool,
) -> None:
    for key, _ in attributes.values:
        if key in keys:
            continue
        message = f"unknown {label} attribute: {key}"
        if strict:
            result.errors.append(message)
        else:
            result.warnings.append(message)


def _target_ids(targets: tuple[EdgeTarget, ...]) -> Iterator[str]:
    for target in targets:
        members = target if isinstance(target, tuple) else (target,)
        for member in members:
            yield member.id

