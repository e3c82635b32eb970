from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from dotlang.errors import EdgeTargetError
from dotlang.models.attributes import AttributesGroup, AttributesLike


class Compass(str, Enum):
    N = "n"
    NE = "ne"
    E = "e"
    SE = "se"
    S = "s"
    SW = "sw"
    W = "w"
    NW = "nw"
    C = "c"
    ANY = "_"


_COMPASS_VALUES = frozenset(compass.value for compass in Compass)


def is_compass(value: object) -> bool:
    return isinstance(value, str) and value in _COMPASS_VALUES


@dataclass(frozen=True)
class ForwardRef:
    """Reference to a node by id, optionally narrowed to a port and compass point."""

    id: str
    port: str | None = None
    compass: str | None = None


class Node:
    def __init__(self, id: str, attributes: AttributesLike | None = None):
        self.id = id
        self.attributes = AttributesGroup(attributes)
        self.comment: str | None = None

    def port(self, port: str | Mapping[str, str]) -> ForwardRef:
        """Return a reference to ``port`` (or a ``{"port", "compass"}`` mapping) on this node."""
        if isinstance(port, str):
            return ForwardRef(self.id, port)
        return ForwardRef(self.id, port.get("port"), port.get("compass"))

    def __repr__(self) -> str:
        return f"Node(id={self.id!r})"


NodeRefLike = Union[Node, ForwardRef]

EdgeTarget = Union[NodeRefLike, tuple[NodeRefLike, ...]]


class Edge:
    def __init__(self, targets: Iterable[Any], attributes: AttributesLike | None = None):
        self.targets: tuple[EdgeTarget, ...] = to_edge_targets(targets)
        self.attributes = AttributesGroup(attributes)
        self.comment: str | None = None

    def __repr__(self) -> str:
        return f"Edge(targets={self.targets!r})"


def to_edge_targets(targets: Iterable[Any]) -> tuple[EdgeTarget, ...]:
    """Normalise every accepted target shape; groups become tuples.

    Accepted: a :class:`Node`, a :class:`ForwardRef`, a mapping with an
    ``"id"`` key, an ``"id[:port[:compass]]"`` string, or a non-empty list or
    tuple of those (a group).
    """
    if isinstance(targets, (str, Mapping)):
        raise EdgeTargetError(
            "Edge targets must be a sequence of at least 2 targets.", target=targets
        )
    normalised: list[EdgeTarget] = []
    for index, target in enumerate(targets):
        if isinstance(target, (list, tuple)):
            if not target:
                raise EdgeTargetError(
                    f"Edge target group at index {index} is empty.", index=index, target=target
                )
            normalised.append(tuple(_to_node_ref(member, index) for member in target))
        else:
            normalised.append(_to_node_ref(target, index))
    if len(normalised) < 2:
        raise EdgeTargetError(
            "The element of Edge target is missing or not satisfied as Edge target.",
            index=len(normalised),
        )
    return tuple(normalised)


def _to_node_ref(target: Any, index: int) -> NodeRefLike:
    if isinstance(target, (Node, ForwardRef)):
        return target
    if isinstance(target, str):
        return parse_node_ref(target)
    if isinstance(target, Mapping) and isinstance(target.get("id"), str):
        compass = target.get("compass")
        return ForwardRef(
            target["id"],
            target.get("port"),
            compass if is_compass(compass) else None,
        )
    raise EdgeTargetError(
        f"Invalid edge target at index {index}: {target!r}", index=index, target=target
    )


def parse_node_ref(value: str) -> ForwardRef:
    """Split ``"id:port:compass"``; an unknown compass is dropped, the port kept."""
    id, _, rest = value.partition(":")
    if not rest:
        return ForwardRef(id)
    port, _, compass = rest.partition(":")
    compass = compass.split(":", 1)[0]
    return ForwardRef(id, port, compass if is_compass(compass) else None)
