from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dotlang.models.graphs import Digraph, Graph, Subgraph
    from dotlang.models.nodes import Edge, Node


@dataclass(frozen=True)
class ModelsContext:
    """The classes a graph instantiates for the objects it creates.

    A context is handed to a root graph at construction and passed down to
    every subgraph it creates, so subclasses stay consistent through a tree.
    """

    digraph: type[Digraph]
    graph: type[Graph]
    subgraph: type[Subgraph]
    node: type[Node]
    edge: type[Edge]
