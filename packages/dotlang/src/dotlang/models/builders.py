"""Shorthand constructors for root graphs."""

from __future__ import annotations

from collections.abc import Callable

from dotlang.models.attributes import AttributesLike
from dotlang.models.context import ModelsContext
from dotlang.models.graphs import DEFAULT_MODELS_CONTEXT, RootGraph

GraphCallback = Callable[[RootGraph], None]


def _build(
    directed: bool,
    strict: bool,
    id: str | None,
    attributes: AttributesLike | None,
    callback: GraphCallback | None,
    models: ModelsContext | None,
) -> RootGraph:
    context = models or DEFAULT_MODELS_CONTEXT
    factory = context.digraph if directed else context.graph
    root = factory(id, attributes, strict=strict, models=context)
    if callback is not None:
        callback(root)
    return root


def digraph(
    id: str | None = None,
    attributes: AttributesLike | None = None,
    callback: GraphCallback | None = None,
    *,
    models: ModelsContext | None = None,
) -> RootGraph:
    return _build(True, False, id, attributes, callback, models)


def graph(
    id: str | None = None,
    attributes: AttributesLike | None = None,
    callback: GraphCallback | None = None,
    *,
    models: ModelsContext | None = None,
) -> RootGraph:
    return _build(False, False, id, attributes, callback, models)


def strict_digraph(
    id: str | None = None,
    attributes: AttributesLike | None = None,
    callback: GraphCallback | None = None,
    *,
    models: ModelsContext | None = None,
) -> RootGraph:
    return _build(True, True, id, attributes, callback, models)


def strict_graph(
    id: str | None = None,
    attributes: AttributesLike | None = None,
    callback: GraphCallback | None = None,
    *,
    models: ModelsContext | None = None,
) -> RootGraph:
    return _build(False, True, id, attributes, callback, models)
