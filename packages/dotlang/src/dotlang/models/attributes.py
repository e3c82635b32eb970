"""Ordered attribute maps shared by every model object."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Union

from dotlang.ast.nodes import AttributeListKind

AttributeValue = Union[str, int, float, bool]

AttributesLike = Union[Mapping[str, AttributeValue], Iterable[tuple[str, AttributeValue]]]


class Attributes:
    """Ordered ``key -> value`` map.

    Setting an existing key replaces its value without moving it, and setting
    ``None`` is a no-op, so ``apply`` can take sparse mappings.
    """

    def __init__(self, attributes: AttributesLike | None = None):
        self._attributes: dict[str, AttributeValue] = {}
        if attributes is not None:
            self.apply(attributes)

    @property
    def values(self) -> list[tuple[str, AttributeValue]]:
        return list(self._attributes.items())

    @property
    def size(self) -> int:
        return len(self._attributes)

    def get(self, key: str) -> AttributeValue | None:
        return self._attributes.get(key)

    def set(self, key: str, value: AttributeValue | None) -> None:
        if value is None:
            return
        self._attributes[key] = value

    def delete(self, key: str) -> None:
        self._attributes.pop(key, None)

    def apply(self, attributes: AttributesLike) -> None:
        items = attributes.items() if isinstance(attributes, Mapping) else attributes
        for key, value in items:
            self.set(key, value)

    def clear(self) -> None:
        self._attributes.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)


class AttributesGroup(Attributes):
    """Attributes of a node or edge, with an optional leading comment."""

    def __init__(self, attributes: AttributesLike | None = None):
        super().__init__(attributes)
        self.comment: str | None = None


class AttributeList(AttributesGroup):
    """Default attributes applied to every graph, node or edge in a cluster."""

    def __init__(self, kind: AttributeListKind | str, attributes: AttributesLike | None = None):
        super().__init__(attributes)
        self.kind = AttributeListKind(kind)

    def __repr__(self) -> str:
        return f"AttributeList(kind={self.kind.value!r}, values={self.values!r})"
