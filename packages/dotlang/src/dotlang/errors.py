"""Error hierarchy for parsing, building, converting and validating DOT."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from dotlang.ast.nodes import FileRange


class DotError(Exception):
    """Base error for everything raised by dotlang."""

    def __init__(self, message: str, *, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause


# --- Parsing ---


class DotSyntaxError(DotError):
    """Malformed DOT text."""

    def __init__(
        self,
        message: str,
        *,
        location: FileRange | None = None,
        filename: str | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message, cause=cause)
        self.location = location
        self.filename = filename

    def __str__(self) -> str:
        message = super().__str__()
        if self.location is None:
            return message
        start = self.location.start
        where = f"{start.line}:{start.column}"
        if self.filename:
            where = f"{self.filename}:{where}"
        return f"{message} ({where})"


class DotParseError(DotError):
    """Unexpected failure while parsing that is not a grammar error."""


# --- AST construction ---


class NodeCountExceededError(DotError):
    """The AST node cap of a builder was exceeded."""

    def __init__(self, count: int, limit: int):
        super().__init__(
            f"AST node count ({count}) exceeds maximum allowed ({limit}). "
            "Consider increasing 'max_ast_nodes' or simplifying the input."
        )
        self.count = count
        self.limit = limit


# --- Models ---


class EdgeTargetError(DotError):
    """An edge target is missing or has an unsupported shape."""

    def __init__(self, message: str, *, index: int | None = None, target: Any = None):
        super().__init__(message)
        self.index = index
        self.target = target


class ValidationError(DotError):
    """An attribute key cannot be resolved in its context."""

    def __init__(self, message: str, *, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = list(errors or [message])


class ConversionError(DotError):
    """An AST cannot be converted to a model (or the reverse)."""
