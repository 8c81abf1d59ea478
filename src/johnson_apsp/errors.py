from __future__ import annotations

from typing import Any, Hashable, Optional


class JohnsonError(Exception):
    """Base class for all package-specific errors."""


class MalformedInput(JohnsonError, ValueError):
    """Declared counts disagree with the supplied edges, or a vertex is out of range."""


class GraphFormatError(MalformedInput):
    """Raised when parsing a graph file or payload fails."""

    def __init__(self, message: str, line: Optional[int] = None):
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
        self.line = line


class NegativeCycleDetected(JohnsonError):
    """A negative-weight cycle is reachable from ``source``."""

    def __init__(self, source: Any, name: Optional[str] = None):
        self.source = source
        self.name = name
        where = f" in graph {name!r}" if name else ""
        super().__init__(f"negative cycle reachable from source {source!r}{where}")


class SourceNotFound(JohnsonError, KeyError):
    def __init__(self, source: Hashable):
        self.source = source
        super().__init__(f"source vertex {source!r} not in graph")

    def __str__(self) -> str:
        return str(self.args[0])


__all__ = [
    "JohnsonError",
    "MalformedInput",
    "GraphFormatError",
    "NegativeCycleDetected",
    "SourceNotFound",
]
