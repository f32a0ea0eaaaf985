"""Exception types shared across the navigator."""

from __future__ import annotations


class DepnavError(Exception):
    """Base class for all depnav errors."""


class EdgeListParseError(DepnavError):
    """A line of the edge list has no separating space."""

    def __init__(self, line_number: int, line: str):
        self.line_number = line_number
        self.line = line
        super().__init__(f"weird line {line_number}: {line!r}")


class GraphBuildError(DepnavError):
    """Building the graph index failed, possibly for more than one reason."""

    def __init__(self, message: str, causes: list[BaseException] | None = None):
        self.message = message
        self.causes: list[BaseException] = list(causes or [])
        super().__init__(message)

    def __str__(self) -> str:
        if not self.causes:
            return self.message
        details = "; ".join(str(c) for c in self.causes)
        return f"{self.message}: {details}"


class RenderError(DepnavError):
    """The layout engine could not produce a diagram for one request."""
