"""Data models for the dependency graph snapshot."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

_EMPTY: frozenset[str] = frozenset()


def bare_name(token: str) -> str:
    """Strip an ``@version`` suffix from a node token."""
    return token.partition("@")[0]


@dataclass(frozen=True)
class GraphIndex:
    """Immutable forward/reverse adjacency over a module edge list."""
    default_root: str
    forward: Mapping[str, frozenset[str]] = field(default_factory=lambda: MappingProxyType({}))  # depender -> {dependencies}
    reverse: Mapping[str, frozenset[str]] = field(default_factory=lambda: MappingProxyType({}))  # dependency -> {dependers}
    versions: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))  # bare name -> version

    def dependencies(self, node: str) -> frozenset[str]:
        return self.forward.get(node, _EMPTY)

    def dependents(self, node: str) -> frozenset[str]:
        return self.reverse.get(node, _EMPTY)

    def fan_out(self, node: str) -> int:
        return len(self.dependencies(node))

    def version_of(self, node: str) -> str | None:
        return self.versions.get(bare_name(node))

    @property
    def nodes(self) -> list[str]:
        return sorted(set(self.forward) | set(self.reverse))

    @property
    def edge_count(self) -> int:
        return sum(len(targets) for targets in self.forward.values())

    def __contains__(self, node: object) -> bool:
        return node in self.forward or node in self.reverse
