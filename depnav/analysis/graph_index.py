"""Graph index builder: parses `<before> <after>` edge lines into a GraphIndex."""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Iterable

from depnav.analysis.graph_models import GraphIndex
from depnav.errors import EdgeListParseError, GraphBuildError

logger = logging.getLogger(__name__)


class GraphIndexBuilder:
    """Accumulate edges, then freeze them into a read-only GraphIndex."""

    def __init__(self):
        self.default_root: str | None = None
        self.forward: dict[str, set[str]] = {}
        self.reverse: dict[str, set[str]] = {}
        self.versions: dict[str, str] = {}
        self._line_number = 0

    def add_line(self, line: str) -> None:
        self._line_number += 1
        line = line.rstrip("\r\n")
        before, sep, after = line.partition(" ")
        if not sep:
            raise EdgeListParseError(self._line_number, line)

        if self.default_root is None:
            self.default_root = before

        # Last write wins when a bare name shows up with several versions
        for token in (before, after):
            pkg, at, ver = token.partition("@")
            if at:
                self.versions[pkg] = ver

        self.add_edge(before, after)

    def add_edge(self, before: str, after: str) -> None:
        self.forward.setdefault(before, set()).add(after)
        self.reverse.setdefault(after, set()).add(before)

    def add_lines(self, lines: Iterable[str]) -> "GraphIndexBuilder":
        for line in lines:
            self.add_line(line)
        return self

    def freeze(self) -> GraphIndex:
        if self.default_root is None:
            raise GraphBuildError("empty edge list")
        index = GraphIndex(
            default_root=self.default_root,
            forward=MappingProxyType({k: frozenset(v) for k, v in self.forward.items()}),
            reverse=MappingProxyType({k: frozenset(v) for k, v in self.reverse.items()}),
            versions=MappingProxyType(dict(self.versions)),
        )
        logger.info(
            "graph index built: %d nodes, %d edges, root %s",
            len(index.nodes), index.edge_count, index.default_root,
        )
        return index


def build_index(lines: Iterable[str]) -> GraphIndex:
    """Build a GraphIndex from an iterable of edge-list lines."""
    return GraphIndexBuilder().add_lines(lines).freeze()
