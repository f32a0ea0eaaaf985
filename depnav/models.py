"""Data models for the rendered subgraph description."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class NodeStyle(enum.Enum):
    PLAIN = ""
    DASHED = "dashed"
    BOLD = "bold"


class EdgeStyle(enum.Enum):
    SOLID = ""
    DASHED = "dashed"


class EdgeDirection(enum.Enum):
    FORWARD = "forward"
    BACK = "back"


def quote(value: str) -> str:
    """Double-quote a DOT identifier or attribute value."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n")
    return f'"{escaped}"'


def escape_record(value: str) -> str:
    """Escape the characters that carry meaning inside a record label."""
    out = []
    for ch in value:
        if ch in "{}|<> \\\"":
            out.append("\\" + ch)
        else:
            out.append(ch)
    return "".join(out)


def _attrs(pairs: list[tuple[str, str]]) -> str:
    if not pairs:
        return ""
    return " [" + ", ".join(f"{k}={v}" for k, v in pairs) + "]"


@dataclass
class NodeDecl:
    node_id: str
    label: str | None = None
    style: NodeStyle = NodeStyle.PLAIN
    href: str | None = None

    def to_dot(self) -> str:
        pairs: list[tuple[str, str]] = []
        if self.href is not None:
            pairs.append(("href", quote(self.href)))
        if self.label is not None:
            pairs.append(("label", quote(self.label)))
        if self.style is not NodeStyle.PLAIN:
            pairs.append(("style", self.style.value))
        return f"{quote(self.node_id)}{_attrs(pairs)};"


@dataclass
class EdgeDecl:
    source: str
    target: str
    style: EdgeStyle = EdgeStyle.SOLID
    direction: EdgeDirection = EdgeDirection.FORWARD

    def to_dot(self) -> str:
        pairs: list[tuple[str, str]] = []
        if self.style is not EdgeStyle.SOLID:
            pairs.append(("style", self.style.value))
        if self.direction is EdgeDirection.BACK:
            pairs.append(("dir", "back"))
        return f"{quote(self.source)} -> {quote(self.target)}{_attrs(pairs)};"


@dataclass
class VersionLegend:
    """Two-column record of bare package name to recorded version."""
    node_id: str = "__versions__"
    rows: list[tuple[str, str]] = field(default_factory=list)

    def to_dot(self) -> str:
        names = "|".join(escape_record(name) for name, _ in self.rows)
        versions = "|".join(escape_record(ver) for _, ver in self.rows)
        label = "{{" + names + "}|{" + versions + "}}"
        # Cells are already escaped for the record parser; only wrap in quotes
        return f"{quote(self.node_id)} [shape=record, label=\"{label}\"];"


@dataclass
class SubgraphDocument:
    name: str = "deps"
    rankdir: str = "LR"
    nodes: list[NodeDecl] = field(default_factory=list)
    edges: list[EdgeDecl] = field(default_factory=list)
    legend: VersionLegend | None = None

    def node(self, node_id: str) -> NodeDecl | None:
        """Return the last declaration of node_id (later attributes win in DOT)."""
        found = None
        for decl in self.nodes:
            if decl.node_id == node_id:
                found = decl
        return found

    def edges_between(self, a: str, b: str) -> list[EdgeDecl]:
        return [e for e in self.edges if {e.source, e.target} == {a, b}]

    def to_dot(self) -> str:
        lines = [f"digraph {self.name} {{", f"\trankdir={self.rankdir};"]
        for decl in self.nodes:
            lines.append("\t" + decl.to_dot())
        for edge in self.edges:
            lines.append("\t" + edge.to_dot())
        if self.legend is not None and self.legend.rows:
            lines.append("\t" + self.legend.to_dot())
        lines.append("}")
        return "\n".join(lines) + "\n"
