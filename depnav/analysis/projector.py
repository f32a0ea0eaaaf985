"""Subgraph projector: picks the nodes and edges shown around a focal node."""

from __future__ import annotations

from dataclasses import dataclass

from depnav.analysis.breadcrumb import Breadcrumb
from depnav.analysis.graph_models import GraphIndex
from depnav.models import (
    EdgeDecl,
    EdgeDirection,
    EdgeStyle,
    NodeDecl,
    NodeStyle,
    SubgraphDocument,
    VersionLegend,
)


@dataclass(frozen=True)
class ProjectorOptions:
    show_fan_out: bool = True
    show_versions: bool = False


class SubgraphProjector:
    """Project a breadcrumb onto a GraphIndex as a SubgraphDocument."""

    def __init__(self, index: GraphIndex, options: ProjectorOptions | None = None):
        self.index = index
        self.options = options or ProjectorOptions()

    def project(self, crumb: Breadcrumb) -> SubgraphDocument:
        doc = SubgraphDocument()
        path = crumb.path
        focus = crumb.focus

        # Step 1: collapsed ancestor chain
        for i in range(len(path) - 1):
            node, nxt = path[i], path[i + 1]
            doc.nodes.append(NodeDecl(node, style=NodeStyle.DASHED, href=crumb.truncated(i).href()))
            if nxt in self.index.dependencies(node):
                direction = EdgeDirection.FORWARD
            else:
                direction = EdgeDirection.BACK
            doc.edges.append(EdgeDecl(node, nxt, style=EdgeStyle.DASHED, direction=direction))

        # Step 2: the focal node itself
        doc.nodes.append(NodeDecl(focus, style=NodeStyle.BOLD))

        # The chain edge already covers the predecessor. Breadcrumb nodes keep
        # their edges but are never redeclared: later DOT attributes win.
        skip = crumb.predecessor
        declared = set(path)

        # Step 3: direct dependencies
        for dep in sorted(self.index.dependencies(focus)):
            if dep == skip:
                continue
            if dep not in declared:
                doc.nodes.append(self._neighbor(crumb, dep))
            doc.edges.append(EdgeDecl(focus, dep))

        # Step 4: direct dependers
        for parent in sorted(self.index.dependents(focus)):
            if parent == skip:
                continue
            if parent not in declared:
                doc.nodes.append(self._neighbor(crumb, parent))
            doc.edges.append(EdgeDecl(parent, focus))

        if self.options.show_versions:
            doc.legend = self._legend()
        return doc

    def render_dot(self, crumb: Breadcrumb) -> str:
        return self.project(crumb).to_dot()

    def _neighbor(self, crumb: Breadcrumb, node: str) -> NodeDecl:
        label = node
        if self.options.show_fan_out:
            count = self.index.fan_out(node)
            if count:
                label = f"{node} ({count})"
        return NodeDecl(node, label=label, href=crumb.extended(node).href())

    def _legend(self) -> VersionLegend:
        return VersionLegend(rows=sorted(self.index.versions.items()))
