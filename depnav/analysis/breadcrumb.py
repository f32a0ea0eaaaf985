"""Breadcrumb: the navigation path from an outer ancestor to the focal node.

The whole navigation state lives in the repeated ``n`` query parameter, so a
breadcrumb is always rebuilt from the request and never stored.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
from urllib.parse import parse_qsl, urlencode

PARAM = "n"


@dataclass(frozen=True)
class Breadcrumb:
    path: tuple[str, ...]

    def __post_init__(self):
        if not self.path:
            raise ValueError("breadcrumb must hold at least one node")

    @classmethod
    def resolve(cls, requested: Iterable[str], default_root: str) -> "Breadcrumb":
        """Use the requested nodes verbatim, or ``[default_root]`` if there are none."""
        path = tuple(requested)
        if not path:
            return cls((default_root,))
        return cls(path)

    @classmethod
    def from_query(cls, query: str, default_root: str) -> "Breadcrumb":
        requested = [v for k, v in parse_qsl(query, keep_blank_values=True) if k == PARAM]
        return cls.resolve(requested, default_root)

    @property
    def focus(self) -> str:
        return self.path[-1]

    @property
    def ancestors(self) -> tuple[str, ...]:
        return self.path[:-1]

    @property
    def predecessor(self) -> str | None:
        return self.path[-2] if len(self.path) > 1 else None

    def truncated(self, index: int) -> "Breadcrumb":
        """Breadcrumb ending at ``path[index]``, dropping deeper history."""
        return Breadcrumb(self.path[: index + 1])

    def extended(self, node: str) -> "Breadcrumb":
        return Breadcrumb(self.path + (node,))

    def to_query(self) -> str:
        return urlencode([(PARAM, node) for node in self.path])

    def href(self) -> str:
        return "?" + self.to_query()

    def __len__(self) -> int:
        return len(self.path)

    def __iter__(self):
        return iter(self.path)
