"""Runtime configuration with environment-variable fallbacks."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass

LOOPBACK_HOST = "127.0.0.1"
DEFAULT_GRAPH_COMMAND = "go mod graph"
DEFAULT_RENDERER = "dot"
DEFAULT_FORMAT = "svg"


@dataclass
class NavigatorConfig:
    graph_command: str = ""
    renderer_command: str = ""
    output_format: str = ""
    port: int | None = None
    open_browser: bool = True
    show_fan_out: bool = True
    show_versions: bool = False

    def __post_init__(self):
        if not self.graph_command:
            self.graph_command = os.getenv("DEPNAV_GRAPH_COMMAND", DEFAULT_GRAPH_COMMAND)
        if not self.renderer_command:
            self.renderer_command = os.getenv("DEPNAV_RENDERER", DEFAULT_RENDERER)
        if not self.output_format:
            self.output_format = os.getenv("DEPNAV_FORMAT", DEFAULT_FORMAT)
        if self.port is None:
            self.port = int(os.getenv("DEPNAV_PORT", "0"))

    @property
    def host(self) -> str:
        # Never listen beyond loopback.
        return LOOPBACK_HOST

    def graph_argv(self) -> list[str]:
        return shlex.split(self.graph_command)

    def renderer_argv(self) -> list[str]:
        """Layout engine argv, with the output format flag appended."""
        return shlex.split(self.renderer_command) + [f"-T{self.output_format}"]
