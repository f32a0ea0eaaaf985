"""Render gateway: hand a DOT document to the layout engine, get diagram bytes back."""

from __future__ import annotations

import logging
import subprocess
from typing import Protocol, Sequence

from depnav.errors import RenderError

logger = logging.getLogger(__name__)

MEDIA_TYPES: dict[str, str] = {
    "svg": "image/svg+xml",
    "png": "image/png",
    "pdf": "application/pdf",
}


class Renderer(Protocol):
    media_type: str

    def render(self, document: str) -> bytes:
        ...


class GraphvizRenderer:
    """Run Graphviz ``dot`` once per document; no retries.

    The diagram is buffered rather than streamed to the client, so a failed
    render can still be answered with an ``error:`` body instead of a
    truncated image.
    """

    def __init__(self, command: Sequence[str] = ("dot", "-Tsvg"), output_format: str = "svg"):
        self.command = list(command)
        self.output_format = output_format
        self.media_type = MEDIA_TYPES.get(output_format, "application/octet-stream")

    def render(self, document: str) -> bytes:
        try:
            proc = subprocess.run(
                self.command,
                input=document.encode("utf-8"),
                capture_output=True,
            )
        except OSError as e:
            raise RenderError(f"cannot run {self.command[0]!r}: {e}") from e

        if proc.returncode != 0:
            stderr = proc.stderr.decode("utf-8", errors="replace").strip()
            msg = f"{self.command[0]} exited with status {proc.returncode}"
            if stderr:
                msg += f": {stderr}"
            raise RenderError(msg)
        logger.debug("rendered %d bytes of %s", len(proc.stdout), self.output_format)
        return proc.stdout


class DotSourceRenderer:
    """Return the DOT text itself, for debugging layouts without Graphviz."""

    media_type = "text/vnd.graphviz"

    def render(self, document: str) -> bytes:
        return document.encode("utf-8")
