"""Edge-list sources: a producer command (``go mod graph``) or a dumped file."""

from __future__ import annotations

import logging
import subprocess
import sys
from contextlib import closing
from pathlib import Path
from typing import IO, Iterator, Sequence

from depnav.analysis.graph_index import GraphIndexBuilder
from depnav.analysis.graph_models import GraphIndex
from depnav.errors import GraphBuildError

logger = logging.getLogger(__name__)


def build_index_from_stream(stream: IO[str]) -> GraphIndex:
    """Build from an open text stream; read errors become a GraphBuildError."""
    builder = GraphIndexBuilder()
    try:
        for line in stream:
            builder.add_line(line)
    except (OSError, UnicodeDecodeError) as e:
        raise GraphBuildError("reading edge list failed", [e]) from e
    return builder.freeze()


def build_index_from_file(path: str | Path) -> GraphIndex:
    """Build from a dumped edge list; ``-`` reads standard input."""
    if str(path) == "-":
        return build_index_from_stream(sys.stdin)
    try:
        with open(path, encoding="utf-8") as fh:
            return build_index_from_stream(fh)
    except OSError as e:
        raise GraphBuildError(f"cannot open {path}", [e]) from e


def build_index_from_command(command: Sequence[str], cwd: str | Path | None = None) -> GraphIndex:
    """Run the producer command and build from its standard output."""
    builder = GraphIndexBuilder()
    with closing(iter_command_lines(command, cwd=cwd)) as lines:
        builder.add_lines(lines)
    return builder.freeze()


def iter_command_lines(command: Sequence[str], cwd: str | Path | None = None) -> Iterator[str]:
    """Yield the command's stdout lines, then check how the command exited.

    A read error and a nonzero exit are reported together in one
    GraphBuildError so that neither cause is hidden.
    """
    logger.info("running %s", " ".join(command))
    try:
        proc = subprocess.Popen(
            list(command),
            cwd=cwd,
            stdout=subprocess.PIPE,
            text=True,
            encoding="utf-8",
        )
    except OSError as e:
        raise GraphBuildError(f"cannot start {command[0]!r}", [e]) from e

    causes: list[BaseException] = []
    finished = False
    try:
        try:
            for line in proc.stdout:
                yield line
        except (OSError, UnicodeDecodeError) as e:
            causes.append(e)
        finished = True
    finally:
        if not finished:
            # The consumer stopped early (parse error): don't leave a zombie
            proc.kill()
            proc.wait()
            proc.stdout.close()

    proc.stdout.close()
    if proc.wait() != 0:
        causes.append(subprocess.CalledProcessError(proc.returncode, list(command)))
    if causes:
        raise GraphBuildError("building dependency graph failed", causes)
