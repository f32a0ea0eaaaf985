"""Click CLI with serve, dot, and stats subcommands."""

from __future__ import annotations

import logging
import socket
import webbrowser
from pathlib import Path

import click

from depnav import __version__
from depnav.analysis.breadcrumb import Breadcrumb
from depnav.analysis.graph_models import GraphIndex
from depnav.analysis.projector import ProjectorOptions, SubgraphProjector
from depnav.config import NavigatorConfig
from depnav.errors import DepnavError, GraphBuildError
from depnav.render import DotSourceRenderer, GraphvizRenderer, Renderer
from depnav.source import build_index_from_command, build_index_from_file

logger = logging.getLogger(__name__)

_file_option = click.option(
    "--file", "-f", "edge_file",
    type=click.Path(allow_dash=True, path_type=Path),
    help="Read an edge list from a file ('-' for stdin) instead of running the graph command",
)
_cwd_option = click.option(
    "--cwd",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Directory to run the graph command in",
)


def load_index(config: NavigatorConfig, edge_file: Path | None, cwd: Path | None = None) -> GraphIndex:
    """Build the graph index, turning build failures into a ClickException."""
    try:
        if edge_file is not None:
            return build_index_from_file(edge_file)
        return build_index_from_command(config.graph_argv(), cwd=cwd)
    except GraphBuildError as e:
        lines = [e.message] + [f"  - {cause}" for cause in e.causes]
        raise click.ClickException("\n".join(lines))
    except DepnavError as e:
        raise click.ClickException(str(e))


def make_renderer(config: NavigatorConfig) -> Renderer:
    if config.renderer_command == "none":
        return DotSourceRenderer()
    return GraphvizRenderer(config.renderer_argv(), output_format=config.output_format)


def bind_loopback(host: str, port: int) -> socket.socket:
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
        sock.listen()
    except OSError:
        sock.close()
        raise
    return sock


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """depnav: drill through a module dependency graph in the browser."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@_file_option
@_cwd_option
@click.option("--port", "-p", type=int, default=None, help="Port number (default: ephemeral)")
@click.option("--format", "output_format", default=None, help="Graphviz output format")
@click.option("--renderer", "renderer_command", default=None, help="Layout engine command ('none' serves DOT text)")
@click.option("--open/--no-open", "open_browser", default=True, help="Open browser automatically")
@click.option("--versions/--no-versions", default=False, help="Show a version legend")
@click.option("--fan-out/--no-fan-out", default=True, help="Show dependency counts on neighbors")
def serve(
    edge_file: Path | None,
    cwd: Path | None,
    port: int | None,
    output_format: str | None,
    renderer_command: str | None,
    open_browser: bool,
    versions: bool,
    fan_out: bool,
):
    """Start the navigator on a loopback port."""
    import uvicorn

    from depnav.web import create_app

    config = NavigatorConfig(
        renderer_command=renderer_command or "",
        output_format=output_format or "",
        port=port,
        open_browser=open_browser,
        show_fan_out=fan_out,
        show_versions=versions,
    )
    index = load_index(config, edge_file, cwd)
    options = ProjectorOptions(show_fan_out=config.show_fan_out, show_versions=config.show_versions)
    app = create_app(index, make_renderer(config), options)

    try:
        sock = bind_loopback(config.host, config.port)
    except OSError as e:
        raise click.ClickException(f"cannot listen on {config.host}:{config.port}: {e}")

    url = f"http://localhost:{sock.getsockname()[1]}"
    logger.info("serving %d modules at %s", len(index.nodes), url)

    if config.open_browser:
        webbrowser.open(url)

    server = uvicorn.Server(uvicorn.Config(app, log_level="info"))
    server.run(sockets=[sock])


@cli.command()
@_file_option
@_cwd_option
@click.option("--versions/--no-versions", default=False, help="Include a version legend")
@click.argument("nodes", nargs=-1)
def dot(edge_file: Path | None, cwd: Path | None, versions: bool, nodes: tuple[str, ...]):
    """Print the DOT document for a breadcrumb of NODES."""
    config = NavigatorConfig()
    index = load_index(config, edge_file, cwd)
    projector = SubgraphProjector(index, ProjectorOptions(show_versions=versions))
    crumb = Breadcrumb.resolve(nodes, index.default_root)
    click.echo(projector.render_dot(crumb), nl=False)


@cli.command()
@_file_option
@_cwd_option
def stats(edge_file: Path | None, cwd: Path | None):
    """Print the size of the dependency graph."""
    config = NavigatorConfig()
    index = load_index(config, edge_file, cwd)
    click.echo(f"root:     {index.default_root}")
    click.echo(f"modules:  {len(index.nodes)}")
    click.echo(f"edges:    {index.edge_count}")
    click.echo(f"versions: {len(index.versions)}")


if __name__ == "__main__":
    cli()
