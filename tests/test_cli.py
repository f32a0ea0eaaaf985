"""Tests for the click CLI."""

import sys
from pathlib import Path
from unittest.mock import MagicMock, patch

from click.testing import CliRunner

from depnav.cli import bind_loopback, cli, make_renderer
from depnav.config import NavigatorConfig
from depnav.render import DotSourceRenderer, GraphvizRenderer

FIXTURES = Path(__file__).parent / "fixtures"
EDGES = str(FIXTURES / "modgraph.txt")


def test_stats_from_file():
    result = CliRunner().invoke(cli, ["stats", "--file", EDGES])
    assert result.exit_code == 0, result.output
    assert "root:     example.com/app" in result.output
    assert "edges:    6" in result.output


def test_stats_from_stdin():
    result = CliRunner().invoke(cli, ["stats", "--file", "-"], input="A B\nB C\n")
    assert result.exit_code == 0, result.output
    assert "modules:  3" in result.output


def test_dot_default_root():
    result = CliRunner().invoke(cli, ["dot", "--file", EDGES])
    assert result.exit_code == 0, result.output
    assert '"example.com/app" [style=bold];' in result.output


def test_dot_breadcrumb_with_versions():
    result = CliRunner().invoke(
        cli,
        ["dot", "--file", EDGES, "--versions", "example.com/app", "github.com/spf13/cobra@v1.5.0"],
    )
    assert result.exit_code == 0, result.output
    assert '"example.com/app" -> "github.com/spf13/cobra@v1.5.0" [style=dashed];' in result.output
    assert "shape=record" in result.output


def test_malformed_edge_list_is_fatal():
    result = CliRunner().invoke(cli, ["stats", "--file", "-"], input="A B\nbroken\n")
    assert result.exit_code == 1
    assert "weird line 2" in result.output


def test_failing_graph_command_lists_every_cause(monkeypatch):
    script = "import sys; sys.stdout.buffer.write(b'\\xff\\n'); sys.exit(4)"
    monkeypatch.setenv("DEPNAV_GRAPH_COMMAND", f'"{sys.executable}" -c "{script}"')
    result = CliRunner().invoke(cli, ["stats"])
    assert result.exit_code == 1
    assert "building dependency graph failed" in result.output
    assert result.output.count("  - ") == 2


def test_serve_opens_browser_once_then_serves():
    server = MagicMock()
    with patch("depnav.cli.webbrowser.open") as open_browser, \
         patch("uvicorn.Server", return_value=server):
        result = CliRunner().invoke(cli, ["serve", "--file", EDGES, "--renderer", "none"])

    assert result.exit_code == 0, result.output
    open_browser.assert_called_once()
    url = open_browser.call_args[0][0]
    assert url.startswith("http://localhost:")
    server.run.assert_called_once()
    sock = server.run.call_args.kwargs["sockets"][0]
    assert sock.getsockname()[0] == "127.0.0.1"
    sock.close()


def test_serve_no_open():
    server = MagicMock()
    with patch("depnav.cli.webbrowser.open") as open_browser, \
         patch("uvicorn.Server", return_value=server):
        result = CliRunner().invoke(cli, ["serve", "--file", EDGES, "--no-open"])
    assert result.exit_code == 0, result.output
    open_browser.assert_not_called()
    server.run.call_args.kwargs["sockets"][0].close()


def test_bind_failure_is_fatal():
    with patch("depnav.cli.webbrowser.open") as open_browser, \
         patch("depnav.cli.bind_loopback", side_effect=OSError("address in use")):
        result = CliRunner().invoke(cli, ["serve", "--file", EDGES, "--port", "8421"])
    assert result.exit_code == 1
    assert "cannot listen on 127.0.0.1:8421" in result.output
    open_browser.assert_not_called()


def test_make_renderer():
    assert isinstance(make_renderer(NavigatorConfig(renderer_command="none")), DotSourceRenderer)
    renderer = make_renderer(NavigatorConfig(renderer_command="dot", output_format="png"))
    assert isinstance(renderer, GraphvizRenderer)
    assert renderer.command == ["dot", "-Tpng"]
    assert renderer.media_type == "image/png"


def test_config_reads_environment(monkeypatch):
    monkeypatch.setenv("DEPNAV_FORMAT", "pdf")
    monkeypatch.setenv("DEPNAV_PORT", "8421")
    monkeypatch.setenv("DEPNAV_GRAPH_COMMAND", "cat deps.txt")
    config = NavigatorConfig()
    assert config.output_format == "pdf"
    assert config.port == 8421
    assert config.graph_argv() == ["cat", "deps.txt"]
    assert config.host == "127.0.0.1"


def test_config_explicit_values_win(monkeypatch):
    monkeypatch.setenv("DEPNAV_FORMAT", "pdf")
    assert NavigatorConfig(output_format="svg").output_format == "svg"


def test_bind_loopback_ephemeral_port():
    sock = bind_loopback("127.0.0.1", 0)
    try:
        host, port = sock.getsockname()
        assert host == "127.0.0.1"
        assert port > 0
    finally:
        sock.close()
