"""
Tests for the syslogconn command line.
"""

import socket
import sys
from pathlib import Path

import pytest
from click.testing import CliRunner
from loguru import logger

from syslogconn.cli.main import cli


@pytest.fixture(autouse=True)
def reset_logger():
    """The CLI installs handlers bound to the runner's streams; drop them."""
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestCLI:
    """Test CLI commands."""

    def test_cli_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "syslogconn command line" in result.output
        assert "send" in result.output
        assert "probe" in result.output
        assert "--debug-scope" in result.output

    def test_send_udp(self, udp_sink: socket.socket, udp_address: str):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["send", "<134>hello", "<134>world", "--address", udp_address]
        )

        assert result.exit_code == 0, result.output
        assert "Sent 2 message(s)" in result.output
        assert udp_sink.recvfrom(65535)[0] == b"<134>hello"
        assert udp_sink.recvfrom(65535)[0] == b"<134>world"

    def test_first_message_is_not_an_address(
        self, udp_sink: socket.socket, udp_address: str, monkeypatch
    ):
        """Test that the sink address comes from the environment, not MESSAGES."""
        monkeypatch.setenv("SYSLOGCONN_ADDRESS", udp_address)
        runner = CliRunner()
        result = runner.invoke(cli, ["send", "hello"])

        assert result.exit_code == 0, result.output
        assert udp_sink.recvfrom(65535)[0] == b"hello"

    def test_send_count_and_newline(self, udp_sink: socket.socket, udp_address: str):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["send", "ping", "-a", udp_address, "--count", "3", "--newline"]
        )

        assert result.exit_code == 0, result.output
        for _ in range(3):
            assert udp_sink.recvfrom(65535)[0] == b"ping\n"

    def test_send_reads_stdin(self, udp_sink: socket.socket, udp_address: str):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["send", "-a", udp_address], input="first\nsecond\n"
        )

        assert result.exit_code == 0, result.output
        assert udp_sink.recvfrom(65535)[0] == b"first"
        assert udp_sink.recvfrom(65535)[0] == b"second"

    def test_send_connection_failure(self, closed_port: int):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["send", "lost", "-a", f"127.0.0.1:{closed_port}", "--transport", "tcp"],
        )

        assert result.exit_code == 1
        assert "failed" in result.output

    def test_send_tls_with_ca_file(self, tls_sink_factory, pki, tmp_path: Path):
        sink = tls_sink_factory(pki.server, None)
        ca_file = tmp_path / "ca.pem"
        ca_file.write_text(pki.ca.cert_pem)

        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["send", "secure", "-a", sink.address, "-t", "tls", "--ca", str(ca_file)],
        )

        assert result.exit_code == 0, result.output
        assert "over tls" in result.output
        assert sink.wait()
        assert bytes(sink.received) == b"secure"

    def test_non_ascii_pem_file(self, tcp_address: str, tmp_path: Path):
        ca_file = tmp_path / "ca.pem"
        ca_file.write_bytes(b"\xff\xfe not a certificate")

        runner = CliRunner()
        result = runner.invoke(
            cli, ["probe", "-a", tcp_address, "-t", "tls", "--ca", str(ca_file)]
        )

        assert result.exit_code == 1
        assert "Cannot read" in result.output
        assert not isinstance(result.exception, UnicodeDecodeError)

    def test_probe_tcp(self, tcp_sink: socket.socket, tcp_address: str):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["probe", "--address", tcp_address, "--transport", "tcp"]
        )

        assert result.exit_code == 0, result.output
        assert f"Connected to {tcp_address} over tcp" in result.output

    def test_probe_tls_untrusted(self, tls_sink_factory, pki, other_pki, tmp_path):
        sink = tls_sink_factory(other_pki.server, None)
        ca_file = tmp_path / "ca.pem"
        ca_file.write_text(pki.ca.cert_pem)

        runner = CliRunner()
        result = runner.invoke(
            cli, ["probe", "-a", sink.address, "-t", "tls", "--ca", str(ca_file)]
        )
        assert result.exit_code == 1
        assert "verification" in result.output

        insecure = tls_sink_factory(other_pki.server, None)
        result = runner.invoke(
            cli,
            ["probe", "-a", insecure.address, "-t", "tls", "--insecure-skip-verify"],
        )
        assert result.exit_code == 0, result.output
        assert "(TLS)" in result.output

    def test_debug_scope_logs_dialer(self, udp_sink: socket.socket, udp_address: str):
        """Test that --debug-scope surfaces DEBUG records from that module only."""
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--debug-scope", "dialer", "probe", "-a", udp_address]
        )

        assert result.exit_code == 0, result.output
        assert "syslogconn.core.transport.dialer" in result.output
        assert "Closed udp connection" not in result.output
