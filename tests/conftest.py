"""Pytest configuration and fixtures for syslogconn testing.

Provides loopback UDP, TCP and TLS sinks plus throwaway PKI material. Every
fixture closes its sockets on teardown so tests never leak listeners.
"""

import socket
from collections.abc import Callable, Iterator

import pytest

from tests.test_helpers import (
    CertificateBundle,
    PKIMaterial,
    TLSSinkServer,
    create_server_ssl_context,
    create_test_pki,
    unused_port,
)


@pytest.fixture(scope="session")
def pki() -> PKIMaterial:
    """CA with a localhost server certificate and a client certificate."""
    return create_test_pki()


@pytest.fixture(scope="session")
def other_pki() -> PKIMaterial:
    """Unrelated CA whose certificates the ``pki`` CA does not trust."""
    return create_test_pki("syslogconn Untrusted CA")


@pytest.fixture
def udp_sink() -> Iterator[socket.socket]:
    """Bound UDP socket on loopback."""
    sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
    sock.bind(("127.0.0.1", 0))
    sock.settimeout(5.0)
    yield sock
    sock.close()


@pytest.fixture
def tcp_sink() -> Iterator[socket.socket]:
    """Listening TCP socket on loopback; tests accept connections themselves."""
    sock = socket.create_server(("127.0.0.1", 0))
    sock.settimeout(5.0)
    yield sock
    sock.close()


@pytest.fixture
def closed_port() -> int:
    return unused_port()


@pytest.fixture
def tls_sink_factory() -> Iterator[
    Callable[[CertificateBundle, str | None], TLSSinkServer]
]:
    """Start TLS sink servers presenting a given certificate.

    Example Usage:
        def test_tls(tls_sink_factory, pki):
            sink = tls_sink_factory(pki.server, None)
            conn = connect(sink.address, {...})
    """
    servers: list[TLSSinkServer] = []

    def factory(
        bundle: CertificateBundle, client_ca: str | None = None
    ) -> TLSSinkServer:
        server = TLSSinkServer(create_server_ssl_context(bundle, client_ca)).start()
        servers.append(server)
        return server

    yield factory

    for server in servers:
        server.stop()


def sink_address(sock: socket.socket) -> str:
    host, port = sock.getsockname()[:2]
    return f"{host}:{port}"


@pytest.fixture
def udp_address(udp_sink: socket.socket) -> str:
    return sink_address(udp_sink)


@pytest.fixture
def tcp_address(tcp_sink: socket.socket) -> str:
    return sink_address(tcp_sink)
