"""
Transport dialer for syslogconn.

Turns an address string and a ``SyslogConfig`` into a connected
``SyslogConnection``:

- udp: datagram socket connected to the resolved peer
- tcp: stream socket, every resolved address tried in order
- tls: tcp socket, then client context and a blocking handshake

Unknown transport values dial udp. When ``timeout`` is positive an absolute
deadline of now + timeout seconds is attached after the dial. Any socket
opened before a later-stage failure is closed before the error propagates.
"""

from __future__ import annotations

import socket
import ssl
import time
from collections.abc import Mapping
from typing import Any, TypeAlias

from loguru import logger
from pydantic import ValidationError

from ...model import SyslogConfig, TLSConfig
from .connection import SyslogConnection
from .interfaces import (
    CertificateVerificationError,
    ConnectError,
    DeadlineError,
    HandshakeError,
    ResolutionError,
    SyslogAddress,
    TransportConfigError,
    TransportKind,
)
from .tls import create_client_context

AddressInfo: TypeAlias = tuple[
    socket.AddressFamily, socket.SocketKind, int, str, tuple[Any, ...]
]


class TransportDialer:
    """Opens connections to syslog sinks.

    Stateless; one instance may dial any number of independent connections.
    All calls block until the connection is usable or an error is raised.
    """

    def dial(
        self,
        address: str,
        config: SyslogConfig | Mapping[str, Any] | None = None,
    ) -> SyslogConnection:
        """Establish a connection to ``address``.

        Args:
            address: Target in ``host:port`` form
            config: Connection configuration, as a model or JSON-style mapping

        Returns:
            Connected handle whose ``transport`` is the kind established

        Raises:
            TransportConfigError: If the configuration is invalid
            ResolutionError: If the address cannot be parsed or resolved
            ConnectError: If the socket cannot connect
            TLSSetupError: If TLS material cannot be loaded
            HandshakeError: If TLS negotiation fails
            DeadlineError: If the deadline cannot be applied
        """
        try:
            settings = SyslogConfig.coerce(config)
        except ValidationError as e:
            raise TransportConfigError(f"Invalid syslog configuration: {e}") from e

        target = SyslogAddress.parse(address)
        kind = settings.transport
        logger.debug(f"Dialing {target} via {kind.value}")

        match kind:
            case TransportKind.TCP:
                sock = self._dial_stream(target)
            case TransportKind.TLS:
                assert settings.tls is not None
                sock = self._dial_tls(target, settings.tls)
            case _:
                sock = self._dial_datagram(target)

        deadline = self._apply_deadline(sock, settings.timeout)

        logger.debug(f"Connected to {target} via {kind.value}")
        return SyslogConnection(sock, kind, target, deadline=deadline)

    def resolve(
        self, target: SyslogAddress, socktype: socket.SocketKind
    ) -> list[AddressInfo]:
        """Resolve ``target`` for the given socket type.

        Raises:
            ResolutionError: If name lookup fails or yields nothing
        """
        try:
            infos = socket.getaddrinfo(
                target.host, target.port, socket.AF_UNSPEC, socktype
            )
        except (socket.gaierror, UnicodeError) as e:
            raise ResolutionError(f"Failed to resolve {target}: {e}") from e
        if not infos:
            raise ResolutionError(f"No addresses found for {target}")
        return infos

    def _open(
        self, target: SyslogAddress, socktype: socket.SocketKind
    ) -> socket.socket:
        last_error: OSError | None = None
        for family, type_, proto, _canonname, sockaddr in self.resolve(
            target, socktype
        ):
            try:
                sock = socket.socket(family, type_, proto)
            except OSError as e:
                last_error = e
                continue
            try:
                sock.connect(sockaddr)
            except OSError as e:
                sock.close()
                last_error = e
                logger.debug(f"Connect to {sockaddr} failed: {e}")
                continue
            return sock

        raise ConnectError(f"Failed to connect to {target}: {last_error}") from (
            last_error
        )

    def _dial_datagram(self, target: SyslogAddress) -> socket.socket:
        return self._open(target, socket.SOCK_DGRAM)

    def _dial_stream(self, target: SyslogAddress) -> socket.socket:
        return self._open(target, socket.SOCK_STREAM)

    def _dial_tls(self, target: SyslogAddress, options: TLSConfig) -> socket.socket:
        sock = self._dial_stream(target)
        try:
            context = create_client_context(options)
            server_name = options.server_name or target.server_name
            return self._handshake(sock, context, server_name)
        except BaseException:
            sock.close()
            raise

    def _handshake(
        self, sock: socket.socket, context: ssl.SSLContext, server_name: str
    ) -> ssl.SSLSocket:
        try:
            tls_sock = context.wrap_socket(sock, server_hostname=server_name)
        except ssl.SSLCertVerificationError as e:
            raise CertificateVerificationError(
                f"TLS certificate verification failed for {server_name}: "
                f"{e.verify_message or e}"
            ) from e
        except (OSError, ValueError) as e:
            raise HandshakeError(f"TLS handshake with {server_name} failed: {e}") from e

        cipher = tls_sock.cipher()
        logger.debug(
            f"TLS handshake with {server_name} complete: "
            f"{tls_sock.version()} {cipher[0] if cipher else 'unknown cipher'}"
        )
        return tls_sock

    def _apply_deadline(self, sock: socket.socket, timeout: int) -> float | None:
        if timeout <= 0:
            return None
        deadline = time.monotonic() + timeout
        try:
            sock.settimeout(timeout)
        except (OSError, OverflowError, ValueError) as e:
            sock.close()
            raise DeadlineError(f"Failed to set connection deadline: {e}") from e
        return deadline


_default_dialer = TransportDialer()


def connect(
    address: str, config: SyslogConfig | Mapping[str, Any] | None = None
) -> SyslogConnection:
    """Open a connection to a syslog sink.

    Example Usage:
        conn = connect("localhost:514", {"transport": "udp"})
        conn.send(b"<134>app: started\\n")
        conn.close()
    """
    return _default_dialer.dial(address, config)
