"""
Core transport types for syslogconn.

This module defines the closed set of supported transports, the parsed
target address and the exception taxonomy every dial and send failure maps
onto, so callers can tell resolution, connect, TLS setup, handshake and
deadline problems apart.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .defaults import DEFAULT_TRANSPORT


class TransportKind(Enum):
    """Supported transport protocols."""

    UDP = "udp"
    TCP = "tcp"
    TLS = "tls"

    @classmethod
    def parse(cls, value: object) -> TransportKind:
        """Map a configured transport value onto a transport kind.

        Unrecognized, empty and missing values fall back to UDP. Existing
        callers depend on this, so it is not treated as an error.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for kind in cls:
                if kind.value == value:
                    return kind
        return cls(DEFAULT_TRANSPORT)

    @property
    def is_stream(self) -> bool:
        """Check if transport is connection-oriented."""
        return self is not TransportKind.UDP

    @property
    def is_secure(self) -> bool:
        """Check if transport uses encryption."""
        return self is TransportKind.TLS


class TransportError(Exception):
    """Base exception for transport-related errors."""

    pass


class TransportConfigError(TransportError):
    """Raised when the supplied connection configuration is invalid."""

    pass


class ResolutionError(TransportError):
    """Raised when the target address is malformed or cannot be resolved."""

    pass


class ConnectError(TransportError):
    """Raised when the socket cannot be created or connected."""

    pass


class TLSSetupError(TransportError):
    """Raised when certificate, key or CA material cannot be loaded."""

    pass


class HandshakeError(TransportError):
    """Raised when TLS negotiation with the server fails."""

    pass


class CertificateVerificationError(HandshakeError):
    """Raised when the server certificate fails chain or hostname checks."""

    pass


class DeadlineError(TransportError):
    """Raised when the connection deadline cannot be applied."""

    pass


class TransportIOError(TransportError):
    """Raised when a send or close on an established connection fails."""

    pass


class TransportTimeoutError(TransportIOError):
    """Raised when an operation is attempted after the deadline expired."""

    pass


class ConnectionClosedError(TransportIOError):
    """Raised when a closed connection is used."""

    pass


@dataclass(frozen=True, slots=True)
class SyslogAddress:
    """A parsed ``host:port`` target.

    ``host`` is ``None`` when the address names the local system (``":514"``).
    ``port`` is kept as text so service names such as ``syslog`` resolve
    through the system services database.
    """

    host: str | None
    port: str

    @classmethod
    def parse(cls, address: str) -> SyslogAddress:
        """Split ``address`` into host and port.

        IPv6 literals must be bracketed (``[::1]:514``).

        Raises:
            ResolutionError: If the address is not in ``host:port`` form
        """
        if not isinstance(address, str) or not address:
            raise ResolutionError(f"Invalid address: {address!r}")

        if address.startswith("["):
            closing = address.find("]")
            if closing < 0:
                raise ResolutionError(f"Missing ']' in address: {address}")
            host = address[1:closing]
            rest = address[closing + 1 :]
            if not rest.startswith(":"):
                raise ResolutionError(f"Missing port in address: {address}")
            port = rest[1:]
        else:
            host, sep, port = address.rpartition(":")
            if not sep:
                raise ResolutionError(f"Missing port in address: {address}")
            if ":" in host:
                raise ResolutionError(f"Too many colons in address: {address}")

        if not port:
            raise ResolutionError(f"Missing port in address: {address}")
        if port.isdigit() and not 0 <= int(port) <= 65535:
            raise ResolutionError(f"Invalid port in address: {address}")

        return cls(host=host or None, port=port)

    @property
    def server_name(self) -> str:
        """Host name to present for SNI when no override is configured."""
        return self.host or "localhost"

    def __str__(self) -> str:
        host = self.host or ""
        if ":" in host:
            host = f"[{host}]"
        return f"{host}:{self.port}"
