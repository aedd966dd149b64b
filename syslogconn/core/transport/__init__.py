"""
syslogconn transport layer

Dials UDP, TCP and TLS connections to syslog sinks and hands back a
send-only ``SyslogConnection``.

Example Usage:
    conn = connect("logs.example.com:6514", {
        "transport": "tls",
        "timeout": 10,
        "tls": {"ca": ca_pem, "serverName": "logs.example.com"},
    })
    conn.send(b"<134>2024-01-01T00:00:00Z host app: hello\n")
    conn.close()
"""

from .connection import SyslogConnection
from .dialer import TransportDialer, connect
from .interfaces import (
    CertificateVerificationError,
    ConnectError,
    ConnectionClosedError,
    DeadlineError,
    HandshakeError,
    ResolutionError,
    SyslogAddress,
    TLSSetupError,
    TransportConfigError,
    TransportError,
    TransportIOError,
    TransportKind,
    TransportTimeoutError,
)
from .tls import create_client_context

__all__ = [
    "connect",
    "TransportDialer",
    "SyslogConnection",
    "SyslogAddress",
    "TransportKind",
    "create_client_context",
    "TransportError",
    "TransportConfigError",
    "ResolutionError",
    "ConnectError",
    "TLSSetupError",
    "HandshakeError",
    "CertificateVerificationError",
    "DeadlineError",
    "TransportIOError",
    "TransportTimeoutError",
    "ConnectionClosedError",
]
