"""
syslogconn - UDP, TCP and TLS connections to syslog sinks

Describe how to reach a syslog server with a small declarative configuration
and get back a send-only connection for writing raw payloads.

## Quick Start

```python
import syslogconn

conn = syslogconn.connect("localhost:514", {"transport": "tcp", "timeout": 5})
conn.send(b"<134>2024-01-01T00:00:00Z host app: hello\\n")
conn.close()
```

Payloads are written verbatim; message formatting is left to the caller.
"""

# Transport layer first: the models import from it
from .core.transport import (
    CertificateVerificationError,
    ConnectError,
    ConnectionClosedError,
    DeadlineError,
    HandshakeError,
    ResolutionError,
    SyslogAddress,
    SyslogConnection,
    TLSSetupError,
    TransportConfigError,
    TransportDialer,
    TransportError,
    TransportIOError,
    TransportKind,
    TransportTimeoutError,
    connect,
)
from .model import SyslogConfig, TLSConfig
from .module import SyslogModule
from .registry import ModuleExports, ModuleRegistry, get_module_registry

__version__ = "0.1.0"

__all__ = [
    "connect",
    "SyslogConfig",
    "TLSConfig",
    "SyslogConnection",
    "SyslogAddress",
    "TransportDialer",
    "TransportKind",
    "SyslogModule",
    "ModuleExports",
    "ModuleRegistry",
    "get_module_registry",
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
