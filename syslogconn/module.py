"""Host-facing syslog module.

Registered once, at import time, under ``MODULE_NAME``. The only export is
``connect``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .core.transport import SyslogConnection, TransportDialer
from .core.transport.defaults import MODULE_NAME
from .model import SyslogConfig
from .registry import ModuleExports, register_module


class SyslogModule:
    """Module object handed to the host runtime."""

    def __init__(self, dialer: TransportDialer | None = None) -> None:
        self._dialer = dialer or TransportDialer()

    def connect(
        self,
        address: str,
        config: SyslogConfig | Mapping[str, Any] | None = None,
    ) -> SyslogConnection:
        """Open a new connection to a syslog server."""
        return self._dialer.dial(address, config)

    def exports(self) -> ModuleExports:
        return ModuleExports(named={"connect": self.connect})


register_module(MODULE_NAME, SyslogModule())
