"""
Centralized transport defaults for syslogconn.

Values shared by the dialer, the configuration models and the command line
so that every entry point falls back to the same behavior.
"""

from __future__ import annotations

# Well-known syslog port (RFC 5426 for UDP, also the customary TCP port)
DEFAULT_SYSLOG_PORT = 514

# Default target used by the command line when nothing is configured
DEFAULT_ADDRESS = f"localhost:{DEFAULT_SYSLOG_PORT}"

# Transport used when the configured value is empty or unrecognized
DEFAULT_TRANSPORT = "udp"

# Timeout of 0 seconds means no deadline is attached
NO_DEADLINE = 0

# Name the module object is registered under with the host registry
MODULE_NAME = "syslog"
