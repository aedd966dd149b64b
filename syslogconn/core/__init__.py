"""Core functionality for syslogconn: transports and logging helpers."""
