"""Command line interface for syslogconn."""
