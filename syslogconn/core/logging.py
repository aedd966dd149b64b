"""Logging setup for syslogconn.

The library only emits records through loguru's ``logger`` and installs no
handlers on import. The CLI calls ``configure_logging`` once to route records
to stderr, optionally raising selected modules to DEBUG while everything else
stays at the chosen level.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from loguru import logger

PACKAGE = "syslogconn"

LOG_FORMAT = "{time:HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}"

# Short names accepted by --debug-scope
SCOPE_ALIASES: dict[str, str] = {
    "transport": "syslogconn.core.transport",
    "dialer": "syslogconn.core.transport.dialer",
    "connection": "syslogconn.core.transport.connection",
    "tls": "syslogconn.core.transport.tls",
    "cli": "syslogconn.cli",
}


def resolve_scope(scope: str) -> str:
    """Map a debug scope to the module prefix it selects.

    Aliases expand to their module. Any other dotted path is taken relative
    to the package unless it already names it.
    """
    scope = scope.strip()
    if scope in SCOPE_ALIASES:
        return SCOPE_ALIASES[scope]
    if scope == PACKAGE or scope.startswith(f"{PACKAGE}."):
        return scope
    return f"{PACKAGE}.{scope}"


@dataclass(frozen=True, slots=True)
class DebugScopeFilter:
    """Loguru filter passing DEBUG records from modules under ``prefixes``."""

    prefixes: tuple[str, ...]

    def matches(self, module_name: str) -> bool:
        return any(
            module_name == prefix or module_name.startswith(f"{prefix}.")
            for prefix in self.prefixes
        )

    def __call__(self, record: dict[str, Any]) -> bool:
        if record["level"].name != "DEBUG":
            return False
        return self.matches(record["name"] or "")


def configure_logging(
    level: str,
    *,
    debug_scopes: Iterable[str] = (),
    colorize: bool = False,
) -> tuple[int, ...]:
    """Replace loguru's handlers with stderr sinks.

    Returns the ids of the installed handlers. A second, DEBUG-only sink is
    added for ``debug_scopes`` unless ``level`` already admits DEBUG.
    """
    logger.remove()
    handler_ids = [
        logger.add(sys.stderr, level=level, format=LOG_FORMAT, colorize=colorize)
    ]

    prefixes = tuple(
        dict.fromkeys(resolve_scope(scope) for scope in debug_scopes if scope.strip())
    )
    if prefixes and level.upper() != "DEBUG":
        handler_ids.append(
            logger.add(
                sys.stderr,
                level="DEBUG",
                format=LOG_FORMAT,
                colorize=colorize,
                filter=DebugScopeFilter(prefixes),
            )
        )
    return tuple(handler_ids)
