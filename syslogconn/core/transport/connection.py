"""
Send-only connection handle returned by the dialer.

A ``SyslogConnection`` exclusively owns one connected socket (plain or
TLS-wrapped). Payloads are written verbatim with no framing. The handle is
not thread-safe: callers serialize ``send`` and ``close`` themselves.
"""

from __future__ import annotations

import socket
import ssl
import time
from collections.abc import Iterable
from types import TracebackType
from typing import TypeAlias

from loguru import logger

from .interfaces import (
    ConnectionClosedError,
    SyslogAddress,
    TransportIOError,
    TransportKind,
    TransportTimeoutError,
)

Payload: TypeAlias = bytes | bytearray | memoryview | str | Iterable[int]


def _as_bytes(data: Payload) -> bytes | bytearray | memoryview:
    if isinstance(data, bytes | bytearray | memoryview):
        return data
    if isinstance(data, str):
        return data.encode("utf-8")
    # bytes(n) would build n zero bytes
    if isinstance(data, int) or not isinstance(data, Iterable):
        raise TypeError(f"unsupported payload type: {type(data).__name__}")
    return bytes(data)


class SyslogConnection:
    """Established connection to a syslog sink.

    Created only by a successful dial. ``deadline`` is an absolute
    ``time.monotonic()`` instant fixed at connect time; once it passes every
    ``send`` fails with ``TransportTimeoutError``. It is never extended.

    Example Usage:
        conn = connect("localhost:514", {"transport": "tcp", "timeout": 5})
        try:
            conn.send(b"<134>host app: hello\\n")
        finally:
            conn.close()
    """

    def __init__(
        self,
        sock: socket.socket,
        transport: TransportKind,
        address: SyslogAddress,
        deadline: float | None = None,
    ) -> None:
        """Wrap an already connected socket.

        Args:
            sock: Connected socket, TLS-wrapped for ``TransportKind.TLS``
            transport: Transport kind that was actually established
            address: Target the socket is connected to
            deadline: Absolute ``time.monotonic()`` deadline, or ``None``
        """
        self._sock: socket.socket | None = sock
        self._transport = transport
        self._address = address
        self._deadline = deadline

    @property
    def transport(self) -> TransportKind:
        """Transport kind used to create this connection."""
        return self._transport

    @property
    def address(self) -> SyslogAddress:
        return self._address

    @property
    def deadline(self) -> float | None:
        """Absolute monotonic deadline, or ``None`` when there is none."""
        return self._deadline

    @property
    def closed(self) -> bool:
        return self._sock is None

    @property
    def is_secure(self) -> bool:
        return isinstance(self._sock, ssl.SSLSocket)

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or ``None`` without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def send(self, data: Payload) -> None:
        """Write ``data`` to the sink in a single logical write.

        Datagram transports send exactly one datagram; stream transports
        flush the whole payload or fail. Nothing is retried.

        Raises:
            ConnectionClosedError: If the connection was closed
            TransportTimeoutError: If the deadline has passed
            TransportIOError: If the write fails or is short
            TypeError: If ``data`` is not bytes-like, text or an iterable of ints
            ValueError: If an int in ``data`` is outside 0-255
        """
        sock = self._sock
        if sock is None:
            raise ConnectionClosedError(f"{self._transport.value} connection closed")

        payload = _as_bytes(data)

        if self._deadline is not None:
            remaining = self._deadline - time.monotonic()
            if remaining <= 0:
                raise TransportTimeoutError(
                    f"{self._transport.value} deadline exceeded for {self._address}"
                )
            sock.settimeout(remaining)

        try:
            if self._transport.is_stream:
                sock.sendall(payload)
            else:
                sent = sock.send(payload)
                if sent != len(payload):
                    raise TransportIOError(
                        f"short datagram write: {sent} of {len(payload)} bytes"
                    )
        except TimeoutError as e:
            raise TransportTimeoutError(
                f"{self._transport.value} send timeout for {self._address}"
            ) from e
        except OSError as e:
            raise TransportIOError(f"{self._transport.value} send error: {e}") from e

    def close(self) -> None:
        """Release the socket and, for TLS, the secure session.

        Closing an already closed connection does nothing.

        Raises:
            TransportIOError: If the socket fails to close
        """
        sock = self._sock
        if sock is None:
            return
        self._sock = None

        try:
            sock.close()
        except OSError as e:
            logger.warning(f"Error closing {self._transport.value} connection: {e}")
            raise TransportIOError(f"{self._transport.value} close error: {e}") from e

        logger.debug(f"Closed {self._transport.value} connection to {self._address}")

    def __enter__(self) -> SyslogConnection:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return (
            f"SyslogConnection(transport={self._transport.value!r}, "
            f"address='{self._address}', {state})"
        )
