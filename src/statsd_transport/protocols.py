# src/statsd_transport/protocols.py
"""Protocol definitions for the connection layer's collaborators.

The connection core is generic over three structural interfaces:

- TransportProtocol: the connect/send_raw/close primitives a transport
  variant supplies. This is the only polymorphism boundary.
- TelemetryProtocol: self-telemetry counters (sent/dropped).
- LoggerProtocol: leveled logging. Both structlog loggers and stdlib
  logging.Logger satisfy it.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class TransportProtocol(Protocol):
    """Protocol for transport variants.

    Lifecycle:
        1. Construction: destination is fixed, no socket is opened
        2. connect(): opens a socket; afterwards is_open is True
        3. send_raw(): one transport-level write per call
        4. close(): releases the socket; afterwards is_open is False

    Error handling:
        - connect() MUST leave is_open False if it raises
        - send_raw() raises whatever the socket raises; the connection core
          classifies it
        - close() MUST be idempotent and release the socket at most once
    """

    @property
    def is_open(self) -> bool:
        """Whether a connected socket is currently held."""
        ...

    def connect(self) -> None:
        """Open a socket to the destination, replacing nothing.

        Raises:
            OSError: If the socket cannot be created or connected
        """
        ...

    def send_raw(self, message: bytes) -> None:
        """Write one message with a single transport-level write.

        Raises:
            OSError: If the write fails
            StreamClosedError: If a stream peer closed the connection
        """
        ...

    def close(self) -> None:
        """Release the socket if one is held."""
        ...


@runtime_checkable
class TelemetryProtocol(Protocol):
    """Protocol for self-telemetry counters.

    Implementations must be non-blocking. The connection core never inspects
    return values and tolerates (logs and ignores) exceptions.
    """

    def sent(self, *, bytes: int, packets: int) -> None:
        """Record a successfully written message."""
        ...

    def dropped(self, *, bytes: int, packets: int) -> None:
        """Record a message abandoned after its final failed attempt."""
        ...


@runtime_checkable
class LoggerProtocol(Protocol):
    """Protocol for the injected logger."""

    def debug(self, event: str) -> object:
        ...

    def error(self, event: str) -> object:
        ...
