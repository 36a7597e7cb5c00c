# src/statsd_transport/connection.py
"""Connection: the transport-agnostic send/retry/drop algorithm.

A Connection wraps one transport (see TransportProtocol) and turns every
write() into exactly one of two outcomes:

- sent: the message reached the socket, on the first attempt or after one
  reconnect. Telemetry sent() fires and a debug line is logged.
- dropped: the message was abandoned. Telemetry dropped() fires and an
  error line naming the failure is logged.

Retry policy:
    Failures are classified by classify_error(). A RETRYABLE failure closes
    the transport, reconnects and resends once. A NON_RETRYABLE failure, or
    any failure of the resend, drops the message. A failed connect() is
    handled exactly like a failed send.

Thread Safety:
    NOT thread-safe. Concurrent write()/close() calls race on the transport
    handle. Use one Connection per thread or serialize access externally.
"""

import contextlib
from types import TracebackType
from typing import Any

import structlog
from tenacity import Retrying, retry_if_exception, stop_after_attempt, wait_none

from statsd_transport.errors import is_retryable
from statsd_transport.protocols import LoggerProtocol, TelemetryProtocol, TransportProtocol
from statsd_transport.telemetry import NullTelemetry

LOG_PREFIX = "Statsd:"

# Total tries per write(): the first send plus one reconnect-and-resend.
MAX_ATTEMPTS = 2


class Connection:
    """Send pre-serialized messages over a transport without ever raising.

    Example:
        connection = Connection(DatagramTransport(settings), telemetry=CounterTelemetry())
        connection.write(b"page.views:1|c")
        connection.close()
    """

    def __init__(
        self,
        transport: TransportProtocol,
        *,
        telemetry: TelemetryProtocol | None = None,
        logger: LoggerProtocol | None = None,
    ) -> None:
        """Wrap a transport. No socket is opened until the first write().

        Args:
            transport: Transport variant supplying connect/send_raw/close
            telemetry: Self-telemetry counters (default: NullTelemetry)
            logger: Logger for send/drop lines (default: module structlog logger)
        """
        self._transport = transport
        self._telemetry: TelemetryProtocol = telemetry if telemetry is not None else NullTelemetry()
        self._logger: LoggerProtocol = logger if logger is not None else structlog.get_logger(__name__)

    @property
    def transport(self) -> TransportProtocol:
        return self._transport

    @property
    def telemetry(self) -> TelemetryProtocol:
        return self._telemetry

    @property
    def is_open(self) -> bool:
        """Whether the underlying transport currently holds a socket."""
        return self._transport.is_open

    def write(self, message: bytes | str) -> None:
        """Send one message, reconnecting once on a retryable failure.

        This method MUST NOT raise. Every failure ends in a telemetry
        dropped() event and an error log line.

        Args:
            message: Serialized message. str is UTF-8 encoded; any type other
                than str or a bytes-like object is dropped without sending.
        """
        try:
            payload = _as_bytes(message)
        except TypeError as exc:
            self._record_dropped(b"", exc)
            return

        try:
            self._send_with_retry(payload)
        except Exception as exc:
            self._record_dropped(payload, exc)
            return

        self._record_sent(payload, message)

    def close(self) -> None:
        """Release the transport socket. Idempotent, never raises."""
        self._release()

    def __enter__(self) -> "Connection":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        self.close()

    def _send_with_retry(self, payload: bytes) -> None:
        """Run the attempt loop; raises the final failure if the message is lost."""
        for attempt in Retrying(
            stop=stop_after_attempt(MAX_ATTEMPTS),
            wait=wait_none(),
            retry=retry_if_exception(is_retryable),
            reraise=True,
        ):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    self._release()
                    self._transport.connect()
                elif not self._transport.is_open:
                    self._transport.connect()
                self._transport.send_raw(payload)

    def _release(self) -> None:
        # Release is best-effort; the transport has already forgotten the socket.
        with contextlib.suppress(Exception):
            self._transport.close()

    def _record_sent(self, payload: bytes, message: bytes | str) -> None:
        text = message if isinstance(message, str) else payload.decode("utf-8", errors="replace")
        _call_quietly(self._telemetry.sent, bytes=len(payload), packets=1)
        _call_quietly(self._logger.debug, f"{LOG_PREFIX} {text}")

    def _record_dropped(self, payload: bytes, error: Exception) -> None:
        _call_quietly(self._telemetry.dropped, bytes=len(payload), packets=1)
        _call_quietly(self._logger.error, f"{LOG_PREFIX} {type(error).__name__} {error}")


def _as_bytes(message: object) -> bytes:
    if isinstance(message, str):
        return message.encode("utf-8", errors="replace")
    if isinstance(message, (bytes, bytearray, memoryview)):
        return bytes(message)
    raise TypeError(f"message must be str or bytes-like, not {type(message).__name__}")


def _call_quietly(func: Any, *args: Any, **kwargs: Any) -> None:
    """Invoke a telemetry or logger callback, ignoring its failures."""
    with contextlib.suppress(Exception):
        func(*args, **kwargs)
