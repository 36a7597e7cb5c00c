# src/statsd_transport/transports/uds.py
"""Stream transport over a Unix domain socket.

Message framing is the caller's business: send_raw() writes exactly the
bytes it is given, with no delimiter.
"""

from __future__ import annotations

import socket
from collections.abc import Mapping

from statsd_transport.config import StreamSettings
from statsd_transport.connection import Connection
from statsd_transport.errors import StreamClosedError
from statsd_transport.protocols import LoggerProtocol, TelemetryProtocol

# Peer-side failures that mean the stream is gone and a reconnect may help.
_CLOSED_STREAM_ERRORS = (BrokenPipeError, ConnectionResetError, ConnectionAbortedError)


class StreamTransport:
    """connect/send_raw/close primitives over an AF_UNIX stream socket."""

    def __init__(self, settings: StreamSettings) -> None:
        self._settings = settings
        self._socket: socket.socket | None = None

    @property
    def settings(self) -> StreamSettings:
        return self._settings

    @property
    def is_open(self) -> bool:
        return self._socket is not None

    def connect(self) -> None:
        """Open a stream to the agent, releasing any socket already held."""
        self.close()
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.connect(self._settings.socket_path)
        except BaseException:
            sock.close()
            raise
        self._socket = sock

    def send_raw(self, message: bytes) -> None:
        """Write the whole message.

        Raises:
            StreamClosedError: If the socket is not open or the peer closed it
            OSError: For any other socket failure
        """
        if self._socket is None:
            raise StreamClosedError("stream socket is not open")
        try:
            self._socket.sendall(message)
        except _CLOSED_STREAM_ERRORS as exc:
            raise StreamClosedError(f"stream to {self._settings.socket_path} closed: {exc}") from exc

    def close(self) -> None:
        sock, self._socket = self._socket, None
        if sock is not None:
            sock.close()


class UDSConnection(Connection):
    """Connection to an agent listening on a Unix stream socket.

    The socket path is the explicit argument, else DD_DOGSTATSD_SOCKET.
    """

    def __init__(
        self,
        socket_path: str | None = None,
        *,
        telemetry: TelemetryProtocol | None = None,
        logger: LoggerProtocol | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Resolve the socket path. Does not open a socket.

        Raises:
            TransportConfigurationError: If no usable path is available
        """
        self._settings = StreamSettings.from_environment(socket_path=socket_path, environ=environ)
        super().__init__(StreamTransport(self._settings), telemetry=telemetry, logger=logger)

    @property
    def socket_path(self) -> str:
        return self._settings.socket_path
