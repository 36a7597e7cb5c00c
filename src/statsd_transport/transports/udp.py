# src/statsd_transport/transports/udp.py
"""Datagram transport: one UDP packet per message.

The socket is connect()ed to the agent so that each send() is a single
datagram to a fixed peer, and so that the kernel can report ICMP
port-unreachable back as ECONNREFUSED on a later send. Whether and when that
report arrives is platform-dependent.
"""

from __future__ import annotations

import errno
import socket
from collections.abc import Mapping

from statsd_transport.config import DatagramSettings
from statsd_transport.connection import Connection
from statsd_transport.protocols import LoggerProtocol, TelemetryProtocol


class DatagramTransport:
    """connect/send_raw/close primitives over a connected UDP socket."""

    def __init__(self, settings: DatagramSettings) -> None:
        self._settings = settings
        self._socket: socket.socket | None = None

    @property
    def settings(self) -> DatagramSettings:
        return self._settings

    @property
    def is_open(self) -> bool:
        return self._socket is not None

    def connect(self) -> None:
        """Resolve the agent address and open a socket connected to it.

        The address family follows the first getaddrinfo() result, so IPv6
        agents work. A socket that is already open is released first, and the
        new handle is only stored once fully connected.
        """
        self.close()
        family, _, proto, _, sockaddr = socket.getaddrinfo(
            self._settings.host,
            self._settings.port,
            0,
            socket.SOCK_DGRAM,
        )[0]

        sock = socket.socket(family, socket.SOCK_DGRAM, proto)
        try:
            sock.connect(sockaddr)
        except BaseException:
            sock.close()
            raise
        self._socket = sock

    def send_raw(self, message: bytes) -> None:
        if self._socket is None:
            raise OSError(errno.ENOTCONN, "datagram socket is not open")
        self._socket.send(message)

    def close(self) -> None:
        sock, self._socket = self._socket, None
        if sock is not None:
            sock.close()


class UDPConnection(Connection):
    """Connection to an agent listening on a UDP port.

    Host and port are resolved once, here: explicit argument, then
    DD_AGENT_HOST / DD_DOGSTATSD_PORT, then 127.0.0.1:8125.

    Example:
        with UDPConnection(telemetry=telemetry) as connection:
            connection.write(b"page.views:1|c")
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        telemetry: TelemetryProtocol | None = None,
        logger: LoggerProtocol | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        """Resolve the destination. Does not open a socket.

        Raises:
            TransportConfigurationError: If the resolved host or port is invalid
        """
        self._settings = DatagramSettings.from_environment(host=host, port=port, environ=environ)
        super().__init__(DatagramTransport(self._settings), telemetry=telemetry, logger=logger)

    @property
    def host(self) -> str:
        return self._settings.host

    @property
    def port(self) -> int:
        return self._settings.port
