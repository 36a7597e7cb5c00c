# src/statsd_transport/__init__.py
"""statsd-transport: the connection layer of a statsd/DogStatsD client.

Sends already-serialized metric lines to a local agent over UDP or a Unix
stream socket. write() never raises and never retries more than once; lost
messages show up only in logs and in self-telemetry counters.

Components:
- connection: Connection, the transport-agnostic retry/drop algorithm
- transports: UDPConnection and UDSConnection plus their transport primitives
- config: DatagramSettings / StreamSettings (explicit > environment > default)
- telemetry: NullTelemetry, CounterTelemetry
- errors: classify_error() and the exception hierarchy
- protocols: TransportProtocol, TelemetryProtocol, LoggerProtocol

Usage:
    from statsd_transport import CounterTelemetry, UDPConnection

    telemetry = CounterTelemetry()
    connection = UDPConnection(telemetry=telemetry)  # 127.0.0.1:8125 by default
    connection.write(b"page.views:1|c")
    connection.close()
"""

from statsd_transport.config import DatagramSettings, StreamSettings
from statsd_transport.connection import Connection
from statsd_transport.errors import (
    ErrorClassification,
    StatsdTransportError,
    StreamClosedError,
    TransportConfigurationError,
    classify_error,
)
from statsd_transport.protocols import LoggerProtocol, TelemetryProtocol, TransportProtocol
from statsd_transport.telemetry import CounterTelemetry, NullTelemetry, TelemetrySnapshot
from statsd_transport.transports import DatagramTransport, StreamTransport, UDPConnection, UDSConnection

__version__ = "0.1.0"

__all__ = [
    "Connection",
    "CounterTelemetry",
    "DatagramSettings",
    "DatagramTransport",
    "ErrorClassification",
    "LoggerProtocol",
    "NullTelemetry",
    "StatsdTransportError",
    "StreamClosedError",
    "StreamSettings",
    "StreamTransport",
    "TelemetryProtocol",
    "TelemetrySnapshot",
    "TransportConfigurationError",
    "TransportProtocol",
    "UDPConnection",
    "UDSConnection",
    "classify_error",
]
