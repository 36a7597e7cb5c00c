# src/statsd_transport/transports/__init__.py
"""Built-in transport variants.

- DatagramTransport / UDPConnection: UDP to host:port
- StreamTransport / UDSConnection: Unix domain stream socket at a path
"""

from statsd_transport.transports.udp import DatagramTransport, UDPConnection
from statsd_transport.transports.uds import StreamTransport, UDSConnection

__all__ = [
    "DatagramTransport",
    "StreamTransport",
    "UDPConnection",
    "UDSConnection",
]
