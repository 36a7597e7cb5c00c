# src/statsd_transport/telemetry.py
"""Self-telemetry counters for the connection layer.

These counters describe the library's own behavior (bytes and packets
sent or dropped), not the application's metrics. How they are reported is
up to the caller; this module only counts.

Components:
- NullTelemetry: default no-op implementation
- CounterTelemetry: thread-safe in-memory counters with snapshot()/reset()
- TelemetrySnapshot: frozen point-in-time copy of the counters
"""

import threading
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TelemetrySnapshot:
    """Point-in-time copy of CounterTelemetry."""

    bytes_sent: int = 0
    bytes_dropped: int = 0
    packets_sent: int = 0
    packets_dropped: int = 0

    @property
    def packets_total(self) -> int:
        return self.packets_sent + self.packets_dropped


class NullTelemetry:
    """Telemetry that records nothing."""

    def sent(self, *, bytes: int, packets: int) -> None:
        pass

    def dropped(self, *, bytes: int, packets: int) -> None:
        pass


class CounterTelemetry:
    """In-memory sent/dropped counters.

    Thread Safety:
        All counter updates and reads hold a single lock, so one instance may
        be shared by connections used from different threads.

    Example:
        telemetry = CounterTelemetry()
        connection = UDPConnection(telemetry=telemetry)
        connection.write(b"page.views:1|c")
        telemetry.snapshot().packets_sent  # -> 1
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._bytes_sent = 0
        self._bytes_dropped = 0
        self._packets_sent = 0
        self._packets_dropped = 0

    def sent(self, *, bytes: int, packets: int) -> None:
        with self._lock:
            self._bytes_sent += bytes
            self._packets_sent += packets

    def dropped(self, *, bytes: int, packets: int) -> None:
        with self._lock:
            self._bytes_dropped += bytes
            self._packets_dropped += packets

    def snapshot(self) -> TelemetrySnapshot:
        """Return a consistent copy of all four counters."""
        with self._lock:
            return TelemetrySnapshot(
                bytes_sent=self._bytes_sent,
                bytes_dropped=self._bytes_dropped,
                packets_sent=self._packets_sent,
                packets_dropped=self._packets_dropped,
            )

    def reset(self) -> TelemetrySnapshot:
        """Zero the counters, returning their values from just before."""
        with self._lock:
            previous = TelemetrySnapshot(
                bytes_sent=self._bytes_sent,
                bytes_dropped=self._bytes_dropped,
                packets_sent=self._packets_sent,
                packets_dropped=self._packets_dropped,
            )
            self._bytes_sent = 0
            self._bytes_dropped = 0
            self._packets_sent = 0
            self._packets_dropped = 0
            return previous
