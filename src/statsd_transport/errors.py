# src/statsd_transport/errors.py
"""Transport-layer exceptions and failure classification.

Every failure caught while connecting or sending is mapped to exactly one
ErrorClassification by classify_error(). The connection core consults
nothing else when deciding whether to reconnect and resend.
"""

import errno
from enum import StrEnum


class StatsdTransportError(Exception):
    """Base class for all statsd transport errors."""


class TransportConfigurationError(StatsdTransportError):
    """Raised when a connection is constructed with an unusable destination.

    This is the only error the library raises to its caller, and only at
    construction time. write() and close() never raise.

    Attributes:
        setting: Name of the offending setting (e.g. "port")
        message: Human-readable error description
    """

    def __init__(self, setting: str, message: str) -> None:
        self.setting = setting
        self.message = message
        super().__init__(f"Invalid '{setting}': {message}")


class StreamClosedError(StatsdTransportError):
    """The peer of a stream socket closed or reset the connection."""


class ErrorClassification(StrEnum):
    """Closed set of outcomes for a failed connect or send."""

    RETRYABLE = "retryable"
    NON_RETRYABLE = "non_retryable"


# OSError errnos meaning "the handle is stale, a fresh one may work".
# ECONNREFUSED on a datagram socket is reported asynchronously by the kernel
# on the send after the ICMP unreachable arrives, and not on every platform.
_RETRYABLE_ERRNOS: frozenset[int] = frozenset(
    {
        errno.EPIPE,
        errno.ECONNREFUSED,
        errno.ECONNRESET,
        errno.ECONNABORTED,
        errno.ENOTCONN,
        errno.EBADF,
    }
)


def classify_error(error: BaseException) -> ErrorClassification:
    """Classify a connect/send failure.

    RETRYABLE covers closed or broken streams and refused connections.
    Everything else, including non-OSError exceptions raised by a transport,
    is NON_RETRYABLE.

    Args:
        error: The exception caught from a transport primitive

    Returns:
        The classification for the error
    """
    if isinstance(error, (StreamClosedError, ConnectionError)):
        return ErrorClassification.RETRYABLE
    if isinstance(error, OSError) and error.errno in _RETRYABLE_ERRNOS:
        return ErrorClassification.RETRYABLE
    return ErrorClassification.NON_RETRYABLE


def is_retryable(error: BaseException) -> bool:
    """Predicate form of classify_error() for retry policies."""
    return classify_error(error) is ErrorClassification.RETRYABLE
