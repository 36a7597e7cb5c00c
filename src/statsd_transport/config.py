# src/statsd_transport/config.py
"""Destination configuration for statsd connections.

Uses Pydantic for validation. Settings are frozen (immutable) after
construction and resolved exactly once: an explicit value wins, then the
environment variable, then the built-in default. The environment is never
re-read after a connection has been built.
"""

import os
from collections.abc import Mapping
from typing import Final

from pydantic import BaseModel, Field, ValidationError, field_validator

from statsd_transport.errors import TransportConfigurationError

DEFAULT_HOST: Final[str] = "127.0.0.1"
DEFAULT_PORT: Final[int] = 8125

HOST_ENV_VAR: Final[str] = "DD_AGENT_HOST"
PORT_ENV_VAR: Final[str] = "DD_DOGSTATSD_PORT"
SOCKET_ENV_VAR: Final[str] = "DD_DOGSTATSD_SOCKET"


def _from_env(environ: Mapping[str, str], name: str) -> str | None:
    """Read an environment variable, treating empty strings as unset."""
    value = environ.get(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _configuration_error(exc: ValidationError) -> TransportConfigurationError:
    """Convert the first Pydantic error into a TransportConfigurationError."""
    first = exc.errors()[0]
    setting = ".".join(str(part) for part in first["loc"]) or "settings"
    return TransportConfigurationError(setting, f"{first['msg']} (got {first['input']!r})")


class DatagramSettings(BaseModel):
    """Destination of a datagram (UDP) connection.

    Example:
        settings = DatagramSettings.from_environment(host=None, port=None)
        # -> host="127.0.0.1", port=8125 unless DD_AGENT_HOST/DD_DOGSTATSD_PORT are set
    """

    model_config = {"frozen": True}

    host: str = Field(default=DEFAULT_HOST, min_length=1, description="Agent hostname or address")
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535, description="Agent UDP port")

    @classmethod
    def from_environment(
        cls,
        host: str | None = None,
        port: int | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "DatagramSettings":
        """Resolve host and port with explicit > environment > default precedence.

        Args:
            host: Explicit host, or None to fall back
            port: Explicit port, or None to fall back
            environ: Environment snapshot (defaults to os.environ)

        Returns:
            Frozen settings

        Raises:
            TransportConfigurationError: If the resolved port is not an integer
                in 1-65535 or the resolved host is empty
        """
        env = os.environ if environ is None else environ

        resolved_host = host if host is not None else (_from_env(env, HOST_ENV_VAR) or DEFAULT_HOST)
        resolved_port: int | str = port if port is not None else (_from_env(env, PORT_ENV_VAR) or DEFAULT_PORT)

        try:
            return cls(host=resolved_host, port=resolved_port)
        except ValidationError as exc:
            raise _configuration_error(exc) from exc


class StreamSettings(BaseModel):
    """Destination of a stream (Unix domain socket) connection."""

    model_config = {"frozen": True}

    socket_path: str = Field(min_length=1, description="Filesystem path of the agent socket")

    @field_validator("socket_path")
    @classmethod
    def validate_socket_path(cls, v: str) -> str:
        if "\x00" in v:
            raise ValueError("socket path must not contain NUL bytes")
        return v

    @classmethod
    def from_environment(
        cls,
        socket_path: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "StreamSettings":
        """Resolve the socket path with explicit > environment precedence.

        There is no built-in default path.

        Raises:
            TransportConfigurationError: If no path is given or it is invalid
        """
        env = os.environ if environ is None else environ

        resolved = socket_path if socket_path is not None else _from_env(env, SOCKET_ENV_VAR)
        if resolved is None:
            raise TransportConfigurationError(
                "socket_path",
                f"no socket path given and {SOCKET_ENV_VAR} is not set",
            )

        try:
            return cls(socket_path=resolved)
        except ValidationError as exc:
            raise _configuration_error(exc) from exc
