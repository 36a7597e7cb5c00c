"""Shared test fixtures and helpers.

Test doubles:
- make_transport: factory for tests.fakes.FakeTransport, a scripted
  TransportProtocol that records every primitive call
- telemetry: MagicMock spec'd to CounterTelemetry (sent/dropped)
- log: MagicMock logger capturing debug/error lines

Hypothesis Configuration:
- "ci" profile: Fast tests for CI (100 examples) - default
- "nightly" profile: Thorough tests (1000 examples)
- "debug" profile: Minimal tests with verbose output (10 examples)

Set profile via environment variable:
    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import logging
import os
from collections.abc import Callable, Iterator
from unittest.mock import MagicMock

import pytest
import structlog
from hypothesis import Phase, Verbosity, settings

from statsd_transport.config import HOST_ENV_VAR, PORT_ENV_VAR, SOCKET_ENV_VAR
from statsd_transport.logging import PACKAGE_LOGGER
from statsd_transport.telemetry import CounterTelemetry
from tests.fakes import FakeTransport


@pytest.fixture
def make_transport() -> Callable[..., FakeTransport]:
    """Factory for FakeTransport instances."""
    return FakeTransport


@pytest.fixture
def telemetry() -> MagicMock:
    """Telemetry double recording sent()/dropped() calls."""
    return MagicMock(spec=CounterTelemetry)


@pytest.fixture
def log() -> MagicMock:
    """Logger double recording debug()/error() calls."""
    return MagicMock(spec=["debug", "error"])


@pytest.fixture(autouse=True)
def _clean_agent_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's DD_* variables out of every test."""
    for name in (HOST_ENV_VAR, PORT_ENV_VAR, SOCKET_ENV_VAR):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo configure_logging() (called directly or by the CLI) after each test."""
    saved = []
    for name in (None, PACKAGE_LOGGER):
        logger = logging.getLogger(name)
        saved.append((logger, logger.handlers[:], logger.level, logger.propagate))
    yield
    for logger, handlers, level, propagate in saved:
        logger.handlers = handlers
        logger.setLevel(level)
        logger.propagate = propagate
    structlog.reset_defaults()


# =============================================================================
# Hypothesis Configuration
# =============================================================================

# CI profile: Fast tests for continuous integration
settings.register_profile(
    "ci",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,  # Disable deadline for CI (timing varies)
)

# Nightly profile: Thorough testing for scheduled runs
settings.register_profile(
    "nightly",
    max_examples=1000,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

# Debug profile: Minimal examples with verbose output for debugging
settings.register_profile(
    "debug",
    max_examples=10,
    verbosity=Verbosity.verbose,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    deadline=None,
)

settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))
