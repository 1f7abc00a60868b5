"""
Scoring instrumentation.

The calculators in :mod:`app.engine` are pure.  Diagnostic tracing is a
side channel: every ``compute_*`` entry point accepts an optional
``observer`` and reports its intermediate values to it once the result
has been computed.  Passing no observer costs nothing.

:class:`LoggingObserver` is the stock observer; it writes each payload
to the ``app.engine`` logger at DEBUG level.
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol

ENGINE_LOGGER_NAME = "app.engine"

_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class ScoringObserver(Protocol):
    """Receives intermediate values from a calculator."""

    def on_score(self, calculator: str, payload: dict[str, Any]) -> None:
        ...


class LoggingObserver:
    """Observer that logs every payload."""

    def __init__(
        self,
        logger: Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
    ) -> None:
        self.logger = logger or logging.getLogger(ENGINE_LOGGER_NAME)
        self.level = level

    def on_score(self, calculator: str, payload: dict[str, Any]) -> None:
        self.logger.log(self.level, "%s: %s", calculator, payload)


class RecordingObserver:
    """Observer that keeps every payload in memory (handy in tests)."""

    def __init__(self) -> None:
        self.events: list[tuple[str, dict[str, Any]]] = []

    def on_score(self, calculator: str, payload: dict[str, Any]) -> None:
        self.events.append((calculator, payload))


def notify(
    observer: Optional[ScoringObserver],
    calculator: str,
    payload: dict[str, Any],
) -> None:
    """Forward *payload* to *observer* if one was given."""
    if observer is not None:
        observer.on_score(calculator, payload)


def configure_logging(level: str = "INFO") -> None:
    """Set up the root handler once for the application process."""
    logging.basicConfig(level=level.upper(), format=_LOG_FORMAT)
