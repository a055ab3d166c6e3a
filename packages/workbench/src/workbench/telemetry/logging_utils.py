"""Logging helpers for trace correlation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from workbench.telemetry import get_current_trace_id

if TYPE_CHECKING:
    from collections.abc import Iterable

    from workbench.config import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
TRACE_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [trace=%(trace_id)s]: %(message)s"


class TraceContextFilter(logging.Filter):
    """Attach trace identifiers to log records when available."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject trace_id into the log record."""
        record.trace_id = get_current_trace_id() or "-"
        return True


def install_trace_log_filter(targets: Iterable[logging.Filterer] | None = None) -> None:
    """Attach a trace context filter once to each logger or handler.

    Defaults to the handlers of the root logger, since logger filters do not
    apply to records propagated from child loggers.
    """
    if targets is None:
        targets = logging.getLogger().handlers
    for target in targets:
        if any(isinstance(flt, TraceContextFilter) for flt in target.filters):
            continue
        target.addFilter(TraceContextFilter())


def configure_logging(settings: Settings) -> None:
    """Configure root logging from settings, with trace ids when tracing is enabled."""
    fmt = TRACE_LOG_FORMAT if settings.trace_enabled else LOG_FORMAT
    logging.basicConfig(level=settings.log_level, format=fmt)
    if settings.trace_enabled:
        install_trace_log_filter()
