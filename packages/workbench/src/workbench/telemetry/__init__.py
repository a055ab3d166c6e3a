"""Tracing helpers for command execution.

Spans are created through the OpenTelemetry API. Without an SDK tracer
provider installed they are no-ops, so callers never need to check.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from opentelemetry import trace as otel_trace
from opentelemetry.trace import Span, Status, StatusCode, format_trace_id

logger = logging.getLogger(__name__)

TRACER_NAME = "workbench"


def get_tracer() -> otel_trace.Tracer:
    return otel_trace.get_tracer(TRACER_NAME)


def get_current_trace_id() -> str | None:
    """Get the current OpenTelemetry trace ID if available."""
    try:
        span = otel_trace.get_current_span()
        ctx = span.get_span_context()
        if ctx.trace_id == 0:
            return None
        return format_trace_id(ctx.trace_id)
    except Exception:  # noqa: BLE001
        return None


@contextmanager
def command_span(commands: Sequence[str]) -> Iterator[Span]:
    """Wrap one command-sequence run in a span."""
    with get_tracer().start_as_current_span("workbench.run_commands") as span:
        span.set_attribute("workbench.command_count", len(commands))
        if commands:
            span.set_attribute("workbench.program", commands[0].split(" ", 1)[0])
        yield span


def record_outcome(span: Span, status: str, exit_codes: Sequence[int]) -> None:
    """Attach the run status to a span, marking failures as errors."""
    span.set_attribute("workbench.status", status)
    span.set_attribute("workbench.exit_codes", list(exit_codes))
    if status == "failed":
        span.set_status(Status(StatusCode.ERROR, "command sequence failed"))


__all__ = [
    "TRACER_NAME",
    "command_span",
    "get_current_trace_id",
    "get_tracer",
    "record_outcome",
]
