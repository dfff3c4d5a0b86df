"""Web session-level tracing helpers.

Creates a long-lived OpenTelemetry span per browser session so that all logs
and spans within that session share one trace id.

Usage:
    span = get_or_create_session_span(session_id)
    with trace.use_span(span, end_on_exit=False):
        # All operations here share the session's trace context
        ...

    # When session ends:
    end_session_span(session_id)
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict

from onboarding_assistant.shared.tracing import get_tracer

logger = logging.getLogger(__name__)


@dataclass
class _SessionSpan:
    span: Any
    created_at: float


_SESSION_SPANS: Dict[str, _SessionSpan] = {}


def get_or_create_session_span(session_id: str) -> Any:
    existing = _SESSION_SPANS.get(session_id)
    if existing is not None:
        return existing.span

    span = get_tracer("session").start_span(
        name="session.web",
        attributes={"session.id": session_id, "session.type": "web"},
    )
    _SESSION_SPANS[session_id] = _SessionSpan(span=span, created_at=time.time())
    return span


def end_session_span(session_id: str) -> None:
    existing = _SESSION_SPANS.pop(session_id, None)
    if existing is None:
        return

    duration = time.time() - existing.created_at
    logger.debug(f"Ending session span for {session_id} after {duration:.1f}s")
    existing.span.end()
