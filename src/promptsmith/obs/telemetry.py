"""Telemetry sink, event recording and timing helpers."""

from __future__ import annotations

import logging
import re
import threading
import time
from collections import Counter, deque
from datetime import datetime, timezone
from typing import Any, Protocol

from promptsmith.types import TelemetryEvent

logger = logging.getLogger(__name__)

_TOKEN_PATTERN = re.compile(r"\w+|[^\w\s]", flags=re.UNICODE)


class TelemetrySink(Protocol):
    """Fire-and-forget event sink."""

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        """Record one event. Implementations must not block for long."""


class NullTelemetry:
    """Sink that drops every event."""

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        return None


class TelemetryRecorder:
    """In-memory event storage used for API-level observability."""

    def __init__(self, *, max_events: int = 5000) -> None:
        self._events: deque[TelemetryEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def emit(self, event_name: str, payload: dict[str, Any]) -> None:
        event = TelemetryEvent(
            name=event_name,
            payload=dict(payload),
            timestamp_utc=datetime.now(timezone.utc).isoformat(),
        )
        with self._lock:
            self._events.append(event)
        logger.debug("telemetry event %s %s", event_name, payload)

    def list_recent(self, limit: int = 20, *, name: str | None = None) -> list[TelemetryEvent]:
        with self._lock:
            events = list(self._events)
        if name is not None:
            events = [event for event in events if event.name == name]
        return events[-limit:]

    def summary(self) -> dict[str, float | int]:
        """Aggregate core pipeline metrics for dashboard display."""
        with self._lock:
            events = list(self._events)

        completed = [event for event in events if event.name == "process_completed"]
        hits = sum(1 for event in events if event.name == "process_cache_hit")
        tool_calls = sum(1 for event in events if event.name == "tool_call")
        tool_errors = sum(
            1 for event in events if event.name == "tool_call" and event.payload.get("status") == "error"
        )
        total = len(completed) + hits
        if not completed:
            return {
                "total_requests": total,
                "cache_hits": hits,
                "cache_hit_rate": (hits / total) if total else 0.0,
                "avg_processing_ms": 0.0,
                "p95_processing_ms": 0.0,
                "avg_overall_score": 0.0,
                "tool_calls": tool_calls,
            "tool_errors": tool_errors,
            }

        latencies = sorted(float(event.payload.get("processing_time_ms", 0.0)) for event in completed)
        p95_index = max(0, int((len(latencies) * 0.95) - 1))
        scores = [float(event.payload.get("overall", 0.0)) for event in completed]

        return {
            "total_requests": total,
            "cache_hits": hits,
            "cache_hit_rate": hits / total,
            "avg_processing_ms": sum(latencies) / len(latencies),
            "p95_processing_ms": latencies[p95_index],
            "avg_overall_score": sum(scores) / len(scores),
            "tool_calls": tool_calls,
            "tool_errors": tool_errors,
        }

    def domain_counts(self) -> dict[str, int]:
        with self._lock:
            events = list(self._events)
        counts = Counter(
            str(event.payload.get("domain"))
            for event in events
            if event.name == "process_completed"
        )
        return dict(sorted(counts.items()))


class Timer:
    """Simple context timer used by the orchestrator."""

    def __init__(self) -> None:
        self._start = 0.0
        self.elapsed_ms = 0.0

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.elapsed_ms = (time.perf_counter() - self._start) * 1000.0


def estimate_token_count(text: str) -> int:
    return len(_TOKEN_PATTERN.findall(text))
