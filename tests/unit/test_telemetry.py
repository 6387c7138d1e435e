import pytest

from promptsmith.obs.telemetry import NullTelemetry, TelemetryRecorder, Timer, estimate_token_count


def test_summary_without_events() -> None:
    summary = TelemetryRecorder().summary()

    assert summary["total_requests"] == 0
    assert summary["cache_hit_rate"] == 0.0
    assert summary["avg_overall_score"] == 0.0


def test_summary_aggregates_process_events() -> None:
    recorder = TelemetryRecorder()
    recorder.emit("process_completed", {"domain": "sql", "overall": 0.6, "processing_time_ms": 10.0})
    recorder.emit("process_completed", {"domain": "general", "overall": 0.8, "processing_time_ms": 30.0})
    recorder.emit("process_cache_hit", {"domain": "sql"})

    summary = recorder.summary()

    assert summary["total_requests"] == 3
    assert summary["cache_hits"] == 1
    assert summary["cache_hit_rate"] == pytest.approx(1 / 3)
    assert summary["avg_processing_ms"] == pytest.approx(20.0)
    assert summary["avg_overall_score"] == pytest.approx(0.7)
    assert recorder.domain_counts() == {"general": 1, "sql": 1}


def test_list_recent_filters_by_name() -> None:
    recorder = TelemetryRecorder(max_events=3)
    for index in range(5):
        recorder.emit("tick", {"index": index})
    recorder.emit("other", {})

    ticks = recorder.list_recent(name="tick")

    assert [event.payload["index"] for event in ticks] == [3, 4]
    assert len(recorder.list_recent()) == 3


def test_summary_counts_tool_calls_and_errors() -> None:
    recorder = TelemetryRecorder()
    recorder.emit("tool_call", {"tool": "validate_prompt", "latency_ms": 1.5, "status": "ok"})
    recorder.emit("tool_call", {"tool": "compare_prompts", "latency_ms": 0.2, "status": "error", "error": "ValidationError"})

    summary = recorder.summary()

    assert summary["tool_calls"] == 2
    assert summary["tool_errors"] == 1
    assert summary["total_requests"] == 0


def test_null_telemetry_accepts_events() -> None:
    assert NullTelemetry().emit("anything", {"x": 1}) is None


def test_timer_measures_elapsed_time() -> None:
    with Timer() as timer:
        sum(range(1000))

    assert timer.elapsed_ms >= 0.0


def test_estimate_token_count_counts_words_and_punctuation() -> None:
    assert estimate_token_count("Hello, world!") == 4
