import logging
import time

import pytest

from promptsmith.config import PipelineConfig, Settings
from promptsmith.domains import Domain, Tone
from promptsmith.errors import DependencyDegraded, InvalidInput
from promptsmith.obs.telemetry import TelemetryRecorder
from promptsmith.pipeline.orchestrator import PromptOrchestrator, cache_key
from promptsmith.storage.cache import InMemoryResultCache
from promptsmith.types import RawRequest


class FailingCache:
    def get(self, key):
        raise ConnectionError("cache unavailable")

    def set(self, key, value, ttl_seconds):
        raise ConnectionError("cache unavailable")


class SlowCache(InMemoryResultCache):
    def get(self, key):
        time.sleep(0.5)
        return super().get(key)


class SlowTelemetry:
    def __init__(self, delay: float) -> None:
        self.delay = delay
        self.names: list[str] = []

    def emit(self, event_name, payload):
        time.sleep(self.delay)
        self.names.append(event_name)


class FailingStore:
    def create(self, record):
        raise OSError("disk full")

    def get(self, record_id):
        raise OSError("disk full")

    def search(self, query, domain=None, limit=10):
        raise OSError("disk full")

    def counts_by_domain(self):
        raise OSError("disk full")


def test_process_runs_full_pipeline(orchestrator: PromptOrchestrator) -> None:
    result = orchestrator.process("create a table for customers", domain="sql")

    assert result.original == "create a table for customers"
    assert result.refined.startswith("Design a database table for customers.\n\nRequirements:\n- ")
    assert "sql.structure.create_table" in result.metadata.rules_applied
    assert result.metadata.domain is Domain.SQL
    assert result.metadata.domain_detected is False
    assert result.system.startswith("You are a senior database architect")
    assert 0.0 <= result.score.overall <= 1.0
    assert len(result.suggestions) <= 5
    assert len(set(result.suggestions)) == len(result.suggestions)


def test_domain_is_detected_when_omitted(orchestrator: PromptOrchestrator) -> None:
    result = orchestrator.process("write a SQL query that joins orders and customers")

    assert result.metadata.domain is Domain.SQL
    assert result.metadata.domain_detected is True


def test_general_domain_without_hints(orchestrator: PromptOrchestrator) -> None:
    result = orchestrator.process("write a short poem about autumn leaves")

    assert result.metadata.domain is Domain.GENERAL
    assert result.metadata.domain_detected is False


def test_context_tone_and_variables(orchestrator: PromptOrchestrator) -> None:
    result = orchestrator.process(
        "hey guys, write a launch email for Acme",
        tone="formal",
        context="Audience is existing customers",
        variables={"company": "Acme"},
    )

    assert result.refined.startswith("Hello team, write a launch email for {{company}}")
    assert result.refined.endswith("Context:\nAudience is existing customers")
    assert result.variables == {"company": "Acme"}
    assert result.system.endswith("Additional Context: Audience is existing customers")
    assert result.metadata.tone is Tone.FORMAL


def test_raw_request_object_is_accepted(orchestrator: PromptOrchestrator) -> None:
    direct = orchestrator.process("create a table for customers", domain="sql")
    wrapped = orchestrator.process(RawRequest(text="create a table for customers", domain=Domain.SQL))

    assert wrapped == direct


@pytest.mark.parametrize(
    "kwargs",
    [
        {"raw": ""},
        {"raw": "   "},
        {"raw": "write a poem", "domain": "astrology"},
        {"raw": "write a poem", "tone": "sarcastic"},
        {"raw": "write a poem", "variables": {"bad name": "x"}},
        {"raw": "write a poem", "variables": {"count": 3}},
        {"raw": "write a poem", "context": 42},
    ],
)
def test_invalid_requests_fail_fast(orchestrator: PromptOrchestrator, kwargs) -> None:
    raw = kwargs.pop("raw")

    with pytest.raises(InvalidInput):
        orchestrator.process(raw, **kwargs)


def test_second_call_is_served_from_cache(telemetry: TelemetryRecorder) -> None:
    cache = InMemoryResultCache()
    with PromptOrchestrator(cache=cache, telemetry=telemetry) as orchestrator:
        first = orchestrator.process("Create a report of monthly revenue by region.")
        orchestrator.flush()
        second = orchestrator.process("  create a report of monthly revenue by region.  ")
        orchestrator.flush()

    assert second == first
    assert len(cache) == 1
    names = [event.name for event in telemetry.list_recent()]
    assert names == ["process_completed", "process_cache_hit"]


def test_cache_ttl_grows_with_score() -> None:
    with PromptOrchestrator() as orchestrator:
        assert orchestrator.cache_ttl(0.1) == 1800
        assert orchestrator.cache_ttl(0.5) == 1800
        assert orchestrator.cache_ttl(0.75) == 2700
        assert orchestrator.cache_ttl(1.0) == 3600


def test_cache_key_normalizes_text_and_variable_order() -> None:
    first = RawRequest(text="Write a Poem ", variables={"a": "1", "b": "2"})
    second = RawRequest(text="write a poem", variables={"b": "2", "a": "1"})
    third = RawRequest(text="write a poem", domain=Domain.LEGAL)

    assert cache_key(first) == cache_key(second)
    assert cache_key(first) != cache_key(third)


def test_failing_cache_degrades_to_computation(telemetry: TelemetryRecorder) -> None:
    with PromptOrchestrator(cache=FailingCache(), telemetry=telemetry) as orchestrator:
        result = orchestrator.process("Create a report of monthly revenue by region.")
        orchestrator.flush()

    assert 0.0 <= result.score.overall <= 1.0
    assert [event.name for event in telemetry.list_recent()] == ["process_completed"]


def test_slow_cache_read_times_out() -> None:
    settings = Settings(pipeline=PipelineConfig(dependency_timeout_seconds=0.05))
    with PromptOrchestrator(settings=settings, cache=SlowCache()) as orchestrator:
        started = time.perf_counter()
        result = orchestrator.process("Create a report of monthly revenue by region.")
        elapsed = time.perf_counter() - started

    assert result.refined
    assert elapsed < 0.5


def test_slow_telemetry_does_not_delay_cache_hits() -> None:
    text = "Create a report of monthly revenue by region."
    cache = InMemoryResultCache()
    with PromptOrchestrator(cache=cache) as warm:
        expected = warm.process(text)
        warm.flush()

    settings = Settings(pipeline=PipelineConfig(dependency_timeout_seconds=0.5))
    with PromptOrchestrator(settings=settings, cache=cache, telemetry=SlowTelemetry(0.4)) as orchestrator:
        for _ in range(3):
            started = time.perf_counter()
            result = orchestrator.process(text)
            elapsed = time.perf_counter() - started

            assert result == expected
            assert elapsed < 0.3


def test_side_effects_beyond_pending_limit_are_dropped(caplog) -> None:
    text = "Create a report of monthly revenue by region."
    cache = InMemoryResultCache()
    with PromptOrchestrator(cache=cache) as warm:
        warm.process(text)
        warm.flush()

    telemetry = SlowTelemetry(0.3)
    settings = Settings(pipeline=PipelineConfig(side_effect_workers=1, max_pending_side_effects=1))
    with caplog.at_level(logging.WARNING, logger="promptsmith.pipeline.orchestrator"):
        with PromptOrchestrator(settings=settings, cache=cache, telemetry=telemetry) as orchestrator:
            for _ in range(3):
                orchestrator.process(text)

    assert telemetry.names == ["process_cache_hit"]
    assert sum("side effects pending; dropped" in record.getMessage() for record in caplog.records) == 2


def test_evaluate_returns_breakdown_and_recommendations(orchestrator: PromptOrchestrator) -> None:
    result = orchestrator.evaluate("Fix")

    assert set(result.breakdown) == {"clarity", "specificity", "structure", "completeness"}
    kinds = {recommendation.kind for recommendation in result.recommendations}
    assert "critical" in kinds
    assert "suggestion" in kinds


def test_evaluate_criteria_filter(orchestrator: PromptOrchestrator) -> None:
    result = orchestrator.evaluate("Make it nice", criteria=["clarity"])

    assert set(result.breakdown) == {"clarity"}
    assert all(recommendation.kind != "suggestion" for recommendation in result.recommendations)

    with pytest.raises(InvalidInput):
        orchestrator.evaluate("Make it nice", criteria=["vibes"])


def test_evaluate_accepts_single_criterion_string(orchestrator: PromptOrchestrator) -> None:
    single = orchestrator.evaluate("Make it nice", criteria="specificity")

    assert set(single.breakdown) == {"specificity"}
    assert single == orchestrator.evaluate("Make it nice", criteria=["specificity"])


def test_compare_prefers_detailed_variant(orchestrator: PromptOrchestrator) -> None:
    result = orchestrator.compare(
        ["a", "a much more detailed and specific instruction with concrete steps and deliverables"]
    )

    assert result.winner == "variant_1"
    assert list(result.variants) == ["variant_0", "variant_1"]
    assert result.summary.startswith("variant_1 wins")
    assert result.variants["variant_0"].metadata.rules_applied == ()


def test_compare_fills_test_input(orchestrator: PromptOrchestrator) -> None:
    result = orchestrator.compare(
        ["Summarize {{input}}", "Summarize {{input}} in 3 bullet points"],
        test_input="the quarterly report",
    )

    assert result.variants["variant_0"].original == "Summarize the quarterly report"
    assert result.variants["variant_1"].refined == "Summarize the quarterly report in 3 bullet points"


@pytest.mark.parametrize("variants", [["only one"], ["ok", "  "], ["v"] * 11])
def test_compare_rejects_bad_variant_lists(orchestrator: PromptOrchestrator, variants) -> None:
    with pytest.raises(InvalidInput):
        orchestrator.compare(variants)


def test_validate_uses_detected_domain(orchestrator: PromptOrchestrator) -> None:
    result = orchestrator.validate("Write a SQL query for monthly sales")

    codes = {issue.code for issue in result.warnings}
    assert "MISSING_ELEMENTS" in codes


def test_save_search_get_and_stats(orchestrator: PromptOrchestrator, telemetry: TelemetryRecorder) -> None:
    record = orchestrator.save(
        "create a table for customers",
        name="Customer table",
        tags=["crm", " "],
        description="Base schema",
    )

    assert record.domain is Domain.SQL
    assert record.tags == ("crm",)
    assert orchestrator.get(record.id) == record
    assert orchestrator.get("missing") is None
    assert orchestrator.search("customer") == [record]
    assert orchestrator.search("customer", domain="legal") == []

    orchestrator.flush()
    stats = orchestrator.stats()
    assert stats["prompts_by_domain"] == {"sql": 1}
    assert stats["total_prompts"] == 1
    assert stats["telemetry"]["total_requests"] == 1
    assert stats["catalog"]["domains"] == len(Domain)
    assert stats["catalog"]["by_domain"]["sql"]["rule_count"] > 0
    assert "entity" in stats["catalog"]["by_domain"]["sql"]["required_elements"]


def test_save_requires_name(orchestrator: PromptOrchestrator) -> None:
    with pytest.raises(InvalidInput):
        orchestrator.save("create a table", name=" ")


def test_store_failures_surface_as_degraded() -> None:
    with PromptOrchestrator(store=FailingStore()) as orchestrator:
        with pytest.raises(DependencyDegraded):
            orchestrator.save("create a table for customers", name="Customers")
        with pytest.raises(DependencyDegraded):
            orchestrator.search("customers")
        assert orchestrator.stats()["prompts_by_domain"] == {}
