"""Pipeline composition, result compilation and side-effect isolation."""

from __future__ import annotations

import hashlib
import json
import logging
import math
import re
import threading
import uuid
from concurrent.futures import Future, ThreadPoolExecutor, wait
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping

from promptsmith.config import Settings
from promptsmith.domains import Domain, Tone, parse_domain, parse_tone
from promptsmith.errors import DependencyDegraded, InvalidInput
from promptsmith.obs.telemetry import NullTelemetry, TelemetryRecorder, TelemetrySink, Timer
from promptsmith.pipeline.analyzer import PromptAnalyzer
from promptsmith.pipeline.optimizer import Optimizer, detect_template_type
from promptsmith.pipeline.refiner import Refiner
from promptsmith.pipeline.validator import Validator
from promptsmith.rules.catalog import RuleCatalog, build_default_catalog
from promptsmith.scoring.comparison import compare_scores, summarize
from promptsmith.scoring.scorer import QualityScorer
from promptsmith.storage.cache import InMemoryResultCache, ResultCache
from promptsmith.storage.store import InMemoryPromptStore, PromptStore
from promptsmith.types import (
    Analysis,
    ComparisonResult,
    Dimension,
    EvaluationResult,
    OptimizedPrompt,
    ProcessMetadata,
    ProcessResult,
    PromptRecord,
    QualityScore,
    RawRequest,
    Recommendation,
    ValidationResult,
)

logger = logging.getLogger(__name__)

_VARIABLE_NAME = re.compile(r"^[A-Za-z_]\w*$")
_INPUT_PLACEHOLDER = re.compile(r"\{\{\s*input\s*\}\}")
_MAX_VARIANTS = 10

DIMENSION_HINTS: Mapping[Dimension, str] = {
    Dimension.CLARITY: "Improve clarity: replace vague words and pronouns with specific references",
    Dimension.SPECIFICITY: "Improve specificity: add concrete numbers, names, formats or technologies",
    Dimension.STRUCTURE: "Improve structure: organize requirements into sections or numbered steps",
    Dimension.COMPLETENESS: "Improve completeness: cover the expected output, audience and constraints",
}


class PromptOrchestrator:
    """Runs the analyze, refine, optimize, validate and score pipeline.

    The pipeline stages are pure. Cache, store and telemetry calls happen only
    here. The cache read runs on its own pool, bounded by
    `dependency_timeout_seconds`. Cache writes and telemetry go to a separate
    pool capped at `max_pending_side_effects`; beyond that they are dropped.
    Any failure in them is logged and skipped.
    """

    def __init__(
        self,
        *,
        settings: Settings | None = None,
        catalog: RuleCatalog | None = None,
        cache: ResultCache | None = None,
        store: PromptStore | None = None,
        telemetry: TelemetrySink | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.catalog = catalog or build_default_catalog()
        self.analyzer = PromptAnalyzer(self.settings.analyzer)
        self.refiner = Refiner(self.catalog)
        self.optimizer = Optimizer()
        self.validator = Validator(self.catalog, self.settings.validation)
        self.scorer = QualityScorer(self.catalog)
        self.cache: ResultCache = cache if cache is not None else InMemoryResultCache(self.settings.cache)
        self.store: PromptStore = store if store is not None else InMemoryPromptStore()
        self.telemetry: TelemetrySink = telemetry if telemetry is not None else NullTelemetry()

        pipeline = self.settings.pipeline
        self._executor = ThreadPoolExecutor(
            max_workers=pipeline.side_effect_workers,
            thread_name_prefix="promptsmith-side-effects",
        )
        # Cache reads never queue behind slow writes or telemetry.
        self._reader = ThreadPoolExecutor(
            max_workers=pipeline.cache_read_workers,
            thread_name_prefix="promptsmith-cache-reads",
        )
        self._pending: set[Future[Any]] = set()
        self._pending_lock = threading.Lock()

    def __enter__(self) -> "PromptOrchestrator":
        return self

    def __exit__(self, exc_type: object, exc: object, tb: object) -> None:
        self.close()

    # Exposed operations

    def process(
        self,
        raw: str | RawRequest,
        *,
        domain: str | Domain | None = None,
        tone: str | Tone | None = None,
        context: str | None = None,
        variables: Mapping[str, str] | None = None,
    ) -> ProcessResult:
        """Run the full pipeline for one request.

        Raises:
            InvalidInput: for empty text, unknown domain or tone, or a malformed
                variable map. Nothing else escapes.
        """
        if isinstance(raw, RawRequest):
            request = self.build_request(
                raw.text, domain=raw.domain, tone=raw.tone, context=raw.context, variables=raw.variables
            )
        else:
            request = self.build_request(raw, domain=domain, tone=tone, context=context, variables=variables)

        key = cache_key(request)
        cached = self._cache_get(key)
        if cached is not None:
            logger.debug("Cache hit for %s", key[:12])
            self._emit("process_cache_hit", {"domain": cached.metadata.domain.value})
            return cached

        result = self._run_pipeline(request)
        ttl = self.cache_ttl(result.score.overall)
        self._submit("cache", "set", self.cache.set, key, result, ttl)
        self._emit(
            "process_completed",
            {
                "domain": result.metadata.domain.value,
                "tone": result.metadata.tone.value if result.metadata.tone else None,
                "overall": result.score.overall,
                "processing_time_ms": result.metadata.processing_time_ms,
                "rules_applied": len(result.metadata.rules_applied),
                "rule_errors": len(result.metadata.rule_errors),
                "template_type": result.metadata.template_type,
            },
        )
        return result

    def evaluate(
        self,
        text: str,
        *,
        domain: str | Domain | None = None,
        criteria: Iterable[str] | str | None = None,
    ) -> EvaluationResult:
        cleaned = self._require_text(text)
        selected = _parse_criteria(criteria)
        analysis = self.analyzer.analyze(cleaned)
        resolved, _ = self._resolve_domain(parse_domain(domain, default=None), analysis)
        validation = self.validator.validate(cleaned, analysis, domain=resolved)
        score = self.scorer.score(cleaned, analysis, validation, resolved)
        breakdown = self.scorer.breakdown(cleaned, analysis, validation, resolved)

        result = EvaluationResult(
            score=score,
            breakdown={name: part for name, part in breakdown.items() if Dimension(name) in selected},
            recommendations=tuple(_recommendations(score, validation, selected)),
        )
        self._emit("evaluate_completed", {"domain": resolved.value, "overall": score.overall})
        return result

    def compare(
        self,
        variants: Iterable[str],
        *,
        test_input: str | None = None,
        domain: str | Domain | None = None,
    ) -> ComparisonResult:
        """Score each variant without refinement and pick the best.

        Variants are keyed `variant_0`, `variant_1`, ... in the order given.
        `test_input` replaces `{{input}}` placeholders before scoring.
        """
        texts = list(variants) if not isinstance(variants, str) else [variants]
        if len(texts) < 2:
            raise InvalidInput("variants", "at least two variants are required")
        if len(texts) > _MAX_VARIANTS:
            raise InvalidInput("variants", f"at most {_MAX_VARIANTS} variants are supported")
        for index, text in enumerate(texts):
            self._require_text(text, field=f"variants[{index}]")
        resolved = parse_domain(domain) or Domain.GENERAL

        results: dict[str, ProcessResult] = {}
        for index, text in enumerate(texts):
            if test_input is not None:
                text = _INPUT_PLACEHOLDER.sub(lambda _match: test_input, text)
            results[f"variant_{index}"] = self._score_variant(text, resolved)

        winner, metrics = compare_scores({variant_id: result.score for variant_id, result in results.items()})
        overall = metrics[-1]
        comparison = ComparisonResult(
            variants=results,
            winner=winner,
            metrics=metrics,
            summary=summarize(winner, results[winner].score, overall.significance),
        )
        self._emit("compare_completed", {"variants": len(results), "winner": winner})
        return comparison

    def validate(self, text: str, *, domain: str | Domain | None = None) -> ValidationResult:
        cleaned = self._require_text(text)
        analysis = self.analyzer.analyze(cleaned)
        resolved, _ = self._resolve_domain(parse_domain(domain, default=None), analysis)
        return self.validator.validate(cleaned, analysis, domain=resolved)

    def save(
        self,
        text: str,
        *,
        name: str,
        domain: str | Domain | None = None,
        tags: Iterable[str] = (),
        description: str = "",
    ) -> PromptRecord:
        """Process `text` and persist the refined result.

        Raises:
            InvalidInput: for invalid text, name or domain.
            DependencyDegraded: when the store rejects the write.
        """
        if not isinstance(name, str) or not name.strip():
            raise InvalidInput("name", "name must not be empty")
        result = self.process(text, domain=domain)
        record = PromptRecord(
            id=uuid.uuid4().hex,
            name=name.strip(),
            domain=result.metadata.domain,
            raw=result.original,
            refined=result.refined,
            system=result.system,
            tags=tuple(tag.strip() for tag in tags if tag and tag.strip()),
            description=description.strip(),
            overall_score=result.score.overall,
            created_at=datetime.now(timezone.utc).isoformat(),
        )
        try:
            self.store.create(record)
        except Exception as exc:
            logger.warning("Store create failed for %s: %s", record.id, exc)
            raise DependencyDegraded("store", "create", str(exc)) from exc
        self._emit("prompt_saved", {"domain": record.domain.value, "overall": record.overall_score})
        return record

    def search(
        self,
        query: str,
        *,
        domain: str | Domain | None = None,
        limit: int = 10,
    ) -> list[PromptRecord]:
        if not isinstance(query, str):
            raise InvalidInput("query", "query must be a string")
        if limit < 1:
            raise InvalidInput("limit", "limit must be positive")
        resolved = parse_domain(domain, default=None)
        try:
            return self.store.search(query, resolved, limit)
        except Exception as exc:
            logger.warning("Store search failed: %s", exc)
            raise DependencyDegraded("store", "search", str(exc)) from exc

    def get(self, record_id: str) -> PromptRecord | None:
        try:
            return self.store.get(record_id)
        except Exception as exc:
            logger.warning("Store get failed for %s: %s", record_id, exc)
            raise DependencyDegraded("store", "get", str(exc)) from exc

    def stats(self) -> dict[str, Any]:
        try:
            prompts = self.store.counts_by_domain()
        except Exception as exc:
            logger.warning("Store stats failed: %s", exc)
            prompts = {}
        telemetry: dict[str, Any] = {}
        if isinstance(self.telemetry, TelemetryRecorder):
            telemetry = dict(self.telemetry.summary())
            telemetry["processed_by_domain"] = self.telemetry.domain_counts()
        return {
            "prompts_by_domain": prompts,
            "total_prompts": sum(prompts.values()),
            "telemetry": telemetry,
            "catalog": {
                "domains": len(self.catalog.domains()),
                "rules": sum(len(self.catalog.profile(d).rules) for d in self.catalog.domains()),
                "by_domain": self.catalog.statistics(),
            },
            "version": self.settings.pipeline.version,
        }

    # Lifecycle

    def flush(self, timeout: float | None = None) -> None:
        """Wait for pending cache writes and telemetry emissions."""
        with self._pending_lock:
            pending = list(self._pending)
        if pending:
            wait(pending, timeout=timeout)

    def close(self) -> None:
        self.flush()
        self._executor.shutdown(wait=True)
        self._reader.shutdown(wait=False, cancel_futures=True)

    # Request handling

    def build_request(
        self,
        text: Any,
        *,
        domain: str | Domain | None = None,
        tone: str | Tone | None = None,
        context: str | None = None,
        variables: Mapping[str, str] | None = None,
    ) -> RawRequest:
        self._require_text(text)
        if context is not None and not isinstance(context, str):
            raise InvalidInput("context", "context must be a string")
        return RawRequest(
            text=text,
            domain=parse_domain(domain, default=None),
            tone=parse_tone(tone),
            context=context.strip() or None if context is not None else None,
            variables=_validate_variables(variables),
        )

    def cache_ttl(self, overall: float) -> int:
        config = self.settings.cache
        return math.floor(config.base_ttl_seconds * max(config.min_ttl_multiplier, overall))

    def _run_pipeline(self, request: RawRequest) -> ProcessResult:
        with Timer() as timer:
            analysis = self.analyzer.analyze(request.text)
            cleaned = self.analyzer.clean(request.text)
            domain, detected = self._resolve_domain(request.domain, analysis)
            refinement = self.refiner.refine(cleaned, domain, analysis)
            optimized = self.optimizer.optimize(refinement, request)
            final_analysis = self.analyzer.analyze(optimized.text)
            validation = self.validator.validate(
                optimized.text,
                final_analysis,
                domain=domain,
                variables={**request.variables, **optimized.variables},
            )
            score = self.scorer.score(optimized.text, final_analysis, validation, domain)

        logger.debug(
            "Processed request domain=%s rules=%d overall=%.3f",
            domain.value,
            len(refinement.rules_applied),
            score.overall,
        )
        return ProcessResult(
            original=request.text,
            refined=optimized.text,
            system=self._system_prompt(domain, analysis, request.context),
            analysis=analysis,
            validation=validation,
            score=score,
            suggestions=self._compile_suggestions(optimized, validation, score),
            variables=dict(optimized.variables),
            metadata=ProcessMetadata(
                domain=domain,
                tone=request.tone,
                processing_time_ms=round(timer.elapsed_ms, 3),
                rules_applied=refinement.rules_applied,
                rule_errors=refinement.rule_errors,
                template_type=optimized.template_type,
                domain_detected=detected,
                version=self.settings.pipeline.version,
            ),
        )

    def _score_variant(self, text: str, domain: Domain) -> ProcessResult:
        with Timer() as timer:
            cleaned = self.analyzer.clean(text)
            analysis = self.analyzer.analyze(cleaned)
            validation = self.validator.validate(cleaned, analysis, domain=domain)
            score = self.scorer.score(cleaned, analysis, validation, domain)
        return ProcessResult(
            original=text,
            refined=cleaned,
            system=self._system_prompt(domain, analysis, None),
            analysis=analysis,
            validation=validation,
            score=score,
            suggestions=self._compile_suggestions(None, validation, score),
            variables={},
            metadata=ProcessMetadata(
                domain=domain,
                tone=None,
                processing_time_ms=round(timer.elapsed_ms, 3),
                rules_applied=(),
                rule_errors=(),
                template_type=detect_template_type(cleaned),
                domain_detected=False,
                version=self.settings.pipeline.version,
            ),
        )

    def _resolve_domain(self, requested: Domain | None, analysis: Analysis) -> tuple[Domain, bool]:
        if requested is not None:
            return requested, False
        if analysis.domain_hints:
            return analysis.domain_hints[0], True
        return Domain.GENERAL, False

    def _system_prompt(self, domain: Domain, analysis: Analysis, context: str | None) -> str:
        base = self.catalog.system_prompt(domain)
        if context:
            return f"{base}\n\nAdditional Context: {context}"
        if analysis.complexity > 0.7:
            return (
                f"{base}\n\nNote: This is a complex request. Break the solution into logical "
                "components and explain each step."
            )
        return base

    def _compile_suggestions(
        self,
        optimized: OptimizedPrompt | None,
        validation: ValidationResult,
        score: QualityScore,
    ) -> tuple[str, ...]:
        config = self.settings.pipeline
        candidates: list[str] = []
        if optimized is not None:
            candidates.extend(
                improvement.description
                for improvement in optimized.improvements
                if improvement.impact == "high"
            )
        candidates.extend(suggestion.message for suggestion in validation.suggestions)
        candidates.extend(
            hint
            for dimension, hint in DIMENSION_HINTS.items()
            if score.get(dimension.value) < config.suggestion_threshold
        )
        unique = list(dict.fromkeys(candidates))
        return tuple(unique[: config.max_suggestions])

    @staticmethod
    def _require_text(text: Any, field: str = "text") -> str:
        if not isinstance(text, str):
            raise InvalidInput(field, f"expected a string, got {type(text).__name__}")
        if not text.strip():
            raise InvalidInput(field, "text must not be empty or whitespace-only")
        return text

    # Side effects

    def _cache_get(self, key: str) -> ProcessResult | None:
        timeout = self.settings.pipeline.dependency_timeout_seconds
        try:
            future = self._reader.submit(self.cache.get, key)
            return future.result(timeout=timeout)
        except Exception as exc:
            degraded = DependencyDegraded("cache", "get", str(exc) or type(exc).__name__)
            logger.warning("%s; treating as miss", degraded)
            return None

    def _emit(self, event_name: str, payload: dict[str, Any]) -> None:
        self._submit("telemetry", "emit", self.telemetry.emit, event_name, payload)

    def _submit(self, dependency: str, operation: str, fn: Callable[..., Any], *args: Any) -> None:
        def _guarded() -> None:
            try:
                fn(*args)
            except Exception as exc:
                logger.warning("%s", DependencyDegraded(dependency, operation, str(exc)))

        limit = self.settings.pipeline.max_pending_side_effects
        with self._pending_lock:
            if len(self._pending) >= limit:
                logger.warning(
                    "%s",
                    DependencyDegraded(dependency, operation, f"{limit} side effects pending; dropped"),
                )
                return
            try:
                future = self._executor.submit(_guarded)
            except RuntimeError as exc:
                logger.warning("%s", DependencyDegraded(dependency, operation, str(exc)))
                return
            self._pending.add(future)
        future.add_done_callback(self._discard_pending)

    def _discard_pending(self, future: Future[Any]) -> None:
        with self._pending_lock:
            self._pending.discard(future)


def cache_key(request: RawRequest) -> str:
    """Deterministic key over normalized text, domain, tone, context and sorted variables."""
    payload = {
        "text": request.text.strip().lower(),
        "domain": request.domain.value if request.domain else None,
        "tone": request.tone.value if request.tone else None,
        "context": (request.context or "").strip(),
        "variables": sorted(request.variables.items()),
    }
    encoded = json.dumps(payload, sort_keys=True, ensure_ascii=False).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


def _validate_variables(variables: Mapping[str, str] | None) -> dict[str, str]:
    if variables is None:
        return {}
    if not isinstance(variables, Mapping):
        raise InvalidInput("variables", "variables must be a mapping of name to value")
    validated: dict[str, str] = {}
    for name, value in variables.items():
        if not isinstance(name, str) or not _VARIABLE_NAME.match(name):
            raise InvalidInput("variables", f"invalid variable name: {name!r}")
        if not isinstance(value, str):
            raise InvalidInput("variables", f"value for '{name}' must be a string")
        validated[name] = value
    return validated


def _parse_criteria(criteria: Iterable[str] | str | None) -> frozenset[Dimension]:
    if criteria is None:
        return frozenset(Dimension)
    if isinstance(criteria, str):
        criteria = [criteria]
    selected: set[Dimension] = set()
    for criterion in criteria:
        try:
            selected.add(Dimension(str(criterion).strip().lower()))
        except ValueError as exc:
            allowed = ", ".join(d.value for d in Dimension)
            raise InvalidInput("criteria", f"unknown criterion '{criterion}' (allowed: {allowed})") from exc
    if not selected:
        return frozenset(Dimension)
    return frozenset(selected)


def _recommendations(
    score: QualityScore,
    validation: ValidationResult,
    selected: frozenset[Dimension],
) -> list[Recommendation]:
    recommendations = [
        Recommendation(
            kind="critical",
            title=f"Fix {issue.code.lower().replace('_', ' ')}",
            description=issue.message,
            impact="high",
            after=issue.suggestion,
        )
        for issue in validation.errors
        if issue.dimension in selected
    ]
    for dimension in (Dimension.CLARITY, Dimension.SPECIFICITY):
        value = score.get(dimension.value)
        if dimension in selected and value < 0.6:
            recommendations.append(
                Recommendation(
                    kind="important",
                    title=f"Improve {dimension.value}",
                    description=f"{DIMENSION_HINTS[dimension]} (currently {value:.2f})",
                    impact="medium",
                )
            )
    if selected == frozenset(Dimension):
        recommendations.extend(
            Recommendation(
                kind="suggestion",
                title="Suggestion",
                description=suggestion.message,
                impact="low",
                before=suggestion.before,
                after=suggestion.after,
            )
            for suggestion in validation.suggestions
        )
    return recommendations
