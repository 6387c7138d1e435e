"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from promptsmith.domains import Domain, Tone


class Severity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Dimension(str, Enum):
    CLARITY = "clarity"
    SPECIFICITY = "specificity"
    STRUCTURE = "structure"
    COMPLETENESS = "completeness"


@dataclass(frozen=True, slots=True)
class RawRequest:
    """Caller input for one pipeline run."""

    text: str
    domain: Domain | None = None
    tone: Tone | None = None
    context: str | None = None
    variables: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class Token:
    text: str
    pos: str
    lemma: str
    is_stop_word: bool


@dataclass(frozen=True, slots=True)
class Entity:
    text: str
    label: str
    start: int
    end: int
    confidence: float


@dataclass(frozen=True, slots=True)
class Intent:
    category: str
    confidence: float
    subcategories: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Analysis:
    """Linguistic snapshot of one text, computed once per pipeline run."""

    tokens: tuple[Token, ...]
    entities: tuple[Entity, ...]
    intent: Intent
    complexity: float
    ambiguity: float
    readability: float
    domain_hints: tuple[Domain, ...]
    technical_terms: tuple[str, ...]
    technical_term_count: int
    variables: tuple[str, ...]
    language: str
    word_count: int
    sentence_count: int
    estimated_tokens: int

    @property
    def has_variables(self) -> bool:
        return bool(self.variables)


@dataclass(frozen=True, slots=True)
class RefinementResult:
    refined: str
    rules_applied: tuple[str, ...]
    rule_errors: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Improvement:
    kind: str
    description: str
    impact: str = "medium"


@dataclass(frozen=True, slots=True)
class OptimizedPrompt:
    """Template-ready text plus the substitution map used to build it."""

    text: str
    variables: dict[str, str]
    placeholders: tuple[str, ...]
    template_type: str
    improvements: tuple[Improvement, ...] = ()
    steps_applied: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    code: str
    message: str
    severity: Severity
    dimension: Dimension
    suggestion: str | None = None


@dataclass(frozen=True, slots=True)
class Suggestion:
    message: str
    before: str | None = None
    after: str | None = None


@dataclass(frozen=True, slots=True)
class AnalysisSummary:
    word_count: int
    sentence_count: int
    complexity: float
    ambiguity: float
    readability: float
    technical_term_count: int
    domain_hints: tuple[Domain, ...]
    has_variables: bool
    intent: str


@dataclass(frozen=True, slots=True)
class ValidationResult:
    is_valid: bool
    errors: tuple[ValidationIssue, ...]
    warnings: tuple[ValidationIssue, ...]
    suggestions: tuple[Suggestion, ...]
    summary: AnalysisSummary

    def issues_for(self, dimension: Dimension) -> tuple[ValidationIssue, ...]:
        return tuple(
            issue
            for issue in (*self.errors, *self.warnings)
            if issue.dimension is dimension
        )


@dataclass(frozen=True, slots=True)
class QualityScore:
    clarity: float
    specificity: float
    structure: float
    completeness: float
    overall: float

    def get(self, metric: str) -> float:
        return float(getattr(self, metric))


@dataclass(frozen=True, slots=True)
class ProcessMetadata:
    domain: Domain
    tone: Tone | None
    processing_time_ms: float = field(compare=False)
    rules_applied: tuple[str, ...]
    rule_errors: tuple[str, ...]
    template_type: str
    domain_detected: bool = False
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class ProcessResult:
    original: str
    refined: str
    system: str
    analysis: Analysis
    validation: ValidationResult
    score: QualityScore
    suggestions: tuple[str, ...]
    variables: dict[str, str]
    metadata: ProcessMetadata


@dataclass(frozen=True, slots=True)
class QualityFactor:
    name: str
    weight: float
    score: float
    description: str


@dataclass(frozen=True, slots=True)
class DimensionBreakdown:
    score: float
    factors: tuple[QualityFactor, ...]


@dataclass(frozen=True, slots=True)
class Recommendation:
    kind: str
    title: str
    description: str
    impact: str
    before: str | None = None
    after: str | None = None


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    score: QualityScore
    breakdown: dict[str, DimensionBreakdown]
    recommendations: tuple[Recommendation, ...]


@dataclass(frozen=True, slots=True)
class MetricComparison:
    metric: str
    values: dict[str, float]
    winner: str
    significance: float


@dataclass(frozen=True, slots=True)
class ComparisonResult:
    variants: dict[str, ProcessResult]
    winner: str
    metrics: tuple[MetricComparison, ...]
    summary: str


@dataclass(frozen=True, slots=True)
class PromptRecord:
    """A saved instruction as held by the store."""

    id: str
    name: str
    domain: Domain
    raw: str
    refined: str
    system: str
    tags: tuple[str, ...]
    description: str
    overall_score: float
    created_at: str


@dataclass(slots=True)
class TelemetryEvent:
    name: str
    payload: dict[str, Any]
    timestamp_utc: str


@dataclass(slots=True)
class ToolTrace:
    """Trace record for an executed tool call."""

    name: str
    input_payload: dict[str, Any]
    output_preview: str
    latency_ms: float
    status: str = "ok"
    error: str | None = None
