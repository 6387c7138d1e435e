"""Best-practice checks over refined text."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, Mapping

from promptsmith.config import ValidationConfig
from promptsmith.domains import Domain
from promptsmith.errors import ValidationFault
from promptsmith.pipeline.analyzer import (
    ACTION_VERBS,
    ENGLISH_MARKERS,
    SPANISH_MARKERS,
    split_sentences,
)
from promptsmith.rules.catalog import RuleCatalog
from promptsmith.types import (
    Analysis,
    AnalysisSummary,
    Dimension,
    Severity,
    Suggestion,
    ValidationIssue,
    ValidationResult,
)

logger = logging.getLogger(__name__)

VAGUE_REPLACEMENTS: dict[str, str] = {
    "good": "high-quality",
    "nice": "well-designed",
    "bad": "problematic",
    "stuff": "components",
    "things": "elements",
    "thing": "element",
    "big": "comprehensive",
    "small": "concise",
    "fast": "optimized for performance",
    "easy": "user-friendly",
    "cool": "impressive",
    "bonito": "well-designed",
    "bonita": "well-designed",
    "bueno": "high-quality",
    "buena": "high-quality",
}

DELIVERABLE_NOUNS = frozenset(
    {
        "table", "tables", "query", "schema", "report", "list", "function", "script",
        "plan", "design", "summary", "email", "article", "component", "api", "document",
        "strategy", "campaign", "screenplay", "lesson", "contract", "dashboard", "page",
        "code", "test", "tests", "diagram", "pipeline", "post", "essay", "story", "slogan",
        "logo", "outline", "proposal", "analysis", "guide", "tutorial", "steps", "deliverables",
        "endpoint", "service", "app", "application", "website", "model", "budget", "forecast",
        "quiz", "course", "agreement", "policy", "checklist", "template", "letter",
    }
)

_CONSTRAINT_PATTERN = re.compile(
    r"\b(?:must|should|require[sd]?|include|ensure|limit(?:ed)?|at\s+least|at\s+most|no\s+more\s+than|exactly|only|within|specify)\b",
    re.IGNORECASE,
)
_SECTION_PATTERN = re.compile(r"^\s*(?:[-*•]|\d+[.)]|#+\s|\w[\w ]*:\s*$)", re.MULTILINE)
_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")
_DIGIT = re.compile(r"\d")
_WORD = re.compile(r"\w+", re.UNICODE)


@dataclass(frozen=True, slots=True)
class CheckContext:
    text: str
    analysis: Analysis
    domain: Domain
    variables: Mapping[str, str]
    config: ValidationConfig
    catalog: RuleCatalog | None


@dataclass(frozen=True, slots=True)
class Check:
    name: str
    dimension: Dimension
    run: Callable[[CheckContext], ValidationIssue | None]


def _issue(
    code: str,
    message: str,
    severity: Severity,
    dimension: Dimension,
    suggestion: str | None = None,
) -> ValidationIssue:
    return ValidationIssue(
        code=code,
        message=message,
        severity=severity,
        dimension=dimension,
        suggestion=suggestion,
    )


def check_length(ctx: CheckContext) -> ValidationIssue | None:
    length = len(ctx.text)
    if length < ctx.config.min_length or ctx.analysis.word_count < ctx.config.min_words:
        return _issue(
            "TOO_SHORT",
            f"Instruction is too short ({length} characters, {ctx.analysis.word_count} words)",
            Severity.CRITICAL,
            Dimension.COMPLETENESS,
            "Describe what should be produced, for whom and with which constraints",
        )
    if length > ctx.config.max_length:
        return _issue(
            "TOO_LONG",
            f"Instruction is very long ({length} characters)",
            Severity.MEDIUM,
            Dimension.CLARITY,
            "Split the request into smaller, focused instructions",
        )
    return None


def check_action(ctx: CheckContext) -> ValidationIssue | None:
    words = {token.text.lower() for token in ctx.analysis.tokens}
    if words & ACTION_VERBS:
        return None
    severity = Severity.CRITICAL if ctx.analysis.word_count < ctx.config.min_words else Severity.HIGH
    return _issue(
        "MISSING_ACTION",
        "No clear action verb found",
        severity,
        Dimension.STRUCTURE,
        "Start with an action verb such as Create, Analyze or Explain",
    )


def check_deliverable(ctx: CheckContext) -> ValidationIssue | None:
    words = {token.text.lower() for token in ctx.analysis.tokens}
    if words & DELIVERABLE_NOUNS or ctx.analysis.technical_terms:
        return None
    return _issue(
        "MISSING_DELIVERABLE",
        "No concrete deliverable is named",
        Severity.MEDIUM,
        Dimension.SPECIFICITY,
        "Name the artifact you expect, for example a table, report or function",
    )


def check_placeholders(ctx: CheckContext) -> ValidationIssue | None:
    unresolved = sorted(
        {match.group(1) for match in _PLACEHOLDER.finditer(ctx.text)} - set(ctx.variables)
    )
    if not unresolved:
        return None
    return _issue(
        "UNRESOLVED_PLACEHOLDER",
        f"Placeholders without a value or explanation: {', '.join(unresolved)}",
        Severity.MEDIUM,
        Dimension.COMPLETENESS,
        "Provide values for every placeholder or describe what each one stands for",
    )


def check_ambiguity(ctx: CheckContext) -> ValidationIssue | None:
    if ctx.analysis.ambiguity <= ctx.config.max_ambiguity:
        return None
    return _issue(
        "HIGH_AMBIGUITY",
        f"Instruction is ambiguous (ambiguity {ctx.analysis.ambiguity:.2f})",
        Severity.MEDIUM,
        Dimension.CLARITY,
        "Replace vague words and pronouns with the specific things they refer to",
    )


def check_readability(ctx: CheckContext) -> ValidationIssue | None:
    if ctx.analysis.readability >= ctx.config.min_readability:
        return None
    return _issue(
        "LOW_READABILITY",
        f"Instruction is hard to read (readability {ctx.analysis.readability:.2f})",
        Severity.LOW,
        Dimension.CLARITY,
        "Use shorter sentences and simpler words",
    )


def check_complexity(ctx: CheckContext) -> ValidationIssue | None:
    if ctx.analysis.complexity <= ctx.config.max_complexity:
        return None
    return _issue(
        "HIGH_COMPLEXITY",
        f"Instruction is very complex (complexity {ctx.analysis.complexity:.2f})",
        Severity.LOW,
        Dimension.CLARITY,
        "Break the request into numbered steps",
    )


def check_sentence_length(ctx: CheckContext) -> ValidationIssue | None:
    long_sentences = [
        sentence
        for sentence in split_sentences(ctx.text)
        if len(_WORD.findall(sentence)) > ctx.config.max_sentence_words
    ]
    if not long_sentences:
        return None
    return _issue(
        "LONG_SENTENCES",
        f"{len(long_sentences)} sentence(s) exceed {ctx.config.max_sentence_words} words",
        Severity.MEDIUM,
        Dimension.CLARITY,
        "Split long sentences into separate requirements",
    )


def check_mixed_language(ctx: CheckContext) -> ValidationIssue | None:
    spanish = len(SPANISH_MARKERS.findall(ctx.text))
    english = len(ENGLISH_MARKERS.findall(ctx.text))
    if spanish < 2 or english < 2:
        return None
    return _issue(
        "MIXED_LANGUAGE",
        "Instruction mixes Spanish and English",
        Severity.LOW,
        Dimension.CLARITY,
        "Write the instruction in a single language",
    )


def check_specifics(ctx: CheckContext) -> ValidationIssue | None:
    concrete_entities = [entity for entity in ctx.analysis.entities if entity.label != "PROPER_NOUN"]
    if _DIGIT.search(ctx.text) or concrete_entities or ctx.analysis.technical_term_count:
        return None
    return _issue(
        "LACKS_SPECIFICS",
        "No concrete details such as numbers, names or technologies",
        Severity.MEDIUM,
        Dimension.SPECIFICITY,
        "Add concrete details: quantities, formats, names or technologies",
    )


def check_constraints(ctx: CheckContext) -> ValidationIssue | None:
    if _CONSTRAINT_PATTERN.search(ctx.text):
        return None
    return _issue(
        "MISSING_CONSTRAINTS",
        "No requirements or constraints are stated",
        Severity.LOW,
        Dimension.SPECIFICITY,
        "State what the result must include or avoid",
    )


def check_structure(ctx: CheckContext) -> ValidationIssue | None:
    if ctx.analysis.word_count <= 60 or _SECTION_PATTERN.search(ctx.text):
        return None
    return _issue(
        "POOR_STRUCTURE",
        "Long instruction without sections or lists",
        Severity.LOW,
        Dimension.STRUCTURE,
        "Group requirements into a bulleted list",
    )


def check_required_elements(ctx: CheckContext) -> ValidationIssue | None:
    if ctx.catalog is None:
        return None
    elements = ctx.catalog.required_elements(ctx.domain)
    missing = [element for element in elements if not element.present_in(ctx.text)]
    if not missing:
        return None
    severity = Severity.HIGH if len(missing) == len(elements) else Severity.MEDIUM
    names = ", ".join(element.description for element in missing)
    return _issue(
        "MISSING_ELEMENTS",
        f"Missing {ctx.domain.value} elements: {names}",
        severity,
        Dimension.COMPLETENESS,
        f"Mention {names}",
    )


DEFAULT_CHECKS: tuple[Check, ...] = (
    Check("length", Dimension.COMPLETENESS, check_length),
    Check("action", Dimension.STRUCTURE, check_action),
    Check("deliverable", Dimension.SPECIFICITY, check_deliverable),
    Check("placeholders", Dimension.COMPLETENESS, check_placeholders),
    Check("ambiguity", Dimension.CLARITY, check_ambiguity),
    Check("readability", Dimension.CLARITY, check_readability),
    Check("complexity", Dimension.CLARITY, check_complexity),
    Check("sentence_length", Dimension.CLARITY, check_sentence_length),
    Check("mixed_language", Dimension.CLARITY, check_mixed_language),
    Check("specifics", Dimension.SPECIFICITY, check_specifics),
    Check("constraints", Dimension.SPECIFICITY, check_constraints),
    Check("structure", Dimension.STRUCTURE, check_structure),
    Check("required_elements", Dimension.COMPLETENESS, check_required_elements),
)


class Validator:
    """Runs an ordered list of checks; never raises for a failing check."""

    def __init__(
        self,
        catalog: RuleCatalog | None = None,
        config: ValidationConfig | None = None,
        checks: tuple[Check, ...] = DEFAULT_CHECKS,
    ) -> None:
        self.catalog = catalog
        self.config = config or ValidationConfig()
        self.checks = checks

    def validate(
        self,
        text: str,
        analysis: Analysis,
        *,
        domain: Domain = Domain.GENERAL,
        variables: Mapping[str, str] | None = None,
    ) -> ValidationResult:
        ctx = CheckContext(
            text=text,
            analysis=analysis,
            domain=domain,
            variables=dict(variables or {}),
            config=self.config,
            catalog=self.catalog,
        )
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        for check in self.checks:
            try:
                issue = self._run_check(check, ctx)
            except ValidationFault as fault:
                logger.warning("Validation check %s failed: %s", fault.check, fault.message)
                issue = _issue(
                    "CHECK_FAILED",
                    f"Check '{fault.check}' could not run: {fault.message}",
                    Severity.LOW,
                    check.dimension,
                )
            if issue is None:
                continue
            if issue.severity is Severity.CRITICAL:
                errors.append(issue)
            else:
                warnings.append(issue)

        suggestions = self._vague_term_suggestions(text)
        suggestions.extend(
            Suggestion(message=issue.suggestion)
            for issue in (*errors, *warnings)
            if issue.suggestion
        )
        return ValidationResult(
            is_valid=not errors,
            errors=tuple(errors),
            warnings=tuple(warnings),
            suggestions=tuple(suggestions),
            summary=summarize(analysis),
        )

    @staticmethod
    def _run_check(check: Check, ctx: CheckContext) -> ValidationIssue | None:
        try:
            return check.run(ctx)
        except Exception as exc:
            raise ValidationFault(check.name, str(exc), exc) from exc

    @staticmethod
    def _vague_term_suggestions(text: str) -> list[Suggestion]:
        suggestions: list[Suggestion] = []
        seen: set[str] = set()
        for word in _WORD.findall(text):
            lower = word.lower()
            if lower in VAGUE_REPLACEMENTS and lower not in seen:
                seen.add(lower)
                suggestions.append(
                    Suggestion(
                        message=f"Replace the vague term '{word}' with more specific language",
                        before=word,
                        after=VAGUE_REPLACEMENTS[lower],
                    )
                )
        return suggestions[:3]


def summarize(analysis: Analysis) -> AnalysisSummary:
    return AnalysisSummary(
        word_count=analysis.word_count,
        sentence_count=analysis.sentence_count,
        complexity=analysis.complexity,
        ambiguity=analysis.ambiguity,
        readability=analysis.readability,
        technical_term_count=analysis.technical_term_count,
        domain_hints=analysis.domain_hints,
        has_variables=analysis.has_variables,
        intent=analysis.intent.category,
    )
