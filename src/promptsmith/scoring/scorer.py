"""Four-dimension quality scoring."""

from __future__ import annotations

import re
import statistics
from typing import Mapping

from promptsmith.domains import Domain
from promptsmith.pipeline.analyzer import ACTION_VERBS, VAGUE_TERMS, split_sentences
from promptsmith.pipeline.validator import DELIVERABLE_NOUNS
from promptsmith.rules.catalog import RuleCatalog
from promptsmith.scoring.weights import DEFAULT_WEIGHTS, WeightProfile, weights_for
from promptsmith.types import (
    Analysis,
    Dimension,
    DimensionBreakdown,
    QualityFactor,
    QualityScore,
    Severity,
    ValidationResult,
)

_SECTION_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)]|#+\s|\w[\w ]*:\s*$)", re.MULTILINE)
_FLOW_MARKER = re.compile(
    r"\b(?:first|then|next|finally|steps?|after(?:wards)?|before|lastly|primero|luego)\b|^\s*\d+[.)]\s",
    re.IGNORECASE | re.MULTILINE,
)
_CONSTRAINT_MARKER = re.compile(
    r"\b(?:must|should|require[sd]?|include|ensure|at\s+least|at\s+most|no\s+more\s+than|exactly|only|within)\b",
    re.IGNORECASE,
)
_WORD = re.compile(r"\w+", re.UNICODE)

ISSUE_PENALTIES: Mapping[Severity, float] = {
    Severity.CRITICAL: 0.20,
    Severity.HIGH: 0.15,
    Severity.MEDIUM: 0.10,
    Severity.LOW: 0.05,
}


class QualityScorer:
    """Scores text on clarity, specificity, structure and completeness.

    Each dimension is a weighted mix of raw factors in [0, 1], minus a penalty
    for validator findings tagged with that dimension. `overall` combines the
    dimensions with the domain's `WeightProfile`.
    """

    def __init__(
        self,
        catalog: RuleCatalog | None = None,
        weights: Mapping[Domain, WeightProfile] = DEFAULT_WEIGHTS,
    ) -> None:
        self.catalog = catalog
        self.weights = weights

    def score(
        self,
        text: str,
        analysis: Analysis,
        validation: ValidationResult,
        domain: Domain | None = None,
    ) -> QualityScore:
        breakdown = self.breakdown(text, analysis, validation, domain)
        return self.combine(
            {name: part.score for name, part in breakdown.items()},
            domain,
        )

    def combine(self, dimensions: Mapping[str, float], domain: Domain | None) -> QualityScore:
        profile = weights_for(domain, self.weights)
        overall = sum(
            profile.weight(dimension) * dimensions[dimension.value] for dimension in Dimension
        )
        return QualityScore(
            clarity=dimensions[Dimension.CLARITY.value],
            specificity=dimensions[Dimension.SPECIFICITY.value],
            structure=dimensions[Dimension.STRUCTURE.value],
            completeness=dimensions[Dimension.COMPLETENESS.value],
            overall=_unit(overall),
        )

    def breakdown(
        self,
        text: str,
        analysis: Analysis,
        validation: ValidationResult,
        domain: Domain | None = None,
    ) -> dict[str, DimensionBreakdown]:
        factor_sets = {
            Dimension.CLARITY: self._clarity_factors(text, analysis),
            Dimension.SPECIFICITY: self._specificity_factors(analysis),
            Dimension.STRUCTURE: self._structure_factors(text),
            Dimension.COMPLETENESS: self._completeness_factors(text, analysis, domain),
        }
        result: dict[str, DimensionBreakdown] = {}
        for dimension, factors in factor_sets.items():
            issues = validation.issues_for(dimension)
            penalty = min(1.0, sum(ISSUE_PENALTIES[issue.severity] for issue in issues))
            raw = sum(factor.weight * factor.score for factor in factors)
            if issues:
                factors = factors + (
                    QualityFactor(
                        name="validation_penalty",
                        weight=1.0,
                        score=round(penalty, 6),
                        description=f"Deducted for {len(issues)} validator finding(s)",
                    ),
                )
            result[dimension.value] = DimensionBreakdown(score=_unit(raw - penalty), factors=factors)
        return result

    @staticmethod
    def _clarity_factors(text: str, analysis: Analysis) -> tuple[QualityFactor, ...]:
        lengths = [len(_WORD.findall(sentence)) for sentence in split_sentences(text)]
        lengths = [length for length in lengths if length]
        if len(lengths) > 1:
            variation = statistics.pstdev(lengths) / statistics.mean(lengths)
            consistency = 1.0 - min(1.0, variation)
        else:
            consistency = 1.0
        return (
            QualityFactor("unambiguous", 0.4, _unit(1.0 - analysis.ambiguity), "Vague terms and pronouns are resolved"),
            QualityFactor("readability", 0.3, analysis.readability, "Reading ease of the wording"),
            QualityFactor("sentence_consistency", 0.3, _unit(consistency), "Sentence lengths are even"),
        )

    @staticmethod
    def _specificity_factors(analysis: Analysis) -> tuple[QualityFactor, ...]:
        words = max(1, analysis.word_count)
        concrete = [entity for entity in analysis.entities if entity.label != "PROPER_NOUN"]
        vague = sum(1 for token in analysis.tokens if token.text.lower() in VAGUE_TERMS)
        return (
            QualityFactor("technical_density", 0.35, _unit(analysis.technical_term_count / words * 5.0), "Share of technical vocabulary"),
            QualityFactor("concrete_details", 0.35, _unit(len(concrete) / 3.0), "Numbers, names and technologies mentioned"),
            QualityFactor("precise_wording", 0.3, _unit(1.0 - 5.0 * vague / words), "Absence of vague wording"),
        )

    @staticmethod
    def _structure_factors(text: str) -> tuple[QualityFactor, ...]:
        sections = len(_SECTION_MARKER.findall(text))
        if _FLOW_MARKER.search(text):
            ordering = 1.0
        elif "\n\n" in text:
            ordering = 0.6
        else:
            ordering = 0.2
        return (
            QualityFactor("sections", 0.4, _unit(sections / 3.0), "Headings, lists and sections"),
            QualityFactor("ordering", 0.3, ordering, "Logical flow markers or paragraphing"),
            QualityFactor("length_fit", 0.3, _length_score(len(text)), "Length suits a complete instruction"),
        )

    def _completeness_factors(
        self,
        text: str,
        analysis: Analysis,
        domain: Domain | None,
    ) -> tuple[QualityFactor, ...]:
        elements = ()
        if self.catalog is not None:
            elements = self.catalog.required_elements(domain or Domain.GENERAL)
        coverage = (
            sum(1 for element in elements if element.present_in(text)) / len(elements)
            if elements
            else 1.0
        )
        words = {token.text.lower() for token in analysis.tokens}
        essentials = 0.5 * bool(words & ACTION_VERBS) + 0.5 * bool(
            words & DELIVERABLE_NOUNS or analysis.technical_terms
        )
        return (
            QualityFactor("required_elements", 0.6, _unit(coverage), "Coverage of the domain's expected elements"),
            QualityFactor("action_and_deliverable", 0.2, _unit(essentials), "An action and a deliverable are named"),
            QualityFactor("constraints", 0.2, 1.0 if _CONSTRAINT_MARKER.search(text) else 0.0, "Requirements or constraints are stated"),
        )


def _length_score(length: int) -> float:
    if 100 <= length <= 1500:
        return 1.0
    if 50 <= length <= 2500:
        return 0.8
    if 20 <= length <= 4000:
        return 0.6
    return 0.4


def _unit(value: float) -> float:
    return round(max(0.0, min(1.0, value)), 6)
