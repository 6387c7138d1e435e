"""Ordered application of catalog rules to raw text."""

from __future__ import annotations

import logging

from promptsmith.domains import Domain
from promptsmith.errors import RuleApplicationFault
from promptsmith.rules.catalog import Rule, RuleCatalog
from promptsmith.types import Analysis, RefinementResult

logger = logging.getLogger(__name__)


class Refiner:
    """Applies the `general` layer and then the domain's own rules."""

    def __init__(self, catalog: RuleCatalog) -> None:
        self.catalog = catalog

    def refine(self, text: str, domain: Domain, analysis: Analysis) -> RefinementResult:
        """Apply each candidate rule at most once, in catalog order.

        Predicates always see the `analysis` computed from the original text.
        A rule whose pattern, predicate or replacement raises is skipped and
        its id is recorded in `rule_errors`.
        """
        refined = text
        applied: list[str] = []
        errors: list[str] = []

        for rule in self.catalog.rules_for(domain):
            try:
                updated = self._apply_rule(rule, refined, analysis)
            except RuleApplicationFault as fault:
                logger.warning("Skipping rule %s: %s", fault.rule_id, fault.message)
                errors.append(fault.rule_id)
                continue
            if updated is None:
                continue
            refined = updated
            applied.append(rule.id)

        logger.debug("Refined text for %s with %d rules", domain.value, len(applied))
        return RefinementResult(
            refined=refined.strip(),
            rules_applied=tuple(applied),
            rule_errors=tuple(errors),
        )

    @staticmethod
    def _apply_rule(rule: Rule, text: str, analysis: Analysis) -> str | None:
        try:
            if not rule.applies_to(analysis):
                return None
            return rule.apply(text)
        except Exception as exc:
            raise RuleApplicationFault(rule.id, str(exc), exc) from exc
