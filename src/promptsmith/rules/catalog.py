"""Declarative rule table keyed by domain."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import lru_cache
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

from promptsmith.domains import Domain
from promptsmith.types import Analysis

Replacement = str | Callable[[re.Match[str]], str]


class RuleKind(str, Enum):
    REPLACE = "replace"
    APPEND = "append"


class RuleCategory(str, Enum):
    VAGUE_TERMS = "vague_terms"
    STRUCTURE = "structure"
    ENHANCEMENT = "enhancement"
    BEST_PRACTICE = "best_practice"
    FORMATTING = "formatting"


@lru_cache(maxsize=1024)
def _compile(pattern: str, flags: int) -> re.Pattern[str]:
    return re.compile(pattern, flags)


@dataclass(frozen=True, slots=True)
class Rule:
    """One pattern-triggered transformation.

    REPLACE rules substitute every occurrence of `pattern` in a single pass.
    APPEND rules use `pattern` as a trigger and add `replacement` as a new
    paragraph at the end of the text. `unless` suppresses the rule when the
    text already satisfies it.
    """

    id: str
    domain: Domain
    category: RuleCategory
    pattern: str
    replacement: Replacement
    priority: int = 5
    description: str = ""
    kind: RuleKind = RuleKind.REPLACE
    unless: str | None = None
    predicate: Callable[[Analysis], bool] | None = field(default=None, compare=False)
    flags: int = re.IGNORECASE

    def sort_key(self) -> tuple[int, int, str]:
        layer = 0 if self.domain is Domain.GENERAL else 1
        return (layer, -self.priority, self.id)

    def applies_to(self, analysis: Analysis) -> bool:
        return self.predicate is None or bool(self.predicate(analysis))

    def apply(self, text: str) -> str | None:
        """Return the transformed text, or None when the rule does not fire."""
        compiled = _compile(self.pattern, self.flags)
        if self.unless is not None and _compile(self.unless, re.IGNORECASE).search(text):
            return None

        if self.kind is RuleKind.APPEND:
            match = compiled.search(text)
            if match is None:
                return None
            addition = self.replacement(match) if callable(self.replacement) else self.replacement
            return f"{text.rstrip()}\n\n{addition}"

        updated, count = compiled.subn(self.replacement, text)
        if count == 0 or updated == text:
            return None
        return updated


@dataclass(frozen=True, slots=True)
class RequiredElement:
    """An element a complete instruction for a domain is expected to mention."""

    name: str
    pattern: str
    description: str

    def present_in(self, text: str) -> bool:
        return _compile(self.pattern, re.IGNORECASE).search(text) is not None


@dataclass(frozen=True, slots=True)
class DomainProfile:
    domain: Domain
    description: str
    rules: tuple[Rule, ...]
    required_elements: tuple[RequiredElement, ...]
    system_prompt: str


class RuleCatalog:
    """Immutable, load-once mapping from domain to its ordered rule list.

    `general` rules form a baseline layer that precedes every domain's own
    rules. Within a layer rules are ordered by priority descending, then id.
    """

    def __init__(self, profiles: Iterable[DomainProfile]) -> None:
        table: dict[Domain, DomainProfile] = {}
        seen_ids: set[str] = set()
        for profile in profiles:
            if profile.domain in table:
                raise ValueError(f"Duplicate domain profile: {profile.domain.value}")
            for rule in profile.rules:
                if rule.id in seen_ids:
                    raise ValueError(f"Duplicate rule id: {rule.id}")
                if rule.domain is not profile.domain:
                    raise ValueError(f"Rule {rule.id} registered under {profile.domain.value}")
                seen_ids.add(rule.id)
            table[profile.domain] = profile
        if Domain.GENERAL not in table:
            raise ValueError("A general domain profile is required")

        self._profiles: Mapping[Domain, DomainProfile] = MappingProxyType(table)
        baseline = table[Domain.GENERAL].rules
        ordered: dict[Domain, tuple[Rule, ...]] = {}
        for domain, profile in table.items():
            candidates = baseline if domain is Domain.GENERAL else baseline + profile.rules
            ordered[domain] = tuple(sorted(candidates, key=Rule.sort_key))
        self._ordered: Mapping[Domain, tuple[Rule, ...]] = MappingProxyType(ordered)

    def domains(self) -> list[Domain]:
        return list(self._profiles)

    def profile(self, domain: Domain) -> DomainProfile:
        return self._profiles.get(domain, self._profiles[Domain.GENERAL])

    def rules_for(self, domain: Domain) -> tuple[Rule, ...]:
        return self._ordered.get(domain, self._ordered[Domain.GENERAL])

    def required_elements(self, domain: Domain) -> tuple[RequiredElement, ...]:
        return self.profile(domain).required_elements

    def system_prompt(self, domain: Domain) -> str:
        return self.profile(domain).system_prompt

    def with_rules(self, domain: Domain, rules: Iterable[Rule]) -> "RuleCatalog":
        """Return a new catalog with `rules` added to `domain`'s profile."""
        profiles = dict(self._profiles)
        base = self.profile(domain)
        if domain not in profiles:
            base = replace(base, domain=domain, rules=())
        profiles[domain] = replace(base, rules=base.rules + tuple(rules))
        return RuleCatalog(profiles.values())

    def statistics(self) -> dict[str, dict[str, object]]:
        return {
            domain.value: {
                "rule_count": len(profile.rules),
                "required_elements": [element.name for element in profile.required_elements],
                "description": profile.description,
            }
            for domain, profile in self._profiles.items()
        }


def build_rules(
    domain: Domain,
    *,
    vague: Iterable[tuple[str, str, str, str]] = (),
    structure: Iterable[tuple[str, str, str, str]] = (),
    enhancements: Iterable[tuple[str, str, str | None, str, str]] = (),
    practices: Iterable[tuple[str, str, str | None, str, str]] = (),
) -> tuple[Rule, ...]:
    """Expand compact rule tables into `Rule` objects with the standard priorities.

    Replacement rows are `(id, pattern, replacement, description)`; append rows
    are `(id, trigger, unless, sentence, description)`.
    """
    rules: list[Rule] = []
    for category, priority, rows in (
        (RuleCategory.VAGUE_TERMS, 9, vague),
        (RuleCategory.STRUCTURE, 7, structure),
    ):
        for rule_id, pattern, replacement, description in rows:
            rules.append(
                Rule(
                    id=rule_id,
                    domain=domain,
                    category=category,
                    pattern=pattern,
                    replacement=replacement,
                    priority=priority,
                    description=description,
                )
            )
    for category, priority, rows in (
        (RuleCategory.ENHANCEMENT, 5, enhancements),
        (RuleCategory.BEST_PRACTICE, 4, practices),
    ):
        for rule_id, trigger, unless, sentence, description in rows:
            rules.append(
                Rule(
                    id=rule_id,
                    domain=domain,
                    category=category,
                    pattern=trigger,
                    replacement=sentence,
                    priority=priority,
                    description=description,
                    kind=RuleKind.APPEND,
                    unless=unless,
                )
            )
    return tuple(rules)


def build_default_catalog() -> RuleCatalog:
    from promptsmith.rules import branding, cine, devops, general, industry, saas, sql, technology

    profiles: list[DomainProfile] = [
        general.PROFILE,
        sql.PROFILE,
        branding.PROFILE,
        cine.PROFILE,
        saas.PROFILE,
        devops.PROFILE,
        *technology.PROFILES,
        *industry.PROFILES,
    ]
    return RuleCatalog(profiles)
