"""Baseline rules applied ahead of every domain."""

from __future__ import annotations

import re

from promptsmith.domains import Domain
from promptsmith.rules.catalog import DomainProfile, RequiredElement, Rule, RuleCategory, RuleKind


def _capitalize(match: re.Match[str]) -> str:
    return match.group(1) + match.group(2).upper()


_VAGUE = (
    ("general.vague.bonito", r"\bbonit[oa]s?\b", "well-designed", "Replace vague Spanish aesthetic terms"),
    ("general.vague.bueno", r"\bbuen[oa]s?\b", "high-quality", "Replace vague Spanish quality terms"),
    ("general.vague.malo", r"\bmal[oa]s?\b", "problematic", "Replace vague Spanish negative terms"),
    ("general.vague.nice", r"\bnice\b", "well-crafted", "Replace generic positive terms"),
    ("general.vague.cool", r"\bcool\b", "impressive", "Replace casual terms with professional language"),
    ("general.vague.stuff", r"\bstuff\b", "components", "Replace filler nouns"),
    ("general.vague.things", r"\bthings\b", "elements", "Replace filler nouns"),
    ("general.vague.please", r"\b(?:pls|plz)\b", "please", "Expand chat abbreviations"),
)

RULES: tuple[Rule, ...] = tuple(
    Rule(
        id=rule_id,
        domain=Domain.GENERAL,
        category=RuleCategory.VAGUE_TERMS,
        pattern=pattern,
        replacement=replacement,
        priority=8,
        description=description,
    )
    for rule_id, pattern, replacement, description in _VAGUE
) + (
    Rule(
        id="general.enhance.clarify_scope",
        domain=Domain.GENERAL,
        category=RuleCategory.ENHANCEMENT,
        pattern=r"\S",
        replacement="Specify the expected output format and the criteria for a successful result.",
        priority=4,
        description="Ask for explicit success criteria on ambiguous requests",
        kind=RuleKind.APPEND,
        unless=r"\b(?:format|criteria|deliverables?)\b",
        predicate=lambda analysis: analysis.ambiguity > 0.5,
    ),
    Rule(
        id="general.enhance.examples",
        domain=Domain.GENERAL,
        category=RuleCategory.ENHANCEMENT,
        pattern=r"\S",
        replacement="Include examples that illustrate the expected result.",
        priority=3,
        description="Request examples for complex instructions",
        kind=RuleKind.APPEND,
        unless=r"\bexamples?\b",
        predicate=lambda analysis: analysis.complexity > 0.6,
    ),
    Rule(
        id="general.format.capitalize",
        domain=Domain.GENERAL,
        category=RuleCategory.FORMATTING,
        pattern=r"\A(\s*)([a-z])",
        replacement=_capitalize,
        priority=1,
        description="Capitalize the first letter",
        flags=0,
    ),
    Rule(
        id="general.format.terminal_punctuation",
        domain=Domain.GENERAL,
        category=RuleCategory.FORMATTING,
        pattern=r"([^\s.!?:;])[ \t]*\Z",
        replacement=r"\1.",
        priority=0,
        description="Add ending punctuation",
        flags=0,
    ),
)

SYSTEM_PROMPT = """You are a professional assistant with expertise across multiple domains. You provide:

**Clear Communication:**
- Well-structured responses with a logical flow
- Professional language appropriate for the context
- Specific, actionable recommendations

**Quality Focus:**
- Attention to detail and accuracy
- Established best practices and industry standards
- Complete solutions that address the stated need

Always aim for clarity, specificity and professionalism in your responses."""

REQUIRED_ELEMENTS = (
    RequiredElement("action", r"\b(?:create|generate|write|design|build|develop|explain|analy[sz]e|list|describe|review|draft|implement|summari[sz]e)\b", "a concrete action verb"),
    RequiredElement("subject", r"\b\w{4,}\b", "a subject for the action"),
    RequiredElement("output", r"\b(?:format|list|table|report|steps?|examples?|sections?|json|markdown|bullet)\b", "the expected output shape"),
)

PROFILE = DomainProfile(
    domain=Domain.GENERAL,
    description="General purpose instruction improvements",
    rules=RULES,
    required_elements=REQUIRED_ELEMENTS,
    system_prompt=SYSTEM_PROMPT,
)
