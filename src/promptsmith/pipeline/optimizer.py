"""Structural normalization of refined text into a template-ready prompt."""

from __future__ import annotations

import re
from typing import Callable

from promptsmith.domains import Tone
from promptsmith.types import Improvement, OptimizedPrompt, RawRequest, RefinementResult

_PARAGRAPH_SPLIT = re.compile(r"\n\s*\n")
_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")
_BULLET = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+")
_REQUIREMENTS_HEADER = "Requirements:"
_CONTEXT_HEADER = "Context:"

_TONE_ADJUSTMENTS: dict[Tone, tuple[tuple[str, str], ...]] = {
    Tone.FORMAL: (
        (r"\bhey\b", "hello"),
        (r"\bhi\b", "greetings"),
        (r"\b(?:okay|ok)\b", "acceptable"),
        (r"\bguys\b", "team"),
        (r"\bgonna\b", "going to"),
        (r"\bwanna\b", "want to"),
        (r"\bkinda\b", "somewhat"),
    ),
    Tone.CASUAL: (
        (r"\bI would like to request\b", "I need"),
        (r"\bplease generate\b", "create"),
        (r"\bkindly\s+", ""),
        (r"\butilize\b", "use"),
        (r"\bin order to\b", "to"),
    ),
    Tone.TECHNICAL: (
        (r"\bmake\b", "implement"),
        (r"\bbuild\b", "develop"),
        (r"\bfix\b", "resolve"),
        (r"\bfast\b", "low-latency"),
    ),
    Tone.CREATIVE: (
        (r"\bimplement\b", "craft"),
        (r"\bgenerate\b", "create"),
        (r"\bdevelop\b", "design"),
    ),
}

# Checked in order; the first matching cue decides the template type.
_TEMPLATE_CUES: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("few-shot", re.compile(r"\b(?:example|input|output)\s*\d*\s*:", re.IGNORECASE)),
    ("role-based", re.compile(r"^\s*(?:you are|act as|as an?\s+\w+,)", re.IGNORECASE | re.MULTILINE)),
    ("step-by-step", re.compile(r"\bstep[- ]by[- ]step\b|\bsteps\b|^\s*\d+[.)]\s", re.IGNORECASE | re.MULTILINE)),
    ("chain-of-thought", re.compile(r"\b(?:reason(?:ing)?|think through|explain why|walk through|justify)\b", re.IGNORECASE)),
)


class Optimizer:
    """Pure structural pass between the Refiner and the Validator."""

    def optimize(self, refinement: RefinementResult, request: RawRequest) -> OptimizedPrompt:
        """Section, reorder and templatize refined text.

        Output order is the main instruction, then a `Requirements:` list built
        from single-sentence requirement clauses, then any titled blocks, then
        the caller context. Caller variables whose values occur in the text are
        replaced by `{{name}}` placeholders.
        """
        text = refinement.refined
        improvements: list[Improvement] = []
        steps: list[str] = []

        if request.tone is not None:
            text, changed = self._adjust_tone(text, request.tone)
            if changed:
                improvements.append(
                    Improvement("tone", f"Adjusted wording for a {request.tone.value} tone", "medium")
                )
                steps.append(f"tone_{request.tone.value}")

        text, grouped = self._section(text, request.context)
        if grouped:
            improvements.append(
                Improvement("structure", f"Grouped {grouped} requirement clauses into a list", "high")
            )
            steps.append("group_requirements")
        if request.context:
            improvements.append(Improvement("context", "Added caller context section", "high"))
            steps.append("add_context")

        text, substituted = self._extract_variables(text, request.variables)
        if substituted:
            improvements.append(
                Improvement("variables", f"Extracted variables: {', '.join(substituted)}", "medium")
            )
            steps.append("extract_variables")

        cleaned = _clean_whitespace(text)
        if cleaned != text:
            steps.append("clean_whitespace")

        placeholders = _placeholders(cleaned)
        used = {
            name: request.variables[name]
            for name in placeholders
            if name in request.variables
        }
        return OptimizedPrompt(
            text=cleaned,
            variables=used,
            placeholders=placeholders,
            template_type=detect_template_type(cleaned),
            improvements=tuple(improvements),
            steps_applied=tuple(steps),
        )

    @staticmethod
    def _adjust_tone(text: str, tone: Tone) -> tuple[str, bool]:
        changed = False
        for pattern, target in _TONE_ADJUSTMENTS[tone]:
            updated = re.sub(pattern, _case_preserving(target), text, flags=re.IGNORECASE)
            if updated != text:
                changed = True
                text = updated
        return text, changed

    @staticmethod
    def _section(text: str, context: str | None) -> tuple[str, int]:
        paragraphs = [part.strip() for part in _PARAGRAPH_SPLIT.split(text) if part.strip()]
        if not paragraphs:
            return text, 0

        main, rest = paragraphs[0], paragraphs[1:]
        requirements: list[str] = []
        blocks: list[str] = []
        for paragraph in rest:
            lines = paragraph.splitlines()
            if lines[0].strip() == _REQUIREMENTS_HEADER:
                requirements.extend(_BULLET.sub("", line).strip() for line in lines[1:] if line.strip())
            elif lines[0].strip() == _CONTEXT_HEADER:
                continue
            elif len(lines) == 1 and not paragraph.endswith(":"):
                requirements.append(paragraph)
            else:
                blocks.append(paragraph)

        sections = [main]
        if requirements:
            sections.append(
                _REQUIREMENTS_HEADER + "\n" + "\n".join(f"- {item}" for item in requirements)
            )
        sections.extend(blocks)
        if context and context.strip():
            sections.append(f"{_CONTEXT_HEADER}\n{context.strip()}")
        return "\n\n".join(sections), len(requirements)

    @staticmethod
    def _extract_variables(text: str, variables: dict[str, str]) -> tuple[str, list[str]]:
        names_by_value: dict[str, str] = {}
        # Longest values first so a value contained in another is not split.
        for name, value in sorted(variables.items(), key=lambda item: (-len(item[1].strip()), item[0])):
            value = value.strip()
            if value and value not in names_by_value:
                names_by_value[value] = name
        if not names_by_value:
            return text, []

        # One pass; existing placeholders match first and are kept verbatim.
        pattern = re.compile(
            "|".join(
                [_PLACEHOLDER.pattern]
                + [rf"(?<!\w){re.escape(value)}(?!\w)" for value in names_by_value]
            )
        )
        substituted: set[str] = set()

        def replace(match: re.Match[str]) -> str:
            found = match.group(0)
            name = names_by_value.get(found)
            if name is None or _PLACEHOLDER.fullmatch(found):
                return found
            substituted.add(name)
            return "{{" + name + "}}"

        return pattern.sub(replace, text), sorted(substituted)


def detect_template_type(text: str) -> str:
    for template_type, cue in _TEMPLATE_CUES:
        if cue.search(text):
            return template_type
    return "basic"


def _placeholders(text: str) -> tuple[str, ...]:
    names: list[str] = []
    for match in _PLACEHOLDER.finditer(text):
        if match.group(1) not in names:
            names.append(match.group(1))
    return tuple(names)


def _case_preserving(target: str) -> Callable[[re.Match[str]], str]:
    def substitute(match: re.Match[str]) -> str:
        source = match.group(0)
        if target and source[:1].isupper():
            return target[:1].upper() + target[1:]
        return target

    return substitute


def _clean_whitespace(text: str) -> str:
    lines = [line.rstrip() for line in text.splitlines()]
    cleaned = "\n".join(lines)
    cleaned = re.sub(r"\n{3,}", "\n\n", cleaned)
    cleaned = re.sub(r"[ \t]{2,}", " ", cleaned)
    return cleaned.strip()
