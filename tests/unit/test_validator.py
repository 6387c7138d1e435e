from promptsmith.domains import Domain
from promptsmith.pipeline.analyzer import PromptAnalyzer
from promptsmith.pipeline.validator import DEFAULT_CHECKS, Check, Validator
from promptsmith.rules.catalog import build_default_catalog
from promptsmith.types import Dimension, Severity


def _validate(text: str, *, domain: Domain = Domain.GENERAL, variables=None, checks=DEFAULT_CHECKS):
    validator = Validator(build_default_catalog(), checks=checks)
    return validator.validate(text, PromptAnalyzer().analyze(text), domain=domain, variables=variables)


def _codes(result) -> set[str]:
    return {issue.code for issue in (*result.errors, *result.warnings)}


def test_short_text_is_invalid() -> None:
    result = _validate("Fix")

    assert not result.is_valid
    assert [issue.code for issue in result.errors] == ["TOO_SHORT"]
    assert result.errors[0].severity is Severity.CRITICAL
    assert result.errors[0].dimension is Dimension.COMPLETENESS


def test_concrete_request_is_valid() -> None:
    result = _validate(
        "Create a report listing revenue for 5 regions as a table. It must include totals per quarter."
    )

    assert result.is_valid
    assert result.errors == ()
    assert "MISSING_CONSTRAINTS" not in _codes(result)
    assert "LACKS_SPECIFICS" not in _codes(result)


def test_missing_action_and_specifics_are_reported() -> None:
    result = _validate("Some words about the weather in the mountains")

    codes = _codes(result)
    assert {"MISSING_ACTION", "LACKS_SPECIFICS", "MISSING_CONSTRAINTS"} <= codes
    missing_action = next(issue for issue in result.warnings if issue.code == "MISSING_ACTION")
    assert missing_action.severity is Severity.HIGH
    assert missing_action.dimension is Dimension.STRUCTURE


def test_unresolved_placeholders_are_flagged() -> None:
    text = "Write a summary of {{topic}} for the team"

    assert "UNRESOLVED_PLACEHOLDER" in _codes(_validate(text))
    assert "UNRESOLVED_PLACEHOLDER" not in _codes(_validate(text, variables={"topic": "pricing"}))


def test_vague_term_suggestions_are_capped() -> None:
    result = _validate("Write good stuff about nice things")

    vague = [suggestion for suggestion in result.suggestions if suggestion.before]
    assert [(s.before, s.after) for s in vague] == [
        ("good", "high-quality"),
        ("stuff", "components"),
        ("nice", "well-designed"),
    ]


def test_domain_required_elements() -> None:
    result = _validate("Write something about dogs and cats today", domain=Domain.SQL)

    issue = next(issue for issue in result.warnings if issue.code == "MISSING_ELEMENTS")
    assert issue.severity is Severity.HIGH
    assert issue.dimension is Dimension.COMPLETENESS


def test_failing_check_becomes_warning() -> None:
    def _explode(ctx):
        raise RuntimeError("boom")

    checks = DEFAULT_CHECKS + (Check("exploding", Dimension.CLARITY, _explode),)

    result = _validate("Create a report listing revenue for 5 regions.", checks=checks)

    failed = [issue for issue in result.warnings if issue.code == "CHECK_FAILED"]
    assert len(failed) == 1
    assert failed[0].severity is Severity.LOW
    assert failed[0].dimension is Dimension.CLARITY
    assert "boom" in failed[0].message


def test_summary_mirrors_analysis() -> None:
    text = "Create a SQL table for orders with 3 columns."
    analysis = PromptAnalyzer().analyze(text)

    result = Validator().validate(text, analysis)

    assert result.summary.word_count == analysis.word_count
    assert result.summary.domain_hints == analysis.domain_hints
    assert result.summary.intent == "create"
