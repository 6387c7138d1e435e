from promptsmith.domains import Domain
from promptsmith.pipeline.analyzer import PromptAnalyzer
from promptsmith.pipeline.refiner import Refiner
from promptsmith.rules.catalog import Rule, RuleCategory, build_default_catalog


def _refine(text: str, domain: Domain, catalog=None):
    catalog = catalog or build_default_catalog()
    return Refiner(catalog).refine(text, domain, PromptAnalyzer().analyze(text))


def test_general_rules_replace_vague_terms_and_ask_for_criteria() -> None:
    result = _refine("make it nice", Domain.GENERAL)

    assert result.refined == (
        "Make it well-crafted\n\n"
        "Specify the expected output format and the criteria for a successful result."
    )
    assert result.rules_applied == (
        "general.vague.nice",
        "general.enhance.clarify_scope",
        "general.format.capitalize",
    )
    assert result.rule_errors == ()


def test_domain_rules_run_after_general_layer() -> None:
    result = _refine("create a table for customers", Domain.SQL)

    assert result.refined.startswith("Design a database table for customers.")
    assert result.rules_applied == (
        "general.format.capitalize",
        "general.format.terminal_punctuation",
        "sql.structure.create_table",
        "sql.enhance.data_types",
        "sql.enhance.sample_data",
        "sql.practice.naming",
        "sql.practice.normalization",
    )
    assert "Include sample data (5-10 rows)" in result.refined


def test_each_rule_fires_at_most_once() -> None:
    result = _refine("create a table for customers", Domain.SQL)

    assert len(result.rules_applied) == len(set(result.rules_applied))
    assert result.refined.count("Include sample data") == 1


def test_refinement_is_deterministic() -> None:
    first = _refine("build a fast query for the orders table", Domain.SQL)
    second = _refine("build a fast query for the orders table", Domain.SQL)

    assert first == second


def test_faulty_rules_are_skipped_and_recorded() -> None:
    broken_pattern = Rule(
        id="general.broken_pattern",
        domain=Domain.GENERAL,
        category=RuleCategory.FORMATTING,
        pattern="(",
        replacement="x",
        priority=10,
    )
    broken_predicate = Rule(
        id="general.broken_predicate",
        domain=Domain.GENERAL,
        category=RuleCategory.FORMATTING,
        pattern=r"\S",
        replacement="x",
        priority=10,
        predicate=lambda analysis: 1 / 0,
    )
    catalog = build_default_catalog().with_rules(Domain.GENERAL, [broken_pattern, broken_predicate])

    result = _refine("make it nice", Domain.GENERAL, catalog)

    assert result.rule_errors == ("general.broken_pattern", "general.broken_predicate")
    assert "general.vague.nice" in result.rules_applied
    assert result.refined.startswith("Make it well-crafted")
