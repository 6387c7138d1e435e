import pytest

from promptsmith.domains import Domain
from promptsmith.rules import general
from promptsmith.rules.catalog import (
    DomainProfile,
    Rule,
    RuleCatalog,
    RuleCategory,
    RuleKind,
    build_default_catalog,
)


def _rule(rule_id: str, domain: Domain = Domain.GENERAL, **kwargs) -> Rule:
    return Rule(
        id=rule_id,
        domain=domain,
        category=kwargs.pop("category", RuleCategory.VAGUE_TERMS),
        pattern=kwargs.pop("pattern", r"\bfoo\b"),
        replacement=kwargs.pop("replacement", "bar"),
        **kwargs,
    )


def test_default_catalog_covers_every_domain() -> None:
    catalog = build_default_catalog()

    assert set(catalog.domains()) == set(Domain)
    for domain in Domain:
        assert catalog.system_prompt(domain)
        assert catalog.required_elements(domain)


def test_general_layer_precedes_domain_rules() -> None:
    rules = build_default_catalog().rules_for(Domain.SQL)

    layers = [rule.domain is Domain.GENERAL for rule in rules]
    first_domain_rule = layers.index(False)
    assert all(layers[:first_domain_rule])
    assert not any(layers[first_domain_rule:])


def test_rule_order_is_stable() -> None:
    catalog = build_default_catalog()
    for domain in Domain:
        rules = catalog.rules_for(domain)
        assert rules == tuple(sorted(rules, key=Rule.sort_key))
        assert tuple(sorted(reversed(rules), key=Rule.sort_key)) == rules


def test_priority_then_id_ordering() -> None:
    rules = [
        _rule("general.b", priority=5),
        _rule("general.a", priority=5),
        _rule("general.c", priority=9),
    ]

    ordered = sorted(rules, key=Rule.sort_key)

    assert [rule.id for rule in ordered] == ["general.c", "general.a", "general.b"]


def test_duplicate_rule_ids_are_rejected() -> None:
    duplicate = DomainProfile(
        domain=Domain.SQL,
        description="dup",
        rules=(_rule(general.RULES[0].id, Domain.SQL),),
        required_elements=(),
        system_prompt="",
    )

    with pytest.raises(ValueError, match="Duplicate rule id"):
        RuleCatalog([general.PROFILE, duplicate])


def test_general_profile_is_required() -> None:
    profile = DomainProfile(
        domain=Domain.SQL,
        description="sql only",
        rules=(),
        required_elements=(),
        system_prompt="",
    )

    with pytest.raises(ValueError, match="general"):
        RuleCatalog([profile])


def test_unknown_domain_falls_back_to_general() -> None:
    catalog = RuleCatalog([general.PROFILE])

    assert catalog.rules_for(Domain.LEGAL) == catalog.rules_for(Domain.GENERAL)
    assert catalog.system_prompt(Domain.LEGAL) == general.SYSTEM_PROMPT


def test_replace_rule_reports_no_change() -> None:
    rule = _rule("general.foo")

    assert rule.apply("foo and foo") == "bar and bar"
    assert rule.apply("nothing here") is None


def test_append_rule_respects_unless() -> None:
    rule = _rule(
        "general.append",
        category=RuleCategory.ENHANCEMENT,
        kind=RuleKind.APPEND,
        pattern=r"\breport\b",
        replacement="Include a summary section.",
        unless=r"\bsummary\b",
    )

    assert rule.apply("Write a report") == "Write a report\n\nInclude a summary section."
    assert rule.apply("Write a report with a summary") is None
    assert rule.apply("Write a poem") is None


def test_with_rules_returns_new_catalog() -> None:
    catalog = build_default_catalog()
    extra = _rule("sql.extra", Domain.SQL)

    extended = catalog.with_rules(Domain.SQL, [extra])

    assert extra in extended.rules_for(Domain.SQL)
    assert extra not in catalog.rules_for(Domain.SQL)


def test_statistics_lists_each_domain() -> None:
    stats = build_default_catalog().statistics()

    assert set(stats) == {domain.value for domain in Domain}
    assert stats["sql"]["rule_count"] > 0
    assert "entity" in stats["sql"]["required_elements"]
