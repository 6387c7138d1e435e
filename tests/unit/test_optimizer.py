import pytest

from promptsmith.domains import Tone
from promptsmith.pipeline.optimizer import Optimizer, detect_template_type
from promptsmith.types import RawRequest, RefinementResult


def _optimize(refined: str, **request_fields):
    request = RawRequest(text=refined, **request_fields)
    return Optimizer().optimize(RefinementResult(refined=refined, rules_applied=()), request)


def test_single_line_paragraphs_become_requirements() -> None:
    result = _optimize("Design a table.\n\nInclude sample data.\n\nUse snake_case naming.")

    assert result.text == (
        "Design a table.\n\n"
        "Requirements:\n"
        "- Include sample data.\n"
        "- Use snake_case naming."
    )
    assert [improvement.kind for improvement in result.improvements] == ["structure"]
    assert result.improvements[0].impact == "high"
    assert "group_requirements" in result.steps_applied


def test_titled_blocks_follow_requirements() -> None:
    refined = (
        "Create a brand strategy.\n\n"
        "Target Audience Considerations:\n- Age range\n- Interests\n\n"
        "Define the tone of voice."
    )

    result = _optimize(refined)

    assert result.text == (
        "Create a brand strategy.\n\n"
        "Requirements:\n- Define the tone of voice.\n\n"
        "Target Audience Considerations:\n- Age range\n- Interests"
    )


def test_context_is_appended_last() -> None:
    result = _optimize("Write a launch email.", context="  Audience is existing customers. ")

    assert result.text == "Write a launch email.\n\nContext:\nAudience is existing customers."
    assert any(improvement.kind == "context" for improvement in result.improvements)


def test_variables_are_templatized() -> None:
    result = _optimize(
        "Design the orders table with an orders_id column.",
        variables={"table_name": "orders", "unused": "nowhere"},
    )

    assert result.text == "Design the {{table_name}} table with an orders_id column."
    assert result.variables == {"table_name": "orders"}
    assert result.placeholders == ("table_name",)


def test_value_matching_another_variable_name_keeps_both_placeholders() -> None:
    result = _optimize(
        "Summarize the users report by kind.",
        variables={"kind": "users", "item": "kind"},
    )

    assert result.text == "Summarize the {{kind}} report by {{item}}."
    assert result.variables == {"kind": "users", "item": "kind"}
    assert result.placeholders == ("kind", "item")
    assert "Extracted variables: item, kind" in [improvement.description for improvement in result.improvements]


def test_existing_placeholders_are_left_untouched() -> None:
    result = _optimize("Email {{name}} about the name change.", variables={"label": "name"})

    assert result.text == "Email {{name}} about the {{label}} change."
    assert result.placeholders == ("name", "label")


def test_formal_tone_adjusts_casual_words() -> None:
    result = _optimize("Hey guys, gonna need a report", tone=Tone.FORMAL)

    assert result.text == "Hello team, going to need a report"
    assert result.steps_applied[0] == "tone_formal"


def test_tone_without_matches_reports_nothing() -> None:
    result = _optimize("Write a report.", tone=Tone.CREATIVE)

    assert result.improvements == ()
    assert result.text == "Write a report."


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("Example 1: input text", "few-shot"),
        ("You are a data analyst. Summarize the data.", "role-based"),
        ("Explain the migration step by step.", "step-by-step"),
        ("Think through the trade-offs before answering.", "chain-of-thought"),
        ("Write a haiku about the sea.", "basic"),
    ],
)
def test_template_type_detection(text: str, expected: str) -> None:
    assert detect_template_type(text) == expected
