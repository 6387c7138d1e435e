import pytest

from promptsmith.config import AnalyzerConfig
from promptsmith.domains import Domain
from promptsmith.errors import InvalidInput
from promptsmith.pipeline.analyzer import PromptAnalyzer, detect_variables, split_sentences


@pytest.mark.parametrize("text", ["", "   ", "\n\t\n"])
def test_empty_text_is_rejected(text: str) -> None:
    with pytest.raises(InvalidInput):
        PromptAnalyzer().analyze(text)


def test_non_string_is_rejected() -> None:
    with pytest.raises(InvalidInput) as excinfo:
        PromptAnalyzer().analyze(42)  # type: ignore[arg-type]
    assert excinfo.value.field == "text"


def test_entities_and_technical_terms() -> None:
    analysis = PromptAnalyzer().analyze("Deploy the FastAPI service to AWS with Docker in 3 days")

    found = {(entity.text, entity.label) for entity in analysis.entities}
    assert {
        ("FastAPI", "TECHNOLOGY"),
        ("AWS", "PLATFORM"),
        ("Docker", "PLATFORM"),
        ("3 days", "QUANTITY"),
    } <= found
    assert all(entity.label != "NUMBER" for entity in analysis.entities)
    assert analysis.technical_terms == ("FastAPI", "AWS", "Docker")
    assert analysis.technical_term_count == 3
    assert analysis.language == "en"


def test_vague_request_is_ambiguous() -> None:
    analysis = PromptAnalyzer().analyze("Make it nice")

    assert analysis.ambiguity == 1.0
    assert analysis.word_count == 3


def test_concrete_request_has_no_ambiguity() -> None:
    analysis = PromptAnalyzer().analyze("Create a PostgreSQL table named orders with 5 columns.")

    assert analysis.ambiguity == 0.0
    assert analysis.intent.category == "create"
    assert "table" in analysis.intent.subcategories


def test_scores_stay_in_unit_interval() -> None:
    analysis = PromptAnalyzer().analyze(
        "Analyze the quarterly revenue report, compare it with last year, and explain "
        "the main drivers of growth in a short summary for executives."
    )

    for value in (analysis.complexity, analysis.ambiguity, analysis.readability):
        assert 0.0 <= value <= 1.0
    assert analysis.sentence_count == 1
    assert analysis.estimated_tokens >= analysis.word_count


def test_domain_hints_rank_by_keyword_hits() -> None:
    analysis = PromptAnalyzer().analyze("Write a SQL query that joins the orders table")

    assert analysis.domain_hints[0] is Domain.SQL


def test_no_domain_hints_for_generic_text() -> None:
    analysis = PromptAnalyzer().analyze("Write a short poem about autumn leaves")

    assert analysis.domain_hints == ()


def test_spanish_language_detection() -> None:
    analysis = PromptAnalyzer().analyze("Hazme una tabla bonita para los usuarios")

    assert analysis.language == "es"
    assert Domain.SQL in analysis.domain_hints


def test_explain_intent() -> None:
    analysis = PromptAnalyzer().analyze("Explain how the cache works")

    assert analysis.intent.category == "explain"
    assert analysis.intent.confidence == 0.5


def test_clean_strips_control_characters_and_spacing() -> None:
    analyzer = PromptAnalyzer()

    assert analyzer.clean("  Hello\x00   world \n\n\n\nBye ") == "Hello world\n\nBye"


def test_clean_caps_input_length() -> None:
    analyzer = PromptAnalyzer(AnalyzerConfig(max_input_chars=100))

    assert len(analyzer.clean("word " * 100)) == 100


def test_detect_variables_in_order_of_appearance() -> None:
    text = "Hello {{name}}, use $token with %path% and [item] then {{name}} again"

    assert detect_variables(text) == ("name", "token", "path", "item")


def test_split_sentences() -> None:
    assert split_sentences("One. Two! Three?\nFour") == ["One.", "Two!", "Three?", "Four"]
