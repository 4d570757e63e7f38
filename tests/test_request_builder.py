import pytest

from spendwise.core.analysis import grammar
from spendwise.core.analysis.request_builder import RequestBuilder
from spendwise.core.errors import PromptNotFound
from spendwise.prompts.registry import PromptRegistry

RECEIPT = "ABC Stationery | Total: ₹3,450"


@pytest.fixture
def builder():
    return RequestBuilder()


def test_english_prompt_has_no_translation_request(builder):
    bundle = builder.build(RECEIPT, "English")

    assert bundle.user_prompt == f"Analyze the following receipt text in English:\n\n{RECEIPT}"
    assert "translate" not in bundle.user_prompt


def test_other_language_requests_dual_output(builder):
    bundle = builder.build(RECEIPT, "Spanish")

    assert bundle.user_prompt.startswith(
        "Analyze the following receipt text. Provide the analysis in English AND translate it into Spanish."
    )
    assert bundle.user_prompt.endswith(RECEIPT)


def test_dual_prompt_names_the_exact_translation_header(builder):
    bundle = builder.build(RECEIPT, "Spanish")

    assert 'Start the translation with the line "--- TRANSLATION (Spanish) ---":' in bundle.user_prompt


def test_system_instruction_is_fixed(builder):
    english = builder.build(RECEIPT, "English")
    hindi = builder.build("something else", "Hindi")

    assert english.system_instruction == hindi.system_instruction


def test_system_instruction_describes_the_grammar(builder):
    instruction = builder.build(RECEIPT).system_instruction

    for title in grammar.SECTION_TITLES:
        assert title in instruction
    for key in grammar.PURCHASE_DETAIL_KEYS + grammar.CATEGORY_KEYS:
        assert f"{key}:" in instruction
    for category in grammar.EXPENSE_CATEGORIES:
        assert category in instruction
    assert grammar.NOT_AVAILABLE in instruction
    assert "--- TRANSLATION ([Target Language Name]) ---" in instruction


def test_placeholders_in_user_text_are_not_expanded(builder):
    bundle = builder.build("Vendor {{ language }} here", "French")

    assert bundle.user_prompt.endswith("Vendor {{ language }} here")


def test_build_is_pure(builder):
    assert builder.build(RECEIPT, "German") == builder.build(RECEIPT, "German")


def test_translation_header_format():
    assert grammar.translation_header("Spanish") == "--- TRANSLATION (Spanish) ---"


def test_missing_prompt_file(tmp_path):
    registry = PromptRegistry(base_dir=tmp_path)

    with pytest.raises(PromptNotFound):
        registry.load("analysis/v1.yaml")


def test_missing_template(tmp_path):
    (tmp_path / "p.yaml").write_text("templates:\n  single: hi\n", encoding="utf-8")
    registry = PromptRegistry(base_dir=tmp_path)

    assert registry.render("p.yaml", "single") == "hi"
    with pytest.raises(ValueError):
        registry.render("p.yaml", "dual")
