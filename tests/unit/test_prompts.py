import json
import pytest

from authentiometer.llm.prompts import (
    build_analysis_prompt,
    build_condense_prompt,
    build_condense_system,
    build_extraction_prompt,
    build_extraction_system,
    build_system_rules,
    language_directive,
    schema_text,
)
from authentiometer.schemas.request import AnalysisOptions, Language

EN_DIRECTIVE = "You MUST write all user-facing strings in English."
FR_DIRECTIVE = "You MUST write all user-facing strings in French."


def _input_block(prompt: str) -> dict:
    start = prompt.index("INPUT:\n") + len("INPUT:\n")
    end = prompt.index("\n\nOUTPUT JSON SCHEMA")
    return json.loads(prompt[start:end])


@pytest.mark.parametrize("language, wanted, unwanted", [
    (Language.EN, EN_DIRECTIVE, FR_DIRECTIVE),
    (Language.FR, FR_DIRECTIVE, EN_DIRECTIVE),
])
def test_system_rules_language_directive(language, wanted, unwanted):
    """
    WHY: All human-readable result fields must come back in the UI language.
    HOW: Build the system rules for each language.
    EXPECTED: Only that language's directive is present.
    """
    rules = build_system_rules(language)
    assert wanted in rules
    assert unwanted not in rules
    assert language_directive(language) == wanted


@pytest.mark.parametrize("language", list(Language))
def test_every_system_prompt_carries_one_directive(language):
    """
    WHY: Extraction and condensation output is shown to users too.
    HOW: Build the extraction and condensation system prompts.
    EXPECTED: Each embeds the directive of the requested language only.
    """
    other = Language.FR if language is Language.EN else Language.EN
    for text in (build_extraction_system(language), build_condense_system(language)):
        assert language_directive(language) in text
        assert language_directive(other) not in text


def test_builders_are_idempotent():
    """
    WHY: Prompts must be a pure function of their arguments (no timestamps, no randomness).
    HOW: Call every builder twice with identical arguments.
    EXPECTED: Byte-identical output.
    """
    options = AnalysisOptions(include_fact_checking=False)
    url = "https://www.youtube.com/watch?v=abc"
    calls = [
        lambda: build_system_rules(Language.FR),
        lambda: build_analysis_prompt(options, url, "Some transcript.", Language.EN),
        lambda: build_extraction_system(Language.EN, 12_000),
        lambda: build_extraction_prompt(Language.FR, url, 12_000),
        lambda: build_condense_system(Language.FR),
        lambda: build_condense_prompt(Language.EN, "long text", 8_000),
    ]
    for build in calls:
        assert build() == build()


def test_analysis_prompt_embeds_options_and_exact_text():
    """
    WHY: The model must see exactly which dimensions are switched off, and the content unaltered.
    HOW: Build an analysis prompt with two options off and awkward content (quotes, newlines, unicode, $).
    EXPECTED: The INPUT JSON block round-trips to the same options and the exact content text.
    """
    options = AnalysisOptions(include_authenticity=False, include_scientific_soundness=False, cautious_mode=True)
    content = 'He said "100%" of doctors agree.\nÇa coûte $5 — ${not_a_placeholder}'
    prompt = build_analysis_prompt(options, "https://youtu.be/xyz", content, Language.FR)

    payload = _input_block(prompt)
    assert payload["options"] == {
        "includeAuthenticity": False,
        "includeFactChecking": True,
        "includeScientificSoundness": False,
        "cautiousMode": True,
    }
    assert payload["transcriptText"] == content
    assert payload["videoMeta"]["url"] == "https://youtu.be/xyz"
    assert prompt.startswith("Analyse le contenu ci-dessous selon la charte Authentiometer.")
    assert prompt.endswith(schema_text())


def test_analysis_prompt_without_url():
    """
    WHY: Groq mode may run without any video URL.
    HOW: Build the prompt with source_reference=None.
    EXPECTED: videoMeta.url is an empty string, not null.
    """
    payload = _input_block(build_analysis_prompt(AnalysisOptions(), None, "text", Language.EN))
    assert payload["videoMeta"]["url"] == ""


def test_schema_lists_closed_verdicts():
    """
    WHY: The output contract must show the model every allowed verdict, including not_assessed.
    HOW: Inspect the schema text.
    EXPECTED: Each dimension's enum and the recommendedUse keys are present.
    """
    text = schema_text()
    assert '"verdict": "high|medium|fragile|not_assessed"' in text
    assert '"verdict": "mostly_reliable|uncertain|risky|not_assessed"' in text
    assert '"verdict": "solid|mixed|fragile|not_assessed"' in text
    assert '"scienceLearning": "ok|caution|avoid"' in text
    assert "Extract 5 to 10 claims max." in text


def test_extraction_prompt_mentions_url_and_limit():
    """
    WHY: The extractor is told which video to read and how long its answer may be.
    HOW: Build the extraction system and user prompts with a custom ceiling.
    EXPECTED: Both mention the ceiling; the user prompt contains the URL and the access/coverage schema.
    """
    url = "https://www.youtube.com/watch?v=abc"
    system = build_extraction_system(Language.EN, 4_321)
    user = build_extraction_prompt(Language.EN, url, 4_321)
    assert "Keep transcriptText under 4321 characters." in system
    assert "transcriptText max 4321 chars." in user
    assert f"YouTube URL:\n{url}" in user
    assert '"access": "ok|partial|blocked"' in user


def test_condense_prompt_target_and_text():
    """
    WHY: Condensation must be bounded and must see the whole input.
    HOW: Build the condense prompt.
    EXPECTED: Target length and the text appear verbatim.
    """
    text = "Claim one. Claim two.\n\nMore."
    prompt = build_condense_prompt(Language.EN, text, 777)
    assert f"TEXT:\n{text}\n\n" in prompt
    assert "condensedText must be <= 777 characters." in prompt
