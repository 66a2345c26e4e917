import pytest

from authentiometer import config
from authentiometer.config import Limits, Settings
from authentiometer.errors import ValidationError
from authentiometer.pipeline.run import AnalysisPipeline


def test_limits_from_settings():
    """
    WHY: Size ceilings are configurable through the environment.
    HOW: Build limits from settings with custom values.
    EXPECTED: Each setting lands on its limit field.
    """
    settings = Settings(
        MAX_USER_TEXT_CHARS=5_000,
        MAX_EXTRACTED_TEXT_CHARS=1_000,
        MAX_ANALYSIS_TEXT_CHARS=2_000,
        CONDENSED_TARGET_CHARS=500,
        MAX_LIMITATIONS=10,
    )
    limits = Limits.from_settings(settings)
    assert limits == Limits(
        max_user_text_chars=5_000,
        max_extracted_text_chars=1_000,
        max_analysis_text_chars=2_000,
        condensed_target_chars=500,
        max_limitations=10,
    )


@pytest.mark.parametrize("overrides, expected", [
    ({"MAX_USER_TEXT_CHARS": 1_000, "MAX_ANALYSIS_TEXT_CHARS": 2_000, "CONDENSED_TARGET_CHARS": 500},
     "max_analysis_text_chars must not exceed max_user_text_chars"),
    ({"CONDENSED_TARGET_CHARS": 30_000},
     "condensed_target_chars must not exceed max_analysis_text_chars"),
    ({"MAX_LIMITATIONS": 0}, "greater than 0"),
])
def test_inconsistent_settings_raise_package_error(overrides, expected):
    """
    WHY: A bad .env must be reported like any other input problem, not as a pydantic traceback.
    HOW: Build limits from settings whose ceilings are out of order or out of range.
    EXPECTED: The package's ValidationError, naming the broken rule.
    """
    with pytest.raises(ValidationError, match="Invalid size limits in settings") as exc:
        Limits.from_settings(Settings(**overrides))
    assert expected in str(exc.value)


def test_pipeline_with_bad_settings_fails_cleanly(monkeypatch):
    """
    WHY: The CLI only reports package errors; the pipeline must raise one for bad limits.
    HOW: Point get_settings at inconsistent settings and build a pipeline without explicit limits.
    EXPECTED: ValidationError from the constructor.
    """
    bad = Settings(MAX_USER_TEXT_CHARS=100, MAX_ANALYSIS_TEXT_CHARS=200, CONDENSED_TARGET_CHARS=50)
    monkeypatch.setattr(config, "get_settings", lambda: bad)

    with pytest.raises(ValidationError):
        AnalysisPipeline(credentials=lambda kind: "k")
