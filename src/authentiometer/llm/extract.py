"""Video-to-text extraction (Gemini only).

Asks the model for a transcript-like text of the video plus an honest
access/coverage report. The size ceiling is enforced here, not trusted
to the model.
"""

from .prompts import build_extraction_prompt, build_extraction_system
from .providers import Provider
from .providers.gemini import video_part
from .retry import call_with_retry
from ..config import DEFAULT_LIMITS, Limits
from ..log import get_logger
from ..schemas.request import Language
from ..schemas.stages import ACCESS_VALUES, COVERAGE_VALUES, ExtractedContent, ExtractionResponse

logger = get_logger("extract")


def extract(
    provider: Provider,
    credential: str,
    model: str,
    language: Language,
    source_reference: str,
    limits: Limits = DEFAULT_LIMITS,
) -> ExtractedContent:
    max_chars = limits.max_extracted_text_chars
    parts = [
        video_part(source_reference),
        {"text": build_extraction_prompt(language, source_reference, max_chars)},
    ]

    out = call_with_retry(
        provider.call_json,
        credential=credential,
        model=model,
        system_text=build_extraction_system(language, max_chars),
        user_text="",
        parts=parts,
    )
    raw = ExtractionResponse.model_validate(out)

    text = raw.transcript_text.strip()
    if len(text) > max_chars:
        logger.warning(f"Extracted text is {len(text)} chars, truncating to {max_chars}")
        text = text[:max_chars]

    access = raw.access if raw.access in ACCESS_VALUES else "partial"
    coverage = raw.coverage if raw.coverage in COVERAGE_VALUES else ("partial" if text else "none")

    logger.info(f"Extraction: access={access} coverage={coverage} chars={len(text)}")
    return ExtractedContent(
        access=access,
        coverage=coverage,
        transcript_text=text,
        content_language=raw.content_language,
        notes=raw.notes,
        limitations=raw.limitations,
    )
