"""Condensation of oversized text before analysis.

Text up to max_analysis_text_chars goes through untouched; longer text (up to
the hard max_user_text_chars ceiling) is summarized by the model down to
condensed_target_chars.
"""

from .prompts import build_condense_prompt, build_condense_system
from .providers import Provider
from .retry import call_with_retry
from ..config import DEFAULT_LIMITS, Limits
from ..errors import ValidationError
from ..log import get_logger
from ..messages import msg
from ..schemas.request import Language
from ..schemas.stages import CondensationResponse, CondensedContent

logger = get_logger("condense")


def condense(
    provider: Provider,
    credential: str,
    model: str,
    language: Language,
    text: str,
    limits: Limits = DEFAULT_LIMITS,
) -> CondensedContent:
    if not text:
        return CondensedContent()

    if len(text) > limits.max_user_text_chars:
        raise ValidationError(
            msg(language, "text_too_long", actual=len(text), allowed=limits.max_user_text_chars)
        )

    if len(text) <= limits.max_analysis_text_chars:
        return CondensedContent(final_text=text)

    target = limits.condensed_target_chars
    logger.info(f"Condensing {len(text)} chars to <= {target} with {provider.label}")
    out = call_with_retry(
        provider.call_json,
        credential=credential,
        model=model,
        system_text=build_condense_system(language),
        user_text=build_condense_prompt(language, text, target),
    )
    raw = CondensationResponse.model_validate(out)

    final_text = raw.condensed_text
    if len(final_text) > target:
        logger.warning(f"Condensed text is {len(final_text)} chars, truncating to {target}")
        final_text = final_text[:target]

    return CondensedContent(
        final_text=final_text,
        notes=[raw.notes] if raw.notes else [],
        limitations=raw.limitations,
        condensed=True,
    )
