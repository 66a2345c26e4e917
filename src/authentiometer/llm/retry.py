"""Strict-JSON retry.

A model that answers with prose or markdown gets exactly one more chance,
with both prompts reminding it to answer with JSON only. Transport and
validation failures are never retried.
"""

import logging
from typing import Any, Callable, Dict, Optional, Sequence

from tenacity import Retrying, before_sleep_log, retry_if_exception_type, stop_after_attempt

from .providers import Part
from ..errors import FormatError
from ..log import get_logger

logger = get_logger("retry")

MAX_ATTEMPTS = 2
SYSTEM_HARDENING = "\n\nCRITICAL: Output ONLY valid JSON. No extra text. No markdown."
USER_HARDENING = "\n\nREMINDER: Output MUST be a single JSON object only."

CallJson = Callable[..., Dict[str, Any]]


def harden(system_text: str, user_text: str):
    return system_text + SYSTEM_HARDENING, (user_text or "") + USER_HARDENING


def call_with_retry(
    call_json: CallJson,
    *,
    credential: str,
    model: str,
    system_text: str,
    user_text: str = "",
    parts: Optional[Sequence[Part]] = None,
) -> Dict[str, Any]:
    """
    Call `call_json` (a provider's call_json) once; on FormatError call it once
    more with hardened prompts. The second FormatError is re-raised as is.
    """
    for attempt in Retrying(
        stop=stop_after_attempt(MAX_ATTEMPTS),
        retry=retry_if_exception_type(FormatError),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    ):
        with attempt:
            system, user = system_text, user_text
            if attempt.retry_state.attempt_number > 1:
                system, user = harden(system_text, user_text)
            return call_json(credential, model, system, user, parts)
