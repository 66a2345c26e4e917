"""LLM provider adapters.

Both providers share one protocol: list the invocable models, and run one
completion whose text must be a single JSON object. Neither retries; see
llm.retry for the strict-JSON retry.
"""

import json
from typing import Any, Dict, List, Optional, Protocol, Sequence

from ...errors import FormatError
from ...schemas.request import ProviderKind

Part = Dict[str, Any]

# Body excerpt sizes carried by TransportError messages
LIST_ERROR_EXCERPT_CHARS = 400
CALL_ERROR_EXCERPT_CHARS = 900

TEMPERATURE = 0.2


class Provider(Protocol):
    kind: ProviderKind
    label: str

    def list_models(self, credential: str) -> List[str]:
        ...

    def call_json(
        self,
        credential: str,
        model: str,
        system_text: str,
        user_text: str,
        parts: Optional[Sequence[Part]] = None,
    ) -> Dict[str, Any]:
        ...


def parse_strict_json(text: Optional[str]) -> Dict[str, Any]:
    """The whole (trimmed) text must be one JSON object, nothing around it."""
    t = (text or "").strip()
    if not t.startswith("{") or not t.endswith("}"):
        raise FormatError("Response is not a JSON object")
    try:
        data = json.loads(t)
    except json.JSONDecodeError as e:
        raise FormatError(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise FormatError("Response is not a JSON object")
    return data


def excerpt(body: str, limit: int) -> str:
    return (body or "")[:limit]


def unique_sorted(model_ids) -> List[str]:
    return sorted({m for m in model_ids if m})


def get_provider(kind: ProviderKind) -> Provider:
    # Simple router
    kind = ProviderKind(kind)
    if kind is ProviderKind.GEMINI:
        from .gemini import gemini_provider
        return gemini_provider
    from .groq import groq_provider
    return groq_provider
