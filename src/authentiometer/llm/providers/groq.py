"""Groq adapter (OpenAI-compatible chat completions via the openai SDK).

Text only: no video access, so it is used with pasted text.
"""

import re
from typing import Any, Dict, List, Optional, Sequence

import httpx
from openai import APIError, APIStatusError, OpenAI
from openai.pagination import SyncPage
from openai.types.chat import ChatCompletion

from . import (
    CALL_ERROR_EXCERPT_CHARS,
    LIST_ERROR_EXCERPT_CHARS,
    TEMPERATURE,
    Part,
    excerpt,
    parse_strict_json,
    unique_sorted,
)
from ...config import get_settings
from ...errors import TransportError, ValidationError
from ...log import get_logger
from ...schemas.request import ProviderKind

settings = get_settings()
logger = get_logger("providers.groq")

# Listed by /models but not usable with chat completions
NON_CHAT_MODEL_RE = re.compile(r"whisper|tts", re.IGNORECASE)


class GroqProvider:
    kind = ProviderKind.GROQ
    label = "Groq"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = base_url or settings.GROQ_BASE_URL
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self.transport = transport

    def _client(self, credential: str) -> OpenAI:
        http_client = None
        if self.transport is not None:
            http_client = httpx.Client(transport=self.transport, timeout=self.timeout)
        return OpenAI(
            api_key=credential,
            base_url=self.base_url,
            timeout=self.timeout,
            max_retries=0,
            http_client=http_client,
        )

    def _transport_error(self, e: Exception, call: str, limit: int) -> TransportError:
        if isinstance(e, APIStatusError):
            body = excerpt(e.response.text, limit)
            return TransportError(
                f"{call} HTTP {e.status_code}: {body}",
                provider=self.label,
                status_code=e.status_code,
                body_excerpt=body,
            )
        return TransportError(f"{call} request failed: {e.__class__.__name__}", provider=self.label)

    def _body_error(self, resp: httpx.Response, call: str, limit: int) -> TransportError:
        body = excerpt(resp.text, limit)
        return TransportError(
            f"{call} HTTP {resp.status_code}: response body is not the expected JSON: {body}",
            provider=self.label,
            status_code=resp.status_code,
            body_excerpt=body,
        )

    def _parse(self, raw, expected: type, call: str, limit: int):
        # The SDK hands back a plain str for non-JSON bodies instead of raising
        resp = raw.http_response
        try:
            resp.json()
        except ValueError as e:
            raise self._body_error(resp, call, limit) from e
        parsed = raw.parse()
        if not isinstance(parsed, expected):
            raise self._body_error(resp, call, limit)
        return parsed

    def list_models(self, credential: str) -> List[str]:
        try:
            with self._client(credential) as client:
                raw = client.models.with_raw_response.list()
                page = self._parse(raw, SyncPage, "Groq ListModels", LIST_ERROR_EXCERPT_CHARS)
                entries = list(getattr(page, "data", None) or [])
        except APIError as e:
            raise self._transport_error(e, "Groq ListModels", LIST_ERROR_EXCERPT_CHARS) from e

        models = unique_sorted(
            m.id
            for m in entries
            if getattr(m, "active", True) is not False and not NON_CHAT_MODEL_RE.search(m.id or "")
        )
        logger.info(f"Groq lists {len(models)} chat models")
        return models

    def call_json(
        self,
        credential: str,
        model: str,
        system_text: str,
        user_text: str,
        parts: Optional[Sequence[Part]] = None,
    ) -> Dict[str, Any]:
        content = user_text or ""
        if parts:
            texts = []
            for part in parts:
                if set(part) != {"text"}:
                    raise ValidationError("Groq accepts text parts only (no video/file parts).")
                texts.append(part["text"])
            content = "\n\n".join(t for t in [*texts, content] if t)

        try:
            with self._client(credential) as client:
                raw = client.chat.completions.with_raw_response.create(
                    model=model,
                    temperature=TEMPERATURE,
                    messages=[
                        {"role": "system", "content": system_text},
                        {"role": "user", "content": content},
                    ],
                )
                completion = self._parse(raw, ChatCompletion, "Groq", CALL_ERROR_EXCERPT_CHARS)
        except APIError as e:
            raise self._transport_error(e, "Groq", CALL_ERROR_EXCERPT_CHARS) from e

        text = ""
        choices = getattr(completion, "choices", None) or []
        if choices and choices[0].message is not None:
            text = choices[0].message.content or ""
        return parse_strict_json(text)


groq_provider = GroqProvider()
