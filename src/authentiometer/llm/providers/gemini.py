"""Google Gemini adapter (generateContent REST API over httpx).

The only provider that can read a video: the YouTube URL is attached as a
file_data part next to the prompt text.
"""

from typing import Any, Dict, List, Optional, Sequence
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field

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
from ...errors import TransportError
from ...log import get_logger
from ...schemas.request import ProviderKind

settings = get_settings()
logger = get_logger("providers.gemini")

GENERATE_METHOD = "generateContent"


class GeminiModelInfo(BaseModel):
    name: str = ""
    generation_methods: List[str] = Field([], alias="supportedGenerationMethods")


class GeminiModelList(BaseModel):
    models: List[GeminiModelInfo] = []


class GeminiPart(BaseModel):
    text: Optional[str] = None


class GeminiContent(BaseModel):
    parts: List[GeminiPart] = []


class GeminiCandidate(BaseModel):
    content: Optional[GeminiContent] = None


class GeminiResponse(BaseModel):
    candidates: List[GeminiCandidate] = []

    def text(self) -> str:
        if not self.candidates or self.candidates[0].content is None:
            return ""
        return "".join(p.text or "" for p in self.candidates[0].content.parts)


def video_part(url: str, mime_type: str = "video/mp4") -> Part:
    return {"file_data": {"mime_type": mime_type, "file_uri": url}}


class GeminiProvider:
    kind = ProviderKind.GEMINI
    label = "Gemini"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or settings.GEMINI_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self.transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    def _request(self, method: str, path: str, credential: str, limit: int, call: str, **kwargs) -> Any:
        headers = {"x-goog-api-key": credential}
        try:
            with self._client() as client:
                resp = client.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{call} request failed: {e.__class__.__name__}", provider=self.label) from e

        if not resp.is_success:
            body = excerpt(resp.text, limit)
            raise TransportError(
                f"{call} HTTP {resp.status_code}: {body}",
                provider=self.label,
                status_code=resp.status_code,
                body_excerpt=body,
            )
        try:
            return resp.json()
        except ValueError as e:
            raise TransportError(
                f"{call} HTTP {resp.status_code}: response body is not JSON",
                provider=self.label,
                status_code=resp.status_code,
                body_excerpt=excerpt(resp.text, limit),
            ) from e

    def list_models(self, credential: str) -> List[str]:
        data = self._request("GET", "/models", credential, LIST_ERROR_EXCERPT_CHARS, "Gemini ListModels")
        listing = GeminiModelList.model_validate(data if isinstance(data, dict) else {})
        models = unique_sorted(
            m.name.removeprefix("models/")
            for m in listing.models
            if GENERATE_METHOD in m.generation_methods
        )
        logger.info(f"Gemini lists {len(models)} generateContent models")
        return models

    def call_json(
        self,
        credential: str,
        model: str,
        system_text: str,
        user_text: str,
        parts: Optional[Sequence[Part]] = None,
    ) -> Dict[str, Any]:
        if parts:
            used_parts = list(parts)
            # Extra instructions (e.g. a hardened retry) ride along as a trailing text part
            if user_text and user_text.strip():
                used_parts.append({"text": user_text})
        else:
            used_parts = [{"text": user_text}]

        body = {
            "systemInstruction": {"parts": [{"text": system_text}]},
            "contents": [{"role": "user", "parts": used_parts}],
            "generationConfig": {"temperature": TEMPERATURE},
        }
        path = f"/models/{quote(model, safe='')}:{GENERATE_METHOD}"
        data = self._request("POST", path, credential, CALL_ERROR_EXCERPT_CHARS, "Gemini", json=body)
        text = GeminiResponse.model_validate(data if isinstance(data, dict) else {}).text()
        return parse_strict_json(text)


gemini_provider = GeminiProvider()
