"""Records passed between pipeline stages, plus the raw model responses they are built from.

Model responses are only "a JSON object"; the *Response models accept whatever
shape comes back and default anything missing or mistyped.
"""

from typing import Any, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

Access = Literal["ok", "partial", "blocked"]
Coverage = Literal["full", "partial", "none"]

ACCESS_VALUES = ("ok", "partial", "blocked")
COVERAGE_VALUES = ("full", "partial", "none")


def coerce_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return ""


def coerce_text_list(value: Any) -> List[str]:
    """A lone string becomes a one-item list; blanks and non-strings are dropped."""
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return []
    return [item for item in (coerce_text(v) for v in value) if item.strip()]


class ExtractionResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    access: Optional[str] = None
    coverage: Optional[str] = None
    content_language: str = Field("", alias="contentLanguage")
    transcript_text: str = Field("", alias="transcriptText")
    notes: str = ""
    limitations: List[str] = []

    @field_validator("access", "coverage", mode="before")
    @classmethod
    def _enum_text(cls, v):
        text = coerce_text(v).strip().lower()
        return text or None

    @field_validator("content_language", "transcript_text", "notes", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("limitations", mode="before")
    @classmethod
    def _list(cls, v):
        return coerce_text_list(v)


class CondensationResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    condensed_text: str = Field("", alias="condensedText")
    notes: str = ""
    limitations: List[str] = []

    @field_validator("condensed_text", "notes", mode="before")
    @classmethod
    def _text(cls, v):
        return coerce_text(v)

    @field_validator("limitations", mode="before")
    @classmethod
    def _list(cls, v):
        return coerce_text_list(v)


class ExtractedContent(BaseModel):
    access: Access
    coverage: Coverage
    transcript_text: str = ""
    content_language: str = ""
    notes: str = ""
    limitations: List[str] = []


class CondensedContent(BaseModel):
    final_text: str = ""
    notes: List[str] = []
    limitations: List[str] = []
    condensed: bool = False  # True only when a model call produced final_text
