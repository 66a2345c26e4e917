"""Pydantic schemas for analysis requests.

Defines Mode, Language, AnalysisOptions and AnalysisRequest.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Mode(str, Enum):
    GEMINI = "gemini"  # video URL in, extraction then analysis
    GROQ = "groq"      # pasted text in, analysis only


# Provider kinds map one-to-one onto modes
ProviderKind = Mode


class Language(str, Enum):
    EN = "en"
    FR = "fr"


class AnalysisOptions(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    include_authenticity: bool = True
    include_fact_checking: bool = True
    include_scientific_soundness: bool = True
    cautious_mode: bool = True


class AnalysisRequest(BaseModel):
    mode: Mode
    language: Language = Language.EN
    options: AnalysisOptions = AnalysisOptions()
    source_reference: Optional[str] = None
    raw_text: Optional[str] = None
    model: Optional[str] = None
