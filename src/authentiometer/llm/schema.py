"""Pydantic schema for the analysis output.

Defines AnalysisResult - the trust assessment returned by a run. Field names are
snake_case in Python and camelCase on the wire (model_dump(by_alias=True)).
Every field has a default so partially conforming model output still parses.
"""

from __future__ import annotations

from typing import Annotated, Any, List
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..schemas.request import AnalysisOptions
from ..schemas.stages import coerce_text, coerce_text_list

NOT_ASSESSED = "not_assessed"

AUTHENTICITY_VERDICTS = ("high", "medium", "fragile", NOT_ASSESSED)
FACT_CHECKING_VERDICTS = ("mostly_reliable", "uncertain", "risky", NOT_ASSESSED)
SCIENTIFIC_VERDICTS = ("solid", "mixed", "fragile", NOT_ASSESSED)
CONFIDENCE_LEVELS = ("low", "medium", "high")
USE_LEVELS = ("ok", "caution", "avoid")
METHOD_FLAGS = (
    "correlation_vs_causation",
    "overgeneralization",
    "cherry_picking",
    "misleading_statistics",
    "appeal_to_authority",
    "uncertainty_missing",
    "anecdote_over_evidence",
    "non_falsifiable_claims",
    "none",
)


def _coerce_object(value: Any) -> dict:
    return value if isinstance(value, (dict, BaseModel)) else {}


def _coerce_claims(value: Any) -> list:
    if not isinstance(value, list):
        return []
    claims = []
    for item in value:
        if isinstance(item, str) and item.strip():
            claims.append({"claim": item})
        elif isinstance(item, (dict, BaseModel)):
            claims.append(item)
    return claims


Text = Annotated[str, BeforeValidator(coerce_text)]
TextList = Annotated[List[str], BeforeValidator(coerce_text_list)]


class _Wire(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class VideoMeta(_Wire):
    title: Text = ""
    channel_title: Text = ""
    published_at: Text = ""
    url: Text = ""


class Authenticity(_Wire):
    verdict: Text = NOT_ASSESSED
    confidence: Text = "low"
    signals_for: TextList = Field(default_factory=list)
    signals_against: TextList = Field(default_factory=list)
    flags: TextList = Field(default_factory=list)
    notes: Text = ""


class FactClaim(_Wire):
    claim: Text = ""
    claim_type: Text = "other"
    status: Text = "uncertain"
    why: Text = ""
    how_to_check: TextList = Field(default_factory=list)


class FactChecking(_Wire):
    verdict: Text = NOT_ASSESSED
    confidence: Text = "low"
    claims: Annotated[List[FactClaim], BeforeValidator(_coerce_claims)] = Field(default_factory=list)
    overall_notes: Text = ""


class ScientificSoundness(_Wire):
    verdict: Text = NOT_ASSESSED
    confidence: Text = "low"
    strengths: TextList = Field(default_factory=list)
    weaknesses: TextList = Field(default_factory=list)
    method_flags: TextList = Field(default_factory=list)
    notes: Text = ""


class TrustProfile(_Wire):
    authenticity: Annotated[Authenticity, BeforeValidator(_coerce_object)] = Field(default_factory=Authenticity)
    fact_checking: Annotated[FactChecking, BeforeValidator(_coerce_object)] = Field(default_factory=FactChecking)
    scientific_soundness: Annotated[ScientificSoundness, BeforeValidator(_coerce_object)] = Field(
        default_factory=ScientificSoundness
    )


class RecommendedUse(_Wire):
    testimonial: Text = "caution"
    factual_decision: Text = "caution"
    science_learning: Text = "caution"


class AnalysisResult(_Wire):
    """
    Final trust assessment.
    Disabled options are reflected as `not_assessed` dimensions (see with_options).
    """
    video: Annotated[VideoMeta, BeforeValidator(_coerce_object)] = Field(default_factory=VideoMeta)
    trust_profile: Annotated[TrustProfile, BeforeValidator(_coerce_object)] = Field(default_factory=TrustProfile)
    recommended_use: Annotated[RecommendedUse, BeforeValidator(_coerce_object)] = Field(
        default_factory=RecommendedUse
    )
    extracted_claims: TextList = Field(default_factory=list)
    limitations: TextList = Field(default_factory=list)

    def with_options(self, options: AnalysisOptions) -> "AnalysisResult":
        """Reset every dimension the caller switched off to its minimal not_assessed form."""
        profile = self.trust_profile
        updates = {}
        if not options.include_authenticity:
            updates["authenticity"] = Authenticity()
        if not options.include_fact_checking:
            updates["fact_checking"] = FactChecking()
        if not options.include_scientific_soundness:
            updates["scientific_soundness"] = ScientificSoundness()
        if not updates:
            return self
        return self.model_copy(update={"trust_profile": profile.model_copy(update=updates)})

    def to_json(self, indent: int = 2) -> str:
        return self.model_dump_json(by_alias=True, indent=indent)
