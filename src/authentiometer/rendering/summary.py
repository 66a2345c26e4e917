"""Terminal rendering of an AnalysisResult.

Markdown summary (verdict + confidence per dimension, recommended use, claims,
limitations) and a Rich table view of the same data for the CLI.
"""

from __future__ import annotations

from typing import Dict, List

from rich.console import Group
from rich.table import Table
from rich.text import Text

from ..llm.schema import AnalysisResult
from ..schemas.request import Language

LABELS: Dict[Language, Dict[str, str]] = {
    Language.EN: {
        "authenticity": "Authenticity",
        "fact_checking": "Fact-checking",
        "scientific_soundness": "Scientific soundness",
        "recommended_use": "Recommended use",
        "testimonial": "Testimony",
        "factual_decision": "Factual decision",
        "science_learning": "Science learning",
        "claims": "Extracted claims",
        "limitations": "Limitations",
        "empty": "No summary available.",
    },
    Language.FR: {
        "authenticity": "Authenticité",
        "fact_checking": "Vérification des faits",
        "scientific_soundness": "Solidité scientifique",
        "recommended_use": "Usage recommandé",
        "testimonial": "Témoignage",
        "factual_decision": "Décision factuelle",
        "science_learning": "Apprentissage scientifique",
        "claims": "Affirmations extraites",
        "limitations": "Limites",
        "empty": "Aucun résumé disponible.",
    },
}

USE_STYLES = {"ok": "green", "caution": "yellow", "avoid": "red"}

DIMENSIONS = ("authenticity", "fact_checking", "scientific_soundness")
USES = ("testimonial", "factual_decision", "science_learning")


def _bullet_list(lines: List[str]) -> str:
    return "\n".join(f"• {s.strip()}" for s in lines if s and s.strip())


def render_summary_markdown(result: AnalysisResult, language: Language = Language.EN) -> str:
    labels = LABELS[Language(language)]
    profile = result.trust_profile

    dims = []
    for name in DIMENSIONS:
        dim = getattr(profile, name)
        dims.append(f"**{labels[name]}**: {dim.verdict} ({dim.confidence})")

    uses = [f"**{labels['recommended_use']}**"]
    for name in USES:
        uses.append(f"• {labels[name]}: {getattr(result.recommended_use, name)}")

    blocks = ["\n".join(dims), "\n".join(uses)]
    if result.extracted_claims:
        blocks.append(f"**{labels['claims']}**\n" + _bullet_list(result.extracted_claims))
    if result.limitations:
        blocks.append(f"**{labels['limitations']}**\n" + _bullet_list(result.limitations))
    return "\n\n".join(blocks)


def render_summary(result: AnalysisResult, language: Language = Language.EN) -> Group:
    labels = LABELS[Language(language)]
    profile = result.trust_profile

    verdicts = Table(show_header=False, box=None, padding=(0, 2))
    for name in DIMENSIONS:
        dim = getattr(profile, name)
        verdicts.add_row(Text(labels[name], style="bold"), dim.verdict, Text(dim.confidence, style="dim"))

    uses = Table(title=labels["recommended_use"], show_header=False, box=None, padding=(0, 2), title_justify="left")
    for name in USES:
        value = getattr(result.recommended_use, name)
        uses.add_row(labels[name], Text(value, style=USE_STYLES.get(value, "")))

    parts = [verdicts, Text(""), uses]
    if result.extracted_claims:
        parts.append(Text(""))
        parts.append(Text(labels["claims"], style="bold"))
        parts.extend(Text(f"• {c}") for c in result.extracted_claims)
    if result.limitations:
        parts.append(Text(""))
        parts.append(Text(labels["limitations"], style="bold"))
        parts.extend(Text(f"• {x}") for x in result.limitations)
    return Group(*parts)
