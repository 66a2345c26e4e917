"""Prompt builders for the extraction, condensation and analysis calls.

Prompt text lives in data/prompts/*.yaml; the builders below only fill in
their arguments, so the same arguments always give the same prompt.
"""

import json
from functools import lru_cache
from pathlib import Path
from string import Template
from typing import Any, Dict, Optional

import yaml

from ..config import DEFAULT_LIMITS
from ..schemas.request import AnalysisOptions, Language

PROMPTS_DIR = Path(__file__).resolve().parent.parent / "data" / "prompts"


@lru_cache(maxsize=None)
def load_prompt_data(name: str) -> Dict[str, Any]:
    path = PROMPTS_DIR / f"{name}.yaml"
    if not path.exists():
        raise FileNotFoundError(f"Prompt {name} not found in {PROMPTS_DIR}")
    with open(path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_prompt(name: str) -> str:
    return load_prompt_data(name).get("content", "")


def _render(template: str, **values: Any) -> str:
    return Template(template).substitute(**values).strip()


def _instruction(name: str, language: Language) -> str:
    return load_prompt_data(name)["instructions"][Language(language).value]


def language_directive(language: Language) -> str:
    return load_prompt_data("languages")["directives"][Language(language).value]


def build_system_rules(language: Language) -> str:
    return _render(load_prompt("system_rules"), language_directive=language_directive(language))


def schema_text() -> str:
    return load_prompt("analysis_schema").strip()


def build_analysis_prompt(
    options: AnalysisOptions,
    source_reference: Optional[str],
    content_text: str,
    language: Language,
) -> str:
    """
    Instruction, then the INPUT payload as JSON, then the output schema.
    content_text is embedded as-is; callers are responsible for its size.
    """
    payload = {
        "options": options.model_dump(by_alias=True),
        "videoMeta": {
            "title": "",
            "description": "",
            "channelTitle": "",
            "publishedAt": "",
            "url": source_reference or "",
        },
        "transcriptText": content_text or "",
    }
    return _render(
        load_prompt("analyze_user"),
        instruction=_instruction("analyze_user", language),
        input_json=json.dumps(payload, indent=2, ensure_ascii=False),
        schema=schema_text(),
    )


def build_extraction_system(language: Language, max_chars: int = DEFAULT_LIMITS.max_extracted_text_chars) -> str:
    return _render(
        load_prompt("extract_system"),
        language_directive=language_directive(language),
        max_chars=max_chars,
    )


def build_extraction_prompt(
    language: Language,
    source_reference: str,
    max_chars: int = DEFAULT_LIMITS.max_extracted_text_chars,
) -> str:
    data = load_prompt_data("extract_user")
    return _render(
        data["content"],
        instruction=_instruction("extract_user", language),
        source_reference=source_reference,
        schema=_render(data["schema"], max_chars=max_chars),
    )


def build_condense_system(language: Language) -> str:
    return _render(load_prompt("condense_system"), language_directive=language_directive(language))


def build_condense_prompt(
    language: Language,
    text: str,
    target_chars: int = DEFAULT_LIMITS.condensed_target_chars,
) -> str:
    data = load_prompt_data("condense_user")
    return _render(
        data["content"],
        instruction=_instruction("condense_user", language),
        text=text,
        schema=_render(data["schema"], target_chars=target_chars),
    )
