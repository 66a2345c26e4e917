"""Analysis orchestration.

Gemini mode: validate -> extract -> condense -> analyze -> merge limitations.
Groq mode:   validate -> condense -> analyze -> merge limitations.

Stages run strictly in order and the first error ends the run; nothing is
caught here.
"""

import re
from typing import Callable, Iterable, List, Mapping, Optional

from pydantic import ValidationError as SchemaValidationError

from ..config import Limits, get_settings
from ..credentials import CredentialLookup, settings_credentials
from ..errors import ContentUnavailableError, FormatError, ValidationError
from ..llm.condense import condense
from ..llm.extract import extract
from ..llm.prompts import build_analysis_prompt, build_system_rules
from ..llm.providers import Provider, get_provider
from ..llm.retry import call_with_retry
from ..llm.schema import AnalysisResult
from ..log import get_logger
from ..messages import msg
from ..schemas.request import AnalysisRequest, Language, Mode, ProviderKind

logger = get_logger("pipeline")

YOUTUBE_URL_RE = re.compile(r"^https?://(www\.)?(youtube\.com|youtu\.be)/", re.IGNORECASE)

StatusCallback = Callable[[str], None]


def is_valid_youtube_url(url: Optional[str]) -> bool:
    return bool(YOUTUBE_URL_RE.match(url or ""))


def merge_limitations(*groups: Iterable[str], cap: int = 25) -> List[str]:
    """Concatenate in order, drop blanks and exact duplicates, keep the first `cap`."""
    merged: List[str] = []
    seen = set()
    for group in groups:
        for item in group or []:
            if not isinstance(item, str) or not item.strip() or item in seen:
                continue
            seen.add(item)
            merged.append(item)
    return merged[:cap]


def _silent(_: str) -> None:
    return None


class AnalysisPipeline:
    def __init__(
        self,
        credentials: Optional[CredentialLookup] = None,
        limits: Optional[Limits] = None,
        providers: Optional[Mapping[ProviderKind, Provider]] = None,
    ):
        self.credentials = credentials or settings_credentials()
        self.limits = limits or Limits.from_settings()
        self.providers = dict(providers or {})

    def provider_for(self, kind: ProviderKind) -> Provider:
        kind = ProviderKind(kind)
        return self.providers.get(kind) or get_provider(kind)

    def list_models(self, kind: ProviderKind, credential: Optional[str] = None, language: Language = Language.EN) -> List[str]:
        kind = ProviderKind(kind)
        credential = (credential if credential is not None else self.credentials(kind)).strip()
        if not credential:
            raise ValidationError(msg(language, f"missing_key_{kind.value}"))
        return self.provider_for(kind).list_models(credential)

    def run(self, request: AnalysisRequest, on_status: Optional[StatusCallback] = None) -> AnalysisResult:
        status = on_status or _silent
        status(msg(request.language, "status_preparing"))
        logger.info(f"Analysis run: mode={request.mode.value} language={request.language.value}")

        if request.mode is Mode.GEMINI:
            result = self._run_gemini(request, status)
        else:
            result = self._run_groq(request, status)

        status(msg(request.language, "status_done"))
        return result

    def _credential(self, request: AnalysisRequest) -> str:
        kind = ProviderKind(request.mode)
        credential = (self.credentials(kind) or "").strip()
        if not credential:
            raise ValidationError(msg(request.language, f"missing_key_{kind.value}"))
        return credential

    def _model(self, request: AnalysisRequest) -> str:
        settings = get_settings()
        default = settings.MODEL_GEMINI if request.mode is Mode.GEMINI else settings.MODEL_GROQ
        model = (request.model or default or "").strip()
        if not model:
            raise ValidationError(msg(request.language, f"model_required_{request.mode.value}"))
        return model

    def _run_gemini(self, request: AnalysisRequest, status: StatusCallback) -> AnalysisResult:
        lang = request.language
        credential = self._credential(request)
        url = (request.source_reference or "").strip()
        if not url:
            raise ValidationError(msg(lang, "url_required"))
        if not is_valid_youtube_url(url):
            raise ValidationError(msg(lang, "url_invalid"))
        model = self._model(request)
        provider = self.provider_for(ProviderKind.GEMINI)

        status(msg(lang, "status_extracting"))
        extracted = extract(provider, credential, model, lang, url, self.limits)
        logger.debug(
            f"Extraction diagnostics: language={extracted.content_language!r} notes={extracted.notes!r}"
        )
        if not extracted.transcript_text:
            raise ContentUnavailableError(msg(lang, "content_unavailable"))

        condensed = self._condense(provider, credential, model, request, extracted.transcript_text, status)

        status(msg(lang, "status_analyzing_gemini"))
        analyzed = self._analyze(provider, credential, model, request, url, condensed.final_text)

        notes = []
        if extracted.coverage == "partial":
            notes.append(msg(lang, "note_partial_coverage"))
        if condensed.final_text and len(condensed.final_text) < len(extracted.transcript_text):
            notes.append(msg(lang, "note_condensed"))

        limitations = merge_limitations(
            analyzed.limitations,
            extracted.limitations,
            condensed.limitations,
            notes,
            cap=self.limits.max_limitations,
        )
        return analyzed.model_copy(update={"limitations": limitations})

    def _run_groq(self, request: AnalysisRequest, status: StatusCallback) -> AnalysisResult:
        lang = request.language
        credential = self._credential(request)
        model = self._model(request)
        text = request.raw_text or ""
        if not text.strip():
            raise ValidationError(msg(lang, "text_required"))
        provider = self.provider_for(ProviderKind(request.mode))

        condensed = self._condense(provider, credential, model, request, text, status)

        status(msg(lang, "status_analyzing_groq"))
        url = (request.source_reference or "").strip()  # optional context only
        analyzed = self._analyze(provider, credential, model, request, url, condensed.final_text)

        notes = []
        if condensed.final_text and len(condensed.final_text) < len(text):
            notes.append(msg(lang, "note_condensed"))

        limitations = merge_limitations(
            analyzed.limitations,
            condensed.limitations,
            notes,
            cap=self.limits.max_limitations,
        )
        return analyzed.model_copy(update={"limitations": limitations})

    def _condense(self, provider, credential, model, request, text, status):
        if self.limits.max_analysis_text_chars < len(text) <= self.limits.max_user_text_chars:
            status(msg(request.language, "status_condensing"))
        condensed = condense(provider, credential, model, request.language, text, self.limits)
        if condensed.notes:
            logger.debug(f"Condensation notes: {condensed.notes!r}")
        return condensed

    def _analyze(self, provider, credential, model, request, url, text) -> AnalysisResult:
        logger.info(f"Analyzing {len(text)} chars with {provider.label} model {model}")
        out = call_with_retry(
            provider.call_json,
            credential=credential,
            model=model,
            system_text=build_system_rules(request.language),
            user_text=build_analysis_prompt(request.options, url, text, request.language),
        )
        try:
            result = AnalysisResult.model_validate(out)
        except SchemaValidationError as e:
            raise FormatError(f"Response does not match the analysis schema: {e.error_count()} error(s)") from e
        return result.with_options(request.options)


def run_analysis(
    request: AnalysisRequest,
    credentials: Optional[CredentialLookup] = None,
    on_status: Optional[StatusCallback] = None,
    limits: Optional[Limits] = None,
    providers: Optional[Mapping[ProviderKind, Provider]] = None,
) -> AnalysisResult:
    pipeline = AnalysisPipeline(credentials=credentials, limits=limits, providers=providers)
    return pipeline.run(request, on_status=on_status)


def list_models_for(
    kind: ProviderKind,
    credential: str,
    providers: Optional[Mapping[ProviderKind, Provider]] = None,
) -> List[str]:
    return AnalysisPipeline(providers=providers).list_models(kind, credential)
