import pytest
import os
from typing import Any, Dict, List
from dotenv import load_dotenv

from authentiometer.config import Limits
from authentiometer.schemas.request import ProviderKind

@pytest.fixture(scope="session", autouse=True)
def _load_env():
    # Load .env once per session to avoid side-effects on import time
    load_dotenv()

def _truthy(v: str | None) -> bool:
    return v is not None and v.strip().lower() not in ("", "0", "false", "no")

@pytest.fixture(scope="session")
def allow_integration(_load_env) -> bool:
    return _truthy(os.getenv("RUN_INTEGRATION_TESTS"))

@pytest.fixture(scope="session")
def gemini_api_key(_load_env) -> str | None:
    return os.getenv("GEMINI_API_KEY") or None

@pytest.fixture(scope="session")
def groq_api_key(_load_env) -> str | None:
    return os.getenv("GROQ_API_KEY") or None


class StubProvider:
    """
    Records every call_json call and answers from a script.
    Script items: a dict (returned), an exception (raised) or a callable
    taking (system_text, user_text, parts) and returning a dict.
    """

    def __init__(self, script: List[Any], kind: ProviderKind = ProviderKind.GROQ, models: List[str] | None = None):
        self.kind = kind
        self.label = f"Stub{kind.value.capitalize()}"
        self.script = list(script)
        self.models = models or ["stub-model"]
        self.calls: List[Dict[str, Any]] = []
        self.list_calls: List[str] = []

    def list_models(self, credential: str) -> List[str]:
        self.list_calls.append(credential)
        return list(self.models)

    def call_json(self, credential, model, system_text, user_text, parts=None):
        self.calls.append({
            "credential": credential,
            "model": model,
            "system_text": system_text,
            "user_text": user_text,
            "parts": parts,
        })
        if not self.script:
            raise AssertionError("StubProvider called more often than scripted")
        step = self.script.pop(0)
        if isinstance(step, Exception):
            raise step
        if callable(step):
            return step(system_text, user_text, parts)
        return step


@pytest.fixture
def stub_provider():
    """Factory: stub_provider([response, ...], kind=ProviderKind.GEMINI)."""
    return StubProvider


@pytest.fixture
def small_limits() -> Limits:
    # Small ceilings so boundary tests don't need megabytes of text
    return Limits(
        max_user_text_chars=1_000,
        max_extracted_text_chars=300,
        max_analysis_text_chars=400,
        condensed_target_chars=150,
    )


@pytest.fixture
def credentials():
    keys = {ProviderKind.GEMINI: "gemini-test-key", ProviderKind.GROQ: "groq-test-key"}
    return lambda kind: keys[ProviderKind(kind)]
