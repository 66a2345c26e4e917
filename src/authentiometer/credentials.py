"""API key lookup per provider.

The pipeline only ever reads a key; where it comes from is up to the caller.
The default reads GEMINI_API_KEY / GROQ_API_KEY from settings (env or .env).
"""

from typing import Callable, Mapping, Optional

from .config import Settings, get_settings
from .schemas.request import ProviderKind

CredentialLookup = Callable[[ProviderKind], str]


def settings_credentials(settings: Optional[Settings] = None) -> CredentialLookup:
    settings = settings or get_settings()

    def lookup(kind: ProviderKind) -> str:
        if ProviderKind(kind) is ProviderKind.GEMINI:
            return settings.GEMINI_API_KEY.strip()
        return settings.GROQ_API_KEY.strip()

    return lookup


def static_credentials(keys: Mapping[ProviderKind, str], fallback: Optional[CredentialLookup] = None) -> CredentialLookup:
    """Keys given explicitly (e.g. on the command line), falling back to another lookup."""
    def lookup(kind: ProviderKind) -> str:
        key = (keys.get(ProviderKind(kind)) or "").strip()
        if not key and fallback is not None:
            return fallback(kind)
        return key

    return lookup
