from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import BaseModel, Field, model_validator
from pydantic import ValidationError as SchemaValidationError
from functools import lru_cache

from .errors import ValidationError

class Settings(BaseSettings):
    GEMINI_API_KEY: str = Field("", description="Google AI Studio API key (video mode)")
    GROQ_API_KEY: str = Field("", description="Groq API key (text mode)")
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GROQ_BASE_URL: str = "https://api.groq.com/openai/v1"
    MODEL_GEMINI: str = Field("", description="Default Gemini model id when none is selected")
    MODEL_GROQ: str = Field("", description="Default Groq model id when none is selected")
    HTTP_TIMEOUT_SECONDS: float = 120.0
    LOG_LEVEL: str = "INFO"

    # Content size ceilings (characters)
    MAX_USER_TEXT_CHARS: int = 80_000
    MAX_EXTRACTED_TEXT_CHARS: int = 12_000
    MAX_ANALYSIS_TEXT_CHARS: int = 18_000
    CONDENSED_TARGET_CHARS: int = 8_000
    MAX_LIMITATIONS: int = 25

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

@lru_cache()
def get_settings() -> Settings:
    return Settings()


class Limits(BaseModel):
    """Size ceilings applied by the core, whatever the model was told."""
    max_user_text_chars: int = Field(80_000, gt=0, description="Hard ceiling on text given to a run.")
    max_extracted_text_chars: int = Field(12_000, gt=0, description="Ceiling on extracted transcript text.")
    max_analysis_text_chars: int = Field(18_000, gt=0, description="Above this, text is condensed first.")
    condensed_target_chars: int = Field(8_000, gt=0, description="Ceiling on condensed text.")
    max_limitations: int = Field(25, gt=0)

    @model_validator(mode="after")
    def validate_ordering(self) -> "Limits":
        if self.condensed_target_chars > self.max_analysis_text_chars:
            raise ValueError("condensed_target_chars must not exceed max_analysis_text_chars")
        if self.max_analysis_text_chars > self.max_user_text_chars:
            raise ValueError("max_analysis_text_chars must not exceed max_user_text_chars")
        return self

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "Limits":
        settings = settings or get_settings()
        try:
            return cls(
                max_user_text_chars=settings.MAX_USER_TEXT_CHARS,
                max_extracted_text_chars=settings.MAX_EXTRACTED_TEXT_CHARS,
                max_analysis_text_chars=settings.MAX_ANALYSIS_TEXT_CHARS,
                condensed_target_chars=settings.CONDENSED_TARGET_CHARS,
                max_limitations=settings.MAX_LIMITATIONS,
            )
        except SchemaValidationError as e:
            details = "; ".join(err["msg"] for err in e.errors())
            raise ValidationError(f"Invalid size limits in settings: {details}") from e


DEFAULT_LIMITS = Limits()
