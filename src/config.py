from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from src.constants import (
    DEFAULT_CLAUDE_MODEL,
    DEFAULT_GEMINI_MODEL,
    DEFAULT_MAX_OUTPUT_TOKENS,
    DEFAULT_OPENAI_MODEL,
    DEFAULT_PROVIDER,
)
from src.vision.models import ProviderId


def _parse_int(name: str, raw: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    match value:
        case v if v > 0:
            return v
        case _:
            raise ValueError(f"{name} must be positive, got {value}")


@dataclass(frozen=True)
class Config:
    claude_api_key: Optional[str]
    gemini_api_key: Optional[str]
    openai_api_key: Optional[str]
    claude_model: str
    gemini_model: str
    openai_model: str
    max_output_tokens: int
    gemini_max_output_tokens: Optional[int]
    default_provider: ProviderId
    log_level: str

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        claude_api_key = os.getenv("CLAUDE_API_KEY") or None
        gemini_api_key = os.getenv("GEMINI_API_KEY") or None
        openai_api_key = os.getenv("OPENAI_API_KEY") or None
        claude_model = os.getenv("CLAUDE_MODEL") or DEFAULT_CLAUDE_MODEL
        gemini_model = os.getenv("GEMINI_MODEL") or DEFAULT_GEMINI_MODEL
        openai_model = os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL
        max_tokens = os.getenv("MAX_OUTPUT_TOKENS") or str(DEFAULT_MAX_OUTPUT_TOKENS)
        gemini_max_tokens = os.getenv("GEMINI_MAX_OUTPUT_TOKENS") or None
        default_provider = os.getenv("DEFAULT_PROVIDER") or DEFAULT_PROVIDER
        log_level = os.getenv("LOG_LEVEL") or "INFO"

        return cls._validate(
            claude_api_key=claude_api_key,
            gemini_api_key=gemini_api_key,
            openai_api_key=openai_api_key,
            claude_model=claude_model,
            gemini_model=gemini_model,
            openai_model=openai_model,
            max_output_tokens=max_tokens,
            gemini_max_output_tokens=gemini_max_tokens,
            default_provider=default_provider,
            log_level=log_level,
        )

    @staticmethod
    def _validate(
        claude_api_key: Optional[str],
        gemini_api_key: Optional[str],
        openai_api_key: Optional[str],
        claude_model: str,
        gemini_model: str,
        openai_model: str,
        max_output_tokens: str,
        gemini_max_output_tokens: Optional[str],
        default_provider: str,
        log_level: str,
    ) -> "Config":
        match default_provider.strip().lower():
            case name if name in {p.value for p in ProviderId}:
                provider = ProviderId(name)
            case _:
                choices = ", ".join(p.value for p in ProviderId)
                raise ValueError(
                    f"DEFAULT_PROVIDER must be one of: {choices} (got {default_provider!r})"
                )

        match gemini_max_output_tokens:
            case None:
                gemini_tokens = None
            case raw:
                gemini_tokens = _parse_int("GEMINI_MAX_OUTPUT_TOKENS", raw)

        return Config(
            claude_api_key=claude_api_key,
            gemini_api_key=gemini_api_key,
            openai_api_key=openai_api_key,
            claude_model=claude_model,
            gemini_model=gemini_model,
            openai_model=openai_model,
            max_output_tokens=_parse_int("MAX_OUTPUT_TOKENS", max_output_tokens),
            gemini_max_output_tokens=gemini_tokens,
            default_provider=provider,
            log_level=log_level,
        )

    def api_key_for(self, provider: ProviderId) -> Optional[str]:
        match provider:
            case ProviderId.CLAUDE:
                return self.claude_api_key
            case ProviderId.GEMINI:
                return self.gemini_api_key
            case ProviderId.OPENAI:
                return self.openai_api_key
