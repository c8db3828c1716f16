"""Shared value types for the vision backends."""
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


class ProviderId(str, Enum):
    CLAUDE = "claude"
    GEMINI = "gemini"
    OPENAI = "openai"

    @property
    def display_name(self) -> str:
        match self:
            case ProviderId.OPENAI:
                return "OpenAI"
            case other:
                return other.value.capitalize()


@dataclass(frozen=True)
class AnalyzerConfig:
    api_key: str
    model: str
    max_output_tokens: Optional[int] = None


@dataclass(frozen=True)
class AnalysisResult:
    text: str
    provider: ProviderId
    timestamp: datetime
