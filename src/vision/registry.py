"""Analyzer registry — ProviderId → Analyzer, built once from Config."""
import logging
from typing import Optional

import httpx

from src.config import Config
from src.constants import MSG_PROVIDER_LOADED, MSG_PROVIDER_SKIPPED
from src.vision.claude import ClaudeAnalyzer
from src.vision.client import Analyzer
from src.vision.gemini import GeminiAnalyzer
from src.vision.models import AnalyzerConfig, ProviderId
from src.vision.openai import OpenAIAnalyzer

logger = logging.getLogger(__name__)

ANALYZERS: dict[ProviderId, type[Analyzer]] = {
    ProviderId.CLAUDE: ClaudeAnalyzer,
    ProviderId.GEMINI: GeminiAnalyzer,
    ProviderId.OPENAI: OpenAIAnalyzer,
}


def analyzer_config(config: Config, provider: ProviderId) -> Optional[AnalyzerConfig]:
    """AnalyzerConfig for a provider, or None when its key is unset."""
    match (config.api_key_for(provider), provider):
        case (None | "", _):
            return None
        case (key, ProviderId.CLAUDE):
            return AnalyzerConfig(key, config.claude_model, config.max_output_tokens)
        case (key, ProviderId.GEMINI):
            return AnalyzerConfig(key, config.gemini_model, config.gemini_max_output_tokens)
        case (key, ProviderId.OPENAI):
            return AnalyzerConfig(key, config.openai_model, config.max_output_tokens)


def build_registry(
    config: Config,
    transport: httpx.AsyncBaseTransport | None = None,
) -> dict[ProviderId, Analyzer]:
    """Instantiate every analyzer whose API key is present. No network calls."""
    registry: dict[ProviderId, Analyzer] = {}
    for provider, analyzer_cls in ANALYZERS.items():
        match analyzer_config(config, provider):
            case None:
                logger.info(MSG_PROVIDER_SKIPPED, provider.display_name)
            case cfg:
                registry[provider] = analyzer_cls(cfg, transport=transport)
                logger.info(MSG_PROVIDER_LOADED, provider.display_name, cfg.model)
    return registry
