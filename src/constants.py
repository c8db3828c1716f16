"""All magic values live here — no inline literals anywhere else."""

# Image preparation
MAX_IMAGE_DIMENSION = 1024
JPEG_QUALITY = 80
IMAGE_MEDIA_TYPE = "image/jpeg"

ANALYSIS_PROMPT = (
    "Describe what you see in this image. "
    "Be concise and focus on the most important elements."
)

# Claude (Anthropic Messages API)
CLAUDE_BASE_URL = "https://api.anthropic.com"
CLAUDE_API_VERSION = "2023-06-01"
DEFAULT_CLAUDE_MODEL = "claude-3-5-sonnet-20241022"

# Gemini (Generative Language API)
GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"
DEFAULT_GEMINI_MODEL = "gemini-2.0-flash-exp"

# OpenAI (Chat Completions API)
OPENAI_BASE_URL = "https://api.openai.com/v1"
DEFAULT_OPENAI_MODEL = "gpt-4o"

DEFAULT_MAX_OUTPUT_TOKENS = 1024
HTTP_TIMEOUT_SECONDS: float = 60.0
DEFAULT_PROVIDER = "claude"

# Error messages shown to the user
MSG_ERR_INVALID_IMAGE = "Invalid image format"
MSG_ERR_MISSING_KEY = "API key not configured for %s"
MSG_ERR_NETWORK = "Network error: %s"
MSG_ERR_API = "API error: HTTP %d: %s"
MSG_ERR_INVALID_RESPONSE = "Invalid response from AI service"

# Log messages
MSG_STARTING = "Starting photo analysis…"
MSG_PROVIDER_LOADED = "Loaded provider: %s (%s)"
MSG_PROVIDER_SKIPPED = "Skipped provider %s (no API key)"
MSG_NO_PROVIDERS = "No API keys configured — set CLAUDE_API_KEY, GEMINI_API_KEY or OPENAI_API_KEY"
MSG_REQUEST_SENT = "→ %s (%s, %d bytes)"
MSG_RESPONSE_OK = "✓ %s responded (%.1fs)"
MSG_RESPONSE_FAIL = "✗ %s failed (%.1fs): %s"
MSG_ANALYSIS_FAILED = "Analysis failed [%s]: %s"
MSG_STALE_RESULT = "Discarding stale %s result (generation %d, current %d)"
MSG_LISTENER_FAILED = "State listener %r raised: %s"

# CLI rendering
MSG_ANALYZING = "Analyzing with %s…"
MSG_PROVIDERS_HEADER = "Available providers: %s"
