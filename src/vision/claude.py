"""ClaudeAnalyzer — Anthropic Claude vision backend."""
import anthropic
from anthropic import AsyncAnthropic

from src.constants import (
    ANALYSIS_PROMPT,
    CLAUDE_API_VERSION,
    CLAUDE_BASE_URL,
    DEFAULT_MAX_OUTPUT_TOKENS,
    IMAGE_MEDIA_TYPE,
)
from src.vision.client import Analyzer, decode_payload, first_text
from src.vision.errors import ApiError, InvalidResponseError, NetworkError
from src.vision.models import ProviderId


def build_request(model: str, max_tokens: int, image_data: str) -> dict:
    return {
        "model": model,
        "max_tokens": max_tokens,
        "messages": [
            {
                "role": "user",
                "content": [
                    {
                        "type": "image",
                        "source": {
                            "type": "base64",
                            "media_type": IMAGE_MEDIA_TYPE,
                            "data": image_data,
                        },
                    },
                    {"type": "text", "text": ANALYSIS_PROMPT},
                ],
            }
        ],
    }


def extract_text(payload: dict) -> str:
    """content[] → first text block."""
    match payload:
        case {"content": list(blocks)}:
            pass
        case _:
            raise InvalidResponseError("missing content array")

    match first_text(blocks):
        case None:
            raise InvalidResponseError("no text block in content")
        case text:
            return text


class ClaudeAnalyzer(Analyzer):
    provider = ProviderId.CLAUDE

    async def _request_text(self, image_data: str) -> str:
        body = build_request(
            self._config.model,
            self._config.max_output_tokens or DEFAULT_MAX_OUTPUT_TOKENS,
            image_data,
        )
        try:
            async with AsyncAnthropic(
                api_key=self._config.api_key,
                base_url=CLAUDE_BASE_URL,
                default_headers={"anthropic-version": CLAUDE_API_VERSION},
                max_retries=0,
                http_client=self._http_client(),
            ) as client:
                raw = await client.messages.with_raw_response.create(**body)
        except anthropic.APIStatusError as exc:
            raise ApiError(exc.status_code, exc.response.text) from exc
        except anthropic.APIConnectionError as exc:
            raise NetworkError(exc) from exc

        return extract_text(decode_payload(raw.http_response.text))
