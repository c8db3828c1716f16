"""OpenAIAnalyzer — OpenAI GPT-4o vision backend."""
import openai
from openai import AsyncOpenAI

from src.constants import (
    ANALYSIS_PROMPT,
    DEFAULT_MAX_OUTPUT_TOKENS,
    IMAGE_MEDIA_TYPE,
    OPENAI_BASE_URL,
)
from src.vision.client import Analyzer, decode_payload
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
                        "type": "image_url",
                        "image_url": {"url": f"data:{IMAGE_MEDIA_TYPE};base64,{image_data}"},
                    },
                    {"type": "text", "text": ANALYSIS_PROMPT},
                ],
            }
        ],
    }


def extract_text(payload: dict) -> str:
    """choices[0].message.content"""
    match payload:
        case {"choices": [{"message": {"content": str() as text}}, *_]}:
            return text
        case {"choices": []}:
            raise InvalidResponseError("empty choices array")
        case _:
            raise InvalidResponseError("missing choices[0].message.content")


class OpenAIAnalyzer(Analyzer):
    provider = ProviderId.OPENAI

    async def _request_text(self, image_data: str) -> str:
        body = build_request(
            self._config.model,
            self._config.max_output_tokens or DEFAULT_MAX_OUTPUT_TOKENS,
            image_data,
        )
        try:
            async with AsyncOpenAI(
                api_key=self._config.api_key,
                base_url=OPENAI_BASE_URL,
                max_retries=0,
                http_client=self._http_client(),
            ) as client:
                raw = await client.chat.completions.with_raw_response.create(**body)
        except openai.APIStatusError as exc:
            raise ApiError(exc.status_code, exc.response.text) from exc
        except openai.APIConnectionError as exc:
            raise NetworkError(exc) from exc

        return extract_text(decode_payload(raw.http_response.text))
