"""GeminiAnalyzer — Google Gemini vision backend over the REST API.

The key travels in the query string, so this adapter talks to the
endpoint with httpx instead of going through an SDK.
"""
import httpx

from src.constants import ANALYSIS_PROMPT, GEMINI_ENDPOINT, HTTP_TIMEOUT_SECONDS, IMAGE_MEDIA_TYPE
from src.vision.client import Analyzer, decode_payload, first_text
from src.vision.errors import ApiError, InvalidResponseError, NetworkError
from src.vision.models import ProviderId


def build_request(image_data: str, max_output_tokens: int | None = None) -> dict:
    body: dict = {
        "contents": [
            {
                "parts": [
                    {"text": ANALYSIS_PROMPT},
                    {
                        "inline_data": {
                            "mime_type": IMAGE_MEDIA_TYPE,
                            "data": image_data,
                        }
                    },
                ]
            }
        ]
    }
    match max_output_tokens:
        case None:
            return body
        case n:
            return {**body, "generationConfig": {"maxOutputTokens": n}}


def extract_text(payload: dict) -> str:
    """candidates[0].content.parts → first text part."""
    match payload:
        case {"candidates": [{"content": {"parts": list(parts)}}, *_]}:
            pass
        case {"candidates": []}:
            raise InvalidResponseError("empty candidates array")
        case _:
            raise InvalidResponseError("missing candidates[0].content.parts")

    match first_text(parts):
        case None:
            raise InvalidResponseError("no text part in candidate")
        case text:
            return text


class GeminiAnalyzer(Analyzer):
    provider = ProviderId.GEMINI

    async def _request_text(self, image_data: str) -> str:
        url = GEMINI_ENDPOINT.format(model=self._config.model)
        body = build_request(image_data, self._config.max_output_tokens)

        async with httpx.AsyncClient(transport=self._transport, timeout=HTTP_TIMEOUT_SECONDS) as client:
            try:
                response = await client.post(
                    url,
                    params={"key": self._config.api_key},
                    headers={"Content-Type": "application/json"},
                    json=body,
                )
            except httpx.TransportError as exc:
                raise NetworkError(exc) from exc

        match response.is_success:
            case False:
                raise ApiError(response.status_code, response.text)
            case True:
                return extract_text(decode_payload(response.text))
