"""Analyzer — abstract base for image analysis backends."""
import json
import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime, timezone

import httpx
from PIL import Image

from src.constants import HTTP_TIMEOUT_SECONDS, MSG_REQUEST_SENT, MSG_RESPONSE_FAIL, MSG_RESPONSE_OK
from src.imaging import prepare_image, to_base64
from src.vision.errors import AnalysisError, InvalidResponseError, MissingCredentialError
from src.vision.models import AnalysisResult, AnalyzerConfig, ProviderId

logger = logging.getLogger(__name__)


class Analyzer(ABC):
    """One vendor adapter. Stateless apart from its immutable config."""

    provider: ProviderId

    def __init__(
        self,
        config: AnalyzerConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    @property
    def config(self) -> AnalyzerConfig:
        return self._config

    @property
    def is_configured(self) -> bool:
        return bool(self._config.api_key)

    async def analyze(self, image: Image.Image) -> AnalysisResult:
        """Describe the image. Raises an AnalysisError subclass on failure."""
        match self.is_configured:
            case False:
                raise MissingCredentialError(self.provider)
            case True:
                pass

        image_data = to_base64(prepare_image(image))
        logger.info(MSG_REQUEST_SENT, self.provider.display_name, self._config.model, len(image_data))

        started = time.monotonic()
        try:
            text = await self._request_text(image_data)
        except AnalysisError as exc:
            logger.warning(MSG_RESPONSE_FAIL, self.provider.display_name, time.monotonic() - started, exc)
            raise
        logger.info(MSG_RESPONSE_OK, self.provider.display_name, time.monotonic() - started)

        return AnalysisResult(
            text=text,
            provider=self.provider,
            timestamp=datetime.now(timezone.utc),
        )

    def _http_client(self) -> httpx.AsyncClient | None:
        match self._transport:
            case None:
                return None
            case transport:
                return httpx.AsyncClient(transport=transport, timeout=HTTP_TIMEOUT_SECONDS)

    @abstractmethod
    async def _request_text(self, image_data: str) -> str:
        """POST base64 JPEG data to the vendor and return the extracted text."""
        ...


def decode_payload(body: str) -> dict:
    """Parse a JSON response body. Raises InvalidResponseError unless it is an object."""
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise InvalidResponseError("body is not JSON") from exc
    match payload:
        case dict():
            return payload
        case _:
            raise InvalidResponseError("body is not a JSON object")


def first_text(parts: list) -> str | None:
    """Return the first {"text": <str>} element of a content list, if any."""
    match next(filter(lambda p: isinstance(p, dict) and isinstance(p.get("text"), str), parts), None):
        case {"text": text}:
            return text
        case _:
            return None
