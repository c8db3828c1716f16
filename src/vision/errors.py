"""AnalysisError hierarchy — every adapter failure is one of these kinds."""
from enum import Enum

from src.constants import (
    MSG_ERR_API,
    MSG_ERR_INVALID_IMAGE,
    MSG_ERR_INVALID_RESPONSE,
    MSG_ERR_MISSING_KEY,
    MSG_ERR_NETWORK,
)
from src.vision.models import ProviderId


class ErrorKind(str, Enum):
    INVALID_IMAGE = "invalid_image"
    MISSING_CREDENTIAL = "missing_credential"
    NETWORK = "network"
    API = "api"
    INVALID_RESPONSE = "invalid_response"


class AnalysisError(Exception):
    kind: ErrorKind


class InvalidImageError(AnalysisError):
    kind = ErrorKind.INVALID_IMAGE

    def __init__(self) -> None:
        super().__init__(MSG_ERR_INVALID_IMAGE)


class MissingCredentialError(AnalysisError):
    kind = ErrorKind.MISSING_CREDENTIAL

    def __init__(self, provider: ProviderId) -> None:
        self.provider = provider
        super().__init__(MSG_ERR_MISSING_KEY % provider.display_name)


class NetworkError(AnalysisError):
    kind = ErrorKind.NETWORK

    def __init__(self, cause: object) -> None:
        super().__init__(MSG_ERR_NETWORK % (str(cause) or type(cause).__name__))


class ApiError(AnalysisError):
    """Non-2xx HTTP status. Keeps the raw body for diagnostics."""

    kind = ErrorKind.API

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(MSG_ERR_API % (status_code, body))


class InvalidResponseError(AnalysisError):
    kind = ErrorKind.INVALID_RESPONSE

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        message = f"{MSG_ERR_INVALID_RESPONSE} ({detail})" if detail else MSG_ERR_INVALID_RESPONSE
        super().__init__(message)
