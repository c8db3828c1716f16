"""AnalysisCoordinator — provider selection and observable analysis state.

The presentation layer calls analyze / select_provider / clear_result /
dismiss_error and renders CoordinatorState. Every transition replaces the
whole state object and notifies subscribers once, so a listener never sees
a half-applied update.
"""
import logging
from dataclasses import dataclass, replace
from typing import Callable, Mapping, Optional

import httpx
from PIL import Image

from src.config import Config
from src.constants import MSG_ANALYSIS_FAILED, MSG_LISTENER_FAILED, MSG_STALE_RESULT
from src.vision.client import Analyzer
from src.vision.errors import AnalysisError, ErrorKind, MissingCredentialError
from src.vision.models import AnalysisResult, ProviderId
from src.vision.registry import build_registry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ErrorInfo:
    kind: ErrorKind
    message: str

    @classmethod
    def from_error(cls, exc: AnalysisError) -> "ErrorInfo":
        return cls(kind=exc.kind, message=str(exc))


@dataclass(frozen=True)
class CoordinatorState:
    selected_provider: ProviderId
    available_providers: frozenset[ProviderId]
    is_analyzing: bool = False
    last_result: Optional[AnalysisResult] = None
    last_error: Optional[ErrorInfo] = None


Listener = Callable[[CoordinatorState], None]


def initial_provider(
    available: frozenset[ProviderId],
    preferred: Optional[ProviderId] = None,
) -> ProviderId:
    """Preferred provider if available, else the first available one in enum order."""
    ordered = [p for p in ProviderId if p in available]
    match (preferred, ordered):
        case (ProviderId() as p, _) if p in available:
            return p
        case (_, [first, *_]):
            return first
        case (ProviderId() as p, []):
            return p
        case _:
            return next(iter(ProviderId))


class AnalysisCoordinator:
    """Owns the analyzer registry and the single published CoordinatorState."""

    def __init__(
        self,
        analyzers: Mapping[ProviderId, Analyzer],
        default_provider: Optional[ProviderId] = None,
    ) -> None:
        self._analyzers: dict[ProviderId, Analyzer] = {
            provider: analyzer for provider, analyzer in analyzers.items() if analyzer.is_configured
        }
        available = frozenset(self._analyzers)
        self._state = CoordinatorState(
            selected_provider=initial_provider(available, default_provider),
            available_providers=available,
        )
        self._generation = 0
        self._listeners: list[Listener] = []

    @classmethod
    def from_config(
        cls,
        config: Config,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AnalysisCoordinator":
        return cls(build_registry(config, transport), default_provider=config.default_provider)

    # ── queries ───────────────────────────────────────────────────────────────

    @property
    def state(self) -> CoordinatorState:
        return self._state

    @property
    def available_providers(self) -> frozenset[ProviderId]:
        return self._state.available_providers

    @property
    def has_any_provider(self) -> bool:
        return bool(self._state.available_providers)

    @property
    def selected_provider(self) -> ProviderId:
        return self._state.selected_provider

    # ── subscription ──────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener for state transitions. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            match listener in self._listeners:
                case True:
                    self._listeners.remove(listener)
                case False:
                    pass

        return unsubscribe

    def _publish(self, **changes) -> None:
        self._state = replace(self._state, **changes)
        for listener in list(self._listeners):
            try:
                listener(self._state)
            except Exception as exc:
                logger.warning(MSG_LISTENER_FAILED, listener, exc)

    # ── transitions ───────────────────────────────────────────────────────────

    def select_provider(self, provider: ProviderId) -> None:
        self._publish(selected_provider=provider)

    def clear_result(self) -> None:
        self._publish(last_result=None)

    def dismiss_error(self) -> None:
        self._publish(last_error=None)

    async def analyze(self, image: Image.Image) -> Optional[AnalysisResult]:
        """Run one analysis with the selected provider.

        Failures are published as last_error rather than raised. A newer call
        supersedes an older one still in flight: the older completion is
        dropped instead of overwriting the newer outcome.
        """
        provider = self._state.selected_provider
        match self._analyzers.get(provider):
            case None:
                error = MissingCredentialError(provider)
                logger.warning(MSG_ANALYSIS_FAILED, error.kind.value, error)
                self._generation += 1
                self._publish(is_analyzing=False, last_error=ErrorInfo.from_error(error))
                return None
            case found:
                analyzer = found

        self._generation += 1
        generation = self._generation
        self._publish(is_analyzing=True, last_result=None, last_error=None)

        outcome: dict = {}
        try:
            result = await analyzer.analyze(image)
            outcome = {"last_result": result, "last_error": None}
            return result
        except AnalysisError as exc:
            logger.warning(MSG_ANALYSIS_FAILED, exc.kind.value, exc)
            outcome = {"last_result": None, "last_error": ErrorInfo.from_error(exc)}
            return None
        finally:
            self._complete(generation, provider, outcome)

    def _complete(self, generation: int, provider: ProviderId, outcome: dict) -> None:
        match generation == self._generation:
            case True:
                self._publish(is_analyzing=False, **outcome)
            case False:
                logger.info(MSG_STALE_RESULT, provider.display_name, generation, self._generation)
