"""Entry point — wires Config → AnalysisCoordinator → terminal renderer."""
import argparse
import asyncio
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from src.config import Config
from src.constants import MSG_ANALYZING, MSG_NO_PROVIDERS, MSG_PROVIDERS_HEADER, MSG_STARTING
from src.coordinator import AnalysisCoordinator, CoordinatorState
from src.imaging import load_image
from src.vision.errors import InvalidImageError
from src.vision.models import ProviderId


def _setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Describe a photo with a cloud vision model.")
    parser.add_argument("image", type=Path, help="path to the photo")
    parser.add_argument(
        "--provider",
        choices=[p.value for p in ProviderId],
        help="provider to use (defaults to DEFAULT_PROVIDER)",
    )
    return parser.parse_args(argv)


class StateRenderer:
    """Prints each coordinator transition to the console."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def __call__(self, state: CoordinatorState) -> None:
        match state:
            case CoordinatorState(is_analyzing=True):
                self._console.print(MSG_ANALYZING % state.selected_provider.display_name, style="dim")
            case CoordinatorState(last_error=error) if error is not None:
                self._console.print(Panel(error.message, title="Error", border_style="red"))
            case CoordinatorState(last_result=result) if result is not None:
                subtitle = result.timestamp.astimezone().strftime("%H:%M:%S")
                self._console.print(
                    Panel(result.text, title=result.provider.display_name, subtitle=subtitle)
                )
            case _:
                pass


async def run(config: Config, image_path: Path, provider: ProviderId | None, console: Console) -> int:
    logger = logging.getLogger(__name__)
    logger.info(MSG_STARTING)

    coordinator = AnalysisCoordinator.from_config(config)
    match coordinator.has_any_provider:
        case False:
            console.print(MSG_NO_PROVIDERS, style="yellow")
            return 1
        case True:
            names = ", ".join(p.display_name for p in ProviderId if p in coordinator.available_providers)
            logger.info(MSG_PROVIDERS_HEADER, names)

    match provider:
        case None:
            pass
        case chosen:
            coordinator.select_provider(chosen)

    try:
        image = load_image(image_path)
    except InvalidImageError as exc:
        console.print(Panel(str(exc), title="Error", border_style="red"))
        return 1

    coordinator.subscribe(StateRenderer(console))
    await coordinator.analyze(image)
    return 0 if coordinator.state.last_error is None else 1


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    config = Config.from_env()
    _setup_logging(config.log_level)

    provider = ProviderId(args.provider) if args.provider else None
    sys.exit(asyncio.run(run(config, args.image, provider, Console())))


if __name__ == "__main__":
    main()
