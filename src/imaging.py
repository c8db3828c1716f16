"""Image preparation — downscale, JPEG-encode and base64 a bitmap for upload."""
import base64
import io
from pathlib import Path

from PIL import Image

from src.constants import JPEG_QUALITY, MAX_IMAGE_DIMENSION
from src.vision.errors import InvalidImageError


def fit_size(width: int, height: int, max_dimension: int = MAX_IMAGE_DIMENSION) -> tuple[int, int]:
    """Return (width, height) scaled so the larger side is at most max_dimension."""
    longest = max(width, height)
    match longest:
        case n if n <= max_dimension:
            return width, height
        case _:
            scale = max_dimension / longest
            scaled = (max(1, round(width * scale)), max(1, round(height * scale)))
            # long side lands exactly on max_dimension
            return (max_dimension, scaled[1]) if width >= height else (scaled[0], max_dimension)


def resize_to_fit(image: Image.Image, max_dimension: int = MAX_IMAGE_DIMENSION) -> Image.Image:
    size = fit_size(image.width, image.height, max_dimension)
    match size == image.size:
        case True:
            return image
        case False:
            return image.resize(size, Image.Resampling.LANCZOS)


def encode_jpeg(image: Image.Image, quality: int = JPEG_QUALITY) -> bytes:
    buffer = io.BytesIO()
    match image.mode:
        case "RGB" | "L":
            rgb = image
        case _:
            rgb = image.convert("RGB")
    rgb.save(buffer, format="JPEG", quality=quality)
    return buffer.getvalue()


def prepare_image(image: Image.Image) -> bytes:
    """Resize and encode for upload. Raises InvalidImageError on any failure."""
    try:
        data = encode_jpeg(resize_to_fit(image))
    except (OSError, ValueError) as exc:
        raise InvalidImageError() from exc
    match data:
        case b"":
            raise InvalidImageError()
        case _:
            return data


def to_base64(data: bytes) -> str:
    return base64.standard_b64encode(data).decode()


def load_image(path: Path) -> Image.Image:
    try:
        with Image.open(path) as img:
            img.load()
            return img.copy()
    except OSError as exc:
        raise InvalidImageError() from exc
