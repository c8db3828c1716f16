"""Image preparation tests — resize bounds, aspect ratio, JPEG output."""
import io
from unittest.mock import patch

import pytest
from PIL import Image

from src.imaging import encode_jpeg, fit_size, load_image, prepare_image, resize_to_fit
from src.vision.errors import InvalidImageError


@pytest.mark.parametrize("size", [(1024, 1024), (1000, 500), (640, 1024), (1, 1), (1024, 3)])
def test_within_bounds_is_untouched(size):
    image = Image.new("RGB", size)

    assert resize_to_fit(image) is image
    assert fit_size(*size) == size


@pytest.mark.parametrize(
    "size",
    [(4032, 3024), (3024, 4032), (1025, 1025), (1500, 1001), (5000, 20), (2048, 1536)],
)
def test_oversized_is_scaled_to_long_side(size):
    width, height = size

    new_width, new_height = resize_to_fit(Image.new("RGB", size)).size

    scale = 1024 / max(width, height)
    assert max(new_width, new_height) == 1024
    assert abs(new_width - width * scale) <= 1
    assert abs(new_height - height * scale) <= 1


def test_landscape_photo_becomes_1024_by_768():
    assert fit_size(4000, 3000) == (1024, 768)


def test_portrait_photo_becomes_768_by_1024():
    assert fit_size(3000, 4000) == (768, 1024)


def test_extreme_strip_keeps_at_least_one_pixel():
    assert fit_size(100_000, 10) == (1024, 1)


def test_encode_jpeg_converts_alpha_to_rgb():
    data = encode_jpeg(Image.new("RGBA", (32, 32), (10, 20, 30, 128)))

    decoded = Image.open(io.BytesIO(data))
    assert decoded.format == "JPEG"
    assert decoded.mode == "RGB"


def test_prepare_image_returns_jpeg_bytes():
    data = prepare_image(Image.new("RGB", (3000, 2000)))

    assert data[:2] == b"\xff\xd8"
    assert Image.open(io.BytesIO(data)).size == (1024, 683)


def test_prepare_image_wraps_encoder_failure():
    with patch.object(Image.Image, "save", side_effect=OSError("encoder error")):
        with pytest.raises(InvalidImageError):
            prepare_image(Image.new("RGB", (10, 10)))


def test_load_image_reads_file(tmp_path):
    path = tmp_path / "photo.png"
    Image.new("RGB", (20, 10)).save(path)

    assert load_image(path).size == (20, 10)


def test_load_image_rejects_non_image(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("not a photo")

    with pytest.raises(InvalidImageError):
        load_image(path)


def test_load_image_rejects_missing_file(tmp_path):
    with pytest.raises(InvalidImageError):
        load_image(tmp_path / "missing.jpg")
