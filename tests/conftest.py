from pathlib import Path

import pytest
from PIL import Image


def patterned(width: int = 5, height: int = 3, mode: str = "RGB") -> Image.Image:
    image = Image.new("RGB", (width, height))
    for y in range(height):
        for x in range(width):
            image.putpixel((x, y), (x * 40 % 256, y * 70 % 256, (x * y * 13) % 256))
    return image.convert(mode) if mode != "RGB" else image


def same_pixels(a: Image.Image, b: Image.Image) -> bool:
    return a.size == b.size and a.mode == b.mode and a.tobytes() == b.tobytes()


@pytest.fixture
def sample() -> Image.Image:
    return patterned()


@pytest.fixture
def sample_png(tmp_path: Path) -> Path:
    path = tmp_path / "sample.png"
    patterned(8, 6, "RGBA").save(path)
    return path
