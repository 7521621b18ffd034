import pytest
from PIL import Image

from iproc.core import transforms

from conftest import patterned, same_pixels


@pytest.mark.parametrize("degrees", [90, 180, 270])
def test_rotation_closes_after_four_turns(sample, degrees: int) -> None:
    image = sample
    for _ in range(4):
        image = transforms.rotate(image, degrees)
    assert same_pixels(image, sample)


def test_rotate_90_is_clockwise(sample) -> None:
    rotated = transforms.rotate(sample, 90)
    assert rotated.size == (sample.height, sample.width)
    # top-left of the source ends up top-right after a clockwise quarter turn
    assert rotated.getpixel((rotated.width - 1, 0)) == sample.getpixel((0, 0))


def test_rotate_unsupported_angle_is_noop(sample) -> None:
    out = transforms.rotate(sample, 45)
    assert same_pixels(out, sample)
    assert out is not sample


@pytest.mark.parametrize("direction", ["vertical", "horizontal"])
def test_flip_twice_is_identity(sample, direction: str) -> None:
    once = transforms.flip(sample, direction)
    assert not same_pixels(once, sample)
    assert same_pixels(transforms.flip(once, direction), sample)


def test_flip_vertical_swaps_rows(sample) -> None:
    out = transforms.flip(sample, "vertical")
    assert out.getpixel((0, 0)) == sample.getpixel((0, sample.height - 1))


def test_flip_horizontal_swaps_columns(sample) -> None:
    out = transforms.flip(sample, "horizontal")
    assert out.getpixel((0, 0)) == sample.getpixel((sample.width - 1, 0))


def test_flip_unsupported_direction_is_noop(sample) -> None:
    assert same_pixels(transforms.flip(sample, "sideways"), sample)


def test_mirror_twice_is_identity(sample) -> None:
    once = transforms.mirror(sample)
    assert same_pixels(once, transforms.flip(sample, "horizontal"))
    assert same_pixels(transforms.mirror(once), sample)


def test_resize_to_own_size_is_identity(sample) -> None:
    assert same_pixels(transforms.resize(sample, sample.width, sample.height), sample)


def test_resize_ignores_aspect_ratio(sample) -> None:
    out = transforms.resize(sample, 17, 2)
    assert out.size == (17, 2)


def test_crop_full_frame_is_identity(sample) -> None:
    assert same_pixels(transforms.crop(sample, 0, 0, sample.width, sample.height), sample)


def test_crop_extracts_sub_rectangle(sample) -> None:
    out = transforms.crop(sample, 1, 1, 3, 2)
    assert out.size == (3, 2)
    assert out.getpixel((0, 0)) == sample.getpixel((1, 1))
    assert out.getpixel((2, 1)) == sample.getpixel((3, 2))


def test_grayscale_filter_drops_color() -> None:
    out = transforms.apply_filter(patterned(), "grayscale")
    assert out.mode == "L"
    assert out.size == (5, 3)


def test_grayscale_keeps_alpha() -> None:
    out = transforms.apply_filter(patterned(mode="RGBA"), "grayscale")
    assert out.mode == "LA"
    assert out.getpixel((0, 0))[1] == 255


def test_unknown_filter_is_noop(sample) -> None:
    assert same_pixels(transforms.apply_filter(sample, "sepia"), sample)


def test_watermark_lands_at_default_offset() -> None:
    base = Image.new("RGB", (40, 40), (255, 0, 0))
    mark = Image.new("RGB", (5, 5), (0, 0, 255))
    out = transforms.watermark(base, mark)
    assert out.getpixel((9, 9)) == (255, 0, 0)
    assert out.getpixel((10, 10)) == (0, 0, 255)
    assert out.getpixel((14, 14)) == (0, 0, 255)
    assert out.getpixel((15, 15)) == (255, 0, 0)
    assert base.getpixel((10, 10)) == (255, 0, 0)


def test_watermark_respects_overlay_alpha() -> None:
    base = Image.new("RGB", (20, 20), (255, 0, 0))
    mark = Image.new("RGBA", (5, 5), (0, 0, 255, 0))
    out = transforms.watermark(base, mark)
    assert same_pixels(out, base)


def test_watermark_larger_than_source_is_truncated() -> None:
    base = Image.new("RGB", (20, 20), (255, 0, 0))
    mark = Image.new("RGB", (50, 50), (0, 0, 255))
    out = transforms.watermark(base, mark, offset=(10, 10))
    assert out.size == (20, 20)
    assert out.getpixel((19, 19)) == (0, 0, 255)
    assert out.getpixel((5, 5)) == (255, 0, 0)


def test_convert_keeps_pixels(sample) -> None:
    assert same_pixels(transforms.convert(sample), sample)


def test_translucent_watermark_keeps_opaque_source_opaque() -> None:
    base = Image.new("RGBA", (30, 30), (255, 0, 0, 255))
    mark = Image.new("RGBA", (5, 5), (0, 0, 255, 128))
    out = transforms.watermark(base, mark)
    assert out.mode == "RGBA"
    r, g, b, a = out.getpixel((12, 12))
    assert a == 255
    assert 120 <= r <= 135
    assert 120 <= b <= 135
    assert out.getpixel((5, 5)) == (255, 0, 0, 255)


def test_translucent_watermark_on_gray_alpha_source() -> None:
    base = Image.new("LA", (30, 30), (200, 255))
    mark = Image.new("RGBA", (5, 5), (0, 0, 0, 128))
    out = transforms.watermark(base, mark)
    assert out.mode == "LA"
    assert out.getpixel((12, 12))[1] == 255
    assert out.getpixel((12, 12))[0] < 200
