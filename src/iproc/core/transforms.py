"""Pixel transforms, one per sub-command.

Every function returns a new image and leaves its arguments untouched. Values
outside the supported set for rotate, flip and filter return an unchanged copy.
"""

from typing import Tuple

from PIL import Image

from iproc.core.commands import WATERMARK_OFFSET

# Clockwise rotation -> Pillow transpose (Pillow's ROTATE_* constants are counter-clockwise).
_ROTATIONS = {
    90: Image.Transpose.ROTATE_270,
    180: Image.Transpose.ROTATE_180,
    270: Image.Transpose.ROTATE_90,
}

_FLIPS = {
    "vertical": Image.Transpose.FLIP_TOP_BOTTOM,
    "horizontal": Image.Transpose.FLIP_LEFT_RIGHT,
}


def crop(image: Image.Image, x: int, y: int, width: int, height: int) -> Image.Image:
    return image.crop((x, y, x + width, y + height))


def resize(image: Image.Image, width: int, height: int) -> Image.Image:
    return image.resize((width, height), resample=Image.Resampling.LANCZOS)


def rotate(image: Image.Image, degrees: int) -> Image.Image:
    method = _ROTATIONS.get(degrees)
    if method is None:
        return image.copy()
    return image.transpose(method)


def flip(image: Image.Image, direction: str) -> Image.Image:
    method = _FLIPS.get(direction)
    if method is None:
        return image.copy()
    return image.transpose(method)


def mirror(image: Image.Image) -> Image.Image:
    return image.transpose(Image.Transpose.FLIP_LEFT_RIGHT)


def grayscale(image: Image.Image) -> Image.Image:
    if "A" in image.getbands() or "transparency" in image.info:
        return image.convert("RGBA").convert("LA")
    return image.convert("L")


_FILTERS = {
    "grayscale": grayscale,
}


def apply_filter(image: Image.Image, name: str) -> Image.Image:
    fn = _FILTERS.get(name)
    if fn is None:
        return image.copy()
    return fn(image)


def watermark(image: Image.Image, overlay: Image.Image, offset: Tuple[int, int] = WATERMARK_OFFSET) -> Image.Image:
    """Blend `overlay` onto `image` with its top-left corner at `offset`.

    The overlay is alpha-composited over the source, so the source's own alpha
    only grows. Parts of the overlay that fall outside `image` are dropped.
    """
    has_alpha = "A" in image.getbands() or "transparency" in image.info
    base = image.convert("RGBA")
    layer = Image.new("RGBA", base.size, (0, 0, 0, 0))
    layer.paste(overlay.convert("RGBA"), offset)
    out = Image.alpha_composite(base, layer)
    if image.mode in ("L", "LA"):
        return out.convert(image.mode)
    return out if has_alpha else out.convert("RGB")


def convert(image: Image.Image) -> Image.Image:
    return image.copy()
