import os
import tempfile
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from iproc.core.errors import OpenFailed, SaveFailed

# Modes each format stores as-is. Formats not listed get the image unchanged.
_SAVE_MODES = {
    "JPEG": {"1", "L", "RGB", "RGBX", "CMYK", "YCbCr"},
    "PNG": {"1", "L", "LA", "I", "I;16", "I;16B", "P", "RGB", "RGBA"},
    "BMP": {"1", "L", "P", "RGB", "RGBA"},
    "GIF": {"1", "L", "P", "RGB", "RGBA"},
    "PPM": {"1", "L", "I", "RGB"},
    "PCX": {"1", "L", "P", "RGB"},
    "EPS": {"L", "RGB", "CMYK"},
    "WEBP": {"RGB", "RGBA"},
}

_WIDE_GRAY_MODES = {"I", "I;16", "I;16B", "I;16L", "I;16N", "F"}


def decode(path: Path) -> Image.Image:
    """Read `path` fully into memory. Any read or decode failure raises OpenFailed."""
    path = Path(path)
    try:
        with Image.open(path) as image:
            image.load()
            return image.copy()
    except FileNotFoundError as exc:
        raise OpenFailed(path, "file not found") from exc
    except UnidentifiedImageError as exc:
        raise OpenFailed(path, "unrecognised image format") from exc
    except (OSError, Image.DecompressionBombError) as exc:
        raise OpenFailed(path, str(exc)) from exc


def resolve_format(path: Path, override: Optional[str] = None) -> str:
    if override:
        name = override.strip().upper()
        if name == "JPG":
            name = "JPEG"
        Image.init()
        if name not in Image.SAVE:
            raise SaveFailed(Path(path), f"unsupported output format: {override}")
        return name
    ext = Path(path).suffix.lower()
    fmt = Image.registered_extensions().get(ext)
    if fmt is None or fmt not in Image.SAVE:
        raise SaveFailed(Path(path), f"cannot infer output format from extension '{ext}'")
    return fmt


def _to_gray8(image: Image.Image) -> Image.Image:
    if image.mode == "F":
        return image.convert("L")
    wide = image if image.mode == "I" else image.convert("I")
    if wide.getextrema()[1] > 255:
        # 16-bit samples: keep the high byte instead of clipping.
        wide = wide.point(lambda v: v * (1 / 256))
    return wide.convert("L")


def _prepare_for_format(image: Image.Image, fmt: str) -> Image.Image:
    modes = _SAVE_MODES.get(fmt)
    if modes is None or image.mode in modes:
        return image
    if image.mode in _WIDE_GRAY_MODES:
        gray = _to_gray8(image)
        return gray if "L" in modes else gray.convert("RGB")
    has_alpha = "A" in image.getbands() or "a" in image.getbands() or "transparency" in image.info
    if image.mode in ("LA", "La"):
        if "RGBA" in modes:
            return image.convert("RGBA")
        return image.convert("L")
    if image.mode == "1" and "L" in modes:
        return image.convert("L")
    if has_alpha and "RGBA" in modes:
        return image.convert("RGBA")
    return image.convert("RGB")


def encode(image: Image.Image, path: Path, format: Optional[str] = None) -> str:
    """Write `image` to `path` atomically and return the Pillow format name used.

    The image is written to a temporary file beside the target and renamed into
    place, so the target is either complete or untouched.
    """
    path = Path(path)
    fmt = resolve_format(path, format)
    directory = path.parent
    if not directory.is_dir():
        raise SaveFailed(path, f"directory does not exist: {directory}")

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.stem}.", suffix=".tmp", dir=directory)
    except OSError as exc:
        raise SaveFailed(path, str(exc)) from exc
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            _prepare_for_format(image, fmt).save(handle, format=fmt)
        os.replace(tmp, path)
    except (OSError, ValueError, KeyError) as exc:
        tmp.unlink(missing_ok=True)
        raise SaveFailed(path, str(exc) or exc.__class__.__name__) from exc
    return fmt
