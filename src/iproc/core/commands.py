from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from iproc.core.errors import InvalidParameter

ROTATIONS = (90, 180, 270)
DIRECTIONS = ("vertical", "horizontal")
FILTERS = ("grayscale",)
WATERMARK_OFFSET = (10, 10)


def _require_non_negative(**values: int) -> None:
    for name, value in values.items():
        if int(value) < 0:
            raise InvalidParameter(f"{name} must be >= 0, got {value}")


def _require_positive(**values: int) -> None:
    for name, value in values.items():
        if int(value) <= 0:
            raise InvalidParameter(f"{name} must be > 0, got {value}")


@dataclass(frozen=True)
class Crop:
    x: int
    y: int
    width: int
    height: int
    input: Path
    output: Path

    def __post_init__(self) -> None:
        _require_non_negative(x=self.x, y=self.y, width=self.width, height=self.height)


@dataclass(frozen=True)
class Resize:
    width: int
    height: int
    input: Path
    output: Path

    def __post_init__(self) -> None:
        _require_positive(width=self.width, height=self.height)


@dataclass(frozen=True)
class Filter:
    name: str
    input: Path
    output: Path


@dataclass(frozen=True)
class Watermark:
    watermark: Path
    input: Path
    output: Path
    offset: Tuple[int, int] = WATERMARK_OFFSET


@dataclass(frozen=True)
class Rotate:
    degrees: int
    input: Path
    output: Path


@dataclass(frozen=True)
class Flip:
    direction: str
    input: Path
    output: Path


@dataclass(frozen=True)
class Convert:
    input: Path
    output: Path
    format: Optional[str] = None


@dataclass(frozen=True)
class Mirror:
    input: Path
    output: Path


Command = Union[Crop, Resize, Filter, Watermark, Rotate, Flip, Convert, Mirror]

OPERATION_NAMES = {
    Crop: "crop",
    Resize: "resize",
    Filter: "filter",
    Watermark: "watermark",
    Rotate: "rotate",
    Flip: "flip",
    Convert: "convert",
    Mirror: "mirror",
}


def operation_name(command: Command) -> str:
    return OPERATION_NAMES[type(command)]


def unsupported_parameter(command: Command) -> Optional[str]:
    """Describe the parameter that makes `command` fall back to a no-op, if any."""
    if isinstance(command, Rotate) and command.degrees not in ROTATIONS:
        return f"rotate supports 90/180/270 degrees, got {command.degrees}"
    if isinstance(command, Flip) and command.direction not in DIRECTIONS:
        return f"flip direction must be vertical or horizontal, got {command.direction!r}"
    if isinstance(command, Filter) and command.name not in FILTERS:
        return f"unknown filter {command.name!r}; available: {', '.join(FILTERS)}"
    return None
