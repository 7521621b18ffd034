from typing import Any, Dict, Optional

from PIL import Image

from iproc.core import codec, transforms
from iproc.core.commands import (
    Command,
    Convert,
    Crop,
    Filter,
    Flip,
    Mirror,
    Resize,
    Rotate,
    Watermark,
    operation_name,
    unsupported_parameter,
)
from iproc.core.errors import InvalidParameter
from iproc.logger import get_logger

_logger = get_logger("dispatcher")


def _transform(command: Command, image: Image.Image, overlay: Optional[Image.Image] = None) -> Image.Image:
    if isinstance(command, Crop):
        return transforms.crop(image, command.x, command.y, command.width, command.height)
    if isinstance(command, Resize):
        return transforms.resize(image, command.width, command.height)
    if isinstance(command, Rotate):
        return transforms.rotate(image, command.degrees)
    if isinstance(command, Flip):
        return transforms.flip(image, command.direction)
    if isinstance(command, Filter):
        return transforms.apply_filter(image, command.name)
    if isinstance(command, Watermark):
        if overlay is None:
            raise InvalidParameter("watermark requires an overlay image")
        return transforms.watermark(image, overlay, command.offset)
    if isinstance(command, Convert):
        return transforms.convert(image)
    if isinstance(command, Mirror):
        return transforms.mirror(image)
    raise InvalidParameter(f"Unsupported command: {type(command).__name__}")


def run(command: Command, strict: bool = False) -> Dict[str, Any]:
    """Decode the input, apply the command's transform and encode the result.

    Raises OpenFailed when an input cannot be decoded, SaveFailed when the output
    cannot be written, and InvalidParameter in strict mode for values that would
    otherwise be ignored.
    """
    operation = operation_name(command)
    problem = unsupported_parameter(command)
    if problem and strict:
        raise InvalidParameter(problem)

    _logger.debug("%s: decoding %s", operation, command.input)
    image = codec.decode(command.input)
    overlay = None
    if isinstance(command, Watermark):
        _logger.debug("%s: decoding overlay %s", operation, command.watermark)
        overlay = codec.decode(command.watermark)

    if problem:
        _logger.warning("%s: %s; writing the image unchanged", operation, problem)
    result = _transform(command, image, overlay)

    fmt = command.format if isinstance(command, Convert) else None
    _logger.debug("%s: encoding %s", operation, command.output)
    written = codec.encode(result, command.output, format=fmt)
    return {
        "operation": operation,
        "input": str(command.input),
        "output": str(command.output),
        "format": written,
        "width": result.width,
        "height": result.height,
        "mode": result.mode,
        "applied": problem is None,
    }
