import json
from pathlib import Path
from typing import Any, Dict, Optional

import typer

from iproc import __version__
from iproc.core import dispatcher
from iproc.core.commands import (
    WATERMARK_OFFSET,
    Command,
    Convert,
    Crop,
    Filter,
    Flip,
    Mirror,
    Resize,
    Rotate,
    Watermark,
)
from iproc.core.errors import OperationError
from iproc.core.protocol import ERROR_CODES, PROTOCOL_VERSION

app = typer.Typer(add_completion=False, no_args_is_help=True, help="An image processor")


def _print(payload: Dict[str, Any]) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _ok(command: str, data: Dict[str, Any]) -> None:
    _print({"ok": True, "protocolVersion": PROTOCOL_VERSION, "command": command, "data": data})


def _fail(command: str, code: str, message: str, retryable: bool = False) -> None:
    _print(
        {
            "ok": False,
            "protocolVersion": PROTOCOL_VERSION,
            "command": command,
            "error": {"code": code, "message": message, "retryable": retryable},
        }
    )
    raise SystemExit(ERROR_CODES.get(code, 1))


def _build(name: str, factory, *args: Any, **kwargs: Any) -> Command:  # noqa: ANN001
    try:
        return factory(*args, **kwargs)
    except OperationError as exc:
        _fail(name, exc.code, exc.message)
    raise RuntimeError("unreachable")


def _run(name: str, command: Command, strict: bool = False) -> None:
    try:
        data = dispatcher.run(command, strict=strict)
    except OperationError as exc:
        _fail(name, exc.code, exc.message)
    except Exception as exc:  # pragma: no cover
        _fail(name, "ERROR", str(exc))
    _ok(name, data)


@app.command("crop")
def crop_image(
    x: int = typer.Argument(..., min=0),
    y: int = typer.Argument(..., min=0),
    height: int = typer.Argument(..., min=0),
    width: int = typer.Argument(..., min=0),
    input: Path = typer.Argument(...),
    output: Path = typer.Argument(...),
) -> None:
    _run("crop", _build("crop", Crop, x=x, y=y, width=width, height=height, input=input, output=output))


@app.command("resize")
def resize_image(
    height: int = typer.Argument(..., min=1),
    width: int = typer.Argument(..., min=1),
    input: Path = typer.Argument(...),
    output: Path = typer.Argument(...),
) -> None:
    _run("resize", _build("resize", Resize, width=width, height=height, input=input, output=output))


@app.command("filter")
def filter_image(
    filter: str,
    input: Path,
    output: Path,
    strict: bool = typer.Option(False, "--strict", help="Reject unknown filters instead of copying the image"),
) -> None:
    _run("filter", Filter(name=filter, input=input, output=output), strict=strict)


@app.command("watermark")
def watermark_image(
    watermark_path: Path,
    input: Path,
    output: Path,
    offset_x: int = typer.Option(WATERMARK_OFFSET[0], "--offset-x"),
    offset_y: int = typer.Option(WATERMARK_OFFSET[1], "--offset-y"),
) -> None:
    _run(
        "watermark",
        Watermark(watermark=watermark_path, input=input, output=output, offset=(offset_x, offset_y)),
    )


@app.command("rotate")
def rotate_image(
    degrees: int = typer.Argument(..., min=0),
    input: Path = typer.Argument(...),
    output: Path = typer.Argument(...),
    strict: bool = typer.Option(False, "--strict", help="Reject angles other than 90/180/270"),
) -> None:
    _run("rotate", Rotate(degrees=degrees, input=input, output=output), strict=strict)


@app.command("flip")
def flip_image(
    direction: str,
    input: Path,
    output: Path,
    strict: bool = typer.Option(False, "--strict", help="Reject directions other than vertical/horizontal"),
) -> None:
    _run("flip", Flip(direction=direction, input=input, output=output), strict=strict)


@app.command("convert")
def convert_image(
    input: Path,
    output: Path,
    output_format: Optional[str] = typer.Option(None, "--format", help="Output format; inferred from the extension by default"),
) -> None:
    _run("convert", Convert(input=input, output=output, format=output_format))


@app.command("mirror")
def mirror_image(input: Path, output: Path) -> None:
    _run("mirror", Mirror(input=input, output=output))


@app.command("version")
def version() -> None:
    _ok("version", {"packageVersion": __version__, "protocolVersion": PROTOCOL_VERSION})


def main() -> None:
    app()
