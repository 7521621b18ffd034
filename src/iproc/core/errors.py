from pathlib import Path
from typing import Optional


class OperationError(Exception):
    def __init__(self, code: str, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.code = code
        self.message = message
        self.path = path


class OpenFailed(OperationError):
    """Input or watermark file could not be read or decoded."""

    def __init__(self, path: Path, cause: str):
        super().__init__("OPEN_FAILED", f"Unable to open image {path}: {cause}", path)
        self.cause = cause


class SaveFailed(OperationError):
    """Output file could not be encoded or written. No partial file is left behind."""

    def __init__(self, path: Path, cause: str):
        super().__init__("SAVE_FAILED", f"Unable to save image {path}: {cause}", path)
        self.cause = cause


class InvalidParameter(OperationError):
    def __init__(self, message: str):
        super().__init__("INVALID_INPUT", message)
