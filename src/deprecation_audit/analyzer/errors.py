"""Fatal scan errors.

Anything raised from here aborts the whole run. Missing ids and missing
line numbers are not errors: they are recorded as sentinel values on the
entry instead.
"""
from pathlib import Path
from typing import Optional


class AuditError(Exception):
    """Base class for errors that must stop a scan run."""

    def __init__(self, message: str, path: Optional[str | Path] = None):
        super().__init__(message)
        self.message = message
        self.path = str(path) if path is not None else None

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class ParseFailure(AuditError):
    """Source unit could not be read or parsed cleanly."""

    def __init__(self, message: str, path: Optional[str | Path] = None,
                 line: Optional[int] = None, column: Optional[int] = None):
        self.line = line
        self.column = column
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message, path)


class DepthImbalance(AuditError):
    """Guard depth did not return to zero after a file's traversal."""

    def __init__(self, depth: int, path: Optional[str | Path] = None):
        self.depth = depth
        super().__init__(f"guard depth is {depth} after traversal, expected 0", path)
