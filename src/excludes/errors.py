"""Exception hierarchy for exclusion list generation."""

from __future__ import annotations

from pathlib import Path


class ExcludesError(Exception):
    """Base class for all exclusion list errors."""


class ConfigurationError(ExcludesError):
    """Raised before a run starts when its inputs have an invalid shape."""


class OutputDirectoryError(ExcludesError):
    """Raised when the output directory cannot be created or used."""

    def __init__(self, output_dir: Path, reason: str) -> None:
        self.output_dir = output_dir
        super().__init__(f"Cannot use output directory {output_dir}: {reason}")


class FileError(ExcludesError):
    """An error scoped to a single source file."""

    kind = "error"

    def __init__(self, source_path: str, message: str) -> None:
        self.source_path = source_path
        super().__init__(message)


class SourceReadError(FileError):
    kind = "read_error"

    def __init__(self, source_path: str, reason: str) -> None:
        super().__init__(source_path, f"Cannot read {source_path}: {reason}")


class ParseError(FileError):
    """Raised when a source file is not syntactically valid PHP."""

    kind = "parse_error"

    def __init__(self, source_path: str, line: int, column: int) -> None:
        self.line = line
        self.column = column
        super().__init__(
            source_path, f"Syntax error in {source_path} at L{line}:C{column}"
        )


class ArtifactWriteError(FileError):
    kind = "write_error"

    def __init__(self, source_path: str, target_path: Path, reason: str) -> None:
        self.target_path = target_path
        super().__init__(source_path, f"Cannot write {target_path}: {reason}")


__all__ = [
    "ArtifactWriteError",
    "ConfigurationError",
    "ExcludesError",
    "FileError",
    "OutputDirectoryError",
    "ParseError",
    "SourceReadError",
]
