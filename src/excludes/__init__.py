"""Exclusion list generation for php-scoper."""

from excludes.errors import (
    ArtifactWriteError,
    ConfigurationError,
    ExcludesError,
    OutputDirectoryError,
    ParseError,
    SourceReadError,
)
from excludes.formats import OutputFormat
from excludes.models import FileResult, SymbolKind, SymbolRecord
from excludes.writer import WriteOutcome, WriteStatus, write


def __getattr__(name: str) -> object:
    # The batch driver imports the parser package, which imports this
    # package's errors; resolve it lazily to keep imports acyclic.
    if name in {"BatchReport", "FileOutcome", "FileState", "normalize_files", "run"}:
        from excludes.batch import (
            BatchReport,
            FileOutcome,
            FileState,
            normalize_files,
            run,
        )

        return {
            "BatchReport": BatchReport,
            "FileOutcome": FileOutcome,
            "FileState": FileState,
            "normalize_files": normalize_files,
            "run": run,
        }[name]

    msg = f"module 'excludes' has no attribute {name!r}"
    raise AttributeError(msg)


__all__ = [
    "ArtifactWriteError",
    "BatchReport",
    "ConfigurationError",
    "ExcludesError",
    "FileOutcome",
    "FileResult",
    "FileState",
    "OutputDirectoryError",
    "OutputFormat",
    "ParseError",
    "SourceReadError",
    "SymbolKind",
    "SymbolRecord",
    "WriteOutcome",
    "WriteStatus",
    "normalize_files",
    "run",
    "write",
]
