"""Batch driver: generate one exclusion list per source file."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any

from excludes.errors import ConfigurationError, FileError, OutputDirectoryError
from excludes.formats import OutputFormat
from excludes.writer import write
from parse.parser import PhpParser, read_source
from parse.treesitter_symbols import collect_symbols

if TYPE_CHECKING:
    from parse.parser import SourceParser

logger = logging.getLogger(__name__)


class FileState(str, Enum):
    PENDING = "pending"
    PARSED = "parsed"
    COLLECTED = "collected"
    WRITTEN = "written"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class FileOutcome:
    """What happened to one input file during a run."""

    source_path: str
    state: FileState = FileState.PENDING
    artifact: Path | None = None
    record_count: int = 0
    error_kind: str | None = None
    message: str | None = None


@dataclass
class BatchReport:
    outcomes: list[FileOutcome] = field(default_factory=list)
    output_dir: Path | None = None

    def _count(self, state: FileState) -> int:
        return sum(1 for outcome in self.outcomes if outcome.state is state)

    @property
    def nothing_to_do(self) -> bool:
        return not self.outcomes

    @property
    def processed(self) -> int:
        return len(self.outcomes)

    @property
    def written(self) -> int:
        return self._count(FileState.WRITTEN)

    @property
    def skipped(self) -> int:
        return self._count(FileState.SKIPPED)

    @property
    def failed(self) -> int:
        return self._count(FileState.FAILED)

    @property
    def failures(self) -> list[FileOutcome]:
        return [o for o in self.outcomes if o.state is FileState.FAILED]

    @property
    def ok(self) -> bool:
        return not self.failed

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1


def _is_path(value: Any) -> bool:
    return isinstance(value, (str, os.PathLike))


def normalize_files(files: Any) -> list[str]:
    """Flatten a file list into a list of string paths.

    Accepts a single path, or an iterable whose entries are paths or
    iterables of paths (flattened one level). Duplicates are kept. An entry
    that is neither a path nor an iterable is rejected rather than silently
    dropped, so a typo in a config file fails before anything is written.

    Raises:
        ConfigurationError: If ``files`` or one of its entries has another shape.
    """
    if _is_path(files):
        return [os.fspath(files)]

    if not isinstance(files, Iterable):
        msg = (
            "Files must be a path or an iterable of paths, "
            f"got {type(files).__name__}"
        )
        raise ConfigurationError(msg)

    normalized: list[str] = []
    for entry in files:
        if _is_path(entry):
            normalized.append(os.fspath(entry))
        elif isinstance(entry, Iterable):
            normalized.extend(
                os.fspath(item) if _is_path(item) else str(item) for item in entry
            )
        else:
            msg = (
                "File entries must be paths or iterables of paths, "
                f"got {type(entry).__name__}"
            )
            raise ConfigurationError(msg)
    return normalized


def _ensure_output_dir(output_dir: Path) -> None:
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputDirectoryError(output_dir, exc.strerror or str(exc)) from exc
    if not os.access(output_dir, os.W_OK):
        raise OutputDirectoryError(output_dir, "directory is not writable")


def _process_file(
    outcome: FileOutcome,
    parser: SourceParser,
    output_dir: Path,
    fmt: OutputFormat,
    include_empty: bool,
) -> None:
    source = read_source(Path(outcome.source_path))
    tree = parser.parse(source, outcome.source_path)
    outcome.state = FileState.PARSED

    result = collect_symbols(tree, outcome.source_path)
    outcome.state = FileState.COLLECTED
    outcome.record_count = len(result.records)

    written = write(result, output_dir, fmt, include_empty)
    outcome.artifact = written.path if written.written else None
    outcome.state = FileState.WRITTEN if written.written else FileState.SKIPPED


def run(
    file_paths: Any,
    output_dir: Path,
    fmt: OutputFormat = OutputFormat.PHP,
    include_empty: bool = True,
    *,
    parser: SourceParser | None = None,
) -> BatchReport:
    """Generate exclusion lists for every file in ``file_paths``.

    Files are processed sequentially in the given order. Read, parse and
    write failures are recorded on the report and do not stop the batch.

    Args:
        file_paths: A path or (nested) iterable of paths, see ``normalize_files``
        output_dir: Directory receiving the artifacts, created if absent
        fmt: Output encoding
        include_empty: Write an artifact even for files without symbols
        parser: Parser to use (default: tree-sitter PHP parser)

    Returns:
        BatchReport with one outcome per input path.

    Raises:
        ConfigurationError: If ``file_paths`` has an invalid shape.
        OutputDirectoryError: If ``output_dir`` cannot be created or written.
    """
    files = normalize_files(file_paths)
    report = BatchReport(output_dir=output_dir)

    if not files:
        logger.info("No files found, nothing to do")
        return report

    _ensure_output_dir(output_dir)
    if parser is None:
        parser = PhpParser()
    fmt = OutputFormat(fmt)

    logger.info(
        "Generating exclusion lists for %d %s into %s",
        len(files),
        "files" if len(files) > 1 else "file",
        output_dir,
    )

    for source_path in files:
        outcome = FileOutcome(source_path=source_path)
        report.outcomes.append(outcome)
        try:
            _process_file(outcome, parser, output_dir, fmt, include_empty)
        except FileError as exc:
            outcome.state = FileState.FAILED
            outcome.error_kind = exc.kind
            outcome.message = str(exc)
            logger.debug("%s failed (%s): %s", source_path, exc.kind, exc)

    logger.info(
        "Processed %d, written %d, skipped %d, failed %d",
        report.processed,
        report.written,
        report.skipped,
        report.failed,
    )
    return report


__all__ = [
    "BatchReport",
    "FileOutcome",
    "FileState",
    "normalize_files",
    "run",
]
