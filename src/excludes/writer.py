"""Exclusion list writer."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from excludes.errors import ArtifactWriteError
from excludes.formats import OutputFormat, serialize
from excludes.models import FileResult

logger = logging.getLogger(__name__)


class WriteStatus(str, Enum):
    WRITTEN = "written"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class WriteOutcome:
    status: WriteStatus
    path: Path
    record_count: int

    @property
    def written(self) -> bool:
        return self.status is WriteStatus.WRITTEN


def artifact_path(source_path: str, output_dir: Path, fmt: OutputFormat) -> Path:
    """Return the exclusion list path for a source file.

    The name is the source file's base name without its last extension,
    e.g. ``src/functions.php`` -> ``<output_dir>/functions.json``.
    """
    stem = Path(source_path).stem
    return output_dir / f"{stem}.{OutputFormat(fmt).extension}"


def write(
    file_result: FileResult,
    output_dir: Path,
    fmt: OutputFormat,
    include_empty: bool,
) -> WriteOutcome:
    """Serialize ``file_result`` and write it into ``output_dir``.

    Overwrites any previous artifact for the same base name. When the result
    has no records and ``include_empty`` is false, nothing is written.

    Raises:
        ArtifactWriteError: If the artifact cannot be written.
    """
    target = artifact_path(file_result.source_path, output_dir, fmt)
    count = len(file_result.records)

    if file_result.is_empty and not include_empty:
        logger.debug("No symbols in %s, skipping", file_result.source_path)
        return WriteOutcome(status=WriteStatus.SKIPPED, path=target, record_count=0)

    payload = serialize(file_result, fmt)
    try:
        target.write_bytes(payload)
    except OSError as exc:
        raise ArtifactWriteError(
            file_result.source_path, target, exc.strerror or str(exc)
        ) from exc

    logger.debug("Wrote %d symbols to %s", count, target)
    return WriteOutcome(status=WriteStatus.WRITTEN, path=target, record_count=count)


__all__ = ["WriteOutcome", "WriteStatus", "artifact_path", "write"]
