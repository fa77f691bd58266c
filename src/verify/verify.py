"""Check that generated exclusion lists are up to date."""

from __future__ import annotations

import filecmp
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from excludes.batch import FileState, run
from excludes.formats import OutputFormat
from excludes.writer import artifact_path


@dataclass(frozen=True)
class VerificationResult:
    ok: bool
    missing: tuple[str, ...] = field(default_factory=tuple)
    stale: tuple[str, ...] = field(default_factory=tuple)
    failed: tuple[str, ...] = field(default_factory=tuple)


def verify_excludes(
    file_paths: Any,
    output_dir: Path,
    fmt: OutputFormat = OutputFormat.PHP,
    include_empty: bool = True,
) -> VerificationResult:
    """Verify that the exclusion lists in ``output_dir`` are current.

    Regenerates every exclusion list into a temporary directory and compares
    it byte-for-byte with the artifact of the same name in ``output_dir``.
    An artifact left behind by a source that now declares nothing, and is
    skipped because ``include_empty`` is false, counts as stale. Other files in
    ``output_dir`` that the run would not produce are ignored.

    Args:
        file_paths: Source files, in any shape accepted by ``normalize_files``
        output_dir: Directory holding the committed exclusion lists
        fmt: Output encoding the lists were generated with
        include_empty: Whether lists were generated for files without symbols

    Returns:
        VerificationResult with sorted artifact names that are missing or
        stale, and source paths that failed to regenerate.

    Raises:
        FileNotFoundError: If output_dir does not exist.
        NotADirectoryError: If output_dir is not a directory.
    """
    if not output_dir.exists():
        msg = f"Output directory does not exist: {output_dir}"
        raise FileNotFoundError(msg)
    if not output_dir.is_dir():
        msg = f"Output path is not a directory: {output_dir}"
        raise NotADirectoryError(msg)

    with tempfile.TemporaryDirectory() as temp_dir:
        temp_path = Path(temp_dir)
        report = run(file_paths, temp_path, fmt, include_empty)

        regenerated = {path.name for path in temp_path.iterdir() if path.is_file()}

        missing: list[str] = []
        stale: list[str] = []
        for name in sorted(regenerated):
            existing = output_dir / name
            if not existing.is_file():
                missing.append(name)
            elif not filecmp.cmp(existing, temp_path / name, shallow=False):
                stale.append(name)

        for outcome in report.outcomes:
            if outcome.state is not FileState.SKIPPED:
                continue
            leftover = artifact_path(outcome.source_path, output_dir, fmt)
            if leftover.name not in regenerated and leftover.is_file():
                stale.append(leftover.name)
        stale = sorted(set(stale))

    failed = sorted(outcome.source_path for outcome in report.failures)
    ok = not missing and not stale and not failed
    return VerificationResult(
        ok=ok,
        missing=tuple(missing),
        stale=tuple(stale),
        failed=tuple(failed),
    )
