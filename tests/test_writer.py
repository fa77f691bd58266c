from __future__ import annotations

from pathlib import Path

import orjson
import pytest

from excludes.errors import ArtifactWriteError
from excludes.formats import OutputFormat
from excludes.models import FileResult, SymbolKind, SymbolRecord
from excludes.writer import WriteStatus, artifact_path, write


def _result(source_path: str = "src/functions.php", *names: str) -> FileResult:
    return FileResult(
        source_path=source_path,
        records=tuple(
            SymbolRecord(kind=SymbolKind.FUNCTION, fully_qualified_name=name)
            for name in names
        ),
    )


def test_artifact_path_uses_base_name(tmp_path: Path) -> None:
    assert artifact_path("a/b/functions.php", tmp_path, OutputFormat.JSON) == (
        tmp_path / "functions.json"
    )
    assert artifact_path("a/b/pluggable.inc.php", tmp_path, OutputFormat.PHP) == (
        tmp_path / "pluggable.inc.php"
    )


def test_write_json(tmp_path: Path) -> None:
    result = _result("src/functions.php", "a", "b")
    outcome = write(result, tmp_path, OutputFormat.JSON, False)

    assert outcome.status is WriteStatus.WRITTEN
    assert outcome.path == tmp_path / "functions.json"
    assert outcome.record_count == 2
    assert orjson.loads(outcome.path.read_bytes()) == {"function": ["a", "b"]}


def test_write_php(tmp_path: Path) -> None:
    outcome = write(_result("functions.php", "a"), tmp_path, OutputFormat.PHP, True)

    assert outcome.written
    assert outcome.path.read_text(encoding="utf-8").startswith("<?php\n")


def test_empty_result_is_skipped_without_include_empty(tmp_path: Path) -> None:
    outcome = write(_result("empty.php"), tmp_path, OutputFormat.JSON, False)

    assert outcome.status is WriteStatus.SKIPPED
    assert not outcome.written
    assert not (tmp_path / "empty.json").exists()


def test_empty_result_is_written_with_include_empty(tmp_path: Path) -> None:
    outcome = write(_result("empty.php"), tmp_path, OutputFormat.JSON, True)

    assert outcome.written
    assert outcome.record_count == 0
    assert (tmp_path / "empty.json").read_bytes() == b"{}"


def test_write_overwrites_and_keeps_unrelated_files(tmp_path: Path) -> None:
    (tmp_path / "functions.json").write_text("stale", encoding="utf-8")
    (tmp_path / "unrelated.txt").write_text("keep me", encoding="utf-8")

    write(_result("functions.php", "fresh"), tmp_path, OutputFormat.JSON, True)

    assert orjson.loads((tmp_path / "functions.json").read_bytes()) == {
        "function": ["fresh"]
    }
    assert (tmp_path / "unrelated.txt").read_text(encoding="utf-8") == "keep me"


def test_write_failure_names_target(tmp_path: Path) -> None:
    missing_dir = tmp_path / "missing"

    with pytest.raises(ArtifactWriteError) as exc_info:
        write(_result("functions.php", "a"), missing_dir, OutputFormat.JSON, True)

    assert exc_info.value.target_path == missing_dir / "functions.json"
    assert exc_info.value.kind == "write_error"
    assert str(missing_dir / "functions.json") in str(exc_info.value)
