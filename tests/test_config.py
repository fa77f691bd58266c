from __future__ import annotations

from pathlib import Path

import pytest

from excludes.errors import ConfigurationError
from excludes.formats import OutputFormat
from settings.config import (
    CONFIG_FILENAME,
    ConfigError,
    ExcludesConfig,
    load_config,
    resolve_files,
    resolve_output_dir,
    write_default_config,
)


def _write_config(root: Path, toml_content: str) -> Path:
    path = root / CONFIG_FILENAME
    path.write_text(toml_content, encoding="utf-8")
    return path


def test_missing_default_config_yields_defaults(tmp_path: Path) -> None:
    config = load_config(tmp_path / CONFIG_FILENAME)

    assert config == ExcludesConfig()
    assert config.output_format is OutputFormat.PHP
    assert config.include_empty is True


def test_missing_required_config_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Configuration file not found"):
        load_config(tmp_path / "custom.toml", required=True)


def test_config_error_is_a_configuration_error() -> None:
    assert issubclass(ConfigError, ConfigurationError)


def test_valid_config_accepted(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        """
output_dir = "excludes"
files = ["src/a.php", ["src/b.php", "src/c.php"]]
format = "json"
include_empty = false
""".strip(),
    )

    config = load_config(path)

    assert config.output_dir == "excludes"
    assert config.files == ["src/a.php", ["src/b.php", "src/c.php"]]
    assert config.output_format is OutputFormat.JSON
    assert config.include_empty is False


def test_unknown_key_rejected(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "bogus_key = true")

    with pytest.raises(ConfigError, match="Invalid config"):
        load_config(path)


def test_unknown_format_rejected(tmp_path: Path) -> None:
    path = _write_config(tmp_path, 'format = "yaml"')

    with pytest.raises(ConfigError):
        load_config(path)


def test_invalid_files_shape_rejected(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "files = 3")

    with pytest.raises(ConfigError):
        load_config(path)


def test_invalid_toml_rejected(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "files = [")

    with pytest.raises(ConfigError, match="Invalid TOML"):
        load_config(path)


def test_resolve_files_relative_to_config_dir(tmp_path: Path) -> None:
    config = ExcludesConfig(files=["src/a.php", ["src/b.php"], "/abs/c.php"])

    assert resolve_files(config, tmp_path) == [
        str(tmp_path / "src" / "a.php"),
        [str(tmp_path / "src" / "b.php")],
        "/abs/c.php",
    ]


def test_resolve_files_expands_globs_sorted(tmp_path: Path) -> None:
    src = tmp_path / "src"
    (src / "nested").mkdir(parents=True)
    for name in ("b.php", "a.php", "nested/c.php", "readme.md"):
        (src / name).write_text("<?php\n", encoding="utf-8")
    config = ExcludesConfig(files=["src/*.php", ["src/**/*.php"]])

    resolved = resolve_files(config, tmp_path)

    assert resolved == [
        [str(src / "a.php"), str(src / "b.php")],
        [str(src / "a.php"), str(src / "b.php"), str(src / "nested" / "c.php")],
    ]


def test_resolve_output_dir_precedence(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.chdir(tmp_path)
    config_dir = tmp_path / "project"

    assert resolve_output_dir(ExcludesConfig(), config_dir) == Path.cwd()
    assert resolve_output_dir(ExcludesConfig(output_dir="out"), config_dir) == (
        config_dir / "out"
    ).resolve()
    assert resolve_output_dir(
        ExcludesConfig(output_dir="out"), config_dir, override="cli-out"
    ) == (tmp_path / "cli-out").resolve()


def test_write_default_config_round_trips(tmp_path: Path) -> None:
    path = write_default_config(tmp_path / CONFIG_FILENAME)

    assert load_config(path) == ExcludesConfig()


def test_write_default_config_refuses_overwrite(tmp_path: Path) -> None:
    path = _write_config(tmp_path, 'format = "json"')

    with pytest.raises(ConfigError, match="already exists"):
        write_default_config(path)

    write_default_config(path, force=True)
    assert load_config(path).format == "php"
