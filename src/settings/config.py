from __future__ import annotations

import glob
from pathlib import Path
from typing import Literal

import tomllib
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from excludes.errors import ConfigurationError
from excludes.formats import OutputFormat

CONFIG_FILENAME = "generate-excludes.toml"

_GLOB_CHARS = frozenset("*?[")

DEFAULT_CONFIG = """\
# Configuration for generate-excludes.

# Directory receiving the exclusion lists (default: current working directory).
# output_dir = "excludes"

# Source files, relative to this file. Glob patterns are expanded, and nested
# arrays are flattened one level.
files = []

# "php" for a PHP file returning an array, "json" for a JSON document.
format = "php"

# Write an exclusion list even for files that declare no symbols.
include_empty = true
"""

FileEntry = str | list[str]


class ExcludesConfig(BaseModel):
    """Configuration for exclusion list generation."""

    model_config = ConfigDict(extra="forbid")

    output_dir: str | None = Field(
        default=None,
        description="Output directory (default: current working directory)",
    )
    files: list[FileEntry] = Field(
        default_factory=list,
        description="Source files or glob patterns, nested lists allowed",
    )
    format: Literal["php", "json"] = Field(
        default="php",
        description="Encoding of the generated exclusion lists",
    )
    include_empty: bool = Field(
        default=True,
        description="Write exclusion lists for files without symbols",
    )

    @property
    def output_format(self) -> OutputFormat:
        return OutputFormat(self.format)


class ConfigError(ConfigurationError):
    """Raised when a config file is missing, unparsable or invalid."""


def _resolve_entry(base_dir: Path, entry: str) -> FileEntry:
    """Resolve a file entry against the config directory.

    Glob patterns expand to a sorted list of matching files.
    """
    path = Path(entry).expanduser()
    if not path.is_absolute():
        path = base_dir / path

    if not _GLOB_CHARS.intersection(entry):
        return str(path)

    return sorted(
        match
        for match in glob.glob(str(path), recursive=True)
        if Path(match).is_file()
    )


def resolve_files(config: ExcludesConfig, base_dir: Path) -> list[FileEntry]:
    """Return the config's file entries with paths made absolute."""
    resolved: list[FileEntry] = []
    for entry in config.files:
        if isinstance(entry, str):
            resolved.append(_resolve_entry(base_dir, entry))
        else:
            group: list[str] = []
            for item in entry:
                value = _resolve_entry(base_dir, item)
                group.extend(value if isinstance(value, list) else [value])
            resolved.append(group)
    return resolved


def resolve_output_dir(
    config: ExcludesConfig, base_dir: Path, override: str | None = None
) -> Path:
    """Pick the output directory; ``override`` wins over the config value."""
    if override is not None:
        return Path(override).expanduser().resolve()
    if config.output_dir is None:
        return Path.cwd()
    output_path = Path(config.output_dir).expanduser()
    if not output_path.is_absolute():
        output_path = base_dir / output_path
    return output_path.resolve()


def load_config(path: Path, *, required: bool = False) -> ExcludesConfig:
    """Load configuration from a TOML file.

    A missing file yields the defaults unless ``required`` is set.
    """
    if not path.is_file():
        if required:
            msg = f"Configuration file not found at path [{path}]"
            raise ConfigError(msg)
        return ExcludesConfig()

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read {path}: {e}"
        raise ConfigError(msg) from e

    try:
        return ExcludesConfig.model_validate(data)
    except ValidationError as e:
        msg = f"Invalid config in {path}: {e}"
        raise ConfigError(msg) from e


def write_default_config(path: Path, *, force: bool = False) -> Path:
    """Write the stub configuration file.

    Raises:
        ConfigError: If the file exists and ``force`` is not set, or it
            cannot be written.
    """
    if path.exists() and not force:
        msg = f"Configuration file already exists at path [{path}]"
        raise ConfigError(msg)
    try:
        path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    except OSError as e:
        msg = f"Cannot write {path}: {e}"
        raise ConfigError(msg) from e
    return path
