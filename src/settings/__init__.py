"""Configuration loading for generate-excludes."""

from settings.config import (
    CONFIG_FILENAME,
    ConfigError,
    ExcludesConfig,
    load_config,
    resolve_files,
    resolve_output_dir,
    write_default_config,
)

__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "ExcludesConfig",
    "load_config",
    "resolve_files",
    "resolve_output_dir",
    "write_default_config",
]
