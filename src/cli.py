"""Command-line interface for generate-excludes."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from excludes.batch import BatchReport, run
from excludes.errors import ConfigurationError, OutputDirectoryError
from excludes.formats import OutputFormat
from settings.config import (
    CONFIG_FILENAME,
    ExcludesConfig,
    load_config,
    resolve_files,
    resolve_output_dir,
    write_default_config,
)
from verify.verify import verify_excludes

_LOGGERS = ("excludes", "parse", "settings", "verify")


def _add_generation_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "files",
        nargs="*",
        help="Source files, appended to the files from the config file",
    )
    parser.add_argument(
        "--config",
        default=None,
        help=f"Path to a config file (default: ./{CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--out",
        default=None,
        help="Output directory (takes precedence over the config file)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Dump the excludes as JSON",
    )
    parser.add_argument(
        "--exclude-empty",
        action="store_true",
        help="Only dump files declaring at least one class, interface, trait, "
        "function or constant",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose (debug) output",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="generate-excludes")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Generate exclusion lists")
    _add_generation_options(run_parser)

    verify_parser = subparsers.add_parser(
        "verify", help="Check that exclusion lists are up to date"
    )
    _add_generation_options(verify_parser)

    config_parser = subparsers.add_parser(
        "generate-config", help="Write a default config file"
    )
    config_parser.add_argument(
        "--path",
        default=CONFIG_FILENAME,
        help=f"Where to write the config file (default: ./{CONFIG_FILENAME})",
    )
    config_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing config file",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.WARNING, format="%(message)s")
    if verbose:
        for name in _LOGGERS:
            logging.getLogger(name).setLevel(logging.DEBUG)


def _load(args: argparse.Namespace) -> tuple[ExcludesConfig, list[object], Path]:
    if args.config is None:
        config_path = Path.cwd() / CONFIG_FILENAME
        config = load_config(config_path)
    else:
        config_path = Path(args.config).expanduser().resolve()
        config = load_config(config_path, required=True)

    base_dir = config_path.parent
    files: list[object] = [*resolve_files(config, base_dir), *args.files]
    output_dir = resolve_output_dir(config, base_dir, args.out)
    return config, files, output_dir


def _options(
    config: ExcludesConfig, args: argparse.Namespace
) -> tuple[OutputFormat, bool]:
    fmt = OutputFormat.JSON if args.json else config.output_format
    include_empty = config.include_empty and not args.exclude_empty
    return fmt, include_empty


def _print_report(report: BatchReport) -> None:
    if report.nothing_to_do:
        sys.stdout.write("No files found. Nothing to do.\n")
        return

    for failure in report.failures:
        sys.stderr.write(
            f"{failure.source_path}: {failure.error_kind}: {failure.message}\n"
        )

    noun = "file" if report.processed == 1 else "files"
    sys.stdout.write(
        f"Processed {report.processed} {noun} into {report.output_dir}: "
        f"{report.written} written, {report.skipped} skipped, "
        f"{report.failed} failed.\n"
    )


def _handle_run(args: argparse.Namespace) -> int:
    try:
        config, files, output_dir = _load(args)
        fmt, include_empty = _options(config, args)
        report = run(files, output_dir, fmt, include_empty)
    except (ConfigurationError, OutputDirectoryError) as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2

    _print_report(report)
    return report.exit_code


def _handle_verify(args: argparse.Namespace) -> int:
    try:
        config, files, output_dir = _load(args)
        fmt, include_empty = _options(config, args)
        result = verify_excludes(files, output_dir, fmt, include_empty)
    except ConfigurationError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 2
    except (FileNotFoundError, NotADirectoryError) as exc:
        sys.stderr.write(f"out: {output_dir}\n")
        sys.stderr.write(f"error: {exc}\n")
        return 2

    if not result.ok:
        for label, paths in (
            ("missing", result.missing),
            ("stale", result.stale),
            ("failed", result.failed),
        ):
            for path in paths:
                sys.stderr.write(f"{label}: {path}\n")
        return 1
    return 0


def _handle_generate_config(args: argparse.Namespace) -> int:
    path = Path(args.path).expanduser()
    try:
        write_default_config(path, force=args.force)
    except ConfigurationError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return 1
    sys.stdout.write(f"Wrote {path}\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    _configure_logging(getattr(args, "verbose", False))

    if args.command == "run":
        return _handle_run(args)

    if args.command == "verify":
        return _handle_verify(args)

    if args.command == "generate-config":
        return _handle_generate_config(args)

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
