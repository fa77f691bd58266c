"""Serializers for the two exclusion list encodings."""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

import orjson

if TYPE_CHECKING:
    from collections.abc import Callable

    from excludes.models import FileResult

_INDENT = "    "


class OutputFormat(str, Enum):
    """On-disk encodings for exclusion lists."""

    PHP = "php"
    JSON = "json"

    @property
    def extension(self) -> str:
        return self.value


def dump_json(result: FileResult) -> bytes:
    """Encode names grouped by kind as a compact JSON object.

    Keys are sorted and kinds without names are omitted, so an empty
    result encodes as ``{}``.
    """
    return orjson.dumps(result.grouped(), option=orjson.OPT_SORT_KEYS)


def _php_string(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace("'", "\\'")
    return f"'{escaped}'"


def dump_php(result: FileResult) -> bytes:
    """Encode names grouped by kind as a PHP file returning an array.

    The file can be loaded with ``require`` and needs no further parsing.
    """
    groups = result.grouped()
    if not groups:
        return b"<?php\n\nreturn [];\n"

    lines = ["<?php", "", "return ["]
    for kind, names in groups.items():
        lines.append(f"{_INDENT}{_php_string(kind)} => [")
        lines.extend(f"{_INDENT * 2}{_php_string(name)}," for name in names)
        lines.append(f"{_INDENT}],")
    lines.append("];")
    return ("\n".join(lines) + "\n").encode("utf-8")


_SERIALIZERS: dict[OutputFormat, Callable[[FileResult], bytes]] = {
    OutputFormat.PHP: dump_php,
    OutputFormat.JSON: dump_json,
}


def serialize(result: FileResult, fmt: OutputFormat) -> bytes:
    return _SERIALIZERS[OutputFormat(fmt)](result)


__all__ = ["OutputFormat", "dump_json", "dump_php", "serialize"]
