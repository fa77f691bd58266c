"""Symbol models for exclusion lists.

A ``FileResult`` holds every top-level symbol declared in one PHP file, in
declaration order. It is the single representation both output formats are
serialized from.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator

NAMESPACE_SEPARATOR = "\\"


class SymbolKind(str, Enum):
    """Kinds of declarations that end up in an exclusion list.

    Member order is the canonical order kinds are emitted in.
    """

    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"
    FUNCTION = "function"
    CONSTANT = "constant"


class SymbolRecord(BaseModel):
    """A top-level symbol declared in a PHP source file."""

    model_config = ConfigDict(frozen=True)

    kind: SymbolKind
    fully_qualified_name: str = Field(min_length=1)

    @property
    def key(self) -> tuple[SymbolKind, str]:
        return (self.kind, self.fully_qualified_name)


class FileResult(BaseModel):
    """All symbols declared in a single source file."""

    model_config = ConfigDict(frozen=True)

    source_path: str
    records: tuple[SymbolRecord, ...] = Field(default_factory=tuple)

    @model_validator(mode="after")
    def _check_unique(self) -> FileResult:
        seen: set[tuple[SymbolKind, str]] = set()
        for record in self.records:
            if record.key in seen:
                msg = (
                    f"Duplicate {record.kind.value} '{record.fully_qualified_name}' "
                    f"in {self.source_path}"
                )
                raise ValueError(msg)
            seen.add(record.key)
        return self

    @property
    def is_empty(self) -> bool:
        return not self.records

    def names(self, kind: SymbolKind) -> list[str]:
        return [r.fully_qualified_name for r in self.records if r.kind is kind]

    def grouped(self) -> dict[str, list[str]]:
        """Group names by kind, omitting kinds with no names."""
        groups: dict[str, list[str]] = {}
        for kind in SymbolKind:
            names = self.names(kind)
            if names:
                groups[kind.value] = names
        return groups


def qualify(namespace: str, name: str) -> str:
    """Join a namespace and a local name with the PHP namespace separator."""
    name = name.lstrip(NAMESPACE_SEPARATOR)
    namespace = namespace.strip(NAMESPACE_SEPARATOR)
    if not namespace:
        return name
    return f"{namespace}{NAMESPACE_SEPARATOR}{name}"


__all__ = [
    "NAMESPACE_SEPARATOR",
    "FileResult",
    "SymbolKind",
    "SymbolRecord",
    "qualify",
]
