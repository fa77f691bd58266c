"""Tree-sitter backed PHP parser."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from tree_sitter import Language, Node, Parser, Tree
from tree_sitter_php import language_php

from excludes.errors import ParseError, SourceReadError

if TYPE_CHECKING:
    from pathlib import Path

_LANGUAGE: Language | None = None


class SourceParser(Protocol):
    """Anything that turns PHP source bytes into a syntax tree."""

    def parse(self, source: bytes, source_path: str) -> Tree: ...


def _get_language() -> Language:
    global _LANGUAGE
    if _LANGUAGE is None:
        _LANGUAGE = Language(language_php())
    return _LANGUAGE


def _first_error_position(node: Node) -> tuple[int, int]:
    """Return the 1-based (line, column) of the first ERROR or MISSING node."""
    while node.type != "ERROR" and not node.is_missing:
        child = next(
            (c for c in node.children if c.has_error or c.is_missing), None
        )
        if child is None:
            break
        node = child
    return node.start_point[0] + 1, node.start_point[1] + 1


class PhpParser:
    """Parses PHP files (including inline HTML around ``<?php`` tags)."""

    def __init__(self) -> None:
        self._parser = Parser(_get_language())

    def parse(self, source: bytes, source_path: str = "<string>") -> Tree:
        """Parse ``source`` and reject trees that contain syntax errors.

        Raises:
            ParseError: If tree-sitter had to recover from malformed input.
        """
        tree = self._parser.parse(source)
        if tree.root_node.has_error:
            line, column = _first_error_position(tree.root_node)
            raise ParseError(source_path, line, column)
        return tree


def read_source(path: Path) -> bytes:
    """Read a source file, mapping OS failures to ``SourceReadError``."""
    try:
        return path.read_bytes()
    except OSError as exc:
        raise SourceReadError(str(path), exc.strerror or str(exc)) from exc


__all__ = ["PhpParser", "SourceParser", "read_source"]
