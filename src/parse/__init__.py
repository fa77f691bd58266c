"""PHP parsing and symbol collection."""

from parse.parser import PhpParser, SourceParser, read_source
from parse.treesitter_symbols import collect_symbols

__all__ = [
    "PhpParser",
    "SourceParser",
    "collect_symbols",
    "read_source",
]
