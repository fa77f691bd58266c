"""Tree-sitter based collection of top-level PHP declarations."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from excludes.models import FileResult, SymbolKind, SymbolRecord, qualify

if TYPE_CHECKING:
    from tree_sitter import Node, Tree

_DECLARATION_KINDS: dict[str, SymbolKind] = {
    "class_declaration": SymbolKind.CLASS,
    "enum_declaration": SymbolKind.CLASS,
    "interface_declaration": SymbolKind.INTERFACE,
    "trait_declaration": SymbolKind.TRAIT,
    "function_definition": SymbolKind.FUNCTION,
}

# Scopes whose contents are never top-level: class bodies (including
# anonymous classes) and closures.
_OPAQUE_NODE_TYPES = frozenset(
    {
        "declaration_list",
        "anonymous_function",
        "anonymous_function_creation_expression",
        "arrow_function",
        "anonymous_class",
    }
)

_SINGLE_QUOTED_ESCAPE = re.compile(r"\\([\\'])")
_DOUBLE_QUOTED_ESCAPE = re.compile(r"\\([\\\"$])")
_INTERPOLATION = re.compile(r"(?<!\\)(?:\\\\)*\$")


@dataclass
class _ScanState:
    namespace: str = ""
    records: list[SymbolRecord] = field(default_factory=list)
    seen: set[tuple[SymbolKind, str]] = field(default_factory=set)

    def add(self, kind: SymbolKind, name: str, *, qualified: bool = False) -> None:
        fqn = qualify("", name) if qualified else qualify(self.namespace, name)
        if not fqn or (kind, fqn) in self.seen:
            return
        self.seen.add((kind, fqn))
        self.records.append(SymbolRecord(kind=kind, fully_qualified_name=fqn))


def _node_text(node: Node | None) -> str:
    if node is None or not node.text:
        return ""
    return node.text.decode("utf8", errors="replace")


def _string_literal_value(node: Node) -> str | None:
    """Return the value of a plain PHP string literal, or None.

    Double-quoted strings with interpolation are not literals.
    """
    if node.type not in ("string", "encapsed_string"):
        return None

    raw = _node_text(node)
    if raw[:1] in ("b", "B"):
        raw = raw[1:]
    if len(raw) < 2 or raw[0] != raw[-1]:
        return None

    quote, body = raw[0], raw[1:-1]
    if quote == "'":
        return _SINGLE_QUOTED_ESCAPE.sub(r"\1", body)
    if quote == '"':
        if _INTERPOLATION.search(body):
            return None
        return _DOUBLE_QUOTED_ESCAPE.sub(r"\1", body)
    return None


def _handle_namespace(node: Node, state: _ScanState) -> None:
    """Process a namespace definition.

    ``namespace Foo { ... }`` scopes only its body; ``namespace Foo;`` applies
    to every following statement until the next namespace definition.
    """
    name = _node_text(node.child_by_field_name("name"))
    body = node.child_by_field_name("body")
    if body is None:
        state.namespace = name
        return

    outer = state.namespace
    state.namespace = name
    _traverse_children(body, state)
    state.namespace = outer


def _handle_declaration(node: Node, state: _ScanState) -> None:
    name = _node_text(node.child_by_field_name("name"))
    if name:
        state.add(_DECLARATION_KINDS[node.type], name)


def _handle_const_declaration(node: Node, state: _ScanState) -> None:
    """Emit one constant per element of ``const A = 1, B = 2;``."""
    for element in node.named_children:
        if element.type != "const_element":
            continue
        name_node = next(
            (child for child in element.named_children if child.type == "name"),
            None,
        )
        name = _node_text(name_node)
        if name:
            state.add(SymbolKind.CONSTANT, name)


def _handle_function_call(node: Node, state: _ScanState) -> None:
    """Record ``define('NAME', ...)`` calls with a literal constant name."""
    function = node.child_by_field_name("function")
    if _node_text(function).lstrip("\\").lower() != "define":
        return

    arguments = node.child_by_field_name("arguments")
    if arguments is None:
        return
    first = next(
        (child for child in arguments.named_children if child.type == "argument"),
        None,
    )
    if first is None or not first.named_children:
        return

    value = _string_literal_value(first.named_children[-1])
    if value:
        state.add(SymbolKind.CONSTANT, value, qualified=True)


def _scan_statement(node: Node, state: _ScanState) -> None:
    """Collect declarations reachable from one statement at file or namespace scope.

    Uses an explicit stack: deeply nested expressions (long string
    concatenations) exceed Python's recursion limit.
    """
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type in _OPAQUE_NODE_TYPES:
            continue

        if current.type in _DECLARATION_KINDS:
            # Bodies of classes and functions never contain top-level symbols.
            _handle_declaration(current, state)
            continue

        if current.type == "const_declaration":
            _handle_const_declaration(current, state)
            continue

        if current.type == "function_call_expression":
            _handle_function_call(current, state)

        stack.extend(reversed(current.children))


def _traverse_children(node: Node, state: _ScanState) -> None:
    """Scan the statements of a file or namespace body in source order."""
    for child in node.children:
        if child.type == "namespace_definition":
            _handle_namespace(child, state)
        else:
            _scan_statement(child, state)


def collect_symbols(tree: Tree, source_path: str) -> FileResult:
    """Collect every top-level declaration of a parsed PHP file.

    Conditional declarations (inside ``if`` blocks and the like at file or
    namespace scope) count as declared. Records keep declaration order and a
    symbol declared twice is kept at its first occurrence.

    Args:
        tree: Syntax tree produced by a ``SourceParser``
        source_path: Path of the parsed file, stored on the result

    Returns:
        FileResult with the file's symbol records.
    """
    state = _ScanState()
    _traverse_children(tree.root_node, state)
    return FileResult(source_path=source_path, records=tuple(state.records))


__all__ = ["collect_symbols"]
