"""
Cross-module symbol resolution.

Follows an identifier from its use site to whatever declares it: a local
top-level declaration, a named import from a relative module, a same-file
`export { local as name }`, a forwarding `export { a as b } from`, or an
`export * from`. What counts as "found" in a file is left to a caller-supplied
lookup, so the same walk serves tag-name constants and base-class lookups.

Every call threads an explicit visited set of canonical file paths; a file
already on the set fails that branch immediately, which keeps cyclic
re-export graphs finite.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Generic, Iterator, List, Optional, Set, Tuple, TypeVar

from tree_sitter import Node

from .program import SourceProgram, SourceUnit
from .treesitter.nodes import (
    CLASS_DECLARATION_TYPES,
    has_keyword_child,
    is_string_literal,
    node_text,
    string_value,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

LookupLocal = Callable[[SourceUnit, str, Set[str]], Tuple[bool, Optional[T]]]

DECLARATION_TYPES = CLASS_DECLARATION_TYPES | {
    "function_declaration",
    "generator_function_declaration",
    "type_alias_declaration",
    "interface_declaration",
    "enum_declaration",
}
VARIABLE_DECLARATION_TYPES = {"lexical_declaration", "variable_declaration"}
TYPE_DECLARATION_TYPES = {"type_alias_declaration", "interface_declaration"}


@dataclass(frozen=True)
class ImportBinding:
    """A local name introduced by an import statement."""
    local: str
    imported: str  # exported name, "default", or "*" for namespace imports
    specifier: str

    @property
    def is_relative(self) -> bool:
        return self.specifier.startswith(".")


def _module_name(node: Optional[Node]) -> str:
    if node is None:
        return ""
    return string_value(node) if is_string_literal(node) else node_text(node)


def top_level_declarations(unit: SourceUnit) -> Iterator[Node]:
    """Top-level declaration nodes, unwrapping `export` statements."""
    for statement in unit.root.named_children:
        if statement.type == "export_statement":
            declaration = statement.child_by_field_name("declaration")
            if declaration is not None:
                yield declaration
            continue
        if statement.type in DECLARATION_TYPES or statement.type in VARIABLE_DECLARATION_TYPES:
            yield statement


def variable_declarators(container: Node) -> Iterator[Node]:
    for child in container.named_children:
        if child.type == "variable_declarator":
            yield child


def find_variable(unit: SourceUnit, name: str) -> Optional[Node]:
    """The first top-level `const`/`let`/`var` declarator binding `name`."""
    for declaration in top_level_declarations(unit):
        if declaration.type not in VARIABLE_DECLARATION_TYPES:
            continue
        for declarator in variable_declarators(declaration):
            name_node = declarator.child_by_field_name("name")
            if name_node is not None and name_node.type == "identifier" and node_text(name_node) == name:
                return declarator
    return None


def find_declaration(
    unit: SourceUnit,
    name: str,
    value_only: bool = False,
    type_only: bool = False,
) -> Optional[Node]:
    """
    The top-level declaration binding `name`: a class, function, type alias,
    interface, enum or variable declarator. `default` finds the default export.

    A class and an interface may share a name. `value_only` skips interfaces
    and type aliases; `type_only` considers nothing else.
    """
    if name == "default":
        return find_default_export(unit)
    for declaration in top_level_declarations(unit):
        if value_only and declaration.type in TYPE_DECLARATION_TYPES:
            continue
        if type_only and declaration.type not in TYPE_DECLARATION_TYPES:
            continue
        if declaration.type in VARIABLE_DECLARATION_TYPES:
            for declarator in variable_declarators(declaration):
                name_node = declarator.child_by_field_name("name")
                if name_node is not None and node_text(name_node) == name:
                    return declarator
            continue
        name_node = declaration.child_by_field_name("name")
        if name_node is not None and node_text(name_node) == name:
            return declaration
    return None


def find_default_export(unit: SourceUnit) -> Optional[Node]:
    for statement in unit.root.named_children:
        if statement.type != "export_statement" or not has_keyword_child(statement, "default"):
            continue
        return statement.child_by_field_name("declaration") or statement.child_by_field_name("value")
    return None


def import_bindings(unit: SourceUnit) -> Dict[str, ImportBinding]:
    bindings: Dict[str, ImportBinding] = {}
    for statement in unit.root.named_children:
        if statement.type != "import_statement":
            continue
        specifier = _module_name(statement.child_by_field_name("source"))
        for clause in statement.named_children:
            if clause.type != "import_clause":
                continue
            for item in clause.named_children:
                if item.type == "identifier":
                    local = node_text(item)
                    bindings.setdefault(local, ImportBinding(local, "default", specifier))
                elif item.type == "namespace_import":
                    name_node = next((c for c in item.named_children if c.type == "identifier"), None)
                    if name_node is not None:
                        local = node_text(name_node)
                        bindings.setdefault(local, ImportBinding(local, "*", specifier))
                elif item.type == "named_imports":
                    for spec in item.named_children:
                        if spec.type != "import_specifier":
                            continue
                        name_node = spec.child_by_field_name("name")
                        alias_node = spec.child_by_field_name("alias")
                        if name_node is None:
                            continue
                        imported = _module_name(name_node)
                        local = node_text(alias_node) if alias_node is not None else imported
                        bindings.setdefault(local, ImportBinding(local, imported, specifier))
    return bindings


def find_named_import(unit: SourceUnit, name: str) -> Optional[ImportBinding]:
    binding = import_bindings(unit).get(name)
    if binding is None or binding.imported in {"default", "*"}:
        return None
    return binding


@dataclass(frozen=True)
class ExportSpecifier:
    local: str
    exported: str


@dataclass(frozen=True)
class ExportEntry:
    """An `export` statement that names other bindings rather than declaring one."""
    specifier: Optional[str]
    names: Optional[Tuple[ExportSpecifier, ...]]  # None for `export * from`
    namespace: Optional[str] = None  # `export * as ns from`

    def find(self, exported: str) -> Optional[ExportSpecifier]:
        return next((spec for spec in self.names or () if spec.exported == exported), None)


def export_entries(unit: SourceUnit) -> List[ExportEntry]:
    entries: List[ExportEntry] = []
    for statement in unit.root.named_children:
        if statement.type != "export_statement":
            continue
        if statement.child_by_field_name("declaration") is not None:
            continue
        if has_keyword_child(statement, "default"):
            continue
        source = statement.child_by_field_name("source")
        specifier = _module_name(source) if source is not None else None
        clause = next((c for c in statement.named_children if c.type == "export_clause"), None)
        namespace = next((c for c in statement.named_children if c.type == "namespace_export"), None)
        if clause is not None:
            names = []
            for spec in clause.named_children:
                if spec.type != "export_specifier":
                    continue
                name_node = spec.child_by_field_name("name")
                alias_node = spec.child_by_field_name("alias")
                if name_node is None:
                    continue
                local = _module_name(name_node)
                exported = _module_name(alias_node) if alias_node is not None else local
                names.append(ExportSpecifier(local=local, exported=exported))
            entries.append(ExportEntry(specifier=specifier, names=tuple(names)))
        elif namespace is not None:
            ns_name = next((c for c in namespace.named_children if c.type != "comment"), None)
            entries.append(ExportEntry(specifier=specifier, names=(), namespace=_module_name(ns_name)))
        elif specifier is not None:
            entries.append(ExportEntry(specifier=specifier, names=None))
    return entries


class SymbolResolver(Generic[T]):
    """
    Resolves names across relative imports and re-exports.

    `lookup_local(unit, name, visited)` decides what a local match means. It
    returns `(found, value)`; a found match ends the search in that file even
    when the value is None.
    """

    def __init__(
        self,
        program: SourceProgram,
        lookup_local: LookupLocal,
        component_dir: Optional[str] = None,
    ):
        self.program = program
        self.lookup_local = lookup_local
        self.component_dir = component_dir

    def resolve_identifier(self, unit: SourceUnit, name: str, visited: Optional[Set[str]] = None) -> Optional[T]:
        if visited is None:
            visited = set()
        found, value = self.lookup_local(unit, name, visited)
        if found:
            return value

        binding = find_named_import(unit, name)
        if binding is None:
            return None
        if not binding.is_relative:
            logger.debug(f"Not following package import {binding.specifier!r} for {name}")
            return None
        target = self.program.resolve_module(unit.directory, binding.specifier, self.component_dir)
        if target is None:
            logger.debug(f"Unable to locate module {binding.specifier!r} imported in {unit.path}")
            return None
        return self.resolve_export(target, binding.imported, visited)

    def resolve_export(self, path: str, export_name: str, visited: Set[str]) -> Optional[T]:
        key = self.program.canonical(path)
        if key in visited:
            logger.debug(f"Already visited {key} while resolving {export_name}")
            return None
        visited.add(key)

        unit = self.program.load(key)
        if unit is None:
            return None

        found, value = self.lookup_local(unit, export_name, visited)
        if found:
            return value

        for entry in export_entries(unit):
            if entry.specifier is None:
                match = entry.find(export_name)
                if match is None:
                    continue
                resolved = self.resolve_identifier(unit, match.local, visited)
                if resolved is not None:
                    return resolved
                continue

            if entry.namespace is not None:
                continue
            target = self.program.resolve_module(unit.directory, entry.specifier, self.component_dir)
            if target is None:
                continue

            if entry.names is None:
                resolved = self.resolve_export(target, export_name, visited)
            else:
                match = entry.find(export_name)
                if match is None:
                    continue
                resolved = self.resolve_export(target, match.local, visited)
            if resolved is not None:
                return resolved

        return None
