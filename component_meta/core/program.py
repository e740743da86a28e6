"""
Parsed source files and the program that holds them.

A SourceProgram is the set of files one analysis run has looked at. Files
are parsed lazily through the file-access capability and cached by their
canonical path, so following an import into an already-parsed file is free.
"""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from tree_sitter import Node, Tree

from .errors import FileAccessError
from .file_access import DiskFileAccess, FileAccess
from .treesitter.nodes import CLASS_DECLARATION_TYPES, has_keyword_child, node_text
from .treesitter.parser import SOURCE_SUFFIXES, language_for_path, parse_source
from .utils import normalize_path

logger = logging.getLogger(__name__)

DEFAULT_SOURCE_EXTENSIONS = SOURCE_SUFFIXES
CONSTANTS_MODULE_NAME = "constants"


@dataclass(frozen=True, eq=False)
class SourceUnit:
    """One parsed file."""
    path: str
    text: str
    tree: Tree
    language_id: str

    @classmethod
    def from_source(cls, path: str, text: str) -> "SourceUnit":
        canonical = normalize_path(path)
        language_id = language_for_path(canonical)
        return cls(path=canonical, text=text, tree=parse_source(text, language_id), language_id=language_id)

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def directory(self) -> str:
        return posixpath.dirname(self.path)


class ClassNode:
    """
    A class declaration or class expression together with the file it lives
    in. Equality and hashing go by file and position so the same class
    reached through different routes compares equal.
    """

    __slots__ = ("node", "unit")

    def __init__(self, node: Node, unit: SourceUnit):
        self.node = node
        self.unit = unit

    @property
    def key(self) -> Tuple[str, int, int]:
        return self.unit.path, self.node.start_byte, self.node.end_byte

    def __eq__(self, other: object) -> bool:
        return isinstance(other, ClassNode) and self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"ClassNode({self.name or '<anonymous>'} @ {self.unit.path}:{self.node.start_point[0] + 1})"

    @property
    def name(self) -> Optional[str]:
        name_node = self.node.child_by_field_name("name")
        return node_text(name_node) if name_node else None

    @property
    def body(self) -> Optional[Node]:
        return self.node.child_by_field_name("body")

    @property
    def is_declaration(self) -> bool:
        if self.node.type in CLASS_DECLARATION_TYPES:
            return True
        # `export default class Foo {}` may surface as a class expression in value position
        parent = self.node.parent
        return parent is not None and parent.type == "export_statement"

    @property
    def is_default_export(self) -> bool:
        parent = self.node.parent
        return parent is not None and parent.type == "export_statement" and has_keyword_child(parent, "default")

    def text(self) -> str:
        return node_text(self.node)

    def extends_expressions(self) -> List[Node]:
        """Expressions named in the `extends` clause, in source order."""
        expressions: List[Node] = []
        for child in self.node.children:
            if child.type != "class_heritage":
                continue
            clauses = [c for c in child.named_children if c.type == "extends_clause"]
            if clauses:
                for clause in clauses:
                    expressions.extend(clause.children_by_field_name("value"))
            elif node_text(child).startswith("extends"):
                expressions.extend(c for c in child.named_children if c.type != "comment")
        return expressions


class SourceProgram:
    """Lazily parsed, path-keyed collection of SourceUnits."""

    def __init__(
        self,
        file_access: Optional[FileAccess] = None,
        source_extensions: Optional[Sequence[str]] = None,
    ):
        self.file_access = file_access if file_access is not None else DiskFileAccess()
        self.source_extensions = tuple(source_extensions or DEFAULT_SOURCE_EXTENSIONS)
        self._units: Dict[str, Optional[SourceUnit]] = {}

    def canonical(self, path: str) -> str:
        return normalize_path(path)

    def add_source(self, path: str, text: str) -> SourceUnit:
        """Register already-read source text, replacing any cached copy."""
        unit = SourceUnit.from_source(path, text)
        self._units[unit.path] = unit
        return unit

    def load(self, path: str) -> Optional[SourceUnit]:
        """Parse a file, or None when it is missing or unreadable."""
        key = self.canonical(path)
        if key in self._units:
            return self._units[key]
        unit = None
        try:
            text = self.file_access.read(key)
        except (FileAccessError, OSError, UnicodeDecodeError) as e:
            logger.debug(f"Treating {key} as absent: {e}")
        else:
            unit = SourceUnit.from_source(key, text)
        self._units[key] = unit
        return unit

    def read_text(self, path: str) -> Optional[str]:
        try:
            if not self.file_access.exists(path):
                return None
            return self.file_access.read(path)
        except (FileAccessError, OSError, UnicodeDecodeError) as e:
            logger.debug(f"Unable to read {path}: {e}")
            return None

    def exists(self, path: str) -> bool:
        try:
            return self.file_access.exists(path)
        except OSError:
            return False

    def list_dir(self, directory: str) -> List[str]:
        try:
            return list(self.file_access.list(directory))
        except (OSError, AttributeError):
            return []

    def _first_existing(self, candidates: Iterable[str]) -> Optional[str]:
        for candidate in candidates:
            if self.exists(candidate):
                return candidate
        return None

    def resolve_module(
        self,
        from_dir: str,
        specifier: str,
        component_dir: Optional[str] = None,
    ) -> Optional[str]:
        """
        Map a relative module specifier to a concrete file.

        Tries the path as written, then each source extension appended, then
        `index.<ext>` inside it. A specifier ending in `constants` that
        matches nothing falls back to `<componentDir>.constants.<ext>` and
        then to the single `*.constants.<ext>` file in that directory.
        Package specifiers are not resolved.
        """
        if not specifier.startswith("."):
            return None

        resolved = self.canonical(posixpath.join(from_dir, specifier))
        candidates = [resolved]
        candidates.extend(resolved + ext for ext in self.source_extensions)
        candidates.extend(posixpath.join(resolved, "index" + ext) for ext in self.source_extensions)
        logger.debug(f"Module candidates for {specifier!r} from {from_dir}: {candidates}")

        existing = self._first_existing(candidates)
        if existing:
            return existing

        if posixpath.basename(resolved) != CONSTANTS_MODULE_NAME:
            return None

        directory = posixpath.dirname(resolved)
        if component_dir:
            component_name = posixpath.basename(normalize_path(component_dir))
            existing = self._first_existing(
                posixpath.join(directory, f"{component_name}.constants{ext}") for ext in self.source_extensions
            )
            if existing:
                return existing

        suffixes = tuple(f".constants{ext}" for ext in self.source_extensions)
        matches = [entry for entry in self.list_dir(directory) if entry.endswith(suffixes)]
        if len(matches) == 1:
            return posixpath.join(directory, matches[0])
        return None
