"""
Tag name resolution.

Three tiers, first success wins:

1. the `@tagname` doc tag on the component class, used verbatim;
2. a `register(...)` call in the component directory's index file, whose
   argument may be a literal, a `constructTagName('x')` call, or an
   identifier followed across relative imports and re-exports;
3. the component file name, kebab-cased and namespaced. This tier never fails.

Namespacing reads `PREFIX` and `SEPARATOR` out of the project's tag-name
constants file by plain text matching.
"""

import logging
import posixpath
import re
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from tree_sitter import Node

from ..config import ComponentMetaConfig
from ..jsdoc import parse_jsdoc
from ..models import TagNameResolution, TagNameSource
from ..program import ClassNode, SourceProgram, SourceUnit
from ..symbols import SymbolResolver, find_variable
from ..treesitter.nodes import call_arguments, doc_comment, literal_value, node_text, unwrap_expression
from ..utils import normalize_path, to_kebab_case
from .ast_visitor import SyntaxFacts, visit_source
from .call_shapes import call_shape, matches_name

logger = logging.getLogger(__name__)

TAGNAME_DOC_TAG = "tagname"
TAG_HELPER_NAME = "constructTagName"

_PREFIX_RE = re.compile(r"PREFIX:\s*['\"]([^'\"]+)['\"]")
_SEPARATOR_RE = re.compile(r"SEPARATOR:\s*['\"]([^'\"]+)['\"]")
_SOURCE_SUFFIX_RE = re.compile(r"\.(t|j)sx?$")

MISSING_ARGUMENT_WARNING = "register() call did not include a tag name argument."
FALLBACK_TAG_NAME = "component"


@dataclass(frozen=True)
class TagNamespace:
    prefix: str
    separator: str


class TagNameResolver:
    def __init__(self, program: SourceProgram, config: Optional[ComponentMetaConfig] = None):
        self.program = program
        self.config = config or ComponentMetaConfig()

    # -- namespace --------------------------------------------------------

    def resolve_namespace(self, component_dir: str) -> Optional[TagNamespace]:
        constants_path = normalize_path(posixpath.join(normalize_path(component_dir), self.config.namespace_constants_path))
        contents = self.program.read_text(constants_path)
        if not contents:
            return None
        prefix = _PREFIX_RE.search(contents)
        separator = _SEPARATOR_RE.search(contents)
        if not prefix or not separator:
            return None
        return TagNamespace(prefix.group(1), separator.group(1))

    def apply_namespace(self, component_dir: str, value: str) -> str:
        normalized = to_kebab_case(value)
        namespace = self.resolve_namespace(component_dir)
        if namespace is None:
            return normalized
        return f"{namespace.prefix}{namespace.separator}{normalized}"

    # -- symbol resolution ------------------------------------------------

    def resolve_initializer(self, node: Optional[Node], component_dir: str) -> Optional[str]:
        """A string literal, or `constructTagName('x')` with namespacing applied."""
        node = unwrap_expression(node)
        if node is None:
            return None
        literal = literal_value(node)
        if isinstance(literal, str):
            return literal
        if node.type == "call_expression" and matches_name(call_shape(node), TAG_HELPER_NAME):
            arguments = call_arguments(node)
            argument = literal_value(arguments[0]) if arguments else None
            if isinstance(argument, str):
                return self.apply_namespace(component_dir, argument)
        return None

    def _symbols(self, component_dir: str) -> SymbolResolver[str]:
        def lookup_constant(unit: SourceUnit, name: str, visited: Set[str]) -> Tuple[bool, Optional[str]]:
            declarator = find_variable(unit, name)
            if declarator is None:
                return False, None
            value = declarator.child_by_field_name("value")
            if value is None:
                return False, None
            return True, self.resolve_initializer(value, component_dir)

        return SymbolResolver(self.program, lookup_constant, component_dir)

    def resolve_identifier_value(self, unit: SourceUnit, name: str, component_dir: str) -> Optional[str]:
        return self._symbols(component_dir).resolve_identifier(unit, name, set())

    # -- tiers ------------------------------------------------------------

    def from_doc_tag(self, class_node: Optional[ClassNode], facts: Optional[SyntaxFacts]) -> Optional[str]:
        if class_node is None:
            return None
        if facts is not None:
            tags = facts.doc_tags_for(class_node)
        else:
            doc = parse_jsdoc(doc_comment(class_node.node))
            tags = doc.tags if doc else ()
        tag = next((t for t in tags if t.name == TAGNAME_DOC_TAG), None)
        if tag is None or not tag.text:
            return None
        return tag.text

    def _load_index(self, component_dir: str) -> Optional[SourceUnit]:
        for file_name in self.config.index_file_names:
            unit = self.program.load(posixpath.join(normalize_path(component_dir), file_name))
            if unit is not None:
                return unit
        return None

    def from_registration_file(self, component_dir: str, class_name: Optional[str]) -> Tuple[Optional[str], List[str]]:
        unit = self._load_index(component_dir)
        if unit is None:
            logger.debug(f"No readable index file in {component_dir}")
            return None, []

        calls = visit_source(unit).register_calls
        if not calls:
            return None, []
        primary = next((call for call in calls if class_name and call.receiver == class_name), calls[0])

        argument = unwrap_expression(primary.argument)
        if argument is None:
            return None, [MISSING_ARGUMENT_WARNING]

        literal = literal_value(argument)
        if isinstance(literal, str):
            return literal or None, []

        if argument.type == "identifier":
            name = node_text(argument)
            resolved = self.resolve_identifier_value(unit, name, component_dir)
            if resolved:
                return resolved, []
            return None, [f"Unable to resolve tag name identifier: {name}"]

        resolved = self.resolve_initializer(argument, component_dir)
        if resolved:
            return resolved, []
        return None, [f"Unsupported register() tag expression: {node_text(argument)}"]

    def from_filename(self, component_file: str, component_dir: str) -> str:
        base = posixpath.basename(normalize_path(component_file))
        base = re.sub(self.config.component_file_suffix_pattern, "", base)
        base = _SOURCE_SUFFIX_RE.sub("", base)
        derived = to_kebab_case(base)
        if not derived:
            derived = to_kebab_case(posixpath.basename(normalize_path(component_dir))) or FALLBACK_TAG_NAME
        return self.apply_namespace(component_dir, derived)

    def resolve(
        self,
        component_file: str,
        component_dir: Optional[str] = None,
        class_node: Optional[ClassNode] = None,
        facts: Optional[SyntaxFacts] = None,
    ) -> TagNameResolution:
        if component_dir is None:
            component_dir = posixpath.dirname(normalize_path(component_file))
        class_name = class_node.name if class_node is not None else None

        doc_tag = self.from_doc_tag(class_node, facts)
        if doc_tag:
            logger.debug(f"Tag name for {class_name} from doc tag: {doc_tag}")
            return TagNameResolution(doc_tag, TagNameSource.DOC_TAG)

        registered, warnings = self.from_registration_file(component_dir, class_name)
        if registered:
            logger.debug(f"Tag name for {class_name} from registration file: {registered}")
            return TagNameResolution(registered, TagNameSource.REGISTRATION_FILE, tuple(warnings))

        tag_name = self.from_filename(component_file, component_dir)
        logger.debug(f"Tag name for {class_name} from file name: {tag_name}")
        return TagNameResolution(tag_name, TagNameSource.FILENAME, tuple(warnings))


def resolve_tag_name(
    program: SourceProgram,
    component_file: str,
    class_node: Optional[ClassNode] = None,
    facts: Optional[SyntaxFacts] = None,
    config: Optional[ComponentMetaConfig] = None,
) -> TagNameResolution:
    return TagNameResolver(program, config).resolve(component_file, class_node=class_node, facts=facts)
