"""
Per-file component pipeline.

visit -> discover -> tag name -> inheritance chain -> properties and events
-> ComponentModel. Every stage reports through warnings and errors on the
returned ParseResult; nothing here raises for missing or malformed input.
"""

import logging
from typing import Dict, Iterable, Optional

from ..config import ComponentMetaConfig
from ..file_access import FileAccess
from ..models import ClassSource, TagNameResult
from ..program import ClassNode, SourceProgram, SourceUnit
from ..result import AggregateResult, ParseResult, aggregate_results, merge_diagnostics
from ..type_resolver import TypeResolver
from ..utils import normalize_path
from .ast_visitor import SyntaxFacts, visit_source
from .discovery import discover_component_class
from .event_extractor import extract_events
from .inheritance import resolve_inheritance_chain
from .mapper import map_component_model
from .property_extractor import extract_properties
from .tagname_resolver import TagNameResolver

logger = logging.getLogger(__name__)

NO_CLASS_ERROR = "No class declaration found in component source file."


def parse_component(
    unit: SourceUnit,
    program: Optional[SourceProgram] = None,
    config: Optional[ComponentMetaConfig] = None,
) -> ParseResult:
    config = config or ComponentMetaConfig()
    if program is None:
        program = SourceProgram(source_extensions=config.source_extensions)

    facts = visit_source(unit)
    discovery = discover_component_class(facts)
    if discovery is None:
        return ParseResult(value=None, errors=(NO_CLASS_ERROR,))

    class_node = discovery.class_node
    tag_name = TagNameResolver(program, config).resolve(
        unit.path, unit.directory, class_node=class_node, facts=facts
    )

    type_resolver = TypeResolver(program)
    chain = resolve_inheritance_chain(class_node, type_resolver)

    facts_by_unit: Dict[str, SyntaxFacts] = {unit.path: facts}

    def facts_for(member: ClassNode) -> SyntaxFacts:
        path = member.unit.path
        if path not in facts_by_unit:
            facts_by_unit[path] = visit_source(member.unit)
        return facts_by_unit[path]

    properties = extract_properties(chain.classes, type_resolver)
    events = extract_events(chain.classes, facts_for)

    model = map_component_model(
        class_name=class_node.name,
        tag_name=tag_name.tag_name,
        file_path=unit.path,
        component_dir=unit.directory,
        props=properties.items,
        events=events.items,
        import_marker=config.import_marker,
    )

    strict_errors = []
    if config.strict and chain.unresolved:
        strict_errors.append(f"Unable to resolve base classes for: {', '.join(chain.unresolved)}")

    result = ParseResult(
        value=model,
        class_source=ClassSource(discovery.method, unit.path),
        tag_name_result=TagNameResult(tag_name.tag_name, tag_name.source),
    )
    result = merge_diagnostics(result, tag_name, chain, properties, events, {"errors": strict_errors})
    logger.info(
        f"Parsed {model.class_name} <{model.tag_name}> from {unit.path}: "
        f"{len(model.props)} properties, {len(model.events)} events"
    )
    return result


def parse_component_file(
    path: str,
    file_access: Optional[FileAccess] = None,
    config: Optional[ComponentMetaConfig] = None,
    program: Optional[SourceProgram] = None,
) -> ParseResult:
    config = config or ComponentMetaConfig()
    if program is None:
        program = SourceProgram(file_access, config.source_extensions)
    unit = program.load(path)
    if unit is None:
        return ParseResult(value=None, errors=(f"Unable to read component file: {normalize_path(path)}",))
    return parse_component(unit, program, config)


def parse_component_files(
    paths: Iterable[str],
    file_access: Optional[FileAccess] = None,
    config: Optional[ComponentMetaConfig] = None,
) -> AggregateResult:
    """Parse several files against one shared SourceProgram."""
    config = config or ComponentMetaConfig()
    program = SourceProgram(file_access, config.source_extensions)
    return aggregate_results(parse_component_file(path, config=config, program=program) for path in paths)


class WebComponentParser:
    """Parser strategy for declarative web components."""

    def __init__(self, config: Optional[ComponentMetaConfig] = None, file_access: Optional[FileAccess] = None):
        self.config = config or ComponentMetaConfig()
        self.program = SourceProgram(file_access, self.config.source_extensions)

    def parse_file(self, path: str) -> ParseResult:
        return parse_component_file(path, config=self.config, program=self.program)

    def parse_source(self, path: str, text: str) -> ParseResult:
        return parse_component(self.program.add_source(path, text), self.program, self.config)

    def parse_files(self, paths: Iterable[str]) -> AggregateResult:
        return aggregate_results(self.parse_file(path) for path in paths)
