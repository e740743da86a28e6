"""
Web component metadata extraction: visitor, discovery, inheritance,
property/event extractors, tag name resolution and the per-file pipeline.
"""

from .ast_visitor import DispatchCall, RegisterCall, SyntaxFacts, visit_source
from .chain_extractor import Extraction, extract_from_chain
from .discovery import ComponentDiscovery, discover_component_class
from .event_extractor import derive_react_handler, extract_events, extract_events_from_class
from .inheritance import ClassChain, resolve_inheritance_chain
from .mapper import derive_import_path, map_component_model, map_properties_to_attributes
from .parser import (
    NO_CLASS_ERROR,
    WebComponentParser,
    parse_component,
    parse_component_file,
    parse_component_files,
)
from .property_extractor import extract_properties, extract_properties_from_class
from .tagname_resolver import TagNameResolver, resolve_tag_name

__all__ = [
    "DispatchCall",
    "RegisterCall",
    "SyntaxFacts",
    "visit_source",
    "Extraction",
    "extract_from_chain",
    "ComponentDiscovery",
    "discover_component_class",
    "derive_react_handler",
    "extract_events",
    "extract_events_from_class",
    "ClassChain",
    "resolve_inheritance_chain",
    "derive_import_path",
    "map_component_model",
    "map_properties_to_attributes",
    "NO_CLASS_ERROR",
    "WebComponentParser",
    "parse_component",
    "parse_component_file",
    "parse_component_files",
    "extract_properties",
    "extract_properties_from_class",
    "TagNameResolver",
    "resolve_tag_name",
]
