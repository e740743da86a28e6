"""
component-meta: static metadata extraction for TypeScript web components.
"""

from .core import (
    ComponentMetaConfig,
    ComponentModel,
    ParseResult,
    create_parser,
    get_language_from_extension,
    load_config,
    parse_component_file,
    parse_component_files,
    parse_file,
)

__version__ = "0.1.0"

__all__ = [
    "ComponentMetaConfig",
    "ComponentModel",
    "ParseResult",
    "create_parser",
    "get_language_from_extension",
    "load_config",
    "parse_component_file",
    "parse_component_files",
    "parse_file",
    "__version__",
]
