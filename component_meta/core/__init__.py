"""
Unified interface for component metadata extraction.

This module provides a small, consistent API for turning TypeScript/JavaScript
web component sources into ComponentModels, hiding the visitor, resolver and
extractor modules underneath.

Key Features:
- Language detection from file extensions
- Factory for a configured parser
- File and multi-file parse entry points
- Clean imports for models, results and utilities
"""

from pathlib import Path
from typing import Optional, Union

from .config import ComponentMetaConfig, load_config
from .errors import ComponentMetaError, FileAccessError, UnsupportedLanguageError
from .file_access import DiskFileAccess, FileAccess, MemoryFileAccess
from .logging_utils import configure_logging
from .models import (
    AttributeDescriptor,
    ClassSource,
    ComponentModel,
    DiscoveryMethod,
    EventDescriptor,
    PropertyDescriptor,
    PropertyType,
    PropertyVisibility,
    TagNameResolution,
    TagNameResult,
    TagNameSource,
)
from .program import ClassNode, SourceProgram, SourceUnit
from .result import (
    AggregateResult,
    ParseResult,
    Result,
    add_error,
    add_warning,
    aggregate_results,
    create_result,
    merge_diagnostics,
)
from .treesitter.parser import LANGUAGE_BY_SUFFIX
from .type_resolver import TypeResolver
from .utils import (
    kebab_to_title_case,
    merge_by_key,
    normalize_path,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    upper_case_first_character,
)
from .webcomponent import WebComponentParser, parse_component, parse_component_file, parse_component_files

# Type alias for file paths
FilePath = Union[str, Path]


def get_language_from_extension(file_path: FilePath) -> str:
    """
    Detect the tree-sitter language id from a file extension.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        Language id ('typescript' or 'tsx')

    Raises:
        UnsupportedLanguageError: If the file extension is not supported
    """
    extension = Path(file_path).suffix.lower()
    try:
        return LANGUAGE_BY_SUFFIX[extension]
    except KeyError:
        raise UnsupportedLanguageError(f"Unsupported file extension: {extension}") from None


def create_parser(
    config: Optional[ComponentMetaConfig] = None,
    file_access: Optional[FileAccess] = None,
    setup_logging: bool = False,
) -> WebComponentParser:
    """
    Create a WebComponentParser sharing one SourceProgram across files.

    Args:
        config: Resolved configuration; defaults apply when omitted
        file_access: File-access capability; the real filesystem when omitted
        setup_logging: Attach console logging at `config.log_level`

    Returns:
        A configured WebComponentParser
    """
    config = config or ComponentMetaConfig()
    if setup_logging:
        configure_logging(config.log_level)
    return WebComponentParser(config=config, file_access=file_access)


def parse_file(file_path: FilePath, config: Optional[ComponentMetaConfig] = None) -> ParseResult:
    """
    Parse one component file from disk.

    Raises:
        UnsupportedLanguageError: If the file extension is not supported
    """
    get_language_from_extension(file_path)
    return parse_component_file(str(file_path), config=config)


__all__ = [
    "FilePath",
    "get_language_from_extension",
    "create_parser",
    "parse_file",
    "parse_component",
    "parse_component_file",
    "parse_component_files",
    "WebComponentParser",
    "ComponentMetaConfig",
    "load_config",
    "configure_logging",
    "ComponentMetaError",
    "FileAccessError",
    "UnsupportedLanguageError",
    "FileAccess",
    "DiskFileAccess",
    "MemoryFileAccess",
    "AttributeDescriptor",
    "ClassSource",
    "ComponentModel",
    "DiscoveryMethod",
    "EventDescriptor",
    "PropertyDescriptor",
    "PropertyType",
    "PropertyVisibility",
    "TagNameResolution",
    "TagNameResult",
    "TagNameSource",
    "ClassNode",
    "SourceProgram",
    "SourceUnit",
    "TypeResolver",
    "AggregateResult",
    "ParseResult",
    "Result",
    "add_error",
    "add_warning",
    "aggregate_results",
    "create_result",
    "merge_diagnostics",
    "kebab_to_title_case",
    "merge_by_key",
    "normalize_path",
    "to_camel_case",
    "to_kebab_case",
    "to_pascal_case",
    "upper_case_first_character",
]
