"""
Tree-sitter integration for component-meta.

Provides language loading, parsing and node helpers shared by the visitors.
"""

from .parser import parse_source, get_parser, language_for_path
from .languages import get_ts_language, get_tsx_language

__all__ = [
    "parse_source",
    "get_parser",
    "language_for_path",
    "get_ts_language",
    "get_tsx_language",
]
