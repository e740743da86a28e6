"""
Tree-sitter parser facade with cached parser instances.
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, Union

from tree_sitter import Parser, Tree

from ..errors import UnsupportedLanguageError
from .languages import get_ts_language, get_tsx_language

# Source suffix -> grammar. Insertion order is the module-path probing order.
LANGUAGE_BY_SUFFIX: Dict[str, str] = {
    ".ts": "typescript",
    ".tsx": "tsx",
    ".js": "typescript",
    ".jsx": "tsx",
    ".mts": "typescript",
    ".cts": "typescript",
    ".mjs": "typescript",
    ".cjs": "typescript",
}
SOURCE_SUFFIXES = tuple(LANGUAGE_BY_SUFFIX)


@lru_cache(maxsize=2)
def get_parser(language_id: str) -> Parser:
    parser = Parser()
    if language_id == "typescript":
        parser.language = get_ts_language()
    elif language_id == "tsx":
        parser.language = get_tsx_language()
    else:
        raise UnsupportedLanguageError(f"Unsupported language: {language_id}")
    return parser


def parse_source(source: str, language_id: str) -> Tree:
    parser = get_parser(language_id)
    return parser.parse(bytes(source, "utf-8"))


def language_for_path(file_path: Union[str, Path]) -> str:
    """Pick the grammar for a file. Unknown suffixes are read as TypeScript."""
    return LANGUAGE_BY_SUFFIX.get(Path(file_path).suffix.lower(), "typescript")
