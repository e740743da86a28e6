"""
Shared utility functions for string casing, keyed merging and paths.
"""

import os
import re
from typing import Callable, Dict, Hashable, Iterable, Optional, TypeVar

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)


def upper_case_first_character(value: str = "") -> str:
    return value[0].upper() + value[1:] if value else value


def kebab_to_title_case(value: str = "") -> str:
    return " ".join(upper_case_first_character(part) for part in value.strip().split("-") if part)


def to_kebab_case(value: str = "") -> str:
    """
    Convert camelCase, PascalCase, snake_case or spaced text to kebab-case.

    >>> to_kebab_case("primaryButton")
    'primary-button'
    """
    result = re.sub(r"([a-z0-9])([A-Z])", r"\1-\2", value)
    result = re.sub(r"[_\s]+", "-", result)
    result = re.sub(r"-+", "-", result)
    return result.strip("-").lower()


def to_pascal_case(value: str = "") -> str:
    spaced = re.sub(r"([a-z0-9])([A-Z])", r"\1 \2", value)
    spaced = re.sub(r"[^a-zA-Z0-9]+", " ", spaced)
    return "".join(upper_case_first_character(part) for part in spaced.split())


def to_camel_case(value: str = "") -> str:
    pascal = to_pascal_case(value)
    return pascal[0].lower() + pascal[1:] if pascal else pascal


def merge_by_key(
    items: Iterable[T],
    get_key: Callable[[T], K],
    merge: Optional[Callable[[T, T], T]] = None,
) -> Dict[K, T]:
    """
    Merge items into an insertion-ordered dict keyed by `get_key`.

    On a key collision the merged value replaces the stored one in place, so
    an item keeps the position where its key was first seen. The default
    merge keeps the incoming item.
    """
    merged: Dict[K, T] = {}
    for item in items:
        key = get_key(item)
        if key in merged and merge is not None:
            merged[key] = merge(merged[key], item)
        else:
            merged[key] = item
    return merged


def normalize_path(value: str) -> str:
    """Absolute, forward-slash form of a path. Empty input stays empty."""
    if not value:
        return ""
    return os.path.abspath(value).replace("\\", "/")
