"""
Chain-wide extraction.

Runs a per-class extractor over an inheritance chain, base class first, and
merges the results by key so derived declarations override inherited ones.
"""

from dataclasses import dataclass
from typing import Callable, Generic, Hashable, Iterable, Optional, Tuple, TypeVar

from ..program import ClassNode
from ..utils import merge_by_key

T = TypeVar("T")


@dataclass(frozen=True)
class Extraction(Generic[T]):
    items: Tuple[T, ...] = ()
    warnings: Tuple[str, ...] = ()


def extract_from_chain(
    chain: Iterable[ClassNode],
    extract: Callable[[ClassNode], Extraction[T]],
    get_key: Callable[[T], Hashable],
    merge: Optional[Callable[[T, T], T]] = None,
) -> Extraction[T]:
    """
    Run `extract` on every class, base-first, and merge the items by key.

    A more-derived item replaces a base item with the same key but keeps the
    base item's position. Pass `merge` to combine the two instead.
    """
    results = [extract(class_node) for class_node in chain]
    collected = [item for result in results for item in result.items]
    warnings = tuple(warning for result in results for warning in result.warnings)
    merged = merge_by_key(collected, get_key, merge)
    return Extraction(items=tuple(merged.values()), warnings=warnings)
