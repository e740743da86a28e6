"""
Result container with accumulated diagnostics.

Warnings degrade resolution, errors prevent a usable model. Both travel
with the value so callers can report them after the fact.
"""

from dataclasses import dataclass, replace
from typing import Any, Generic, Iterable, Mapping, Optional, Sequence, Tuple, TypeVar

from .models import ClassSource, ComponentModel, TagNameResult

T = TypeVar("T")
R = TypeVar("R", bound="Result")


@dataclass(frozen=True)
class Result(Generic[T]):
    value: T
    warnings: Tuple[str, ...] = ()
    errors: Tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class ParseResult(Result[Optional[ComponentModel]]):
    """Outcome of parsing one component file."""
    class_source: Optional[ClassSource] = None
    tag_name_result: Optional[TagNameResult] = None


@dataclass(frozen=True)
class AggregateResult(Generic[T]):
    items: Tuple[Result[T], ...]
    warnings: Tuple[str, ...]
    errors: Tuple[str, ...]
    ok: bool


def create_result(value: T, warnings: Iterable[str] = (), errors: Iterable[str] = ()) -> Result[T]:
    return Result(value=value, warnings=tuple(warnings), errors=tuple(errors))


def _diagnostics_of(payload: Any) -> Tuple[Sequence[str], Sequence[str]]:
    if payload is None:
        return (), ()
    if isinstance(payload, Mapping):
        return payload.get("warnings") or (), payload.get("errors") or ()
    return getattr(payload, "warnings", None) or (), getattr(payload, "errors", None) or ()


def merge_diagnostics(result: R, *diagnostics: Any) -> R:
    """
    Append warnings and errors from each payload, in order.

    A payload is anything with `warnings`/`errors` attributes or a mapping
    with those keys. The result type (including ParseResult) is preserved.
    """
    warnings = list(result.warnings)
    errors = list(result.errors)
    for payload in diagnostics:
        payload_warnings, payload_errors = _diagnostics_of(payload)
        warnings.extend(payload_warnings)
        errors.extend(payload_errors)
    if len(warnings) == len(result.warnings) and len(errors) == len(result.errors):
        return result
    return replace(result, warnings=tuple(warnings), errors=tuple(errors))


def add_warning(result: R, warning: str) -> R:
    return merge_diagnostics(result, {"warnings": [warning]})


def add_error(result: R, error: str) -> R:
    return merge_diagnostics(result, {"errors": [error]})


def aggregate_results(items: Iterable[Result[T]]) -> AggregateResult[T]:
    collected = tuple(items)
    warnings = tuple(warning for item in collected for warning in item.warnings)
    errors = tuple(error for item in collected for error in item.errors)
    return AggregateResult(items=collected, warnings=warnings, errors=errors, ok=not errors)
