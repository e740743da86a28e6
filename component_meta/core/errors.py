"""
Exception hierarchy for component-meta.

Expected missing data (absent files, unresolvable identifiers, malformed call
shapes) is reported as warnings on a Result, never raised. These exceptions
mark API misuse and low-level read failures only.
"""


class ComponentMetaError(Exception):
    """Base class for all component-meta errors."""


class UnsupportedLanguageError(ComponentMetaError, ValueError):
    """Raised when a parser is requested for a language id we do not ship."""


class FileAccessError(ComponentMetaError, OSError):
    """Raised by FileAccess.read when a path cannot be read."""

    def __init__(self, path: str, reason: str = "not found"):
        super().__init__(f"Unable to read {path}: {reason}")
        self.path = path
        self.reason = reason
