"""
Pytest configuration and fixtures for component-meta testing.
"""

import shutil
import tempfile
import textwrap
from pathlib import Path
from typing import Dict

import pytest

from component_meta.core.file_access import MemoryFileAccess
from component_meta.core.program import SourceProgram, SourceUnit
from component_meta.core.type_resolver import TypeResolver

COMPONENT_PATH = "/repo/src/components/widget/widget.component.ts"


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def write_project(temp_dir):
    """Write a {relative path: source} tree under temp_dir and return its root."""
    def _write(files: Dict[str, str]) -> Path:
        for relative, contents in files.items():
            path = temp_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(contents), encoding="utf-8")
        return temp_dir
    return _write


@pytest.fixture
def memory_files():
    """Build an in-memory file tree from {absolute path: source}."""
    def _make(files: Dict[str, str]) -> MemoryFileAccess:
        return MemoryFileAccess({path: textwrap.dedent(contents) for path, contents in files.items()})
    return _make


@pytest.fixture
def program_for(memory_files):
    """A SourceProgram over an in-memory file tree."""
    def _make(files: Dict[str, str]) -> SourceProgram:
        return SourceProgram(memory_files(files))
    return _make


@pytest.fixture
def make_unit():
    """Parse a TypeScript snippet into a SourceUnit."""
    def _make(source: str, path: str = COMPONENT_PATH) -> SourceUnit:
        return SourceUnit.from_source(path, textwrap.dedent(source))
    return _make


@pytest.fixture
def type_resolver():
    """A TypeResolver over an empty in-memory program."""
    return TypeResolver(SourceProgram(MemoryFileAccess()))
