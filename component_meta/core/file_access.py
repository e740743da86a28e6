"""
File-access capability.

Resolution code only ever reads. Everything goes through a FileAccess so a
test can swap the disk for an in-memory tree of fixture files.
"""

import os
import posixpath
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Protocol

from .errors import FileAccessError


class FileAccess(Protocol):
    def exists(self, path: str) -> bool:
        ...

    def read(self, path: str) -> str:
        ...

    def list(self, directory: str) -> List[str]:
        ...


class DiskFileAccess:
    """Reads from the real filesystem. Only regular files count as existing."""

    def exists(self, path: str) -> bool:
        return os.path.isfile(path)

    def read(self, path: str) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise FileAccessError(path, str(e)) from e

    def list(self, directory: str) -> List[str]:
        try:
            return sorted(os.listdir(directory))
        except OSError as e:
            raise FileAccessError(directory, str(e)) from e


class MemoryFileAccess:
    """
    Dict-backed file tree. Keys are absolute POSIX paths; relative keys are
    anchored at `root` (default "/").
    """

    def __init__(self, files: Optional[Mapping[str, str]] = None, root: str = "/"):
        self.root = root
        self.files: Dict[str, str] = {}
        for path, contents in (files or {}).items():
            self.add(path, contents)

    def _key(self, path: str) -> str:
        posix = str(path).replace("\\", "/")
        if not posixpath.isabs(posix):
            posix = posixpath.join(self.root, posix)
        return posixpath.normpath(posix)

    def add(self, path: str, contents: str) -> None:
        self.files[self._key(path)] = contents

    def exists(self, path: str) -> bool:
        return self._key(path) in self.files

    def read(self, path: str) -> str:
        key = self._key(path)
        if key not in self.files:
            raise FileAccessError(path)
        return self.files[key]

    def list(self, directory: str) -> List[str]:
        prefix = self._key(directory).rstrip("/") + "/"
        names = set()
        for key in self.files:
            if key.startswith(prefix):
                names.add(key[len(prefix):].split("/", 1)[0])
        return sorted(names)
