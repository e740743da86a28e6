"""
JSDoc comment reader.

Tree-sitter keeps comments as opaque text, so block comments are split here
into a summary and an ordered list of block tags. Tag text is kept verbatim,
inline markup such as `{@link Foo}` included.
"""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

_TAG_LINE = re.compile(r"^@([A-Za-z][\w-]*)\s*(.*)$")


@dataclass(frozen=True)
class JsDocTag:
    name: str
    text: str


@dataclass(frozen=True)
class JsDoc:
    summary: Optional[str]
    tags: Tuple[JsDocTag, ...] = ()

    def find(self, name: str) -> Optional[JsDocTag]:
        return next((tag for tag in self.tags if tag.name == name), None)

    def all(self, name: str) -> Tuple[JsDocTag, ...]:
        return tuple(tag for tag in self.tags if tag.name == name)


def _clean_lines(comment: str):
    body = comment.strip()
    if body.startswith("/**"):
        body = body[3:]
    if body.endswith("*/"):
        body = body[:-2]
    for raw in body.splitlines():
        line = raw.strip()
        if line.startswith("*"):
            line = line[1:]
            if line.startswith(" "):
                line = line[1:]
        yield line.rstrip()


def parse_jsdoc(comment: Optional[str]) -> Optional[JsDoc]:
    """Parse a `/** ... */` block. Returns None when there is no comment."""
    if not comment:
        return None

    summary_lines = []
    tags = []
    current_name = None
    current_lines = []

    for line in _clean_lines(comment):
        match = _TAG_LINE.match(line.strip())
        if match:
            if current_name is not None:
                tags.append(JsDocTag(current_name, "\n".join(current_lines).strip()))
            current_name = match.group(1)
            current_lines = [match.group(2)]
        elif current_name is not None:
            current_lines.append(line)
        else:
            summary_lines.append(line)

    if current_name is not None:
        tags.append(JsDocTag(current_name, "\n".join(current_lines).strip()))

    summary = "\n".join(summary_lines).strip()
    return JsDoc(summary=summary or None, tags=tuple(tags))
