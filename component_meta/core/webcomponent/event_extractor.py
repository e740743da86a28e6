"""
Event extraction.

Events come from two places per class: `@event name ...` doc tags and
`dispatchEvent(new CustomEvent('name'))` sites inside the class body. A doc
tag may name the React handler with `React: onSomething`; otherwise the
handler is `on` + PascalCase(name).
"""

import re
from typing import Callable, List, Optional, Sequence

from ..jsdoc import JsDoc, parse_jsdoc
from ..models import EventDescriptor
from ..program import ClassNode
from ..treesitter.nodes import doc_comment
from ..utils import merge_by_key, to_pascal_case
from .ast_visitor import SyntaxFacts
from .chain_extractor import Extraction, extract_from_chain

EVENT_DOC_TAG = "event"

_EVENT_NAME_RE = re.compile(r"^([A-Za-z0-9\-:_]+)")
_REACT_HANDLER_RE = re.compile(r"React:\s*([A-Za-z0-9_]+)", re.IGNORECASE)

FactsLookup = Callable[[ClassNode], Optional[SyntaxFacts]]


def derive_react_handler(event_name: str, comment: Optional[str] = None) -> str:
    if comment:
        match = _REACT_HANDLER_RE.search(comment)
        if match:
            return match.group(1)
    return f"on{to_pascal_case(event_name)}"


def events_from_doc(doc: Optional[JsDoc]) -> List[EventDescriptor]:
    if doc is None:
        return []
    events = []
    for tag in doc.all(EVENT_DOC_TAG):
        match = _EVENT_NAME_RE.match(tag.text)
        if not match:
            continue
        name = match.group(1)
        events.append(EventDescriptor(name=name, react_handler=derive_react_handler(name, tag.text)))
    return events


def events_from_dispatch(class_node: ClassNode, facts: Optional[SyntaxFacts]) -> List[EventDescriptor]:
    if facts is None:
        return []
    return [
        EventDescriptor(name=call.event_name, react_handler=derive_react_handler(call.event_name))
        for call in facts.dispatches_for(class_node)
    ]


def extract_events_from_class(class_node: ClassNode, facts: Optional[SyntaxFacts]) -> Extraction[EventDescriptor]:
    doc = facts.doc_for(class_node) if facts is not None else None
    if doc is None:
        doc = parse_jsdoc(doc_comment(class_node.node))
    events = events_from_doc(doc) + events_from_dispatch(class_node, facts)
    # doc tags come first and win, so an explicit React handler survives a dispatch of the same event
    unique = merge_by_key(events, lambda event: event.name, lambda existing, incoming: existing)
    return Extraction(items=tuple(unique.values()))


def extract_events(chain: Sequence[ClassNode], facts_for: FactsLookup) -> Extraction[EventDescriptor]:
    return extract_from_chain(
        chain,
        lambda class_node: extract_events_from_class(class_node, facts_for(class_node)),
        lambda event: event.name,
    )
