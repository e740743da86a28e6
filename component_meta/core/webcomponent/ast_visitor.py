"""
Single-pass syntax visitor.

Walks a parsed file once and records everything the later stages need:
class declarations, their decorators and doc comments, `dispatchEvent`
sites attributed to the innermost enclosing class, and `register` calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from tree_sitter import Node

from ..jsdoc import JsDoc, JsDocTag, parse_jsdoc
from ..program import ClassNode, SourceUnit
from ..treesitter.nodes import (
    call_arguments,
    class_decorators,
    doc_comment,
    has_keyword_child,
    is_class_node,
    is_string_literal,
    node_text,
    string_value,
    unwrap_expression,
)
from .call_shapes import call_shape, matches_name, receiver_of

DISPATCH_METHOD = "dispatchEvent"
EVENT_CONSTRUCTOR = "CustomEvent"
REGISTER_METHOD = "register"


@dataclass(frozen=True, eq=False)
class DispatchCall:
    event_name: str
    containing_class: ClassNode
    node: Node


@dataclass(frozen=True, eq=False)
class RegisterCall:
    receiver: Optional[str]
    argument: Optional[Node]
    node: Node


@dataclass(frozen=True, eq=False)
class SyntaxFacts:
    unit: SourceUnit
    classes: Tuple[ClassNode, ...]
    class_decorators: Mapping[ClassNode, Tuple[Node, ...]]
    class_docs: Mapping[ClassNode, JsDoc]
    dispatch_calls: Tuple[DispatchCall, ...]
    register_calls: Tuple[RegisterCall, ...]
    default_export: Optional[Node] = None

    def decorators_for(self, class_node: ClassNode) -> Tuple[Node, ...]:
        return self.class_decorators.get(class_node, ())

    def doc_for(self, class_node: ClassNode) -> Optional[JsDoc]:
        return self.class_docs.get(class_node)

    def doc_tags_for(self, class_node: ClassNode) -> Tuple[JsDocTag, ...]:
        doc = self.doc_for(class_node)
        return doc.tags if doc else ()

    def dispatches_for(self, class_node: ClassNode) -> List[DispatchCall]:
        return [call for call in self.dispatch_calls if call.containing_class == class_node]


def event_name_of(argument: Optional[Node]) -> Optional[str]:
    """`new CustomEvent('name', ...)` -> 'name'. Dynamic names give None."""
    argument = unwrap_expression(argument)
    if argument is None or argument.type != "new_expression":
        return None
    constructor = argument.child_by_field_name("constructor")
    if constructor is None or constructor.type != "identifier" or node_text(constructor) != EVENT_CONSTRUCTOR:
        return None
    arguments = call_arguments(argument)
    if not arguments or not is_string_literal(arguments[0]):
        return None
    return string_value(arguments[0])


def visit_source(unit: SourceUnit) -> SyntaxFacts:
    classes: List[ClassNode] = []
    decorators: Dict[ClassNode, Tuple[Node, ...]] = {}
    docs: Dict[ClassNode, JsDoc] = {}
    dispatch_calls: List[DispatchCall] = []
    register_calls: List[RegisterCall] = []
    default_export: Optional[Node] = None

    stack: List[Tuple[Node, Optional[ClassNode]]] = [(unit.root, None)]
    while stack:
        node, enclosing = stack.pop()

        if is_class_node(node):
            class_node = ClassNode(node, unit)
            if class_node.is_declaration:
                classes.append(class_node)
            found = class_decorators(node)
            if found:
                decorators[class_node] = tuple(found)
            doc = parse_jsdoc(doc_comment(node))
            if doc is not None:
                docs[class_node] = doc
            enclosing = class_node

        elif node.type == "export_statement" and has_keyword_child(node, "default"):
            value = node.child_by_field_name("value")
            if value is not None:
                default_export = unwrap_expression(value)

        elif node.type == "call_expression":
            shape = call_shape(node)
            arguments = call_arguments(node)
            first = arguments[0] if arguments else None
            if matches_name(shape, DISPATCH_METHOD) and enclosing is not None:
                event_name = event_name_of(first)
                if event_name is not None:
                    dispatch_calls.append(DispatchCall(event_name, enclosing, node))
            elif matches_name(shape, REGISTER_METHOD):
                register_calls.append(RegisterCall(receiver_of(shape), first, node))

        stack.extend((child, enclosing) for child in reversed(node.children))

    return SyntaxFacts(
        unit=unit,
        classes=tuple(classes),
        class_decorators=MappingProxyType(decorators),
        class_docs=MappingProxyType(docs),
        dispatch_calls=tuple(dispatch_calls),
        register_calls=tuple(register_calls),
        default_export=default_export,
    )
