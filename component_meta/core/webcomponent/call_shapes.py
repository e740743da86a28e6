"""
Callee shapes.

Calls such as `register(TAG)`, `Button.register(TAG)` and
`this.dispatchEvent(...)` are matched by their trailing name whatever the
receiver looks like. A callee is read once into one of two shapes and the
matchers below work on those.
"""

from dataclasses import dataclass
from typing import Optional, Union

from tree_sitter import Node

from ..treesitter.nodes import decorator_expression, node_text, unwrap_expression


@dataclass(frozen=True)
class BareCallee:
    """`name(...)`"""
    name: str


@dataclass(frozen=True)
class MemberCallee:
    """`receiver.name(...)`; receiver is None unless it is a plain identifier."""
    name: str
    receiver: Optional[str]


CalleeShape = Union[BareCallee, MemberCallee]


def shape_of(expression: Optional[Node]) -> Optional[CalleeShape]:
    expression = unwrap_expression(expression)
    if expression is None:
        return None
    if expression.type == "identifier":
        return BareCallee(node_text(expression))
    if expression.type == "member_expression":
        property_node = expression.child_by_field_name("property")
        if property_node is None:
            return None
        object_node = unwrap_expression(expression.child_by_field_name("object"))
        receiver = node_text(object_node) if object_node is not None and object_node.type == "identifier" else None
        return MemberCallee(node_text(property_node), receiver)
    return None


def call_shape(call_node: Node) -> Optional[CalleeShape]:
    if call_node.type != "call_expression":
        return None
    return shape_of(call_node.child_by_field_name("function"))


def decorator_call(decorator: Node) -> Optional[Node]:
    """The call expression inside `@name(...)`, or None for a bare `@name`."""
    expression = unwrap_expression(decorator_expression(decorator))
    if expression is not None and expression.type == "call_expression":
        return expression
    return None


def matches_name(shape: Optional[CalleeShape], name: str) -> bool:
    return shape is not None and shape.name == name


def receiver_of(shape: Optional[CalleeShape]) -> Optional[str]:
    if isinstance(shape, MemberCallee):
        return shape.receiver
    return None


def is_decorator_call(decorator: Node, name: str) -> bool:
    call = decorator_call(decorator)
    return call is not None and matches_name(call_shape(call), name)
