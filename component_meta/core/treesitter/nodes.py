"""
Node helpers shared by the component visitors and resolvers.

Tree-sitter hands back raw syntax nodes; these helpers read text, literal
values, call arguments, decorators and doc comments off them without
knowing anything about components.
"""

from __future__ import annotations

import re
from typing import List, Optional, Union

from tree_sitter import Node

LiteralValue = Union[str, int, float, bool]

CLASS_DECLARATION_TYPES = {"class_declaration", "abstract_class_declaration"}
FUNCTION_EXPRESSION_TYPES = {"function_expression", "function", "arrow_function"}
WRAPPER_EXPRESSION_TYPES = {
    "parenthesized_expression",
    "as_expression",
    "satisfies_expression",
    "non_null_expression",
}

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}
_ESCAPE_RE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|.)", re.DOTALL)


def node_text(node: Optional[Node]) -> str:
    if not node:
        return ""
    return node.text.decode("utf-8")


def strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] in "\"'`" and text[-1] == text[0]:
        return text[1:-1]
    return text


def named_children(node: Optional[Node]) -> List[Node]:
    """Named children with comments filtered out."""
    if not node:
        return []
    return [child for child in node.named_children if child.type != "comment"]


def first_named_child(node: Optional[Node]) -> Optional[Node]:
    children = named_children(node)
    return children[0] if children else None


def unwrap_expression(node: Optional[Node]) -> Optional[Node]:
    """Strip parentheses and type-only wrappers (`as`, `satisfies`, `!`)."""
    current = node
    while current is not None and current.type in WRAPPER_EXPRESSION_TYPES:
        current = first_named_child(current)
    return current


def _unescape(raw: str) -> str:
    def _replace(match: re.Match) -> str:
        token = match.group(1)
        if token.startswith("u{"):
            return chr(int(token[2:-1], 16))
        if token[0] in "ux" and len(token) > 1:
            return chr(int(token[1:], 16))
        if token == "\n":
            return ""
        return _ESCAPES.get(token, token)

    return _ESCAPE_RE.sub(_replace, raw)


def is_string_literal(node: Optional[Node]) -> bool:
    """True for quoted strings and template strings without substitutions."""
    if node is None:
        return False
    if node.type == "string":
        return True
    if node.type == "template_string":
        return not any(child.type == "template_substitution" for child in node.children)
    return False


def string_value(node: Node) -> str:
    return _unescape(strip_quotes(node_text(node)))


def _number_value(text: str) -> Union[int, float]:
    cleaned = text.replace("_", "").rstrip("n")
    try:
        return int(cleaned, 0)
    except ValueError:
        return float(cleaned)


def literal_value(node: Optional[Node]) -> Optional[LiteralValue]:
    """
    Read a supported literal: strings, no-substitution templates, numbers,
    and booleans. Returns None for anything else.
    """
    node = unwrap_expression(node)
    if node is None:
        return None
    if is_string_literal(node):
        return string_value(node)
    if node.type == "number":
        try:
            return _number_value(node_text(node))
        except ValueError:
            return None
    if node.type == "true":
        return True
    if node.type == "false":
        return False
    return None


def call_arguments(call_node: Node) -> List[Node]:
    return named_children(call_node.child_by_field_name("arguments"))


def is_class_node(node: Node) -> bool:
    if node.type in CLASS_DECLARATION_TYPES:
        return True
    # the `class` keyword token shares the type name; only the named node is an expression
    return node.type == "class" and node.is_named


def class_decorators(class_node: Node) -> List[Node]:
    """Decorators on a class, including those written before `export`."""
    decorators = [child for child in class_node.children if child.type == "decorator"]
    parent = class_node.parent
    if parent is not None and parent.type == "export_statement":
        decorators = [child for child in parent.children if child.type == "decorator"] + decorators
    return decorators


def member_decorators(member: Node) -> List[Node]:
    """
    Decorators on a class member. Field decorators are children of the field;
    method and accessor decorators are preceding siblings in the class body.
    """
    decorators = [child for child in member.children if child.type == "decorator"]
    if decorators:
        return decorators
    preceding: List[Node] = []
    sibling = member.prev_named_sibling
    while sibling is not None and sibling.type in {"decorator", "comment"}:
        if sibling.type == "decorator":
            preceding.append(sibling)
        sibling = sibling.prev_named_sibling
    preceding.reverse()
    return preceding


def decorator_expression(decorator: Node) -> Optional[Node]:
    return first_named_child(decorator)


def doc_comment(node: Node) -> Optional[str]:
    """The `/** ... */` comment directly above a declaration, if any."""
    target = node
    if target.parent is not None and target.parent.type == "export_statement":
        target = target.parent
    prev = target.prev_named_sibling
    while prev is not None and prev.type == "decorator":
        prev = prev.prev_named_sibling
    if prev is not None and prev.type == "comment":
        text = node_text(prev)
        if text.startswith("/**"):
            return text
    return None


def has_keyword_child(node: Node, keyword: str) -> bool:
    return any(not child.is_named and child.type == keyword for child in node.children)
