"""
`@property` extraction.

Reads decorated fields and getters of a class into PropertyDescriptors.
Private members (`private` or `#name`) never produce a descriptor.
"""

from typing import Any, Dict, List, Optional, Sequence

from tree_sitter import Node

from ..jsdoc import parse_jsdoc
from ..models import DefaultValue, PropertyDescriptor, PropertyType, PropertyVisibility
from ..program import ClassNode
from ..treesitter.nodes import (
    call_arguments,
    doc_comment,
    has_keyword_child,
    is_string_literal,
    literal_value,
    member_decorators,
    node_text,
    string_value,
    unwrap_expression,
)
from ..type_resolver import TypeResolver
from ..utils import to_kebab_case
from .call_shapes import decorator_call, is_decorator_call
from .chain_extractor import Extraction, extract_from_chain

PROPERTY_DECORATOR = "property"

_DECORATOR_TYPES = {
    "String": PropertyType.STRING,
    "Number": PropertyType.NUMBER,
    "Boolean": PropertyType.BOOLEAN,
}
_TS_TYPES = {
    "string": PropertyType.STRING,
    "number": PropertyType.NUMBER,
    "boolean": PropertyType.BOOLEAN,
}


def _is_property_member(member: Node) -> bool:
    if member.type == "public_field_definition":
        return True
    return member.type == "method_definition" and has_keyword_child(member, "get")


def _visibility(member: Node) -> Optional[PropertyVisibility]:
    """None for private members."""
    name_node = member.child_by_field_name("name")
    if name_node is not None and name_node.type == "private_property_identifier":
        return None
    for child in member.children:
        if child.type == "accessibility_modifier":
            modifier = node_text(child).strip()
            if modifier == "private":
                return None
            if modifier == "protected":
                return PropertyVisibility.PROTECTED
    return PropertyVisibility.PUBLIC


def property_name(member: Node) -> Optional[str]:
    name_node = member.child_by_field_name("name")
    if name_node is None:
        return None
    if name_node.type in {"property_identifier", "identifier"}:
        return node_text(name_node)
    if is_string_literal(name_node):
        return string_value(name_node)
    if name_node.type == "computed_property_name":
        inner = next((c for c in name_node.named_children if c.type != "comment"), None)
        value = literal_value(inner)
        if isinstance(value, str):
            return value
    return None


def parse_decorator_options(decorator: Node) -> Dict[str, Any]:
    """
    Direct `key: value` pairs of the options object. `attribute` maps to None
    for `false` and is left out for `true`, so both "absent" and `true` fall
    back to the default attribute name.
    """
    options: Dict[str, Any] = {}
    call = decorator_call(decorator)
    arguments = call_arguments(call) if call is not None else []
    argument = unwrap_expression(arguments[0]) if arguments else None
    if argument is None or argument.type != "object":
        return options

    for pair in argument.named_children:
        if pair.type != "pair":
            continue
        key_node = pair.child_by_field_name("key")
        value_node = unwrap_expression(pair.child_by_field_name("value"))
        if key_node is None or key_node.type != "property_identifier" or value_node is None:
            continue
        key = node_text(key_node)

        if key == "type":
            if value_node.type == "identifier":
                options["type"] = node_text(value_node)
            elif value_node.type == "member_expression":
                options["type"] = node_text(value_node.child_by_field_name("property"))
        elif key == "attribute":
            literal = literal_value(value_node)
            if literal is False:
                options["attribute"] = None
            elif literal is True:
                options.pop("attribute", None)
            elif literal is not None:
                options["attribute"] = literal if isinstance(literal, str) else node_text(value_node)
            else:
                options["attribute"] = node_text(value_node)
        elif key == "reflect":
            literal = literal_value(value_node)
            if isinstance(literal, bool):
                options["reflect"] = literal
    return options


def resolve_property_type(
    type_name: Optional[str],
    enum_values: Optional[Sequence[str]],
    ts_type: str,
    name: str,
) -> PropertyType:
    # tag-name plumbing fields are typed by literal unions but are not design variants
    if name.lower().endswith("tagname") and enum_values:
        return PropertyType.STRING
    if enum_values:
        return PropertyType.ENUM
    if type_name in _DECORATOR_TYPES:
        return _DECORATOR_TYPES[type_name]
    return _TS_TYPES.get(ts_type.lower(), PropertyType.UNKNOWN)


def _default_value(member: Node) -> DefaultValue:
    if member.type != "public_field_definition":
        return None
    value = member.child_by_field_name("value")
    if value is None:
        return None
    literal = literal_value(value)
    if literal is not None:
        return literal
    return node_text(value)


def extract_properties_from_class(class_node: ClassNode, type_resolver: TypeResolver) -> Extraction[PropertyDescriptor]:
    descriptors: List[PropertyDescriptor] = []
    warnings: List[str] = []
    body = class_node.body
    if body is None:
        return Extraction()

    for member in body.named_children:
        if not _is_property_member(member):
            continue
        visibility = _visibility(member)
        if visibility is None:
            continue
        decorator = next(
            (d for d in member_decorators(member) if is_decorator_call(d, PROPERTY_DECORATOR)),
            None,
        )
        if decorator is None:
            continue

        name = property_name(member)
        if name is None:
            warnings.append(f"Unable to resolve property name for member: {node_text(member)}")
            continue

        options = parse_decorator_options(decorator)
        enum_values = type_resolver.literal_union_members(
            type_resolver.declared_type_node(member), class_node.unit
        )
        ts_type = type_resolver.type_text(member)
        resolved_type = resolve_property_type(options.get("type"), enum_values, ts_type, name)
        attribute = options["attribute"] if "attribute" in options else to_kebab_case(name)
        doc = parse_jsdoc(doc_comment(member))

        descriptors.append(
            PropertyDescriptor(
                name=name,
                type=resolved_type,
                ts_type=ts_type,
                attribute=attribute,
                reflect=options.get("reflect", False),
                default_value=_default_value(member),
                doc=doc.summary if doc else None,
                visibility=visibility,
                enum_values=enum_values if resolved_type == PropertyType.ENUM else None,
            )
        )

    return Extraction(items=tuple(descriptors), warnings=tuple(warnings))


def extract_properties(chain: Sequence[ClassNode], type_resolver: TypeResolver) -> Extraction[PropertyDescriptor]:
    return extract_from_chain(
        chain,
        lambda class_node: extract_properties_from_class(class_node, type_resolver),
        lambda descriptor: descriptor.name,
    )
