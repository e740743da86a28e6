"""
Lexical type resolution over a SourceProgram.

There is no type checker here: base classes, mixin functions and type
aliases are found by following bindings through lexical scopes, relative
imports and re-exports. Anything bound to a package import or a DOM global
is reported as external rather than guessed at.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set, Tuple

from tree_sitter import Node

from .program import ClassNode, SourceProgram, SourceUnit
from .symbols import SymbolResolver, find_declaration, import_bindings, variable_declarators
from .treesitter.nodes import (
    FUNCTION_EXPRESSION_TYPES,
    first_named_child,
    is_class_node,
    is_string_literal,
    literal_value,
    named_children,
    node_text,
    string_value,
    unwrap_expression,
)

Binding = Tuple[Node, SourceUnit]

FUNCTION_NODE_TYPES = FUNCTION_EXPRESSION_TYPES | {
    "function_declaration",
    "generator_function_declaration",
    "generator_function",
    "method_definition",
}
PARAMETER_TYPES = {"required_parameter", "optional_parameter", "rest_parameter"}

KNOWN_GLOBAL_BASES = {
    "Element",
    "EventTarget",
    "Node",
    "Object",
    "Error",
    "Event",
    "CustomEvent",
    "Array",
    "Map",
    "Set",
    "Promise",
}
_DOM_ELEMENT_RE = re.compile(r"^(HTML|SVG|MathML)\w*Element$")


class BaseKind(str, Enum):
    """What a name in an `extends` clause turned out to be."""
    CLASS = "class"
    PARAMETER = "parameter"
    EXTERNAL = "external"
    UNRESOLVED = "unresolved"


@dataclass(frozen=True)
class BaseResolution:
    kind: BaseKind
    class_node: Optional[ClassNode] = None


def _is_parameter_of(function_node: Node, name: str) -> bool:
    params = function_node.child_by_field_name("parameters")
    if params is None:
        single = function_node.child_by_field_name("parameter")
        return single is not None and node_text(single) == name
    for param in named_children(params):
        if param.type in PARAMETER_TYPES:
            pattern = param.child_by_field_name("pattern")
            if pattern is not None and node_text(pattern) == name:
                return True
        elif param.type == "identifier" and node_text(param) == name:
            return True
    return False


def _block_binding(block: Node, name: str) -> Optional[Node]:
    """A class, function or variable declared directly inside a block."""
    for statement in block.named_children:
        if statement.type in {"class_declaration", "abstract_class_declaration", "function_declaration"}:
            name_node = statement.child_by_field_name("name")
            if name_node is not None and node_text(name_node) == name:
                return statement
        elif statement.type in {"lexical_declaration", "variable_declaration"}:
            for declarator in variable_declarators(statement):
                name_node = declarator.child_by_field_name("name")
                if name_node is not None and node_text(name_node) == name:
                    return declarator
    return None


def _type_of_annotation(annotation: Optional[Node]) -> Optional[Node]:
    if annotation is None:
        return None
    if annotation.type == "type_annotation":
        return first_named_child(annotation)
    return annotation


class TypeResolver:
    """Type-resolution capability used by the inheritance and property extractors."""

    def __init__(self, program: SourceProgram):
        self.program = program
        self._symbols: SymbolResolver[Binding] = SymbolResolver(program, self._lookup_binding)
        self._type_symbols: SymbolResolver[Binding] = SymbolResolver(program, self._lookup_type)

    def _lookup_type(self, unit: SourceUnit, name: str, visited: Set[str]):
        declaration = find_declaration(unit, name, type_only=True)
        if declaration is None:
            return False, None
        return True, (declaration, unit)

    def _lookup_binding(self, unit: SourceUnit, name: str, visited: Set[str]):
        declaration = find_declaration(unit, name, value_only=True)
        if declaration is None:
            return False, None
        if declaration.type == "variable_declarator":
            value = unwrap_expression(declaration.child_by_field_name("value"))
            if value is not None and value.type == "identifier":
                if node_text(value) == name:
                    return True, None
                return True, self._symbols.resolve_identifier(unit, node_text(value), visited)
        if declaration.type == "identifier":
            return True, self._symbols.resolve_identifier(unit, node_text(declaration), visited)
        return True, (declaration, unit)

    # -- bindings ---------------------------------------------------------

    def _lexical_binding(self, use_site: Node, name: str) -> Tuple[Optional[str], Optional[Node]]:
        """
        Walk enclosing scopes of `use_site`. Returns ("parameter", fn) when
        `name` is a parameter of an enclosing function, ("local", decl) for a
        block-scoped declaration, or (None, None).
        """
        current = use_site.parent
        while current is not None and current.type != "program":
            if current.type in FUNCTION_NODE_TYPES and _is_parameter_of(current, name):
                return "parameter", current
            if current.type == "statement_block":
                declaration = _block_binding(current, name)
                if declaration is not None:
                    return "local", declaration
            current = current.parent
        return None, None

    def _resolve_name(self, use_site: Node, name: str, unit: SourceUnit) -> Tuple[str, Optional[Binding]]:
        """
        Find the binding for `name` as seen from `use_site`.

        Returns one of ("parameter", None), ("binding", (node, unit)),
        ("external", None) or ("missing", None).
        """
        scope, declaration = self._lexical_binding(use_site, name)
        if scope == "parameter":
            return "parameter", None
        if scope == "local":
            return "binding", (declaration, unit)

        local = find_declaration(unit, name, value_only=True)
        if local is not None:
            found = self._lookup_binding(unit, name, set())[1]
            return ("binding", found) if found else ("missing", None)

        binding = import_bindings(unit).get(name)
        if binding is not None:
            if not binding.is_relative:
                return "external", None
            if binding.imported == "*":
                return "missing", None
            target = self.program.resolve_module(unit.directory, binding.specifier)
            if target is None:
                return "missing", None
            found = self._symbols.resolve_export(target, binding.imported, set())
            return ("binding", found) if found else ("missing", None)

        if name in KNOWN_GLOBAL_BASES or _DOM_ELEMENT_RE.match(name):
            return "external", None
        return "missing", None

    def _resolve_member(self, expression: Node, unit: SourceUnit) -> Tuple[str, Optional[Binding]]:
        """`ns.Name` where `ns` is a namespace import."""
        object_node = unwrap_expression(expression.child_by_field_name("object"))
        property_node = expression.child_by_field_name("property")
        if object_node is None or property_node is None or object_node.type != "identifier":
            return "missing", None
        binding = import_bindings(unit).get(node_text(object_node))
        if binding is None:
            if node_text(object_node) in {"window", "globalThis", "self"}:
                return self._resolve_name(expression, node_text(property_node), unit)
            return "missing", None
        if not binding.is_relative:
            return "external", None
        if binding.imported != "*":
            return "missing", None
        target = self.program.resolve_module(unit.directory, binding.specifier)
        if target is None:
            return "missing", None
        found = self._symbols.resolve_export(target, node_text(property_node), set())
        return ("binding", found) if found else ("missing", None)

    @staticmethod
    def _class_from_binding(binding: Optional[Binding]) -> Optional[ClassNode]:
        if binding is None:
            return None
        node, unit = binding
        if node.type == "variable_declarator":
            node = unwrap_expression(node.child_by_field_name("value"))
        if node is not None and is_class_node(node):
            return ClassNode(node, unit)
        return None

    # -- base classes -----------------------------------------------------

    def resolve_base(self, expression: Node, unit: SourceUnit) -> BaseResolution:
        """Identify the class named by an identifier or `ns.Member` in an `extends` clause."""
        expression = unwrap_expression(expression)
        if expression is None:
            return BaseResolution(BaseKind.UNRESOLVED)
        if expression.type == "identifier":
            status, binding = self._resolve_name(expression, node_text(expression), unit)
        elif expression.type == "member_expression":
            status, binding = self._resolve_member(expression, unit)
        else:
            return BaseResolution(BaseKind.UNRESOLVED)

        if status == "parameter":
            return BaseResolution(BaseKind.PARAMETER)
        if status == "external":
            return BaseResolution(BaseKind.EXTERNAL)
        class_node = self._class_from_binding(binding)
        if class_node is not None:
            return BaseResolution(BaseKind.CLASS, class_node)
        return BaseResolution(BaseKind.UNRESOLVED)

    def resolve_mixin(self, call: Node, unit: SourceUnit) -> Optional[ClassNode]:
        """The class returned by a mixin function call such as `Focusable(Base)`."""
        callee = unwrap_expression(call.child_by_field_name("function"))
        if callee is None:
            return None
        if callee.type == "identifier":
            status, binding = self._resolve_name(callee, node_text(callee), unit)
        elif callee.type == "member_expression":
            status, binding = self._resolve_member(callee, unit)
        else:
            return None
        if status != "binding" or binding is None:
            return None

        node, owner = binding
        if node.type == "variable_declarator":
            node = unwrap_expression(node.child_by_field_name("value"))
        if node is None or node.type not in FUNCTION_NODE_TYPES:
            return None
        returned = self._returned_class(node)
        return ClassNode(returned, owner) if returned is not None else None

    @staticmethod
    def _returned_class(function_node: Node) -> Optional[Node]:
        body = function_node.child_by_field_name("body")
        if body is None:
            return None
        if body.type != "statement_block":
            returned = unwrap_expression(body)
            return returned if returned is not None and is_class_node(returned) else None

        return_statement = next((s for s in body.named_children if s.type == "return_statement"), None)
        returned = unwrap_expression(first_named_child(return_statement)) if return_statement else None
        if returned is not None:
            if is_class_node(returned):
                return returned
            if returned.type == "identifier":
                declaration = _block_binding(body, node_text(returned))
                if declaration is not None:
                    if declaration.type == "variable_declarator":
                        value = unwrap_expression(declaration.child_by_field_name("value"))
                        if value is not None and is_class_node(value):
                            return value
                    elif is_class_node(declaration):
                        return declaration

        return next((s for s in body.named_children if s.type in {"class_declaration", "abstract_class_declaration"}), None)

    # -- member types -----------------------------------------------------

    @staticmethod
    def declared_type_node(member: Node) -> Optional[Node]:
        annotation = member.child_by_field_name("type")
        if annotation is None and member.type == "method_definition":
            annotation = member.child_by_field_name("return_type")
        return _type_of_annotation(annotation)

    def type_text(self, member: Node) -> str:
        """Declared annotation text, else a type inferred from a literal initializer."""
        declared = self.declared_type_node(member)
        if declared is not None:
            return self.render(declared)
        value = unwrap_expression(member.child_by_field_name("value"))
        if value is None:
            return "any"
        if is_string_literal(value) or value.type == "template_string":
            return "string"
        if isinstance(literal_value(value), bool):
            return "boolean"
        if value.type == "number":
            return "number"
        if value.type == "array":
            return "any[]"
        if value.type == "new_expression":
            constructor = value.child_by_field_name("constructor")
            if constructor is not None:
                return node_text(constructor)
        return "any"

    @staticmethod
    def render(type_node: Node) -> str:
        return " ".join(node_text(type_node).split())

    def literal_union_members(self, type_node: Optional[Node], unit: SourceUnit) -> Optional[Tuple[str, ...]]:
        """
        String members of a literal union, following type aliases. Returns
        None when the type is not a union with at least one string literal.
        """
        type_node = _type_of_annotation(type_node)
        if type_node is None:
            return None
        values: List[str] = []
        if not self._collect_union(type_node, unit, values, set(), top=True):
            return None
        return tuple(values) if values else None

    def _collect_union(self, node: Node, unit: SourceUnit, values: List[str], seen: Set[Tuple[str, int]], top: bool = False) -> bool:
        if node.type == "parenthesized_type":
            inner = first_named_child(node)
            return inner is not None and self._collect_union(inner, unit, values, seen, top)
        if node.type == "union_type":
            for member in named_children(node):
                self._collect_union(member, unit, values, seen)
            return True
        if node.type == "literal_type":
            literal = first_named_child(node)
            if literal is not None and is_string_literal(literal):
                values.append(string_value(literal))
            return not top
        if node.type in {"type_identifier", "nested_type_identifier"}:
            alias = self._resolve_type_alias(node, unit)
            if alias is None:
                return False
            alias_node, alias_unit = alias
            key = (alias_unit.path, alias_node.start_byte)
            if key in seen:
                return False
            seen.add(key)
            value = alias_node.child_by_field_name("value")
            return value is not None and self._collect_union(value, alias_unit, values, seen, top)
        return False

    def _resolve_type_alias(self, node: Node, unit: SourceUnit) -> Optional[Binding]:
        if node.type == "nested_type_identifier":
            module_node = node.child_by_field_name("module")
            name_node = node.child_by_field_name("name")
            if module_node is None or name_node is None:
                return None
            binding = import_bindings(unit).get(node_text(module_node))
            if binding is None or binding.imported != "*" or not binding.is_relative:
                return None
            target = self.program.resolve_module(unit.directory, binding.specifier)
            found = self._type_symbols.resolve_export(target, node_text(name_node), set()) if target else None
        else:
            found = self._type_symbols.resolve_identifier(unit, node_text(node), set())
        if found is None or found[0].type != "type_alias_declaration":
            return None
        return found
