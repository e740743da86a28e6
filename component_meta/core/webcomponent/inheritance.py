"""
Inheritance chain resolution.

Starting from the component class, every `extends` expression is followed
to the class it names and that class's own bases are collected first, so
the finished chain runs base-first and ends with the component. Mixin calls
contribute their arguments' chains and then the class the mixin returns.
"""

import logging
from dataclasses import dataclass
from typing import List, Set, Tuple

from tree_sitter import Node

from ..program import ClassNode, SourceUnit
from ..treesitter.nodes import call_arguments, node_text, unwrap_expression
from ..type_resolver import BaseKind, TypeResolver

logger = logging.getLogger(__name__)

MIXIN_ARGUMENT_TYPES = {"identifier", "member_expression", "call_expression"}


@dataclass(frozen=True)
class ClassChain:
    classes: Tuple[ClassNode, ...]
    unresolved: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    @property
    def component(self) -> ClassNode:
        return self.classes[-1]


def resolve_inheritance_chain(class_node: ClassNode, type_resolver: TypeResolver) -> ClassChain:
    chain: List[ClassNode] = []
    unresolved: List[str] = []
    warnings: List[str] = []
    seen: Set[Tuple[str, int, int]] = set()

    def report(expression: Node, warn: bool) -> None:
        text = " ".join(node_text(expression).split())
        unresolved.append(text)
        if warn:
            warnings.append(f"Unable to resolve base class for expression: {text}")

    def collect_class(current: ClassNode) -> None:
        if current.key in seen:
            return
        seen.add(current.key)
        for expression in current.extends_expressions():
            collect_expression(expression, current.unit)
        chain.append(current)

    def collect_expression(expression: Node, unit: SourceUnit) -> None:
        expression = unwrap_expression(expression)
        if expression is None:
            return
        if expression.type == "call_expression":
            for argument in call_arguments(expression):
                inner = unwrap_expression(argument)
                if inner is not None and inner.type in MIXIN_ARGUMENT_TYPES:
                    collect_expression(inner, unit)
            mixin_class = type_resolver.resolve_mixin(expression, unit)
            if mixin_class is not None:
                collect_class(mixin_class)
            else:
                report(expression, warn=True)
            return

        resolution = type_resolver.resolve_base(expression, unit)
        if resolution.kind == BaseKind.CLASS:
            collect_class(resolution.class_node)
        elif resolution.kind == BaseKind.EXTERNAL:
            logger.debug(f"Stopping chain at external base {node_text(expression)}")
            report(expression, warn=False)
        elif resolution.kind == BaseKind.UNRESOLVED:
            report(expression, warn=True)

    collect_class(class_node)
    return ClassChain(classes=tuple(chain), unresolved=tuple(unresolved), warnings=tuple(warnings))
