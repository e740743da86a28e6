"""
Component class discovery.

Picks the one class in a file that represents the custom element, trying
strategies in a fixed order:

1. `export default class ...`
2. `export default Name;` where Name is a class declared in the file
3. a class decorated with `@customElement(...)` (bare or `ns.customElement`)
4. a class whose doc comment carries `@tagname`
5. the first declared class
"""

from dataclasses import dataclass
from typing import Optional

from ..models import DiscoveryMethod
from ..program import ClassNode
from ..treesitter.nodes import node_text
from .ast_visitor import SyntaxFacts
from .call_shapes import is_decorator_call

CUSTOM_ELEMENT_DECORATOR = "customElement"
TAGNAME_DOC_TAG = "tagname"


@dataclass(frozen=True)
class ComponentDiscovery:
    class_node: ClassNode
    method: DiscoveryMethod


def discover_component_class(facts: SyntaxFacts) -> Optional[ComponentDiscovery]:
    classes = facts.classes
    if not classes:
        return None

    for class_node in classes:
        if class_node.is_default_export:
            return ComponentDiscovery(class_node, DiscoveryMethod.DEFAULT_EXPORT)

    default_export = facts.default_export
    if default_export is not None and default_export.type == "identifier":
        export_name = node_text(default_export)
        for class_node in classes:
            if class_node.name == export_name:
                return ComponentDiscovery(class_node, DiscoveryMethod.DEFAULT_EXPORT)

    for class_node in classes:
        if any(is_decorator_call(d, CUSTOM_ELEMENT_DECORATOR) for d in facts.decorators_for(class_node)):
            return ComponentDiscovery(class_node, DiscoveryMethod.CUSTOM_ELEMENT)

    for class_node in classes:
        if any(tag.name == TAGNAME_DOC_TAG for tag in facts.doc_tags_for(class_node)):
            return ComponentDiscovery(class_node, DiscoveryMethod.TAGNAME_DOC)

    return ComponentDiscovery(classes[0], DiscoveryMethod.FIRST_CLASS)
