"""
Component model mapping: attributes from properties, the import path, and
the final ComponentModel handed to emitters.
"""

import posixpath
from typing import Iterable, List, Optional

from ..models import AttributeDescriptor, ComponentModel, EventDescriptor, PropertyDescriptor
from ..utils import merge_by_key, normalize_path

UNKNOWN_COMPONENT_NAME = "UnknownComponent"


def derive_import_path(component_dir: str, marker: str = "components") -> str:
    """
    Import path of a component directory, taken from the last `/<marker>/`
    segment onwards; the directory name when the marker is absent.
    """
    normalized = normalize_path(component_dir)
    index = normalized.rfind(f"/{marker}/")
    if index >= 0:
        return normalized[index + 1:]
    return posixpath.basename(normalized)


def map_property_to_attribute(prop: PropertyDescriptor) -> Optional[AttributeDescriptor]:
    if not prop.attribute:
        return None
    return AttributeDescriptor(
        name=prop.attribute,
        property_name=prop.name,
        type=prop.type,
        reflect=prop.reflect,
        default_value=prop.default_value,
        doc=prop.doc,
    )


def map_properties_to_attributes(props: Iterable[PropertyDescriptor]) -> List[AttributeDescriptor]:
    mapped = [attribute for attribute in map(map_property_to_attribute, props) if attribute is not None]
    return list(merge_by_key(mapped, lambda attribute: attribute.name).values())


def map_component_model(
    class_name: Optional[str],
    tag_name: str,
    file_path: str,
    component_dir: str,
    props: Iterable[PropertyDescriptor] = (),
    events: Iterable[EventDescriptor] = (),
    import_marker: str = "components",
) -> ComponentModel:
    props = tuple(props)
    return ComponentModel(
        class_name=(class_name or "").strip() or UNKNOWN_COMPONENT_NAME,
        tag_name=tag_name,
        file_path=normalize_path(file_path),
        component_dir=normalize_path(component_dir),
        import_path=derive_import_path(component_dir, import_marker),
        props=props,
        attributes=tuple(map_properties_to_attributes(props)),
        events=tuple(events),
    )
