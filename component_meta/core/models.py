"""
Core data models for component metadata.

This module contains pure data structures describing what was extracted
from a component source file. They carry no resolution logic.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple, Union

DefaultValue = Optional[Union[str, int, float, bool]]


class PropertyType(str, Enum):
    """Normalized semantic type of a component property."""
    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"
    UNKNOWN = "unknown"


class PropertyVisibility(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"


class TagNameSource(str, Enum):
    """Provenance tier that produced a tag name."""
    DOC_TAG = "doc-tag"
    REGISTRATION_FILE = "registration-file"
    FILENAME = "filename"


class DiscoveryMethod(str, Enum):
    """How the component class was picked out of its file."""
    DEFAULT_EXPORT = "default-export"
    CUSTOM_ELEMENT = "custom-element"
    TAGNAME_DOC = "tagname-jsdoc"
    FIRST_CLASS = "first-class"


@dataclass(frozen=True)
class PropertyDescriptor:
    """A `@property` member. Identity key is `name`."""
    name: str
    type: PropertyType
    ts_type: str
    attribute: Optional[str]  # None when reflection is suppressed with `attribute: false`
    reflect: bool = False
    default_value: DefaultValue = None
    doc: Optional[str] = None
    visibility: PropertyVisibility = PropertyVisibility.PUBLIC
    enum_values: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "ts_type": self.ts_type,
            "attribute": self.attribute,
            "reflect": self.reflect,
            "default_value": self.default_value,
            "doc": self.doc,
            "visibility": self.visibility.value,
        }
        if self.enum_values is not None:
            data["enum_values"] = list(self.enum_values)
        return data


@dataclass(frozen=True)
class EventDescriptor:
    """An emitted event. Identity key is `name`."""
    name: str
    react_handler: str
    detail_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "react_handler": self.react_handler,
            "detail_type": self.detail_type,
        }


@dataclass(frozen=True)
class AttributeDescriptor:
    """An HTML attribute backed by a property."""
    name: str
    property_name: str
    type: PropertyType
    reflect: bool = False
    default_value: DefaultValue = None
    doc: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "property_name": self.property_name,
            "type": self.type.value,
            "reflect": self.reflect,
            "default_value": self.default_value,
            "doc": self.doc,
        }


@dataclass(frozen=True)
class TagNameResolution:
    tag_name: str
    source: TagNameSource
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class TagNameResult:
    tag_name: str
    source: TagNameSource


@dataclass(frozen=True)
class ClassSource:
    discovery_method: DiscoveryMethod
    file_path: str


@dataclass(frozen=True)
class ComponentModel:
    """The terminal artifact handed to emitters."""
    class_name: str
    tag_name: str
    file_path: str
    component_dir: str
    import_path: str
    props: Tuple[PropertyDescriptor, ...] = ()
    attributes: Tuple[AttributeDescriptor, ...] = ()
    events: Tuple[EventDescriptor, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "class_name": self.class_name,
            "tag_name": self.tag_name,
            "file_path": self.file_path,
            "component_dir": self.component_dir,
            "import_path": self.import_path,
            "props": [prop.to_dict() for prop in self.props],
            "attributes": [attribute.to_dict() for attribute in self.attributes],
            "events": [event.to_dict() for event in self.events],
        }
