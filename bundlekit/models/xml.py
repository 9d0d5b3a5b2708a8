"""
Compiled XML document model.

A manifest is stored in a module as a serialized tree of XmlNode messages.
Element and attribute names are matched together with their namespace URI.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import Field

from ..core.serialization import Message


class Primitive(Message):
    """Compiled primitive value of an attribute."""

    boolean_value: bool | None = None
    int_decimal_value: int | None = None


class Item(Message):
    """Compiled attribute value."""

    prim: Primitive | None = None


class XmlNamespace(Message):
    """Namespace declaration on an element."""

    prefix: str = ""
    uri: str = ""


class XmlAttribute(Message):
    """Attribute of an XML element."""

    namespace_uri: str = ""
    name: str = ""
    value: str = ""
    resource_id: int = 0
    compiled_item: Item | None = None


class XmlElement(Message):
    """XML element with its attributes and children."""

    namespace_declaration: tuple[XmlNamespace, ...] = ()
    namespace_uri: str = ""
    name: str = ""
    attribute: tuple[XmlAttribute, ...] = ()
    child: tuple[XmlNode, ...] = ()

    def child_elements(self) -> Iterator[XmlElement]:
        """Child nodes that are elements, skipping text nodes."""
        return (node.element for node in self.child if node.element is not None)

    def children_named(self, namespace_uri: str, name: str) -> Iterator[XmlElement]:
        return (
            element
            for element in self.child_elements()
            if element.namespace_uri == namespace_uri and element.name == name
        )

    def first_child_named(self, namespace_uri: str, name: str) -> XmlElement | None:
        return next(self.children_named(namespace_uri, name), None)

    def find_attribute(self, namespace_uri: str, name: str) -> XmlAttribute | None:
        for attribute in self.attribute:
            if attribute.namespace_uri == namespace_uri and attribute.name == name:
                return attribute
        return None


class XmlNode(Message):
    """Either an element or a text node."""

    element: XmlElement | None = None
    text: str | None = Field(default=None, description="Character data of a text node")


XmlElement.model_rebuild()
XmlNode.model_rebuild()
