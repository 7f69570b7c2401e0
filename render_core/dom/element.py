"""
Element implementation for the DOM.
This module implements element nodes: a tag identity, attributes and children.
"""

from typing import Dict, Iterator, List, Optional, Tuple, Union

from .node import Node, NodeType
from .tags import HtmlTag, TagIdentity, VOID_TAGS, tag_for_name, tag_name_of


class Element(Node):
    """
    Element node implementation for the DOM.

    Attribute names are stored lower-cased and are unique; setting an
    attribute that already exists replaces its value in place, so the last
    occurrence in the markup wins.
    """

    def __init__(self,
                 tag: Union[TagIdentity, str],
                 attributes: Optional[List[Tuple[str, str]]] = None):
        """
        Initialize a new Element.

        Args:
            tag: Tag identity, or a tag name to look up
            attributes: Optional ordered (name, value) pairs
        """
        super().__init__(NodeType.ELEMENT_NODE)

        if isinstance(tag, str):
            tag = tag_for_name(tag)
        self.tag = tag

        self._attributes: Dict[str, str] = {}
        for name, value in attributes or ():
            self.set_attribute(name, value)

    @property
    def tag_name(self) -> str:
        """Lower-cased tag name, including custom tag names."""
        return tag_name_of(self.tag)

    @property
    def is_void(self) -> bool:
        """Check if this is a void element (never has children)."""
        return self.tag in VOID_TAGS

    def is_tag(self, tag: HtmlTag) -> bool:
        return self.tag is tag

    @property
    def attributes(self) -> List[Tuple[str, str]]:
        """Get the attributes as ordered (name, value) pairs."""
        return list(self._attributes.items())

    def get_attribute(self, name: str) -> Optional[str]:
        """
        Get an attribute value.

        Args:
            name: Attribute name (case-insensitive)

        Returns:
            The attribute value, or None if not present
        """
        return self._attributes.get(name.lower())

    def has_attribute(self, name: str) -> bool:
        return name.lower() in self._attributes

    def set_attribute(self, name: str, value: str) -> None:
        """
        Set an attribute value.

        Args:
            name: Attribute name
            value: Attribute value
        """
        self._attributes[name.lower()] = value if value is not None else ""

    def iter_attributes(self) -> Iterator[Tuple[str, str]]:
        return iter(self._attributes.items())

    @property
    def id(self) -> str:
        """Get the ID of the element."""
        return self.get_attribute('id') or ""

    @property
    def class_list(self) -> List[str]:
        """Get the whitespace-separated class tokens of the element."""
        class_attr = self.get_attribute('class') or ""
        return class_attr.split()

    def __repr__(self) -> str:
        return f"Element({self.tag_name!r}, attributes={self.attributes!r})"
