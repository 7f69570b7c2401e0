"""
Simple CSS selectors.
This module parses and matches the four simple selector variants.
"""

import re
from dataclasses import dataclass
from typing import NamedTuple, Optional, Union

from ..dom.element import Element


class Specificity(NamedTuple):
    """Specificity triple, compared lexicographically."""
    ids: int
    classes: int
    types: int


@dataclass(frozen=True)
class UniversalSelector:
    """``*``: matches every element."""

    @property
    def specificity(self) -> Specificity:
        return Specificity(0, 0, 1)

    def matches(self, element: Element) -> bool:
        return True

    def __str__(self) -> str:
        return "*"


@dataclass(frozen=True)
class TypeSelector:
    """A tag name; custom tags match by their name too."""
    tag_name: str

    @property
    def specificity(self) -> Specificity:
        return Specificity(0, 0, 1)

    def matches(self, element: Element) -> bool:
        return element.tag_name == self.tag_name

    def __str__(self) -> str:
        return self.tag_name


@dataclass(frozen=True)
class ClassSelector:
    """``.name``: matches when the class attribute holds the token."""
    class_name: str

    @property
    def specificity(self) -> Specificity:
        return Specificity(0, 1, 0)

    def matches(self, element: Element) -> bool:
        return self.class_name in element.class_list

    def __str__(self) -> str:
        return f".{self.class_name}"


@dataclass(frozen=True)
class IdSelector:
    """``#name``: matches when the id attribute equals the value exactly."""
    element_id: str

    @property
    def specificity(self) -> Specificity:
        return Specificity(1, 0, 0)

    def matches(self, element: Element) -> bool:
        return element.get_attribute('id') == self.element_id

    def __str__(self) -> str:
        return f"#{self.element_id}"


Selector = Union[UniversalSelector, TypeSelector, ClassSelector, IdSelector]

_TYPE_NAME = re.compile(r'^[a-zA-Z][-_a-zA-Z0-9]*$')
_NAME = re.compile(r'^[-_a-zA-Z0-9\u00a0-\uffff]+$')


def parse_selector(text: str) -> Optional[Selector]:
    """
    Parse one simple selector.

    Args:
        text: Selector text such as ``p``, ``.note``, ``#main`` or ``*``

    Returns:
        The selector, or None if the text is not a single simple selector
    """
    text = text.strip()
    if not text:
        return None

    if text == '*':
        return UniversalSelector()

    if text[0] == '.':
        name = text[1:]
        return ClassSelector(name) if _NAME.match(name) else None

    if text[0] == '#':
        name = text[1:]
        return IdSelector(name) if _NAME.match(name) else None

    if _TYPE_NAME.match(text):
        return TypeSelector(text.lower())

    return None
