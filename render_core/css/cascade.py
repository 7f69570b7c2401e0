"""
Cascade resolver.
This module computes the style of every element from a rule list.
"""

import logging
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Union

from ..dom.document import Document
from ..dom.element import Element
from ..dom.node import NodeType
from .rule import CssRule
from .values import StyleValue

logger = logging.getLogger(__name__)


class ComputedStyle(Mapping[str, StyleValue]):
    """Read-only property name to value mapping for one element."""

    __slots__ = ('_values',)

    def __init__(self, values: Optional[Mapping[str, StyleValue]] = None):
        self._values: Dict[str, StyleValue] = dict(values or {})

    def __getitem__(self, name: str) -> StyleValue:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other) -> bool:
        if isinstance(other, ComputedStyle):
            return self._values == other._values
        if isinstance(other, Mapping):
            return self._values == dict(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._values.items()))

    def __repr__(self) -> str:
        return f"ComputedStyle({self._values!r})"


# node_id -> computed style, one entry per element
StyleTable = Dict[int, ComputedStyle]


class StyleResolver:
    """
    Applies rules to elements by specificity, then source order.

    Styles are never inherited: each element is resolved only from the rules
    matching it.
    """

    def resolve(self, target: Union[Document, Element], rules: Sequence[CssRule]) -> StyleTable:
        """
        Compute the style of every element under ``target``.

        Args:
            target: A Document, or an element whose subtree is resolved
            rules: Rules in source order

        Returns:
            A new style table keyed by node_id

        Raises:
            TypeError: If target is neither a Document nor an Element
        """
        if isinstance(target, Document):
            root = target.document_element
        elif isinstance(target, Element):
            root = target
        else:
            raise TypeError(f"Cannot resolve styles for {type(target).__name__}")

        styles: StyleTable = {}
        for index, node in enumerate(root.iter_descendants()):
            if node.node_type != NodeType.ELEMENT_NODE:
                continue
            key = node.node_id if node.node_id is not None else index
            styles[key] = self.compute(node, rules)

        logger.debug(f"Resolved styles for {len(styles)} elements against {len(rules)} rules")
        return styles

    def compute(self, element: Element, rules: Sequence[CssRule]) -> ComputedStyle:
        """
        Compute the style of a single element.

        Args:
            element: The element to style
            rules: Rules in source order

        Returns:
            The merged declarations of every matching rule
        """
        matching: List[CssRule] = [rule for rule in rules if rule.selector.matches(element)]
        # Stable sort: rules with equal keys stay in list order
        matching.sort(key=lambda rule: (rule.specificity, rule.order))

        merged: Dict[str, StyleValue] = {}
        for rule in matching:
            for declaration in rule.declarations:
                merged[declaration.name] = declaration.value
        return ComputedStyle(merged)


def resolve_styles(target: Union[Document, Element], rules: Sequence[CssRule]) -> StyleTable:
    """
    Compute the style table of a document or subtree.

    Args:
        target: A Document or Element
        rules: Rules in source order

    Returns:
        The style table keyed by node_id
    """
    return StyleResolver().resolve(target, rules)
