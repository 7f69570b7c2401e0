"""
CSS rules and declarations.
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from .selector import Selector, Specificity
from .values import StyleValue


@dataclass(frozen=True)
class Declaration:
    """
    One ``name: value`` pair of a declaration block.

    Attributes:
        name: Lower-cased property name
        raw: Value text as written
        value: Typed value
    """
    name: str
    raw: str
    value: StyleValue


@dataclass(frozen=True)
class CssRule:
    """
    A simple selector with its declarations.

    Attributes:
        selector: The selector this rule applies to
        declarations: Valid declarations in source order
        order: Index of the rule block in the combined stylesheet; every
            selector of one comma-separated group shares it
    """
    selector: Selector
    declarations: Tuple[Declaration, ...]
    order: int

    @property
    def specificity(self) -> Specificity:
        return self.selector.specificity

    def get(self, name: str) -> Optional[StyleValue]:
        """Return the last value declared for a property in this rule."""
        value = None
        for declaration in self.declarations:
            if declaration.name == name:
                value = declaration.value
        return value

    def __str__(self) -> str:
        body = "; ".join(f"{d.name}: {d.raw}" for d in self.declarations)
        return f"{self.selector} {{ {body} }}"
