"""
CSS data model and cascade.
"""

from .values import (
    Color,
    Keyword,
    Length,
    LengthUnit,
    NAMED_COLORS,
    PROPERTY_KINDS,
    StyleValue,
    ValueKind,
    parse_color,
    parse_keyword,
    parse_length,
    parse_property_value,
)
from .selector import (
    ClassSelector,
    IdSelector,
    Selector,
    Specificity,
    TypeSelector,
    UniversalSelector,
    parse_selector,
)
from .rule import CssRule, Declaration
from .cascade import ComputedStyle, StyleResolver, StyleTable, resolve_styles

__all__ = [
    'Color', 'Keyword', 'Length', 'LengthUnit', 'NAMED_COLORS', 'PROPERTY_KINDS',
    'StyleValue', 'ValueKind', 'parse_color', 'parse_keyword', 'parse_length',
    'parse_property_value',
    'ClassSelector', 'IdSelector', 'Selector', 'Specificity', 'TypeSelector',
    'UniversalSelector', 'parse_selector',
    'CssRule', 'Declaration',
    'ComputedStyle', 'StyleResolver', 'StyleTable', 'resolve_styles',
]
