"""
Typed CSS values.
This module parses declaration values into lengths, colours and keywords.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Union

from cssutils.css.colors import COLORS

logger = logging.getLogger(__name__)


class LengthUnit(Enum):
    """Units a length may carry; values are their CSS spelling."""
    PX = "px"
    EM = "em"
    REM = "rem"
    PERCENT = "%"


class ValueKind(Enum):
    """The value grammar a property accepts."""
    LENGTH = "length"
    COLOR = "color"
    KEYWORD = "keyword"


@dataclass(frozen=True)
class Length:
    """A number with a unit, kept unresolved."""
    value: float
    unit: LengthUnit

    def __str__(self) -> str:
        number = int(self.value) if float(self.value).is_integer() else self.value
        return f"{number}{self.unit.value}"


@dataclass(frozen=True)
class Color:
    """
    An RGBA colour, each channel 0-255.

    Colours written with ``hsl()``/``hsla()`` carry hue, saturation and
    lightness in the first three channels unconverted.
    """
    r: int
    g: int
    b: int
    a: int = 255

    def __str__(self) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {self.a})"


@dataclass(frozen=True)
class Keyword:
    """A literal keyword value."""
    value: str

    def __str__(self) -> str:
        return self.value


StyleValue = Union[Length, Color, Keyword]


PROPERTY_KINDS: Mapping[str, ValueKind] = MappingProxyType({
    # Colours
    'color': ValueKind.COLOR,
    'text-color': ValueKind.COLOR,
    'background-color': ValueKind.COLOR,
    'border-color': ValueKind.COLOR,

    # Box lengths
    'padding': ValueKind.LENGTH,
    'padding-top': ValueKind.LENGTH,
    'padding-right': ValueKind.LENGTH,
    'padding-bottom': ValueKind.LENGTH,
    'padding-left': ValueKind.LENGTH,
    'margin': ValueKind.LENGTH,
    'margin-top': ValueKind.LENGTH,
    'margin-right': ValueKind.LENGTH,
    'margin-bottom': ValueKind.LENGTH,
    'margin-left': ValueKind.LENGTH,
    'border-width': ValueKind.LENGTH,
    'border-radius': ValueKind.LENGTH,
    'border-radius-ne': ValueKind.LENGTH,
    'border-radius-nw': ValueKind.LENGTH,
    'border-radius-se': ValueKind.LENGTH,
    'border-radius-sw': ValueKind.LENGTH,
    'font-size': ValueKind.LENGTH,
    'width': ValueKind.LENGTH,
    'height': ValueKind.LENGTH,

    # Keywords
    'font-weight': ValueKind.KEYWORD,
    'font-style': ValueKind.KEYWORD,
    'text-decoration': ValueKind.KEYWORD,
    'display': ValueKind.KEYWORD,
    'text-align': ValueKind.KEYWORD,
})


def _alpha_to_channel(alpha: float) -> int:
    """Clamp a 0-1 alpha to the range and scale it to 0-255."""
    return int(round(min(max(alpha, 0.0), 1.0) * 255))


NAMED_COLORS: Mapping[str, Color] = MappingProxyType({
    name: Color(r, g, b, _alpha_to_channel(a))
    for name, (r, g, b, a) in COLORS.items()
})

_HEX_COLOR = re.compile(r'^#([0-9a-f]{3,4}|[0-9a-f]{6}|[0-9a-f]{8})$', re.I)

_FUNCTION_COLOR = re.compile(
    r'^(rgb|rgba|hsl|hsla)\(\s*'
    r'([+-]?\d+)\s*,\s*([+-]?\d+)\s*,\s*([+-]?\d+)'
    r'(?:\s*,\s*([+-]?(?:\d+\.?\d*|\.\d+)))?'
    r'\s*\)$',
    re.I
)

_LENGTH = re.compile(r'^([+-]?(?:\d+\.?\d*|\.\d+))(px|em|rem|%)$', re.I)

_UNITS = {unit.value: unit for unit in LengthUnit}


def parse_color(text: str) -> Optional[Color]:
    """
    Parse a colour value.

    Accepts ``#rgb``, ``#rgba``, ``#rrggbb``, ``#rrggbbaa``, ``rgb()``,
    ``rgba()``, ``hsl()``, ``hsla()`` and the CSS colour keywords. Function
    arguments are integers 0-255; the optional fourth one is an alpha
    between 0 and 1.

    Args:
        text: Raw value text

    Returns:
        The colour, or None if the text is not a valid colour
    """
    text = text.strip()

    match = _HEX_COLOR.match(text)
    if match:
        digits = match.group(1)
        if len(digits) <= 4:
            digits = "".join(digit * 2 for digit in digits)
        channels = [int(digits[i:i + 2], 16) for i in range(0, len(digits), 2)]
        if len(channels) == 3:
            channels.append(255)
        return Color(*channels)

    match = _FUNCTION_COLOR.match(text)
    if match:
        function = match.group(1).lower()
        channels = [int(match.group(i)) for i in (2, 3, 4)]
        alpha = match.group(5)

        # rgb/hsl take exactly three arguments, rgba/hsla exactly four
        if function.endswith('a') != (alpha is not None):
            return None
        if any(channel < 0 or channel > 255 for channel in channels):
            return None

        a = _alpha_to_channel(float(alpha)) if alpha is not None else 255
        return Color(channels[0], channels[1], channels[2], a)

    return NAMED_COLORS.get(text.lower())


def parse_length(text: str) -> Optional[Length]:
    """
    Parse a length value.

    A unit is always required; lengths are stored without conversion.

    Args:
        text: Raw value text such as ``12px`` or ``50%``

    Returns:
        The length, or None if the text is not a valid length
    """
    match = _LENGTH.match(text.strip())
    if not match:
        return None
    return Length(float(match.group(1)), _UNITS[match.group(2).lower()])


def parse_keyword(text: str) -> Optional[Keyword]:
    """Wrap any non-empty value text as a keyword."""
    text = text.strip()
    if not text:
        return None
    return Keyword(text)


_PARSERS = {
    ValueKind.LENGTH: parse_length,
    ValueKind.COLOR: parse_color,
    ValueKind.KEYWORD: parse_keyword,
}


def parse_property_value(name: str, raw: str) -> Optional[StyleValue]:
    """
    Parse a declaration value according to the property's value kind.

    Args:
        name: Property name (case-insensitive)
        raw: Value text

    Returns:
        The typed value, or None when the property is unknown or the value
        does not fit its kind
    """
    kind = PROPERTY_KINDS.get(name.lower())
    if kind is None:
        return None
    return _PARSERS[kind](raw)
