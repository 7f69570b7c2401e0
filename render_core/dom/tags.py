"""
Tag identity for the DOM.
This module defines the fixed set of known tags and the custom tag fallback.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, Union


class HtmlTag(Enum):
    """Tags the engine knows by name."""
    HTML = "html"
    HEAD = "head"
    BODY = "body"
    TITLE = "title"
    DIV = "div"
    SPAN = "span"
    P = "p"
    H1 = "h1"
    H2 = "h2"
    H3 = "h3"
    H4 = "h4"
    H5 = "h5"
    H6 = "h6"
    STRONG = "strong"
    SMALL = "small"
    BIG = "big"
    B = "b"
    W = "w"
    I = "i"
    U = "u"
    S = "s"
    A = "a"
    BR = "br"
    HR = "hr"
    IMG = "img"
    SCRIPT = "script"
    STYLE = "style"


@dataclass(frozen=True)
class CustomTag:
    """
    A tag outside the known set.

    The literal name is kept exactly as it appeared in the markup.
    """
    name: str


TagIdentity = Union[HtmlTag, CustomTag]

_KNOWN_TAGS = {tag.value: tag for tag in HtmlTag}

# Tags that never take children or a closing tag
VOID_TAGS: FrozenSet[HtmlTag] = frozenset({HtmlTag.BR, HtmlTag.HR, HtmlTag.IMG})

# Tags whose content is captured verbatim
RAW_TEXT_TAGS: FrozenSet[HtmlTag] = frozenset({HtmlTag.SCRIPT, HtmlTag.STYLE})

# Top-level tags relocated into <head> instead of <body>
HEAD_ONLY_TAGS: FrozenSet[HtmlTag] = frozenset({HtmlTag.TITLE})


def tag_for_name(name: str) -> TagIdentity:
    """
    Map a tag name onto its identity.

    Args:
        name: Tag name as written in the markup

    Returns:
        The matching HtmlTag (case-insensitive), or a CustomTag carrying the
        literal name
    """
    return _KNOWN_TAGS.get(name.lower()) or CustomTag(name)


def tag_name_of(tag: TagIdentity) -> str:
    """Return the name used to match a tag against type selectors and end tags."""
    if isinstance(tag, HtmlTag):
        return tag.value
    return tag.name.lower()
