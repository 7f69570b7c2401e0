"""
Document object model for parsed markup.
"""

from .tags import CustomTag, HtmlTag, TagIdentity, tag_for_name
from .node import Node, NodeType
from .text import Text
from .element import Element
from .document import Document

__all__ = [
    'CustomTag', 'HtmlTag', 'TagIdentity', 'tag_for_name',
    'Node', 'NodeType', 'Text', 'Element', 'Document',
]
