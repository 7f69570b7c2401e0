"""
Document implementation for the DOM.
This module implements the normalized document produced by the markup parser.
"""

import logging
from typing import Any, Iterator, List, Mapping, Optional

from .node import Node, NodeType
from .element import Element
from .tags import HtmlTag
from ..utils.diagnostics import ParseDiagnostics

logger = logging.getLogger(__name__)


class Document:
    """
    A parsed, normalized HTML document.

    The document owns exactly one ``html`` root element whose only children
    are one ``head`` and one ``body``. Every node of the tree is also reachable
    through an arena indexed by ``node_id``; ids are pre-order positions and
    stay stable for the lifetime of the document.
    """

    def __init__(self,
                 root: Element,
                 stylesheet_text: str = "",
                 diagnostics: Optional[ParseDiagnostics] = None):
        """
        Initialize a new Document.

        Args:
            root: The normalized ``html`` element
            stylesheet_text: Combined text of every style element, in document order
            diagnostics: Counters collected while parsing
        """
        if not root.is_tag(HtmlTag.HTML):
            raise ValueError("Document root must be an <html> element")

        self.document_element = root
        self.stylesheet_text = stylesheet_text
        self.diagnostics = diagnostics if diagnostics is not None else ParseDiagnostics()

        self.head: Optional[Element] = None
        self.body: Optional[Element] = None
        for child in root.children:
            if child.is_tag(HtmlTag.HEAD) and self.head is None:
                self.head = child
            elif child.is_tag(HtmlTag.BODY) and self.body is None:
                self.body = child

        self._nodes: List[Node] = []
        self._index_nodes()

    def _index_nodes(self) -> None:
        """Assign arena ids in document order."""
        self._nodes = list(self.document_element.iter_descendants())
        for node_id, node in enumerate(self._nodes):
            node.node_id = node_id

        logger.debug(f"Indexed {len(self._nodes)} nodes")

    @property
    def nodes(self) -> List[Node]:
        """All nodes, indexed by node_id."""
        return list(self._nodes)

    def get_node(self, node_id: int) -> Node:
        """
        Look up a node by its arena id.

        Raises:
            IndexError: If no node has that id
        """
        if node_id < 0:
            raise IndexError(f"Invalid node id: {node_id}")
        return self._nodes[node_id]

    def iter_elements(self) -> Iterator[Element]:
        """Iterate over every element in document order."""
        for node in self._nodes:
            if node.node_type == NodeType.ELEMENT_NODE:
                yield node

    def get_elements_by_tag_name(self, tag_name: str) -> List[Element]:
        """
        Get all elements with the given tag name.

        Args:
            tag_name: Tag name, compared case-insensitively

        Returns:
            Matching elements in document order
        """
        tag_name = tag_name.lower()
        return [element for element in self.iter_elements() if element.tag_name == tag_name]

    @property
    def title(self) -> str:
        """Get the stripped text of the first <title> in the head."""
        if self.head is None:
            return ""

        for child in self.head.children:
            if child.is_tag(HtmlTag.TITLE):
                return child.text_content.strip()
        return ""

    def dump(self, styles: Optional[Mapping[int, Mapping[str, Any]]] = None) -> str:
        """
        Render the tree as indented text for debugging.

        Args:
            styles: Optional computed styles keyed by node_id; when given,
                each element's properties are listed under it

        Returns:
            The rendered tree
        """
        lines: List[str] = []

        def rec(node: Node, indent: int) -> None:
            pad = "  " * indent
            if node.node_type == NodeType.TEXT_NODE:
                text = node.data.strip()
                if text:
                    lines.append(f'{pad}TEXT: "{text}"')
                return

            attributes = "".join(f' {name}="{value}"' for name, value in node.iter_attributes())
            lines.append(f"{pad}<{node.tag_name}{attributes}>")

            if styles is not None:
                for name, value in sorted((styles.get(node.node_id) or {}).items()):
                    lines.append(f"{pad}  {name}: {value}")

            for child in node.child_nodes:
                rec(child, indent + 1)

        rec(self.document_element, 0)
        return "\n".join(lines)
