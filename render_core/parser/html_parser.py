"""
HTML parser implementation.
This module builds a normalized document tree from raw markup.
"""

import logging
from typing import List, Optional, Tuple

from ..dom.document import Document
from ..dom.element import Element
from ..dom.node import Node, NodeType
from ..dom.tags import HEAD_ONLY_TAGS, HtmlTag, VOID_TAGS, tag_for_name, tag_name_of
from ..dom.text import Text
from ..utils.config import Config
from ..utils.diagnostics import ParseDiagnostics, IMPLICITLY_CLOSED, STRAY_END_TAG
from .html_tokenizer import CharacterToken, EndTagToken, HTMLTokenizer, StartTagToken

logger = logging.getLogger(__name__)


class _Fragment(Node):
    """Temporary container for top-level content before normalization."""

    tag_name = "#fragment"

    def __init__(self):
        super().__init__(NodeType.ELEMENT_NODE)


class HTMLParser:
    """
    Lenient HTML parser.

    Parsing never fails: stray end tags are dropped, unclosed elements are
    closed when an ancestor closes or the input ends, and the result always
    has a single ``html`` root with one ``head`` and one ``body``.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the HTML parser.

        Args:
            config: Optional configuration; ``html.decode_entities`` and
                ``html.keep_whitespace_text`` are read from it
        """
        config = config or Config()
        self.decode_entities = bool(config.get('html.decode_entities', True))
        self.keep_whitespace_text = bool(config.get('html.keep_whitespace_text', False))

        logger.debug("HTML parser initialized")

    def parse(self, html_content: str) -> Document:
        """
        Parse HTML content into a Document.

        Args:
            html_content: The complete markup document

        Returns:
            The normalized Document
        """
        diagnostics = ParseDiagnostics()
        fragment, style_elements = self._build_tree(html_content or "", diagnostics)
        root = self._normalize(fragment)
        stylesheet_text = self._collect_stylesheet_text(style_elements)

        document = Document(root, stylesheet_text, diagnostics)
        logger.debug(f"Parsed document with {len(document.nodes)} nodes, "
                     f"{len(stylesheet_text)} characters of stylesheet text")
        return document

    def _build_tree(self, html_content: str,
                    diagnostics: ParseDiagnostics) -> Tuple[_Fragment, List[Element]]:
        """
        Run the tokenizer and build the raw (unnormalized) tree.

        Args:
            html_content: Markup to parse
            diagnostics: Where to record repairs

        Returns:
            Tuple of a fragment holding the top-level nodes and every
            <style> element in source order
        """
        fragment = _Fragment()
        open_elements: List[Node] = [fragment]
        style_elements: List[Element] = []
        tokenizer = HTMLTokenizer(html_content, self.decode_entities, diagnostics)

        for token in tokenizer.tokens():
            current = open_elements[-1]

            if isinstance(token, StartTagToken):
                element = Element(tag_for_name(token.name), token.attributes)
                current.append_child(element)
                if element.is_tag(HtmlTag.STYLE):
                    style_elements.append(element)
                if not token.self_closing and element.tag not in VOID_TAGS:
                    open_elements.append(element)

            elif isinstance(token, EndTagToken):
                name = tag_name_of(tag_for_name(token.name))
                for depth in range(len(open_elements) - 1, 0, -1):
                    if open_elements[depth].tag_name == name:
                        for unclosed in open_elements[depth + 1:]:
                            diagnostics.record(IMPLICITLY_CLOSED,
                                               f"<{unclosed.tag_name}> closed by </{name}>")
                        del open_elements[depth:]
                        break
                else:
                    diagnostics.record(STRAY_END_TAG, f"</{token.name}> has no open element")

            elif isinstance(token, CharacterToken):
                self._append_text(current, token)

        for unclosed in open_elements[1:]:
            diagnostics.record(IMPLICITLY_CLOSED, f"<{unclosed.tag_name}> closed at end of input")

        return fragment, style_elements

    def _append_text(self, parent: Node, token: CharacterToken) -> None:
        """Append character data, merging with a preceding text node."""
        if parent.child_nodes and parent.child_nodes[-1].node_type == NodeType.TEXT_NODE:
            parent.child_nodes[-1].append_data(token.data)
        else:
            parent.append_child(Text(token.data))

    def _normalize(self, fragment: _Fragment) -> Element:
        """
        Ensure the html/head/body skeleton.

        Args:
            fragment: The raw tree

        Returns:
            The ``html`` root element
        """
        html: Optional[Element] = None
        head: Optional[Element] = None
        body: Optional[Element] = None
        head_content: List[Node] = []
        body_content: List[Node] = []

        def place(node: Node) -> None:
            nonlocal html, head, body
            if node.node_type == NodeType.ELEMENT_NODE:
                if node.is_tag(HtmlTag.HTML):
                    if html is None:
                        html = node
                    else:
                        logger.debug("Merging duplicate <html> into the first one")
                    for child in list(node.child_nodes):
                        place(child)
                    return
                if node.is_tag(HtmlTag.HEAD):
                    if head is None:
                        head = node
                    else:
                        logger.debug("Merging duplicate <head> into the first one")
                    head_content.extend(node.child_nodes)
                    return
                if node.is_tag(HtmlTag.BODY):
                    if body is None:
                        body = node
                    else:
                        logger.debug("Merging duplicate <body> into the first one")
                    body_content.extend(node.child_nodes)
                    return
                if node.tag in HEAD_ONLY_TAGS:
                    head_content.append(node)
                    return
            body_content.append(node)

        for node in list(fragment.child_nodes):
            place(node)

        if html is None:
            logger.debug("Synthesizing <html> root")
            html = Element(HtmlTag.HTML)
        if head is None:
            head = Element(HtmlTag.HEAD)
        if body is None:
            body = Element(HtmlTag.BODY)

        for container in (html, head, body):
            for child in list(container.child_nodes):
                container.remove_child(child)

        # The root keeps no link to the temporary fragment
        if html.parent_node is not None:
            html.parent_node.remove_child(html)

        for node in head_content:
            self._adopt(head, node)
        for node in body_content:
            self._adopt(body, node)

        html.append_child(head)
        html.append_child(body)

        if not self.keep_whitespace_text:
            self._drop_whitespace_text(html)

        return html

    def _adopt(self, parent: Element, node: Node) -> None:
        """Move a node under a new parent, merging adjacent text."""
        if node.node_type == NodeType.TEXT_NODE and parent.child_nodes \
                and parent.child_nodes[-1].node_type == NodeType.TEXT_NODE:
            parent.child_nodes[-1].append_data(node.data)
            old_parent = node.parent_node
            if old_parent is not None:
                old_parent.remove_child(node)
            return
        parent.append_child(node)

    def _drop_whitespace_text(self, root: Element) -> None:
        """Remove whitespace-only text nodes outside raw text elements."""
        for node in list(root.iter_descendants()):
            if node.node_type != NodeType.ELEMENT_NODE:
                continue
            if node.tag in (HtmlTag.SCRIPT, HtmlTag.STYLE):
                continue
            for child in list(node.child_nodes):
                if child.node_type == NodeType.TEXT_NODE and not child.data.strip():
                    node.remove_child(child)

    def _collect_stylesheet_text(self, style_elements: List[Element]) -> str:
        """
        Concatenate the raw content of <style> elements.

        Normalization moves nodes between head and body, so the order comes
        from the source rather than from the final tree.

        Args:
            style_elements: Style elements in source order

        Returns:
            Combined stylesheet text
        """
        return "\n".join(element.text_content for element in style_elements)


def parse_html(html_content: str, config: Optional[Config] = None) -> Document:
    """
    Parse markup into a normalized Document.

    Args:
        html_content: The complete markup document
        config: Optional configuration

    Returns:
        The parsed Document
    """
    return HTMLParser(config).parse(html_content)
