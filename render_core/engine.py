"""
Render engine facade.
This module runs markup parsing, stylesheet parsing and the cascade as one
pipeline and bundles the results.
"""

import logging
from typing import List, Optional

from .css.cascade import ComputedStyle, StyleResolver, StyleTable
from .css.rule import CssRule
from .dom.document import Document
from .dom.node import Node
from .parser.css_parser import CSSParser
from .parser.html_parser import HTMLParser
from .utils.config import Config
from .utils.diagnostics import ParseDiagnostics
from .utils.logging import PerformanceLogger, configure_from

logger = logging.getLogger(__name__)


class StyledDocument:
    """
    A parsed document together with its rules and computed styles.

    Attributes:
        document: The normalized tree
        rules: Rules parsed from the document's stylesheet text
        styles: Computed style of every element, keyed by node_id
        diagnostics: Combined markup and stylesheet parse diagnostics
    """

    def __init__(self, document: Document, rules: List[CssRule], styles: StyleTable,
                 diagnostics: Optional[ParseDiagnostics] = None):
        self.document = document
        self.rules = rules
        self.styles = styles
        self.diagnostics = diagnostics if diagnostics is not None else document.diagnostics

    @property
    def title(self) -> str:
        return self.document.title

    def style_for(self, node: Node) -> ComputedStyle:
        """
        Get the computed style of a node.

        Args:
            node: A node of this document

        Returns:
            The node's style; text nodes get an empty style
        """
        style = self.styles.get(node.node_id)
        return style if style is not None else ComputedStyle()

    def dump(self) -> str:
        """Render the tree with every element's computed style."""
        return self.document.dump(self.styles)

    def __repr__(self) -> str:
        return (f"StyledDocument(title={self.title!r}, nodes={len(self.document.nodes)}, "
                f"rules={len(self.rules)})")


class RenderEngine:
    """
    Coordinates the markup parser, the stylesheet parser and the resolver.
    """

    def __init__(self, config: Optional[Config] = None):
        """
        Initialize the render engine.

        Args:
            config: Optional configuration; defaults are used when omitted.
                A given config also has its ``logging.*`` keys applied to
                the package logger.
        """
        if config is not None:
            configure_from(config)
        self.config = config or Config()

        self.html_parser = HTMLParser(self.config)
        self.css_parser = CSSParser()
        self.resolver = StyleResolver()

        self.performance = PerformanceLogger(logger, "RenderEngine")

        logger.debug("Render engine initialized")

    def load_html(self, html_content: str) -> StyledDocument:
        """
        Run the whole pipeline on a markup document.

        Args:
            html_content: The complete markup document

        Returns:
            The styled document
        """
        with self.performance.measure("parse_html"):
            document = self.html_parser.parse(html_content)

        with self.performance.measure("parse_css"):
            rules, css_diagnostics = self.css_parser.parse_with_diagnostics(document.stylesheet_text)

        with self.performance.measure("resolve_styles"):
            styles = self.resolver.resolve(document, rules)

        diagnostics = ParseDiagnostics()
        diagnostics.merge(document.diagnostics)
        diagnostics.merge(css_diagnostics)
        if diagnostics.total:
            logger.info(f"Recovered from {diagnostics.total} malformed fragments: {diagnostics.as_dict()}")

        return StyledDocument(document, rules, styles, diagnostics)

    def restyle(self, styled: StyledDocument) -> StyleTable:
        """
        Recompute the style table of an already loaded document.

        Returns:
            A new style table equal to the one computed at load time
        """
        return self.resolver.resolve(styled.document, styled.rules)


def render_document(html_content: str, config: Optional[Config] = None) -> StyledDocument:
    """
    Parse and style a markup document in one call.

    Args:
        html_content: The complete markup document
        config: Optional configuration

    Returns:
        The styled document
    """
    return RenderEngine(config).load_html(html_content)
