"""
render-core - parse a constrained subset of HTML/CSS into a styled node tree.
"""

from .utils.logging import setup_logging

# Set up basic console logging
logger = setup_logging()

# Package information
__version__ = "0.1.0"
__author__ = "Wink Browser Team"
__description__ = "Markup parser, stylesheet parser and cascade resolver"

from .engine import RenderEngine, StyledDocument, render_document  # noqa: E402
from .parser import parse_css, parse_html  # noqa: E402
from .css import resolve_styles  # noqa: E402

__all__ = [
    'RenderEngine', 'StyledDocument', 'render_document',
    'parse_html', 'parse_css', 'resolve_styles',
]

logger.debug(f"render-core v{__version__} initialized")
