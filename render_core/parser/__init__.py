"""
Markup and stylesheet parsers.
"""

from .html_tokenizer import HTMLTokenizer, tokenize
from .html_parser import HTMLParser, parse_html
from .css_parser import CSSParser, parse_css

__all__ = ['HTMLTokenizer', 'tokenize', 'HTMLParser', 'parse_html', 'CSSParser', 'parse_css']
