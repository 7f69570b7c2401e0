"""
CSS parser implementation.
This module turns stylesheet text into an ordered list of simple-selector rules.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import cssutils
from cssutils.tokenize2 import Tokenizer

from ..css.rule import CssRule, Declaration
from ..css.selector import Selector, parse_selector
from ..css.values import PROPERTY_KINDS, parse_property_value
from ..utils.diagnostics import (
    ParseDiagnostics,
    DROPPED_DECLARATION,
    DROPPED_RULE,
    DROPPED_SELECTOR,
    SKIPPED_AT_RULE,
    UNKNOWN_PROPERTY,
)

# Only the tokenizer is used; keep cssutils quiet about everything else
cssutils.log.setLevel(logging.CRITICAL)

logger = logging.getLogger(__name__)

# (token type, token value)
CssToken = Tuple[str, str]

AT_RULE_TOKENS = frozenset({
    'ATKEYWORD', 'CHARSET_SYM', 'FONT_FACE_SYM', 'IMPORT_SYM',
    'MEDIA_SYM', 'NAMESPACE_SYM', 'PAGE_SYM', 'VARIABLES_SYM',
})

# Tokens that carry no meaning between rules
_IGNORED_TOKENS = frozenset({'S', 'CDO', 'CDC', 'BOM', 'EOF'})


def _is_char(token: CssToken, char: str) -> bool:
    return token[0] == 'CHAR' and token[1] == char


def _join(tokens: Sequence[CssToken]) -> str:
    """Rebuild source text from tokens, collapsing whitespace runs."""
    return "".join(' ' if kind == 'S' else value for kind, value in tokens).strip()


class CSSParser:
    """
    Lenient stylesheet parser.

    Supports ``selector-group { declarations }`` blocks with simple
    selectors only. Anything it cannot use is skipped at the smallest
    granularity possible: one selector of a group, one declaration of a
    block, or one whole at-rule.
    """

    def __init__(self):
        """Initialize the CSS parser."""
        self._tokenizer = Tokenizer(doComments=True)
        logger.debug("CSS parser initialized")

    def parse(self, css_content: str) -> List[CssRule]:
        """
        Parse CSS content into rules.

        Args:
            css_content: Stylesheet text

        Returns:
            Rules in source order
        """
        rules, _ = self.parse_with_diagnostics(css_content)
        return rules

    def parse_with_diagnostics(self, css_content: str) -> Tuple[List[CssRule], ParseDiagnostics]:
        """
        Parse CSS content and report what was dropped.

        Args:
            css_content: Stylesheet text

        Returns:
            Tuple of the rules in source order and the parse diagnostics
        """
        diagnostics = ParseDiagnostics()
        tokens = self._tokenize(css_content or "")
        rules: List[CssRule] = []
        order = 0
        pos = 0

        while pos < len(tokens):
            token = tokens[pos]

            if token[0] in _IGNORED_TOKENS:
                pos += 1
                continue

            if token[0] in AT_RULE_TOKENS:
                pos = self._skip_at_rule(tokens, pos)
                diagnostics.record(SKIPPED_AT_RULE, token[1].strip())
                continue

            if _is_char(token, '}') or _is_char(token, ';'):
                diagnostics.record(DROPPED_RULE, f"stray '{token[1]}'")
                pos += 1
                continue

            start = pos
            while pos < len(tokens) and not _is_char(tokens[pos], '{'):
                pos += 1
            prelude = _join(tokens[start:pos])

            if pos >= len(tokens):
                diagnostics.record(DROPPED_RULE, f"'{prelude}' has no declaration block")
                break

            end = self._block_end(tokens, pos)
            declarations = self._parse_declarations(tokens[pos + 1:end], diagnostics)
            pos = end + 1

            for selector in self._parse_selector_group(prelude, diagnostics):
                rules.append(CssRule(selector, declarations, order))
            order += 1

        logger.debug(f"Parsed {len(rules)} rules from {order} blocks")
        return rules, diagnostics

    def _tokenize(self, css_content: str) -> List[CssToken]:
        return [
            (kind, value)
            for kind, value, _, _ in self._tokenizer.tokenize(css_content, fullsheet=True)
            if kind != 'COMMENT'
        ]

    def _block_end(self, tokens: Sequence[CssToken], open_pos: int) -> int:
        """
        Find the '}' closing the block opened at ``open_pos``.

        Returns:
            Index of the closing brace, or ``len(tokens)`` for an unclosed block
        """
        depth = 0
        for pos in range(open_pos, len(tokens)):
            if _is_char(tokens[pos], '{'):
                depth += 1
            elif _is_char(tokens[pos], '}'):
                depth -= 1
                if depth == 0:
                    return pos
        return len(tokens)

    def _skip_at_rule(self, tokens: Sequence[CssToken], pos: int) -> int:
        """Return the position just past an at-rule's ';' or block."""
        while pos < len(tokens):
            if _is_char(tokens[pos], ';'):
                return pos + 1
            if _is_char(tokens[pos], '{'):
                return self._block_end(tokens, pos) + 1
            pos += 1
        return pos

    def _parse_selector_group(self, prelude: str, diagnostics: ParseDiagnostics) -> List[Selector]:
        """
        Split a comma-separated selector group into simple selectors.

        Invalid entries are dropped one by one.
        """
        selectors = []
        for entry in prelude.split(','):
            selector = parse_selector(entry)
            if selector is None:
                diagnostics.record(DROPPED_SELECTOR, repr(entry.strip()))
            else:
                selectors.append(selector)
        return selectors

    def _parse_declarations(self, tokens: Sequence[CssToken],
                            diagnostics: ParseDiagnostics) -> Tuple[Declaration, ...]:
        """
        Parse the inside of a declaration block.

        Args:
            tokens: Tokens between the braces
            diagnostics: Where to record dropped declarations

        Returns:
            Valid declarations in source order
        """
        declarations = []
        for chunk in self._split_declarations(tokens):
            declaration = self._parse_declaration(chunk, diagnostics)
            if declaration is not None:
                declarations.append(declaration)
        return tuple(declarations)

    def _split_declarations(self, tokens: Sequence[CssToken]) -> List[List[CssToken]]:
        """Split on ';' outside parentheses and nested blocks."""
        chunks: List[List[CssToken]] = [[]]
        depth = 0
        for token in tokens:
            if token[0] == 'FUNCTION' or _is_char(token, '(') or _is_char(token, '{'):
                depth += 1
            elif (_is_char(token, ')') or _is_char(token, '}')) and depth > 0:
                depth -= 1
            elif _is_char(token, ';') and depth == 0:
                chunks.append([])
                continue
            chunks[-1].append(token)
        return [chunk for chunk in chunks if _join(chunk)]

    def _parse_declaration(self, tokens: Sequence[CssToken],
                           diagnostics: ParseDiagnostics) -> Optional[Declaration]:
        """
        Parse one ``name: value`` declaration.

        Returns:
            The declaration, or None if it was dropped
        """
        text = _join(tokens)
        colon = next((i for i, token in enumerate(tokens) if _is_char(token, ':')), None)
        if colon is None:
            diagnostics.record(DROPPED_DECLARATION, f"missing ':' in {text!r}")
            return None

        name = _join(tokens[:colon]).lower()
        raw = _join(tokens[colon + 1:])
        if not name or not raw:
            diagnostics.record(DROPPED_DECLARATION, repr(text))
            return None

        if name not in PROPERTY_KINDS:
            diagnostics.record(UNKNOWN_PROPERTY, name)
            return None

        value = parse_property_value(name, raw)
        if value is None:
            diagnostics.record(DROPPED_DECLARATION, f"{name}: {raw}")
            return None

        return Declaration(name, raw, value)


def parse_css(css_content: str) -> List[CssRule]:
    """
    Parse stylesheet text into rules.

    Args:
        css_content: Stylesheet text

    Returns:
        Rules in source order
    """
    return CSSParser().parse(css_content)
