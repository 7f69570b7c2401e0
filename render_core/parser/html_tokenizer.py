"""
HTML tokenizer implementation.
This module turns raw markup into a flat stream of tag and text tokens.
"""

import html
import logging
import re
from functools import lru_cache
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from ..dom.tags import RAW_TEXT_TAGS, tag_for_name
from ..utils.diagnostics import ParseDiagnostics, UNTERMINATED_TAG

logger = logging.getLogger(__name__)

_WHITESPACE = " \t\n\r\f"


@lru_cache(maxsize=None)
def _raw_text_end(tag_name: str):
    """Pattern for the end tag closing a raw text element."""
    return re.compile(r"</" + re.escape(tag_name) + r"(?=[\s/>]|\Z)", re.IGNORECASE)


class TokenizerState(Enum):
    """States of the markup tokenizer."""
    TEXT = "text"
    TAG_OPEN = "tag_open"
    TAG_NAME = "tag_name"
    ATTRIBUTE_NAME = "attribute_name"
    ATTRIBUTE_VALUE_UNQUOTED = "attribute_value_unquoted"
    ATTRIBUTE_VALUE_QUOTED = "attribute_value_quoted"
    SELF_CLOSING_OR_CLOSE = "self_closing_or_close"
    RAW_TEXT = "raw_text"


class StartTagToken:
    """An opening tag with its attributes."""

    def __init__(self, name: str, attributes: List[Tuple[str, str]], self_closing: bool = False):
        self.name = name
        self.attributes = attributes
        self.self_closing = self_closing

    def __eq__(self, other) -> bool:
        return (isinstance(other, StartTagToken) and other.name == self.name
                and other.attributes == self.attributes
                and other.self_closing == self.self_closing)

    def __repr__(self) -> str:
        return f"StartTagToken({self.name!r}, {self.attributes!r}, self_closing={self.self_closing})"


class EndTagToken:
    """A closing tag."""

    def __init__(self, name: str):
        self.name = name

    def __eq__(self, other) -> bool:
        return isinstance(other, EndTagToken) and other.name == self.name

    def __repr__(self) -> str:
        return f"EndTagToken({self.name!r})"


class CharacterToken:
    """A run of character data; ``raw`` marks verbatim script/style content."""

    def __init__(self, data: str, raw: bool = False):
        self.data = data
        self.raw = raw

    def __eq__(self, other) -> bool:
        return isinstance(other, CharacterToken) and other.data == self.data and other.raw == self.raw

    def __repr__(self) -> str:
        return f"CharacterToken({self.data!r}, raw={self.raw})"


Token = Union[StartTagToken, EndTagToken, CharacterToken]


class HTMLTokenizer:
    """
    Character-level state machine over a complete markup document.

    The tokenizer never raises: markup it cannot make sense of is either
    emitted as text or skipped. Comments, doctypes and processing
    instructions are consumed and produce no tokens.
    """

    def __init__(self, text: str, decode_entities: bool = True,
                 diagnostics: Optional[ParseDiagnostics] = None):
        """
        Initialize the tokenizer.

        Args:
            text: The complete markup document
            decode_entities: Whether to decode character references in text
                and attribute values
            diagnostics: Where to record repaired markup
        """
        self.text = text
        self.decode_entities = decode_entities
        self.diagnostics = diagnostics if diagnostics is not None else ParseDiagnostics()

        self.pos = 0
        self.state = TokenizerState.TEXT

        # Tag under construction
        self._tag_name = ""
        self._is_end_tag = False
        self._attributes: List[Tuple[str, str]] = []
        self._attr_name = ""
        self._attr_value: List[str] = []
        self._quote = ""

        # Name of the raw text element whose content is being captured
        self._raw_text_tag = ""

    def _decode(self, value: str) -> str:
        if self.decode_entities and "&" in value:
            return html.unescape(value)
        return value

    def _starts_with(self, prefix: str) -> bool:
        return self.text.startswith(prefix, self.pos)

    def _eof(self) -> bool:
        return self.pos >= len(self.text)

    def tokens(self) -> Iterator[Token]:
        """
        Tokenize the whole input.

        Yields:
            Tokens in document order
        """
        while not self._eof():
            if self.state == TokenizerState.TEXT:
                yield from self._text_state()
            elif self.state == TokenizerState.TAG_OPEN:
                yield from self._tag_open_state()
            elif self.state == TokenizerState.TAG_NAME:
                yield from self._tag_name_state()
            elif self.state == TokenizerState.ATTRIBUTE_NAME:
                yield from self._attribute_name_state()
            elif self.state == TokenizerState.ATTRIBUTE_VALUE_UNQUOTED:
                yield from self._attribute_value_unquoted_state()
            elif self.state == TokenizerState.ATTRIBUTE_VALUE_QUOTED:
                self._attribute_value_quoted_state()
            elif self.state == TokenizerState.SELF_CLOSING_OR_CLOSE:
                yield from self._self_closing_state()
            elif self.state == TokenizerState.RAW_TEXT:
                yield from self._raw_text_state()

        # End of input inside a tag: emit what was read
        if self.state in (TokenizerState.TAG_NAME,
                          TokenizerState.ATTRIBUTE_NAME,
                          TokenizerState.ATTRIBUTE_VALUE_UNQUOTED,
                          TokenizerState.ATTRIBUTE_VALUE_QUOTED,
                          TokenizerState.SELF_CLOSING_OR_CLOSE):
            self.diagnostics.record(UNTERMINATED_TAG, f"<{self._tag_name}> at end of input")
            if self.state in (TokenizerState.ATTRIBUTE_VALUE_UNQUOTED,
                              TokenizerState.ATTRIBUTE_VALUE_QUOTED):
                self._finish_attribute()
            elif self.state == TokenizerState.ATTRIBUTE_NAME and self._attr_name:
                self._finish_attribute()
            if self._tag_name:
                yield from self._emit_tag(self_closing=False)
        elif self.state == TokenizerState.TAG_OPEN:
            # A lone "<" at the very end
            yield CharacterToken("<")

    def _text_state(self) -> Iterator[Token]:
        start = self.pos
        end = self.text.find("<", start)
        if end == -1:
            end = len(self.text)

        if end > start:
            yield CharacterToken(self._decode(self.text[start:end]))

        self.pos = end
        if not self._eof():
            self.pos += 1  # consume '<'
            self.state = TokenizerState.TAG_OPEN

    def _tag_open_state(self) -> Iterator[Token]:
        """Decide what follows a '<'."""
        c = self.text[self.pos]

        if c == "!":
            self._skip_markup_declaration()
            self.state = TokenizerState.TEXT
        elif c == "?":
            self._skip_past(">")
            self.state = TokenizerState.TEXT
        elif c == "/":
            following = self.text[self.pos + 1:self.pos + 2]
            if following.isalpha():
                self.pos += 1
                self._begin_tag(is_end_tag=True)
            elif following == ">":
                # "</>" is ignored
                self.pos += 2
                self.state = TokenizerState.TEXT
            else:
                # Bogus end tag such as "</ 3>": skip it
                self._skip_past(">")
                self.state = TokenizerState.TEXT
        elif c.isalpha():
            self._begin_tag(is_end_tag=False)
        else:
            # Not a tag after all; the '<' is text
            yield CharacterToken("<")
            self.state = TokenizerState.TEXT

    def _skip_markup_declaration(self) -> None:
        """Consume a comment, doctype or other '<!...>' declaration."""
        if self._starts_with("!--"):
            end = self.text.find("-->", self.pos + 3)
            if end == -1:
                logger.debug("Unterminated comment at end of input")
                self.pos = len(self.text)
            else:
                self.pos = end + 3
        else:
            self._skip_past(">")

    def _skip_past(self, char: str) -> None:
        end = self.text.find(char, self.pos)
        self.pos = len(self.text) if end == -1 else end + 1

    def _begin_tag(self, is_end_tag: bool) -> None:
        self._tag_name = ""
        self._is_end_tag = is_end_tag
        self._attributes = []
        self._attr_name = ""
        self._attr_value = []
        self.state = TokenizerState.TAG_NAME

    def _tag_name_state(self) -> Iterator[Token]:
        start = self.pos
        while not self._eof() and self.text[self.pos] not in _WHITESPACE and self.text[self.pos] not in "/>":
            self.pos += 1
        self._tag_name += self.text[start:self.pos]

        if self._eof():
            return

        c = self.text[self.pos]
        self.pos += 1
        if c == ">":
            yield from self._emit_tag(self_closing=False)
        elif c == "/":
            self.state = TokenizerState.SELF_CLOSING_OR_CLOSE
        else:
            self.state = TokenizerState.ATTRIBUTE_NAME

    def _attribute_name_state(self) -> Iterator[Token]:
        # Skip whitespace before the name
        while not self._eof() and self.text[self.pos] in _WHITESPACE:
            self.pos += 1
        if self._eof():
            return

        c = self.text[self.pos]
        if c == ">":
            self.pos += 1
            yield from self._emit_tag(self_closing=False)
            return
        if c == "/":
            self.pos += 1
            self.state = TokenizerState.SELF_CLOSING_OR_CLOSE
            return

        start = self.pos
        # A leading '=' is taken as part of the name, as browsers do
        self.pos += 1
        while not self._eof() and self.text[self.pos] not in _WHITESPACE and self.text[self.pos] not in "/>=":
            self.pos += 1
        self._attr_name = self.text[start:self.pos].lower()
        self._attr_value = []

        # Look for '=' after optional whitespace
        lookahead = self.pos
        while lookahead < len(self.text) and self.text[lookahead] in _WHITESPACE:
            lookahead += 1

        if lookahead < len(self.text) and self.text[lookahead] == "=":
            self.pos = lookahead + 1
            while not self._eof() and self.text[self.pos] in _WHITESPACE:
                self.pos += 1
            if not self._eof() and self.text[self.pos] in "\"'":
                self._quote = self.text[self.pos]
                self.pos += 1
                self.state = TokenizerState.ATTRIBUTE_VALUE_QUOTED
            else:
                self.state = TokenizerState.ATTRIBUTE_VALUE_UNQUOTED
        else:
            # Attribute without a value
            self._finish_attribute()

    def _attribute_value_unquoted_state(self) -> Iterator[Token]:
        start = self.pos
        while not self._eof() and self.text[self.pos] not in _WHITESPACE and self.text[self.pos] != ">":
            self.pos += 1
        self._attr_value.append(self.text[start:self.pos])

        if self._eof():
            return

        self._finish_attribute()
        if self.text[self.pos] == ">":
            self.pos += 1
            yield from self._emit_tag(self_closing=False)
        else:
            self.state = TokenizerState.ATTRIBUTE_NAME

    def _attribute_value_quoted_state(self) -> None:
        end = self.text.find(self._quote, self.pos)
        if end == -1:
            # Unterminated quote: the value runs to the end of input
            self._attr_value.append(self.text[self.pos:])
            self.pos = len(self.text)
            return

        self._attr_value.append(self.text[self.pos:end])
        self.pos = end + 1
        self._finish_attribute()
        self.state = TokenizerState.ATTRIBUTE_NAME

    def _self_closing_state(self) -> Iterator[Token]:
        if self.text[self.pos] == ">":
            self.pos += 1
            yield from self._emit_tag(self_closing=True)
        else:
            # Stray '/' inside a tag is ignored
            self.state = TokenizerState.ATTRIBUTE_NAME

    def _finish_attribute(self) -> None:
        if self._attr_name:
            value = self._decode("".join(self._attr_value))
            self._attributes.append((self._attr_name, value))
        self._attr_name = ""
        self._attr_value = []
        self.state = TokenizerState.ATTRIBUTE_NAME

    def _emit_tag(self, self_closing: bool) -> Iterator[Token]:
        name = self._tag_name
        self.state = TokenizerState.TEXT

        if self._is_end_tag:
            yield EndTagToken(name)
            return

        yield StartTagToken(name, self._attributes, self_closing)

        if not self_closing and tag_for_name(name) in RAW_TEXT_TAGS:
            self._raw_text_tag = name.lower()
            self.state = TokenizerState.RAW_TEXT

    def _raw_text_state(self) -> Iterator[Token]:
        """Capture everything up to the matching end tag verbatim."""
        start = self.pos
        match = _raw_text_end(self._raw_text_tag).search(self.text, start)
        end = match.start() if match else len(self.text)

        if end > start:
            yield CharacterToken(self.text[start:end], raw=True)

        self.pos = end
        self.state = TokenizerState.TEXT


def tokenize(text: str, decode_entities: bool = True) -> List[Token]:
    """
    Tokenize a complete markup document.

    Args:
        text: Markup to tokenize
        decode_entities: Whether to decode character references

    Returns:
        The token list
    """
    return list(HTMLTokenizer(text, decode_entities).tokens())
