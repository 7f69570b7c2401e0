"""
Advisory parse diagnostics.

Parsers never fail; whatever they drop or repair is counted here so callers
can report it. Nothing in the pipeline branches on these counts.
"""

import logging
from collections import Counter
from typing import Dict, List, Tuple

logger = logging.getLogger(__name__)

# Counter keys
STRAY_END_TAG = "stray_end_tag"
IMPLICITLY_CLOSED = "implicitly_closed"
UNTERMINATED_TAG = "unterminated_tag"
DROPPED_SELECTOR = "dropped_selector"
DROPPED_DECLARATION = "dropped_declaration"
UNKNOWN_PROPERTY = "unknown_property"
SKIPPED_AT_RULE = "skipped_at_rule"
DROPPED_RULE = "dropped_rule"


class ParseDiagnostics:
    """Counts of fragments a parser dropped or repaired."""

    # Keep at most this many detail messages
    MAX_MESSAGES = 100

    def __init__(self):
        self.counts: Counter = Counter()
        self.messages: List[Tuple[str, str]] = []

    def record(self, kind: str, detail: str = "") -> None:
        """
        Record one dropped or repaired fragment.

        Args:
            kind: Counter key
            detail: Human readable description
        """
        self.counts[kind] += 1
        if len(self.messages) < self.MAX_MESSAGES:
            self.messages.append((kind, detail))
        logger.debug(f"{kind}: {detail}")

    def __getitem__(self, kind: str) -> int:
        return self.counts[kind]

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def as_dict(self) -> Dict[str, int]:
        return dict(self.counts)

    def merge(self, other: 'ParseDiagnostics') -> None:
        self.counts.update(other.counts)
        room = self.MAX_MESSAGES - len(self.messages)
        if room > 0:
            self.messages.extend(other.messages[:room])

    def __repr__(self) -> str:
        return f"ParseDiagnostics({dict(self.counts)!r})"
