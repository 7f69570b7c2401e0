"""
Text node implementation for the DOM.
"""

from .node import Node, NodeType


class Text(Node):
    """
    Text node implementation for the DOM.

    This class represents a run of character data in the DOM tree.
    """

    def __init__(self, data: str):
        """
        Initialize a text node.

        Args:
            data: The text content
        """
        super().__init__(NodeType.TEXT_NODE)

        # Ensure data is not None
        if data is None:
            data = ""

        self.data = data

    @property
    def length(self) -> int:
        return len(self.data)

    def append_data(self, data: str) -> None:
        """
        Append data to the end of the text node.

        Args:
            data: Data to append
        """
        self.data += data

    def __repr__(self) -> str:
        return f"Text({self.data!r})"
