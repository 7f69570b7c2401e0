"""
Node implementation for the DOM.
This module implements the base node shared by elements and text.
"""

from enum import IntEnum
from typing import Iterator, List, Optional
import weakref


class NodeType(IntEnum):
    """Node types, numbered as in the W3C DOM."""
    ELEMENT_NODE = 1
    TEXT_NODE = 3


class Node:
    """
    Base Node implementation for the DOM.

    A node owns its children. The parent link is a weak back-reference used
    only for upward traversal; it never keeps a parent alive.
    """

    def __init__(self, node_type: NodeType):
        """
        Initialize a new Node.

        Args:
            node_type: The type of this node
        """
        self.node_type = node_type

        # Stable arena index, assigned once the owning document is complete
        self.node_id: Optional[int] = None

        self.child_nodes: List['Node'] = []
        self._parent_ref: Optional[weakref.ref] = None

    @property
    def parent_node(self) -> Optional['Node']:
        """Get the parent node, if it is still alive."""
        if self._parent_ref is None:
            return None
        return self._parent_ref()

    @property
    def children(self) -> List['Node']:
        """Get a list of child elements."""
        return [child for child in self.child_nodes if child.node_type == NodeType.ELEMENT_NODE]

    @property
    def is_element(self) -> bool:
        return self.node_type == NodeType.ELEMENT_NODE

    @property
    def is_text(self) -> bool:
        return self.node_type == NodeType.TEXT_NODE

    def append_child(self, child: 'Node') -> 'Node':
        """
        Append a child node to this node.

        Args:
            child: The node to append

        Returns:
            The appended node
        """
        # If child already has a parent, remove it first
        parent = child.parent_node
        if parent is not None:
            parent.remove_child(child)

        child._parent_ref = weakref.ref(self)
        self.child_nodes.append(child)
        return child

    def remove_child(self, child: 'Node') -> 'Node':
        """
        Remove a child node from this node.

        Args:
            child: The node to remove

        Returns:
            The removed node

        Raises:
            ValueError: If the node is not a child of this node
        """
        for index, existing in enumerate(self.child_nodes):
            if existing is child:
                del self.child_nodes[index]
                child._parent_ref = None
                return child

        raise ValueError("Child not found in child nodes")

    def has_child_nodes(self) -> bool:
        """Check if this node has any child nodes."""
        return len(self.child_nodes) > 0

    def iter_descendants(self) -> Iterator['Node']:
        """
        Walk this node and its descendants in document (pre-)order.

        Yields:
            Each node, starting with this one
        """
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.child_nodes))

    @property
    def text_content(self) -> str:
        """Get the concatenated text of this node and all its descendants."""
        return "".join(
            node.data for node in self.iter_descendants()
            if node.node_type == NodeType.TEXT_NODE
        )
