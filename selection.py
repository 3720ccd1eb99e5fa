"""
selection.py

Ordered set of normalized nodes the user has marked for import.
"""

from __future__ import annotations

from typing import Callable, Dict, Iterator, Optional, Tuple, Union

from models import Node


class SelectionSet:
    """
    Ordered collection of ``Node`` values, unique by ``id``.

    Members are stored by value, not as references into the source tree.
    Insertion order is preserved and decides import order; toggling a node
    off and on again moves it to the end.

    Node ids are assumed unique within one document.  Two distinct nodes that
    share an id are treated as the same member.

    Args:
        on_changed: Optional callback invoked after every mutation.
    """

    def __init__(self, on_changed: Optional[Callable[["SelectionSet"], None]] = None):
        # dicts keep insertion order, which doubles as import order
        self._members: Dict[str, Node] = {}
        self._on_changed = on_changed

    def set_changed_callback(self, callback: Optional[Callable[["SelectionSet"], None]]):
        """Set callback fired after every mutation (used to refresh the UI)."""
        self._on_changed = callback

    def _notify_changed(self):
        if self._on_changed:
            self._on_changed(self)

    def toggle(self, node: Node) -> bool:
        """Remove the member with ``node.id`` if present, else append ``node``.

        Returns:
            True if the node is selected after the call.
        """
        if node.id in self._members:
            del self._members[node.id]
            selected = False
        else:
            self._members[node.id] = node
            selected = True
        self._notify_changed()
        return selected

    def remove(self, node_id: str) -> None:
        """Remove the member with *node_id*; no-op if absent."""
        if self._members.pop(node_id, None) is not None:
            self._notify_changed()

    def clear(self) -> None:
        """Empty the selection unconditionally."""
        self._members.clear()
        self._notify_changed()

    def ids(self) -> Tuple[str, ...]:
        return tuple(self._members)

    def nodes(self) -> Tuple[Node, ...]:
        """Snapshot of the selected nodes in insertion order."""
        return tuple(self._members.values())

    def __contains__(self, item: Union[Node, str]) -> bool:
        node_id = item.id if isinstance(item, Node) else item
        return node_id in self._members

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes())

    def __len__(self) -> int:
        return len(self._members)

    def __bool__(self) -> bool:
        return bool(self._members)

    def __repr__(self) -> str:
        return f"SelectionSet({list(self._members)!r})"
