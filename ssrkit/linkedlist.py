"""A singly linked list of arbitrary values with in-place selection sort."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator


@dataclass
class _Node:
    data: Any
    next: "_Node | None" = None


class LinkedList:
    """A singly linked list with a tail pointer for constant-time appends."""

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._head = _Node(None)
        self._tail = self._head
        self._size = 0
        for item in items:
            self.add_back(item)

    def __len__(self) -> int:
        return self._size

    def _nodes(self) -> Iterator[_Node]:
        node = self._head.next
        while node is not None:
            yield node
            node = node.next

    def __iter__(self) -> Iterator[Any]:
        return (node.data for node in self._nodes())

    def __repr__(self) -> str:
        return f"LinkedList({list(self)!r})"

    def add_back(self, data: Any) -> None:
        """Append *data* at the end of the list."""
        node = _Node(data)
        self._tail.next = node
        self._tail = node
        self._size += 1

    def add_front(self, data: Any) -> None:
        """Insert *data* at the start of the list."""
        node = _Node(data, self._head.next)
        self._head.next = node
        if not self._size:
            self._tail = node
        self._size += 1

    def _unlink(self, prev: _Node) -> None:
        current = prev.next
        assert current is not None
        if current is self._tail:
            self._tail = prev
        prev.next = current.next
        self._size -= 1

    def delete_node(self, data: Any, predicate: Callable[[Any, Any], bool]) -> bool:
        """Remove the first element for which ``predicate(element, data)`` holds.

        Returns True if an element was removed.
        """
        prev = self._head
        while prev.next is not None:
            if predicate(prev.next.data, data):
                self._unlink(prev)
                return True
            prev = prev.next
        return False

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexError(f"list index out of range: {index}")

    def delete_at(self, index: int) -> None:
        """Remove the element at *index*; raise IndexError if out of range."""
        self._check_index(index)
        prev = self._head
        for _ in range(index):
            assert prev.next is not None
            prev = prev.next
        self._unlink(prev)

    def modify_at(self, index: int, data: Any) -> None:
        """Replace the element at *index*; raise IndexError if out of range."""
        self._check_index(index)
        for position, node in enumerate(self._nodes()):
            if position == index:
                node.data = data
                return

    def have_same(self, data: Any, predicate: Callable[[Any, Any], bool]) -> bool:
        """Return True if ``predicate(element, data)`` holds for any element."""
        return any(predicate(item, data) for item in self)

    def have_same_cmp(self, data: Any) -> bool:
        """Return True if any element differs from *data*."""
        return any(item != data for item in self)

    def foreach(self, func: Callable[[Any], Any]) -> None:
        """Call *func* on every element in order."""
        for item in self:
            func(item)

    def sort(self, greater: Callable[[Any, Any], bool]) -> None:
        """Selection-sort in place; ``greater(a, b)`` is true when *a* goes after *b*."""
        outer = self._head.next
        while outer is not None:
            smallest = outer
            inner = outer.next
            while inner is not None:
                if greater(smallest.data, inner.data):
                    smallest = inner
                inner = inner.next
            if smallest is not outer:
                smallest.data, outer.data = outer.data, smallest.data
            outer = outer.next

    def clear(self) -> None:
        """Remove every element."""
        self._head.next = None
        self._tail = self._head
        self._size = 0