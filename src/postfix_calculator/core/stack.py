"""Last-in-first-out stack with an optional fixed capacity."""
from typing import Generic, List, Optional, TypeVar

from postfix_calculator.common.errors import StackOverflow, StackUnderflow

T = TypeVar("T")


class BoundedStack(Generic[T]):
    """
    LIFO container used for both the operator stack and the operand stack.

    A stack built with ``capacity=None`` grows without limit and is never full.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        if capacity is not None and capacity < 1:
            raise ValueError(f"Stack capacity must be positive, got {capacity}")
        self.capacity: Optional[int] = capacity
        self._items: List[T] = []

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"BoundedStack(capacity={self.capacity}, items={self._items!r})"

    def is_empty(self) -> bool:
        return not self._items

    def is_full(self) -> bool:
        return self.capacity is not None and len(self._items) >= self.capacity

    def push(self, value: T) -> None:
        """
        Put ``value`` on top of the stack.

        :raises StackOverflow: If the stack already holds ``capacity`` elements
        """
        if self.is_full():
            raise StackOverflow(self.capacity)
        self._items.append(value)

    def pop(self) -> T:
        """
        Remove and return the top element.

        :raises StackUnderflow: If the stack is empty
        """
        if not self._items:
            raise StackUnderflow("pop")
        return self._items.pop()

    def peek(self) -> T:
        """
        Return the top element without removing it.

        :raises StackUnderflow: If the stack is empty
        """
        if not self._items:
            raise StackUnderflow("peek")
        return self._items[-1]
