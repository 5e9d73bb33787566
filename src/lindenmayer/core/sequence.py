"""
Symbol sequence: a doubly-linked list stored in a node arena.

Nodes live in parallel slot lists (value, next, prev) and link to each
other by slot number, so a sequence owns every node it holds and there are
no reference cycles to manage. Released slots go to a free list and are
reused by later insertions, which lets a buffer that is cleared and
refilled every generation keep its capacity.

Positional access walks from whichever end is nearer the index, so
get/set/insert/remove at index i cost O(min(i, length - i)). Bulk splicing
links the inserted run as a standalone chain first and then attaches it
with a single positional walk.

Cursors read a sequence in either direction. Any structural change
(append, insert, splice, remove, clear) invalidates the cursors created
before it; using one afterwards raises StaleCursorError.
"""

from collections.abc import Iterable, Iterator

from lindenmayer.core.errors import InvalidArgumentError, InvalidIndexError, StaleCursorError
from lindenmayer.core.symbolic import Symbol, render

_NIL = -1


class Sequence:
    """
    Mutable, 0-indexed sequence of symbols.

    Supports O(1) append, nearer-end positional access, bulk splicing
    and bidirectional cursors.
    """

    def __init__(self, items: Iterable[Symbol] | None = None) -> None:
        self._values: list[Symbol | None] = []
        self._next: list[int] = []
        self._prev: list[int] = []
        self._free: list[int] = []
        self._head = _NIL
        self._tail = _NIL
        self._length = 0
        self._version = 0

        if items is not None:
            for item in items:
                self.append(item)

    # --- Arena management ---

    def _allocate(self, value: Symbol) -> int:
        """Take a slot from the free list, or grow the arena."""
        if self._free:
            slot = self._free.pop()
            self._values[slot] = value
            self._next[slot] = _NIL
            self._prev[slot] = _NIL
            return slot
        self._values.append(value)
        self._next.append(_NIL)
        self._prev.append(_NIL)
        return len(self._values) - 1

    def _release(self, slot: int) -> None:
        self._values[slot] = None
        self._next[slot] = _NIL
        self._prev[slot] = _NIL
        self._free.append(slot)

    def _link(self, before: int, after: int) -> None:
        self._next[before] = after
        self._prev[after] = before

    def _node_at(self, index: int) -> int:
        """Slot of the element at index; index must already be in range."""
        if index < self._length - index:
            slot = self._head
            for _ in range(index):
                slot = self._next[slot]
        else:
            slot = self._tail
            for _ in range(self._length - 1 - index):
                slot = self._prev[slot]
        return slot

    def _attach(self, index: int, start: int, end: int, count: int) -> None:
        """Attach the linked chain start..end so that start lands at index."""
        if self._length == 0:
            self._head = start
            self._tail = end
        elif index == 0:
            self._link(end, self._head)
            self._head = start
        elif index == self._length:
            self._link(self._tail, start)
            self._tail = end
        else:
            node = self._node_at(index)
            self._link(self._prev[node], start)
            self._link(end, node)
        self._length += count
        self._version += 1

    def _detach(self, slot: int) -> Symbol:
        value = self._values[slot]
        before = self._prev[slot]
        after = self._next[slot]
        if before != _NIL:
            self._next[before] = after
        else:
            self._head = after
        if after != _NIL:
            self._prev[after] = before
        else:
            self._tail = before
        self._release(slot)
        self._length -= 1
        self._version += 1
        return value

    def _check_index(self, index: int, *, inclusive: bool = False) -> None:
        upper = self._length if inclusive else self._length - 1
        if not isinstance(index, int) or index < 0 or index > upper:
            raise InvalidIndexError(index, self._length, inclusive=inclusive)

    # --- Mutation ---

    def append(self, symbol: Symbol) -> None:
        """Add a symbol to the end."""
        slot = self._allocate(symbol)
        self._attach(self._length, slot, slot, 1)

    def insert_at(self, index: int, symbol: Symbol) -> None:
        """Insert a symbol so that it ends up at index (0 <= index <= length)."""
        self._check_index(index, inclusive=True)
        slot = self._allocate(symbol)
        self._attach(index, slot, slot, 1)

    def splice_at(self, index: int, items: "Sequence | Iterable[Symbol] | None") -> None:
        """
        Insert a run of symbols as one contiguous block starting at index.

        The run is linked into a standalone chain in O(k) and then attached
        with one walk of O(min(index, length - index)).

        Raises:
            InvalidArgumentError: items is None or empty
            InvalidIndexError: index outside [0, length]
        """
        if items is None:
            raise InvalidArgumentError("Cannot splice None into a sequence")
        if items is self or not isinstance(items, Sequence):
            items = tuple(items)
        if len(items) == 0:
            raise InvalidArgumentError("Cannot splice an empty run into a sequence")
        self._check_index(index, inclusive=True)

        start = _NIL
        end = _NIL
        count = 0
        for value in items:
            slot = self._allocate(value)
            if start == _NIL:
                start = slot
            else:
                self._link(end, slot)
            end = slot
            count += 1

        self._attach(index, start, end, count)

    def remove_at(self, index: int) -> Symbol:
        """Remove and return the symbol at index."""
        self._check_index(index)
        return self._detach(self._node_at(index))

    def remove(self, symbol: Symbol) -> bool:
        """Remove the first occurrence of symbol. Returns False if absent."""
        slot = self._head
        while slot != _NIL:
            if self._values[slot] == symbol:
                self._detach(slot)
                return True
            slot = self._next[slot]
        return False

    def clear(self) -> None:
        """Remove every symbol, releasing each node slot for reuse."""
        slot = self._head
        while slot != _NIL:
            following = self._next[slot]
            self._release(slot)
            slot = following
        self._head = _NIL
        self._tail = _NIL
        self._length = 0
        self._version += 1

    # --- Access ---

    def get(self, index: int) -> Symbol:
        """Return the symbol at index."""
        self._check_index(index)
        return self._values[self._node_at(index)]

    def set(self, index: int, symbol: Symbol) -> None:
        """Replace the symbol at index. Not a structural change."""
        self._check_index(index)
        self._values[self._node_at(index)] = symbol

    def index_of(self, symbol: Symbol) -> int:
        """Index of the first occurrence of symbol, or -1."""
        slot = self._head
        index = 0
        while slot != _NIL:
            if self._values[slot] == symbol:
                return index
            slot = self._next[slot]
            index += 1
        return -1

    def contains(self, symbol: Symbol) -> bool:
        return self.index_of(symbol) != -1

    def clone(self) -> "Sequence":
        """Deep copy sharing no nodes with this sequence."""
        return Sequence(self)

    def cursor(self, index: int | None = None) -> "Cursor":
        """
        Create a cursor over this sequence.

        With no index the cursor starts before the first element, so
        ``while cursor.move_next()`` visits every symbol. With an index
        it starts on that element.
        """
        if index is None:
            return Cursor(self)
        self._check_index(index)
        return Cursor(self, self._node_at(index), index)

    def to_tuple(self) -> tuple[Symbol, ...]:
        """Read-only ordered view of the symbols."""
        return tuple(self)

    # --- Python protocol ---

    def __len__(self) -> int:
        return self._length

    def __iter__(self) -> Iterator[Symbol]:
        cursor = Cursor(self)
        while cursor.move_next():
            yield cursor.current

    def __reversed__(self) -> Iterator[Symbol]:
        if self._length == 0:
            return
        cursor = Cursor(self, self._tail, self._length - 1)
        yield cursor.current
        while cursor.move_prev():
            yield cursor.current

    def __contains__(self, symbol: object) -> bool:
        return self.contains(symbol)

    def __str__(self) -> str:
        return render(self)

    def __repr__(self) -> str:
        return f"Sequence({list(self)!r})"


class Cursor:
    """
    Bidirectional position within a Sequence.

    Movement returns False at either boundary and leaves the cursor where
    it was. A fresh cursor sits before the first element; once on an
    element it never leaves the sequence.
    """

    def __init__(self, sequence: Sequence, slot: int = _NIL, position: int = -1) -> None:
        self._sequence = sequence
        self._slot = slot
        self._position = position
        self._version = sequence._version

    def _check(self) -> None:
        if self._version != self._sequence._version:
            raise StaleCursorError("Sequence was structurally modified after cursor creation")

    @property
    def sequence(self) -> Sequence:
        return self._sequence

    @property
    def position(self) -> int:
        """Index of the current element, -1 before the first."""
        self._check()
        return self._position

    @property
    def current(self) -> Symbol:
        """Symbol at the cursor."""
        self._check()
        if self._slot == _NIL:
            raise InvalidIndexError(self._position, len(self._sequence))
        return self._sequence._values[self._slot]

    def move_next(self) -> bool:
        self._check()
        if self._slot == _NIL:
            target = self._sequence._head
        else:
            target = self._sequence._next[self._slot]
        if target == _NIL:
            return False
        self._slot = target
        self._position += 1
        return True

    def move_prev(self) -> bool:
        self._check()
        if self._slot == _NIL:
            return False
        target = self._sequence._prev[self._slot]
        if target == _NIL:
            return False
        self._slot = target
        self._position -= 1
        return True

    def copy(self) -> "Cursor":
        """Independent cursor at the same position."""
        self._check()
        return Cursor(self._sequence, self._slot, self._position)

    def reset(self) -> None:
        """Move back before the first element."""
        self._check()
        self._slot = _NIL
        self._position = -1

    def __repr__(self) -> str:
        return f"Cursor(position={self._position}, length={len(self._sequence)})"
