from typing import Iterable, Iterator


class LinkedSeq:
    """Doubly linked sequence stored in parallel arrays.

    Elements are addressed by slot index. Removed slots go on a free list and
    are reused by later insertions; each slot carries a generation that is
    bumped on removal, so a handle saved together with ``generation(idx)``
    can be checked with ``is_valid(idx, gen)`` after the slot is recycled.
    """
    __slots__ = ("val", "left", "right", "alive", "gen", "_free", "_head", "_tail", "_size")

    def __init__(self, heights: Iterable[int]):
        vals = list(heights)
        n = len(vals)
        self.val = vals
        self.left = [-1] + [i for i in range(n - 1)]
        self.right = [i+1 for i in range(n - 1)] + [-1]
        self.alive = [True] * n
        self.gen = [0] * n
        self._free: list[int] = []
        self._head = 0 if n > 0 else -1
        self._tail = n - 1
        self._size = n

    def is_valid(self, idx: int, gen: int | None = None) -> bool:
        if not (0 <= idx < len(self.val) and self.alive[idx]):
            return False
        return gen is None or self.gen[idx] == gen
    def generation(self, idx: int) -> int:
        return self.gen[idx]
    @property
    def capacity(self) -> int:
        return len(self.val)
    def get_head(self) -> int:
        return self._head
    def get_tail(self) -> int:
        return self._tail
    def left_of(self, idx: int) -> int:
        return self.left[idx] if self.is_valid(idx) else -1
    def right_of(self, idx: int) -> int:
        return self.right[idx] if self.is_valid(idx) else -1
    def get(self, idx: int) -> int:
        return self.val[idx]

    def _new_slot(self, value: int) -> int:
        self._size += 1
        if self._free:
            idx = self._free.pop()
            self.val[idx] = value
            self.alive[idx] = True
            return idx
        self.val.append(value)
        self.left.append(-1)
        self.right.append(-1)
        self.alive.append(True)
        self.gen.append(0)
        return len(self.val) - 1

    def append(self, value: int) -> int:
        idx = self._new_slot(value)
        if self._tail == -1:
            self._head = idx
        else:
            self.right[self._tail] = idx
            self.left[idx] = self._tail
        self._tail = idx
        return idx

    def insert_before(self, idx: int, value: int) -> int:
        """Splice a new element in front of ``idx``; appends when ``idx`` is -1."""
        if idx == -1:
            return self.append(value)
        if not self.is_valid(idx):
            raise IndexError(f"invalid handle: {idx}")

        new_idx = self._new_slot(value)
        left_idx = self.left[idx]
        self.left[new_idx] = left_idx
        self.right[new_idx] = idx
        self.left[idx] = new_idx
        if left_idx != -1:
            self.right[left_idx] = new_idx
        else:
            self._head = new_idx
        return new_idx

    def remove(self, idx: int) -> tuple[int, int]:
        if not self.is_valid(idx):
            return -1, -1
        left_idx = self.left[idx]
        right_idx = self.right[idx]

        if left_idx != -1:
            self.right[left_idx] = right_idx
        if right_idx != -1:
            self.left[right_idx] = left_idx
        if idx == self._head:
            self._head = right_idx
        if idx == self._tail:
            self._tail = left_idx

        self.alive[idx] = False
        self.gen[idx] += 1
        self.left[idx] = -1
        self.right[idx] = -1
        self._free.append(idx)
        self._size -= 1
        return left_idx, right_idx

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[tuple[int, int]]:
        idx = self.get_head()
        while idx != -1:
            yield idx, self.get(idx)
            idx = self.right_of(idx)

    def to_list(self) -> list[int]:
        return [val for _, val in self]
