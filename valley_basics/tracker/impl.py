from __future__ import annotations

import operator
import os
from typing import Iterable, Iterator

import numpy as np
import numpy.typing as npt

from valley_basics.tracker.linkedsq import LinkedSeq
from valley_basics.utils.data import load_landscape


class InvalidArgument(ValueError):
    pass


class EmptyState(RuntimeError):
    pass


def _as_elevation(value) -> int:
    try:
        return operator.index(value)
    except TypeError:
        raise InvalidArgument(f"Elevations must be integers, got {value!r}.") from None


def is_valley(seq: LinkedSeq, idx: int) -> bool:
    if not seq.is_valid(idx):
        return False
    left_idx = seq.left_of(idx)
    right_idx = seq.right_of(idx)
    height = seq.get(idx)

    if left_idx == -1 and right_idx == -1:
        return True
    if left_idx == -1:
        return height < seq.get(right_idx)
    if right_idx == -1:
        return height < seq.get(left_idx)
    return height < seq.get(left_idx) and height < seq.get(right_idx)


class ValleyTracker:
    """Tracks the leftmost valley of a landscape of distinct elevations.

    The valley handle and the prefix aggregate ``(sum, count)`` from the head
    through the valley are kept up to date on every removal and insertion, so
    treasure queries never walk the sequence. Updates only look at the
    neighbours of the touched element and fall back to a forward scan when
    none of them qualifies. A landscape with long monotonic runs can make that
    scan O(n) per call.

    Elevations must be pairwise distinct; duplicates are rejected with
    ``InvalidArgument``. Instances are not thread-safe.
    """

    def __init__(self, elevations: Iterable[int] | None):
        if elevations is None:
            raise InvalidArgument("Landscape cannot be None.")
        if isinstance(elevations, (str, bytes)):
            raise InvalidArgument(f"Landscape must be a sequence of integers, got {type(elevations).__name__}.")
        heights = [_as_elevation(h) for h in elevations]
        if not heights:
            raise InvalidArgument("Landscape cannot be empty.")
        unique = set(heights)
        if len(unique) != len(heights):
            raise InvalidArgument("Landscape elevations must be distinct.")

        self._seq = LinkedSeq(heights)
        self._heights = unique
        self._total = 0.0
        self._valley, self._sum, self._count = self._scan_from(self._seq.get_head(), 0, 0)

    @classmethod
    def from_array(cls, arr: npt.NDArray) -> "ValleyTracker":
        if not isinstance(arr, np.ndarray) or arr.ndim != 1:
            raise InvalidArgument("Expected a 1-D numpy array.")
        if not np.issubdtype(arr.dtype, np.integer):
            raise InvalidArgument(f"Expected an integer array, got dtype {arr.dtype}.")
        return cls(arr.tolist())

    @classmethod
    def from_file(cls, path: str | os.PathLike) -> "ValleyTracker":
        return cls.from_array(load_landscape(path))

    def _scan_from(self, start: int, total: int, count: int) -> tuple[int, int, int]:
        """Walk right from ``start`` until a valley is found.

        ``total`` and ``count`` are the aggregate of everything left of
        ``start``; the returned aggregate runs through the valley found.
        """
        idx = start
        while idx != -1:
            total += self._seq.get(idx)
            count += 1
            if is_valley(self._seq, idx):
                return idx, total, count
            idx = self._seq.right_of(idx)
        return -1, 0, 0

    def is_empty(self) -> bool:
        return len(self._seq) == 0

    @property
    def size(self) -> int:
        return len(self._seq)

    def __len__(self) -> int:
        return len(self._seq)

    def to_list(self) -> list[int]:
        return self._seq.to_list()

    def peek_treasure(self) -> float:
        if self.is_empty():
            raise EmptyState("Landscape is empty.")
        return self._sum / self._count

    def valley_height(self) -> int:
        if self.is_empty():
            raise EmptyState("Landscape is empty.")
        return self._seq.get(self._valley)

    def valley_position(self) -> int:
        """1-based position of the leftmost valley."""
        if self.is_empty():
            raise EmptyState("Landscape is empty.")
        return self._count

    def remove_valley(self) -> float:
        """Excavate the leftmost valley and return its treasure."""
        if self.is_empty():
            raise EmptyState("Landscape is empty.")

        treasure = self.peek_treasure()
        self._total += treasure

        removed_idx = self._valley
        removed = self._seq.get(removed_idx)
        prev_idx, next_idx = self._seq.remove(removed_idx)
        self._heights.discard(removed)

        # aggregate through prev_idx
        total = self._sum - removed
        count = self._count - 1

        if is_valley(self._seq, prev_idx):
            self._valley, self._sum, self._count = prev_idx, total, count
        elif is_valley(self._seq, next_idx):
            self._valley = next_idx
            self._sum = total + self._seq.get(next_idx)
            self._count = count + 1
        else:
            self._valley, self._sum, self._count = self._scan_from(next_idx, total, count)
        return treasure

    def insert_at_valley(self, height: int) -> None:
        """Create a landform right before the current valley.

        On an empty tracker the new landform becomes the sole element.
        """
        height = _as_elevation(height)
        if height in self._heights:
            raise InvalidArgument(f"Elevation {height} already exists in the landscape.")

        valley_idx = self._valley
        new_idx = self._seq.insert_before(valley_idx, height)
        self._heights.add(height)

        if valley_idx == -1:
            self._valley, self._sum, self._count = new_idx, height, 1
            return

        valley = self._seq.get(valley_idx)
        prev_idx = self._seq.left_of(new_idx)

        # only the new element and its two neighbours changed neighbours
        if is_valley(self._seq, new_idx):
            self._valley = new_idx
            self._sum = self._sum - valley + height
        elif is_valley(self._seq, prev_idx):
            self._valley = prev_idx
            self._sum -= valley
            self._count -= 1
        elif is_valley(self._seq, valley_idx):
            self._sum += height
            self._count += 1
        else:
            # unreachable with distinct elevations: if the old valley stops qualifying, the new element does
            self._valley, self._sum, self._count = self._scan_from(
                self._seq.right_of(valley_idx), self._sum + height, self._count + 1
            )

    def total_treasure(self) -> float:
        return self._total

    def drain(self) -> Iterator[float]:
        while not self.is_empty():
            yield self.remove_valley()

    def __repr__(self) -> str:
        return f"ValleyTracker(size={self.size}, total_treasure={self._total})"
