from typing import Sequence


def first_valley_index(heights: Sequence[int]) -> int:
    """Index of the leftmost valley in ``heights`` by a full scan, -1 if empty."""
    n = len(heights)
    for i, h in enumerate(heights):
        left_ok = i == 0 or h < heights[i - 1]
        right_ok = i == n - 1 or h < heights[i + 1]
        if left_ok and right_ok:
            return i
    return -1


def brute_treasure(heights: Sequence[int]) -> float:
    idx = first_valley_index(heights)
    if idx == -1:
        raise ValueError("no valley in an empty landscape")
    prefix = heights[:idx + 1]
    return sum(prefix) / len(prefix)
