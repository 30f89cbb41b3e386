"""Winning lines of a square bingo board.

A line is a tuple of board indices in row-major order. For an N x N grid
there are N rows, N columns and the two diagonals.
"""
from typing import List, Tuple

Line = Tuple[int, ...]

DEFAULT_SIZE = 5


def compute_lines(size: int = DEFAULT_SIZE) -> List[Line]:
    if size < 1:
        raise ValueError(f"board size must be positive, got {size}")
    lines: List[Line] = []
    for r in range(size):
        lines.append(tuple(r * size + c for c in range(size)))
    for c in range(size):
        lines.append(tuple(r * size + c for r in range(size)))
    lines.append(tuple(i * size + i for i in range(size)))
    lines.append(tuple(i * size + (size - 1 - i) for i in range(size)))
    return lines


def line_mask(line: Line) -> int:
    mask = 0
    for idx in line:
        mask |= 1 << idx
    return mask


class LineCatalog:
    """Precomputed lines plus one bitmask per line for subset checks."""

    def __init__(self, size: int = DEFAULT_SIZE):
        self.size = size
        self.lines = compute_lines(size)
        self.masks = [line_mask(line) for line in self.lines]

    def __len__(self):
        return len(self.lines)

    def __iter__(self):
        return iter(self.lines)

    def has_line(self, owned_mask: int) -> bool:
        """True when every index of at least one line is set in owned_mask."""
        return any((mask & owned_mask) == mask for mask in self.masks)


BINGO_LINES = LineCatalog(DEFAULT_SIZE)
