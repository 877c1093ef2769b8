# Copyright (c) 2026 Harsh Dwivedi
# Licensed under the Harsh Non-Commercial Attribution License (HNCAL) v1.0
# Commercial use requires written permission. See LICENSE for details.

"""
PolySum — Grid Utilities
Bounds, neighbourhood and distance helpers shared by the validator,
the generator's search and the suggestion scorer.
"""

from collections.abc import Iterator

from polysum.models.board import BOARD_SIZE

# 4-directional grid neighbours (row_delta, col_delta)
NEIGHBOURS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))

BOARD_CENTER = BOARD_SIZE // 2


def in_bounds(row: int, col: int, size: int = BOARD_SIZE) -> bool:
    return 0 <= row < size and 0 <= col < size


def iter_positions(size: int = BOARD_SIZE) -> Iterator[tuple[int, int]]:
    """Yield every (row, col) in row-major order."""
    for row in range(size):
        for col in range(size):
            yield row, col


def neighbours(row: int, col: int, size: int = BOARD_SIZE) -> Iterator[tuple[int, int]]:
    """Yield in-bounds 4-neighbours of (row, col)."""
    for dr, dc in NEIGHBOURS:
        nr, nc = row + dr, col + dc
        if in_bounds(nr, nc, size):
            yield nr, nc


def distance_from_center(row: int, col: int) -> int:
    """Manhattan distance to the centre cell."""
    return abs(row - BOARD_CENTER) + abs(col - BOARD_CENTER)


def is_connected(cells: set[tuple[int, int]]) -> bool:
    """True if the (x, y) set forms one region under 4-adjacency."""
    if not cells:
        return False
    start = next(iter(cells))
    seen = {start}
    stack = [start]
    while stack:
        x, y = stack.pop()
        for dy, dx in NEIGHBOURS:
            nb = (x + dx, y + dy)
            if nb in cells and nb not in seen:
                seen.add(nb)
                stack.append(nb)
    return len(seen) == len(cells)
