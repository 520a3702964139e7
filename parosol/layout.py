"""Arrangement of processes on a three-dimensional grid.

The number of processes is factored and the factors are spread over three
dimensions so that the grid is as cubic as possible.  A prime number of
processes gives a linear grid.
"""

from __future__ import annotations


def factor(n: int) -> list[int]:
    """Return the prime factors of ``n`` in ascending order."""
    n = int(n)
    if n < 1:
        raise ValueError(f"cannot factor {n}")
    factors: list[int] = []
    while n % 2 == 0:
        factors.append(2)
        n //= 2
    p = 3
    while p * p <= n:
        if n % p == 0:
            factors.append(p)
            n //= p
        else:
            p += 2
    if n > 1:
        factors.append(n)
    return factors


def compute_dims(n: int) -> list[int]:
    """Return three ascending grid dimensions whose product is ``n``."""
    factors = factor(n)
    dims = [factors.pop() if factors else 1 for _ in range(3)]
    dims.sort()
    while factors:
        dims[0] *= factors.pop()
        dims.sort()
    return dims


class CPULayout:
    """Position of one process in the process grid.

    ``grid`` holds the number of processes in x, y and z, ``coord`` the
    position of process ``pid`` in that grid (x varies fastest).
    """

    def __init__(self, rank: int, size: int) -> None:
        if size < 1:
            raise ValueError(f"number of processes must be positive, got {size}")
        if not 0 <= rank < size:
            raise ValueError(f"rank {rank} is outside 0..{size - 1}")
        self.pid = rank
        self.size = size
        px, py, pz = compute_dims(size)
        self.grid: tuple[int, int, int] = (px, py, pz)
        self.coord: tuple[int, int, int] = (
            rank % px,
            (rank // px) % py,
            (rank // px) // py,
        )

    def __str__(self) -> str:
        return "Layout: \n"