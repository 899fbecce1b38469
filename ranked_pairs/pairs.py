"""
Pair ranking.

Turns the margin matrix into directed (winner, loser, margin) pairs and
orders them strongest first. Lock order is decided here, so the sort has to
be stable: two pairs with the same margin are attempted in the order
build_pairs produced them, which can change the winner.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from functools import cmp_to_key
from typing import TypeVar

from .tally import MarginMatrix

T = TypeVar("T")


@dataclass(frozen=True)
class Pair:
    """A pair of candidates facing each other, oriented winner first."""
    winner: int
    loser: int
    margin: int

    @property
    def is_tie(self) -> bool:
        return self.margin == 0


def build_pairs(matrix: MarginMatrix) -> list[Pair]:
    """
    One pair per unordered {i, j} with i < j, enumerated i then j ascending.

    A pair with margin 0 keeps the i -> j orientation and is reported as a
    tie; the lock graph never locks it.
    """
    pairs = []
    n = len(matrix)

    for i in range(n - 1):
        for j in range(i + 1, n):
            if matrix[i][j] < 0:
                pairs.append(Pair(j, i, -matrix[i][j]))
            else:
                pairs.append(Pair(i, j, matrix[i][j]))

    return pairs


def stable_sort_by(
    sequence: Sequence[T],
    is_smaller: Callable[[T, T], bool]
) -> list[T]:
    """
    Sort with a "should come first" predicate, keeping equal items in order.

    Args:
        sequence: Items to sort
        is_smaller: is_smaller(a, b) is True when a must come before b

    Returns:
        New sorted list
    """
    def compare(a: T, b: T) -> int:
        if is_smaller(a, b):
            return -1
        if is_smaller(b, a):
            return 1
        return 0

    # sorted() is guaranteed stable
    return sorted(sequence, key=cmp_to_key(compare))


def rank(pairs: Sequence[Pair]) -> list[Pair]:
    """Order pairs by descending margin; ties keep their enumeration order."""
    return stable_sort_by(pairs, lambda a, b: a.margin > b.margin)
