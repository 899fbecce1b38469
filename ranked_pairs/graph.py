"""
Lock graph for the Tideman ranked pairs method.

An edge a -> b means "a defeated b and that result is locked in". Pairs are
locked strongest first and any lock that would close a cycle is rolled back,
so the graph is a DAG after every successful insertion.
"""

import logging
from collections.abc import Iterable
from typing import Optional

import networkx as nx

from .errors import CandidateNotFoundError, CycleError
from .pairs import Pair

logger = logging.getLogger(__name__)


class LockGraph:
    """Directed graph over candidate indices 0..candidate_count-1."""

    def __init__(self, candidate_count: int):
        self.candidate_count = candidate_count
        self.graph = nx.DiGraph()
        self.graph.add_nodes_from(range(candidate_count))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.candidate_count:
            raise CandidateNotFoundError(str(index))

    def links(self, index: int) -> list[int]:
        """Candidates `index` has a locked victory over, in lock order."""
        self._check_index(index)
        return list(self.graph.successors(index))

    def has_edge(self, winner: int, loser: int) -> bool:
        return self.graph.has_edge(winner, loser)

    def edges(self) -> list[tuple[int, int]]:
        return list(self.graph.edges())

    def __len__(self) -> int:
        return self.graph.number_of_edges()

    def has_cycle_from(self, node: int) -> bool:
        """
        Check whether `node` can reach itself through one or more edges.

        Iterative depth-first search with an explicit stack. Since the graph
        was acyclic before the latest insertion, any new cycle runs through
        the new edge's winner, so searching from it is enough. Paths that
        merge again (A -> B -> D and A -> C -> D) are not cycles and are
        accepted.

        Args:
            node: Start node (the winner of the edge just added)

        Returns:
            True if a path of length >= 1 leads back to `node`
        """
        visited = set()
        stack = list(self.graph.successors(node))

        while stack:
            current = stack.pop()
            if current == node:
                return True
            if current in visited:
                continue
            visited.add(current)
            stack.extend(self.graph.successors(current))

        return False

    def try_lock(self, winner: int, loser: int, margin: Optional[int] = None) -> None:
        """
        Lock winner -> loser unless doing so creates a cycle.

        Args:
            winner: Index of the pair's winning candidate
            loser: Index of the pair's losing candidate
            margin: Margin stored on the edge, for reporting

        Raises:
            CandidateNotFoundError: If either index is out of range
            CycleError: If the edge would close a cycle; the graph is unchanged
        """
        self._check_index(winner)
        self._check_index(loser)

        if self.graph.has_edge(winner, loser):
            return

        self.graph.add_edge(winner, loser, margin=margin)

        if self.has_cycle_from(winner):
            self.graph.remove_edge(winner, loser)
            raise CycleError(winner, loser)

    def lock_all(self, ranked_pairs: Iterable[Pair]) -> list[Pair]:
        """
        Lock pairs in rank order, skipping any that would create a cycle.

        Tied pairs are never locked.

        Args:
            ranked_pairs: Pairs sorted strongest first

        Returns:
            Pairs that were rejected because they would create a cycle
        """
        rejected = []

        for pair in ranked_pairs:
            if pair.is_tie:
                logger.debug("not locking tied pair %d - %d", pair.winner, pair.loser)
                continue
            try:
                self.try_lock(pair.winner, pair.loser, pair.margin)
            except CycleError:
                logger.debug(
                    "skipping %d -> %d (margin %d): would create a cycle",
                    pair.winner, pair.loser, pair.margin
                )
                rejected.append(pair)
            else:
                logger.debug(
                    "locked %d -> %d (margin %d)", pair.winner, pair.loser, pair.margin
                )

        return rejected
