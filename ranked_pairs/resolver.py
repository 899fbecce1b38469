"""
Winner resolution over a finished lock graph.
"""

import networkx as nx

from .errors import NoWinnerError
from .graph import LockGraph
from .registry import Candidate, CandidateRegistry


def undefeated(graph: LockGraph) -> list[int]:
    """Candidates with no locked defeat, in index order."""
    possible_winners = set(range(graph.candidate_count))

    for candidate in range(graph.candidate_count):
        for defeated in graph.links(candidate):
            possible_winners.discard(defeated)

    return sorted(possible_winners)


def resolve_winner(graph: LockGraph, registry: CandidateRegistry) -> Candidate:
    """
    Find the election's winner.

    The winner is the one undefeated candidate that has at least one locked
    victory. When every pair involving the undefeated candidates is tied
    there is none; when two undefeated candidates both have victories (their
    own pair being tied) there is no single one. Both cases raise.

    Args:
        graph: Lock graph after lock_all()
        registry: Registry the graph's indices refer to

    Returns:
        The winning candidate

    Raises:
        NoWinnerError: If no single candidate qualifies
    """
    sources = undefeated(graph)
    winners = [c for c in sources if graph.links(c)]

    if not winners:
        names = ", ".join(registry.candidate(c).name for c in sources)
        raise NoWinnerError(
            f"No undefeated candidate has a locked victory (undefeated: {names})",
            tuple(sources)
        )

    if len(winners) > 1:
        names = ", ".join(registry.candidate(c).name for c in winners)
        raise NoWinnerError(f"Tie between {names}", tuple(winners))

    return registry.candidate(winners[0])


def rank_candidates(graph: LockGraph) -> tuple[list[int], bool]:
    """
    Extract a full ranking from the lock graph.

    The ranking is a topological order of the locked edges, smallest index
    first where the graph leaves a choice. It is unambiguous only if the
    graph is semiconnected (every adjacent pair in the order is locked,
    directly or through other candidates).

    Returns:
        Tuple of (ranking, has_ties)
    """
    if graph.candidate_count == 0:
        return [], False

    ranking = list(nx.lexicographical_topological_sort(graph.graph))
    has_ties = not nx.is_semiconnected(graph.graph)
    return ranking, has_ties
