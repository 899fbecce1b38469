import random

import networkx as nx
import pytest

from ranked_pairs import (
    CandidateNotFoundError,
    CycleError,
    LockGraph,
    Pair,
    build_pairs,
    rank,
    tally,
)


def test_try_lock_rejects_cycle_and_rolls_back():
    graph = LockGraph(3)
    graph.try_lock(0, 1)
    graph.try_lock(1, 2)
    with pytest.raises(CycleError):
        graph.try_lock(2, 0)
    assert graph.edges() == [(0, 1), (1, 2)]
    assert graph.links(2) == []


def test_converging_paths_are_not_a_cycle():
    graph = LockGraph(4)
    for winner, loser in [(0, 1), (0, 2), (1, 3), (2, 3)]:
        graph.try_lock(winner, loser)
    assert len(graph) == 4
    with pytest.raises(CycleError):
        graph.try_lock(3, 0)


def test_self_lock_is_a_cycle():
    graph = LockGraph(2)
    with pytest.raises(CycleError):
        graph.try_lock(1, 1)
    assert len(graph) == 0


def test_try_lock_unknown_index():
    graph = LockGraph(2)
    with pytest.raises(CandidateNotFoundError):
        graph.try_lock(0, 2)


def test_links_keep_lock_order():
    graph = LockGraph(4)
    graph.try_lock(0, 3)
    graph.try_lock(0, 1)
    graph.try_lock(0, 2)
    assert graph.links(0) == [3, 1, 2]


def test_lock_all_skips_cycles_and_ties():
    ranked = [
        Pair(0, 1, 5),
        Pair(2, 0, 1),
        Pair(1, 2, 1),
        Pair(1, 3, 0),
    ]
    graph = LockGraph(4)
    rejected = graph.lock_all(ranked)
    assert rejected == [Pair(1, 2, 1)]
    assert graph.edges() == [(0, 1), (2, 0)]
    assert not graph.has_edge(1, 3)


def random_ranked_pairs(n, seed):
    rng = random.Random(seed)
    ballots = []
    for _ in range(15):
        ballot = list(range(n))
        rng.shuffle(ballot)
        ballots.append(ballot)
    return rank(build_pairs(tally(ballots, n)))


@pytest.mark.parametrize("seed", range(10))
def test_graph_stays_acyclic_after_every_lock(seed):
    n = 7
    graph = LockGraph(n)
    for pair in random_ranked_pairs(n, seed):
        try:
            graph.try_lock(pair.winner, pair.loser, pair.margin)
        except CycleError:
            pass
        assert nx.is_directed_acyclic_graph(graph.graph)


@pytest.mark.parametrize("seed", range(5))
def test_lock_all_is_deterministic(seed):
    ranked = random_ranked_pairs(6, seed)
    first = LockGraph(6)
    second = LockGraph(6)
    assert first.lock_all(ranked) == second.lock_all(ranked)
    assert first.edges() == second.edges()


def test_locking_a_locked_edge_again_changes_nothing():
    graph = LockGraph(2)
    graph.try_lock(0, 1, 3)
    graph.try_lock(0, 1, 3)
    assert len(graph) == 1
    assert graph.links(0) == [1]
