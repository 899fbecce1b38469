"""
End-to-end ranked pairs tabulation.

Registry -> ballots -> margin tally -> ranked pairs -> lock graph -> winner.
Each stage runs once over the complete output of the previous one.
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Optional

import pandas as pd

from .ballots import Ballot, BallotStore
from .errors import ConfigurationError, NoWinnerError
from .graph import LockGraph
from .pairs import Pair, build_pairs, rank
from .registry import Candidate, CandidateRegistry
from .resolver import rank_candidates, resolve_winner
from .tally import MarginMatrix, borda_scores, matchup_frame, tally

logger = logging.getLogger(__name__)

MIN_CANDIDATES = 2


@dataclass
class TabulationResult:
    """Container for all tabulation results."""
    winner: Optional[Candidate]
    no_winner: Optional[NoWinnerError]
    margins: MarginMatrix
    matchup_matrix: pd.DataFrame
    ranked_pairs: list[Pair]
    locked_pairs: list[Pair]
    rejected_pairs: list[Pair]
    tied_pairs: list[Pair]
    ranking: list[Candidate]
    has_ties: bool
    borda_scores: dict[str, int]
    graph: LockGraph

    def winner_or_raise(self) -> Candidate:
        if self.winner is None:
            raise self.no_winner
        return self.winner


class Election:
    """One ranked pairs election: a fixed candidate list and its ballots."""

    def __init__(self, candidate_names: Iterable[str]):
        """
        Register the candidates.

        Raises:
            DuplicateCandidateError: If two names differ only by case
            ConfigurationError: If fewer than two candidates are given
        """
        self.registry = CandidateRegistry(candidate_names)
        if len(self.registry) < MIN_CANDIDATES:
            raise ConfigurationError(
                f"Minimum number of candidates is {MIN_CANDIDATES}, "
                f"got {len(self.registry)}"
            )
        self.ballots = BallotStore(self.registry)

    @property
    def candidates(self) -> list[Candidate]:
        return list(self.registry)

    def vote(self, ranked_names: Sequence[str]) -> Ballot:
        return self.ballots.record_ballot(ranked_names)

    def tabulate(self) -> TabulationResult:
        """
        Close voting and compute the result.

        A missing winner is not raised here; it is recorded in
        TabulationResult.no_winner so the rest of the result can still be
        reported.
        """
        self.ballots.close()
        n = len(self.registry)
        ballots = self.ballots.all_ballots()
        logger.info("tabulating %d ballots for %d candidates", len(ballots), n)

        margins = tally(ballots, n)
        ranked_pairs = rank(build_pairs(margins))

        graph = LockGraph(n)
        rejected = graph.lock_all(ranked_pairs)
        locked = [p for p in ranked_pairs if graph.has_edge(p.winner, p.loser)]
        tied = [p for p in ranked_pairs if p.is_tie]
        logger.info(
            "locked %d pairs, rejected %d as cycles, %d tied",
            len(locked), len(rejected), len(tied)
        )

        winner = None
        no_winner = None
        try:
            winner = resolve_winner(graph, self.registry)
        except NoWinnerError as e:
            logger.info("no winner: %s", e)
            no_winner = e

        order, has_ties = rank_candidates(graph)
        frame = matchup_frame(margins, self.registry.names)

        return TabulationResult(
            winner=winner,
            no_winner=no_winner,
            margins=margins,
            matchup_matrix=frame,
            ranked_pairs=ranked_pairs,
            locked_pairs=locked,
            rejected_pairs=rejected,
            tied_pairs=tied,
            ranking=[self.registry.candidate(i) for i in order],
            has_ties=has_ties,
            borda_scores=borda_scores(frame),
            graph=graph,
        )
