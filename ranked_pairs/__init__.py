"""
Ranked Pairs (Tideman) election tabulation.

    >>> from ranked_pairs import Election
    >>> election = Election(["Alice", "Bob"])
    >>> election.vote(["alice", "bob"])
    (0, 1)
    >>> election.tabulate().winner.name
    'Alice'
"""

from .ballots import Ballot, BallotStore, load_ballots_csv
from .election import Election, TabulationResult
from .errors import (
    BallotError,
    CandidateNotFoundError,
    ConfigurationError,
    CycleError,
    DuplicateCandidateError,
    DuplicateVoteError,
    IncompleteBallotError,
    NoWinnerError,
    TidemanError,
    UnknownCandidateError,
)
from .graph import LockGraph
from .pairs import Pair, build_pairs, rank, stable_sort_by
from .registry import Candidate, CandidateRegistry
from .resolver import rank_candidates, resolve_winner, undefeated
from .tally import borda_scores, matchup_frame, merge_tallies, tally

__version__ = "1.0.0"

__all__ = [
    "Ballot", "BallotStore", "load_ballots_csv",
    "Election", "TabulationResult",
    "BallotError", "CandidateNotFoundError", "ConfigurationError", "CycleError",
    "DuplicateCandidateError", "DuplicateVoteError", "IncompleteBallotError",
    "NoWinnerError", "TidemanError", "UnknownCandidateError",
    "LockGraph",
    "Pair", "build_pairs", "rank", "stable_sort_by",
    "Candidate", "CandidateRegistry",
    "rank_candidates", "resolve_winner", "undefeated",
    "tally", "merge_tallies", "matchup_frame", "borda_scores",
]
