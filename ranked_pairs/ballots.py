"""
Ballot collection.

A ballot is a complete ranking of every registered candidate, stored as a
tuple of candidate indices (most preferred first). Ballots come either from
the interactive prompt (one rank position at a time, see cli.py) or from a
CSV file.
"""

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

import pandas as pd

from .errors import (
    BallotError,
    CandidateNotFoundError,
    DuplicateVoteError,
    IncompleteBallotError,
    UnknownCandidateError,
)
from .registry import CandidateRegistry

logger = logging.getLogger(__name__)

Ballot = tuple[int, ...]


class BallotStore:
    """Collects one full ranking per voter."""

    def __init__(self, registry: CandidateRegistry):
        self.registry = registry
        self._ballots: list[Ballot] = []
        self._closed = False

    def check_vote(self, name: str, already_ranked: Iterable[int]) -> int:
        """
        Resolve a single rank position of a ballot being filled in.

        Args:
            name: Candidate name as typed by the voter
            already_ranked: Indices placed earlier on the same ballot

        Returns:
            The candidate's index

        Raises:
            UnknownCandidateError: If no candidate has that name
            DuplicateVoteError: If the candidate is already on this ballot
        """
        try:
            index = self.registry.lookup(name)
        except CandidateNotFoundError:
            raise UnknownCandidateError(name) from None

        if index in already_ranked:
            raise DuplicateVoteError(name)
        return index

    def record_ballot(self, ranked_names: Sequence[str]) -> Ballot:
        """
        Validate a ranking and store it.

        The ballot is stored only if every name resolves, no candidate
        appears twice and every candidate is ranked.

        Raises:
            BallotError: If voting is closed or the ranking is invalid
        """
        if self._closed:
            raise BallotError("Voting is closed")

        ranked: list[int] = []
        for name in ranked_names:
            ranked.append(self.check_vote(name, ranked))

        expected = self.registry.count()
        if len(ranked) != expected:
            raise IncompleteBallotError(len(ranked), expected)

        ballot = tuple(ranked)
        self._ballots.append(ballot)
        logger.debug("recorded ballot %d: %s", len(self._ballots), ballot)
        return ballot

    def close(self) -> None:
        self._closed = True

    @property
    def closed(self) -> bool:
        return self._closed

    def all_ballots(self) -> tuple[Ballot, ...]:
        return tuple(self._ballots)

    def __len__(self) -> int:
        return len(self._ballots)


# =============================================================================
# Ballot Files
# =============================================================================

def load_ballots_csv(
    filepath: Path,
    store: BallotStore,
    invalid: str = "error"
) -> list[int]:
    """
    Record every ballot from a CSV file.

    The file has a header row followed by one ballot per row. Columns are
    rank positions, left to right, and hold candidate names.

    Args:
        filepath: Path to the CSV file
        store: Store receiving the ballots
        invalid: How to handle invalid rows
            - "error": Raise on the first invalid row
            - "skip": Leave the row out and report it

    Returns:
        1-based numbers of the data rows that were skipped

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty, or a row is invalid and
            invalid == "error"
    """
    if invalid not in ("error", "skip"):
        raise ValueError(f"Unknown invalid ballot strategy: {invalid!r}")

    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"Ballot file not found: {filepath}")

    try:
        df = pd.read_csv(
            filepath, sep=",", dtype=str, skipinitialspace=True, keep_default_na=False
        )
    except pd.errors.EmptyDataError:
        raise ValueError(f"Ballot file is empty: {filepath}") from None

    if df.empty:
        raise ValueError(f"Ballot file has no ballots: {filepath}")

    problematic = []
    for row_number, (_, row) in enumerate(df.iterrows(), start=1):
        names = [
            value.strip() for value in row
            if pd.notna(value) and value.strip()
        ]
        try:
            store.record_ballot(names)
        except BallotError as e:
            if invalid == "error":
                raise ValueError(f"Invalid ballot in row {row_number}: {e}") from e
            logger.info("skipping ballot in row %d: %s", row_number, e)
            problematic.append(row_number)

    return problematic
